from enum import Enum
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
from datetime import datetime

from vocab_mastery.utils.helpers import format_timestamp


class GoalType(Enum):
    VOCABULARY = "vocabulary"
    COMMUNICATION = "communication"
    SOCIAL = "social"
    ACADEMIC = "academic"
    DAILY_LIVING = "daily_living"


@dataclass
class GoalMilestone:
    id: str
    title: str
    description: str = ""
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    progress: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "is_completed": self.is_completed,
            "completed_at": format_timestamp(self.completed_at),
            "progress": self.progress,
        }


@dataclass
class EducationalGoal:
    """教育目标，完成状态只能由显式操作设置"""
    id: str
    user_id: str
    title: str
    description: str
    type: GoalType
    target_date: datetime
    created_at: datetime
    updated_at: datetime
    milestones: List[GoalMilestone] = field(default_factory=list)
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    progress: float = 0.0

    def get_milestone(self, milestone_id: str) -> Optional[GoalMilestone]:
        for milestone in self.milestones:
            if milestone.id == milestone_id:
                return milestone
        return None

    def recompute_progress(self) -> float:
        """目标进度 = 所有里程碑进度的算术平均"""
        if not self.milestones:
            self.progress = 0.0
        else:
            self.progress = sum(m.progress for m in self.milestones) / len(self.milestones)
        return self.progress

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "type": self.type.value,
            "target_date": format_timestamp(self.target_date),
            "is_completed": self.is_completed,
            "completed_at": format_timestamp(self.completed_at),
            "progress": self.progress,
            "milestones": [m.to_dict() for m in self.milestones],
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }
