import copy
import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from vocab_mastery.domain.goal import EducationalGoal, GoalMilestone, GoalType
from vocab_mastery.models.goal import Goal, Milestone
from vocab_mastery.repositories.base import BaseRepository
from vocab_mastery.utils.exceptions import NotFoundError
from vocab_mastery.utils.helpers import ensure_utc

logger = logging.getLogger(__name__)


def _utc_or_none(value):
    return ensure_utc(value) if value is not None else None


class GoalRepository(BaseRepository[Goal]):
    """基于数据库的教育目标存储"""

    def __init__(self, db: Session):
        super().__init__(db, Goal)

    def load_goal(self, goal_id: str) -> EducationalGoal:
        row = self.get_first_by(goal_id=goal_id)
        if row is None:
            raise NotFoundError(f"教育目标不存在: {goal_id}")
        return self._to_domain(row)

    def list_goals(self, user_id: str) -> List[EducationalGoal]:
        rows = self.db.query(Goal).filter(Goal.user_id == user_id).order_by(Goal.created_at.asc()).all()
        return [self._to_domain(row) for row in rows]

    def save_goal(self, goal: EducationalGoal) -> None:
        """保存目标及其里程碑（存在则整体覆盖）"""
        try:
            row = self.get_first_by(goal_id=goal.id)
            if row is None:
                row = Goal(goal_id=goal.id, user_id=goal.user_id, created_at=goal.created_at)
                self.db.add(row)

            row.title = goal.title
            row.description = goal.description
            row.goal_type = goal.type.value
            row.target_date = goal.target_date
            row.is_completed = goal.is_completed
            row.completed_at = goal.completed_at
            row.progress = goal.progress
            row.updated_at = goal.updated_at

            existing = {m.milestone_id: m for m in row.milestones}
            milestones = []
            for position, milestone in enumerate(goal.milestones):
                milestone_row = existing.get(milestone.id) or Milestone(milestone_id=milestone.id)
                milestone_row.position = position
                milestone_row.title = milestone.title
                milestone_row.description = milestone.description
                milestone_row.is_completed = milestone.is_completed
                milestone_row.completed_at = milestone.completed_at
                milestone_row.progress = milestone.progress
                milestones.append(milestone_row)
            row.milestones = milestones

            self.db.commit()
        except Exception as e:
            logger.error(f"保存教育目标失败 {goal.id}: {e}")
            self.db.rollback()
            raise

    def _to_domain(self, row: Goal) -> EducationalGoal:
        return EducationalGoal(
            id=row.goal_id,
            user_id=row.user_id,
            title=row.title,
            description=row.description or "",
            type=GoalType(row.goal_type),
            target_date=ensure_utc(row.target_date),
            created_at=ensure_utc(row.created_at),
            updated_at=ensure_utc(row.updated_at),
            is_completed=bool(row.is_completed),
            completed_at=_utc_or_none(row.completed_at),
            progress=row.progress or 0.0,
            milestones=[
                GoalMilestone(
                    id=m.milestone_id,
                    title=m.title,
                    description=m.description or "",
                    is_completed=bool(m.is_completed),
                    completed_at=_utc_or_none(m.completed_at),
                    progress=m.progress or 0.0,
                )
                for m in row.milestones
            ],
        )


class InMemoryGoalStore:
    """内存实现，保存副本以模拟持久化"""

    def __init__(self):
        self._goals: Dict[str, EducationalGoal] = {}

    def load_goal(self, goal_id: str) -> EducationalGoal:
        goal = self._goals.get(goal_id)
        if goal is None:
            raise NotFoundError(f"教育目标不存在: {goal_id}")
        return copy.deepcopy(goal)

    def save_goal(self, goal: EducationalGoal) -> None:
        self._goals[goal.id] = copy.deepcopy(goal)

    def list_goals(self, user_id: str) -> List[EducationalGoal]:
        return [copy.deepcopy(g) for g in self._goals.values() if g.user_id == user_id]
