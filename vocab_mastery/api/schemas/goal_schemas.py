from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class MilestoneSpec(BaseModel):
    title: str
    description: str = ""
    progress: float = 0


class GoalCreate(BaseModel):
    user_id: str
    title: str
    description: str = ""
    type: str
    target_date: datetime
    milestones: List[MilestoneSpec] = []


class MilestoneProgressUpdate(BaseModel):
    # 超出0-100的值会被截断
    progress: float


class MilestoneResponse(BaseModel):
    id: str
    title: str
    description: str
    is_completed: bool
    completed_at: Optional[str] = None
    progress: float


class GoalResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    type: str
    target_date: str
    is_completed: bool
    completed_at: Optional[str] = None
    progress: float
    milestones: List[MilestoneResponse]
    created_at: str
    updated_at: str
