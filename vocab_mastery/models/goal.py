from sqlalchemy import Column, String, Integer, ForeignKey, Boolean, DateTime, Text, Float
from sqlalchemy.orm import relationship

from .base import BaseModel


"""
教育目标模型
记录用户的教育目标,包括标题、描述、类型、目标日期、完成状态和整体进度。
里程碑按 position 保持创建时的顺序。
"""


class Goal(BaseModel):
    __tablename__ = "educational_goals"

    goal_id = Column(String(100), unique=True, index=True, nullable=False)
    user_id = Column(String(100), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, default="")
    goal_type = Column(String(50), nullable=False)
    target_date = Column(DateTime(timezone=True), nullable=False)
    is_completed = Column(Boolean, default=False)
    completed_at = Column(DateTime(timezone=True))
    progress = Column(Float, default=0.0)

    milestones = relationship(
        "Milestone",
        back_populates="goal",
        order_by="Milestone.position",
        cascade="all, delete-orphan",
    )


class Milestone(BaseModel):
    __tablename__ = "goal_milestones"

    goal_id = Column(String(100), ForeignKey("educational_goals.goal_id"), nullable=False, index=True)
    milestone_id = Column(String(100), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    title = Column(String(200), nullable=False)
    description = Column(Text, default="")
    is_completed = Column(Boolean, default=False)
    completed_at = Column(DateTime(timezone=True))
    progress = Column(Float, default=0.0)

    goal = relationship("Goal", back_populates="milestones")
