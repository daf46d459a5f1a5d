import logging
from typing import List

from fastapi import APIRouter, Depends, status

from vocab_mastery.api.dependencies import get_engine
from vocab_mastery.api.schemas.goal_schemas import GoalCreate, GoalResponse, MilestoneProgressUpdate
from vocab_mastery.services.educational_service import EducationalEngine

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
async def create_goal(request: GoalCreate, engine: EducationalEngine = Depends(get_engine)):
    """
    创建教育目标
    """
    goal = engine.create_goal(
        user_id=request.user_id,
        title=request.title,
        description=request.description,
        goal_type=request.type,
        target_date=request.target_date,
        milestone_specs=[m.model_dump() for m in request.milestones],
    )
    return goal.to_dict()


@router.get("/user/{user_id}", response_model=List[GoalResponse])
async def list_user_goals(user_id: str, engine: EducationalEngine = Depends(get_engine)):
    """
    获取用户的所有教育目标
    """
    return [goal.to_dict() for goal in engine.list_goals(user_id)]


@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal(goal_id: str, engine: EducationalEngine = Depends(get_engine)):
    """
    获取教育目标
    """
    return engine.get_goal(goal_id).to_dict()


@router.put("/{goal_id}/milestones/{milestone_id}", response_model=GoalResponse)
async def update_milestone_progress(goal_id: str, milestone_id: str, update: MilestoneProgressUpdate,
                                    engine: EducationalEngine = Depends(get_engine)):
    """
    更新里程碑进度
    """
    return engine.update_goal_progress(goal_id, milestone_id, update.progress).to_dict()


@router.post("/{goal_id}/milestones/{milestone_id}/complete", response_model=GoalResponse)
async def complete_milestone(goal_id: str, milestone_id: str,
                             engine: EducationalEngine = Depends(get_engine)):
    """
    标记里程碑完成
    """
    return engine.mark_milestone_completed(goal_id, milestone_id).to_dict()


@router.post("/{goal_id}/complete", response_model=GoalResponse)
async def complete_goal(goal_id: str, engine: EducationalEngine = Depends(get_engine)):
    """
    标记目标完成
    """
    return engine.mark_goal_completed(goal_id).to_dict()
