import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Sequence, Union

from vocab_mastery.domain.goal import EducationalGoal, GoalMilestone, GoalType
from vocab_mastery.repositories.interfaces import GoalStore
from vocab_mastery.utils.exceptions import NotFoundError, ValidationError
from vocab_mastery.utils.helpers import clamp, ensure_utc, generate_id, utc_now

logger = logging.getLogger(__name__)


def _clamp_progress(value) -> float:
    """进度限制在0-100，非数字或非有限值（NaN、无穷）视为非法输入"""
    try:
        progress = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"进度必须是数字: {value!r}") from None
    if not math.isfinite(progress):
        raise ValidationError(f"进度必须是有限数值: {value!r}")
    return clamp(progress)


class GoalMilestoneTracker:
    """
    教育目标与里程碑管理
    目标和里程碑的完成都是单向的显式操作，进度达到100不会自动完成。
    """

    def __init__(self, goal_store: GoalStore):
        self.goal_store = goal_store
        logger.info("教育目标服务初始化完成")

    def create_goal(self, user_id: str, title: str, description: str,
                    goal_type: Union[GoalType, str], target_date: datetime,
                    milestone_specs: Sequence[Dict[str, Any]]) -> EducationalGoal:
        """
        创建教育目标

        Args:
            milestone_specs: 里程碑定义列表，每项包含 title、description，可选 progress
        """
        try:
            goal_type = GoalType(goal_type)
        except ValueError:
            raise ValidationError(f"未知的目标类型: {goal_type}")

        milestones = []
        for index, spec in enumerate(milestone_specs):
            if not spec.get("title"):
                raise ValidationError(f"第 {index + 1} 个里程碑缺少标题")
            milestones.append(GoalMilestone(
                id=f"milestone_{index}",
                title=spec["title"],
                description=spec.get("description", ""),
                progress=_clamp_progress(spec.get("progress", 0)),
            ))

        now = utc_now()
        goal = EducationalGoal(
            id=generate_id("goal"),
            user_id=user_id,
            title=title,
            description=description,
            type=goal_type,
            target_date=ensure_utc(target_date),
            created_at=now,
            updated_at=now,
            milestones=milestones,
            progress=0.0,
        )

        self.goal_store.save_goal(goal)
        logger.info(f"教育目标已创建: {goal.id}, 用户 {user_id}, 里程碑 {len(milestones)} 个")
        return goal

    def get_goal(self, goal_id: str) -> EducationalGoal:
        return self.goal_store.load_goal(goal_id)

    def list_goals(self, user_id: str) -> List[EducationalGoal]:
        return self.goal_store.list_goals(user_id)

    def update_milestone_progress(self, goal_id: str, milestone_id: str, progress: float) -> EducationalGoal:
        """更新里程碑进度（限制在0-100），并重新计算目标整体进度"""
        goal = self.goal_store.load_goal(goal_id)
        milestone = self._get_milestone(goal, milestone_id)

        milestone.progress = _clamp_progress(progress)
        goal.recompute_progress()
        goal.updated_at = utc_now()

        self.goal_store.save_goal(goal)
        logger.info(f"里程碑进度已更新: 目标{goal_id}, 里程碑{milestone_id} -> {milestone.progress}, "
                    f"目标进度 {goal.progress}")
        return goal

    def mark_milestone_completed(self, goal_id: str, milestone_id: str) -> EducationalGoal:
        goal = self.goal_store.load_goal(goal_id)
        milestone = self._get_milestone(goal, milestone_id)
        if milestone.is_completed:
            return goal

        milestone.is_completed = True
        milestone.completed_at = utc_now()
        goal.updated_at = milestone.completed_at
        self.goal_store.save_goal(goal)
        logger.info(f"里程碑已完成: 目标{goal_id}, 里程碑{milestone_id}")
        return goal

    def mark_goal_completed(self, goal_id: str) -> EducationalGoal:
        """显式标记目标完成，已完成的目标保持不变"""
        goal = self.goal_store.load_goal(goal_id)
        if goal.is_completed:
            return goal

        goal.is_completed = True
        goal.completed_at = utc_now()
        goal.updated_at = goal.completed_at
        self.goal_store.save_goal(goal)
        logger.info(f"教育目标已完成: {goal_id}")
        return goal

    def _get_milestone(self, goal: EducationalGoal, milestone_id: str) -> GoalMilestone:
        milestone = goal.get_milestone(milestone_id)
        if milestone is None:
            raise NotFoundError(f"目标 {goal.id} 中不存在里程碑: {milestone_id}")
        return milestone
