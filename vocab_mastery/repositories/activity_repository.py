import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from vocab_mastery.domain.vocabulary import ActivityType, AgeRange, Difficulty, LearningActivity
from vocab_mastery.repositories.catalog_repository import load_json_list

logger = logging.getLogger(__name__)


class LearningActivityCatalog:
    """学习活动目录，支持按类型、难度、年龄段、分类过滤"""

    def __init__(self, activities: Iterable[LearningActivity]):
        self._activities = list(activities)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "LearningActivityCatalog":
        activities = [LearningActivity.from_dict(item) for item in load_json_list(path)]
        logger.info(f"学习活动加载完成，共 {len(activities)} 个活动")
        return cls(activities)

    def get_learning_activities(self,
                                activity_type: Optional[ActivityType] = None,
                                difficulty: Optional[Difficulty] = None,
                                age_range: Optional[AgeRange] = None,
                                categories: Optional[List[str]] = None) -> List[LearningActivity]:
        """
        获取学习活动

        Args:
            activity_type: 活动类型
            difficulty: 难度
            age_range: 年龄段，与活动年龄段有交集即匹配
            categories: 分类，命中任意一个即匹配

        Returns:
            List[LearningActivity]: 过滤后的活动，保持定义顺序
        """
        activities = self._activities

        if activity_type is not None:
            activities = [a for a in activities if a.type == activity_type]

        if difficulty is not None:
            activities = [a for a in activities if a.difficulty == difficulty]

        if age_range is not None:
            activities = [a for a in activities if a.age_range.overlaps(age_range)]

        if categories:
            wanted = set(categories)
            activities = [a for a in activities if wanted.intersection(a.categories)]

        return list(activities)
