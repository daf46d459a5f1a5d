#!/usr/bin/env python3
"""
教育引擎模块
组合词汇集目录、进度跟踪、测评生成与评分、教育目标管理。
所有依赖通过构造函数注入，每次调用显式传入 user_id。
"""

import logging
from typing import Optional, Union

from sqlalchemy.orm import Session

from vocab_mastery.config.settings import settings
from vocab_mastery.domain.assessment import Assessment, AssessmentType
from vocab_mastery.repositories.activity_repository import LearningActivityCatalog
from vocab_mastery.repositories.catalog_repository import VocabularySetCatalog
from vocab_mastery.repositories.goal_repository import GoalRepository
from vocab_mastery.repositories.interfaces import (
    AssessmentSchedule, GoalStore, MasteryStore, SymbolLookup
)
from vocab_mastery.repositories.mastery_repository import MasteryRepository
from vocab_mastery.repositories.symbol_repository import SymbolRepository
from vocab_mastery.services.assessment_service import AssessmentGenerator
from vocab_mastery.services.goal_service import GoalMilestoneTracker
from vocab_mastery.services.progress_service import ProgressTracker
from vocab_mastery.services.scoring_service import AssessmentScorer, ScoringPolicy
from vocab_mastery.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


class EducationalEngine:
    """教育引擎，对外提供进度、测评、目标相关的全部操作"""

    def __init__(self, catalog: VocabularySetCatalog, mastery_store: MasteryStore,
                 symbol_lookup: SymbolLookup, goal_store: GoalStore,
                 activities: Optional[LearningActivityCatalog] = None,
                 schedule: Optional[AssessmentSchedule] = None,
                 scoring_policy: Optional[ScoringPolicy] = None):
        self.catalog = catalog
        self.activities = activities or LearningActivityCatalog([])
        self.progress_tracker = ProgressTracker(catalog, mastery_store, schedule=schedule)
        self.assessment_generator = AssessmentGenerator(symbol_lookup)
        self.assessment_scorer = AssessmentScorer(scoring_policy)
        self.goal_tracker = GoalMilestoneTracker(goal_store)
        logger.info("教育引擎初始化完成")

    # 词汇集与进度
    def list_vocabulary_sets(self):
        return self.catalog.list()

    def get_vocabulary_set(self, vocabulary_set_id: str):
        return self.catalog.get(vocabulary_set_id)

    def get_vocabulary_progress(self, user_id: str, vocabulary_set_id: str):
        return self.progress_tracker.get_progress(user_id, vocabulary_set_id)

    def get_next_learning_symbols(self, user_id: str, vocabulary_set_id: str):
        return self.progress_tracker.get_next_learning_symbols(user_id, vocabulary_set_id)

    def update_symbol_mastery(self, user_id: str, vocabulary_set_id: str, symbol_id: str, state):
        return self.progress_tracker.update_symbol_mastery(user_id, vocabulary_set_id, symbol_id, state)

    def get_learning_activities(self, **filters):
        return self.activities.get_learning_activities(**filters)

    # 测评
    def create_assessment(self, user_id: str, vocabulary_set_id: str,
                          assessment_type: Union[AssessmentType, str] = AssessmentType.PROGRESS) -> Assessment:
        """
        为用户创建测评

        Raises:
            NotFoundError: 词汇集不存在
            ValidationError: 测评类型非法
        """
        try:
            assessment_type = AssessmentType(assessment_type)
        except ValueError:
            raise ValidationError(f"未知的测评类型: {assessment_type}")

        vocabulary_set = self.catalog.get(vocabulary_set_id)
        return self.assessment_generator.generate(vocabulary_set, assessment_type, user_id=user_id)

    def submit_assessment_answer(self, assessment: Assessment, question_id: str,
                                 answer: str, time_spent: float):
        return self.assessment_scorer.submit_answer(assessment, question_id, answer, time_spent)

    def score_assessment(self, assessment: Assessment, answers):
        return self.assessment_scorer.score(assessment, answers)

    def complete_assessment(self, assessment: Assessment, answers=None):
        return self.assessment_scorer.complete(assessment, answers)

    # 教育目标
    def create_goal(self, user_id: str, title: str, description: str, goal_type,
                    target_date, milestone_specs):
        return self.goal_tracker.create_goal(user_id, title, description, goal_type,
                                             target_date, milestone_specs)

    def get_goal(self, goal_id: str):
        return self.goal_tracker.get_goal(goal_id)

    def list_goals(self, user_id: str):
        return self.goal_tracker.list_goals(user_id)

    def update_goal_progress(self, goal_id: str, milestone_id: str, progress: float):
        return self.goal_tracker.update_milestone_progress(goal_id, milestone_id, progress)

    def mark_milestone_completed(self, goal_id: str, milestone_id: str):
        return self.goal_tracker.mark_milestone_completed(goal_id, milestone_id)

    def mark_goal_completed(self, goal_id: str):
        return self.goal_tracker.mark_goal_completed(goal_id)


class StaticData:
    """启动时从配置文件加载的只读数据，进程内共享"""

    _catalog: Optional[VocabularySetCatalog] = None
    _symbols: Optional[SymbolRepository] = None
    _activities: Optional[LearningActivityCatalog] = None

    @classmethod
    def load(cls):
        if cls._catalog is None:
            cls._catalog = VocabularySetCatalog.from_file(settings.VOCABULARY_SETS_PATH)
            cls._symbols = SymbolRepository.from_file(settings.SYMBOLS_PATH)
            cls._activities = LearningActivityCatalog.from_file(settings.ACTIVITIES_PATH)
        return cls._catalog, cls._symbols, cls._activities

    @classmethod
    def reset(cls):
        """清空缓存，下次 load 时按当前配置重新读取数据文件"""
        cls._catalog = None
        cls._symbols = None
        cls._activities = None


def build_engine(db: Session) -> EducationalEngine:
    """使用数据库存储和配置文件数据构建引擎"""
    catalog, symbols, activities = StaticData.load()
    return EducationalEngine(
        catalog=catalog,
        mastery_store=MasteryRepository(db),
        symbol_lookup=symbols,
        goal_store=GoalRepository(db),
        activities=activities,
    )
