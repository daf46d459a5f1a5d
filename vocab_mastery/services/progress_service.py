#!/usr/bin/env python3
"""
学习进度服务模块
根据词汇集目录和符号掌握状态计算用户进度快照，并负责更新符号掌握状态
"""

import logging
from typing import List, Optional, Union

from vocab_mastery.domain.vocabulary import MasteryState, VocabularyProgress
from vocab_mastery.repositories.catalog_repository import VocabularySetCatalog
from vocab_mastery.repositories.interfaces import AssessmentSchedule, MasteryStore
from vocab_mastery.services.learning_path_service import LearningPathGenerator
from vocab_mastery.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


def coerce_mastery_state(state: Union[MasteryState, str, bool]) -> MasteryState:
    """
    把调用方传入的状态转换为 MasteryState
    - MasteryState 原样返回
    - 字符串按取值解析（"mastered" 等）
    - 布尔值: True 为已掌握，False 为学习中
    """
    if isinstance(state, MasteryState):
        return state
    if isinstance(state, bool):
        return MasteryState.MASTERED if state else MasteryState.LEARNING
    try:
        return MasteryState(state)
    except ValueError:
        raise ValidationError(f"未知的掌握状态: {state}")


class ProgressTracker:
    """学习进度跟踪，读取操作不产生副作用"""

    def __init__(self, catalog: VocabularySetCatalog, mastery_store: MasteryStore,
                 path_generator: Optional[LearningPathGenerator] = None,
                 schedule: Optional[AssessmentSchedule] = None):
        self.catalog = catalog
        self.mastery_store = mastery_store
        self.path_generator = path_generator or LearningPathGenerator()
        self.schedule = schedule
        logger.info("学习进度服务初始化完成")

    def get_progress(self, user_id: str, vocabulary_set_id: str) -> VocabularyProgress:
        """
        获取用户在词汇集上的进度

        Args:
            user_id: 用户ID
            vocabulary_set_id: 词汇集ID

        Returns:
            VocabularyProgress: 进度快照，三个符号列表互不相交且保持目录顺序

        Raises:
            NotFoundError: 词汇集不存在
        """
        vocabulary_set = self.catalog.get(vocabulary_set_id)

        mastered: List[str] = []
        learning: List[str] = []
        not_started: List[str] = []
        buckets = {
            MasteryState.MASTERED: mastered,
            MasteryState.LEARNING: learning,
            MasteryState.NOT_STARTED: not_started,
        }

        for symbol_id in vocabulary_set.symbols:
            state = self.mastery_store.get_mastery(user_id, vocabulary_set_id, symbol_id)
            buckets[state].append(symbol_id)

        total = len(vocabulary_set.symbols)
        mastery_level = (len(mastered) * 100) // total if total else 0

        last_assessment = next_assessment = None
        if self.schedule is not None:
            last_assessment, next_assessment = self.schedule.get_schedule(user_id, vocabulary_set_id)

        logger.debug(f"用户 {user_id} 词汇集 {vocabulary_set_id} 掌握度 {mastery_level}")
        return VocabularyProgress(
            user_id=user_id,
            vocabulary_set_id=vocabulary_set_id,
            total_symbols=total,
            mastered_symbols=mastered,
            learning_symbols=learning,
            not_started_symbols=not_started,
            mastery_level=mastery_level,
            learning_path=self.path_generator.generate(vocabulary_set.symbols),
            last_assessment=last_assessment,
            next_assessment=next_assessment,
        )

    def get_next_learning_symbols(self, user_id: str, vocabulary_set_id: str) -> List[str]:
        """获取接下来要学习的符号：学习中的在前，未开始的在后"""
        progress = self.get_progress(user_id, vocabulary_set_id)
        return progress.learning_symbols + progress.not_started_symbols

    def update_symbol_mastery(self, user_id: str, vocabulary_set_id: str, symbol_id: str,
                              state: Union[MasteryState, str, bool]) -> MasteryState:
        """
        更新符号掌握状态

        Raises:
            NotFoundError: 词汇集不存在
            ValidationError: 符号不属于该词汇集或状态非法
        """
        vocabulary_set = self.catalog.get(vocabulary_set_id)
        if not vocabulary_set.contains(symbol_id):
            raise ValidationError(f"符号 {symbol_id} 不属于词汇集 {vocabulary_set_id}")

        new_state = coerce_mastery_state(state)
        try:
            self.mastery_store.set_mastery(user_id, vocabulary_set_id, symbol_id, new_state)
        except Exception as e:
            logger.error(f"更新符号掌握状态失败: 用户{user_id}, 符号{symbol_id}: {e}")
            raise

        logger.info(f"符号掌握状态已更新: 用户{user_id}, 词汇集{vocabulary_set_id}, "
                    f"符号{symbol_id} -> {new_state.value}")
        return new_state
