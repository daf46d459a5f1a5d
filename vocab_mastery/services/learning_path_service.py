import logging
from typing import List, Sequence

from vocab_mastery.domain.vocabulary import Difficulty, LearningStep, StepType

logger = logging.getLogger(__name__)

# 按位置划分的阶段阈值
INTRODUCTION_LIMIT = 3
PRACTICE_LIMIT = 6
COMPLETED_LIMIT = 4

COMPLETED_ATTEMPTS = 3
COMPLETED_SUCCESS_RATE = 0.8


class LearningPathGenerator:
    """
    学习路径生成器
    每个符号生成一个学习步骤，顺序与词汇集中的符号顺序一致。
    注意：当前按位置分配类型、难度和完成情况，是占位策略，
    并不基于真实的学习表现。
    """

    def generate(self, symbols: Sequence[str]) -> List[LearningStep]:
        return [self._build_step(index, symbol_id) for index, symbol_id in enumerate(symbols)]

    def _build_step(self, index: int, symbol_id: str) -> LearningStep:
        if index < INTRODUCTION_LIMIT:
            step_type, difficulty = StepType.INTRODUCTION, Difficulty.EASY
        elif index < PRACTICE_LIMIT:
            step_type, difficulty = StepType.PRACTICE, Difficulty.MEDIUM
        else:
            step_type, difficulty = StepType.ASSESSMENT, Difficulty.HARD

        completed = index < COMPLETED_LIMIT
        return LearningStep(
            id=f"step_{index}",
            type=step_type,
            symbol_id=symbol_id,
            description=f"Learn {symbol_id}",
            is_completed=completed,
            attempts=COMPLETED_ATTEMPTS if completed else 0,
            success_rate=COMPLETED_SUCCESS_RATE if completed else 0.0,
            difficulty=difficulty,
        )
