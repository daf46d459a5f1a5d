from enum import Enum
from typing import Dict, Any, List, Optional, Tuple
from dataclasses import dataclass, field
from datetime import datetime

from vocab_mastery.utils.exceptions import ValidationError
from vocab_mastery.utils.helpers import format_timestamp


class VocabularyLevel(Enum):
    """词汇集难度等级"""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# 目录展示顺序
LEVEL_ORDER = {
    VocabularyLevel.BEGINNER: 0,
    VocabularyLevel.INTERMEDIATE: 1,
    VocabularyLevel.ADVANCED: 2,
}


class MasteryState(Enum):
    """单个符号的掌握状态"""
    NOT_STARTED = "not-started"
    LEARNING = "learning"
    MASTERED = "mastered"


class StepType(Enum):
    """学习步骤类型"""
    INTRODUCTION = "introduction"
    PRACTICE = "practice"
    ASSESSMENT = "assessment"
    MASTERY = "mastery"        # 预留，路径生成器暂不分配


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class AgeRange:
    min: int
    max: int

    def overlaps(self, other: "AgeRange") -> bool:
        return self.min <= other.max and self.max >= other.min

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class Symbol:
    """符号元数据，由符号查询服务提供"""
    id: str
    name: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class VocabularySet:
    """词汇集，定义后不可修改"""
    id: str
    name: str
    description: str
    level: VocabularyLevel
    age_range: AgeRange
    symbols: Tuple[str, ...]
    categories: Tuple[str, ...] = ()
    is_built_in: bool = True

    def __post_init__(self):
        # 符号顺序决定学习路径，重复会破坏进度分区
        seen = set()
        for symbol_id in self.symbols:
            if symbol_id in seen:
                raise ValidationError(f"词汇集 {self.id} 包含重复符号: {symbol_id}")
            seen.add(symbol_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VocabularySet":
        age_range = data.get("age_range") or {}
        try:
            return cls(
                id=data["id"],
                name=data["name"],
                description=data.get("description", ""),
                level=VocabularyLevel(data["level"]),
                age_range=AgeRange(int(age_range.get("min", 0)), int(age_range.get("max", 99))),
                symbols=tuple(data.get("symbols", [])),
                categories=tuple(data.get("categories", [])),
                is_built_in=bool(data.get("is_built_in", True)),
            )
        except (KeyError, ValueError) as e:
            raise ValidationError(f"词汇集定义不合法: {e}") from e

    def contains(self, symbol_id: str) -> bool:
        return symbol_id in self.symbols

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "level": self.level.value,
            "age_range": self.age_range.to_dict(),
            "symbols": list(self.symbols),
            "categories": list(self.categories),
            "is_built_in": self.is_built_in,
        }


@dataclass
class LearningStep:
    id: str
    type: StepType
    symbol_id: str
    description: str
    is_completed: bool
    attempts: int
    success_rate: float
    difficulty: Difficulty

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "symbol_id": self.symbol_id,
            "description": self.description,
            "is_completed": self.is_completed,
            "attempts": self.attempts,
            "success_rate": self.success_rate,
            "difficulty": self.difficulty.value,
        }


@dataclass
class VocabularyProgress:
    """用户在某个词汇集上的进度快照"""
    user_id: str
    vocabulary_set_id: str
    total_symbols: int
    mastered_symbols: List[str]
    learning_symbols: List[str]
    not_started_symbols: List[str]
    mastery_level: int
    learning_path: List[LearningStep]
    last_assessment: Optional[datetime] = None
    next_assessment: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "vocabulary_set_id": self.vocabulary_set_id,
            "total_symbols": self.total_symbols,
            "mastered_symbols": list(self.mastered_symbols),
            "learning_symbols": list(self.learning_symbols),
            "not_started_symbols": list(self.not_started_symbols),
            "mastery_level": self.mastery_level,
            "last_assessment": format_timestamp(self.last_assessment),
            "next_assessment": format_timestamp(self.next_assessment),
            "learning_path": [step.to_dict() for step in self.learning_path],
        }


class ActivityType(Enum):
    GAME = "game"
    EXERCISE = "exercise"
    STORY = "story"
    CONVERSATION = "conversation"
    ASSESSMENT = "assessment"


@dataclass(frozen=True)
class LearningActivity:
    """学习活动"""
    id: str
    name: str
    description: str
    type: ActivityType
    difficulty: Difficulty
    duration: int          # 分钟
    symbols: Tuple[str, ...]
    categories: Tuple[str, ...]
    age_range: AgeRange
    learning_objectives: Tuple[str, ...] = ()
    instructions: Tuple[str, ...] = ()
    is_built_in: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LearningActivity":
        age_range = data.get("age_range") or {}
        try:
            return cls(
                id=data["id"],
                name=data["name"],
                description=data.get("description", ""),
                type=ActivityType(data["type"]),
                difficulty=Difficulty(data["difficulty"]),
                duration=int(data.get("duration", 0)),
                symbols=tuple(data.get("symbols", [])),
                categories=tuple(data.get("categories", [])),
                age_range=AgeRange(int(age_range.get("min", 0)), int(age_range.get("max", 99))),
                learning_objectives=tuple(data.get("learning_objectives", [])),
                instructions=tuple(data.get("instructions", [])),
                is_built_in=bool(data.get("is_built_in", True)),
            )
        except (KeyError, ValueError) as e:
            raise ValidationError(f"学习活动定义不合法: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "difficulty": self.difficulty.value,
            "duration": self.duration,
            "symbols": list(self.symbols),
            "categories": list(self.categories),
            "age_range": self.age_range.to_dict(),
            "learning_objectives": list(self.learning_objectives),
            "instructions": list(self.instructions),
            "is_built_in": self.is_built_in,
        }
