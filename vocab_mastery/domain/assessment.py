from enum import Enum
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
from datetime import datetime

from vocab_mastery.utils.helpers import format_timestamp


class AssessmentType(Enum):
    PLACEMENT = "placement"
    PROGRESS = "progress"
    MASTERY = "mastery"
    CUSTOM = "custom"


class QuestionType(Enum):
    SYMBOL_RECOGNITION = "symbol_recognition"
    WORD_COMPLETION = "word_completion"
    SENTENCE_BUILDING = "sentence_building"
    CONTEXT_USAGE = "context_usage"


class MasteryClassification(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass
class AssessmentQuestion:
    id: str
    type: QuestionType
    symbol_id: str
    question: str
    options: List[str]
    correct_answer: str
    hints: List[str] = field(default_factory=list)
    user_answer: Optional[str] = None
    is_correct: Optional[bool] = None
    time_spent: float = 0.0     # 秒
    used_hints: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "symbol_id": self.symbol_id,
            "question": self.question,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
            "user_answer": self.user_answer,
            "is_correct": self.is_correct,
            "time_spent": self.time_spent,
            "hints": list(self.hints),
            "used_hints": self.used_hints,
        }


@dataclass
class AssessmentResults:
    total_questions: int = 0
    correct_answers: int = 0
    accuracy: float = 0.0
    average_time_per_question: float = 0.0
    total_time: float = 0.0
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)
    mastery_level: MasteryClassification = MasteryClassification.BEGINNER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_questions": self.total_questions,
            "correct_answers": self.correct_answers,
            "accuracy": self.accuracy,
            "average_time_per_question": self.average_time_per_question,
            "total_time": self.total_time,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "recommendations": list(self.recommendations),
            "next_steps": list(self.next_steps),
            "mastery_level": self.mastery_level.value,
        }


@dataclass
class Assessment:
    id: str
    user_id: str
    vocabulary_set_id: str
    type: AssessmentType
    questions: List[AssessmentQuestion]
    started_at: datetime
    results: AssessmentResults = field(default_factory=AssessmentResults)
    completed_at: Optional[datetime] = None
    duration: Optional[float] = None    # 分钟

    def get_question(self, question_id: str) -> Optional[AssessmentQuestion]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "vocabulary_set_id": self.vocabulary_set_id,
            "type": self.type.value,
            "questions": [q.to_dict() for q in self.questions],
            "results": self.results.to_dict(),
            "started_at": format_timestamp(self.started_at),
            "completed_at": format_timestamp(self.completed_at),
            "duration": self.duration,
        }
