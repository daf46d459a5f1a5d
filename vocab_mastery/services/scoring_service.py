import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Tuple

from vocab_mastery.config.settings import settings
from vocab_mastery.domain.assessment import (
    Assessment, AssessmentQuestion, AssessmentResults, MasteryClassification, QuestionType
)
from vocab_mastery.utils.exceptions import ValidationError
from vocab_mastery.utils.helpers import ensure_utc, utc_now

logger = logging.getLogger(__name__)

# 题型展示名称
QUESTION_TYPE_LABELS = {
    QuestionType.SYMBOL_RECOGNITION: "Symbol recognition",
    QuestionType.WORD_COMPLETION: "Word completion",
    QuestionType.SENTENCE_BUILDING: "Sentence building",
    QuestionType.CONTEXT_USAGE: "Context usage",
}

WEAKNESS_RECOMMENDATIONS = {
    QuestionType.SYMBOL_RECOGNITION: "Practice symbol matching activities",
    QuestionType.WORD_COMPLETION: "Practice word completion exercises",
    QuestionType.SENTENCE_BUILDING: "Practice sentence building activities",
    QuestionType.CONTEXT_USAGE: "Focus on context-based vocabulary usage",
}

WEAKNESS_NEXT_STEPS = {
    QuestionType.SYMBOL_RECOGNITION: "Review symbols with the symbol matching game",
    QuestionType.WORD_COMPLETION: "Complete word completion exercises",
    QuestionType.SENTENCE_BUILDING: "Complete sentence building exercises",
    QuestionType.CONTEXT_USAGE: "Practice with context-based activities",
}

Answer = Tuple[str, float]


@dataclass(frozen=True)
class ScoringPolicy:
    """评分阈值（百分比）"""
    strength_threshold: float = settings.STRENGTH_THRESHOLD
    weakness_threshold: float = settings.WEAKNESS_THRESHOLD
    beginner_cutoff: float = settings.BEGINNER_ACCURACY_CUTOFF
    intermediate_cutoff: float = settings.INTERMEDIATE_ACCURACY_CUTOFF
    assessment_interval_days: int = settings.ASSESSMENT_INTERVAL_DAYS

    def classify(self, accuracy: float) -> MasteryClassification:
        if accuracy < self.beginner_cutoff:
            return MasteryClassification.BEGINNER
        if accuracy < self.intermediate_cutoff:
            return MasteryClassification.INTERMEDIATE
        return MasteryClassification.ADVANCED


class AssessmentScorer:
    """测评评分：只做精确匹配"""

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self.policy = policy or ScoringPolicy()
        logger.info("测评评分服务初始化完成")

    def score(self, assessment: Assessment, answers: Mapping[str, Answer]) -> AssessmentResults:
        """
        为测评评分

        Args:
            assessment: 测评，题目上的作答信息会被本次答案覆盖
            answers: 题目ID -> (提交的答案, 用时秒数)

        Returns:
            AssessmentResults: 评分结果

        Raises:
            ValidationError: 答案引用了不存在的题目，或用时为负
        """
        self._validate_answers(assessment, answers)

        for question in assessment.questions:
            answer = answers.get(question.id)
            if answer is None:
                question.user_answer = None
                question.time_spent = 0.0
                question.is_correct = False
            else:
                submitted, time_spent = answer
                question.user_answer = submitted
                question.time_spent = float(time_spent)
                question.is_correct = submitted == question.correct_answer

        results = self._aggregate(assessment.questions)
        logger.info(f"测评 {assessment.id} 评分完成: {results.correct_answers}/{results.total_questions}, "
                    f"正确率 {results.accuracy:.1f}, 等级 {results.mastery_level.value}")
        return results

    def submit_answer(self, assessment: Assessment, question_id: str, answer: str,
                      time_spent: float) -> AssessmentQuestion:
        """记录单道题的作答"""
        self._validate_answers(assessment, {question_id: (answer, time_spent)})
        question = assessment.get_question(question_id)
        question.user_answer = answer
        question.time_spent = float(time_spent)
        question.is_correct = answer == question.correct_answer
        logger.debug(f"测评 {assessment.id} 题目 {question_id} 已作答")
        return question

    def complete(self, assessment: Assessment, answers: Optional[Mapping[str, Answer]] = None,
                 completed_at: Optional[datetime] = None) -> AssessmentResults:
        """
        完成测评：合并已记录的作答和本次提交的答案后评分，
        写入结果、完成时间和时长（分钟）
        """
        merged: Dict[str, Answer] = {
            q.id: (q.user_answer, q.time_spent) for q in assessment.questions if q.user_answer is not None
        }
        if answers:
            self._validate_answers(assessment, answers)
            merged.update(answers)

        results = self.score(assessment, merged)
        finished = ensure_utc(completed_at) if completed_at is not None else utc_now()
        assessment.results = results
        assessment.completed_at = finished
        assessment.duration = max(0.0, (finished - ensure_utc(assessment.started_at)).total_seconds() / 60.0)
        return results

    def _validate_answers(self, assessment: Assessment, answers: Mapping[str, Answer]) -> None:
        known = {q.id for q in assessment.questions}
        for question_id, answer in answers.items():
            if question_id not in known:
                raise ValidationError(f"测评 {assessment.id} 中不存在题目: {question_id}")
            try:
                _, time_spent = answer
                seconds = float(time_spent)
            except (TypeError, ValueError):
                raise ValidationError(f"题目 {question_id} 的作答格式应为 (答案, 用时秒数): {answer!r}") from None
            if not math.isfinite(seconds) or seconds < 0:
                raise ValidationError(f"题目 {question_id} 用时不合法: {time_spent}")

    def _aggregate(self, questions: List[AssessmentQuestion]) -> AssessmentResults:
        total = len(questions)
        correct = sum(1 for q in questions if q.is_correct)
        total_time = sum(q.time_spent for q in questions)
        accuracy = correct / total * 100 if total else 0.0

        # 按题型统计正确率，题型顺序按首次出现
        per_type: Dict[QuestionType, List[int]] = {}
        for question in questions:
            stats = per_type.setdefault(question.type, [0, 0])
            stats[1] += 1
            if question.is_correct:
                stats[0] += 1

        strengths, weaknesses = [], []
        weak_types = []
        for question_type, (type_correct, type_total) in per_type.items():
            type_accuracy = type_correct / type_total * 100
            if type_accuracy >= self.policy.strength_threshold:
                strengths.append(QUESTION_TYPE_LABELS[question_type])
            elif type_accuracy < self.policy.weakness_threshold:
                weaknesses.append(QUESTION_TYPE_LABELS[question_type])
                weak_types.append(question_type)

        schedule_entry = f"Schedule next assessment in {self.policy.assessment_interval_days} days"
        recommendations = [WEAKNESS_RECOMMENDATIONS[t] for t in weak_types] + [schedule_entry]
        next_steps = [WEAKNESS_NEXT_STEPS[t] for t in weak_types] + [schedule_entry]

        return AssessmentResults(
            total_questions=total,
            correct_answers=correct,
            accuracy=accuracy,
            average_time_per_question=total_time / total if total else 0.0,
            total_time=total_time,
            strengths=strengths,
            weaknesses=weaknesses,
            recommendations=recommendations,
            next_steps=next_steps,
            mastery_level=self.policy.classify(accuracy),
        )
