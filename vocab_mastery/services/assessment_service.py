import logging
from typing import List, Optional, Sequence

from vocab_mastery.config.settings import settings
from vocab_mastery.domain.assessment import (
    Assessment, AssessmentQuestion, AssessmentResults, AssessmentType, QuestionType
)
from vocab_mastery.domain.vocabulary import Symbol, VocabularySet
from vocab_mastery.repositories.interfaces import SymbolLookup
from vocab_mastery.utils.helpers import generate_id, utc_now

logger = logging.getLogger(__name__)

RECOGNITION_QUESTION_TEXT = "What does this symbol mean?"


class AssessmentGenerator:
    """
    测评生成器
    前 N 个符号生成符号识别题，随后 M 个符号生成造句题。
    符号数量不足时只使用现有符号，查询不到的符号直接跳过。
    """

    def __init__(self, symbol_lookup: SymbolLookup,
                 recognition_count: Optional[int] = None,
                 sentence_count: Optional[int] = None,
                 distractors: Optional[Sequence[str]] = None):
        self.symbol_lookup = symbol_lookup
        self.recognition_count = settings.RECOGNITION_QUESTION_COUNT if recognition_count is None else recognition_count
        self.sentence_count = settings.SENTENCE_QUESTION_COUNT if sentence_count is None else sentence_count
        self.distractors = list(settings.RECOGNITION_DISTRACTORS if distractors is None else distractors)
        logger.info("测评生成服务初始化完成")

    def generate(self, vocabulary_set: VocabularySet,
                 assessment_type: AssessmentType = AssessmentType.PROGRESS,
                 user_id: str = "") -> Assessment:
        """
        根据词汇集生成测评

        Args:
            vocabulary_set: 词汇集
            assessment_type: 测评类型
            user_id: 用户ID

        Returns:
            Assessment: 包含题目、结果为零值、开始时间为当前时间的测评
        """
        recognition_symbols = vocabulary_set.symbols[:self.recognition_count]
        sentence_symbols = vocabulary_set.symbols[
            self.recognition_count:self.recognition_count + self.sentence_count
        ]

        questions: List[AssessmentQuestion] = []
        for symbol in self._resolve(recognition_symbols):
            questions.append(self._recognition_question(f"q_{len(questions)}", symbol))
        for symbol in self._resolve(sentence_symbols):
            questions.append(self._sentence_question(f"q_{len(questions)}", symbol))

        assessment = Assessment(
            id=generate_id("assessment"),
            user_id=user_id,
            vocabulary_set_id=vocabulary_set.id,
            type=assessment_type,
            questions=questions,
            results=AssessmentResults(),
            started_at=utc_now(),
        )
        logger.info(f"测评已创建: {assessment.id}, 词汇集 {vocabulary_set.id}, 题目数 {len(questions)}")
        return assessment

    def _resolve(self, symbol_ids: Sequence[str]) -> List[Symbol]:
        symbols = []
        for symbol_id in symbol_ids:
            symbol = self.symbol_lookup.resolve_symbol(symbol_id)
            if symbol is None:
                logger.debug(f"符号 {symbol_id} 未找到，跳过出题")
                continue
            symbols.append(symbol)
        return symbols

    def _recognition_question(self, question_id: str, symbol: Symbol) -> AssessmentQuestion:
        # 正确答案在选项中只出现一次
        options = [symbol.name] + [d for d in self.distractors if d != symbol.name]
        return AssessmentQuestion(
            id=question_id,
            type=QuestionType.SYMBOL_RECOGNITION,
            symbol_id=symbol.id,
            question=RECOGNITION_QUESTION_TEXT,
            options=options,
            correct_answer=symbol.name,
            hints=[
                "Think about when you use this word",
                f'It starts with "{symbol.name[:1]}"',
            ],
        )

    def _sentence_question(self, question_id: str, symbol: Symbol) -> AssessmentQuestion:
        name = symbol.name
        options = [f"I want {name}", f"I need {name}", f"I like {name}", f"Help with {name}"]
        return AssessmentQuestion(
            id=question_id,
            type=QuestionType.SENTENCE_BUILDING,
            symbol_id=symbol.id,
            question=f'Build a sentence using "{name}"',
            options=options,
            correct_answer=options[0],
            hints=['Start with "I want"', f'Add the word "{name}"'],
        )
