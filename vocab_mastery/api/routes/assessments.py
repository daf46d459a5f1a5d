import logging

from fastapi import APIRouter, Depends, status

from vocab_mastery.api.assessment_manager import AssessmentManager
from vocab_mastery.api.dependencies import get_assessment_manager, get_engine
from vocab_mastery.api.schemas.assessment_schemas import (
    AnswerSubmit, AssessmentComplete, AssessmentCreate, AssessmentResponse,
    AssessmentResultsResponse, QuestionResponse
)
from vocab_mastery.services.educational_service import EducationalEngine
from vocab_mastery.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=AssessmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assessment(request: AssessmentCreate,
                            engine: EducationalEngine = Depends(get_engine),
                            manager: AssessmentManager = Depends(get_assessment_manager)):
    """
    创建测评
    """
    assessment = engine.create_assessment(request.user_id, request.vocabulary_set_id, request.type)
    manager.register(assessment)
    return assessment.to_dict()


@router.get("/{assessment_id}", response_model=AssessmentResponse)
async def get_assessment(assessment_id: str,
                         manager: AssessmentManager = Depends(get_assessment_manager)):
    """
    获取测评
    """
    return manager.get(assessment_id).to_dict()


@router.post("/{assessment_id}/answers", response_model=QuestionResponse)
async def submit_answer(assessment_id: str, answer: AnswerSubmit,
                        engine: EducationalEngine = Depends(get_engine),
                        manager: AssessmentManager = Depends(get_assessment_manager)):
    """
    提交单道题的答案
    """
    assessment = manager.get(assessment_id)
    if assessment.is_completed:
        raise ValidationError(f"测评已完成: {assessment_id}")

    question = engine.submit_assessment_answer(
        assessment, answer.question_id, answer.answer, answer.time_spent
    )
    return question.to_dict()


@router.post("/{assessment_id}/complete", response_model=AssessmentResultsResponse)
async def complete_assessment(assessment_id: str, request: AssessmentComplete,
                              engine: EducationalEngine = Depends(get_engine),
                              manager: AssessmentManager = Depends(get_assessment_manager)):
    """
    完成测评并评分
    """
    assessment = manager.get(assessment_id)
    if assessment.is_completed:
        raise ValidationError(f"测评已完成: {assessment_id}")

    answers = {a.question_id: (a.answer, a.time_spent) for a in request.answers}
    results = engine.complete_assessment(assessment, answers)
    return results.to_dict()
