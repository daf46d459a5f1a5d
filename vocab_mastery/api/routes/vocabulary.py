import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from vocab_mastery.api.dependencies import get_engine
from vocab_mastery.api.schemas.vocabulary_schemas import (
    LearningActivityResponse, MasteryUpdateRequest, MasteryUpdateResponse,
    NextSymbolsResponse, VocabularyProgressResponse, VocabularySetResponse
)
from vocab_mastery.domain.vocabulary import ActivityType, AgeRange, Difficulty
from vocab_mastery.services.educational_service import EducationalEngine
from vocab_mastery.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/sets", response_model=List[VocabularySetResponse])
async def list_vocabulary_sets(engine: EducationalEngine = Depends(get_engine)):
    """
    获取所有词汇集（按难度升序）
    """
    return [s.to_dict() for s in engine.list_vocabulary_sets()]


@router.get("/sets/{vocabulary_set_id}", response_model=VocabularySetResponse)
async def get_vocabulary_set(vocabulary_set_id: str, engine: EducationalEngine = Depends(get_engine)):
    """
    根据ID获取词汇集
    """
    return engine.get_vocabulary_set(vocabulary_set_id).to_dict()


@router.get("/progress/{user_id}/{vocabulary_set_id}", response_model=VocabularyProgressResponse)
async def get_vocabulary_progress(user_id: str, vocabulary_set_id: str,
                                  engine: EducationalEngine = Depends(get_engine)):
    """
    获取用户在词汇集上的进度
    """
    return engine.get_vocabulary_progress(user_id, vocabulary_set_id).to_dict()


@router.get("/progress/{user_id}/{vocabulary_set_id}/next", response_model=NextSymbolsResponse)
async def get_next_learning_symbols(user_id: str, vocabulary_set_id: str,
                                    engine: EducationalEngine = Depends(get_engine)):
    """
    获取接下来要学习的符号
    """
    symbols = engine.get_next_learning_symbols(user_id, vocabulary_set_id)
    return {"user_id": user_id, "vocabulary_set_id": vocabulary_set_id, "symbols": symbols}


@router.put("/mastery/{user_id}/{vocabulary_set_id}/{symbol_id}", response_model=MasteryUpdateResponse)
async def update_symbol_mastery(user_id: str, vocabulary_set_id: str, symbol_id: str,
                                update: MasteryUpdateRequest,
                                engine: EducationalEngine = Depends(get_engine)):
    """
    更新符号掌握状态
    """
    state = engine.update_symbol_mastery(user_id, vocabulary_set_id, symbol_id, update.state)
    return {
        "user_id": user_id,
        "vocabulary_set_id": vocabulary_set_id,
        "symbol_id": symbol_id,
        "state": state.value,
    }


@router.get("/activities", response_model=List[LearningActivityResponse])
async def get_learning_activities(
    type: Optional[str] = Query(None, description="活动类型"),
    difficulty: Optional[str] = Query(None, description="难度"),
    min_age: Optional[int] = Query(None, ge=0),
    max_age: Optional[int] = Query(None, ge=0),
    categories: Optional[List[str]] = Query(None, description="分类，命中任意一个即可"),
    engine: EducationalEngine = Depends(get_engine)
):
    """
    获取学习活动，支持过滤
    """
    try:
        activity_type = ActivityType(type) if type else None
        activity_difficulty = Difficulty(difficulty) if difficulty else None
    except ValueError as e:
        raise ValidationError(f"过滤条件不合法: {e}")

    age_range = None
    if min_age is not None or max_age is not None:
        age_range = AgeRange(min_age if min_age is not None else 0,
                             max_age if max_age is not None else 200)

    activities = engine.get_learning_activities(
        activity_type=activity_type,
        difficulty=activity_difficulty,
        age_range=age_range,
        categories=categories,
    )
    return [a.to_dict() for a in activities]
