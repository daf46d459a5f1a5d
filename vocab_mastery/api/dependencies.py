from fastapi import Depends
from sqlalchemy.orm import Session

from vocab_mastery.api.assessment_manager import AssessmentManager, assessment_manager
from vocab_mastery.services.educational_service import EducationalEngine, build_engine
from vocab_mastery.utils.database import get_db


def get_engine(db: Session = Depends(get_db)) -> EducationalEngine:
    """每个请求使用自己的数据库会话构建引擎"""
    return build_engine(db)


def get_assessment_manager() -> AssessmentManager:
    return assessment_manager
