import logging
import threading
from datetime import datetime, timedelta
from typing import Dict, Optional

from vocab_mastery.config.settings import settings
from vocab_mastery.domain.assessment import Assessment
from vocab_mastery.utils.exceptions import NotFoundError
from vocab_mastery.utils.helpers import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class AssessmentManager:
    """
    进行中测评管理器，测评只在进程内保存，不做持久化
    - 已完成的测评保留 completed_ttl，期间仍可查询
    - 登记新测评时清理过期测评；数量达到上限时先淘汰最早完成的，
      再淘汰最早登记的
    """

    def __init__(self, max_size: Optional[int] = None, completed_ttl_minutes: Optional[int] = None):
        # 存储测评: assessment_id -> Assessment，按登记顺序
        self.active_assessments: Dict[str, Assessment] = {}
        self.max_size = settings.ACTIVE_ASSESSMENT_LIMIT if max_size is None else max_size
        ttl = settings.COMPLETED_ASSESSMENT_TTL_MINUTES if completed_ttl_minutes is None else completed_ttl_minutes
        self.completed_ttl = timedelta(minutes=ttl)
        self._lock = threading.Lock()
        logger.info("测评管理器初始化完成")

    def register(self, assessment: Assessment, now: Optional[datetime] = None) -> Assessment:
        with self._lock:
            self._evict(now or utc_now())
            self.active_assessments[assessment.id] = assessment
        logger.info(f"测评已登记: {assessment.id}")
        return assessment

    def get(self, assessment_id: str) -> Assessment:
        assessment = self.active_assessments.get(assessment_id)
        if assessment is None:
            raise NotFoundError(f"测评不存在: {assessment_id}")
        return assessment

    def clear(self):
        with self._lock:
            self.active_assessments.clear()

    def _evict(self, now: datetime):
        # 调用方持有锁
        expired = [
            assessment_id for assessment_id, assessment in self.active_assessments.items()
            if assessment.is_completed and now - ensure_utc(assessment.completed_at) >= self.completed_ttl
        ]
        for assessment_id in expired:
            self._remove(assessment_id)

        while self.active_assessments and len(self.active_assessments) >= self.max_size:
            completed = [a for a in self.active_assessments.values() if a.is_completed]
            if completed:
                victim = min(completed, key=lambda a: ensure_utc(a.completed_at)).id
            else:
                victim = next(iter(self.active_assessments))
            self._remove(victim)

    def _remove(self, assessment_id: str):
        if self.active_assessments.pop(assessment_id, None) is not None:
            logger.info(f"测评已移除: {assessment_id}")


# 全局测评管理器实例
assessment_manager = AssessmentManager()
