import logging
from typing import Dict, Tuple

from sqlalchemy.orm import Session

from vocab_mastery.domain.vocabulary import MasteryState
from vocab_mastery.models.symbol_mastery import SymbolMastery
from vocab_mastery.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class MasteryRepository(BaseRepository[SymbolMastery]):
    """基于数据库的符号掌握状态存储"""

    def __init__(self, db: Session):
        super().__init__(db, SymbolMastery)

    def get_record(self, user_id: str, vocabulary_set_id: str, symbol_id: str):
        return self.get_first_by(
            user_id=user_id,
            vocabulary_set_id=vocabulary_set_id,
            symbol_id=symbol_id,
        )

    def get_mastery(self, user_id: str, vocabulary_set_id: str, symbol_id: str) -> MasteryState:
        """查询掌握状态，没有记录视为未开始"""
        record = self.get_record(user_id, vocabulary_set_id, symbol_id)
        if record is None:
            return MasteryState.NOT_STARTED
        return MasteryState(record.state)

    def set_mastery(self, user_id: str, vocabulary_set_id: str, symbol_id: str,
                    state: MasteryState) -> None:
        """写入掌握状态（存在则更新，不存在则创建），单次提交"""
        try:
            record = self.get_record(user_id, vocabulary_set_id, symbol_id)
            if record is None:
                record = SymbolMastery(
                    user_id=user_id,
                    vocabulary_set_id=vocabulary_set_id,
                    symbol_id=symbol_id,
                    state=state.value,
                )
                self.db.add(record)
            else:
                record.state = state.value
            self.db.commit()
        except Exception as e:
            logger.error(f"写入掌握状态失败: 用户{user_id}, 符号{symbol_id}: {e}")
            self.db.rollback()
            raise


class InMemoryMasteryStore:
    """内存实现，用于测试和无数据库运行"""

    def __init__(self):
        self._states: Dict[Tuple[str, str, str], MasteryState] = {}

    def get_mastery(self, user_id: str, vocabulary_set_id: str, symbol_id: str) -> MasteryState:
        return self._states.get((user_id, vocabulary_set_id, symbol_id), MasteryState.NOT_STARTED)

    def set_mastery(self, user_id: str, vocabulary_set_id: str, symbol_id: str,
                    state: MasteryState) -> None:
        self._states[(user_id, vocabulary_set_id, symbol_id)] = state
