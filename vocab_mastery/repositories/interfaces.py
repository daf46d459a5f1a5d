"""
引擎依赖的外部协作者接口
引擎只通过这些接口读写数据，具体实现（内存、数据库、远程服务）由调用方注入。
"""

from datetime import datetime
from typing import List, Optional, Protocol, Tuple

from vocab_mastery.domain.goal import EducationalGoal
from vocab_mastery.domain.vocabulary import MasteryState, Symbol


class SymbolLookup(Protocol):
    def resolve_symbol(self, symbol_id: str) -> Optional[Symbol]:
        ...


class MasteryStore(Protocol):
    def get_mastery(self, user_id: str, vocabulary_set_id: str, symbol_id: str) -> MasteryState:
        ...

    def set_mastery(self, user_id: str, vocabulary_set_id: str, symbol_id: str,
                    state: MasteryState) -> None:
        ...


class GoalStore(Protocol):
    def load_goal(self, goal_id: str) -> EducationalGoal:
        """不存在时抛出 NotFoundError"""
        ...

    def save_goal(self, goal: EducationalGoal) -> None:
        ...

    def list_goals(self, user_id: str) -> List[EducationalGoal]:
        ...


class AssessmentSchedule(Protocol):
    def get_schedule(self, user_id: str,
                     vocabulary_set_id: str) -> Tuple[Optional[datetime], Optional[datetime]]:
        """返回 (上次测评时间, 下次测评时间)"""
        ...
