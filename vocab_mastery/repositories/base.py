from typing import Optional, TypeVar, Generic, Type
from sqlalchemy.orm import Session

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """基础Repository类，提供通用的条件查询"""

    def __init__(self, db: Session, model_class: Type[T]):
        self.db = db
        self.model_class = model_class

    def get_first_by(self, **filters) -> Optional[T]:
        """根据条件获取第一条记录"""
        return self._query(**filters).first()

    def _query(self, **filters):
        query = self.db.query(self.model_class)
        for attr, value in filters.items():
            if hasattr(self.model_class, attr):
                query = query.filter(getattr(self.model_class, attr) == value)
        return query
