from sqlalchemy import Column, String, UniqueConstraint

from .base import BaseModel


"""
符号掌握记录模型
存储用户在某个词汇集中每个符号的掌握状态(not-started/learning/mastered)。
没有记录的符号视为 not-started。
"""


class SymbolMastery(BaseModel):
    __tablename__ = "symbol_mastery"
    __table_args__ = (
        UniqueConstraint("user_id", "vocabulary_set_id", "symbol_id", name="uq_symbol_mastery_triple"),
    )

    user_id = Column(String(100), nullable=False, index=True)
    vocabulary_set_id = Column(String(100), nullable=False, index=True)
    symbol_id = Column(String(100), nullable=False)
    state = Column(String(20), nullable=False, default="not-started")

