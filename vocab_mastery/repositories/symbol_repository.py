import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from vocab_mastery.domain.vocabulary import Symbol
from vocab_mastery.repositories.catalog_repository import load_json_list

logger = logging.getLogger(__name__)


class SymbolRepository:
    """基于静态数据的符号查询"""

    def __init__(self, symbols: Iterable[Symbol]):
        self._symbols: Dict[str, Symbol] = {symbol.id: symbol for symbol in symbols}

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SymbolRepository":
        symbols = []
        for item in load_json_list(path):
            metadata = {k: v for k, v in item.items() if k not in ("id", "name")}
            symbols.append(Symbol(id=item["id"], name=item["name"], metadata=metadata))
        logger.info(f"符号数据加载完成，共 {len(symbols)} 个符号")
        return cls(symbols)

    def resolve_symbol(self, symbol_id: str) -> Optional[Symbol]:
        """根据ID查询符号，不存在返回None"""
        return self._symbols.get(symbol_id)
