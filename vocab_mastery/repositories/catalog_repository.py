import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from vocab_mastery.domain.vocabulary import LEVEL_ORDER, VocabularySet
from vocab_mastery.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def load_json_list(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """读取JSON数组文件"""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"数据文件格式错误 {path}: {e}") from e

    if not isinstance(data, list):
        raise ValidationError(f"数据文件必须是JSON数组: {path}")
    return data


class VocabularySetCatalog:
    """词汇集目录，只读"""

    def __init__(self, vocabulary_sets: Iterable[VocabularySet]):
        self._sets: Dict[str, VocabularySet] = {}
        for vocabulary_set in vocabulary_sets:
            if vocabulary_set.id in self._sets:
                raise ValidationError(f"重复的词汇集ID: {vocabulary_set.id}")
            self._sets[vocabulary_set.id] = vocabulary_set

        # 按难度升序展示，同级保持定义顺序
        self._ordered = sorted(self._sets.values(), key=lambda s: LEVEL_ORDER[s.level])
        logger.info(f"词汇集目录加载完成，共 {len(self._sets)} 个词汇集")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "VocabularySetCatalog":
        return cls(VocabularySet.from_dict(item) for item in load_json_list(path))

    def list(self) -> List[VocabularySet]:
        """获取所有词汇集"""
        return list(self._ordered)

    def get(self, vocabulary_set_id: str) -> VocabularySet:
        """根据ID获取词汇集"""
        vocabulary_set = self.find(vocabulary_set_id)
        if vocabulary_set is None:
            raise NotFoundError(f"词汇集不存在: {vocabulary_set_id}")
        return vocabulary_set

    def find(self, vocabulary_set_id: str) -> Optional[VocabularySet]:
        return self._sets.get(vocabulary_set_id)

    def __len__(self) -> int:
        return len(self._sets)
