import json

import pytest

from vocab_mastery.config.settings import settings
from vocab_mastery.domain.vocabulary import ActivityType, AgeRange, Difficulty, VocabularyLevel
from vocab_mastery.repositories.activity_repository import LearningActivityCatalog
from vocab_mastery.repositories.catalog_repository import VocabularySetCatalog
from vocab_mastery.repositories.symbol_repository import SymbolRepository
from vocab_mastery.utils.exceptions import NotFoundError, ValidationError


def test_list_orders_by_level(catalog):
    levels = [s.level for s in catalog.list()]
    assert levels == sorted(levels, key=lambda level: list(VocabularyLevel).index(level))
    assert catalog.list()[-1].id == "advanced-set"


def test_list_keeps_definition_order_within_level(catalog):
    beginner_ids = [s.id for s in catalog.list() if s.level == VocabularyLevel.BEGINNER]
    assert beginner_ids == ["core-basic", "small-set", "empty-set"]


def test_get_unknown_set_raises(catalog):
    with pytest.raises(NotFoundError):
        catalog.get("missing")


def test_duplicate_symbols_rejected(set_factory):
    with pytest.raises(ValidationError):
        set_factory("dup", ["hello", "help", "hello"])


def test_duplicate_set_ids_rejected(set_factory):
    with pytest.raises(ValidationError):
        VocabularySetCatalog([set_factory("a", ["x"]), set_factory("a", ["y"])])


def test_builtin_data_files_load():
    """内置数据文件可以加载，且词汇集中的符号都能被查询到"""
    catalog = VocabularySetCatalog.from_file(settings.VOCABULARY_SETS_PATH)
    symbols = SymbolRepository.from_file(settings.SYMBOLS_PATH)

    assert len(catalog) == 5
    assert catalog.get("core-basic").symbols[:3] == ("hello", "help", "yes")
    for vocabulary_set in catalog.list():
        for symbol_id in vocabulary_set.symbols:
            assert symbols.resolve_symbol(symbol_id) is not None, symbol_id
    assert symbols.resolve_symbol("thank-you").metadata["category"] == "Communication"


def test_from_file_rejects_non_list(tmp_path):
    path = tmp_path / "sets.json"
    path.write_text(json.dumps({"id": "x"}), encoding="utf-8")
    with pytest.raises(ValidationError):
        VocabularySetCatalog.from_file(path)


def test_learning_activity_filters():
    activities = LearningActivityCatalog.from_file(settings.ACTIVITIES_PATH)

    assert len(activities.get_learning_activities()) == 3

    games = activities.get_learning_activities(activity_type=ActivityType.GAME)
    assert [a.id for a in games] == ["activity-symbol-match"]

    hard = activities.get_learning_activities(difficulty=Difficulty.HARD)
    assert [a.id for a in hard] == ["activity-conversation-practice"]

    young = activities.get_learning_activities(age_range=AgeRange(3, 5))
    assert [a.id for a in young] == ["activity-symbol-match"]

    social = activities.get_learning_activities(categories=["Social", "Grammar"])
    assert {a.id for a in social} == {"activity-sentence-builder", "activity-conversation-practice"}
