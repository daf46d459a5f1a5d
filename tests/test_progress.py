import pytest

from vocab_mastery.domain.vocabulary import Difficulty, MasteryState, StepType
from vocab_mastery.services.learning_path_service import LearningPathGenerator
from vocab_mastery.services.progress_service import ProgressTracker, coerce_mastery_state
from vocab_mastery.utils.exceptions import NotFoundError, ValidationError


@pytest.fixture
def tracker(catalog, mastery_store):
    return ProgressTracker(catalog, mastery_store)


def test_fresh_user_has_nothing_started(tracker, core_set):
    progress = tracker.get_progress("u1", "core-basic")

    assert progress.total_symbols == 10
    assert progress.mastered_symbols == []
    assert progress.learning_symbols == []
    assert progress.not_started_symbols == list(core_set.symbols)
    assert progress.mastery_level == 0
    assert progress.last_assessment is None
    assert progress.next_assessment is None


def test_mastery_level_with_six_mastered(tracker, core_set):
    """10个符号中掌握6个，掌握度为60"""
    for symbol_id in core_set.symbols[:6]:
        tracker.update_symbol_mastery("u1", "core-basic", symbol_id, MasteryState.MASTERED)
    tracker.update_symbol_mastery("u1", "core-basic", "please", MasteryState.LEARNING)

    progress = tracker.get_progress("u1", "core-basic")

    assert progress.mastery_level == 60
    assert progress.mastered_symbols == list(core_set.symbols[:6])
    assert progress.learning_symbols == ["please"]
    assert progress.not_started_symbols == ["thank-you", "sorry", "goodbye"]


def test_symbol_lists_partition_the_set(tracker, core_set):
    tracker.update_symbol_mastery("u1", "core-basic", "goodbye", "mastered")
    tracker.update_symbol_mastery("u1", "core-basic", "yes", "learning")
    tracker.update_symbol_mastery("u1", "core-basic", "hello", "mastered")

    progress = tracker.get_progress("u1", "core-basic")
    combined = progress.mastered_symbols + progress.learning_symbols + progress.not_started_symbols

    assert sorted(combined) == sorted(core_set.symbols)
    assert len(combined) == len(set(combined))
    # 每个列表内部保持词汇集顺序
    assert progress.mastered_symbols == ["hello", "goodbye"]


def test_mastery_level_is_integer_percentage(tracker):
    tracker.update_symbol_mastery("u1", "advanced-set", "book", True)
    assert tracker.get_progress("u1", "advanced-set").mastery_level == 50

    for symbol_id in ("book", "pencil", "paper"):
        tracker.update_symbol_mastery("u2", "small-set", symbol_id, True)
    assert tracker.get_progress("u2", "small-set").mastery_level == 75


def test_empty_set_has_zero_mastery(tracker):
    progress = tracker.get_progress("u1", "empty-set")

    assert progress.total_symbols == 0
    assert progress.mastery_level == 0
    assert progress.learning_path == []


def test_unknown_set_raises_not_found(tracker):
    with pytest.raises(NotFoundError):
        tracker.get_progress("u1", "nope")
    with pytest.raises(NotFoundError):
        tracker.update_symbol_mastery("u1", "nope", "hello", True)


def test_symbol_outside_set_rejected(tracker, mastery_store):
    with pytest.raises(ValidationError):
        tracker.update_symbol_mastery("u1", "core-basic", "book", True)
    assert mastery_store.get_mastery("u1", "core-basic", "book") == MasteryState.NOT_STARTED


def test_progress_is_per_user_and_set(tracker):
    tracker.update_symbol_mastery("u1", "small-set", "book", True)

    assert tracker.get_progress("u2", "small-set").mastered_symbols == []
    assert tracker.get_progress("u1", "advanced-set").mastered_symbols == []


def test_next_learning_symbols_prioritises_learning(tracker):
    tracker.update_symbol_mastery("u1", "core-basic", "hello", True)
    tracker.update_symbol_mastery("u1", "core-basic", "more", False)
    tracker.update_symbol_mastery("u1", "core-basic", "yes", "learning")

    next_symbols = tracker.get_next_learning_symbols("u1", "core-basic")

    assert next_symbols[:2] == ["yes", "more"]
    assert "hello" not in next_symbols
    assert len(next_symbols) == 9


def test_get_progress_has_no_side_effects(tracker, mastery_store):
    first = tracker.get_progress("u1", "core-basic").to_dict()
    second = tracker.get_progress("u1", "core-basic").to_dict()

    assert first == second
    assert mastery_store._states == {}


def test_schedule_is_reported_when_available(catalog, mastery_store):
    class FixedSchedule:
        def get_schedule(self, user_id, vocabulary_set_id):
            return "last", "next"

    tracker = ProgressTracker(catalog, mastery_store, schedule=FixedSchedule())
    progress = tracker.get_progress("u1", "core-basic")

    assert progress.last_assessment == "last"
    assert progress.next_assessment == "next"


@pytest.mark.parametrize("value,expected", [
    (True, MasteryState.MASTERED),
    (False, MasteryState.LEARNING),
    ("not-started", MasteryState.NOT_STARTED),
    (MasteryState.LEARNING, MasteryState.LEARNING),
])
def test_coerce_mastery_state(value, expected):
    assert coerce_mastery_state(value) == expected


def test_coerce_mastery_state_rejects_unknown():
    with pytest.raises(ValidationError):
        coerce_mastery_state("expert")


def test_learning_path_phases(core_set):
    path = LearningPathGenerator().generate(core_set.symbols)

    assert [step.symbol_id for step in path] == list(core_set.symbols)
    assert [step.id for step in path] == [f"step_{i}" for i in range(10)]
    assert [step.type for step in path[:3]] == [StepType.INTRODUCTION] * 3
    assert [step.type for step in path[3:6]] == [StepType.PRACTICE] * 3
    assert all(step.type == StepType.ASSESSMENT for step in path[6:])
    assert path[0].difficulty == Difficulty.EASY
    assert path[4].difficulty == Difficulty.MEDIUM
    assert path[9].difficulty == Difficulty.HARD

    completed = [step for step in path if step.is_completed]
    assert [step.symbol_id for step in completed] == list(core_set.symbols[:4])
    assert all(step.attempts == 3 and step.success_rate == 0.8 for step in completed)
    assert all(step.attempts == 0 and step.success_rate == 0.0 for step in path[4:])
    assert path[0].description == "Learn hello"


def test_learning_path_is_deterministic(core_set):
    generator = LearningPathGenerator()
    first = [step.to_dict() for step in generator.generate(core_set.symbols)]
    second = [step.to_dict() for step in generator.generate(core_set.symbols)]

    assert first == second
