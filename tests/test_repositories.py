from datetime import datetime

import pytest

from vocab_mastery.domain.vocabulary import MasteryState
from vocab_mastery.models.goal import Milestone
from vocab_mastery.models.symbol_mastery import SymbolMastery
from vocab_mastery.repositories.goal_repository import GoalRepository
from vocab_mastery.repositories.mastery_repository import MasteryRepository
from vocab_mastery.services.goal_service import GoalMilestoneTracker
from vocab_mastery.services.progress_service import ProgressTracker
from vocab_mastery.utils.exceptions import NotFoundError


def test_mastery_defaults_to_not_started(db_session):
    repo = MasteryRepository(db_session)
    assert repo.get_mastery("u1", "core-basic", "hello") == MasteryState.NOT_STARTED


def test_mastery_upsert_keeps_one_record(db_session):
    repo = MasteryRepository(db_session)

    repo.set_mastery("u1", "core-basic", "hello", MasteryState.LEARNING)
    repo.set_mastery("u1", "core-basic", "hello", MasteryState.MASTERED)

    assert repo.get_mastery("u1", "core-basic", "hello") == MasteryState.MASTERED
    assert db_session.query(SymbolMastery).count() == 1
    # 同一符号在其他词汇集中互不影响
    assert repo.get_mastery("u1", "other-set", "hello") == MasteryState.NOT_STARTED


def test_progress_with_database_store(db_session, catalog, core_set):
    tracker = ProgressTracker(catalog, MasteryRepository(db_session))
    for symbol_id in core_set.symbols[:6]:
        tracker.update_symbol_mastery("u1", "core-basic", symbol_id, "mastered")

    progress = tracker.get_progress("u1", "core-basic")

    assert progress.mastery_level == 60
    assert progress.mastered_symbols == list(core_set.symbols[:6])


def test_goal_round_trip(db_session):
    tracker = GoalMilestoneTracker(GoalRepository(db_session))
    goal = tracker.create_goal("u1", "Greetings", "Say hello", "social", datetime(2030, 1, 1),
                               [{"title": "First"}, {"title": "Second", "description": "more"}])

    tracker.update_milestone_progress(goal.id, "milestone_0", 40)
    tracker.update_milestone_progress(goal.id, "milestone_1", 60)
    tracker.mark_milestone_completed(goal.id, "milestone_1")

    loaded = GoalRepository(db_session).load_goal(goal.id)

    assert loaded.title == "Greetings"
    assert loaded.progress == 50.0
    assert [m.id for m in loaded.milestones] == ["milestone_0", "milestone_1"]
    assert [m.progress for m in loaded.milestones] == [40.0, 60.0]
    assert loaded.milestones[1].is_completed is True
    assert loaded.milestones[1].description == "more"
    assert loaded.target_date.tzinfo is not None
    assert loaded.is_completed is False
    # 多次保存不会产生重复里程碑
    assert db_session.query(Milestone).count() == 2


def test_goal_repository_missing_goal(db_session):
    with pytest.raises(NotFoundError):
        GoalRepository(db_session).load_goal("goal_missing")


def test_goal_repository_lists_by_user(db_session):
    tracker = GoalMilestoneTracker(GoalRepository(db_session))
    first = tracker.create_goal("u1", "One", "", "vocabulary", datetime(2030, 1, 1), [])
    tracker.create_goal("u2", "Two", "", "academic", datetime(2030, 1, 1), [])

    goals = GoalRepository(db_session).list_goals("u1")

    assert [g.id for g in goals] == [first.id]
