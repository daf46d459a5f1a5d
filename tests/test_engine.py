import json
from datetime import datetime

import pytest

from vocab_mastery.config.settings import settings
from vocab_mastery.domain.assessment import AssessmentType, MasteryClassification
from vocab_mastery.domain.vocabulary import MasteryState
from vocab_mastery.services.educational_service import StaticData
from vocab_mastery.utils.exceptions import NotFoundError, ValidationError


def test_engine_progress_round_trip(engine):
    """通过引擎更新掌握状态后进度随之变化"""
    engine.update_symbol_mastery("u1", "small-set", "book", True)
    engine.update_symbol_mastery("u1", "small-set", "pencil", MasteryState.LEARNING)

    progress = engine.get_vocabulary_progress("u1", "small-set")

    assert progress.mastery_level == 25
    assert engine.get_next_learning_symbols("u1", "small-set") == ["pencil", "paper", "teacher"]
    # user_id 每次显式传入，互不影响
    assert engine.get_vocabulary_progress("u2", "small-set").mastery_level == 0


def test_engine_lists_sets(engine):
    assert [s.id for s in engine.list_vocabulary_sets()][-1] == "advanced-set"
    assert engine.get_vocabulary_set("core-basic").symbols[0] == "hello"


def test_engine_assessment_lifecycle(engine):
    assessment = engine.create_assessment("u1", "core-basic", "mastery")
    assert assessment.type == AssessmentType.MASTERY

    for question in assessment.questions:
        engine.submit_assessment_answer(assessment, question.id, question.correct_answer, 1.5)
    results = engine.complete_assessment(assessment)

    assert results.correct_answers == 8
    assert results.accuracy == 100.0
    assert results.mastery_level == MasteryClassification.ADVANCED
    assert results.weaknesses == []
    assert results.recommendations == ["Schedule next assessment in 7 days"]
    assert assessment.completed_at is not None


def test_engine_create_assessment_errors(engine):
    with pytest.raises(ValidationError):
        engine.create_assessment("u1", "core-basic", "quiz")
    with pytest.raises(NotFoundError):
        engine.create_assessment("u1", "missing")


def test_engine_goal_operations(engine):
    goal = engine.create_goal("u1", "Talk", "", "communication", datetime(2030, 1, 1),
                              [{"title": "A"}, {"title": "B"}])

    engine.update_goal_progress(goal.id, "milestone_0", 40)
    engine.update_goal_progress(goal.id, "milestone_1", 60)
    engine.mark_milestone_completed(goal.id, "milestone_0")

    loaded = engine.get_goal(goal.id)
    assert loaded.progress == 50.0
    assert loaded.milestones[0].is_completed is True
    assert loaded.is_completed is False

    assert engine.mark_goal_completed(goal.id).is_completed is True
    assert [g.id for g in engine.list_goals("u1")] == [goal.id]


def test_engine_without_activities_returns_empty(engine):
    assert engine.get_learning_activities() == []


def test_engine_score_assessment_does_not_complete(engine):
    """评分只计算结果，不标记测评完成"""
    assessment = engine.create_assessment("u1", "core-basic")
    answers = {q.id: (q.correct_answer, 1.0) for q in assessment.questions[:6]}

    results = engine.score_assessment(assessment, answers)

    assert results.correct_answers == 6
    assert results.accuracy == 75.0
    assert assessment.is_completed is False

    with pytest.raises(ValidationError):
        engine.score_assessment(assessment, {"q_99": ("Hello", 1.0)})


def test_static_data_reloads_after_reset(tmp_path, monkeypatch):
    """reset 后按当前配置的路径重新加载词汇集"""
    path = tmp_path / "sets.json"
    path.write_text(json.dumps([{
        "id": "tiny",
        "name": "Tiny",
        "level": "beginner",
        "age_range": {"min": 3, "max": 5},
        "symbols": ["hello"],
    }]), encoding="utf-8")

    StaticData.reset()
    monkeypatch.setattr(settings, "VOCABULARY_SETS_PATH", str(path))
    try:
        catalog, _, _ = StaticData.load()
        assert [s.id for s in catalog.list()] == ["tiny"]
        # 缓存生效，不会重复读取
        assert StaticData.load()[0] is catalog
    finally:
        StaticData.reset()
