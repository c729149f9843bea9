import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from quiz_player.core.models import StoredResult
from quiz_player.core.services.scoreboard import (
    ScoreBand,
    Scoreboard,
    score_band,
    summarize_results,
)

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _add_result(store, user_id, score, hours):
    store.create(
        "results",
        {
            "quizId": "quiz-1",
            "quizTitle": f"Quiz at {hours}h",
            "userId": user_id,
            "userEmail": f"{user_id}@example.com",
            "score": score,
            "correctAnswers": score // 10,
            "totalQuestions": 10,
            "answers": [],
            "completedAt": BASE_TIME + timedelta(hours=hours),
        },
    )


@pytest.mark.parametrize(
    "score, band",
    [
        (100, ScoreBand.EXCELLENT),
        (80, ScoreBand.EXCELLENT),
        (79, ScoreBand.GOOD),
        (60, ScoreBand.GOOD),
        (59, ScoreBand.NEEDS_IMPROVEMENT),
        (0, ScoreBand.NEEDS_IMPROVEMENT),
    ],
)
def test_score_band_thresholds(score, band):
    assert score_band(score) is band


def test_results_for_user_are_newest_first_and_private(store):
    _add_result(store, "alice", 50, 1)
    _add_result(store, "bob", 90, 2)
    _add_result(store, "alice", 80, 3)

    results = Scoreboard(store).results_for_user("alice")

    assert [result.score for result in results] == [80, 50]
    assert results[0].quiz_title == "Quiz at 3h"
    assert results[0].completed_at == BASE_TIME + timedelta(hours=3)


def test_overview_averages_and_counts_excellent(store):
    for hours, score in enumerate((100, 85, 60, 0)):
        _add_result(store, "alice", score, hours)

    overview = Scoreboard(store).overview("alice")

    assert overview.completed_count == 4
    assert overview.average_score == 61  # 245 / 4 = 61.25
    assert overview.excellent_count == 2


def test_average_rounds_half_up():
    results = [StoredResult(id=str(i), quiz_title="q", score=s, correct_answers=0, total_questions=1)
               for i, s in enumerate((50, 51))]
    assert summarize_results(results).average_score == 51


def test_overview_without_results_is_zero(store):
    overview = Scoreboard(store).overview("nobody")
    assert (overview.completed_count, overview.average_score, overview.excellent_count) == (0, 0, 0)


def test_overview_cannot_be_modified(store):
    overview = Scoreboard(store).overview("nobody")
    with pytest.raises(dataclasses.FrozenInstanceError):
        overview.completed_count = 5
