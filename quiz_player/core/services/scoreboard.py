"""Service for a user's result history and summary statistics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from quiz_player.constants.quiz_constants import (
    EXCELLENT_SCORE_THRESHOLD,
    GOOD_SCORE_THRESHOLD,
    RESULTS_COLLECTION,
)
from quiz_player.core.models import StoredResult
from quiz_player.core.services.document_store import DocumentStore
from quiz_player.core.services.score_calculator import rounded_percentage


class ScoreBand(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"


def score_band(score: int) -> ScoreBand:
    """Classify a percentage score the way the results screen colours it."""
    if score >= EXCELLENT_SCORE_THRESHOLD:
        return ScoreBand.EXCELLENT
    if score >= GOOD_SCORE_THRESHOLD:
        return ScoreBand.GOOD
    return ScoreBand.NEEDS_IMPROVEMENT


@dataclass(frozen=True, slots=True)
class ResultsOverview:
    """Immutable snapshot returned to consumers."""

    completed_count: int
    average_score: int
    excellent_count: int


class Scoreboard:
    """Reads back the attempts a user has completed."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def results_for_user(self, user_id: str) -> list[StoredResult]:
        """Return the user's results, most recent first."""
        documents = self._store.query(
            RESULTS_COLLECTION,
            where={"userId": user_id},
            order_by="completedAt",
            descending=True,
        )
        return [StoredResult.from_document(document) for document in documents]

    def overview(self, user_id: str) -> ResultsOverview:
        return summarize_results(self.results_for_user(user_id))


def summarize_results(results: list[StoredResult]) -> ResultsOverview:
    total_score = sum(result.score for result in results)
    return ResultsOverview(
        completed_count=len(results),
        average_score=rounded_percentage(total_score, len(results) * 100),
        excellent_count=sum(1 for result in results if score_band(result.score) is ScoreBand.EXCELLENT),
    )
