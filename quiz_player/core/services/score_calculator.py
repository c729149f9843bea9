"""Scoring of a finished attempt."""

from __future__ import annotations

from quiz_player.core.models import Quiz, ScoreSummary
from quiz_player.core.services.answer_tracker import AnswerTracker


def rounded_percentage(part: int, whole: int) -> int:
    """Return ``part / whole * 100`` rounded half-up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    # Integer form of floor(part * 100 / whole + 0.5), free of float error.
    return (part * 200 + whole) // (whole * 2)


def score(quiz: Quiz, tracker: AnswerTracker) -> ScoreSummary:
    """Compare the tracked selections with each question's correct option.

    Unanswered questions never match. A quiz without questions scores 0%.
    """
    total = quiz.question_count
    correct_count = sum(
        1
        for index, question in enumerate(quiz.questions)
        if tracker.get(index) == question.correct_option_index
    )
    return ScoreSummary(
        correct_count=correct_count,
        total=total,
        percentage=rounded_percentage(correct_count, total),
    )
