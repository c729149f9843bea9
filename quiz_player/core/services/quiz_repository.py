"""Service for loading, listing and creating quiz documents."""

from __future__ import annotations

import logging
from typing import Iterable

from quiz_player.constants.quiz_constants import (
    MAX_OPTION_COUNT,
    MIN_OPTION_COUNT,
    QUIZZES_COLLECTION,
)
from quiz_player.core.models import Question, Quiz
from quiz_player.core.services.document_store import SERVER_TIMESTAMP, DocumentStore

logger = logging.getLogger(__name__)


class QuizValidationError(ValueError):
    """Raised when a quiz definition cannot be played."""


class QuizNotFoundError(LookupError):
    """Raised when no quiz exists for the requested id."""


def validate_question(question: Question, position: int = 0) -> Question:
    """Validate and normalize a single question before it is played or stored."""
    label = f"Question {position + 1}"
    cleaned_text = question.question_text.strip()
    if not cleaned_text:
        raise QuizValidationError(f"{label}: question text must not be empty.")

    if not MIN_OPTION_COUNT <= len(question.options) <= MAX_OPTION_COUNT:
        raise QuizValidationError(
            f"{label}: must have between {MIN_OPTION_COUNT} and {MAX_OPTION_COUNT} options."
        )
    options = tuple(option.strip() for option in question.options)
    if any(not option for option in options):
        raise QuizValidationError(f"{label}: option text cannot be empty.")

    correct_index = question.correct_option_index
    if isinstance(correct_index, bool) or not isinstance(correct_index, int):
        raise QuizValidationError(f"{label}: correct answer must be an option index.")
    if not 0 <= correct_index < len(options):
        raise QuizValidationError(f"{label}: correct answer index {correct_index} is out of range.")

    return Question(question_text=cleaned_text, options=options, correct_option_index=correct_index)


def validate_quiz(quiz: Quiz) -> Quiz:
    """Return a normalized copy of ``quiz`` or raise ``QuizValidationError``."""
    if not quiz.questions:
        raise QuizValidationError("Quiz must contain at least one question.")
    questions = tuple(validate_question(q, position) for position, q in enumerate(quiz.questions))
    return Quiz(
        id=quiz.id,
        title=quiz.title.strip(),
        description=quiz.description.strip(),
        questions=questions,
        created_by=quiz.created_by,
        created_at=quiz.created_at,
    )


class QuizRepository:
    """Reads and writes quiz documents in the document store."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def load_quiz(self, quiz_id: str) -> Quiz:
        """Load one quiz and validate it so a session can start safely."""
        document = self._store.get(QUIZZES_COLLECTION, quiz_id)
        if document is None:
            raise QuizNotFoundError(f"Quiz {quiz_id!r} does not exist.")
        return validate_quiz(Quiz.from_document(document))

    def list_quizzes(self) -> list[Quiz]:
        """Return all playable quizzes, newest first."""
        quizzes: list[Quiz] = []
        documents = self._store.query(QUIZZES_COLLECTION, order_by="createdAt", descending=True)
        for document in documents:
            try:
                quizzes.append(validate_quiz(Quiz.from_document(document)))
            except QuizValidationError as exc:
                logger.warning("Skipping quiz %s: %s", document.get("id"), exc)
        return quizzes

    def create_quiz(
        self,
        title: str,
        description: str,
        questions: Iterable[Question],
        created_by: str,
    ) -> Quiz:
        """Validate and store a new quiz, returning it with its assigned id."""
        cleaned_title = title.strip()
        if not cleaned_title:
            raise QuizValidationError("Quiz title must not be empty.")

        # Drafts may carry blank trailing questions; only filled-in ones are kept.
        kept = [
            q for q in questions
            if q.question_text.strip() and any(option.strip() for option in q.options)
        ]
        draft = validate_quiz(
            Quiz(
                id="",
                title=cleaned_title,
                description=description,
                questions=tuple(kept),
                created_by=created_by,
            )
        )
        payload = draft.to_document()
        payload.pop("id")
        payload["createdAt"] = SERVER_TIMESTAMP
        quiz_id = self._store.create(QUIZZES_COLLECTION, payload)
        logger.info("Created quiz %s (%s) with %d questions", quiz_id, cleaned_title, draft.question_count)
        return self.load_quiz(quiz_id)
