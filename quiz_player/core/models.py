"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question with the index of its correct option."""

    question_text: str
    options: tuple[str, ...]
    correct_option_index: int

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Question:
        return cls(
            question_text=str(document.get("question", "")),
            options=tuple(str(option) for option in document.get("options", [])),
            correct_option_index=document.get("correctAnswer", -1),
        )

    def to_document(self, include_answer: bool = True) -> dict[str, Any]:
        document: dict[str, Any] = {
            "question": self.question_text,
            "options": list(self.options),
        }
        if include_answer:
            document["correctAnswer"] = self.correct_option_index
        return document


@dataclass(frozen=True, slots=True)
class Quiz:
    """Ordered collection of questions; never mutated while being played."""

    id: str
    title: str
    description: str
    questions: tuple[Question, ...]
    created_by: str = ""
    created_at: datetime | None = None

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Quiz:
        created_at = document.get("createdAt")
        return cls(
            id=str(document.get("id", "")),
            title=str(document.get("title", "")),
            description=str(document.get("description", "")),
            questions=tuple(Question.from_document(q) for q in document.get("questions", [])),
            created_by=str(document.get("createdBy", "")),
            created_at=created_at if isinstance(created_at, datetime) else None,
        )

    def to_document(self, include_answers: bool = True) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "questions": [q.to_document(include_answer=include_answers) for q in self.questions],
            "createdBy": self.created_by,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True, slots=True)
class UserIdentity:
    """The signed-in user as reported by the identity provider."""

    user_id: str
    email: str


@dataclass(frozen=True, slots=True)
class ScoreSummary:
    """Outcome of comparing recorded answers with the correct ones."""

    correct_count: int
    total: int
    percentage: int


@dataclass(frozen=True, slots=True)
class AttemptResult:
    """One user's completed run through a quiz."""

    quiz_id: str
    quiz_title: str
    user_id: str
    user_email: str
    correct_answers: int
    total_questions: int
    score: int
    answers: tuple[int | None, ...]
    completed_at: datetime

    def to_document(self) -> dict[str, Any]:
        return {
            "quizId": self.quiz_id,
            "quizTitle": self.quiz_title,
            "userId": self.user_id,
            "userEmail": self.user_email,
            "score": self.score,
            "correctAnswers": self.correct_answers,
            "totalQuestions": self.total_questions,
            "answers": list(self.answers),
            "completedAt": self.completed_at,
        }


@dataclass(slots=True)
class StoredResult:
    """A result document read back from the store for the history view."""

    id: str
    quiz_title: str
    score: int
    correct_answers: int
    total_questions: int
    completed_at: datetime | None = None
    answers: list[int | None] = field(default_factory=list)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> StoredResult:
        completed_at = document.get("completedAt")
        return cls(
            id=str(document.get("id", "")),
            quiz_title=str(document.get("quizTitle", "")),
            score=int(document.get("score", 0)),
            correct_answers=int(document.get("correctAnswers", 0)),
            total_questions=int(document.get("totalQuestions", 0)),
            completed_at=completed_at if isinstance(completed_at, datetime) else None,
            answers=list(document.get("answers", [])),
        )
