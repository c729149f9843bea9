"""
Pytest configuration and shared fixtures for quiz player tests.
"""

from concurrent.futures import Executor, Future
from datetime import datetime, timezone

import pytest
from PySide6.QtCore import QCoreApplication

from quiz_player.core.models import Question, Quiz, UserIdentity
from quiz_player.core.services.document_store import InMemoryDocumentStore
from quiz_player.core.services.identity import StaticIdentityProvider
from quiz_player.core.services.result_persister import ResultPersister


class ImmediateExecutor(Executor):
    """Executor that runs submitted work synchronously in the calling thread."""

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:  # pragma: no cover - mirrors ThreadPoolExecutor
            future.set_exception(exc)
        return future


class FailingDocumentStore(InMemoryDocumentStore):
    """Store whose writes always fail, for persistence error paths."""

    def create(self, collection, payload):
        raise ConnectionError("document store unavailable")


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Single QCoreApplication so QTimer objects can be started headless."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def make_quiz(correct_answers, option_count=3, quiz_id="quiz-1", title="Sample Quiz"):
    """Build a quiz with one question per entry of ``correct_answers``."""
    questions = tuple(
        Question(
            question_text=f"Question {index + 1}?",
            options=tuple(f"Option {letter}" for letter in "ABCDEFGH"[:option_count]),
            correct_option_index=correct,
        )
        for index, correct in enumerate(correct_answers)
    )
    return Quiz(
        id=quiz_id,
        title=title,
        description="Fixture quiz",
        questions=questions,
        created_by="author@example.com",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def user():
    return UserIdentity(user_id="user-42", email="player@example.com")


@pytest.fixture
def identity(user):
    return StaticIdentityProvider(user)


@pytest.fixture
def persister(store):
    return ResultPersister(store, executor=ImmediateExecutor())
