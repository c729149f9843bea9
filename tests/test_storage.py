from datetime import datetime, timedelta, timezone
import logging

import pytest

from conftest import FailingDocumentStore, make_quiz
from quiz_player.core.models import AttemptResult, Question
from quiz_player.core.services.document_store import (
    SERVER_TIMESTAMP,
    InMemoryDocumentStore,
    JsonFileDocumentStore,
)
from quiz_player.core.services.quiz_repository import (
    QuizNotFoundError,
    QuizRepository,
    QuizValidationError,
)
from quiz_player.core.services.result_persister import ResultPersister

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _quiz_document(title, created_at, questions=None):
    return {
        "title": title,
        "description": f"About {title}",
        "questions": questions
        if questions is not None
        else [{"question": "2 + 2?", "options": ["3", "4"], "correctAnswer": 1}],
        "createdBy": "author@example.com",
        "createdAt": created_at,
    }


def _attempt(score=100):
    return AttemptResult(
        quiz_id="quiz-1",
        quiz_title="Sample Quiz",
        user_id="user-42",
        user_email="player@example.com",
        correct_answers=2,
        total_questions=2,
        score=score,
        answers=(0, None),
        completed_at=BASE_TIME,
    )


class TestInMemoryDocumentStore:

    def test_create_assigns_id_and_server_timestamp(self, store):
        document_id = store.create("things", {"name": "a", "createdAt": SERVER_TIMESTAMP})
        document = store.get("things", document_id)
        assert document["id"] == document_id
        assert document["name"] == "a"
        assert isinstance(document["createdAt"], datetime)
        assert document["createdAt"].tzinfo is not None

    def test_get_returns_copies(self, store):
        document_id = store.create("things", {"tags": ["x"]})
        store.get("things", document_id)["tags"].append("y")
        assert store.get("things", document_id)["tags"] == ["x"]

    def test_get_unknown_document_returns_none(self, store):
        assert store.get("things", "missing") is None

    def test_query_filters_and_orders(self, store):
        store.create("results", {"userId": "a", "completedAt": BASE_TIME})
        store.create("results", {"userId": "b", "completedAt": BASE_TIME + timedelta(hours=1)})
        store.create("results", {"userId": "a", "completedAt": BASE_TIME + timedelta(hours=2)})
        store.create("results", {"userId": "a", "completedAt": None})

        documents = store.query("results", where={"userId": "a"}, order_by="completedAt", descending=True)

        assert [doc["completedAt"] for doc in documents] == [
            BASE_TIME + timedelta(hours=2),
            BASE_TIME,
            None,
        ]

    def test_json_file_store_survives_reload(self, tmp_path):
        path = tmp_path / "nested" / "documents.json"
        first = JsonFileDocumentStore(path)
        document_id = first.create("results", {"score": 80, "completedAt": SERVER_TIMESTAMP, "answers": [1, None]})

        second = JsonFileDocumentStore(path)
        document = second.get("results", document_id)

        assert document["score"] == 80
        assert document["answers"] == [1, None]
        assert document["completedAt"] == first.get("results", document_id)["completedAt"]
        assert isinstance(document["completedAt"], datetime)

    def test_failed_file_write_leaves_no_document_behind(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = JsonFileDocumentStore(blocker / "documents.json")

        with pytest.raises(OSError):
            store.create("results", {"userId": "u", "score": 10})

        assert store.query("results") == []
        assert store.query("results", where={"userId": "u"}) == []


class TestResultPersister:

    def test_writes_one_result_document_in_the_background(self):
        store = InMemoryDocumentStore()
        persister = ResultPersister(store)
        try:
            document_id = persister.persist(_attempt(score=50)).result(timeout=5)
        finally:
            persister.shutdown()

        document = store.get("results", document_id)
        assert document["score"] == 50
        assert document["answers"] == [0, None]
        assert document["userEmail"] == "player@example.com"
        assert isinstance(document["completedAt"], datetime)
        assert len(store.query("results")) == 1

    def test_failure_is_logged_and_swallowed(self, caplog):
        persister = ResultPersister(FailingDocumentStore())
        try:
            with caplog.at_level(logging.ERROR):
                outcome = persister.persist(_attempt()).result(timeout=5)
        finally:
            persister.shutdown()

        assert outcome is None
        assert "Failed to save result for quiz quiz-1" in caplog.text


class TestQuizRepository:

    def test_load_quiz_returns_validated_quiz(self, store):
        quiz_id = store.create("quizzes", _quiz_document("Maths", BASE_TIME))
        quiz = QuizRepository(store).load_quiz(quiz_id)

        assert quiz.id == quiz_id
        assert quiz.title == "Maths"
        assert quiz.questions == (Question("2 + 2?", ("3", "4"), 1),)
        assert quiz.created_at == BASE_TIME

    def test_unknown_quiz_raises_not_found(self, store):
        with pytest.raises(QuizNotFoundError):
            QuizRepository(store).load_quiz("missing")

    @pytest.mark.parametrize(
        "questions",
        [
            [],
            [{"question": "Only one?", "options": ["yes"], "correctAnswer": 0}],
            [{"question": "Out of range?", "options": ["a", "b"], "correctAnswer": 2}],
            [{"question": "Blank option?", "options": ["a", " "], "correctAnswer": 0}],
            [{"question": "   ", "options": ["a", "b"], "correctAnswer": 0}],
            [{"question": "No answer?", "options": ["a", "b"]}],
        ],
    )
    def test_invalid_quizzes_are_rejected_at_load_time(self, store, questions):
        quiz_id = store.create("quizzes", _quiz_document("Broken", BASE_TIME, questions))
        with pytest.raises(QuizValidationError):
            QuizRepository(store).load_quiz(quiz_id)

    def test_list_quizzes_newest_first_and_skips_invalid(self, store, caplog):
        store.create("quizzes", _quiz_document("Old", BASE_TIME))
        store.create("quizzes", _quiz_document("New", BASE_TIME + timedelta(days=1)))
        store.create("quizzes", _quiz_document("Broken", BASE_TIME + timedelta(days=2), []))

        with caplog.at_level(logging.WARNING):
            quizzes = QuizRepository(store).list_quizzes()

        assert [quiz.title for quiz in quizzes] == ["New", "Old"]
        assert "Skipping quiz" in caplog.text

    def test_create_quiz_drops_blank_questions_and_stamps_creation(self, store):
        repository = QuizRepository(store)
        blank = Question("", ("", "", "", ""), 0)
        quiz = repository.create_quiz(
            "  Capitals ",
            "European capitals",
            make_quiz([1, 0]).questions + (blank,),
            created_by="author@example.com",
        )

        assert quiz.title == "Capitals"
        assert quiz.question_count == 2
        assert quiz.created_by == "author@example.com"
        assert isinstance(quiz.created_at, datetime)
        assert repository.load_quiz(quiz.id) == quiz

    def test_create_quiz_requires_a_title_and_questions(self, store):
        repository = QuizRepository(store)
        with pytest.raises(QuizValidationError):
            repository.create_quiz(" ", "", make_quiz([0]).questions, created_by="a")
        with pytest.raises(QuizValidationError):
            repository.create_quiz("Empty", "", [], created_by="a")
        assert store.query("quizzes") == []
