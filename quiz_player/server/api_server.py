"""FastAPI server exposing the quiz catalogue and the user's results."""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field
import uvicorn

from quiz_player.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_player.core.markdown_math_renderer import renderer
from quiz_player.core.models import Question, Quiz
from quiz_player.core.services.identity import IdentityProvider
from quiz_player.core.services.quiz_repository import (
    QuizNotFoundError,
    QuizRepository,
    QuizValidationError,
)
from quiz_player.core.services.scoreboard import Scoreboard, score_band


class QuestionPayload(BaseModel):
    """Payload schema for one question of a new quiz."""

    question: str
    options: list[str] = Field(default_factory=list)
    correctAnswer: int


class QuizPayload(BaseModel):
    """Payload schema for creating a quiz."""

    title: str
    description: str = ""
    questions: list[QuestionPayload] = Field(default_factory=list)


def _isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _quiz_summary(quiz: Quiz) -> dict[str, object]:
    return {
        "id": quiz.id,
        "title": quiz.title,
        "description": quiz.description,
        "questionCount": quiz.question_count,
        "createdBy": quiz.created_by,
        "createdAt": _isoformat(quiz.created_at),
    }


def create_api_app(
    quiz_repository: QuizRepository,
    scoreboard: Scoreboard,
    identity_provider: IdentityProvider,
) -> FastAPI:
    """Create a FastAPI application wired to the provided services."""
    app = FastAPI(title="QuizPlayer API")

    def repository_dep() -> QuizRepository:
        return quiz_repository

    def scoreboard_dep() -> Scoreboard:
        return scoreboard

    def identity_dep() -> IdentityProvider:
        return identity_provider

    @app.get("/quizzes")
    def list_quizzes(repository: QuizRepository = Depends(repository_dep)) -> list[dict[str, object]]:
        return [_quiz_summary(quiz) for quiz in repository.list_quizzes()]

    @app.get("/quizzes/{quiz_id}")
    def get_quiz(quiz_id: str, repository: QuizRepository = Depends(repository_dep)) -> dict[str, object]:
        try:
            quiz = repository.load_quiz(quiz_id)
        except QuizNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except QuizValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        # Correct answers stay on the server; scoring happens in the player.
        payload = _quiz_summary(quiz)
        payload["questions"] = [
            {
                "question": question.question_text,
                "questionHtml": renderer.render_fragment(question.question_text),
                "options": list(question.options),
            }
            for question in quiz.questions
        ]
        return payload

    @app.post("/quizzes", status_code=201)
    def create_quiz(
        payload: QuizPayload,
        repository: QuizRepository = Depends(repository_dep),
        identity: IdentityProvider = Depends(identity_dep),
    ) -> dict[str, object]:
        questions = [
            Question(
                question_text=item.question,
                options=tuple(item.options),
                correct_option_index=item.correctAnswer,
            )
            for item in payload.questions
        ]
        try:
            quiz = repository.create_quiz(
                payload.title,
                payload.description,
                questions,
                created_by=identity.current_user().email,
            )
        except QuizValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _quiz_summary(quiz)

    @app.get("/results")
    def list_results(
        board: Scoreboard = Depends(scoreboard_dep),
        identity: IdentityProvider = Depends(identity_dep),
    ) -> dict[str, object]:
        user = identity.current_user()
        results = board.results_for_user(user.user_id)
        overview = board.overview(user.user_id)
        return {
            "overview": {
                "completedCount": overview.completed_count,
                "averageScore": overview.average_score,
                "excellentCount": overview.excellent_count,
            },
            "results": [
                {
                    "id": result.id,
                    "quizTitle": result.quiz_title,
                    "score": result.score,
                    "band": score_band(result.score).value,
                    "correctAnswers": result.correct_answers,
                    "totalQuestions": result.total_questions,
                    "completedAt": _isoformat(result.completed_at),
                }
                for result in results
            ],
        }

    return app


def start_api_server(
    quiz_repository: QuizRepository,
    scoreboard: Scoreboard,
    identity_provider: IdentityProvider,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_repository, scoreboard, identity_provider)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread
