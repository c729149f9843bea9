"""State machine that runs one attempt at a quiz.

The session is either awaiting an answer for a question or completed. Two
things can move it forward: the user pressing next/finish, and the countdown
running out. Both go through the same command queue, and each command names
the question it was issued for, so only the first one per question takes
effect and a late timeout can never skip the following question.
"""

from __future__ import annotations

from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
import logging

from PySide6.QtCore import QObject, Signal

from quiz_player.constants.quiz_constants import DEFAULT_TIME_LIMIT_SECONDS
from quiz_player.core.models import AttemptResult, Question, Quiz
from quiz_player.core.services.answer_tracker import AnswerTracker
from quiz_player.core.services.countdown_timer import CountdownTimer
from quiz_player.core.services.identity import IdentityProvider
from quiz_player.core.services.quiz_repository import validate_quiz
from quiz_player.core.services.result_persister import ResultPersister
from quiz_player.core.services.score_calculator import score

logger = logging.getLogger(__name__)


class SessionStateError(RuntimeError):
    """Raised when an operation is not allowed in the session's current state."""


class AdvanceTrigger(Enum):
    USER = auto()
    TIMEOUT = auto()


@dataclass(frozen=True, slots=True)
class AwaitingAnswer:
    question_index: int


@dataclass(frozen=True, slots=True)
class Completed:
    result: AttemptResult


SessionState = AwaitingAnswer | Completed


@dataclass(frozen=True, slots=True)
class _AdvanceCommand:
    question_index: int
    trigger: AdvanceTrigger


class QuizSessionController(QObject):
    """Drives question progression, the countdown and the final result."""

    question_started = Signal(int)
    time_changed = Signal(int)
    answer_selected = Signal(int, int)
    completed = Signal(object)

    def __init__(
        self,
        quiz: Quiz,
        identity_provider: IdentityProvider,
        persister: ResultPersister,
        time_limit_seconds: int = DEFAULT_TIME_LIMIT_SECONDS,
        timer: CountdownTimer | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._quiz = validate_quiz(quiz)
        self._identity_provider = identity_provider
        self._persister = persister
        self._time_limit_seconds = time_limit_seconds
        self._tracker = AnswerTracker(self._quiz)
        self._state: SessionState = AwaitingAnswer(0)
        self._pending: deque[_AdvanceCommand] = deque()
        self._dispatching = False
        self._started = False
        self._closed = False
        self._result_write: Future | None = None

        self._timer = timer or CountdownTimer(time_limit_seconds, parent=self)
        self._timer.ticked.connect(self._handle_timer_tick)
        self._timer.expired.connect(self._handle_timer_expired)

    # --- Read-only view ---

    @property
    def quiz(self) -> Quiz:
        return self._quiz

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def question_index(self) -> int:
        if isinstance(self._state, Completed):
            return self._quiz.question_count - 1
        return self._state.question_index

    @property
    def question_count(self) -> int:
        return self._quiz.question_count

    @property
    def current_question(self) -> Question:
        return self._quiz.questions[self.question_index]

    @property
    def result(self) -> AttemptResult | None:
        if isinstance(self._state, Completed):
            return self._state.result
        return None

    @property
    def result_write(self) -> Future | None:
        """Pending or finished write of the result, once the session completed."""
        return self._result_write

    def is_completed(self) -> bool:
        return isinstance(self._state, Completed)

    def is_last_question(self) -> bool:
        return self.question_index == self._quiz.question_count - 1

    @property
    def time_limit_seconds(self) -> int:
        return self._time_limit_seconds

    def remaining_seconds(self) -> int:
        return self._timer.remaining()

    def selected_option(self, index: int | None = None) -> int | None:
        return self._tracker.get(self.question_index if index is None else index)

    def answers(self) -> list[int | None]:
        return self._tracker.answers()

    # --- Commands ---

    def start(self) -> None:
        """Start the countdown for the first question."""
        if self._closed:
            raise SessionStateError("Session has been closed.")
        if self._started:
            raise SessionStateError("Session has already started.")
        self._started = True
        logger.info(
            "Starting quiz %s (%s) with %d questions",
            self._quiz.id,
            self._quiz.title,
            self._quiz.question_count,
        )
        self._begin_question(self.question_index)

    def select_answer(self, option_index: int) -> None:
        """Record the user's choice for the current question."""
        if self._closed:
            raise SessionStateError("Session has been closed.")
        if not self._started:
            raise SessionStateError("Session has not started yet.")
        if isinstance(self._state, Completed):
            raise SessionStateError("Quiz is already completed.")
        question_index = self._state.question_index
        self._tracker.set(question_index, option_index)
        self.answer_selected.emit(question_index, option_index)

    def advance(self) -> None:
        """Move on at the user's request; requires an answer for the current question."""
        if self._closed or isinstance(self._state, Completed):
            return
        if not self._started:
            raise SessionStateError("Session has not started yet.")
        question_index = self._state.question_index
        if not self._tracker.is_answered(question_index):
            raise SessionStateError("Select an answer before moving on.")
        self._enqueue(_AdvanceCommand(question_index, AdvanceTrigger.USER))

    def close(self) -> None:
        """Stop the countdown and discard queued commands."""
        self._closed = True
        self._pending.clear()
        self._timer.cancel()

    # --- Internals ---

    def _handle_timer_tick(self, remaining: int) -> None:
        self.time_changed.emit(remaining)

    def _handle_timer_expired(self) -> None:
        if self._closed or isinstance(self._state, Completed):
            return
        if self._timer.is_running():
            # Already reset for the next question by an earlier advance.
            return
        question_index = self._state.question_index
        logger.info("Time is up for question %d", question_index + 1)
        self._enqueue(_AdvanceCommand(question_index, AdvanceTrigger.TIMEOUT))

    def _enqueue(self, command: _AdvanceCommand) -> None:
        self._pending.append(command)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._pending:
                self._apply(self._pending.popleft())
        finally:
            self._dispatching = False

    def _apply(self, command: _AdvanceCommand) -> None:
        if self._closed or isinstance(self._state, Completed):
            logger.debug("Ignoring %s advance after the session ended", command.trigger.name)
            return
        if command.question_index != self._state.question_index:
            logger.debug(
                "Ignoring stale %s advance for question %d",
                command.trigger.name,
                command.question_index + 1,
            )
            return

        self._timer.cancel()
        next_index = command.question_index + 1
        if next_index >= self._quiz.question_count:
            self._complete()
        else:
            self._state = AwaitingAnswer(next_index)
            self._begin_question(next_index)

    def _begin_question(self, question_index: int) -> None:
        logger.debug("Question %d of %d started", question_index + 1, self._quiz.question_count)
        # Emitted before reset(); a zero time limit expires inside reset().
        self.question_started.emit(question_index)
        self._timer.reset(self._time_limit_seconds)

    def _complete(self) -> None:
        self._tracker.freeze()
        summary = score(self._quiz, self._tracker)
        user = self._identity_provider.current_user()
        result = AttemptResult(
            quiz_id=self._quiz.id,
            quiz_title=self._quiz.title,
            user_id=user.user_id,
            user_email=user.email,
            correct_answers=summary.correct_count,
            total_questions=summary.total,
            score=summary.percentage,
            answers=tuple(self._tracker.answers()),
            completed_at=datetime.now(timezone.utc),
        )
        self._state = Completed(result)
        logger.info(
            "Quiz %s completed: %d/%d correct (%d%%)",
            self._quiz.id,
            summary.correct_count,
            summary.total,
            summary.percentage,
        )
        try:
            self._result_write = self._persister.persist(result)
        except Exception:
            logger.exception("Could not schedule saving the result for quiz %s", self._quiz.id)
        self.completed.emit(result)
