"""Qt main window switching between the quiz list, play and result screens."""

from __future__ import annotations

from enum import Enum, auto
import logging
from pathlib import Path

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QStackedWidget,
)

from quiz_player.constants.quiz_constants import DEFAULT_TIME_LIMIT_SECONDS
from quiz_player.constants.ui_constants import (
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    WINDOW_TITLE,
)
from quiz_player.core.models import AttemptResult
from quiz_player.core.quiz_importer import QuizImportError, load_quiz_from_file
from quiz_player.core.quiz_session import QuizSessionController
from quiz_player.core.services.identity import IdentityProvider
from quiz_player.core.services.quiz_repository import (
    QuizNotFoundError,
    QuizRepository,
    QuizValidationError,
)
from quiz_player.core.services.result_persister import ResultPersister
from quiz_player.core.services.scoreboard import Scoreboard
from quiz_player.ui.components.play_panel import PlayPanel
from quiz_player.ui.components.quiz_list_panel import QuizListPanel
from quiz_player.ui.components.result_panel import ResultPanel
from quiz_player.ui.dialog_helpers import confirm_abandon_quiz, show_error, show_info

logger = logging.getLogger(__name__)


class PlayerMode(Enum):
    """Screen currently shown by the player window."""

    QUIZ_LIST = auto()
    QUIZ_PLAY = auto()
    QUIZ_RESULT = auto()


class PlayerMainWindow(QMainWindow):
    """Main Qt window orchestrating the three screens."""

    def __init__(
        self,
        quiz_repository: QuizRepository,
        scoreboard: Scoreboard,
        identity_provider: IdentityProvider,
        persister: ResultPersister,
        time_limit_seconds: int = DEFAULT_TIME_LIMIT_SECONDS,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(900, 700)

        self.quiz_repository = quiz_repository
        self.scoreboard = scoreboard
        self.identity_provider = identity_provider
        self.persister = persister
        self._time_limit_seconds = time_limit_seconds
        self._session: QuizSessionController | None = None
        self._mode = PlayerMode.QUIZ_LIST

        self._build_ui()
        self.list_panel.refresh()

    def _build_ui(self) -> None:
        self.mode_stack = QStackedWidget(self)
        self.setCentralWidget(self.mode_stack)

        self.list_panel = QuizListPanel(
            self.quiz_repository,
            self.scoreboard,
            self.identity_provider,
            on_play_quiz=self._handle_play_quiz,
            on_import_quiz=self._handle_import_quiz,
            parent=self,
        )
        self.play_panel = PlayPanel(parent=self)
        self.result_panel = ResultPanel(on_back=self._return_to_list, parent=self)

        self.mode_stack.addWidget(self.list_panel)
        self.mode_stack.addWidget(self.play_panel)
        self.mode_stack.addWidget(self.result_panel)

    def _set_mode(self, mode: PlayerMode) -> None:
        self._mode = mode
        if mode is PlayerMode.QUIZ_LIST:
            self.mode_stack.setCurrentWidget(self.list_panel)
        elif mode is PlayerMode.QUIZ_PLAY:
            self.mode_stack.setCurrentWidget(self.play_panel)
        else:
            self.mode_stack.setCurrentWidget(self.result_panel)

    def _handle_play_quiz(self, quiz_id: str) -> None:
        try:
            quiz = self.quiz_repository.load_quiz(quiz_id)
        except (QuizNotFoundError, QuizValidationError) as exc:
            show_error(self, "Cannot start quiz", str(exc))
            return

        self._close_session()
        session = QuizSessionController(
            quiz,
            self.identity_provider,
            self.persister,
            time_limit_seconds=self._time_limit_seconds,
            parent=self,
        )
        session.completed.connect(self._handle_session_completed)
        self._session = session
        self.play_panel.bind_session(session)
        self._set_mode(PlayerMode.QUIZ_PLAY)
        session.start()

    def _handle_session_completed(self, result: AttemptResult) -> None:
        if self._session is None:
            return
        self.play_panel.unbind_session()
        self.result_panel.show_result(self._session.quiz, result)
        self._set_mode(PlayerMode.QUIZ_RESULT)

    def _handle_import_quiz(self) -> None:
        file_name, _ = QFileDialog.getOpenFileName(self, IMPORT_DIALOG_TITLE, "", IMPORT_FILE_FILTER)
        if not file_name:
            return
        try:
            imported = load_quiz_from_file(Path(file_name))
            quiz = self.quiz_repository.create_quiz(
                imported.title,
                imported.description,
                imported.questions,
                created_by=self.identity_provider.current_user().email,
            )
        except (OSError, QuizImportError, QuizValidationError) as exc:
            show_error(self, "Import failed", str(exc))
            return
        show_info(self, "Quiz imported", f"Imported '{quiz.title}' with {quiz.question_count} questions.")
        self.list_panel.refresh()

    def _return_to_list(self) -> None:
        self._close_session()
        self.list_panel.refresh()
        self._set_mode(PlayerMode.QUIZ_LIST)

    def _close_session(self) -> None:
        if self._session is None:
            return
        self.play_panel.unbind_session()
        self._session.close()
        self._session.deleteLater()
        self._session = None

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        if (
            self._mode is PlayerMode.QUIZ_PLAY
            and self._session is not None
            and not self._session.is_completed()
            and not confirm_abandon_quiz(self)
        ):
            event.ignore()
            return
        self._close_session()
        self.persister.shutdown(wait=True)
        logger.info("Player window closed")
        super().closeEvent(event)
