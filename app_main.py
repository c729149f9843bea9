"""Application entry point for QuizPlayer."""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from quiz_player.constants.about import DOCUMENT_STORE_PATH, SAMPLE_QUIZ_PATH
from quiz_player.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_player.core.quiz_importer import QuizImportError, load_quiz_from_file
from quiz_player.core.services.document_store import JsonFileDocumentStore
from quiz_player.core.services.identity import local_identity
from quiz_player.core.services.quiz_repository import QuizRepository, QuizValidationError
from quiz_player.core.services.result_persister import ResultPersister
from quiz_player.core.services.scoreboard import Scoreboard
from quiz_player.server.api_server import start_api_server
from quiz_player.ui.player_main_window import PlayerMainWindow
from quiz_player.utils.logging_config import configure_logging

logger = logging.getLogger("quiz_player")


def _seed_sample_quiz(repository: QuizRepository, created_by: str) -> None:
    """Import the bundled sample quiz when the store has no quizzes yet."""
    if repository.list_quizzes() or not SAMPLE_QUIZ_PATH.exists():
        return
    try:
        imported = load_quiz_from_file(SAMPLE_QUIZ_PATH)
        repository.create_quiz(imported.title, imported.description, imported.questions, created_by)
    except (QuizImportError, QuizValidationError) as exc:
        logger.warning("Could not import sample quiz: %s", exc)


def main() -> None:
    """Initialize logging, start the API server, and launch the Qt UI."""
    configure_logging()
    logger.info("Starting QuizPlayer…")

    store = JsonFileDocumentStore(DOCUMENT_STORE_PATH)
    identity = local_identity()
    quiz_repository = QuizRepository(store)
    scoreboard = Scoreboard(store)
    persister = ResultPersister(store)
    _seed_sample_quiz(quiz_repository, identity.current_user().email)

    start_api_server(quiz_repository, scoreboard, identity, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("API available at http://%s:%s/quizzes", DEFAULT_HOST, DEFAULT_PORT)

    app = QApplication(sys.argv)
    window = PlayerMainWindow(quiz_repository, scoreboard, identity, persister)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
