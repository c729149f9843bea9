"""Fire-and-forget storage of finished attempts."""

from __future__ import annotations

from concurrent.futures import Executor, Future, ThreadPoolExecutor
import logging

from quiz_player.constants.quiz_constants import RESULTS_COLLECTION
from quiz_player.core.models import AttemptResult
from quiz_player.core.services.document_store import SERVER_TIMESTAMP, DocumentStore

logger = logging.getLogger(__name__)


class ResultPersister:
    """Writes each attempt result once, off the UI thread, without retries.

    Failures are logged and swallowed: the score shown to the user is computed
    locally and does not depend on the write succeeding.
    """

    def __init__(self, store: DocumentStore, executor: Executor | None = None) -> None:
        self._store = store
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="ResultPersister"
        )

    def persist(self, result: AttemptResult) -> Future:
        """Schedule the write; the future resolves to the document id or ``None``."""
        return self._executor.submit(self._write, result)

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def _write(self, result: AttemptResult) -> str | None:
        payload = result.to_document()
        payload["completedAt"] = SERVER_TIMESTAMP
        try:
            document_id = self._store.create(RESULTS_COLLECTION, payload)
        except Exception:
            logger.exception(
                "Failed to save result for quiz %s (user %s)", result.quiz_id, result.user_id
            )
            return None
        logger.info(
            "Saved result %s for quiz %s: %d%%", document_id, result.quiz_id, result.score
        )
        return document_id
