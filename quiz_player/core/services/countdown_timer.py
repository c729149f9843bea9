"""Per-question countdown clock driven by the Qt event loop."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal

from quiz_player.constants.quiz_constants import (
    DEFAULT_TIME_LIMIT_SECONDS,
    TIMER_TICK_INTERVAL_MS,
)

logger = logging.getLogger(__name__)


class CountdownTimer(QObject):
    """Counts down whole seconds and emits ``expired`` once when it hits zero.

    A single ``QTimer`` is owned per instance, so ``reset`` always replaces the
    previous countdown instead of starting a second one.
    """

    ticked = Signal(int)
    expired = Signal()

    def __init__(
        self,
        duration_seconds: int = DEFAULT_TIME_LIMIT_SECONDS,
        tick_interval_ms: int = TIMER_TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._duration_seconds = self._validate_duration(duration_seconds)
        self._remaining = self._duration_seconds
        self._running = False
        self._timer = QTimer(self)
        self._timer.setInterval(tick_interval_ms)
        self._timer.timeout.connect(self.tick)

    @property
    def duration_seconds(self) -> int:
        return self._duration_seconds

    def reset(self, duration_seconds: int | None = None) -> None:
        """Cancel any pending countdown and start again from ``duration_seconds``."""
        self.cancel()
        if duration_seconds is not None:
            self._duration_seconds = self._validate_duration(duration_seconds)
        self._remaining = self._duration_seconds
        self._running = True
        if self._remaining == 0:
            self._fire_expired()
            return
        self._timer.start()

    def cancel(self) -> None:
        """Stop the countdown without firing ``expired``."""
        self._timer.stop()
        self._running = False

    def remaining(self) -> int:
        return self._remaining

    def is_running(self) -> bool:
        return self._running

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self._running:
            return
        self._remaining = max(0, self._remaining - 1)
        self.ticked.emit(self._remaining)
        if self._remaining == 0:
            self._fire_expired()

    def _fire_expired(self) -> None:
        self._timer.stop()
        self._running = False
        logger.debug("Countdown of %ss expired", self._duration_seconds)
        self.expired.emit()

    @staticmethod
    def _validate_duration(duration_seconds: int) -> int:
        if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int):
            raise ValueError("Countdown duration must be an integer number of seconds.")
        if duration_seconds < 0:
            raise ValueError("Countdown duration must not be negative.")
        return duration_seconds
