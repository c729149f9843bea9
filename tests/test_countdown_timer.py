import pytest
from PySide6.QtCore import QEventLoop, QTimer

from quiz_player.core.services.countdown_timer import CountdownTimer


def _record(timer):
    ticks = []
    expirations = []
    timer.ticked.connect(ticks.append)
    timer.expired.connect(lambda: expirations.append(timer.remaining()))
    return ticks, expirations


def test_reset_starts_from_full_duration():
    timer = CountdownTimer(30)
    timer.reset()
    assert timer.remaining() == 30
    assert timer.is_running()
    timer.cancel()


def test_tick_decrements_by_one_and_reports_remaining():
    timer = CountdownTimer(5)
    ticks, expirations = _record(timer)
    timer.reset()

    timer.tick()
    timer.tick()

    assert ticks == [4, 3]
    assert timer.remaining() == 3
    assert expirations == []
    timer.cancel()


def test_expires_exactly_once_at_zero():
    timer = CountdownTimer(3)
    ticks, expirations = _record(timer)
    timer.reset()

    for _ in range(6):
        timer.tick()

    assert ticks == [2, 1, 0]
    assert expirations == [0]
    assert not timer.is_running()


def test_reset_after_expiry_counts_down_again():
    timer = CountdownTimer(2)
    _, expirations = _record(timer)
    timer.reset()
    timer.tick()
    timer.tick()

    timer.reset()
    assert timer.remaining() == 2
    timer.tick()
    timer.tick()

    assert len(expirations) == 2


def test_overlapping_resets_keep_a_single_countdown():
    timer = CountdownTimer(10)
    ticks, expirations = _record(timer)
    timer.reset()
    timer.tick()
    timer.tick()

    timer.reset()
    timer.reset()
    assert timer.remaining() == 10

    for _ in range(10):
        timer.tick()
    assert ticks == [9, 8] + list(range(9, -1, -1))
    assert len(expirations) == 1


def test_reset_with_new_duration_replaces_default():
    timer = CountdownTimer(30)
    timer.reset(5)
    assert timer.remaining() == 5
    assert timer.duration_seconds == 5
    timer.cancel()


def test_cancel_prevents_expiry():
    timer = CountdownTimer(1)
    ticks, expirations = _record(timer)
    timer.reset()
    timer.cancel()

    timer.tick()

    assert ticks == []
    assert expirations == []
    assert not timer.is_running()


def test_zero_duration_expires_immediately():
    timer = CountdownTimer(0)
    _, expirations = _record(timer)
    timer.reset()
    assert expirations == [0]
    assert not timer.is_running()


@pytest.mark.parametrize("duration", [-1, 1.5, True])
def test_invalid_duration_is_rejected(duration):
    with pytest.raises(ValueError):
        CountdownTimer(duration)


def test_event_loop_drives_the_countdown():
    timer = CountdownTimer(3, tick_interval_ms=10)
    ticks, expirations = _record(timer)
    loop = QEventLoop()
    timer.expired.connect(loop.quit)
    QTimer.singleShot(3000, loop.quit)

    timer.reset()
    loop.exec()

    assert ticks == [2, 1, 0]
    assert expirations == [0]
