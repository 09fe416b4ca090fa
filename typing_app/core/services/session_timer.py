"""Repeating tick source driving live stats recomputation."""

from __future__ import annotations

from enum import Enum, auto
import time
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from typing_app.constants.typing_constants import STATS_TICK_INTERVAL_MS


class TimerState(Enum):
    IDLE = auto()
    RUNNING = auto()
    STOPPED = auto()


class SessionTimer(QObject):
    """Scheduling primitive with an ``idle -> running -> stopped`` lifecycle.

    It knows nothing about typing; each interval it emits ``ticked`` with the
    current clock reading and leaves the interpretation to its owner.
    """

    ticked = Signal(float)
    started = Signal()
    stopped = Signal()

    def __init__(
        self,
        interval_ms: int = STATS_TICK_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._clock = clock
        self._state = TimerState.IDLE
        self._started_at: float | None = None

        self._tick = QTimer(self)
        self._tick.setInterval(interval_ms)
        self._tick.timeout.connect(self.tick)

    @property
    def state(self) -> TimerState:
        return self._state

    def is_running(self) -> bool:
        return self._state is TimerState.RUNNING

    @property
    def started_at(self) -> float | None:
        return self._started_at

    def start(self) -> None:
        if self._state is TimerState.RUNNING:
            return
        self._started_at = self._clock()
        self._state = TimerState.RUNNING
        self._tick.start()
        self.started.emit()

    def stop(self) -> None:
        if self._state is not TimerState.RUNNING:
            return
        self._tick.stop()
        self._state = TimerState.STOPPED
        self.stopped.emit()

    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        return max(0.0, self._clock() - self._started_at)

    def tick(self) -> None:
        if self._state is TimerState.RUNNING:
            self.ticked.emit(self._clock())
