"""Elapsed-time collaborators driven by the engine's start/stop signals."""

import time
from typing import Callable, Optional, Protocol


class GameTimer(Protocol):
    """What the engine expects from a timer: it only ever signals."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def reset(self) -> None: ...

    @property
    def elapsed_seconds(self) -> int: ...


class NullTimer:
    """Timer that ignores every signal and always reports zero."""

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def reset(self) -> None:
        pass

    @property
    def elapsed_seconds(self) -> int:
        return 0


class Stopwatch:
    """
    Whole-second stopwatch.

    Starting an already running stopwatch is ignored, so repeated start
    signals keep the original start time.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    def start(self) -> None:
        if self._started_at is not None:
            return
        self._started_at = self._clock()

    def stop(self) -> None:
        if self.running:
            self._stopped_at = self._clock()

    def reset(self) -> None:
        self._started_at = None
        self._stopped_at = None

    @property
    def elapsed_seconds(self) -> int:
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return int(end - self._started_at)
