from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from time import monotonic
from typing import Callable


@dataclass(slots=True)
class GameClock:
    """Tracks wall time since the player started the puzzle.

    Elapsed time is reported to callers only; nothing in the core is bounded by it.
    """

    clock: Callable[[], float] | None = field(default=None, repr=False)

    _clock: Callable[[], float] = field(init=False, repr=False)
    started_at: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self._clock = self.clock or monotonic
        self.started_at = self._clock()

    def start(self) -> None:
        self.started_at = self._clock()

    def elapsed(self) -> timedelta:
        return timedelta(seconds=max(0.0, self._clock() - self.started_at))

    def elapsed_ms(self) -> int:
        return int(max(0.0, self._clock() - self.started_at) * 1000)
