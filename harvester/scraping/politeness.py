"""
Jittered politeness delays between consecutive source requests.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable


class PolitenessDelay:
    """
    Draws and sleeps uniformly jittered delays inside a fixed window.
    """

    def __init__(
        self,
        *,
        min_seconds: float,
        max_seconds: float,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        low = max(0.0, min_seconds)
        self._min_seconds = low
        self._max_seconds = max(low, max_seconds)
        self._rng = rng or random.Random()
        self._sleep = sleep

    @property
    def max_seconds(self) -> float:
        return self._max_seconds

    def jitter_seconds(self) -> float:
        return self._rng.uniform(self._min_seconds, self._max_seconds)

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            self._sleep(seconds)

    def wait(self) -> float:
        """
        Sleep one jittered delay and return how long it was.
        """

        seconds = self.jitter_seconds()
        self.sleep(seconds)
        return seconds
