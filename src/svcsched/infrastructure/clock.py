"""Wall clock and the suspend-until primitive."""

from __future__ import annotations

import datetime as dt
import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> dt.datetime: ...

    def sleep_until(self, instant: dt.datetime) -> None: ...


class SystemClock:
    """Local wall clock. ``sleep_until`` blocks the calling thread."""

    def now(self) -> dt.datetime:
        return dt.datetime.now()

    def sleep_until(self, instant: dt.datetime) -> None:
        # Re-check after each sleep: the wall clock may be stepped backwards.
        while True:
            delay = (instant - self.now()).total_seconds()
            if delay <= 0:
                return
            time.sleep(delay)
