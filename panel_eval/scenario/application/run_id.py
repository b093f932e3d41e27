"""RunIdGenerator — unique, time-ordered run ids for one harness process."""

import os
import threading
import time
from collections.abc import Callable
from datetime import UTC, datetime


class RunIdGenerator:
    """Issues ids of the form ``YYYYMMDDTHHMMSSffffff-<pid>-<seq>``.

    The timestamp part is taken from a nanosecond clock and forced to advance
    by at least one microsecond per id, and ``seq`` counts ids issued by this
    generator. Both are updated under a lock, so runs started concurrently
    from threads or tasks never share an id and ids sort in issue order.
    The process id keeps parallel workers (e.g. pytest-xdist) apart.
    """

    def __init__(
        self, clock: Callable[[], int] = time.time_ns, pid: int | None = None
    ) -> None:
        self._clock = clock
        self._pid = pid if pid is not None else os.getpid()
        self._lock = threading.Lock()
        self._last_micros = 0
        self._seq = 0

    def next_id(self) -> str:
        with self._lock:
            micros = max(self._clock() // 1000, self._last_micros + 1)
            self._last_micros = micros
            self._seq += 1
            seq = self._seq

        seconds, fraction = divmod(micros, 1_000_000)
        stamp = datetime.fromtimestamp(seconds, tz=UTC).replace(microsecond=fraction)
        return f"{stamp.strftime('%Y%m%dT%H%M%S%f')}-{self._pid}-{seq}"
