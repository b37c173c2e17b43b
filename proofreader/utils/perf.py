import logging
import threading
import time
from typing import Dict, Protocol

log = logging.getLogger("perf")


class MeasureSink(Protocol):
    def start_measure(self, name: str) -> None: ...

    def end_measure(self, name: str) -> None: ...


class NullMonitor:
    def start_measure(self, name: str) -> None:
        pass

    def end_measure(self, name: str) -> None:
        pass


class PerformanceMonitor:
    """
    Logs the wall time between start_measure(name) and end_measure(name).
    Open measures are tracked per thread, so concurrent analyses don't clash.
    """

    def __init__(self, level: int = logging.INFO):
        self.level = level
        self._local = threading.local()
        self._lock = threading.Lock()
        self.totals: Dict[str, float] = {}
        self.counts: Dict[str, int] = {}

    def _open(self) -> Dict[str, float]:
        if not hasattr(self._local, "open"):
            self._local.open = {}
        return self._local.open

    def start_measure(self, name: str) -> None:
        self._open()[name] = time.perf_counter()

    def end_measure(self, name: str) -> None:
        started = self._open().pop(name, None)
        if started is None:
            log.debug("end_measure(%s) without start_measure", name)
            return
        elapsed = time.perf_counter() - started
        with self._lock:
            self.totals[name] = self.totals.get(name, 0.0) + elapsed
            self.counts[name] = self.counts.get(name, 0) + 1
        log.log(self.level, "%s took %.1f ms", name, elapsed * 1000)
