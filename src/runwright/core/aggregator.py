"""Thread-safe collection of test results."""

import threading

from runwright.core.models import TestResult


class ResultAggregator:
    """Append-only result store shared by scheduler workers.

    This is the only synchronized resource of a run; every other piece of
    per-test state is owned by a single worker.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._results: list[TestResult] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def append(self, result: TestResult) -> None:
        """Record a result. Safe to call from any number of threads."""
        with self._lock:
            self._results.append(result)

    def drain(self) -> list[TestResult]:
        """Remove and return every recorded result, in no particular order."""
        with self._lock:
            results, self._results = self._results, []
        return results
