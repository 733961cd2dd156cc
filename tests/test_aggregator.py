"""Tests for the result aggregator."""

import threading

from runwright.core.aggregator import ResultAggregator
from runwright.core.models import TestOutcome, TestResult


class TestResultAggregator:
    """Tests for ResultAggregator."""

    def test_drain_returns_and_clears(self):
        aggregator = ResultAggregator()
        aggregator.append(TestResult("A.a", TestOutcome.PASSED, 0.1))
        aggregator.append(TestResult("A.b", TestOutcome.FAILED, 0.2, "nope"))

        assert len(aggregator) == 2
        results = aggregator.drain()

        assert {r.test_name for r in results} == {"A.a", "A.b"}
        assert len(aggregator) == 0
        assert aggregator.drain() == []

    def test_concurrent_appends_are_not_lost(self):
        aggregator = ResultAggregator()
        threads_count = 8
        per_thread = 250
        barrier = threading.Barrier(threads_count)

        def worker(index):
            barrier.wait()
            for i in range(per_thread):
                aggregator.append(TestResult(f"T{index}.t{i}", TestOutcome.PASSED, 0.0))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(threads_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        results = aggregator.drain()
        assert len(results) == threads_count * per_thread
        assert len({r.test_name for r in results}) == threads_count * per_thread
