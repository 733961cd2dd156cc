"""Concurrent test execution with per-test timeouts.

Each admitted test case runs its whole pipeline on one worker of a bounded
thread pool:

1. Create a fresh instance of the owning class
2. Acquire fixtures in declaration order
3. Start the test body on its own thread
4. Wait for the body or the deadline, whichever comes first
5. Release every acquired fixture
6. Append the classified result to the aggregator

A timeout abandons the *wait*, not the body. Python threads cannot be killed,
so a timed-out body keeps running as a daemon thread until it returns on its
own. Abandoned bodies are logged and counted in
:attr:`ExecutionScheduler.abandoned_count`; they never delay the run or the
interpreter's exit, but any resource they still use is not reclaimed promptly.
"""

import asyncio
import inspect
import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, Iterable, Optional

from runwright.core.aggregator import ResultAggregator
from runwright.core.filtering import TagFilter
from runwright.core.fixtures import FixtureManager
from runwright.core.models import TestCase, TestOutcome, TestResult

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0


def default_parallelism() -> int:
    """Number of execution units available on this host."""
    return os.cpu_count() or 1


def describe_exception(exc: BaseException) -> str:
    """Render an unexpected exception as a result message."""
    text = str(exc)
    name = type(exc).__name__
    return f"{name}: {text}" if text else name


def classify(exc: Optional[BaseException]) -> tuple[TestOutcome, Optional[str]]:
    """Map what a finished test body raised to an outcome and message."""
    if exc is None:
        return TestOutcome.PASSED, None
    if isinstance(exc, AssertionError):
        return TestOutcome.FAILED, str(exc) or "Assertion failed."
    return TestOutcome.ERROR, describe_exception(exc)


class ExecutionScheduler:
    """Runs admitted test cases on a bounded worker pool."""

    def __init__(
        self,
        fixtures: Optional[FixtureManager] = None,
        max_parallelism: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        aggregator: Optional[ResultAggregator] = None,
    ):
        """Initialize the scheduler.

        Args:
            fixtures: Registered fixture providers (none if omitted)
            max_parallelism: Maximum concurrently running test cases
                (default: CPU count)
            timeout_seconds: Per-test deadline (default: 60 seconds)
            aggregator: Result store (a fresh one if omitted)

        Raises:
            ValueError: If parallelism is below 1 or the timeout is not positive
        """
        if max_parallelism is None:
            max_parallelism = default_parallelism()
        if timeout_seconds is None:
            timeout_seconds = DEFAULT_TIMEOUT_SECONDS

        if max_parallelism < 1:
            raise ValueError("max_parallelism must be at least 1")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self.fixtures = fixtures if fixtures is not None else FixtureManager()
        self.max_parallelism = max_parallelism
        self.timeout_seconds = float(timeout_seconds)
        self.aggregator = aggregator if aggregator is not None else ResultAggregator()

        self._abandoned_lock = threading.Lock()
        self._abandoned = 0

    @property
    def abandoned_count(self) -> int:
        """Timed-out test bodies that were left running in the background."""
        with self._abandoned_lock:
            return self._abandoned

    def run(
        self,
        test_cases: Iterable[TestCase],
        include_tags: Optional[Iterable[str]] = None,
        exclude_tags: Optional[Iterable[str]] = None,
    ) -> list[TestResult]:
        """Run every admitted test case and return their results.

        Rejected cases produce no result at all. Results come back in
        completion order, which is unspecified.
        """
        tag_filter = TagFilter(frozenset(include_tags or ()), frozenset(exclude_tags or ()))
        admitted, rejected = tag_filter.partition(test_cases)

        log.info(
            "Running %d test case(s) (%d filtered out) with parallelism %d, timeout %gs",
            len(admitted),
            len(rejected),
            self.max_parallelism,
            self.timeout_seconds,
        )
        if not admitted:
            return self.aggregator.drain()

        workers = min(self.max_parallelism, len(admitted))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="runwright-worker") as pool:
            futures = [pool.submit(self._run_case, test_case) for test_case in admitted]
            for future in as_completed(futures):
                # _run_case converts every failure into a result
                future.result()

        results = self.aggregator.drain()
        log.info("Test execution completed: %d result(s)", len(results))
        return results

    def _run_case(self, test_case: TestCase) -> None:
        """Execute one case and record its result."""
        try:
            result = self._execute(test_case)
        except Exception as e:
            log.error("Unexpected scheduler failure in %s: %s", test_case.name, e, exc_info=e)
            result = TestResult(
                test_name=test_case.name,
                outcome=TestOutcome.ERROR,
                duration=0.0,
                message=describe_exception(e),
                tags=test_case.tags,
            )

        log.debug(
            "Test completed: name=%s outcome=%s duration=%.3fs",
            result.test_name,
            result.outcome.value,
            result.duration,
        )
        self.aggregator.append(result)

    def _execute(self, test_case: TestCase) -> TestResult:
        with self.fixtures.scope(owner=test_case.name) as scope:
            try:
                instance = test_case.owner()
                body = test_case.bind(instance)
                arguments = scope.acquire_all(test_case.fixtures)
            except Exception as e:
                log.debug("Setup failed for %s: %s", test_case.name, e)
                return TestResult(
                    test_name=test_case.name,
                    outcome=TestOutcome.ERROR,
                    duration=0.0,
                    message=describe_exception(e),
                    tags=test_case.tags,
                )

            started = time.monotonic()
            outcome, message, duration = self._race(test_case, body, arguments, started)

        return TestResult(
            test_name=test_case.name,
            outcome=outcome,
            duration=duration,
            message=message,
            tags=test_case.tags,
        )

    def _race(
        self,
        test_case: TestCase,
        body: Callable[..., Any],
        arguments: list[Any],
        started: float,
    ) -> tuple[TestOutcome, Optional[str], float]:
        """Wait for the body thread or the deadline, whichever is first."""
        future: Future = Future()
        thread = threading.Thread(
            target=_invoke,
            args=(future, body, arguments),
            name=f"runwright-body-{test_case.name}",
            daemon=True,
        )
        thread.start()

        try:
            # exception() hands back what the body raised instead of re-raising
            # it, so a body raising TimeoutError is not mistaken for the deadline
            exc = future.exception(timeout=self.timeout_seconds)
        except FutureTimeoutError:
            duration = max(time.monotonic() - started, self.timeout_seconds)
            with self._abandoned_lock:
                self._abandoned += 1
            log.warning(
                "%s exceeded the %gs timeout; its body is still running in the background",
                test_case.name,
                self.timeout_seconds,
            )
            return (
                TestOutcome.TIMED_OUT,
                f"Test timed out after {self.timeout_seconds:g} seconds.",
                duration,
            )

        duration = time.monotonic() - started
        outcome, message = classify(exc)
        return outcome, message, duration


def _invoke(future: Future, body: Callable[..., Any], arguments: list[Any]) -> None:
    """Thread target running a test body and settling its future."""
    if not future.set_running_or_notify_cancel():
        return
    try:
        if inspect.iscoroutinefunction(body):
            value = asyncio.run(body(*arguments))
        else:
            value = body(*arguments)
    except BaseException as e:
        future.set_exception(e)
    else:
        future.set_result(value)


def run_tests(
    test_cases: Iterable[TestCase],
    fixtures: Optional[FixtureManager] = None,
    include_tags: Optional[Iterable[str]] = None,
    exclude_tags: Optional[Iterable[str]] = None,
    max_parallelism: Optional[int] = None,
    timeout_seconds: Optional[float] = None,
) -> list[TestResult]:
    """Run test cases with a one-off scheduler."""
    scheduler = ExecutionScheduler(
        fixtures=fixtures,
        max_parallelism=max_parallelism,
        timeout_seconds=timeout_seconds,
    )
    return scheduler.run(test_cases, include_tags, exclude_tags)
