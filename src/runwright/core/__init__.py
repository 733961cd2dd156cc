"""Core test execution functionality."""

from runwright.core.aggregator import ResultAggregator
from runwright.core.filtering import TagFilter, admit
from runwright.core.fixtures import FixtureManager, LifecycleHandle
from runwright.core.models import FixtureProvider, RunSummary, TestCase, TestOutcome, TestResult
from runwright.core.scheduler import ExecutionScheduler, run_tests

__all__ = [
    "ExecutionScheduler",
    "FixtureManager",
    "FixtureProvider",
    "LifecycleHandle",
    "ResultAggregator",
    "RunSummary",
    "TagFilter",
    "TestCase",
    "TestOutcome",
    "TestResult",
    "admit",
    "run_tests",
]
