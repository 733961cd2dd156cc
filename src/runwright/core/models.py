"""Data models for discovered test metadata and execution results."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Optional


FixtureFunction = Callable[[], Iterator[Any]]


class TestOutcome(str, Enum):
    """Terminal classification of a test case execution."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class TestCase:
    """A discovered, independently runnable test method.

    The owning class is instantiated afresh for every invocation, so no
    state is shared between cases.
    """

    __test__ = False

    owner: type
    method_name: str
    tags: tuple[str, ...] = ()
    fixtures: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but store tuples so the descriptor stays immutable
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "fixtures", tuple(self.fixtures))

    @property
    def name(self) -> str:
        """Display name in ``Class.method`` form."""
        return f"{self.owner.__name__}.{self.method_name}"

    def bind(self, instance: Any) -> Callable[..., Any]:
        """Return the test body bound to a fresh owner instance."""
        return getattr(instance, self.method_name)


@dataclass(frozen=True)
class FixtureProvider:
    """A named generator function producing one value per lifecycle."""

    name: str
    function: FixtureFunction

    def start(self) -> Iterator[Any]:
        """Start a fresh lifecycle instance."""
        return self.function()


@dataclass(frozen=True)
class TestResult:
    """Result of a single admitted test case."""

    __test__ = False

    test_name: str
    outcome: TestOutcome
    duration: float
    message: Optional[str] = None
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))
        if self.outcome == TestOutcome.PASSED and self.message is not None:
            raise ValueError("A passed result cannot carry a message")
        if self.outcome != TestOutcome.PASSED and self.message is None:
            raise ValueError(f"A {self.outcome.value} result requires a message")

    @property
    def passed(self) -> bool:
        return self.outcome == TestOutcome.PASSED

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "test_name": self.test_name,
            "outcome": self.outcome.value,
            "duration": self.duration,
            "message": self.message,
            "tags": list(self.tags),
        }


@dataclass
class RunSummary:
    """Outcome counts for a drained result list."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    timed_out: int = 0
    duration: float = 0.0

    @property
    def success(self) -> bool:
        """True when every produced result passed (vacuously for none)."""
        return self.passed == self.total

    @classmethod
    def from_results(cls, results: list[TestResult]) -> "RunSummary":
        counts = {outcome: 0 for outcome in TestOutcome}
        for result in results:
            counts[result.outcome] += 1

        return cls(
            total=len(results),
            passed=counts[TestOutcome.PASSED],
            failed=counts[TestOutcome.FAILED],
            errors=counts[TestOutcome.ERROR],
            timed_out=counts[TestOutcome.TIMED_OUT],
            duration=sum(r.duration for r in results),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "errors": self.errors,
            "timed_out": self.timed_out,
            "duration": self.duration,
        }
