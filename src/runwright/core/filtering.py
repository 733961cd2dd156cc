"""Tag-based admission of test cases."""

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Optional

from runwright.core.models import TestCase


def admit(
    tags: Iterable[str],
    include: Optional[AbstractSet[str]] = None,
    exclude: Optional[AbstractSet[str]] = None,
) -> bool:
    """Decide whether a test case with the given tags runs.

    An empty or missing ``include`` set admits everything; a tag in
    ``exclude`` rejects the case even if it also matches ``include``.
    """
    tag_set = set(tags)

    if include and tag_set.isdisjoint(include):
        return False
    if exclude and not tag_set.isdisjoint(exclude):
        return False
    return True


def parse_tag_list(value: Optional[str]) -> frozenset[str]:
    """Parse a comma-separated tag list, dropping blank entries."""
    if not value:
        return frozenset()
    return frozenset(tag.strip() for tag in value.split(",") if tag.strip())


@dataclass(frozen=True)
class TagFilter:
    """Include/exclude tag sets applied to discovered test cases."""

    include: frozenset[str] = frozenset()
    exclude: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "include", frozenset(self.include))
        object.__setattr__(self, "exclude", frozenset(self.exclude))

    def admits(self, test_case: TestCase) -> bool:
        return admit(test_case.tags, self.include, self.exclude)

    def partition(
        self, test_cases: Iterable[TestCase]
    ) -> tuple[list[TestCase], list[TestCase]]:
        """Split test cases into (admitted, rejected), preserving order."""
        admitted: list[TestCase] = []
        rejected: list[TestCase] = []
        for test_case in test_cases:
            if self.admits(test_case):
                admitted.append(test_case)
            else:
                rejected.append(test_case)
        return admitted, rejected
