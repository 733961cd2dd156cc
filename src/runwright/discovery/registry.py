"""Declarative registration of test classes and fixtures.

Test modules mark their contents with decorators::

    @fixture
    def numbers():
        data = [1, 2, 3]
        yield data
        data.clear()

    @test_class
    class ListTests:
        @test
        @tag("Fast")
        @use_fixture("numbers")
        def test_append(self, numbers):
            numbers.append(4)

The markers only attach metadata. A :class:`Registry` turns marked objects
into immutable :class:`TestCase` and :class:`FixtureProvider` descriptors.
"""

import inspect
from abc import ABC, abstractmethod
from types import ModuleType
from typing import Any, Callable, Optional, TypeVar

from runwright.core.fixtures import FixtureManager
from runwright.core.models import FixtureFunction, FixtureProvider, TestCase

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

TEST_MARKER = "__runwright_test__"
TEST_CLASS_MARKER = "__runwright_test_class__"
FIXTURE_MARKER = "__runwright_fixture__"
TAGS_ATTR = "__runwright_tags__"
BINDINGS_ATTR = "__runwright_fixtures__"


def _require_name(value: str, kind: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{kind} name cannot be empty or whitespace")
    return value


def _prepend(func: Callable[..., Any], attr: str, value: str) -> None:
    # Decorators apply bottom-up; prepending keeps top-to-bottom source order
    setattr(func, attr, (value,) + getattr(func, attr, ()))


def test(func: F) -> F:
    """Mark a method as a test."""
    setattr(func, TEST_MARKER, True)
    return func


test.__test__ = False  # type: ignore[attr-defined]


def test_class(cls: C) -> C:
    """Mark a class as a container of tests."""
    setattr(cls, TEST_CLASS_MARKER, True)
    return cls


test_class.__test__ = False  # type: ignore[attr-defined]


def tag(name: str) -> Callable[[F], F]:
    """Add a tag to a test method. Stackable; order follows the source."""
    _require_name(name, "Tag")

    def decorator(func: F) -> F:
        _prepend(func, TAGS_ATTR, name)
        return func

    return decorator


def use_fixture(name: str) -> Callable[[F], F]:
    """Bind a named fixture to a test method. Stackable; values are passed
    to the method in the order the decorators appear in the source."""
    _require_name(name, "Fixture")

    def decorator(func: F) -> F:
        _prepend(func, BINDINGS_ATTR, name)
        return func

    return decorator


def fixture(func: Optional[F] = None, *, name: Optional[str] = None) -> Any:
    """Mark a generator function as a fixture provider.

    Usable bare (``@fixture``) or with an explicit name
    (``@fixture(name="TestList")``); the function name is the default.
    """
    if func is not None and not callable(func):
        raise TypeError(
            f"@fixture expects a function, got {func!r}; "
            f"pass the fixture name as a keyword: @fixture(name={func!r})"
        )
    if name is not None:
        _require_name(name, "Fixture")

    def decorator(f: F) -> F:
        setattr(f, FIXTURE_MARKER, name or f.__name__)
        return f

    if func is not None:
        return decorator(func)
    return decorator


class MetadataProvider(ABC):
    """Source of discovered test cases and fixture providers."""

    @abstractmethod
    def test_cases(self) -> list[TestCase]:
        """Enumerate discovered test cases."""
        pass

    @abstractmethod
    def fixtures(self) -> list[FixtureProvider]:
        """Enumerate registered fixture providers."""
        pass

    def fixture_manager(self) -> FixtureManager:
        """Build a fixture manager over this provider's fixtures."""
        return FixtureManager(self.fixtures())


class Registry(MetadataProvider):
    """In-memory registration table of test cases and fixtures."""

    def __init__(self):
        self._test_cases: list[TestCase] = []
        self._fixtures: dict[str, FixtureProvider] = {}

    def test_cases(self) -> list[TestCase]:
        return list(self._test_cases)

    def fixtures(self) -> list[FixtureProvider]:
        return list(self._fixtures.values())

    def add_test_case(self, test_case: TestCase) -> TestCase:
        self._test_cases.append(test_case)
        return test_case

    def add_fixture(self, name: str, function: FixtureFunction) -> FixtureProvider:
        """Register a fixture provider.

        Raises:
            ValueError: If the name is blank or already registered
        """
        _require_name(name, "Fixture")
        if name in self._fixtures:
            raise ValueError(f"Fixture '{name}' is already registered")
        provider = FixtureProvider(name=name, function=function)
        self._fixtures[name] = provider
        return provider

    def register_class(self, cls: type) -> list[TestCase]:
        """Register every marked test method of ``cls`` in definition order."""
        if not inspect.isclass(cls):
            raise TypeError(f"Expected a class, got {type(cls).__name__}")

        registered = []
        for method_name, member in _class_members(cls):
            if not getattr(member, TEST_MARKER, False):
                continue
            test_case = TestCase(
                owner=cls,
                method_name=method_name,
                tags=getattr(member, TAGS_ATTR, ()),
                fixtures=getattr(member, BINDINGS_ATTR, ()),
            )
            registered.append(self.add_test_case(test_case))
        return registered

    def register_fixture(self, function: FixtureFunction) -> FixtureProvider:
        """Register a function carrying the fixture marker."""
        name = getattr(function, FIXTURE_MARKER, None) or function.__name__
        return self.add_fixture(name, function)

    @classmethod
    def from_module(cls, module: ModuleType) -> "Registry":
        """Collect a module's marked classes and its visible fixture functions.

        Test classes must be defined in the module itself; fixtures may also
        be imported from elsewhere, such as a shared fixtures module.
        """
        registry = cls()
        seen_fixtures: set[int] = set()
        for obj in list(vars(module).values()):
            if inspect.isfunction(obj) and getattr(obj, FIXTURE_MARKER, None):
                # The same function may be bound under several names
                if id(obj) not in seen_fixtures:
                    seen_fixtures.add(id(obj))
                    registry.register_fixture(obj)
            elif (
                inspect.isclass(obj)
                and getattr(obj, TEST_CLASS_MARKER, False)
                and obj.__module__ == module.__name__
            ):
                registry.register_class(obj)
        return registry


def _class_members(cls: type) -> list[tuple[str, Any]]:
    """Class attributes in definition order, base classes first."""
    members: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if isinstance(value, (staticmethod, classmethod)):
                value = value.__func__
            members[name] = value
    return list(members.items())
