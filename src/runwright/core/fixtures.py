"""Fixture lifecycle management.

A fixture provider is a generator function that yields exactly one value.
Each test invocation wraps a brand-new generator in a :class:`LifecycleHandle`:
``acquire()`` runs the provider up to its yield, ``release()`` resumes it so
the teardown code after the yield runs. Handles are never cached or shared,
so a value mutated by one test is never seen by another.
"""

import logging
from enum import Enum
from typing import Any, Iterable, Iterator, Optional

from runwright.core.models import FixtureProvider
from runwright.errors import FixtureError, FixtureNotFoundError

log = logging.getLogger(__name__)


class HandleState(str, Enum):
    """Phase of a fixture lifecycle instance."""

    CREATED = "created"
    ACQUIRED = "acquired"
    RELEASED = "released"


class LifecycleHandle:
    """Two-phase acquire/release wrapper around one fixture instantiation."""

    def __init__(self, provider: FixtureProvider):
        self.provider = provider
        self.state = HandleState.CREATED
        self._generator: Optional[Iterator[Any]] = None

    @property
    def name(self) -> str:
        return self.provider.name

    def acquire(self) -> Any:
        """Run the provider up to its first yield and return the yielded value.

        Raises:
            FixtureError: If the handle was already used, the provider is not a
                generator, or it finished without yielding
        """
        if self.state != HandleState.CREATED:
            raise FixtureError(f"Fixture '{self.name}' handle is already {self.state.value}")

        # Mark as used up front; a provider that blows up has nothing to release
        self.state = HandleState.RELEASED
        generator = self.provider.start()
        try:
            value = next(generator)
        except StopIteration:
            raise FixtureError(f"Fixture '{self.name}' did not yield a value.") from None
        except TypeError as e:
            if not hasattr(generator, "__next__"):
                raise FixtureError(
                    f"Fixture '{self.name}' must be a generator function that yields one value."
                ) from e
            raise

        self._generator = generator
        self.state = HandleState.ACQUIRED
        return value

    def release(self) -> None:
        """Resume the provider past its yield so that teardown code runs.

        Only the first call after a successful acquire does anything.
        Exceptions raised by teardown code propagate to the caller.
        """
        if self.state != HandleState.ACQUIRED:
            return

        self.state = HandleState.RELEASED
        generator = self._generator
        self._generator = None

        try:
            next(generator)
        except StopIteration:
            return

        log.warning("Fixture '%s' yielded more than one value; closing it", self.name)
        generator.close()


class FixtureScope:
    """Holds the handles acquired for one test invocation.

    Use as a context manager: every handle acquired inside the block is
    released on exit, whether the block finished normally or raised.
    Release failures are logged and recorded, never raised.
    """

    def __init__(self, manager: "FixtureManager", owner: str = ""):
        self.manager = manager
        self.owner = owner
        self.handles: list[LifecycleHandle] = []
        self.release_errors: list[tuple[str, Exception]] = []

    def __enter__(self) -> "FixtureScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def acquire_all(self, names: Iterable[str]) -> list[Any]:
        """Acquire fixtures in declaration order and return their values.

        Raises:
            FixtureNotFoundError: If a name has no registered provider
            FixtureError: If a provider misbehaves
        """
        values = []
        for name in names:
            handle = self.manager.instantiate(name)
            values.append(handle.acquire())
            self.handles.append(handle)
        return values

    def close(self) -> None:
        """Release every acquired handle, later acquisitions first."""
        while self.handles:
            handle = self.handles.pop()
            try:
                handle.release()
            except Exception as e:
                self.release_errors.append((handle.name, e))
                log.warning(
                    "Error during teardown of fixture '%s'%s: %s",
                    handle.name,
                    f" for {self.owner}" if self.owner else "",
                    e,
                    exc_info=e,
                )


class FixtureManager:
    """Registry of named fixture providers."""

    def __init__(self, providers: Optional[Iterable[FixtureProvider]] = None):
        self._providers: dict[str, FixtureProvider] = {}
        for provider in providers or ():
            self.register(provider)

    def __contains__(self, name: str) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    @property
    def names(self) -> list[str]:
        return sorted(self._providers)

    def register(self, provider: FixtureProvider) -> None:
        """Register a provider under its name.

        Raises:
            ValueError: If the name is blank or already registered
        """
        if not provider.name or not provider.name.strip():
            raise ValueError("Fixture name cannot be empty or whitespace")
        if provider.name in self._providers:
            raise ValueError(f"Fixture '{provider.name}' is already registered")
        self._providers[provider.name] = provider

    def instantiate(self, name: str) -> LifecycleHandle:
        """Create a fresh lifecycle handle for the named provider.

        Raises:
            FixtureNotFoundError: If no provider is registered under ``name``
        """
        provider = self._providers.get(name)
        if provider is None:
            raise FixtureNotFoundError(name)
        return LifecycleHandle(provider)

    def scope(self, owner: str = "") -> FixtureScope:
        """Open a scope that releases everything it acquires."""
        return FixtureScope(self, owner)
