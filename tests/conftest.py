"""Shared fixtures for runwright tests."""

import textwrap
import threading

import pytest

from runwright.core.fixtures import FixtureManager
from runwright.core.models import FixtureProvider


class Recorder:
    """Thread-safe event log used to observe setup and teardown."""

    def __init__(self):
        self._lock = threading.Lock()
        self.events: list[str] = []

    def record(self, event: str) -> None:
        with self._lock:
            self.events.append(event)


@pytest.fixture
def recorder():
    """Create an empty event recorder."""
    return Recorder()


@pytest.fixture
def list_fixtures(recorder):
    """Fixture manager with a 'TestList' provider yielding a fresh list."""

    def test_list():
        recorder.record("setup")
        yield [1, 2, 3]
        recorder.record("teardown")

    return FixtureManager([FixtureProvider("TestList", test_list)])


@pytest.fixture
def write_module(tmp_path):
    """Write a test module to a temporary directory and return its path."""

    def _write(name: str, source: str):
        path = tmp_path / f"{name}.py"
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write
