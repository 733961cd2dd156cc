"""Example test module.

Run it with::

    runwright run examples/sample_suite.py --exclude-tags Slow
    runwright run examples/sample_suite.py --timeout 60
"""

import asyncio
import time

from runwright import assertions
from runwright.discovery import fixture, tag, test, test_class, use_fixture


class DisposableResource:
    def __init__(self):
        self.is_disposed = False

    def dispose(self):
        self.is_disposed = True


@fixture(name="SimpleFixture")
def simple_fixture():
    print("SimpleFixture: Setup")
    yield 42
    print("SimpleFixture: Teardown")


@fixture(name="DisposableFixture")
def disposable_fixture():
    resource = DisposableResource()
    try:
        yield resource
    finally:
        resource.dispose()


@fixture(name="TestList")
def test_list():
    yield [1, 2, 3]


@test_class
class FixtureTests:
    @test
    @use_fixture("SimpleFixture")
    def test_with_simple_fixture(self, value):
        assertions.are_equal(42, value)

    @test
    @use_fixture("DisposableFixture")
    def test_with_disposable_fixture(self, resource):
        assertions.is_not_none(resource)
        assertions.is_false(resource.is_disposed)

    @test
    @use_fixture("SimpleFixture")
    @use_fixture("DisposableFixture")
    def test_with_multiple_fixtures(self, value, resource):
        assertions.are_equal(42, value)
        assertions.is_not_none(resource)

    @test
    @use_fixture("TestList")
    def test_list_is_private(self, values):
        values.append(4)
        assertions.are_equal([1, 2, 3, 4], values)

    @test
    @use_fixture("TestList")
    def test_list_is_private_too(self, values):
        values.append(4)
        assertions.are_equal([1, 2, 3, 4], values)


@test_class
class TaggedTests:
    @test
    @tag("Fast")
    def test_fast(self):
        assertions.is_true(True)

    @test
    @tag("Slow")
    def test_slow(self):
        time.sleep(0.1)
        assertions.is_true(True)

    @test
    @tag("Fast")
    async def test_async(self):
        await asyncio.sleep(0.01)


@test_class
class TimeoutTests:
    @test
    def test_that_passes(self):
        assertions.is_true(True)

    @test
    @tag("Slow")
    def test_that_times_out(self):
        time.sleep(61)
