"""Error taxonomy for test execution."""


class RunwrightError(Exception):
    """Base class for all runwright errors."""

    pass


class AssertionViolation(RunwrightError, AssertionError):
    """Raised by test code when an expected value does not match."""

    pass


class FixtureError(RunwrightError):
    """Raised when a fixture provider cannot produce its value."""

    pass


class FixtureNotFoundError(FixtureError):
    """Raised when a binding references an unregistered fixture name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Fixture '{name}' not found.")


class MetadataError(RunwrightError):
    """Raised when test cases or fixtures cannot be enumerated.

    This is the only process-fatal condition: it aborts the run before any
    result is produced.
    """

    pass
