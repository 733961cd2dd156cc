"""Assertion helpers for test bodies.

Every helper raises :class:`~runwright.errors.AssertionViolation`, which the
scheduler classifies as a failed test rather than an error.
"""

from typing import Any, Callable

from runwright.errors import AssertionViolation


def are_equal(expected: Any, actual: Any) -> None:
    """Verify that two values are equal."""
    if expected != actual:
        raise AssertionViolation(
            f"are_equal failed. Expected: <{expected!r}>. Actual: <{actual!r}>."
        )


def are_not_equal(not_expected: Any, actual: Any) -> None:
    """Verify that two values are not equal."""
    if not_expected == actual:
        raise AssertionViolation(
            f"are_not_equal failed. Value was <{actual!r}>, but it should not have been."
        )


def is_true(condition: Any) -> None:
    if not condition:
        raise AssertionViolation("is_true failed.")


def is_false(condition: Any) -> None:
    if condition:
        raise AssertionViolation("is_false failed.")


def is_none(value: Any) -> None:
    if value is not None:
        raise AssertionViolation(f"is_none failed. Value was <{value!r}>.")


def is_not_none(value: Any) -> None:
    if value is None:
        raise AssertionViolation("is_not_none failed. Value was None.")


def raises(
    exc_type: type[BaseException],
    func: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> BaseException:
    """Verify that calling ``func`` raises ``exc_type``.

    Args:
        exc_type: Exception type expected to be raised
        func: Callable to invoke
        *args: Positional arguments for ``func``
        **kwargs: Keyword arguments for ``func``

    Returns:
        The raised exception, for further inspection
    """
    try:
        func(*args, **kwargs)
    except exc_type as e:
        return e
    except Exception as e:
        raise AssertionViolation(
            f"raises failed. Expected exception of type {exc_type.__name__}, "
            f"but {type(e).__name__} was raised."
        ) from e

    raise AssertionViolation(
        f"raises failed. Expected exception of type {exc_type.__name__}, "
        "but no exception was raised."
    )
