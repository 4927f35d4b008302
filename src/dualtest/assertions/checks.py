"""Assertion primitives used inside test bodies.

Every check captures the caller's source location lazily, only when it fails,
and raises ``AssertFailure`` so the runner can record the test as failed.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from dualtest.assertions.base import (
    AnyException,
    AssertFailure,
    SourceLocation,
    TestFailure,
    fail,
    verify,
)
from dualtest.assertions.formatting import args_string, error_description, to_string

T = TypeVar("T")

ExpectedErrors = type[BaseException] | tuple[type[BaseException], ...]


def assert_eq(lhs: Any, rhs: Any, location: SourceLocation | None = None) -> None:
    if lhs != rhs:
        fail(
            f"ASSERT: '{to_string(lhs)}' and '{to_string(rhs)}' are not equal",
            location or SourceLocation.current(1),
        )


def assert_true(value: Any, location: SourceLocation | None = None) -> None:
    if not value:
        fail("ASSERT: Value is false", location or SourceLocation.current(1))


def assert_false(value: Any, location: SourceLocation | None = None) -> None:
    if value:
        fail("ASSERT: Value is true", location or SourceLocation.current(1))


def assert_nothrow(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Call ``fn(*args, **kwargs)`` and return its result.

    Any ``Exception`` escaping the call fails the assertion with the arguments
    and the error's description. Failures raised by nested assertions pass
    through unchanged.
    """
    try:
        return fn(*args, **kwargs)
    except AssertFailure:
        raise
    except Exception as exc:
        arguments = args_string(*args, **kwargs)
        description = error_description(exc)
        if description is None:
            message = (
                f"ASSERT: Unexpected unknown {type(exc).__name__} raised "
                f"with arguments '{arguments}'"
            )
        else:
            message = (
                f"ASSERT: Unexpected {type(exc).__name__} raised "
                f"with arguments '{arguments}'. error: '{description}'"
            )
        failure = TestFailure(message=message, location=SourceLocation.current(1))
        raise AssertFailure(failure) from exc


def _expected_types(exception: Any) -> tuple[type[BaseException], ...] | None:
    if exception is AnyException:
        return None
    kinds = exception if isinstance(exception, tuple) else (exception,)
    verify(
        kinds
        and all(isinstance(k, type) and issubclass(k, BaseException) for k in kinds),
        f"assert_throw expects exception classes, got {exception!r}",
    )
    return kinds


def _type_names(kinds: tuple[type[BaseException], ...]) -> str:
    return " or ".join(kind.__name__ for kind in kinds)


def assert_throw(
    fn: Callable[..., Any],
    *args: Any,
    exception: ExpectedErrors | type[AnyException] = AnyException,
    **kwargs: Any,
) -> BaseException:
    """Call ``fn(*args, **kwargs)`` and require it to raise.

    With the default ``AnyException`` any ``Exception`` passes. Otherwise the
    raised error must be an instance of ``exception`` (subclasses included).
    Returns the caught error.
    """
    expected = _expected_types(exception)
    accepted = expected if expected is not None else (Exception,)

    try:
        fn(*args, **kwargs)
    except accepted as exc:
        # a nested assertion failing is not "the callee threw" unless asked for
        if expected is None and isinstance(exc, AssertFailure):
            raise
        return exc
    except AssertFailure:
        raise
    except Exception as exc:
        arguments = args_string(*args, **kwargs)
        description = error_description(exc)
        if description is None:
            message = (
                "ASSERT: Invocation threw exception of unexpected and unknown type "
                f"'{type(exc).__name__}' (expected '{_type_names(accepted)}') "
                f"with arguments '{arguments}'"
            )
        else:
            message = (
                "ASSERT: Invocation threw exception of unexpected type "
                f"'{type(exc).__name__}' (expected '{_type_names(accepted)}') "
                f"with arguments '{arguments}'. error: '{description}'"
            )
        failure = TestFailure(message=message, location=SourceLocation.current(1))
        raise AssertFailure(failure) from exc

    fail(
        "ASSERT: Invocation did not throw an exception "
        f"with arguments '{args_string(*args, **kwargs)}'",
        SourceLocation.current(1),
    )
