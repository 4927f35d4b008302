"""Assertion system for test bodies."""

from dualtest.assertions.base import (
    AnyException,
    AssertFailure,
    HarnessError,
    SourceLocation,
    TestFailure,
    fail,
    verify,
)
from dualtest.assertions.checks import (
    assert_eq,
    assert_false,
    assert_nothrow,
    assert_throw,
    assert_true,
)
from dualtest.assertions.formatting import args_string, to_string

__all__ = [
    "AnyException",
    "AssertFailure",
    "HarnessError",
    "SourceLocation",
    "TestFailure",
    "args_string",
    "assert_eq",
    "assert_false",
    "assert_nothrow",
    "assert_throw",
    "assert_true",
    "fail",
    "to_string",
    "verify",
]
