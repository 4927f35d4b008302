"""Inline checks that yield the checked value.

``Verify`` wraps an expected value so a comparison can sit inside a larger
expression::

    three = increment(2) & Verify(3)      # equality, returns increment(2)
    twelve = 12 ^ Verify(11)              # inequality, returns 12
    two = v(increment(1), 2)
    ptr = vn(lookup(key), None)

On a mismatch the same ``AssertFailure`` as ``assert_eq`` is raised, tagged
with the location of the expression.

``Verify(x) & actual`` always works. With the actual value on the left, its
own ``__and__``/``__xor__`` runs first, so types that define those operators
for arbitrary operands (sets, ``dict.keys()``, numpy arrays) must go on the
right.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from dualtest.assertions.base import SourceLocation, fail
from dualtest.assertions.formatting import to_string

T = TypeVar("T")
A = TypeVar("A")


def _check_equal(actual: A, expected: Any, depth: int) -> A:
    if actual != expected:
        fail(
            f"Lhs != rhs: '{to_string(actual)}' and '{to_string(expected)}' "
            "are not equal",
            SourceLocation.current(depth + 1),
        )
    return actual


def _check_not_equal(actual: A, expected: Any, depth: int) -> A:
    if actual == expected:
        fail(
            f"Lhs == rhs: '{to_string(actual)}' and '{to_string(expected)}' "
            "are equal",
            SourceLocation.current(depth + 1),
        )
    return actual


@dataclass(frozen=True)
class Verify(Generic[T]):
    """An expected value waiting for the actual one."""

    val: T

    def __and__(self, actual: A) -> A:
        return _check_equal(actual, self.val, 1)

    def __rand__(self, actual: A) -> A:
        return _check_equal(actual, self.val, 1)

    def __xor__(self, actual: A) -> A:
        return _check_not_equal(actual, self.val, 1)

    def __rxor__(self, actual: A) -> A:
        return _check_not_equal(actual, self.val, 1)


def v(actual: A, expected: Any) -> A:
    """Return ``actual`` if it equals ``expected``, fail otherwise."""
    return _check_equal(actual, expected, 1)


def vn(actual: A, expected: Any) -> A:
    """Return ``actual`` if it differs from ``expected``, fail otherwise."""
    return _check_not_equal(actual, expected, 1)
