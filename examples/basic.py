"""A tour of the harness: plain tests, fixtures, inline checks and constant mode.

Run it at runtime with::

    dualtest run examples/basic.py:main --config examples/dualtest.yaml

or only import it, which runs the constant-mode checks at the bottom::

    dualtest check examples/basic.py
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from dualtest import (
    RuntimeSuite,
    Verify,
    assert_eq,
    assert_nothrow,
    assert_throw,
    run_all,
    run_all_constant,
    run_all_with_fixture,
    run_all_with_fixture_constant,
    v,
    verify,
    vn,
)


def add():
    assert_eq(1 + 1, 2)


def compare():
    assert_eq(1, 1)


def takes_a_moment():
    time.sleep(0.05)


@dataclass
class Fixture:
    num: int = 1

    def add(self):
        assert_eq(1 + self.num, 2)


def increment(a: int) -> int:
    return a + 1


def what_is_it() -> str:
    return "good"


def using_verify():
    # v(actual, expected) checks and hands back the actual value
    two = v(increment(1), 2)
    # vn() checks for inequality
    vn(two, None)

    # Verify(expected) combined with & does the same inline
    three = increment(2) & Verify(3)
    four = Verify(4) & increment(three)
    three_point_five = Verify(2.5) & (1 + 1.5)
    word = Verify("good") & what_is_it()
    # ^ is the inequality form
    twelve = 12 ^ Verify(11)

    assert_eq(four + three_point_five + twelve, 18.5)
    assert_eq(word, "good")


def raising():
    assert_throw(int, "not a number", exception=ValueError)
    assert_eq(assert_nothrow(int, "42"), 42)


# Importing this module runs these; a failing check makes the import fail.
run_all_constant(add, compare, using_verify, raising)
run_all_with_fixture_constant(Fixture, Fixture.add)


def main(suite: RuntimeSuite) -> int:
    total = 0

    total += run_all(add, takes_a_moment, using_verify).fail_count
    total += run_all_with_fixture(Fixture, Fixture.add).fail_count

    total += run_all_with_fixture(Fixture, Fixture.add, suite=suite).fail_count
    total += run_all(add, raising, suite=suite).fail_count

    verify(total == 0)
    return total


if __name__ == "__main__":
    import sys

    with RuntimeSuite() as main_suite:
        exit_code = main(main_suite)
    sys.exit(exit_code)
