"""Base data structures for the assertion system."""

from __future__ import annotations

import inspect
import sys
from dataclasses import dataclass
from typing import NoReturn


@dataclass(frozen=True)
class SourceLocation:
    """Where an assertion was written.

    Attributes:
        file: Path of the source file, as the interpreter reports it.
        line: 1-based line number.
        column: 1-based column of the expression, or 0 when the interpreter
            has no position information for it.
        function: Qualified name of the enclosing function ("<module>" at
            module level).
    """

    file: str
    line: int
    column: int
    function: str

    @classmethod
    def current(cls, depth: int = 0) -> SourceLocation:
        """Capture the location ``depth`` frames above the caller.

        ``current()`` is the caller itself, ``current(1)`` is whoever called
        the caller, and so on.
        """
        frame = sys._getframe(depth + 1)
        try:
            info = inspect.getframeinfo(frame, context=0)
            col_offset = info.positions.col_offset if info.positions else None
            return cls(
                file=info.filename,
                line=info.lineno,
                column=col_offset + 1 if col_offset is not None else 0,
                function=frame.f_code.co_qualname,
            )
        finally:
            del frame

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column} in {self.function}()"


@dataclass(frozen=True)
class TestFailure:
    """A single failed assertion: what went wrong and where."""

    __test__ = False

    message: str
    location: SourceLocation

    def describe(self) -> str:
        return f"{self.location}: {self.message}"


class AssertFailure(AssertionError):
    """Raised by a failed assertion. Only the runner is expected to catch it."""

    def __init__(self, failure: TestFailure) -> None:
        super().__init__(failure.describe())
        self.failure = failure


class HarnessError(RuntimeError):
    """Raised when the harness itself is misused. Never recorded as a test failure."""


class AnyException:
    """Marker for ``assert_throw``: accept any raised error."""


def fail(message: str, location: SourceLocation | None = None) -> NoReturn:
    """Fail the current test with ``message``."""
    if location is None:
        location = SourceLocation.current(1)
    raise AssertFailure(TestFailure(message=message, location=location))


def verify(condition: object, message: str = "") -> None:
    """Check a harness precondition.

    Unlike the assertions this bypasses suite bookkeeping entirely: a false
    condition raises ``HarnessError``, which aborts the run.
    """
    if not condition:
        location = SourceLocation.current(1)
        detail = message or "Verification failed"
        raise HarnessError(f"{location}: VERIFY: {detail}")
