"""Suites: where test outcomes are counted and reported."""

from __future__ import annotations

import contextlib
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Any, ContextManager

from dualtest.console import Console


@dataclass
class CaseOutcome:
    """Result of running a single test.

    Attributes:
        name: Display name of the test.
        passed: Whether the test body finished without a failed assertion.
        message: Failure diagnostic (location and message), empty on success.
        duration_seconds: Wall-clock time spent in the test body.
    """

    name: str
    passed: bool
    message: str = ""
    duration_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class Suite(ABC):
    """The capability set the runner needs from a suite."""

    @abstractmethod
    def status(self) -> int:
        """Number of failed tests so far; 0 means everything passed."""
        ...

    @abstractmethod
    def increment_total(self) -> None: ...

    @abstractmethod
    def increment_failed(self) -> None: ...

    @abstractmethod
    def add_failed_test(self, name: str) -> None: ...

    @abstractmethod
    def report(self) -> None:
        """Emit the final summary."""
        ...

    def transaction(self) -> ContextManager[Any]:
        return contextlib.nullcontext()

    def add_outcome(self, outcome: CaseOutcome) -> None:
        pass

    def record(self, outcome: CaseOutcome) -> None:
        """Apply the bookkeeping for one finished test as a single step."""
        with self.transaction():
            self.increment_total()
            if not outcome.passed:
                self.increment_failed()
                self.add_failed_test(outcome.name)
            self.add_outcome(outcome)


class RuntimeSuite(Suite):
    """Stateful suite used when tests run normally.

    Safe to share between threads: every mutation holds the suite lock. The
    report is emitted at most once, either by an explicit ``report()`` or on
    leaving a ``with`` block.
    """

    def __init__(
        self,
        name: str = "dualtest",
        console: Console | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.name = name
        self.console = console or Console()
        self.logger = logger or logging.getLogger("dualtest")
        self.total = 0
        self.failed = 0
        self.failed_names: list[str] = []
        self.outcomes: list[CaseOutcome] = []
        self.reported = False
        self._lock = threading.RLock()

    def transaction(self) -> ContextManager[Any]:
        return self._lock

    def status(self) -> int:
        with self._lock:
            return self.failed

    def increment_total(self) -> None:
        with self._lock:
            self.total += 1

    def increment_failed(self) -> None:
        with self._lock:
            self.failed += 1

    def add_failed_test(self, name: str) -> None:
        with self._lock:
            self.failed_names.append(name)

    def add_outcome(self, outcome: CaseOutcome) -> None:
        with self._lock:
            self.outcomes.append(outcome)

    def summary(self) -> str:
        with self._lock:
            return f"SUMMARY: Ran {self.total} tests. {self.failed} failed."

    def report(self) -> None:
        with self._lock:
            if self.reported:
                return
            self.reported = True

            self.console.echo()
            for failed_name in self.failed_names:
                self.console.status(False, failed_name)
            self.console.echo(self.summary())
            self.console.echo()
            self.logger.debug(
                f"Suite '{self.name}' reported: {self.total} run, {self.failed} failed"
            )

    def __enter__(self) -> RuntimeSuite:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.report()


class ConstantSuite(Suite):
    """Inert suite for constant-mode runs.

    Nothing is aggregated: a failure in constant mode aborts the evaluation
    instead, so there is never anything to count or report.
    """

    def status(self) -> int:
        return 0

    def increment_total(self) -> None:
        pass

    def increment_failed(self) -> None:
        pass

    def add_failed_test(self, name: str) -> None:
        pass

    def report(self) -> None:
        pass
