from __future__ import annotations

import contextlib
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Sequence, TypeVar

from dualtest.assertions.base import AssertFailure, TestFailure, verify
from dualtest.console import Console
from dualtest.names import resolve_names
from dualtest.suite import CaseOutcome, ConstantSuite, RuntimeSuite, Suite

F = TypeVar("F")

TestName = str
TestEntry = Callable[[], Any] | tuple[TestName, Callable[[], Any]]
FixtureEntry = Callable[[Any], Any] | tuple[TestName, Callable[[Any], Any]]


class Mode(str, Enum):
    RUNTIME = "runtime"
    CONSTANT = "constant"


class ConstantEvaluationError(Exception):
    """A check failed while running in constant mode.

    Raised out of the runner instead of being counted, so the enclosing
    evaluation (typically a module import) fails as a whole.
    """

    def __init__(self, name: TestName, failure: TestFailure) -> None:
        super().__init__(f"{name}: {failure.describe()}")
        self.name = name
        self.failure = failure


@dataclass
class RunResult:
    fail_count: int
    total: int
    failed_names: list[TestName] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.fail_count == 0


@contextlib.contextmanager
def fixture_scope(factory: Callable[[], F]) -> Iterator[F]:
    """Construct a fixture for exactly one test.

    Fixtures that are context managers are entered here and always exited
    when the test is done, whether it passed, failed or raised. An error
    escaping the test is re-raised even if the fixture's ``__exit__`` would
    suppress it.
    """
    fixture = factory()
    if not isinstance(fixture, contextlib.AbstractContextManager):
        yield fixture
        return

    fixture.__enter__()
    try:
        yield fixture
    except BaseException as exc:
        fixture.__exit__(type(exc), exc, exc.__traceback__)
        raise
    fixture.__exit__(None, None, None)


def _split_entries(
    entries: Sequence[Any], names: str | Sequence[str] | None
) -> list[tuple[TestName, Callable[..., Any]]]:
    explicit: list[TestName | None] = []
    callables: list[Callable[..., Any]] = []
    for entry in entries:
        if isinstance(entry, tuple):
            verify(
                len(entry) == 2 and callable(entry[1]),
                f"expected a (name, callable) pair, got {entry!r}",
            )
            explicit.append(entry[0])
            callables.append(entry[1])
        else:
            verify(callable(entry), f"{entry!r} is not callable")
            explicit.append(None)
            callables.append(entry)

    resolved = resolve_names(names, callables)
    return [
        (own or derived, fn) for own, derived, fn in zip(explicit, resolved, callables)
    ]


class Runner:
    """Runs tests one after another and records them on a suite.

    The same runner drives both modes. In runtime mode every test prints a
    ``Running``/``PASSED``/``FAILED`` line and failures are counted on the
    suite. In constant mode nothing is printed and the first failure raises
    ``ConstantEvaluationError``.

    Only ``AssertFailure`` is treated as a failed test. Any other exception
    escaping a test body propagates out of the runner and aborts the run.
    """

    def __init__(
        self,
        suite: Suite,
        mode: Mode = Mode.RUNTIME,
        console: Console | None = None,
        logger: logging.Logger | None = None,
    ):
        self.suite = suite
        self.mode = mode
        if console is None:
            if mode is Mode.CONSTANT:
                console = Console(quiet=True)
            else:
                console = getattr(suite, "console", None) or Console()
        self.console = console
        self.logger = logger or logging.getLogger("dualtest")

    def run_single(self, name: TestName, fn: Callable[[], Any]) -> bool:
        """Run one test body. Returns whether it passed."""
        self._start(name)
        started = time.monotonic()
        error = self._invoke(fn)
        return self._finish(name, error, time.monotonic() - started)

    def run_single_with_fixture(
        self,
        name: TestName,
        fixture_factory: Callable[[], F],
        method: Callable[[F], Any],
    ) -> bool:
        """Run one test body against a freshly constructed fixture."""
        self._start(name)
        started = time.monotonic()
        error: AssertFailure | None = None
        with fixture_scope(fixture_factory) as fixture:
            error = self._invoke(method, fixture)
        return self._finish(name, error, time.monotonic() - started)

    def run(
        self,
        tests: Iterable[TestEntry],
        names: str | Sequence[str] | None = None,
    ) -> RunResult:
        """Run tests in the order given.

        Each entry is a callable or a ``(name, callable)`` pair. ``names``
        supplies display names for all entries, either as comma-joined source
        text or as a sequence; a pair's own name takes precedence.
        """
        pairs = _split_entries(list(tests), names)
        failed_names = [name for name, fn in pairs if not self.run_single(name, fn)]
        return self._result(len(pairs), failed_names)

    def run_with_fixture(
        self,
        fixture_factory: Callable[[], F],
        methods: Iterable[FixtureEntry],
        names: str | Sequence[str] | None = None,
    ) -> RunResult:
        """Run fixture methods, each against its own fixture instance."""
        verify(callable(fixture_factory), f"{fixture_factory!r} is not callable")
        pairs = _split_entries(list(methods), names)
        failed_names = [
            name
            for name, method in pairs
            if not self.run_single_with_fixture(name, fixture_factory, method)
        ]
        return self._result(len(pairs), failed_names)

    def _start(self, name: TestName) -> None:
        self.console.echo(f"Running {name}...")
        self.logger.debug(f"Running test '{name}' ({self.mode.value} mode)")

    def _invoke(self, fn: Callable[..., Any], *args: Any) -> AssertFailure | None:
        try:
            fn(*args)
        except AssertFailure as exc:
            return exc
        return None

    def _finish(
        self, name: TestName, error: AssertFailure | None, duration: float
    ) -> bool:
        passed = error is None
        message = ""
        if error is not None:
            if self.mode is Mode.CONSTANT:
                self.logger.debug(f"Constant evaluation of '{name}' failed")
                raise ConstantEvaluationError(name, error.failure) from error
            message = error.failure.describe()
            self.console.echo(message)

        self.console.status(passed, name)
        self.suite.record(
            CaseOutcome(
                name=name,
                passed=passed,
                message=message,
                duration_seconds=round(duration, 6),
            )
        )
        self.logger.debug(
            f"Test '{name}' {'passed' if passed else 'failed'} in {duration:.3f}s"
        )
        return passed

    def _result(self, total: int, failed_names: list[TestName]) -> RunResult:
        return RunResult(
            fail_count=len(failed_names), total=total, failed_names=failed_names
        )


def run_all(
    *tests: TestEntry,
    suite: Suite | None = None,
    names: str | Sequence[str] | None = None,
    console: Console | None = None,
    logger: logging.Logger | None = None,
) -> RunResult:
    """Run tests in runtime mode.

    Without a ``suite`` a temporary one is created for this call and its
    report is printed before returning.
    """
    if suite is not None:
        return Runner(suite, console=console, logger=logger).run(tests, names=names)
    with RuntimeSuite(console=console, logger=logger) as temporary:
        return Runner(temporary, logger=logger).run(tests, names=names)


def run_all_with_fixture(
    fixture: Callable[[], Any],
    *methods: FixtureEntry,
    suite: Suite | None = None,
    names: str | Sequence[str] | None = None,
    console: Console | None = None,
    logger: logging.Logger | None = None,
) -> RunResult:
    """Run fixture methods in runtime mode, one fresh fixture per test."""
    if suite is not None:
        return Runner(suite, console=console, logger=logger).run_with_fixture(
            fixture, methods, names=names
        )
    with RuntimeSuite(console=console, logger=logger) as temporary:
        return Runner(temporary, logger=logger).run_with_fixture(
            fixture, methods, names=names
        )


def run_all_constant(
    *tests: TestEntry,
    names: str | Sequence[str] | None = None,
    logger: logging.Logger | None = None,
) -> RunResult:
    """Run tests in constant mode; the first failure raises ConstantEvaluationError."""
    runner = Runner(ConstantSuite(), mode=Mode.CONSTANT, logger=logger)
    return runner.run(tests, names=names)


def run_all_with_fixture_constant(
    fixture: Callable[[], Any],
    *methods: FixtureEntry,
    names: str | Sequence[str] | None = None,
    logger: logging.Logger | None = None,
) -> RunResult:
    runner = Runner(ConstantSuite(), mode=Mode.CONSTANT, logger=logger)
    return runner.run_with_fixture(fixture, methods, names=names)
