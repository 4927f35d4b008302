from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

from dualtest.suite import RuntimeSuite


@dataclass
class JunitSummary:
    """Totals read back from a junit.xml file."""

    total: int = 0
    failed: int = 0
    failed_names: list[str] = field(default_factory=list)

    def summary_line(self) -> str:
        return f"SUMMARY: Ran {self.total} tests. {self.failed} failed."


def write_junit(path: Path, suites: Iterable[RuntimeSuite]) -> Path:
    """Write junit.xml with one <testsuite> per runtime suite, return path."""
    xml = JUnitXml()

    for runtime_suite in suites:
        suite = TestSuite(runtime_suite.name)

        # Test cases: one per recorded outcome, in run order
        for outcome in runtime_suite.outcomes:
            case = TestCase(outcome.name)
            case.classname = runtime_suite.name
            case.time = outcome.duration_seconds
            if not outcome.passed:
                case.result = Failure(outcome.message)
            suite.add_testcase(case)

        # Set time after add_testcase (add_testcase resets it via update_statistics)
        suite.time = round(sum(o.duration_seconds for o in runtime_suite.outcomes), 6)

        # Use append (not +=) to preserve time
        xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path


def read_summary(path: Path) -> JunitSummary:
    """Count tests and failures in a junit.xml file.

    Errors count as failures; the harness itself never writes them, but other
    tools producing the file may.
    """
    xml = JUnitXml.fromfile(str(path))
    suites = [xml] if isinstance(xml, TestSuite) else list(xml)

    summary = JunitSummary()
    for suite in suites:
        for case in suite:
            summary.total += 1
            if any(isinstance(r, (Failure, Error)) for r in case.result):
                summary.failed += 1
                summary.failed_names.append(case.name)
    return summary
