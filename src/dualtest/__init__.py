"""dualtest: one set of test bodies, run at runtime or as import-time checks."""

# Imported first: loading the dualtest.verify submodule binds the package
# attribute "verify", which the verify() function below must override.
from dualtest.verify import Verify, v, vn
from dualtest.assertions import (
    AnyException,
    AssertFailure,
    HarnessError,
    SourceLocation,
    TestFailure,
    assert_eq,
    assert_false,
    assert_nothrow,
    assert_throw,
    assert_true,
    fail,
    verify,
)
from dualtest.console import Console
from dualtest.runner import (
    ConstantEvaluationError,
    Mode,
    Runner,
    RunResult,
    run_all,
    run_all_constant,
    run_all_with_fixture,
    run_all_with_fixture_constant,
)
from dualtest.suite import CaseOutcome, ConstantSuite, RuntimeSuite, Suite

__all__ = [
    "AnyException",
    "AssertFailure",
    "CaseOutcome",
    "Console",
    "ConstantEvaluationError",
    "ConstantSuite",
    "HarnessError",
    "Mode",
    "RunResult",
    "Runner",
    "RuntimeSuite",
    "SourceLocation",
    "Suite",
    "TestFailure",
    "Verify",
    "assert_eq",
    "assert_false",
    "assert_nothrow",
    "assert_throw",
    "assert_true",
    "fail",
    "run_all",
    "run_all_constant",
    "run_all_with_fixture",
    "run_all_with_fixture_constant",
    "v",
    "verify",
    "vn",
]
