from __future__ import annotations

import importlib
import importlib.util
import inspect
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

import typer

app = typer.Typer(name="dualtest", help="Run tests at runtime or as import-time checks")

# Process exit statuses are a single byte; keep large failure counts non-zero.
_MAX_EXIT_CODE = 255


def _import_module(spec: str) -> ModuleType:
    if spec.endswith(".py") or "/" in spec or "\\" in spec:
        path = Path(spec).resolve()
        if not path.exists():
            raise ValueError(f"file not found: {spec}")
        module_name = path.stem
        module_spec = importlib.util.spec_from_file_location(module_name, path)
        if module_spec is None or module_spec.loader is None:
            raise ValueError(f"cannot load {spec}")
        module = importlib.util.module_from_spec(module_spec)
        sys.modules[module_name] = module
        try:
            module_spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        return module
    return importlib.import_module(spec)


def _split_target(target: str) -> tuple[str, str | None]:
    module_part, sep, attr = target.rpartition(":")
    # no colon, or a bare drive letter such as C:\tests\main.py
    if not sep or len(module_part) == 1:
        return target, None
    return module_part, attr or None


def _resolve_entry(module: ModuleType, attr: str, target: str) -> Callable[..., Any]:
    fn = getattr(module, attr, None)
    if fn is None or not callable(fn):
        raise ValueError(f"{target}: '{attr}' is not a callable in {module.__name__}")
    return fn


def _accepts_suite(fn: Callable[..., Any]) -> bool:
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False
    positional = (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.VAR_POSITIONAL,
    )
    return any(p.kind in positional for p in params)


def _failure_count(returned: Any, status: int) -> int:
    from dualtest.runner import RunResult

    if isinstance(returned, RunResult):
        return max(returned.fail_count, status)
    if isinstance(returned, int) and not isinstance(returned, bool):
        return max(returned, status)
    return status


@app.command()
def run(
    target: str = typer.Argument(
        help="Test entry point: module:function or path/to/file.py:function"
    ),
    config: str | None = typer.Option(None, help="Path to harness YAML config"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    color: bool | None = typer.Option(
        None, "--color/--no-color", help="Color PASSED/FAILED labels"
    ),
    junit: str | None = typer.Option(None, help="Write a JUnit XML report here"),
    debug_log: str | None = typer.Option(None, help="Debug log file"),
):
    """Run a test entry point and exit with its failed-test count.

    The entry point receives the run's suite if it takes an argument.
    """
    from pydantic import ValidationError

    from dualtest.assertions.base import HarnessError
    from dualtest.config import HarnessConfig, load_config
    from dualtest.console import Console
    from dualtest.reporting.junit import write_junit
    from dualtest.runner import ConstantEvaluationError
    from dualtest.suite import RuntimeSuite
    from dualtest.verbose import setup_logger

    try:
        if config is not None:
            config_path = Path(config)
            if not config_path.exists():
                typer.echo(f"Error: config file not found: {config}", err=True)
                raise typer.Exit(1)
            harness_config = load_config(config_path)
        else:
            harness_config = HarnessConfig()
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if verbose:
        harness_config.verbose = True
    if color is not None:
        harness_config.color = color
    if junit is not None:
        harness_config.junit = junit
    if debug_log is not None:
        harness_config.debug_log = debug_log

    module_spec, attr = _split_target(target)
    if attr is None:
        typer.echo(f"Error: expected module:function, got '{target}'", err=True)
        raise typer.Exit(1)

    try:
        entry = _resolve_entry(_import_module(module_spec), attr, target)
    except (ConstantEvaluationError, HarnessError, ImportError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    debug_file = Path(harness_config.debug_log)
    logger = setup_logger(debug_file, verbose=harness_config.verbose)
    logger.debug(f"Running entry point {target}")

    suite = RuntimeSuite(
        name=harness_config.suite_name,
        console=Console(color=harness_config.color),
        logger=logger,
    )
    try:
        with suite:
            returned = entry(suite) if _accepts_suite(entry) else entry()
    except (ConstantEvaluationError, HarnessError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if harness_config.junit:
        junit_path = write_junit(Path(harness_config.junit), [suite])
        typer.echo(f"JUnit report: {junit_path}")
    if not harness_config.verbose:
        typer.echo(f"Debug log: {debug_file}")

    failures = _failure_count(returned, suite.status())
    logger.debug(f"Entry point {target} finished with {failures} failure(s)")
    if failures:
        raise typer.Exit(min(failures, _MAX_EXIT_CODE))


@app.command()
def check(
    target: str = typer.Argument(
        help="Module or file whose import runs constant-mode checks, optionally :function"
    ),
):
    """Import a module so its constant-mode checks run; fail if any check fails."""
    from dualtest.assertions.base import HarnessError
    from dualtest.runner import ConstantEvaluationError

    module_spec, attr = _split_target(target)
    try:
        module = _import_module(module_spec)
        if attr is not None:
            _resolve_entry(module, attr, target)()
    except ConstantEvaluationError as e:
        typer.echo(f"Constant evaluation failed: {e}", err=True)
        raise typer.Exit(1)
    except (HarnessError, ImportError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"OK: {target}")


@app.command()
def report(
    junit_xml: str = typer.Argument(help="Path to a junit.xml written by 'run'"),
):
    """Print the suite summary recorded in a JUnit XML file."""
    from dualtest.console import Console
    from dualtest.reporting.junit import read_summary

    path = Path(junit_xml)
    if not path.exists():
        typer.echo(f"Error: junit file not found: {junit_xml}", err=True)
        raise typer.Exit(1)

    summary = read_summary(path)
    console = Console()
    console.echo()
    for name in summary.failed_names:
        console.status(False, name)
    console.echo(summary.summary_line())

    if summary.failed:
        raise typer.Exit(min(summary.failed, _MAX_EXIT_CODE))
