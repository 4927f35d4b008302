from typer.testing import CliRunner

from dualtest.cli import app

runner = CliRunner()

FAILING_ENTRY = """\
from dualtest import assert_eq, run_all


def one():
    assert_eq(1, 2)


def two():
    assert_eq(2, 2)


def three():
    assert_eq(3, 4)


def main(suite):
    run_all(one, two, three, suite=suite)
"""


def test_run_example_entry_point(examples_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["run", f"{examples_dir / 'basic.py'}:main"])
    assert result.exit_code == 0, result.output
    assert "PASSED: add" in result.output
    assert "SUMMARY: Ran 3 tests. 0 failed." in result.output
    assert (tmp_path / ".dualtest" / "debug.log").exists()


def test_run_exit_code_is_failure_count(write_module, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_module("failing_entry", FAILING_ENTRY)
    result = runner.invoke(app, ["run", f"{path}:main"])
    assert result.exit_code == 2
    assert "FAILED: one" in result.output
    assert "FAILED: three" in result.output
    assert "SUMMARY: Ran 3 tests. 2 failed." in result.output


def test_run_exit_code_is_clamped(write_module, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_module("huge_count", "def main():\n    return 300\n")
    result = runner.invoke(app, ["run", f"{path}:main"])
    assert result.exit_code == 255


def test_run_harness_error_exits_one(write_module, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_module(
        "broken_harness",
        "from dualtest import verify\n\n\ndef main():\n    verify(False, 'nope')\n",
    )
    result = runner.invoke(app, ["run", f"{path}:main"])
    assert result.exit_code == 1
    assert "VERIFY: nope" in result.output


def test_run_writes_junit_and_report_reads_it(write_module, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_module("junit_entry", FAILING_ENTRY)
    junit = tmp_path / "out" / "junit.xml"

    result = runner.invoke(app, ["run", f"{path}:main", "--junit", str(junit)])
    assert result.exit_code == 2
    assert f"JUnit report: {junit}" in result.output
    assert junit.exists()

    result = runner.invoke(app, ["report", str(junit)])
    assert result.exit_code == 2
    assert "FAILED: one" in result.output
    assert "SUMMARY: Ran 3 tests. 2 failed." in result.output


def test_run_with_config(write_module, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_module("configured_entry", FAILING_ENTRY)
    config = tmp_path / "dualtest.yaml"
    config.write_text(
        "suite_name: configured\ndebug_log: logs/debug.log\njunit: reports/junit.xml\n"
    )

    result = runner.invoke(app, ["run", f"{path}:main", "--config", str(config)])
    assert result.exit_code == 2
    assert (tmp_path / "logs" / "debug.log").exists()
    assert 'name="configured"' in (tmp_path / "reports" / "junit.xml").read_text()


def test_run_verbose_skips_debug_log_hint(examples_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["run", f"{examples_dir / 'basic.py'}:main", "-v"])
    assert result.exit_code == 0
    assert "Debug log:" not in result.output


CONSTANT_FAILURE_ON_IMPORT = """\
from dualtest import assert_eq, run_all_constant


def wrong():
    assert_eq(1, 2)


run_all_constant(wrong)


def main():
    pass
"""


def test_run_constant_failure_on_import(write_module, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_module("failing_import", CONSTANT_FAILURE_ON_IMPORT)
    result = runner.invoke(app, ["run", f"{path}:main"])
    assert result.exit_code == 1
    assert "Error: wrong: " in result.output
    assert "ASSERT: '1' and '2' are not equal" in result.output


def test_run_harness_error_on_import(write_module, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_module(
        "misused_on_import",
        "from dualtest import verify\n\nverify(False, 'bad setup')\n\n\n"
        "def main():\n    pass\n",
    )
    result = runner.invoke(app, ["run", f"{path}:main"])
    assert result.exit_code == 1
    assert "VERIFY: bad setup" in result.output


def test_run_missing_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["run", "x.py:main", "--config", "nonexistent.yaml"])
    assert result.exit_code == 1
    assert "config file not found" in result.output


def test_run_requires_function(examples_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["run", str(examples_dir / "basic.py")])
    assert result.exit_code == 1
    assert "expected module:function" in result.output


def test_run_unknown_function(examples_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["run", f"{examples_dir / 'basic.py'}:nope"])
    assert result.exit_code == 1
    assert "'nope' is not a callable" in result.output


def test_check_example_module(examples_dir):
    result = runner.invoke(app, ["check", str(examples_dir / "basic.py")])
    assert result.exit_code == 0
    assert "OK:" in result.output


def test_check_failing_constant_module(write_module):
    path = write_module(
        "constant_failure",
        "from dualtest import assert_eq, run_all_constant\n\n\n"
        "def wrong():\n    assert_eq(1, 2)\n\n\n"
        "run_all_constant(wrong)\n",
    )
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 1
    assert "Constant evaluation failed: wrong: " in result.output
    assert "ASSERT: '1' and '2' are not equal" in result.output


def test_check_calls_optional_function(write_module):
    path = write_module(
        "constant_function",
        "from dualtest import assert_true, run_all_constant\n\n\n"
        "def falsy():\n    assert_true(False)\n\n\n"
        "def checks():\n    run_all_constant(falsy)\n",
    )
    assert runner.invoke(app, ["check", str(path)]).exit_code == 0
    result = runner.invoke(app, ["check", f"{path}:checks"])
    assert result.exit_code == 1
    assert "ASSERT: Value is false" in result.output


def test_check_harness_error_on_import(write_module):
    path = write_module(
        "misused_check",
        "from dualtest import verify\n\nverify(False, 'bad setup')\n",
    )
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 1
    assert "Error: " in result.output
    assert "VERIFY: bad setup" in result.output


def test_report_missing_file():
    result = runner.invoke(app, ["report", "/tmp/nonexistent-dualtest/junit.xml"])
    assert result.exit_code == 1
