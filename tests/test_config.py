"""Tests for config loading and validation."""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from dualtest.config import HarnessConfig, load_config


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str) -> Path:
        p = tmp_path / "dualtest.yaml"
        p.write_text(textwrap.dedent(content))
        return p

    return _write


def test_defaults():
    cfg = HarnessConfig()
    assert cfg.suite_name == "dualtest"
    assert cfg.color is False
    assert cfg.verbose is False
    assert cfg.debug_log == ".dualtest/debug.log"
    assert cfg.junit is None


def test_load_minimal_config(tmp_yaml):
    path = tmp_yaml("""\
        suite_name: smoke
        color: true
    """)
    cfg = load_config(path)
    assert cfg.suite_name == "smoke"
    assert cfg.color is True
    assert cfg.verbose is False


def test_empty_file_yields_defaults(tmp_yaml):
    cfg = load_config(tmp_yaml(""))
    assert cfg.suite_name == "dualtest"
    assert cfg.junit is None


def test_relative_paths_resolve_against_config_dir(tmp_yaml, tmp_path):
    path = tmp_yaml("""\
        debug_log: logs/debug.log
        junit: reports/junit.xml
    """)
    cfg = load_config(path)
    assert cfg.debug_log == str((tmp_path / "logs" / "debug.log").resolve())
    assert cfg.junit == str((tmp_path / "reports" / "junit.xml").resolve())


def test_absolute_paths_are_kept(tmp_yaml, tmp_path):
    target = tmp_path / "elsewhere" / "junit.xml"
    cfg = load_config(tmp_yaml(f"junit: {target}\n"))
    assert cfg.junit == str(target)


def test_env_variables_are_expanded(tmp_yaml, tmp_path, monkeypatch):
    monkeypatch.setenv("DUALTEST_RUN_DIR", str(tmp_path / "run"))
    cfg = load_config(tmp_yaml("junit: ${DUALTEST_RUN_DIR}/junit.xml\n"))
    assert cfg.junit == str(tmp_path / "run" / "junit.xml")


def test_env_default_is_used_when_unset(tmp_yaml, tmp_path, monkeypatch):
    monkeypatch.delenv("DUALTEST_RUN_DIR", raising=False)
    cfg = load_config(tmp_yaml("junit: ${DUALTEST_RUN_DIR:-out}/junit.xml\n"))
    assert cfg.junit == str((tmp_path / "out" / "junit.xml").resolve())


def test_missing_env_variable_is_rejected(tmp_yaml, monkeypatch):
    monkeypatch.delenv("DUALTEST_NOT_SET", raising=False)
    with pytest.raises(ValidationError, match="DUALTEST_NOT_SET"):
        load_config(tmp_yaml("debug_log: ${DUALTEST_NOT_SET}/debug.log\n"))


def test_unknown_keys_are_rejected(tmp_yaml):
    with pytest.raises(ValidationError):
        load_config(tmp_yaml("parallel: 4\n"))


def test_empty_suite_name_is_rejected():
    with pytest.raises(ValidationError, match="suite_name must not be empty"):
        HarnessConfig(suite_name="  ")


def test_top_level_must_be_a_mapping(tmp_yaml):
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config(tmp_yaml("- a\n- b\n"))


def test_example_config_loads(examples_dir, monkeypatch):
    monkeypatch.delenv("DUALTEST_RUN_DIR", raising=False)
    cfg = load_config(examples_dir / "dualtest.yaml")
    assert cfg.suite_name == "examples"
    assert cfg.junit == str((examples_dir / "runs" / "junit.xml").resolve())
