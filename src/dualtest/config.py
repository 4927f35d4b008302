from __future__ import annotations

from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator

_PATH_FIELDS = ("debug_log", "junit")


class HarnessConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    suite_name: str = "dualtest"
    color: bool = False
    verbose: bool = False
    debug_log: str = ".dualtest/debug.log"
    junit: str | None = None

    @field_validator("suite_name")
    @classmethod
    def suite_name_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("suite_name must not be empty")
        return v

    @field_validator("debug_log", "junit")
    @classmethod
    def expand_env_variables(cls, v: str | None) -> str | None:
        """Expand ${VAR} and ${VAR:-default}; unset variables without a default are errors."""
        if v is None:
            return v
        try:
            return expandvars(v, nounset=True)
        except Exception as e:
            raise ValueError(f"cannot expand '{v}': {e}") from e


def load_config(path: Path) -> HarnessConfig:
    """Load and validate a harness config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    config = HarnessConfig(**raw)

    # Resolve relative output paths relative to config file location
    for attr in _PATH_FIELDS:
        value = getattr(config, attr)
        if value is not None and not Path(value).is_absolute():
            setattr(config, attr, str((config_dir / value).resolve()))

    return config
