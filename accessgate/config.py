from __future__ import annotations

import os
from typing import Optional

import yaml
from pydantic import BaseModel

from .constants import DEFAULT_DENY_TYPE, DEFAULT_ROLES_PATH

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class EngineConfig(BaseModel):
    """Tunable engine behaviour. Policies are never part of configuration."""

    default_deny_type: str = DEFAULT_DENY_TYPE
    roles_path: str = DEFAULT_ROLES_PATH
    isolate_reporter_errors: bool = True


def load_config(path: Optional[str] = None) -> EngineConfig:
    """Load engine configuration from a YAML file.

    Args:
        path: Optional path to config file. Falls back to ACCESSGATE_CONFIG env
            variable or 'accessgate.yaml' in the current directory.
    """

    config_path = path or os.getenv("ACCESSGATE_CONFIG", "accessgate.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = EngineConfig(**data)
    else:
        config = EngineConfig()

    env_isolate = os.getenv("ACCESSGATE_ISOLATE_REPORTER_ERRORS")
    if env_isolate is not None:
        value = env_isolate.strip().lower()
        if value in _TRUTHY:
            config.isolate_reporter_errors = True
        elif value in _FALSY:
            config.isolate_reporter_errors = False
        else:
            raise ValueError(
                f"Invalid ACCESSGATE_ISOLATE_REPORTER_ERRORS value: {env_isolate}"
            )
    return config
