from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from beartype import beartype
from pydantic import ValidationError
from yaml import MappingNode, ScalarNode
from yaml.loader import SafeLoader

from noisegate.config.models import (
    EvmConfig,
    NetworkConfig,
    NetworkDefaults,
    ProjectConfig,
    RootConfig,
    UpstreamConfig,
    UpstreamDefaults,
)
from noisegate.errors import ConfigError

_ENV_VAR = re.compile(r"\$\{([^}^{]+)\}")


class EnvVarLoader(SafeLoader):
    """YAML loader that expands ${VAR} references from the environment."""

    def construct_scalar(self, node: ScalarNode | MappingNode) -> str:
        value: str = super().construct_scalar(node)
        if isinstance(value, str):
            for match in _ENV_VAR.finditer(value):
                env_var: str = match.group(1)
                value = value.replace(f"${{{env_var}}}", os.environ.get(env_var, ""))
        return value


@beartype
def load_from_yaml(path: str | Path) -> dict[str, object]:
    """
    Load a YAML config file with environment variable interpolation.

    Raises:
        ConfigError: If the file does not exist or YAML is invalid.
    """
    config_path: Path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data: dict[str, object] = yaml.load(f, Loader=EnvVarLoader)
    except yaml.YAMLError as err:
        raise ConfigError(f"YAML parsing error: {err}") from err
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping (dict).")
    return data


@beartype
def load_config(path: str | Path) -> RootConfig:
    """Load and validate a full noisegate config file."""
    data = load_from_yaml(path)
    try:
        return RootConfig.model_validate(data)
    except ValidationError as err:
        raise ConfigError(f"Invalid configuration in {path}: {err}") from err


__all__ = [
    "ConfigError",
    "EnvVarLoader",
    "EvmConfig",
    "NetworkConfig",
    "NetworkDefaults",
    "ProjectConfig",
    "RootConfig",
    "UpstreamConfig",
    "UpstreamDefaults",
    "load_config",
    "load_from_yaml",
]
