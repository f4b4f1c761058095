"""Configuration loading helpers for wg-allowedips.

Brief:
  This module centralizes how the CLI builds its AppConfig:
    - reading the optional YAML config file
    - applying WG_ALLOWEDIPS_* environment overrides
    - applying CLI overrides
    - pydantic validation (via config_schema.validate_config)

Precedence:
  - CLI options override environment variables, which override the config
    file, which overrides built-in defaults.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

import yaml

from ..errors import ConfigError
from .config_schema import AppConfig, validate_config

ENV_CONFIG_PATH = "WG_ALLOWEDIPS_CONFIG"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "WG_ALLOWEDIPS_RESOLVER": ("resolver", "backend"),
    "WG_ALLOWEDIPS_DIG": ("resolver", "command"),
    "WG_ALLOWEDIPS_LOG_LEVEL": ("logging", "level"),
}


def read_config_file(path: str) -> Dict[str, Any]:
    """Brief: Read a YAML config file into a mapping.

    Inputs:
      - path: Filesystem path to the YAML document.

    Outputs:
      - dict: Parsed mapping ({} for an empty document).

    Raises:
      - ConfigError: when the file cannot be read or is not valid YAML.
    """

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Config file cannot be read: {path} ({exc.strerror})") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid configuration in {path}: top level must be a mapping"
        )
    return data


def _set_nested(cfg: Dict[str, Any], section: str, key: str, value: Any) -> None:
    current = cfg.get(section)
    if current is None:
        current = {}
    elif not isinstance(current, dict):
        raise ConfigError(f"config.{section} must be a mapping when present")
    else:
        current = dict(current)
    current[key] = value
    cfg[section] = current


def apply_env_overrides(
    cfg: Dict[str, Any], environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """Brief: Overlay WG_ALLOWEDIPS_* environment variables onto cfg.

    Inputs:
      - cfg: Mapping to update (mutated in place and returned).
      - environ: Environment mapping (defaults to os.environ).

    Outputs:
      - dict: The updated mapping.

    Example:
      >>> apply_env_overrides({}, {"WG_ALLOWEDIPS_RESOLVER": "dnspython"})
      {'resolver': {'backend': 'dnspython'}}
    """

    env = os.environ if environ is None else environ
    for var, (section, key) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value is not None and value.strip():
            _set_nested(cfg, section, key, value.strip())
    return cfg


def load_config(
    path: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Dict[str, Any]]] = None,
) -> AppConfig:
    """Brief: Build the effective AppConfig from file, environment and CLI.

    Inputs:
      - path: Optional YAML path; when None, WG_ALLOWEDIPS_CONFIG is consulted.
      - environ: Environment mapping (defaults to os.environ).
      - overrides: {section: {key: value}} from CLI options; None values are
        ignored.

    Outputs:
      - AppConfig: validated configuration.

    Raises:
      - ConfigError: unreadable file, malformed YAML, or failed validation.
    """

    env = os.environ if environ is None else environ
    config_path = path or env.get(ENV_CONFIG_PATH) or None

    cfg: Dict[str, Any] = read_config_file(config_path) if config_path else {}
    apply_env_overrides(cfg, env)
    for section, values in (overrides or {}).items():
        for key, value in values.items():
            if value is not None:
                _set_nested(cfg, section, key, value)

    return validate_config(cfg, config_path=config_path)
