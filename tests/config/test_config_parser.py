"""
Brief: Tests for wg_allowedips.config.config_parser loading and precedence.

Inputs:
  - None

Outputs:
  - None
"""

import pytest

from wg_allowedips.config.config_parser import (
    apply_env_overrides,
    load_config,
    read_config_file,
)
from wg_allowedips.errors import ConfigError


def test_read_config_file_empty_document(write_file):
    assert read_config_file(write_file("empty.yaml", "")) == {}


def test_read_config_file_missing(tmp_path):
    with pytest.raises(ConfigError) as ei:
        read_config_file(str(tmp_path / "nope.yaml"))
    assert "cannot be read" in str(ei.value)


def test_read_config_file_bad_yaml(write_file):
    with pytest.raises(ConfigError) as ei:
        read_config_file(write_file("bad.yaml", "resolver: [unclosed\n"))
    assert "Invalid YAML" in str(ei.value)


def test_read_config_file_scalar_document(write_file):
    with pytest.raises(ConfigError):
        read_config_file(write_file("scalar.yaml", "just a string\n"))


def test_apply_env_overrides_ignores_blank_values():
    cfg = apply_env_overrides(
        {"logging": {"level": "info"}},
        {"WG_ALLOWEDIPS_LOG_LEVEL": "debug", "WG_ALLOWEDIPS_DIG": "  ", "OTHER": "x"},
    )
    assert cfg == {"logging": {"level": "debug"}}


def test_apply_env_overrides_rejects_non_mapping_section():
    with pytest.raises(ConfigError):
        apply_env_overrides({"resolver": "dig"}, {"WG_ALLOWEDIPS_DIG": "kdig"})


def test_load_config_precedence_cli_over_env_over_file(write_file):
    """
    Brief: CLI overrides beat environment overrides, which beat the file.

    Inputs:
      - config file setting backend, command and level
      - environment overriding backend and command
      - CLI overriding backend only

    Outputs:
      - None: Asserts the effective values
    """
    path = write_file(
        "tool.yaml",
        "logging:\n  level: error\nresolver:\n  backend: dig\n  command: /usr/bin/dig\n",
    )
    cfg = load_config(
        path,
        environ={"WG_ALLOWEDIPS_RESOLVER": "dnspython", "WG_ALLOWEDIPS_DIG": "kdig"},
        overrides={"resolver": {"backend": "dig", "command": None}},
    )
    assert cfg.resolver.backend == "dig"
    assert cfg.resolver.command == "kdig"
    assert cfg.logging.level == "error"


def test_load_config_path_from_environment(write_file):
    path = write_file("tool.yaml", "resolver:\n  backend: dnspython\n")
    cfg = load_config(None, environ={"WG_ALLOWEDIPS_CONFIG": path})
    assert cfg.resolver.backend == "dnspython"


def test_load_config_without_file_uses_defaults():
    cfg = load_config(None, environ={})
    assert cfg.resolver.backend == "dig"
