"""Typed configuration models for wg-allowedips.

Brief:
  The optional YAML tool configuration is validated by the pydantic models
  below. Validation errors are rendered into a single human-readable message
  and raised as ConfigError so the CLI can report them like any other fatal
  error.

Inputs:
  - Mapping parsed from YAML (possibly empty).

Outputs:
  - AppConfig instance with defaults filled in.
"""

from __future__ import annotations

import ipaddress
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, validator

from ..errors import ConfigError
from .logging_config import _LEVELS

RESOLVER_BACKENDS = ("dig", "dnspython")
COLOR_MODES = ("auto", "always", "never")


class LoggingConfig(BaseModel):
    """Brief: Logging section of the tool configuration.

    Inputs:
      - level: debug | info | warn | warning | error | crit | critical.
      - stderr: Whether diagnostics go to standard error.
      - file: Optional path of an additional log file.
      - color: auto | always | never for the terminal severity tags.

    Outputs:
      - LoggingConfig instance.
    """

    level: str = Field(default="warn")
    stderr: bool = True
    file: Optional[str] = None
    color: str = Field(default="auto")

    class Config:
        extra = "forbid"

    @validator("level", pre=True)
    def _normalize_level(cls, v):  # type: ignore[no-untyped-def]
        s = str(v or "warn").strip().lower()
        if s not in _LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return s

    @validator("color", pre=True)
    def _normalize_color(cls, v):  # type: ignore[no-untyped-def]
        if v is True:
            return "always"
        if v is False:
            return "never"
        s = str(v or "auto").strip().lower()
        if s not in COLOR_MODES:
            raise ValueError(f"color must be one of {', '.join(COLOR_MODES)}")
        return s


class ResolverConfig(BaseModel):
    """Brief: Resolver section of the tool configuration.

    Inputs:
      - backend: "dig" runs the external dig tool, "dnspython" queries A
        records in-process.
      - command: Executable used by the dig backend.
      - nameservers: Optional nameserver addresses for the dnspython backend
        (system resolver configuration is used when empty).

    Outputs:
      - ResolverConfig instance.
    """

    backend: str = Field(default="dig")
    command: str = Field(default="dig")
    nameservers: List[str] = Field(default_factory=list)

    class Config:
        extra = "forbid"

    @validator("backend", pre=True)
    def _normalize_backend(cls, v):  # type: ignore[no-untyped-def]
        s = str(v or "dig").strip().lower()
        if s not in RESOLVER_BACKENDS:
            raise ValueError(f"backend must be one of {', '.join(RESOLVER_BACKENDS)}")
        return s

    @validator("command", pre=True)
    def _require_command(cls, v):  # type: ignore[no-untyped-def]
        s = str(v or "").strip()
        if not s:
            raise ValueError("command must be a non-empty string")
        return s

    @validator("nameservers", pre=True)
    def _validate_nameservers(cls, v):  # type: ignore[no-untyped-def]
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        out = []
        for item in v:
            s = str(item).strip()
            ipaddress.ip_address(s)
            out.append(s)
        return out


class AppConfig(BaseModel):
    """Top-level tool configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)

    class Config:
        extra = "forbid"


def model_to_dict(model: BaseModel) -> Dict[str, Any]:
    """Brief: Convert a pydantic model to a plain mapping (v1 or v2 API)."""

    for attr in ("model_dump", "dict"):
        method = getattr(model, attr, None)
        if callable(method):
            return dict(method())
    return dict(model)


def _format_errors(exc: ValidationError, *, config_path: Optional[str]) -> str:
    """Brief: Format pydantic validation errors into a human-readable string.

    Inputs:
      - exc: pydantic ValidationError.
      - config_path: Optional path to the YAML config being validated.

    Outputs:
      - String suitable for display in CLI output.
    """

    lines: List[str] = [f"Invalid configuration in {config_path or '<config dict>'}:"]
    for err in exc.errors():
        location = "/".join(str(p) for p in err.get("loc", ())) or "<root>"
        lines.append(f"- {location}: {err.get('msg')}")
    return "\n".join(lines)


def validate_config(
    cfg: Optional[Dict[str, Any]], *, config_path: Optional[str] = None
) -> AppConfig:
    """Brief: Validate a parsed configuration mapping.

    Inputs:
      - cfg: Mapping loaded from YAML (None is treated as empty).
      - config_path: Optional path used only for error messages.

    Outputs:
      - AppConfig on success.

    Raises:
      - ConfigError: when the mapping is not a dict or fails validation. The
        message lists every offending key path.
    """

    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ConfigError(
            f"Invalid configuration in {config_path or '<config dict>'}: "
            "top level must be a mapping"
        )
    try:
        return AppConfig(**cfg)
    except ValidationError as exc:
        raise ConfigError(_format_errors(exc, config_path=config_path)) from exc
