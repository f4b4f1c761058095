"""Configuration and logging setup for wg-allowedips."""

from .config_parser import load_config
from .config_schema import AppConfig, LoggingConfig, ResolverConfig, validate_config
from .logging_config import init_logging

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "ResolverConfig",
    "init_logging",
    "load_config",
    "validate_config",
]
