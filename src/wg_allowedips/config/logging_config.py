from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

from ..errors import ConfigError

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "crit": logging.CRITICAL,
    "critical": logging.CRITICAL,
}

_TAGS = {
    logging.DEBUG: "[debug]",
    logging.INFO: "[info]",
    logging.WARNING: "[warn]",
    logging.ERROR: "[error]",
    logging.CRITICAL: "[crit]",
}

_COLORS = {
    logging.WARNING: "\033[0;33m",
    logging.ERROR: "\033[0;31m",
    logging.CRITICAL: "\033[0;31m",
}
_RESET = "\033[0m"


def level_from_name(name: Optional[str], default: int = logging.WARNING) -> int:
    """Map a config level name (debug, info, warn, ...) to a logging constant."""
    if name is None:
        return default
    return _LEVELS.get(str(name).strip().lower(), default)


class CliFormatter(logging.Formatter):
    """Formatter for terminal output: bracketed level tag and message, no timestamp."""

    def __init__(self, color: bool = False) -> None:
        super().__init__()
        self.color = color

    def format(self, record):
        """Add level_tag attribute and format without timestamp."""
        record.level_tag = _TAGS.get(record.levelno, f"[lvl{record.levelno}]")
        line = f"{record.level_tag} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        prefix = _COLORS.get(record.levelno) if self.color else None
        if prefix:
            return f"{prefix}{line}{_RESET}"
        return line


class BracketLevelFormatter(logging.Formatter):
    """Custom formatter that adds bracketed lowercase level tags and UTC timestamps."""

    def formatTime(self, record, datefmt=None):
        """Format time as UTC ISO-8601 with Z suffix."""
        return datetime.fromtimestamp(record.created, timezone.utc).strftime(
            "%Y-%m-%dT%H:%M:%SZ"
        )

    def format(self, record):
        """Add level_tag attribute and format the record."""
        record.level_tag = _TAGS.get(record.levelno, f"[lvl{record.levelno}]")
        return super().format(record)


def _use_color(setting: Any, stream: IO[str]) -> bool:
    mode = str(setting or "auto").strip().lower()
    if mode == "always":
        return True
    if mode == "never":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(callable(isatty) and isatty())


def init_logging(cfg: Optional[Dict[str, Any]], stream: Optional[IO[str]] = None) -> None:
    """
    Initialize logging configuration based on the provided config.

    Args:
        cfg: Logging configuration dictionary with optional keys:
            - level: debug, info, warn, error, crit (default: warn)
            - stderr: boolean to log to stderr (default: True)
            - file: string path to log file (optional)
            - color: auto, always or never (default: auto, i.e. only on a TTY)
        stream: Stream for the terminal handler (default: sys.stderr at call time).

    Raises:
        ConfigError: the log file or its parent directory cannot be created.

    Example config:
        {
            "level": "info",
            "stderr": True,
            "file": "./wg-allowedips.log",
            "color": "never"
        }
    """
    cfg = cfg or {}
    stream = stream if stream is not None else sys.stderr

    level = level_from_name(cfg.get("level"))

    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for h in list(root.handlers):
        root.removeHandler(h)

    if cfg.get("stderr", True):
        stderr_handler = logging.StreamHandler(stream)
        stderr_handler.setFormatter(CliFormatter(color=_use_color(cfg.get("color"), stream)))
        root.addHandler(stderr_handler)

    file_path = cfg.get("file")
    if isinstance(file_path, str) and file_path.strip():
        path = os.path.abspath(os.path.expanduser(file_path.strip()))
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Log file cannot be opened: {path} ({exc.strerror or exc})") from exc
        file_handler.setFormatter(
            BracketLevelFormatter(fmt="%(asctime)s %(level_tag)s %(name)s: %(message)s")
        )
        root.addHandler(file_handler)

    # Capture warnings to use the same logging configuration
    logging.captureWarnings(True)
