"""Exception taxonomy for wg-allowedips.

Brief:
  Every fatal condition is raised as a subclass of AllowedIPsError and caught
  once by the CLI entry point, which reports a single diagnostic and exits
  with status 1. ResolutionError is the only recoverable error: the pipeline
  turns it into a warning and moves on to the next entry.
"""

from __future__ import annotations

from typing import Optional


class AllowedIPsError(Exception):
    """Base class for all errors raised by wg-allowedips."""


class UsageError(AllowedIPsError):
    """Wrong number of positional arguments or an unknown option."""


class ConfigError(AllowedIPsError):
    """Tool configuration file is unreadable or fails validation."""


class FileOpenError(AllowedIPsError):
    """Brief: An input file could not be opened for reading.

    Inputs:
      - path: Path that failed to open.
      - description: Human label for the file (e.g. "Allowed file").
      - cause: Underlying OSError, when available.
    """

    def __init__(
        self, path: str, description: str = "File", cause: Optional[BaseException] = None
    ) -> None:
        self.path = path
        self.description = description
        self.cause = cause
        reason = f" ({cause.strerror})" if getattr(cause, "strerror", None) else ""
        super().__init__(f"{description} cannot be opened: {path}{reason}")


class ReadError(AllowedIPsError):
    """Brief: An I/O or decoding failure happened while consuming a file."""

    def __init__(self, path: str, description: str, cause: BaseException) -> None:
        self.path = path
        self.description = description
        self.cause = cause
        super().__init__(f"Error reading {description.lower()} {path}: {cause}")


class InvalidEntryError(AllowedIPsError):
    """Brief: An allow-list line is neither an IPv4 address nor a hostname.

    Inputs:
      - line_number: 1-based line number of the offending entry.
      - text: Trimmed text of the entry.
    """

    def __init__(self, line_number: int, text: str) -> None:
        self.line_number = line_number
        self.text = text
        super().__init__(
            f"Line {line_number}: Invalid entry (not an IPv4 or hostname): {text}"
        )


class ResolutionError(AllowedIPsError):
    """Brief: The resolver failed for one hostname (recoverable).

    Inputs:
      - hostname: Name that was being resolved.
      - cause: Short description of the underlying failure.
    """

    def __init__(self, hostname: str, cause: str) -> None:
        self.hostname = hostname
        self.cause = cause
        super().__init__(f"{hostname}: {cause}")
