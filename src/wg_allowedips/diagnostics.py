"""Explicit diagnostics sink used by the pipeline.

Brief:
  Components receive a Diagnostics instance instead of writing to stderr
  themselves. Each message is recorded in memory and forwarded to a named
  logger, so the CLI gets bracket-tagged stderr output through the logging
  configuration while tests can assert on ``records`` directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Diagnostic:
    """One emitted message and its logging level."""

    level: int
    message: str


@dataclass
class Diagnostics:
    """Brief: Record-and-forward sink for warnings and errors.

    Inputs:
      - logger: Logger that receives every message (defaults to
        ``logging.getLogger("wg_allowedips")``).

    Outputs:
      - Diagnostics instance whose ``records`` list grows as messages are
        emitted, in emission order.
    """

    logger: Optional[logging.Logger] = None
    records: List[Diagnostic] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.logger is None:
            self.logger = logging.getLogger("wg_allowedips")

    def _emit(self, level: int, msg: str, *args: object) -> None:
        message = msg % args if args else msg
        self.records.append(Diagnostic(level=level, message=message))
        self.logger.log(level, "%s", message)

    def debug(self, msg: str, *args: object) -> None:
        self._emit(logging.DEBUG, msg, *args)

    def info(self, msg: str, *args: object) -> None:
        self._emit(logging.INFO, msg, *args)

    def warning(self, msg: str, *args: object) -> None:
        self._emit(logging.WARNING, msg, *args)

    def error(self, msg: str, *args: object) -> None:
        self._emit(logging.ERROR, msg, *args)

    @property
    def warnings(self) -> List[str]:
        return [r.message for r in self.records if r.level == logging.WARNING]

    @property
    def errors(self) -> List[str]:
        return [r.message for r in self.records if r.level >= logging.ERROR]
