"""Diagnostic records and sinks for recovered rendering problems.

The renderer never logs or prints on its own. Every problem it recovers
from becomes a ``Diagnostic`` passed to an injectable sink: any callable
accepting one diagnostic. ``LoggingSink`` forwards to the standard
``logging`` module, ``CollectingSink`` keeps them in memory.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "lexical_render"


class Severity(str, Enum):
    """How serious a recorded problem is."""

    INFO = "info"  # recovered by design, e.g. an unknown node kind
    WARNING = "warning"  # node-local failure
    ERROR = "error"  # document-fatal failure


_LOG_LEVELS = {
    Severity.INFO: logging.DEBUG,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Diagnostic:
    """One recorded problem.

    Attributes:
        code: Short machine-readable code (e.g. "invalid_node")
        message: Human-readable description
        severity: How serious the problem is
        path: Sibling ordinals from the root down to the offending node
    """

    code: str
    message: str
    severity: Severity = Severity.WARNING
    path: tuple[int, ...] = ()

    @property
    def location(self) -> str:
        """Render the path as ``root.children[0].children[2]``."""
        return "root" + "".join(f".children[{index}]" for index in self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "path": list(self.path),
        }

    def __str__(self) -> str:
        return f"{self.code} at {self.location}: {self.message}"


DiagnosticSink = Callable[[Diagnostic], None]


class CollectingSink:
    """Sink that keeps every diagnostic in a list."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)


class LoggingSink:
    """Sink that forwards diagnostics to a ``logging.Logger``.

    Unknown node kinds are logged at DEBUG, node-local failures at
    WARNING and document-fatal failures at ERROR.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.logger.log(_LOG_LEVELS[diagnostic.severity], "%s", diagnostic)


def null_sink(diagnostic: Diagnostic) -> None:
    """Sink that discards everything."""


def configure_logging(
    level: str = "WARNING",
    console: Optional[Console] = None,
) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Intended for applications such as the CLI; the library itself never
    installs handlers.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console: Console to log to (defaults to stderr)

    Returns:
        The configured package logger
    """
    if level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"Invalid log level: {level}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s"))
    logger.addHandler(handler)
    return logger
