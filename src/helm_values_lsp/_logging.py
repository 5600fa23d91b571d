"""Colored logging configuration for helm-values-lsp."""

from __future__ import annotations

import logging
import sys
from typing import ClassVar

_PACKAGE = "helm_values_lsp"


class PlainFormatter(logging.Formatter):
    """Formatter producing JupyterLab style lines without colors.

    [LEVEL YYYY-MM-DD HH:MM:SS.mmm module] message
    """

    LEVEL_CODES: ClassVar[dict[str, str]] = {
        "DEBUG": "D",
        "INFO": "I",
        "WARNING": "W",
        "ERROR": "E",
        "CRITICAL": "C",
    }

    def _prefix(self, record: logging.LogRecord) -> str:
        level_code = self.LEVEL_CODES.get(record.levelname, record.levelname[0])

        ct = self.converter(record.created)
        timestamp = f"{ct.tm_year:04d}-{ct.tm_mon:02d}-{ct.tm_mday:02d} {ct.tm_hour:02d}:{ct.tm_min:02d}:{ct.tm_sec:02d}.{int(record.msecs):03d}"

        # Drop the package prefix for shorter lines
        module_name = record.name
        if module_name.startswith(f"{_PACKAGE}."):
            module_name = module_name[len(_PACKAGE) + 1 :]
        elif module_name == _PACKAGE:
            module_name = "HelmValuesLSP"

        return f"[{level_code} {timestamp} {module_name}]"

    def _decorate(self, record: logging.LogRecord, prefix: str) -> str:
        return prefix

    def format(self, record: logging.LogRecord) -> str:
        message = f"{self._decorate(record, self._prefix(record))} {record.getMessage()}"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


class ColoredFormatter(PlainFormatter):
    """Same layout as PlainFormatter with the prefix colored by level."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET: ClassVar[str] = "\033[0m"

    def _decorate(self, record: logging.LogRecord, prefix: str) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        return f"{color}{prefix}{self.RESET}"


def setup_colored_logging(level: int = logging.INFO) -> None:
    """Configure root logging on stderr, colored when stderr is a terminal.

    stdout stays free for the LSP stdio transport.

    Args:
        level: The logging level to use (e.g., logging.INFO, logging.DEBUG)
    """
    supports_color = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
    formatter = ColoredFormatter() if supports_color else PlainFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
