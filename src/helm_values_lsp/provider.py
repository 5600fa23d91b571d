"""Retrieval of chart default values through the helm CLI."""

from __future__ import annotations

import logging
import os
import subprocess
from enum import Enum
from typing import Protocol, cast

import yaml

from .constants import DEFAULT_HELM_EXECUTABLE, HELM_EXECUTABLE_ENV_VAR
from .flattener import to_value_node
from .models import ObjectNode

logger = logging.getLogger(__name__)


class FetchErrorKind(str, Enum):
    EXECUTION_FAILED = "execution_failed"
    PARSE_FAILED = "parse_failed"


class ValueFetchError(Exception):
    """Raised when a chart's values cannot be retrieved or parsed."""

    def __init__(self, kind: FetchErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class ValueTreeProvider(Protocol):
    """Source of the default values tree for a chart reference."""

    def fetch(self, chart_ref: str) -> ObjectNode:
        """Return the values tree, raising ValueFetchError on failure."""
        ...


def default_helm_executable() -> str:
    """Helm executable from the environment, falling back to ``helm`` on PATH."""
    return os.getenv(HELM_EXECUTABLE_ENV_VAR) or DEFAULT_HELM_EXECUTABLE


def parse_values(text: str) -> ObjectNode:
    """Parse ``helm show values`` output into a values tree.

    An empty document is a chart without values.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueFetchError(FetchErrorKind.PARSE_FAILED, f"Invalid values YAML: {e}") from e

    if data is None:
        return ObjectNode()
    if not isinstance(data, dict):
        raise ValueFetchError(
            FetchErrorKind.PARSE_FAILED,
            f"Expected a mapping at the root of the values, got {type(data).__name__}",
        )

    return cast(ObjectNode, to_value_node(data))


class HelmValuesProvider:
    """Runs ``helm show values <chart>`` and parses its output."""

    def __init__(self, helm_path: str | None = None, timeout: float | None = None):
        self.helm_path = helm_path or default_helm_executable()
        self.timeout = timeout

    def _command(self, chart_ref: str) -> list[str]:
        return [self.helm_path, "show", "values", chart_ref]

    def fetch(self, chart_ref: str) -> ObjectNode:
        cmd = self._command(chart_ref)
        logger.info(f"Fetching values for chart {chart_ref}")

        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, check=False, timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise ValueFetchError(
                FetchErrorKind.EXECUTION_FAILED, f"Helm executable not found: {self.helm_path}"
            ) from e
        except UnicodeDecodeError as e:
            raise ValueFetchError(
                FetchErrorKind.PARSE_FAILED, f"Helm output is not valid UTF-8: {e}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ValueFetchError(
                FetchErrorKind.EXECUTION_FAILED,
                f"Helm command timed out after {self.timeout}s: {' '.join(cmd)}",
            ) from e
        except OSError as e:
            raise ValueFetchError(
                FetchErrorKind.EXECUTION_FAILED,
                f"Cannot run helm executable {self.helm_path}: {e}",
            ) from e

        if result.returncode != 0:
            raise ValueFetchError(
                FetchErrorKind.EXECUTION_FAILED,
                f"Failed to execute helm command: {result.stderr.strip()}",
            )

        if result.stderr.strip():
            logger.warning(f"helm show values {chart_ref}: {result.stderr.strip()}")

        return parse_values(result.stdout)
