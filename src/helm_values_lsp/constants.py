"""Constants shared across helm-values-lsp."""

from __future__ import annotations

import re

# Chart annotation in a trailing or standalone comment: `# @repo/chart`
CHART_ANNOTATION_PATTERN = re.compile(r"#\s*@([\w\-./]+)")
# Key at indentation zero
TOP_LEVEL_KEY_PATTERN = re.compile(r"^(\S+):")
# Any key line, capturing the key with its surrounding whitespace
KEY_LINE_PATTERN = re.compile(r"^\s*([^:]+):")
# A key being typed, no colon yet
PARTIAL_KEY_PATTERN = re.compile(r"^\s*([^:]+)$")
LEADING_WHITESPACE_PATTERN = re.compile(r"^(\s*)")
TRAILING_TOKEN_PATTERN = re.compile(r"\S*$")

VALUES_FILE_PATTERN = re.compile(r".*values\.ya?ml$")

DEFAULT_HELM_EXECUTABLE = "helm"
HELM_EXECUTABLE_ENV_VAR = "HELM_VALUES_LSP_HELM"

DEFAULT_DOCUMENTATION = "Helm value from chart configuration."
