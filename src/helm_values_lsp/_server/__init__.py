"""Mixins for the Helm values Language Server."""

from __future__ import annotations

from .completion import CompletionMixin
from .documents import DocumentMixin

__all__ = ["CompletionMixin", "DocumentMixin"]
