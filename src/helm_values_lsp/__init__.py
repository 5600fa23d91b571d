"""
Helm values Language Server Protocol implementation.
Provides completion of chart value keys in annotated values files.
"""

from __future__ import annotations

from ._version import __version__

__all__ = ["__version__"]
