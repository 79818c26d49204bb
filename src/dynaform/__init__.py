"""
dynaform - metadata-driven dynamic forms with conditional visibility.

Builds an ordered section/field schema from flat metadata records and keeps
each section's and field's visibility in sync with the values being edited.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import ConfigError, DynaformError, RecordsError, ReviewSessionError
from .core.schema_builder import build_schema
from .runtime.controller import FormController


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("dynaform")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "build_schema",
    "FormController",
    "DynaformError",
    "ConfigError",
    "RecordsError",
    "ReviewSessionError",
]
