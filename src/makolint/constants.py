"""Constants and enums for MakoLint configuration."""
from __future__ import annotations

from enum import Enum
from typing import Final

__version__: Final[str] = "0.1.0"


class Severity(Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    WARN = "warn"


class OutputFormat(Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


LINTER_NAMES: Final[frozenset[str]] = frozenset({
    "Pylint",  # Runs pylint on the Python embedded in a template
})

SYNTAX_LINTER_NAME: Final[str] = "Syntax"

PYLINT_RCFILE_ENV: Final[str] = "MAKOLINT_PYLINT_RCFILE"

# Checks that only fire because of how the Python fragment is synthesized.
DEFAULT_IGNORED_CHECKS: Final[tuple[str, ...]] = (
    "missing-module-docstring",
    "missing-function-docstring",
    "undefined-variable",
    "pointless-statement",
    "expression-not-assigned",
    "line-too-long",
    "invalid-name",
)

TEMPLATE_SUFFIXES: Final[frozenset[str]] = frozenset({".mako", ".mak"})

DEFAULT_INCLUDE: Final[tuple[str, ...]] = ("**/*.mako", "**/*.mak")

DEFAULT_EXCLUDES: Final[tuple[str, ...]] = (
    "**/__pycache__/**",
    "**/.*",
    "**/.git/**",
    "**/.venv/**",
    "**/venv/**",
    "**/env/**",
    "**/node_modules/**",
    "build/**",
    "dist/**",
)
