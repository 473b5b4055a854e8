"""Common types and dataclasses for MakoLint."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from makolint.constants import (
    DEFAULT_EXCLUDES,
    DEFAULT_IGNORED_CHECKS,
    DEFAULT_INCLUDE,
    OutputFormat,
)


@dataclass(frozen=True, slots=True)
class PylintOptions:
    """Options for the pylint linter."""

    enabled: bool = True
    ignored_checks: tuple[str, ...] = DEFAULT_IGNORED_CHECKS


@dataclass(frozen=True, slots=True)
class LinterConfig:
    """Configuration for all linters."""

    pylint: PylintOptions = field(default_factory=PylintOptions)


@dataclass(frozen=True, slots=True)
class MakoLintConfig:
    """Complete MakoLint configuration."""

    config_path: Path | None = None
    include: tuple[str, ...] = DEFAULT_INCLUDE
    exclude: tuple[str, ...] = DEFAULT_EXCLUDES
    output_format: OutputFormat = OutputFormat.TEXT
    show_source: bool = True
    linters: LinterConfig = field(default_factory=LinterConfig)

    def is_linter_enabled(self, name: str) -> bool:
        """Check if a linter is enabled."""
        if name == "Pylint":
            return self.linters.pylint.enabled
        return False


class ConfigError(Exception):
    """Error during configuration loading or validation."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path: Path | None = path
        super().__init__(message)
