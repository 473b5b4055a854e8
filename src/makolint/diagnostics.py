"""Diagnostic data model for MakoLint."""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from pathlib import Path

from makolint.constants import Severity


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Location in a template. Lines are 1-based, columns 1-based."""

    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None
    length: int | None = None

    def adjust(self, *, column: int) -> SourceLocation:
        """Return a copy shifted right by ``column``."""
        return replace(self, column=self.column + column)

    @classmethod
    def merge(
        cls,
        start: SourceLocation,
        finish: SourceLocation,
        *,
        length: int | None = None,
    ) -> SourceLocation:
        """Return a location spanning from ``start`` to ``finish``."""
        return cls(
            line=start.line,
            column=start.column,
            end_line=finish.line,
            end_column=finish.column,
            length=length,
        )


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single diagnostic (error, warning) found in a template."""

    file: Path | None
    location: SourceLocation
    linter: str
    code: str
    message: str
    severity: Severity
    source_line: str | None = None

    @property
    def rule(self) -> str:
        """Producing rule, qualified by the linter that reported it."""
        return f"{self.linter}/{self.code}"


@dataclass(slots=True)
class DiagnosticCollection:
    """Mutable collection of diagnostics with sorting and counting."""

    _diagnostics: list[Diagnostic] = field(default_factory=list)

    def add(self, *, diagnostic: Diagnostic) -> None:
        """Add a single diagnostic."""
        self._diagnostics.append(diagnostic)

    def add_all(self, *, diagnostics: list[Diagnostic]) -> None:
        """Add multiple diagnostics."""
        self._diagnostics.extend(diagnostics)

    @property
    def sorted(self) -> list[Diagnostic]:
        """Return diagnostics sorted by file, line, column."""
        return sorted(
            self._diagnostics,
            key=lambda d: (str(d.file or ""), d.location.line, d.location.column),
        )

    @property
    def has_errors(self) -> bool:
        """Return True if any diagnostic has ERROR severity."""
        return any(d.severity == Severity.ERROR for d in self._diagnostics)

    @property
    def error_count(self) -> int:
        """Count of ERROR severity diagnostics."""
        return sum(1 for d in self._diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Count of WARN severity diagnostics."""
        return sum(1 for d in self._diagnostics if d.severity == Severity.WARN)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._diagnostics)
