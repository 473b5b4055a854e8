"""Rendering of template diagnostics as text or JSON."""
from __future__ import annotations

import json
from typing import Any, Final, Protocol

from makolint.constants import OutputFormat
from makolint.diagnostics import Diagnostic, DiagnosticCollection
from makolint.types import MakoLintConfig

# Printed in place of a path for templates linted from memory.
_NO_FILE: Final[str] = "<stdin>"

_SOURCE_INDENT: Final[str] = "    "


class Formatter(Protocol):
    def format(
        self,
        *,
        diagnostics: DiagnosticCollection,
        config: MakoLintConfig,
    ) -> str: ...


def _headline(diag: Diagnostic) -> str:
    where: str = str(diag.file) if diag.file is not None else _NO_FILE
    return (
        f"{where}:{diag.location.line}:{diag.location.column}: "
        f"{diag.severity.value.upper()} [{diag.rule}] {diag.message}"
    )


def _underline(diag: Diagnostic) -> str:
    """Caret marker under the offending span of the template line."""
    offset: int = max(0, diag.location.column - 1)
    span: int = max(1, diag.location.length or 1)
    return f"{_SOURCE_INDENT}{' ' * offset}{'^' * span}"


def diagnostic_to_dict(diag: Diagnostic, *, include_source: bool) -> dict[str, Any]:
    record: dict[str, Any] = {
        "file": None if diag.file is None else str(diag.file),
        "line": diag.location.line,
        "column": diag.location.column,
        "end_line": diag.location.end_line,
        "end_column": diag.location.end_column,
        "length": diag.location.length,
        "linter": diag.linter,
        "code": diag.code,
        "severity": diag.severity.value,
        "message": diag.message,
    }
    if include_source:
        record["source_line"] = diag.source_line
    return record


class TextFormatter:
    """One line per diagnostic, optionally followed by the template line and a caret."""

    def format(
        self,
        *,
        diagnostics: DiagnosticCollection,
        config: MakoLintConfig,
    ) -> str:
        out: list[str] = []
        for diag in diagnostics.sorted:
            out.append(_headline(diag))
            if config.show_source and diag.source_line is not None:
                out += [f"{_SOURCE_INDENT}{diag.source_line}", _underline(diag), ""]
        return "\n".join(out)


class JsonFormatter:
    def format(
        self,
        *,
        diagnostics: DiagnosticCollection,
        config: MakoLintConfig,
    ) -> str:
        records: list[dict[str, Any]] = [
            diagnostic_to_dict(diag, include_source=config.show_source)
            for diag in diagnostics.sorted
        ]
        return json.dumps(records, indent=2)


_FORMATTERS: Final[dict[OutputFormat, type[Formatter]]] = {
    OutputFormat.TEXT: TextFormatter,
    OutputFormat.JSON: JsonFormatter,
}


def get_formatter(*, output_format: OutputFormat) -> Formatter:
    return _FORMATTERS[output_format]()


def _counted(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def format_summary(*, diagnostics: DiagnosticCollection) -> str:
    """One-line tally of errors and warnings."""
    tally: list[str] = []
    if diagnostics.error_count:
        tally.append(_counted(diagnostics.error_count, "error"))
    if diagnostics.warning_count:
        tally.append(_counted(diagnostics.warning_count, "warning"))
    return f"Found {', '.join(tally)}." if tally else "No issues found."
