"""Lint orchestrator for MakoLint."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from makolint.constants import SYNTAX_LINTER_NAME, Severity
from makolint.diagnostics import Diagnostic, DiagnosticCollection, SourceLocation
from makolint.formatters import Formatter, format_summary, get_formatter
from makolint.linters.base import Linter
from makolint.linters.registry import get_enabled_linters
from makolint.parser import ParseResult, SyntaxErrorInfo, parse_file, parse_source
from makolint.scanner import scan_files
from makolint.types import MakoLintConfig

_LOG: Final[logging.Logger] = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LintResult:
    diagnostics: DiagnosticCollection
    files_checked: int
    exit_code: int


def _syntax_error_to_diagnostic(*, parse_result: ParseResult) -> Diagnostic:
    err: SyntaxErrorInfo | None = parse_result.syntax_error
    if err is None:
        raise ValueError("parse_result must have a syntax_error")
    return Diagnostic(
        file=parse_result.file,
        location=SourceLocation(line=err.line, column=err.column),
        linter=SYNTAX_LINTER_NAME,
        code="syntax-error",
        message=err.message,
        severity=Severity.ERROR,
        source_line=err.source_line,
    )


def _lint_parsed(
    *,
    parse_result: ParseResult,
    linters: list[Linter],
    config: MakoLintConfig,
) -> list[Diagnostic]:
    if parse_result.syntax_error is not None:
        return [_syntax_error_to_diagnostic(parse_result=parse_result)]

    diagnostics: list[Diagnostic] = []
    for linter in linters:
        found: list[Diagnostic] = linter.check(parse_result=parse_result, config=config)
        _LOG.debug("%s: %d diagnostics from %s", parse_result.file, len(found), linter.name)
        diagnostics.extend(found)
    return diagnostics


def lint_paths(*, paths: tuple[Path, ...], config: MakoLintConfig) -> LintResult:
    started: float = time.perf_counter()
    files: list[Path] = scan_files(paths=paths, config=config)
    _LOG.info("Found %d files", len(files))

    collection: DiagnosticCollection = DiagnosticCollection()
    linters: list[Linter] = get_enabled_linters(config=config)

    for file in files:
        _LOG.debug("Checking %s", file)
        collection.add_all(diagnostics=_lint_parsed(
            parse_result=parse_file(file=file),
            linters=linters,
            config=config,
        ))

    _LOG.info("Completed in %.2fs", time.perf_counter() - started)
    exit_code: int = 1 if collection.has_errors else 0
    return LintResult(
        diagnostics=collection,
        files_checked=len(files),
        exit_code=exit_code,
    )


def lint_source(
    *,
    source: str,
    config: MakoLintConfig,
    file: Path | None = None,
) -> list[Diagnostic]:
    """Lint one in-memory template."""
    return _lint_parsed(
        parse_result=parse_source(source=source, file=file),
        linters=get_enabled_linters(config=config),
        config=config,
    )


def format_results(*, result: LintResult, config: MakoLintConfig) -> str:
    formatter: Formatter = get_formatter(output_format=config.output_format)
    output: str = formatter.format(diagnostics=result.diagnostics, config=config)

    summary: str = format_summary(diagnostics=result.diagnostics)
    suffix: str = "s" if result.files_checked != 1 else ""
    file_count: str = f"Checked {result.files_checked} file{suffix}."

    parts: list[str] = []
    if output:
        parts.append(output)
    parts.append(summary)
    parts.append(file_count)

    return "\n".join(parts)
