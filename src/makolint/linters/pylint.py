"""Runs pylint on Python code extracted from Mako templates."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Protocol

from makolint.analyzer import RawOffense, run_pylint
from makolint.constants import Severity
from makolint.diagnostics import Diagnostic, SourceLocation
from makolint.extractor import ExtractedSource, PythonExtractor
from makolint.parser import ParseResult
from makolint.sourcemap import SourceMap
from makolint.translate import filter_offenses, location_for_offense, normalize_message
from makolint.types import MakoLintConfig

_LOG: Final[logging.Logger] = logging.getLogger(__name__)

_PLACEHOLDER_FILENAME: Final[str] = "python_script.py"

_ERROR_CATEGORIES: Final[frozenset[str]] = frozenset({"error", "fatal"})


class Invoker(Protocol):
    def __call__(self, *, source: str, filename: str) -> list[RawOffense]: ...


def synthetic_filename(*, file: Path | None) -> str:
    """Name pylint sees for the extracted source of ``file``."""
    if file is None:
        return _PLACEHOLDER_FILENAME
    return f"{file}.py"


class PylintLinter:
    """
    Bridge between a template and pylint.

    Extracts the template's Python, runs pylint on it unless it is blank,
    drops ignored checks and maps every remaining offense back onto the
    template.
    """

    def __init__(
        self,
        *,
        invoker: Invoker = run_pylint,
        extractor: PythonExtractor | None = None,
    ) -> None:
        self._invoker: Invoker = invoker
        self._extractor: PythonExtractor = extractor or PythonExtractor()

    @property
    def name(self) -> str:
        return "Pylint"

    def check(
        self,
        *,
        parse_result: ParseResult,
        config: MakoLintConfig,
    ) -> list[Diagnostic]:
        extracted: ExtractedSource = self._extractor.extract(parse_result=parse_result)
        if not extracted.source.strip():
            _LOG.debug("No Python in %s, skipping pylint", parse_result.file)
            return []

        offenses: list[RawOffense] = self._invoker(
            source=extracted.source,
            filename=synthetic_filename(file=parse_result.file),
        )
        kept: list[RawOffense] = filter_offenses(
            offenses=offenses,
            ignored=config.linters.pylint.ignored_checks,
        )
        _LOG.debug(
            "pylint reported %d offenses for %s, %d ignored",
            len(offenses), parse_result.file, len(offenses) - len(kept),
        )

        return [
            self._to_diagnostic(
                offense=offense,
                source_map=extracted.source_map,
                parse_result=parse_result,
            )
            for offense in kept
        ]

    def _to_diagnostic(
        self,
        *,
        offense: RawOffense,
        source_map: SourceMap,
        parse_result: ParseResult,
    ) -> Diagnostic:
        location: SourceLocation = location_for_offense(
            offense=offense,
            source_map=source_map,
            line_count=len(parse_result.source_lines),
        )
        source_line: str | None = None
        if 1 <= location.line <= len(parse_result.source_lines):
            source_line = parse_result.source_lines[location.line - 1]

        severity: Severity = (
            Severity.ERROR if offense.category in _ERROR_CATEGORIES else Severity.WARN
        )
        return Diagnostic(
            file=parse_result.file,
            location=location,
            linter=self.name,
            code=offense.check,
            message=normalize_message(offense.message),
            severity=severity,
            source_line=source_line,
        )
