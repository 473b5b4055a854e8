"""Mako template parsing with syntax error detection for MakoLint."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mako import exceptions as mako_exceptions
from mako import parsetree
from mako.lexer import Lexer


@dataclass(frozen=True, slots=True)
class SyntaxErrorInfo:
    """Syntax error details. Line/column are 1-based."""

    line: int
    column: int
    message: str
    source_line: str | None


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Result of parsing a Mako template."""

    file: Path | None
    tree: parsetree.TemplateNode | None
    source: str
    source_lines: tuple[str, ...]
    syntax_error: SyntaxErrorInfo | None


def parse_source(*, source: str, file: Path | None = None) -> ParseResult:
    """Parse template text, returning the Mako parse tree or a syntax error."""
    source_lines: tuple[str, ...] = tuple(source.splitlines())
    filename: str | None = str(file) if file is not None else None

    try:
        tree: parsetree.TemplateNode = Lexer(source, filename=filename).parse()
    except mako_exceptions.MakoException as e:
        line: int = getattr(e, "lineno", None) or 1
        column: int = max(1, getattr(e, "pos", None) or 1)

        source_line: str | None = None
        if 1 <= line <= len(source_lines):
            source_line = source_lines[line - 1]

        return ParseResult(
            file=file,
            tree=None,
            source=source,
            source_lines=source_lines,
            syntax_error=SyntaxErrorInfo(
                line=line,
                column=column,
                message=str(e) or "Syntax error",
                source_line=source_line,
            ),
        )

    return ParseResult(
        file=file,
        tree=tree,
        source=source,
        source_lines=source_lines,
        syntax_error=None,
    )


def parse_file(*, file: Path) -> ParseResult:
    """Read and parse a template file."""
    try:
        source: str = file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        return _unreadable(file=file, message=f"Encoding error: {e}")
    except OSError as e:
        return _unreadable(file=file, message=f"Cannot read file: {e}")

    return parse_source(source=source, file=file)


def _unreadable(*, file: Path, message: str) -> ParseResult:
    return ParseResult(
        file=file,
        tree=None,
        source="",
        source_lines=(),
        syntax_error=SyntaxErrorInfo(
            line=1,
            column=1,
            message=message,
            source_line=None,
        ),
    )
