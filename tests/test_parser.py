"""Tests for Mako template parsing."""
from __future__ import annotations

from pathlib import Path

from mako import parsetree

from makolint.parser import ParseResult, parse_file, parse_source


class TestParseSource:
    def test_valid_template(self) -> None:
        result: ParseResult = parse_source(source="<p>${name}</p>\n")

        assert result.syntax_error is None
        assert isinstance(result.tree, parsetree.TemplateNode)
        assert result.file is None
        assert result.source_lines == ("<p>${name}</p>",)

    def test_unterminated_control_line(self) -> None:
        result: ParseResult = parse_source(source="% for x in y:\n${x}\n")

        assert result.tree is None
        assert result.syntax_error is not None
        assert result.syntax_error.line >= 1
        assert result.syntax_error.column >= 1
        assert "for" in result.syntax_error.message

    def test_source_line_attached_to_error(self) -> None:
        result: ParseResult = parse_source(source="<p>\n${x +}\n</p>\n")

        assert result.syntax_error is not None
        assert result.syntax_error.line == 2
        assert result.syntax_error.source_line == "${x +}"

    def test_keeps_file(self) -> None:
        result: ParseResult = parse_source(source="", file=Path("a.mako"))
        assert result.file == Path("a.mako")
        assert result.source_lines == ()


class TestParseFile:
    def test_reads_file(self, tmp_path: Path) -> None:
        template: Path = tmp_path / "page.mako"
        template.write_text("% if x:\nyes\n% endif\n", encoding="utf-8")

        result: ParseResult = parse_file(file=template)

        assert result.syntax_error is None
        assert result.file == template
        assert len(result.source_lines) == 3

    def test_missing_file(self, tmp_path: Path) -> None:
        result: ParseResult = parse_file(file=tmp_path / "missing.mako")

        assert result.syntax_error is not None
        assert "Cannot read file" in result.syntax_error.message

    def test_undecodable_file(self, tmp_path: Path) -> None:
        template: Path = tmp_path / "binary.mako"
        template.write_bytes(b"\xff\xfe\x00bad")

        result: ParseResult = parse_file(file=template)

        assert result.syntax_error is not None
        assert "Encoding error" in result.syntax_error.message
