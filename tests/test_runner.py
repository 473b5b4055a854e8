"""Tests for MakoLint lint runner."""
from __future__ import annotations

from pathlib import Path

from makolint.constants import SYNTAX_LINTER_NAME, OutputFormat, Severity
from makolint.diagnostics import Diagnostic
from makolint.linters.registry import get_enabled_linters
from makolint.runner import LintResult, format_results, lint_paths, lint_source
from makolint.types import LinterConfig, MakoLintConfig, PylintOptions

_CLEAN: str = "<ul>\n% for item in items:\n  <li>${item}</li>\n% endfor\n</ul>\n"
_UNCLOSED: str = "% for item in items:\n  <li>${item}</li>\n"
_UNUSED_IMPORT: str = "<%!\n    import os\n%>\n<p>hi</p>\n"


def _write_file(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


_DISABLED: MakoLintConfig = MakoLintConfig(
    linters=LinterConfig(pylint=PylintOptions(enabled=False)),
)


class TestRegistry:
    def test_pylint_enabled_by_default(self) -> None:
        assert [linter.name for linter in get_enabled_linters(config=MakoLintConfig())] == [
            "Pylint",
        ]

    def test_disabled_linter_not_returned(self) -> None:
        assert get_enabled_linters(config=_DISABLED) == []


class TestLintPaths:
    def test_valid_templates_no_errors(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "good.mako", _CLEAN)
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())

        assert result.files_checked == 1
        assert result.exit_code == 0
        assert not result.diagnostics.has_errors

    def test_syntax_error_detected(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "bad.mako", _UNCLOSED)
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())

        assert result.exit_code == 1
        diags: list[Diagnostic] = result.diagnostics.sorted
        assert len(diags) == 1
        assert diags[0].linter == SYNTAX_LINTER_NAME
        assert diags[0].code == "syntax-error"

    def test_syntax_error_skips_linters(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "bad.mako", "<%! import os %>\n" + _UNCLOSED)
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())

        assert [d.linter for d in result.diagnostics] == [SYNTAX_LINTER_NAME]

    def test_warnings_do_not_fail(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "page.mako", _UNUSED_IMPORT)
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())

        assert result.exit_code == 0
        assert result.diagnostics.warning_count == 1
        diag: Diagnostic = result.diagnostics.sorted[0]
        assert diag.rule == "Pylint/unused-import"
        assert (diag.location.line, diag.location.column) == (2, 5)

    def test_pylint_error_fails(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "page.mako", '<p>${"abc".nope()}</p>\n')
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())

        assert result.exit_code == 1
        assert "no-member" in {d.code for d in result.diagnostics}

    def test_disabled_pylint_reports_nothing(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "page.mako", _UNUSED_IMPORT)
        result: LintResult = lint_paths(paths=(tmp_path,), config=_DISABLED)

        assert len(result.diagnostics) == 0

    def test_mixed_files(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "good.mako", _CLEAN)
        _write_file(tmp_path / "bad.mako", _UNCLOSED)
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())

        assert result.files_checked == 2
        assert result.diagnostics.error_count == 1

    def test_empty_directory(self, tmp_path: Path) -> None:
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())

        assert result.files_checked == 0
        assert result.exit_code == 0

    def test_unreadable_encoding(self, tmp_path: Path) -> None:
        (tmp_path / "latin.mako").write_bytes(b"caf\xe9\n")
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())

        diag: Diagnostic = result.diagnostics.sorted[0]
        assert diag.severity == Severity.ERROR
        assert diag.message.startswith("Encoding error")


class TestLintSource:
    def test_in_memory_template(self) -> None:
        found: list[Diagnostic] = lint_source(source=_UNUSED_IMPORT, config=MakoLintConfig())

        assert [d.code for d in found] == ["unused-import"]
        assert found[0].file is None

    def test_syntax_error_in_memory(self) -> None:
        found: list[Diagnostic] = lint_source(
            source=_UNCLOSED, config=MakoLintConfig(), file=Path("inline.mako"),
        )

        assert found[0].rule == "Syntax/syntax-error"
        assert found[0].file == Path("inline.mako")


class TestFormatResults:
    def test_clean_output(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "good.mako", _CLEAN)
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())
        output: str = format_results(result=result, config=MakoLintConfig())

        assert "No issues found." in output
        assert "Checked 1 file." in output

    def test_error_output(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "bad.mako", _UNCLOSED)
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())
        output: str = format_results(result=result, config=MakoLintConfig())

        assert "Syntax/syntax-error" in output
        assert "1 error" in output

    def test_plural_files(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "a.mako", "<p/>\n")
        _write_file(tmp_path / "b.mako", "<p/>\n")
        result: LintResult = lint_paths(paths=(tmp_path,), config=MakoLintConfig())
        output: str = format_results(result=result, config=MakoLintConfig())

        assert "Checked 2 files." in output

    def test_json_format(self, tmp_path: Path) -> None:
        _write_file(tmp_path / "bad.mako", _UNCLOSED)
        config: MakoLintConfig = MakoLintConfig(output_format=OutputFormat.JSON)
        result: LintResult = lint_paths(paths=(tmp_path,), config=config)
        output: str = format_results(result=result, config=config)

        assert '"code": "syntax-error"' in output
        assert '"linter": "Syntax"' in output
