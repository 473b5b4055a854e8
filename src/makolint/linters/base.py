"""Linter protocol for MakoLint linters."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from makolint.diagnostics import Diagnostic
from makolint.parser import ParseResult
from makolint.types import MakoLintConfig


@runtime_checkable
class Linter(Protocol):
    """Structural interface for template linters."""

    @property
    def name(self) -> str: ...

    def check(
        self,
        *,
        parse_result: ParseResult,
        config: MakoLintConfig,
    ) -> list[Diagnostic]: ...
