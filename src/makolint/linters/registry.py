"""Linter registry for MakoLint."""
from __future__ import annotations

from makolint.linters.base import Linter
from makolint.linters.pylint import PylintLinter
from makolint.types import MakoLintConfig


def get_enabled_linters(*, config: MakoLintConfig) -> list[Linter]:
    """Return linter instances that are enabled in the given config."""
    all_linters: list[Linter] = _all_linters()
    return [linter for linter in all_linters if config.is_linter_enabled(linter.name)]


def _all_linters() -> list[Linter]:
    """Return all registered linter instances."""
    linters: list[Linter] = [
        PylintLinter(),
    ]
    return linters
