"""Pytest fixtures for MakoLint tests."""
from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def temp_pyproject(tmp_path: Path) -> Path:
    """Create a temporary pyproject.toml file."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text(
        """
[tool.makolint]
include = ["templates/**/*.mako"]
exclude = ["**/vendor/**"]
output_format = "json"
show_source = false

[tool.makolint.linters.pylint]
enabled = true
ignored_checks = ["unused-import", "missing-module-docstring"]
"""
    )
    return config_path


@pytest.fixture
def empty_pyproject(tmp_path: Path) -> Path:
    """Create a pyproject.toml without [tool.makolint] section."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text(
        """
[project]
name = "test-project"
version = "0.1.0"
"""
    )
    return config_path


@pytest.fixture
def invalid_toml(tmp_path: Path) -> Path:
    """Create an invalid TOML file."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text("invalid [ toml content")
    return config_path


@pytest.fixture
def invalid_config(tmp_path: Path) -> Path:
    """Create a pyproject.toml with invalid makolint config."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text(
        """
[tool.makolint]
output_format = "xml"
show_source = "yes"

[tool.makolint.linters.pylint]
enabled = "sometimes"
ignored_checks = "unused-import"

[tool.makolint.linters.flake8]
enabled = true
"""
    )
    return config_path
