"""Configuration loading and validation for MakoLint."""
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from makolint.constants import (
    DEFAULT_EXCLUDES,
    DEFAULT_IGNORED_CHECKS,
    DEFAULT_INCLUDE,
    LINTER_NAMES,
    OutputFormat,
)
from makolint.types import (
    ConfigError,
    LinterConfig,
    MakoLintConfig,
    PylintOptions,
)


class ConfigLoader:
    """Loads and validates MakoLint configuration."""

    @staticmethod
    def find_config_file(start_path: Path | None = None) -> Path | None:
        """
        Find pyproject.toml by walking up from start_path.

        Args:
            start_path: Directory to start searching from. Defaults to cwd.

        Returns:
            Path to pyproject.toml if found, None otherwise.
        """
        if start_path is None:
            start_path = Path.cwd()

        start_path = start_path.resolve()

        for directory in [start_path, *start_path.parents]:
            config_path: Path = directory / "pyproject.toml"
            if config_path.is_file():
                return config_path

        return None

    @staticmethod
    def load(path: Path | None = None) -> MakoLintConfig:
        """
        Load configuration from pyproject.toml.

        Settings found under ``[tool.makolint]`` replace the built-in
        defaults key by key; lists are replaced, not extended.

        Args:
            path: Explicit path to pyproject.toml. If None, searches upward.

        Returns:
            Validated MakoLintConfig instance.

        Raises:
            ConfigError: If configuration is invalid.
        """
        if path is None:
            path = ConfigLoader.find_config_file()

        if path is None:
            return MakoLintConfig()

        try:
            with open(path, "rb") as f:
                data: dict[str, Any] = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML: {e}", path=path) from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}", path=path) from e

        tool_config: dict[str, Any] = data.get("tool", {}).get("makolint", {})

        return ConfigLoader.load_dict(tool_config, config_path=path)

    @staticmethod
    def load_dict(
        data: dict[str, Any],
        *,
        config_path: Path | None = None,
    ) -> MakoLintConfig:
        """Build a configuration from a ``[tool.makolint]`` style mapping."""
        errors: list[str] = []

        include: tuple[str, ...] = ConfigLoader._parse_patterns(
            data, key="include", default=DEFAULT_INCLUDE, errors=errors,
        )
        exclude: tuple[str, ...] = ConfigLoader._parse_patterns(
            data, key="exclude", default=DEFAULT_EXCLUDES, errors=errors,
        )

        # Parse output_format
        output_format: OutputFormat = OutputFormat.TEXT
        if "output_format" in data:
            try:
                output_format = OutputFormat(data["output_format"])
            except ValueError:
                valid: list[str] = [f.value for f in OutputFormat]
                errors.append(f"output_format must be one of {valid}")

        # Parse show_source
        show_source: bool = data.get("show_source", True)
        if not isinstance(show_source, bool):
            errors.append("show_source must be a boolean")
            show_source = True

        # Parse linters
        linters: LinterConfig = ConfigLoader._parse_linters(
            data.get("linters", {}), errors
        )

        if errors:
            error_msg: str = "Configuration errors:\n" + "\n".join(
                f"  - {e}" for e in errors
            )
            raise ConfigError(error_msg, path=config_path)

        return MakoLintConfig(
            config_path=config_path,
            include=include,
            exclude=exclude,
            output_format=output_format,
            show_source=show_source,
            linters=linters,
        )

    @staticmethod
    def _parse_patterns(
        data: dict[str, Any],
        *,
        key: str,
        default: tuple[str, ...],
        errors: list[str],
    ) -> tuple[str, ...]:
        """Parse a list of glob patterns."""
        raw: Any = data.get(key, default)
        if isinstance(raw, list):
            return tuple(raw)
        if not isinstance(raw, tuple):
            errors.append(f"{key} must be a list, got {type(raw).__name__}")
        return default

    @staticmethod
    def _parse_linters(data: Any, errors: list[str]) -> LinterConfig:
        """Parse linters configuration."""
        if not isinstance(data, dict):
            errors.append("linters must be a table")
            return LinterConfig()

        known: dict[str, str] = {name.lower(): name for name in LINTER_NAMES}
        unknown: list[str] = [key for key in data if key.lower() not in known]
        if unknown:
            errors.append(f"linters contains unknown linters: {sorted(unknown)}")

        pylint_data: Any = data.get("pylint", {})
        if not isinstance(pylint_data, dict):
            errors.append("linters.pylint must be a table")
            return LinterConfig()

        enabled: bool = pylint_data.get("enabled", True)
        if not isinstance(enabled, bool):
            errors.append("linters.pylint.enabled must be a boolean")
            enabled = True

        ignored_checks: tuple[str, ...] = DEFAULT_IGNORED_CHECKS
        raw_ignored: Any = pylint_data.get("ignored_checks", DEFAULT_IGNORED_CHECKS)
        if isinstance(raw_ignored, list):
            if all(isinstance(check, str) for check in raw_ignored):
                ignored_checks = tuple(raw_ignored)
            else:
                errors.append("linters.pylint.ignored_checks must contain only strings")
        elif not isinstance(raw_ignored, tuple):
            errors.append("linters.pylint.ignored_checks must be a list")

        return LinterConfig(
            pylint=PylintOptions(enabled=enabled, ignored_checks=ignored_checks),
        )


def load_config(path: Path | None = None) -> MakoLintConfig:
    """
    Convenience function to load configuration.

    Args:
        path: Optional explicit path to pyproject.toml.

    Returns:
        Validated configuration.
    """
    return ConfigLoader.load(path)
