"""MakoLint command line: ``makolint lint`` and ``makolint config``."""
from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Final

import click

from makolint.config import load_config
from makolint.constants import PYLINT_RCFILE_ENV, OutputFormat, __version__
from makolint.runner import LintResult, format_results, lint_paths
from makolint.types import ConfigError, MakoLintConfig

_LOG_FORMAT: Final[str] = "%(name)s: %(message)s"

# Only this many exclude patterns are listed by `makolint config`.
_EXCLUDES_SHOWN: Final[int] = 5


def _pylint_rcfile() -> str | None:
    return os.environ.get(PYLINT_RCFILE_ENV) or None


def _configure_logging(*, verbose: bool, debug: bool) -> None:
    level: int = logging.WARNING
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)


def format_config_text(*, config: MakoLintConfig) -> str:
    """Human-readable view of the resolved configuration."""
    pylint = config.linters.pylint
    excludes: str = ", ".join(config.exclude[:_EXCLUDES_SHOWN])
    if len(config.exclude) > _EXCLUDES_SHOWN:
        excludes += "..."

    sections: list[tuple[str, list[str]]] = [
        ("File Discovery:", [
            f"Include: {', '.join(config.include)}",
            f"Exclude: {excludes}",
        ]),
        ("Output:", [
            f"Format: {config.output_format.value}",
            f"Show source: {config.show_source}",
        ]),
        ("Linters:", [
            f"Pylint: {'enabled' if pylint.enabled else 'disabled'}",
            f"  Ignored checks: {', '.join(pylint.ignored_checks) or '(none)'}",
            f"  {PYLINT_RCFILE_ENV}: {_pylint_rcfile() or '(unset)'}",
        ]),
    ]

    lines: list[str] = [
        "MakoLint Configuration",
        "=" * 40,
        "",
        f"Config file: {config.config_path or '(defaults)'}",
    ]
    for title, entries in sections:
        lines += ["", title, *(f"  {entry}" for entry in entries)]
    return "\n".join(lines)


def format_config_json(*, config: MakoLintConfig) -> str:
    """Machine-readable view of the resolved configuration."""
    pylint = config.linters.pylint
    data: dict[str, Any] = {
        "config_path": None if config.config_path is None else str(config.config_path),
        "include": list(config.include),
        "exclude": list(config.exclude),
        "output_format": config.output_format.value,
        "show_source": config.show_source,
        "linters": {
            "pylint": {
                "enabled": pylint.enabled,
                "ignored_checks": list(pylint.ignored_checks),
                "rcfile": _pylint_rcfile(),
            },
        },
    }
    return json.dumps(data, indent=2)


@click.group()
@click.version_option(version=__version__, prog_name="makolint")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="pyproject.toml to read [tool.makolint] from (default: nearest one above the cwd)",
)
@click.option("--verbose", is_flag=True, help="Log file counts and timing to stderr")
@click.option("--debug", is_flag=True, help="Log per-template and pylint detail to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    *,
    config_path: Path | None,
    verbose: bool,
    debug: bool,
) -> None:
    """MakoLint - run pylint over the Python inside Mako templates."""
    _configure_logging(verbose=verbose, debug=debug)

    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(path=config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        if e.path:
            click.echo(f"  in: {e.path}", err=True)
        ctx.exit(1)


@cli.command()
@click.option("--validate", is_flag=True, help="Check the configuration without printing it")
@click.option("--json", "as_json", is_flag=True, help="Print the configuration as JSON")
@click.pass_context
def config(ctx: click.Context, *, validate: bool, as_json: bool) -> None:
    """Print or check the resolved configuration."""
    cfg: MakoLintConfig = ctx.obj["config"]

    if validate:
        click.echo(f"Configuration valid: {cfg.config_path or '(defaults)'}")
    elif as_json:
        click.echo(format_config_json(config=cfg))
    else:
        click.echo(format_config_text(config=cfg))


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=None,
    help="Report format, overriding output_format",
)
@click.option(
    "--show-source/--no-show-source",
    default=None,
    help="Print the template line under each diagnostic",
)
@click.pass_context
def lint(
    ctx: click.Context,
    paths: tuple[Path, ...],
    *,
    output_format: str | None,
    show_source: bool | None,
) -> None:
    """Lint templates under PATHS (default: the current directory)."""
    cfg: MakoLintConfig = ctx.obj["config"]
    if output_format is not None:
        cfg = replace(cfg, output_format=OutputFormat(output_format))
    if show_source is not None:
        cfg = replace(cfg, show_source=show_source)

    result: LintResult = lint_paths(paths=paths or (Path("."),), config=cfg)
    click.echo(format_results(result=result, config=cfg))
    ctx.exit(result.exit_code)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
