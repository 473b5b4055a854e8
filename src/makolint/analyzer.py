"""In-process pylint invocation over Python extracted from a template."""
from __future__ import annotations

import io
import logging
import os
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Final

from pylint.lint import Run
from pylint.message import Message
from pylint.reporters import BaseReporter

from makolint.constants import PYLINT_RCFILE_ENV

_LOG: Final[logging.Logger] = logging.getLogger(__name__)

# Guards sys.stdin and the single-threaded pylint run for one invocation.
_PYLINT_LOCK: Final[threading.Lock] = threading.Lock()


class AnalyzerError(Exception):
    """Pylint finished without reporting through the offense collector."""


@dataclass(frozen=True, slots=True)
class RawOffense:
    """
    One pylint message in fragment coordinates.

    Lines are 1-based and columns are 0-based, exactly as pylint reports
    them. ``column_length`` is only known for single-line offenses.
    """

    check: str
    line: int
    column: int
    last_line: int
    last_column: int
    column_length: int | None
    message: str
    category: str

    @classmethod
    def from_message(cls, msg: Message) -> RawOffense:
        last_line: int = msg.end_line if msg.end_line is not None else msg.line
        last_column: int = msg.end_column if msg.end_column is not None else msg.column
        column_length: int | None = (
            last_column - msg.column if last_line == msg.line else None
        )
        return cls(
            check=msg.symbol,
            line=msg.line,
            column=msg.column,
            last_line=last_line,
            last_column=last_column,
            column_length=column_length,
            message=msg.msg,
            category=msg.category,
        )


class OffenseCollector(BaseReporter):
    """Pylint reporter that keeps messages instead of printing them. One per run."""

    name: str = "makolint-collector"

    def __init__(self, output: Any = None) -> None:
        super().__init__(output)
        self.offenses: list[RawOffense] = []

    def handle_message(self, msg: Message) -> None:
        self.offenses.append(RawOffense.from_message(msg))

    def _display(self, layout: Any) -> None:
        pass


def pylint_flags(*, filename: str) -> list[str]:
    """Flags passed to pylint for one run; ``filename`` comes last."""
    flags: list[str] = [
        "--msg-template={msg}",
        "--persistent=n",
        "--score=n",
    ]
    rcfile: str | None = os.environ.get(PYLINT_RCFILE_ENV)
    if rcfile:
        flags += ["--rcfile", rcfile]
    flags += ["--from-stdin", filename]
    return flags


@contextmanager
def stdin_from(source: str) -> Iterator[None]:
    """Substitute ``sys.stdin`` with ``source`` for the duration of the block."""
    original_stdin = sys.stdin
    data: bytes = (source.rstrip("\n") + "\n").encode("utf-8")
    sys.stdin = io.TextIOWrapper(io.BytesIO(data), encoding="utf-8")
    try:
        yield
    finally:
        sys.stdin = original_stdin


def run_pylint(*, source: str, filename: str) -> list[RawOffense]:
    """
    Run pylint over in-memory Python source.

    The source reaches pylint through stdin as ``filename``; no file is
    written. Pylint failures propagate to the caller.
    """
    flags: list[str] = pylint_flags(filename=filename)
    _LOG.debug("Running pylint %s on %d lines", " ".join(flags), source.count("\n") + 1)

    collector: OffenseCollector = OffenseCollector()
    with _PYLINT_LOCK, stdin_from(source):
        run: Run = Run(flags, reporter=collector, exit=False)

    reporter: BaseReporter = run.linter.reporter
    if reporter is not collector:
        raise AnalyzerError(
            f"pylint reported through {type(reporter).__name__}, not OffenseCollector"
        )
    return list(collector.offenses)
