"""Translation of pylint offenses from fragment to template coordinates."""
from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from typing import Final

from makolint.analyzer import RawOffense
from makolint.diagnostics import SourceLocation

# Positions pylint embeds in some messages refer to the fragment, not the template.
_FRAGMENT_POSITION: Final[re.Pattern[str]] = re.compile(r" at \d+, \d+")


def location_for_offense(
    *,
    offense: RawOffense,
    source_map: Mapping[int, SourceLocation],
    line_count: int,
) -> SourceLocation:
    """
    Translate an offense's span into template coordinates.

    Offenses on fragment lines with no template counterpart (synthetic
    lines) are placed at column 0 of the template's last line. This loses
    precision for templates with several code regions but never drops the
    offense.
    """
    start_anchor: SourceLocation | None = source_map.get(offense.line)
    if start_anchor is None:
        return SourceLocation(line=line_count, column=0)

    finish_anchor: SourceLocation = source_map.get(offense.last_line, start_anchor)
    start: SourceLocation = start_anchor.adjust(column=offense.column)
    finish: SourceLocation = finish_anchor.adjust(column=offense.last_column)
    return SourceLocation.merge(start, finish, length=offense.column_length)


def filter_offenses(
    *,
    offenses: list[RawOffense],
    ignored: Collection[str],
) -> list[RawOffense]:
    """Drop offenses whose check is exactly one of ``ignored``."""
    ignored_set: frozenset[str] = frozenset(ignored)
    return [offense for offense in offenses if offense.check not in ignored_set]


def normalize_message(message: str) -> str:
    """Strip fragment positions (`` at <line>, <column>``) from a message."""
    return _FRAGMENT_POSITION.sub("", message)
