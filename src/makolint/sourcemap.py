"""Mapping from extracted Python lines back to template locations."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from makolint.diagnostics import SourceLocation


class SourceMap(Mapping[int, SourceLocation]):
    """
    Read-only map of fragment line numbers to template anchors.

    An anchor is the template location whose column, advanced by an
    analyzer column on that fragment line, gives the template column of
    the same character. Lines without an entry (synthetic lines) are legal.
    """

    __slots__ = ("_anchors",)

    def __init__(self, anchors: Mapping[int, SourceLocation] | None = None) -> None:
        self._anchors: MappingProxyType[int, SourceLocation] = MappingProxyType(
            dict(anchors or {})
        )

    def __getitem__(self, line: int) -> SourceLocation:
        return self._anchors[line]

    def __iter__(self) -> Iterator[int]:
        return iter(self._anchors)

    def __len__(self) -> int:
        return len(self._anchors)

    def __repr__(self) -> str:
        return f"SourceMap({dict(self._anchors)!r})"
