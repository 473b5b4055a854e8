"""Extraction of the Python embedded in a Mako template."""
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from mako import parsetree

from makolint.diagnostics import SourceLocation
from makolint.parser import ParseResult
from makolint.sourcemap import SourceMap

_INDENT: Final[str] = "    "

# A control line opens a block when it ends in a colon, optionally followed by a comment.
_BLOCK_OPENER: Final[re.Pattern[str]] = re.compile(r":[ \t]*(?:#.*)?$")

# Control keywords that continue the enclosing block instead of opening one.
_CONTINUATION_KEYWORDS: Final[frozenset[str]] = frozenset({
    "elif",
    "else",
    "except",
    "finally",
})


@dataclass(frozen=True, slots=True)
class ExtractedSource:
    """Python source extracted from a template and its map back to it."""

    source: str
    source_map: SourceMap


class PythonExtractor:
    """
    Walks a Mako parse tree and emits equivalent, indentation-correct Python.

    Control lines become block statements, ``<% %>`` and ``<%! %>`` bodies
    are copied line by line, ``${...}`` expressions become expression
    statements and ``<%def>`` tags become function definitions. Blocks with
    no Python body get a synthetic ``pass`` which has no template location.
    """

    def extract(self, *, parse_result: ParseResult) -> ExtractedSource:
        if parse_result.tree is None:
            raise ValueError("parse_result must have a parse tree")

        builder: _FragmentBuilder = _FragmentBuilder(
            source_lines=parse_result.source_lines,
        )
        builder.visit(nodes=parse_result.tree.nodes)
        builder.finish()

        return ExtractedSource(
            source="\n".join(builder.lines),
            source_map=SourceMap(builder.anchors),
        )


class _FragmentBuilder:
    def __init__(self, *, source_lines: tuple[str, ...]) -> None:
        self.lines: list[str] = []
        self.anchors: dict[int, SourceLocation] = {}
        self._source_lines: tuple[str, ...] = source_lines
        self._depth: int = 0
        # One entry per open block: whether it has a statement yet.
        self._bodies: list[bool] = []

    def visit(self, *, nodes: Sequence[parsetree.Node]) -> None:
        for node in nodes:
            if isinstance(node, parsetree.ControlLine):
                self._visit_control_line(node=node)
            elif isinstance(node, parsetree.Code):
                self._visit_text(
                    text=node.text, lineno=node.lineno, pos=node.pos, keep_indent=True,
                )
            elif isinstance(node, parsetree.Expression):
                self._visit_text(
                    text=node.text, lineno=node.lineno, pos=node.pos, keep_indent=False,
                )
            elif isinstance(node, parsetree.DefTag):
                self._visit_def(node=node)
            elif isinstance(node, parsetree.Tag):
                self.visit(nodes=node.nodes)

    def finish(self) -> None:
        while self._bodies:
            self._close_block()

    def _visit_control_line(self, *, node: parsetree.ControlLine) -> None:
        if node.isend:
            self._close_block()
            return

        text: str = node.text.strip()
        if node.keyword in _CONTINUATION_KEYWORDS and self._bodies:
            self._close_block()
            self._emit(code=text, template_line=node.lineno, anchor_text=text)
            self._open_block()
        elif _BLOCK_OPENER.search(text):
            self._emit(code=text, template_line=node.lineno, anchor_text=text)
            self._open_block()
        else:
            self._emit(code=text, template_line=node.lineno, anchor_text=text)

    def _visit_text(self, *, text: str, lineno: int, pos: int, keep_indent: bool) -> None:
        for offset, raw in enumerate(text.split("\n")):
            stripped: str = raw.strip()
            if not stripped:
                continue
            code: str = raw.rstrip() if keep_indent else stripped
            self._emit(
                code=code,
                template_line=lineno + offset,
                anchor_text=stripped,
                start=pos - 1 if offset == 0 else 0,
                statement=not stripped.startswith("#"),
            )

    def _visit_def(self, *, node: parsetree.DefTag) -> None:
        name: str = node.attributes.get("name", "").strip()
        self._emit(
            code=f"def {name}:",
            template_line=node.lineno,
            anchor_text=name,
            start=node.pos - 1,
        )
        self._open_block()
        self.visit(nodes=node.nodes)
        self._close_block()

    def _open_block(self) -> None:
        self._bodies.append(False)
        self._depth += 1

    def _close_block(self) -> None:
        if not self._bodies:
            return
        if not self._bodies[-1]:
            self._emit(code="pass")
        self._bodies.pop()
        self._depth -= 1

    def _emit(
        self,
        *,
        code: str,
        template_line: int | None = None,
        anchor_text: str = "",
        start: int = 0,
        statement: bool = True,
    ) -> None:
        line: str = _INDENT * self._depth + code
        self.lines.append(line)
        # Comment-only lines do not count as a block body.
        if statement and self._bodies:
            self._bodies[-1] = True

        if template_line is None:
            return

        fragment_column: int = line.find(anchor_text) if anchor_text else -1
        if fragment_column < 0:
            fragment_column = len(line) - len(line.lstrip())
        template_column: int = self._template_column(
            line=template_line, text=anchor_text, start=start,
        )
        self.anchors[len(self.lines)] = SourceLocation(
            line=template_line,
            column=template_column - fragment_column,
        )

    def _template_column(self, *, line: int, text: str, start: int) -> int:
        """1-based column where ``text`` begins on template ``line``."""
        if not 1 <= line <= len(self._source_lines):
            return 1

        raw: str = self._source_lines[line - 1]
        index: int = raw.find(text, max(start, 0)) if text else -1
        if index < 0 and text:
            index = raw.find(text)
        if index < 0:
            index = len(raw) - len(raw.lstrip())
        return index + 1
