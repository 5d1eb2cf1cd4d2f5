"""Deterministic source rendering of single declarations."""

from __future__ import annotations

from typing import List, Optional, Set

from tree_sitter import Node

from .config import DEFAULT_TAB_WIDTH
from .logging import get_logger
from .models import SourceDecl
from .parser import FileSet, SourceFile

FENCE = "```"

_FUNCTION_NODES = {"function_declaration", "method_declaration"}


class SourceRenderer:
    """Renders a declaration as its doc text followed by a fenced code block.

    Code is taken from the original source through the run's :class:`FileSet`.
    Continuation lines lose the declaration's own indentation and have their
    leading whitespace rewritten as tabs of ``tab_width`` columns, with any
    remainder kept as spaces. Lines inside raw string literals are left alone.

    Rendering is best effort: any failure produces an empty string so one bad
    fragment cannot abort a documentation build.
    """

    def __init__(
        self,
        fileset: FileSet,
        *,
        tab_width: int = DEFAULT_TAB_WIDTH,
        include_bodies: bool = True,
    ) -> None:
        if tab_width < 1:
            raise ValueError("tab_width must be positive")
        self.fileset = fileset
        self.tab_width = tab_width
        self.include_bodies = include_bodies
        self.logger = get_logger("renderer")

    def render(self, decl: Optional[SourceDecl], doc: str) -> str:
        if decl is None:
            return ""
        try:
            code = self.format_source(decl)
        except (KeyError, IndexError, UnicodeDecodeError, ValueError) as exc:
            self.logger.debug("Could not render declaration from %s: %s", decl.filename, exc)
            return ""
        if not code:
            return ""
        return f"{doc}{FENCE}\n{code}\n{FENCE}\n"

    def format_source(self, decl: SourceDecl) -> str:
        """Return the normalized source text of ``decl`` without doc or fence."""
        source = self.fileset.file(decl.filename)
        node = decl.node
        end = node.end_byte
        if not self.include_bodies and node.type in _FUNCTION_NODES:
            body = node.child_by_field_name("body")
            if body is not None:
                end = body.start_byte

        text = source.text(node.start_byte, end).rstrip()
        if not text:
            return ""

        base = self._width(_line_indent(source, node.start_byte))
        verbatim = _raw_string_rows(node)
        first_row = node.start_point[0]

        lines = text.split("\n")
        out: List[str] = [lines[0].rstrip()]
        for offset, line in enumerate(lines[1:], start=1):
            if first_row + offset in verbatim:
                out.append(line)
                continue
            out.append(self._reindent(line, base))

        code = "\n".join(out)
        if decl.keyword:
            code = f"{decl.keyword} {code}"
        return code

    def _reindent(self, line: str, base: int) -> str:
        content = line.lstrip(" \t")
        if not content.strip():
            return ""
        width = max(self._width(line[: len(line) - len(content)]) - base, 0)
        tabs, spaces = divmod(width, self.tab_width)
        return "\t" * tabs + " " * spaces + content.rstrip()

    def _width(self, whitespace: str) -> int:
        width = 0
        for char in whitespace:
            if char == "\t":
                width += self.tab_width - width % self.tab_width
            else:
                width += 1
        return width


def _line_indent(source: SourceFile, offset: int) -> str:
    """Return the leading whitespace of the line holding ``offset``."""
    prefix = source.text(source.line_start(offset), offset)
    return prefix[: len(prefix) - len(prefix.lstrip(" \t"))]


def _raw_string_rows(node: Node) -> Set[int]:
    """Rows that continue a multi-line raw string literal."""
    rows: Set[int] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if current.start_point[0] == current.end_point[0]:
            continue
        if current.type == "raw_string_literal":
            rows.update(range(current.start_point[0] + 1, current.end_point[0] + 1))
            continue
        stack.extend(current.children)
    return rows


__all__ = ["FENCE", "SourceRenderer"]
