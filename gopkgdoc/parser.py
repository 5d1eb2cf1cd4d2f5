"""Tree-sitter powered Go source parsing."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from .errors import ParseError
from .logging import get_logger
from .scanner import scan_package

GO_LANGUAGE = Language(tree_sitter_go.language())

logger = get_logger("parser")


@dataclass(frozen=True)
class Position:
    """1-based line and column of a byte offset within a file."""

    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass
class SourceFile:
    """Source bytes of one parsed file plus its line table."""

    name: str
    source: bytes
    line_starts: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.line_starts:
            starts = [0]
            index = self.source.find(b"\n")
            while index != -1:
                starts.append(index + 1)
                index = self.source.find(b"\n", index + 1)
            self.line_starts = starts

    def text(self, start: int, end: int) -> str:
        return self.source[start:end].decode("utf-8")

    def line_start(self, offset: int) -> int:
        """Return the byte offset of the line containing ``offset``."""
        return self.line_starts[bisect.bisect_right(self.line_starts, offset) - 1]


class FileSet:
    """Position and layout data for every file parsed during one run."""

    def __init__(self) -> None:
        self._files: Dict[str, SourceFile] = {}

    def add_file(self, name: str, source: bytes) -> SourceFile:
        if name in self._files:
            raise ValueError(f"File already registered: {name}")
        source_file = SourceFile(name=name, source=source)
        self._files[name] = source_file
        return source_file

    def file(self, name: str) -> SourceFile:
        return self._files[name]

    def position(self, name: str, offset: int) -> Position:
        source_file = self._files[name]
        line_index = bisect.bisect_right(source_file.line_starts, offset) - 1
        column = offset - source_file.line_starts[line_index] + 1
        return Position(filename=name, line=line_index + 1, column=column)

    def __contains__(self, name: object) -> bool:
        return name in self._files

    def __iter__(self):
        return iter(self._files.values())

    def __len__(self) -> int:
        return len(self._files)


@dataclass
class ParsedFile:
    """Syntax tree of one accepted source file."""

    name: str
    package: str
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node


class GoParser:
    """Parses the accepted files of a package directory."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)
        self.logger = logger

    def parse_dir(self, directory: Path, fileset: FileSet) -> List[ParsedFile]:
        """Parse every accepted file of ``directory``; fail on the first bad file."""
        parsed = [self.parse_file(path, fileset) for path in scan_package(directory)]
        self.logger.debug("Parsed %d files from %s", len(parsed), directory)
        return parsed

    def parse_file(self, path: Path, fileset: FileSet) -> ParsedFile:
        name = path.name
        try:
            source = path.read_bytes()
            source.decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(name, str(exc)) from exc

        fileset.add_file(name, source)
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            bad = _first_error(root)
            where = fileset.position(name, bad.start_byte) if bad is not None else None
            what = "missing " + bad.type if bad is not None and bad.is_missing else "syntax error"
            raise ParseError(name, f"{what} at {where}" if where else what)

        package = _package_name(root, fileset.file(name))
        if package is None:
            raise ParseError(name, "expected package clause")
        return ParsedFile(name=name, package=package, tree=tree)


def _first_error(root: Node) -> Optional[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        # Reversed so the leftmost child is visited first.
        stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
    return None


def _package_name(root: Node, source_file: SourceFile) -> Optional[str]:
    for child in root.named_children:
        if child.type == "package_clause":
            for ident in child.named_children:
                if ident.type == "package_identifier":
                    return source_file.text(ident.start_byte, ident.end_byte)
    return None


def select_package(files: Sequence[ParsedFile]) -> List[ParsedFile]:
    """Keep the files that belong to the package of the first file."""
    if not files:
        return []
    package = files[0].package
    selected = []
    for parsed in files:
        if parsed.package != package:
            logger.warning(
                "Skipping %s: package %s does not match %s", parsed.name, parsed.package, package
            )
            continue
        selected.append(parsed)
    return selected


__all__ = ["FileSet", "GO_LANGUAGE", "GoParser", "ParsedFile", "Position", "SourceFile", "select_package"]
