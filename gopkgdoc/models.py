"""Core data models shared across gopkgdoc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from tree_sitter import Node


@dataclass(frozen=True)
class PackageIdentity:
    """Resolved package supplied by the dependency collaborator."""

    name: str
    directory: Optional[Path] = None

    def resolve_directory(self, src_root: Path) -> Path:
        """Return the directory holding the package sources."""
        if self.directory is not None:
            return Path(self.directory)
        return Path(src_root) / self.name


@dataclass(frozen=True)
class SourceDecl:
    """A syntax node paired with the file it was parsed from."""

    filename: str
    node: "Node"
    keyword: str = ""


@dataclass
class ValueGroup:
    """One ``const`` or ``var`` declaration block."""

    kind: str
    names: List[str]
    doc: str
    decl: SourceDecl


@dataclass
class FuncDecl:
    """A function or method declaration."""

    name: str
    recv: str
    doc: str
    decl: SourceDecl


@dataclass
class TypeDecl:
    """A named type together with the declarations attributed to it."""

    name: str
    doc: str = ""
    decl: Optional[SourceDecl] = None
    consts: List[ValueGroup] = field(default_factory=list)
    vars: List[ValueGroup] = field(default_factory=list)
    funcs: List[FuncDecl] = field(default_factory=list)

    @property
    def synthesized(self) -> bool:
        return self.decl is None


@dataclass
class PackageModel:
    """Classified declarations of one package."""

    name: str
    doc: str = ""
    consts: List[ValueGroup] = field(default_factory=list)
    vars: List[ValueGroup] = field(default_factory=list)
    funcs: List[FuncDecl] = field(default_factory=list)
    types: Dict[str, TypeDecl] = field(default_factory=dict)
    filenames: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TypeDocs:
    """Rendered documentation for one type."""

    name: str
    header: str
    declaration: str
    constants: str
    variables: str
    functions: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "header": self.header,
            "declaration": self.declaration,
            "constants": self.constants,
            "variables": self.variables,
            "functions": self.functions,
        }


@dataclass(frozen=True)
class PackageDocs:
    """Rendered documentation for a whole package."""

    name: str
    import_path: str
    package: str
    constants: str
    variables: str
    functions: str
    types: tuple[TypeDocs, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain mapping suitable for JSON serialization."""
        return {
            "name": self.name,
            "import": self.import_path,
            "package": self.package,
            "constants": self.constants,
            "variables": self.variables,
            "functions": self.functions,
            "types": [entry.to_dict() for entry in self.types],
        }

    def type_named(self, name: str) -> Optional[TypeDocs]:
        for entry in self.types:
            if entry.name == name:
                return entry
        return None
