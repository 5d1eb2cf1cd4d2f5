"""Assemble rendered package documentation from a classified model."""

from __future__ import annotations

from typing import Iterable, Sequence

from .logging import get_logger
from .models import FuncDecl, PackageDocs, PackageModel, TypeDecl, TypeDocs, ValueGroup
from .renderer import SourceRenderer


def import_statement(import_path: str) -> str:
    return f'import "{import_path}"'


def join_blocks(blocks: Iterable[str]) -> str:
    """Join rendered entries with a single blank line, skipping empty ones."""
    return "\n".join(block for block in blocks if block)


class DocumentationAssembler:
    """Walks a :class:`PackageModel` and renders every declaration."""

    def __init__(self, renderer: SourceRenderer) -> None:
        self.renderer = renderer
        self.logger = get_logger("assembler")

    def assemble(self, model: PackageModel, import_path: str) -> PackageDocs:
        types = tuple(self._type_docs(entry) for entry in model.types.values())
        self.logger.debug("Assembled %d type entries for %s", len(types), model.name)
        return PackageDocs(
            name=model.name,
            import_path=import_statement(import_path),
            package=model.doc.strip(),
            constants=self.render_values(model.consts),
            variables=self.render_values(model.vars),
            functions=self.render_funcs(model.funcs),
            types=types,
        )

    def render_values(self, groups: Sequence[ValueGroup]) -> str:
        return join_blocks(self.renderer.render(group.decl, group.doc) for group in groups)

    def render_funcs(self, funcs: Sequence[FuncDecl]) -> str:
        return join_blocks(self.renderer.render(func.decl, func.doc) for func in funcs)

    def _type_docs(self, entry: TypeDecl) -> TypeDocs:
        return TypeDocs(
            name=entry.name,
            header=f"type {entry.name}",
            declaration=self.renderer.render(entry.decl, entry.doc),
            constants=self.render_values(entry.consts),
            variables=self.render_values(entry.vars),
            functions=self.render_funcs(entry.funcs),
        )


__all__ = ["DocumentationAssembler", "import_statement", "join_blocks"]
