"""Partition a package's top-level declarations by kind and owning type."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Set

from tree_sitter import Node

from .logging import get_logger
from .models import FuncDecl, PackageModel, SourceDecl, TypeDecl, ValueGroup
from .parser import FileSet, ParsedFile, SourceFile

_DIRECTIVE = re.compile(r"^[a-z0-9]+:[a-z0-9]")
_DIRECTIVE_PREFIXES = ("line ", "extern ", "export ")

# Share of specs in a const/var block that must carry a type before the
# block is listed under that type.
_TYPED_VALUE_THRESHOLD = 0.75

_TYPE_SPECS = {"type_spec", "type_alias"}
_VALUE_DECLS = {"const_declaration": "const", "var_declaration": "var"}


def comment_text(comments: Iterable[str]) -> str:
    """Return the text of a comment group with comment markers removed.

    Line comments lose ``//`` and one following space; compiler directives such
    as ``//go:generate`` are dropped. Trailing whitespace is stripped, leading
    and trailing blank lines are removed and runs of blank lines collapse to
    one. Non-empty results end with a newline.
    """
    lines: List[str] = []
    for raw in comments:
        if raw.startswith("//"):
            body = raw[2:]
            if _DIRECTIVE.match(body) or body.startswith(_DIRECTIVE_PREFIXES):
                continue
            if body.startswith(" "):
                body = body[1:]
            lines.append(body)
        elif raw.startswith("/*"):
            lines.extend(raw[2:-2].split("\n"))
        else:
            lines.append(raw)

    cleaned: List[str] = []
    for line in lines:
        line = line.rstrip()
        if not line and (not cleaned or not cleaned[-1]):
            continue
        cleaned.append(line)
    while cleaned and not cleaned[-1]:
        cleaned.pop()
    if not cleaned:
        return ""
    return "\n".join(cleaned) + "\n"


def base_type_name(node: Optional[Node], source: SourceFile) -> Optional[str]:
    """Return the local type name behind pointers, parentheses and type arguments."""
    while node is not None:
        if node.type == "type_identifier":
            return source.text(node.start_byte, node.end_byte)
        if node.type in ("pointer_type", "parenthesized_type"):
            node = node.named_children[0] if node.named_children else None
        elif node.type == "generic_type":
            node = node.child_by_field_name("type")
        else:
            return None
    return None


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


class DeclarationClassifier:
    """Builds a :class:`PackageModel` from the parsed files of one package."""

    def __init__(self, fileset: FileSet, *, exported_only: bool = False) -> None:
        self.fileset = fileset
        self.exported_only = exported_only
        self.logger = get_logger("classifier")

    def classify(self, files: Sequence[ParsedFile]) -> PackageModel:
        if not files:
            raise ValueError("classify requires at least one parsed file")

        model = PackageModel(name=files[0].package, filenames=[parsed.name for parsed in files])
        declared = self._declared_types(files)
        package_docs: List[str] = []

        for parsed in files:
            source = self.fileset.file(parsed.name)
            for node in parsed.root.named_children:
                if node.type == "package_clause":
                    doc = self._doc(node, source)
                    if doc.strip():
                        package_docs.append(doc.strip())
                elif node.type in _VALUE_DECLS:
                    self._add_values(model, parsed.name, node, source, declared)
                elif node.type == "function_declaration":
                    self._add_function(model, parsed.name, node, source)
                elif node.type == "method_declaration":
                    self._add_method(model, parsed.name, node, source)
                elif node.type == "type_declaration":
                    self._add_types(model, parsed.name, node, source)

        model.doc = "\n\n".join(package_docs).strip()
        self.logger.debug(
            "Classified package %s: %d const, %d var, %d func, %d types",
            model.name,
            len(model.consts),
            len(model.vars),
            len(model.funcs),
            len(model.types),
        )
        return model

    def _declared_types(self, files: Sequence[ParsedFile]) -> Set[str]:
        names: Set[str] = set()
        for parsed in files:
            source = self.fileset.file(parsed.name)
            for node in parsed.root.named_children:
                if node.type != "type_declaration":
                    continue
                for spec in _type_specs(node):
                    name = _field_text(spec, "name", source)
                    if name and self._visible(name):
                        names.add(name)
        return names

    def _visible(self, name: str) -> bool:
        return is_exported(name) or not self.exported_only

    def _lookup_type(self, model: PackageModel, name: str) -> TypeDecl:
        entry = model.types.get(name)
        if entry is None:
            entry = TypeDecl(name=name)
            model.types[name] = entry
        return entry

    def _add_values(
        self,
        model: PackageModel,
        filename: str,
        node: Node,
        source: SourceFile,
        declared: Set[str],
    ) -> None:
        kind = _VALUE_DECLS[node.type]
        specs = _value_specs(node)
        names = [
            source.text(ident.start_byte, ident.end_byte)
            for spec in specs
            for ident in spec.children_by_field_name("name")
        ]
        if self.exported_only and not any(is_exported(name) for name in names):
            return

        group = ValueGroup(kind=kind, names=names, doc=self._doc(node, source), decl=SourceDecl(filename, node))
        owner = self._dominant_type(kind, specs, source)
        if owner and owner in declared:
            entry = self._lookup_type(model, owner)
            target = entry.consts if kind == "const" else entry.vars
        else:
            target = model.consts if kind == "const" else model.vars
        target.append(group)

    def _dominant_type(self, kind: str, specs: Sequence[Node], source: SourceFile) -> str:
        dominant = ""
        frequency = 0
        previous = ""
        for spec in specs:
            name = ""
            type_node = spec.child_by_field_name("type")
            if type_node is not None:
                name = base_type_name(type_node, source) or ""
            elif kind == "const" and spec.child_by_field_name("value") is None:
                # iota continuation repeats the previous spec's type
                name = previous
            if name:
                if dominant and dominant != name:
                    return ""
                dominant = name
                frequency += 1
            previous = name
        if dominant and frequency >= int(len(specs) * _TYPED_VALUE_THRESHOLD):
            return dominant
        return ""

    def _add_function(self, model: PackageModel, filename: str, node: Node, source: SourceFile) -> None:
        name = _field_text(node, "name", source)
        if not self._visible(name):
            return
        model.funcs.append(
            FuncDecl(name=name, recv="", doc=self._doc(node, source), decl=SourceDecl(filename, node))
        )

    def _add_method(self, model: PackageModel, filename: str, node: Node, source: SourceFile) -> None:
        name = _field_text(node, "name", source)
        recv = _receiver_type(node, source)
        if not recv:
            # Receivers of non-local types cannot carry methods; list as functions.
            self.logger.debug("Method %s has no local receiver type", name)
            model.funcs.append(
                FuncDecl(name=name, recv="", doc=self._doc(node, source), decl=SourceDecl(filename, node))
            )
            return
        if not (self._visible(name) and self._visible(recv)):
            return
        entry = self._lookup_type(model, recv)
        entry.funcs.append(
            FuncDecl(name=name, recv=recv, doc=self._doc(node, source), decl=SourceDecl(filename, node))
        )

    def _add_types(self, model: PackageModel, filename: str, node: Node, source: SourceFile) -> None:
        specs = _type_specs(node)
        grouped = len(specs) > 1
        decl_doc = self._doc(node, source)
        for spec in specs:
            name = _field_text(spec, "name", source)
            if not name or not self._visible(name):
                continue
            entry = self._lookup_type(model, name)
            if entry.decl is not None:
                self.logger.debug("Duplicate declaration of type %s in %s", name, filename)
                continue
            if grouped:
                doc = self._doc(spec, source)
                if not doc and decl_doc:
                    doc, decl_doc = decl_doc, ""
                entry.decl = SourceDecl(filename, spec, keyword="type")
            else:
                doc = decl_doc
                entry.decl = SourceDecl(filename, node)
            entry.doc = doc

    @staticmethod
    def _doc(node: Node, source: SourceFile) -> str:
        return comment_text(
            source.text(comment.start_byte, comment.end_byte) for comment in _leading_comments(node)
        )


def _leading_comments(node: Node) -> List[Node]:
    """Return the comment group ending on the line directly above ``node``."""
    group: List[Node] = []
    anchor_row = node.start_point[0]
    sibling = node.prev_named_sibling
    while sibling is not None and sibling.type == "comment":
        gap = anchor_row - sibling.end_point[0]
        if gap > 1 or (not group and gap != 1):
            break
        before = sibling.prev_named_sibling
        if before is not None and before.type != "comment" and before.end_point[0] == sibling.start_point[0]:
            # trailing comment of the preceding code
            break
        group.append(sibling)
        anchor_row = sibling.start_point[0]
        sibling = before
    group.reverse()
    return group


def _value_specs(node: Node) -> List[Node]:
    specs: List[Node] = []
    for child in node.named_children:
        if child.type in ("const_spec", "var_spec"):
            specs.append(child)
        elif child.type == "var_spec_list":
            specs.extend(spec for spec in child.named_children if spec.type == "var_spec")
    return specs


def _type_specs(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type in _TYPE_SPECS]


def _field_text(node: Node, field: str, source: SourceFile) -> str:
    child = node.child_by_field_name(field)
    if child is None:
        return ""
    return source.text(child.start_byte, child.end_byte)


def _receiver_type(node: Node, source: SourceFile) -> str:
    receiver = node.child_by_field_name("receiver")
    if receiver is None:
        return ""
    for param in receiver.named_children:
        if param.type == "parameter_declaration":
            return base_type_name(param.child_by_field_name("type"), source) or ""
    return ""


__all__ = ["DeclarationClassifier", "base_type_name", "comment_text", "is_exported"]
