"""End-to-end documentation run for a single package."""

from __future__ import annotations

from typing import Optional

from .assembler import DocumentationAssembler
from .classifier import DeclarationClassifier
from .config import GoDocConfig
from .logging import get_logger
from .models import PackageDocs, PackageIdentity
from .parser import FileSet, GoParser, select_package
from .renderer import SourceRenderer

logger = get_logger("pipeline")


def make_docs(identity: PackageIdentity, config: Optional[GoDocConfig] = None) -> PackageDocs:
    """Parse, classify and render the documentation of ``identity``.

    Every call builds its own :class:`FileSet`, so concurrent callers never
    share mutable state. Raises :class:`~gopkgdoc.errors.FilterExhaustionError`
    or :class:`~gopkgdoc.errors.ParseError` when the package cannot be read.
    """
    config = config or GoDocConfig()
    directory = identity.resolve_directory(config.src_root)
    logger.info("Building documentation for %s from %s", identity.name, directory)

    fileset = FileSet()
    files = select_package(GoParser().parse_dir(directory, fileset))
    model = DeclarationClassifier(fileset, exported_only=config.filter.exported_only).classify(files)
    renderer = SourceRenderer(
        fileset,
        tab_width=config.render.tab_width,
        include_bodies=config.render.include_bodies,
    )
    return DocumentationAssembler(renderer).assemble(model, identity.name)


__all__ = ["make_docs"]
