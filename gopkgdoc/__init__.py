"""Documentation extraction for Go source packages."""

from .errors import FilterExhaustionError, GoDocError, ParseError
from .models import PackageDocs, PackageIdentity, TypeDocs
from .pipeline import make_docs

__all__ = [
    "FilterExhaustionError",
    "GoDocError",
    "PackageDocs",
    "PackageIdentity",
    "ParseError",
    "TypeDocs",
    "make_docs",
]
