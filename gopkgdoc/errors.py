"""Exceptions raised by the documentation pipeline."""

from __future__ import annotations

from pathlib import Path


class GoDocError(RuntimeError):
    """Base class for failures that abort a documentation run."""


class FilterExhaustionError(GoDocError):
    """Raised when a package directory holds no eligible Go source files."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)
        super().__init__(f"No buildable Go source files in {self.directory}")


class ParseError(GoDocError):
    """Raised when an accepted source file cannot be read or parsed."""

    def __init__(self, filename: str, cause: str) -> None:
        self.filename = filename
        self.cause = cause
        super().__init__(f"Failed to parse {filename}: {cause}")


__all__ = ["FilterExhaustionError", "GoDocError", "ParseError"]
