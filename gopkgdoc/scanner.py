"""Package directory scanning and source file filtering."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .errors import FilterExhaustionError
from .logging import get_logger

SOURCE_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"
HIDDEN_PREFIX = "."

logger = get_logger("scanner")


def accept_file(name: str) -> bool:
    """Return True when ``name`` is a non-test, non-hidden Go source file."""
    return (
        not name.startswith(HIDDEN_PREFIX)
        and name.endswith(SOURCE_SUFFIX)
        and not name.endswith(TEST_SUFFIX)
    )


def scan_package(directory: Path) -> List[Path]:
    """Return the accepted source files of ``directory`` in sorted order."""
    root = Path(directory)
    if not root.exists():
        raise FileNotFoundError(f"Package path not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Package path is not a directory: {root}")

    files = sorted(
        (entry for entry in root.iterdir() if entry.is_file() and accept_file(entry.name)),
        key=lambda entry: entry.name,
    )
    if not files:
        raise FilterExhaustionError(root)
    logger.debug("Accepted %d source files in %s", len(files), root)
    return files


__all__ = ["accept_file", "scan_package"]
