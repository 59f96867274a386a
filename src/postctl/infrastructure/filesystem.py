"""Filesystem operations for content discovery.

INVARIANT: Files are truth. postctl keeps no index; every command reads
the documents fresh from disk.

Pure parsing utilities live in :mod:`postctl.domain.content`
(correct dependency direction: infrastructure -> domain). This module
handles actual file I/O, path resolution, and file discovery.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read a document as UTF-8 with its line endings untouched.

    Propagates ``UnicodeDecodeError``.
    """
    return path.read_bytes().decode("utf-8")


def write_text(path: Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")


def resolve_document_path(root: Path, relative: str | Path) -> Path:
    """Resolve *relative* against *root*, refusing paths that escape it.

    Raises:
        ValueError: The resolved path lies outside *root*.
    """
    result = (root / relative).resolve()
    if not result.is_relative_to(root.resolve()):
        msg = f"Path escapes content root: {relative}"
        raise ValueError(msg)
    return result


def find_documents(
    root: Path,
    *,
    dirs: Iterable[str] = (".",),
    extensions: Iterable[str] = (".md", ".markdown"),
    skip_dirs: Iterable[str] = (),
) -> list[Path]:
    """Discover document files under *root*.

    Walks each entry of *dirs* (relative to *root*), keeping files whose
    suffix is in *extensions*. Hidden directories and any directory named
    in *skip_dirs* are pruned, as are files (symlinks included) that resolve
    outside *root*. Returns absolute, sorted, de-duplicated paths.
    """
    suffixes = {ext.lower() for ext in extensions}
    skipped = frozenset(skip_dirs)
    resolved_root = root.resolve()

    found: set[Path] = set()
    for entry in dirs:
        search_root = (root / entry).resolve()
        if not search_root.is_dir() or not search_root.is_relative_to(resolved_root):
            continue
        for path in search_root.rglob("*"):
            if not path.is_file() or path.suffix.lower() not in suffixes:
                continue
            rel_parts = path.relative_to(search_root).parts[:-1]
            if any(part in skipped or part.startswith(".") for part in rel_parts):
                continue
            if not path.resolve().is_relative_to(resolved_root):
                logger.debug("Skipping %s: resolves outside %s", path, resolved_root)
                continue
            found.add(path)

    return sorted(found)
