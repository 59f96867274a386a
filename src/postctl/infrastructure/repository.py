"""ContentRepository: the single dependency injected into every service.

Owns the content root and the discovery settings, loads documents from
disk, and coordinates rewrites. The :meth:`transaction` context manager
tracks every file written inside it so that, if any step fails, modified
files are restored to their original text.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from postctl.domain.content import Document, FrontmatterError
from postctl.infrastructure.filesystem import (
    find_documents,
    read_text,
    resolve_document_path,
    write_text,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from postctl.config.settings import PostSettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Load results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoadFailure:
    """A file that was discovered but could not be turned into a Document."""

    path: Path
    code: str
    message: str
    line: int | None = None


@dataclass(frozen=True)
class LoadReport:
    """Outcome of loading every discovered file."""

    documents: list[Document] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)


# ---------------------------------------------------------------------------
# File operation tracking for compensation-based rollback
# ---------------------------------------------------------------------------


@dataclass
class _FileOp:
    """A tracked file write within a repository transaction."""

    path: Path
    backup: str | None  # original text for rewrites, None for creates

    def rollback(self) -> None:
        """Undo this file operation (best-effort)."""
        try:
            if self.backup is not None:
                self.path.write_text(self.backup, encoding="utf-8")
            else:
                self.path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to roll back file write: %s", self.path)


@dataclass
class RepositoryTransaction:
    """Active transaction with tracked file I/O.

    All writes must go through :meth:`write_file` so the repository can
    compensate on rollback.
    """

    _repo: ContentRepository
    _file_ops: list[_FileOp] = field(default_factory=list, repr=False)

    def write_file(self, path: Path, content: str) -> None:
        """Write *content* to *path*, backing up any existing text first."""
        backup: str | None = None
        if path.exists():
            backup = read_text(path)
        write_text(path, content)
        self._file_ops.append(_FileOp(path=path, backup=backup))

    def write_document(self, document: Document, content: str) -> None:
        """Rewrite *document* in place with *content*."""
        self.write_file(self._repo.root / document.path, content)

    @property
    def written(self) -> list[Path]:
        return [op.path for op in self._file_ops]


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ContentRepository:
    """Read access to the content tree plus transactional rewrites."""

    def __init__(self, settings: PostSettings) -> None:
        self.settings = settings
        self.root = settings.content_root.resolve()

    def find_documents(self) -> list[Path]:
        """Absolute paths of every document file under the content root."""
        cfg = self.settings.content
        return find_documents(
            self.root,
            dirs=cfg.dirs,
            extensions=cfg.extensions,
            skip_dirs=cfg.skip_dirs,
        )

    def relative(self, path: Path) -> Path:
        return path.resolve().relative_to(self.root)

    def resolve(self, relative: str | Path) -> Path:
        """Resolve a root-relative path; raises ``ValueError`` on traversal."""
        return resolve_document_path(self.root, relative)

    def load(self, path: Path) -> Document:
        """Read and parse one file.

        Raises:
            FrontmatterError: The metadata block is malformed.
            UnicodeDecodeError: The file is not UTF-8 text.
        """
        return Document.from_text(self.relative(path), read_text(path))

    def load_all(self, paths: Sequence[Path] | None = None) -> LoadReport:
        """Load documents, collecting failures instead of raising.

        Loads every discovered document, or just *paths* (absolute) when given.
        """
        report = LoadReport()
        for path in self.find_documents() if paths is None else paths:
            rel = self.relative(path)
            try:
                report.documents.append(self.load(path))
            except FrontmatterError as exc:
                report.failures.append(
                    LoadFailure(rel, "malformed_frontmatter", str(exc), line=exc.line)
                )
            except UnicodeDecodeError as exc:
                report.failures.append(
                    LoadFailure(rel, "unreadable_file", f"not UTF-8 text: {exc.reason}")
                )
        logger.debug(
            "Loaded %d documents (%d failures) from %s",
            len(report.documents),
            len(report.failures),
            self.root,
        )
        return report

    @contextmanager
    def transaction(self) -> Iterator[RepositoryTransaction]:
        """Yield a transaction; restore every written file if the block raises."""
        txn = RepositoryTransaction(_repo=self)
        try:
            yield txn
        except Exception:
            for op in reversed(txn._file_ops):
                op.rollback()
            raise
