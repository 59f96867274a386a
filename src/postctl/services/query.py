"""QueryService: read-only listing, retrieval, and tag statistics."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from postctl.domain.content import FrontmatterError, to_plain
from postctl.domain.tags import normalize_tag
from postctl.services.base import BaseService
from postctl.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from postctl.domain.content import Document
    from postctl.domain.frontmatter import BaseFrontmatter

logger = logging.getLogger(__name__)

DRAFT_FILTERS = ("include", "exclude", "only")
SORT_KEYS = ("date", "title")


class QueryService(BaseService):
    """Answers questions about the content tree without modifying it."""

    def list_documents(
        self,
        *,
        kind: str | None = None,
        tag: str | None = None,
        drafts: str = "include",
        sort: str = "date",
        limit: int | None = None,
    ) -> ServiceResult:
        """List documents with optional kind, tag, and draft filters.

        ``sort="date"`` puts the newest first and undated documents last;
        ``sort="title"`` is case-insensitive alphabetical.
        """
        if drafts not in DRAFT_FILTERS:
            return ServiceResult.failure(
                "list_documents",
                ErrorCode.INVALID_ARGUMENT,
                f"drafts must be one of {DRAFT_FILTERS}",
            )
        if sort not in SORT_KEYS:
            return ServiceResult.failure(
                "list_documents", ErrorCode.INVALID_ARGUMENT, f"sort must be one of {SORT_KEYS}"
            )

        valid, warnings = self._valid_documents()
        wanted_tag = normalize_tag(tag) if tag else None

        items: list[dict[str, Any]] = []
        for doc, model in valid:
            if kind and doc.kind != kind:
                continue
            if drafts == "exclude" and model.draft:
                continue
            if drafts == "only" and not model.draft:
                continue
            if wanted_tag and wanted_tag not in {normalize_tag(t) for t in model.all_tags()}:
                continue
            items.append(doc.summary(model))

        if sort == "title":
            items.sort(key=lambda i: i["title"].casefold())
        else:
            dated = sorted((i for i in items if i["date"]), key=lambda i: i["date"], reverse=True)
            items = dated + [i for i in items if not i["date"]]

        total = len(items)
        if limit is not None:
            items = items[:limit]

        return ServiceResult(
            ok=True,
            op="list_documents",
            data={"items": items, "count": len(items), "total": total},
            warnings=warnings,
        )

    def get_document(self, path: str) -> ServiceResult:
        """Return the metadata and body of one document by root-relative path."""
        try:
            resolved = self._repo.resolve(path)
        except ValueError as exc:
            return ServiceResult.failure("get", ErrorCode.NOT_FOUND, str(exc), path=path)
        if not resolved.is_file():
            return ServiceResult.failure(
                "get", ErrorCode.NOT_FOUND, f"No document at {path}", path=path
            )

        try:
            doc = self._repo.load(resolved)
        except FrontmatterError as exc:
            return ServiceResult.failure(
                "get", ErrorCode.MALFORMED_FRONTMATTER, str(exc), path=path, line=exc.line
            )
        except UnicodeDecodeError as exc:
            return ServiceResult.failure(
                "get", ErrorCode.UNREADABLE_FILE, f"not UTF-8 text: {exc.reason}", path=path
            )

        return ServiceResult(
            ok=True,
            op="get",
            data={
                "path": doc.path.as_posix(),
                "kind": str(doc.kind),
                "format": str(doc.format) if doc.format else None,
                "frontmatter": to_plain(doc.frontmatter),
                "body": doc.body,
            },
        )

    def tag_counts(self, *, kind: str | None = None) -> ServiceResult:
        """Count documents per normalized tag, most used first."""
        valid, warnings = self._valid_documents()
        counts: Counter[str] = Counter()
        for doc, model in valid:
            if kind and doc.kind != kind:
                continue
            counts.update({normalize_tag(t) for t in model.all_tags() if t.strip()})

        items = [
            {"tag": tag, "count": n}
            for tag, n in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        ]
        return ServiceResult(
            ok=True,
            op="tags",
            data={"items": items, "count": len(items)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _valid_documents(self) -> tuple[list[tuple[Document, BaseFrontmatter]], list[str]]:
        """Load documents whose front matter validates; describe the rest as warnings."""
        report = self._repo.load_all()
        warnings = [f"Skipped {f.path.as_posix()}: {f.message}" for f in report.failures]
        valid: list[tuple[Document, BaseFrontmatter]] = []
        for doc in report.documents:
            if doc.format is None:
                warnings.append(f"Skipped {doc.path.as_posix()}: no front matter")
                continue
            try:
                valid.append((doc, doc.model()))
            except ValidationError as exc:
                logger.debug("Invalid front matter in %s", doc.path, exc_info=True)
                warnings.append(
                    f"Skipped {doc.path.as_posix()}: {exc.error_count()} schema error(s)"
                )
        return valid, warnings

