"""CheckService: front-matter linting and repair.

Single command following the linter pattern. Three categories:
front-matter syntax, schema validation, and content rules.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from pydantic import ValidationError

from postctl.domain.content import order_frontmatter, render_frontmatter
from postctl.domain.tags import dedupe_tags, find_duplicates
from postctl.domain.types import FrontmatterFormat
from postctl.services._helpers import today
from postctl.services.base import BaseService
from postctl.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date
    from pathlib import Path

    from postctl.domain.content import Document
    from postctl.domain.frontmatter import BaseFrontmatter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

_SEVERITY_RANK = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}

CAT_SYNTAX = "frontmatter_syntax"
CAT_SCHEMA = "schema_validation"
CAT_CONTENT = "content_rules"

_TAG_FIELDS = ("tags", "tools")
_ORG_FIELDS = ("employer", "client")


def _issue(
    path: Path,
    category: str,
    severity: str,
    code: str,
    message: str,
    *,
    field: str | None = None,
) -> dict[str, Any]:
    return {
        "path": path.as_posix(),
        "category": category,
        "severity": severity,
        "code": code,
        "field": field,
        "message": message,
    }


def _is_http_url(link: str) -> bool:
    parsed = urlparse(link)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


# ---------------------------------------------------------------------------
# CheckService
# ---------------------------------------------------------------------------


class CheckService(BaseService):
    """Handles document linting and front-matter repair."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check(
        self,
        *,
        min_severity: str = SEVERITY_WARNING,
        strict: bool = False,
        paths: Sequence[str] = (),
    ) -> ServiceResult:
        """Report issues without modifying anything.

        Args:
            min_severity: Hide issues ranked below this severity.
            strict: Fail the result when any error-level issue remains.
            paths: Root-relative files to check instead of the whole tree.
        """
        if min_severity not in _SEVERITY_RANK:
            return ServiceResult.failure(
                "check",
                ErrorCode.INVALID_ARGUMENT,
                f"min_severity must be one of {tuple(_SEVERITY_RANK)}",
            )
        try:
            tag_pattern = re.compile(self._settings.lint.tag_pattern)
        except re.error as exc:
            return ServiceResult.failure(
                "check",
                ErrorCode.INVALID_CONFIG,
                f"lint.tag_pattern is not a valid regular expression: {exc}",
                tag_pattern=self._settings.lint.tag_pattern,
            )

        selected: list[Path] | None = None
        if paths:
            selected = []
            for rel in paths:
                try:
                    resolved = self._repo.resolve(rel)
                except ValueError as exc:
                    return ServiceResult.failure("check", ErrorCode.NOT_FOUND, str(exc), path=rel)
                if not resolved.is_file():
                    return ServiceResult.failure(
                        "check", ErrorCode.NOT_FOUND, f"No document at {rel}", path=rel
                    )
                if resolved not in selected:
                    selected.append(resolved)

        report = self._repo.load_all(selected)
        issues: list[dict[str, Any]] = [
            _issue(
                f.path,
                CAT_SYNTAX,
                SEVERITY_ERROR,
                f.code,
                f"{f.message} (line {f.line})" if f.line else f.message,
            )
            for f in report.failures
        ]

        current = today()
        for doc in report.documents:
            issues.extend(self._lint_document(doc, tag_pattern=tag_pattern, current=current))

        threshold = _SEVERITY_RANK[min_severity]
        issues = [i for i in issues if _SEVERITY_RANK[i["severity"]] >= threshold]
        issues.sort(key=lambda i: i["path"])

        error_count = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        warning_count = len(issues) - error_count
        data = {
            "issues": issues,
            "count": len(issues),
            "error_count": error_count,
            "warning_count": warning_count,
            "documents_checked": len(report.documents) + len(report.failures),
            "healthy": error_count == 0,
        }
        logger.debug("Lint finished: %d errors, %d warnings", error_count, warning_count)

        if strict and error_count:
            failing = len({i["path"] for i in issues if i["severity"] == SEVERITY_ERROR})
            return ServiceResult.failure(
                "check",
                ErrorCode.LINT_FAILED,
                f"{error_count} error(s) in {failing} document(s)",
                data=data,
                error_count=error_count,
                warning_count=warning_count,
            )
        return ServiceResult(ok=True, op="check", data=data)

    def fix(self, *, level: str = "safe") -> ServiceResult:
        """Rewrite YAML front matter in canonical form. Level: 'safe' or 'aggressive'.

        ``safe`` reorders keys; ``aggressive`` also normalizes and
        de-duplicates ``tags`` and ``tools``.
        """
        report = self._repo.load_all()
        warnings = [f"Skipped {f.path.as_posix()}: {f.message}" for f in report.failures]
        fixes: list[str] = []

        with self._repo.transaction() as txn:
            for doc in report.documents:
                if doc.format is FrontmatterFormat.TOML:
                    warnings.append(
                        f"Skipped {doc.path.as_posix()}: TOML front matter is not rewritten"
                    )
                    continue
                if doc.format is None:
                    continue

                fm = order_frontmatter(doc.frontmatter)
                changes: list[str] = []
                if level == "aggressive":
                    changes.extend(self._normalize_tag_fields(fm))
                if list(doc.frontmatter.keys()) != list(fm.keys()):
                    changes.append("reordered keys")
                if not changes:
                    continue

                text = render_frontmatter(fm, doc.body, newline=doc.newline)
                txn.write_document(doc, text)
                logger.info("Rewrote front matter of %s", doc.path)
                fixes.append(f"{doc.path.as_posix()}: {', '.join(changes)}")

            written = [self._repo.relative(p).as_posix() for p in txn.written]

        return ServiceResult(
            ok=True,
            op="fix",
            data={"fixes": fixes, "count": len(fixes), "files_written": written},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Linting
    # ------------------------------------------------------------------

    def _lint_document(
        self,
        doc: Document,
        *,
        tag_pattern: re.Pattern[str],
        current: date,
    ) -> list[dict[str, Any]]:
        if doc.format is None:
            return [
                _issue(
                    doc.path,
                    CAT_SYNTAX,
                    SEVERITY_ERROR,
                    "missing_frontmatter",
                    "document has no front-matter block",
                )
            ]

        try:
            model = doc.model()
        except ValidationError as exc:
            return [
                _issue(
                    doc.path,
                    CAT_SCHEMA,
                    SEVERITY_ERROR,
                    "schema_violation",
                    err["msg"],
                    field=".".join(str(p) for p in err["loc"]) or None,
                )
                for err in exc.errors()
            ]

        issues = self._check_title(doc, model)
        issues.extend(self._check_date(doc, model, current))
        issues.extend(self._check_tags(doc, model, tag_pattern))
        issues.extend(self._check_links(doc, model))
        if not doc.body.strip():
            issues.append(
                _issue(doc.path, CAT_CONTENT, SEVERITY_WARNING, "empty_body", "body is empty")
            )
        return issues

    def _check_title(self, doc: Document, model: BaseFrontmatter) -> list[dict[str, Any]]:
        title = model.title.strip()
        if not title:
            return [
                _issue(
                    doc.path,
                    CAT_CONTENT,
                    SEVERITY_ERROR,
                    "empty_title",
                    "title is empty",
                    field="title",
                )
            ]
        limit = self._settings.lint.max_title_length
        if len(title) > limit:
            return [
                _issue(
                    doc.path,
                    CAT_CONTENT,
                    SEVERITY_WARNING,
                    "title_too_long",
                    f"title is {len(title)} characters (limit {limit})",
                    field="title",
                )
            ]
        return []

    def _check_date(
        self, doc: Document, model: BaseFrontmatter, current: date
    ) -> list[dict[str, Any]]:
        lint = self._settings.lint
        if model.date is None:
            severity = SEVERITY_ERROR if lint.require_date else SEVERITY_WARNING
            return [
                _issue(
                    doc.path, CAT_CONTENT, severity, "missing_date", "no date set", field="date"
                )
            ]
        if not model.draft and not lint.allow_future_dates and model.date > current:
            return [
                _issue(
                    doc.path,
                    CAT_CONTENT,
                    SEVERITY_WARNING,
                    "future_date",
                    f"published document is dated {model.date.isoformat()}, after today",
                    field="date",
                )
            ]
        return []

    def _check_tags(
        self, doc: Document, model: BaseFrontmatter, tag_pattern: re.Pattern[str]
    ) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for name in _TAG_FIELDS:
            values: list[str] = getattr(model, name, None) or []
            for tag in values:
                if not tag_pattern.match(tag):
                    issues.append(
                        _issue(
                            doc.path,
                            CAT_CONTENT,
                            SEVERITY_WARNING,
                            "tag_format",
                            f"{tag!r} does not match {tag_pattern.pattern}",
                            field=name,
                        )
                    )
            for dupe in find_duplicates(values):
                issues.append(
                    _issue(
                        doc.path,
                        CAT_CONTENT,
                        SEVERITY_WARNING,
                        "duplicate_tag",
                        f"{dupe!r} is listed more than once",
                        field=name,
                    )
                )
        return issues

    def _check_links(self, doc: Document, model: BaseFrontmatter) -> list[dict[str, Any]]:
        if not self._settings.lint.check_links:
            return []
        issues: list[dict[str, Any]] = []
        for name in _ORG_FIELDS:
            org = getattr(model, name, None)
            if org is None or org.link is None or _is_http_url(org.link):
                continue
            issues.append(
                _issue(
                    doc.path,
                    CAT_CONTENT,
                    SEVERITY_WARNING,
                    "invalid_link",
                    f"{org.link!r} is not an http(s) URL",
                    field=f"{name}.link",
                )
            )
        return issues

    # ------------------------------------------------------------------
    # Repair
    # ------------------------------------------------------------------

    @staticmethod
    def _normalize_tag_fields(fm: dict[str, Any]) -> list[str]:
        changes: list[str] = []
        for name in _TAG_FIELDS:
            value = fm.get(name)
            if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
                continue
            cleaned = dedupe_tags(value)
            if cleaned != [str(t) for t in value]:
                fm[name] = cleaned
                changes.append(f"normalized {name}")
        return changes
