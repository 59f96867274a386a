"""Tests for the Rich renderers."""

from postctl.output.renderers import render_quiet, render_result
from postctl.services.result import ServiceError, ServiceResult


def _issue(path: str, severity: str, code: str, field: str | None = None) -> dict[str, object]:
    return {
        "path": path,
        "category": "content_rules",
        "severity": severity,
        "code": code,
        "field": field,
        "message": f"{code} happened",
    }


class TestRenderCheck:
    def test_no_issues(self) -> None:
        result = ServiceResult(
            ok=True, op="check", data={"issues": [], "count": 0, "documents_checked": 4}
        )
        assert render_result(result) == "OK  No issues found in 4 documents."

    def test_issues_grouped_by_path(self) -> None:
        issues = [
            _issue("a.md", "error", "empty_title", "title"),
            _issue("a.md", "warning", "empty_body"),
            _issue("b.md", "warning", "tag_format", "tags"),
        ]
        result = ServiceResult(
            ok=True,
            op="check",
            data={
                "issues": issues,
                "count": 3,
                "error_count": 1,
                "warning_count": 2,
                "documents_checked": 2,
            },
        )
        output = render_result(result)
        assert output.index("a.md") < output.index("b.md")
        assert output.count("a.md") == 1
        assert "error empty_title title: empty_title happened" in output
        assert "1 errors, 2 warnings in 2 documents" in output

    def test_verbose_shows_category(self) -> None:
        result = ServiceResult(
            ok=True,
            op="check",
            data={"issues": [_issue("a.md", "warning", "empty_body")], "documents_checked": 1},
        )
        assert "category: content_rules" in render_result(result, verbose=True)

    def test_strict_failure_lists_issues_then_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="check",
            data={"issues": [_issue("a.md", "error", "empty_title", "title")]},
            error=ServiceError(code="LINT_FAILED", message="1 error(s) in 1 document(s)"),
        )
        output = render_result(result)
        assert output.index("a.md") < output.index("ERROR")
        assert "1 error(s) in 1 document(s)" in output


class TestRenderQueries:
    def test_document_table(self) -> None:
        items = [
            {
                "path": "posts/a.md",
                "title": "Alpha",
                "kind": "post",
                "date": "2020-01-01",
                "draft": True,
                "tags": ["x"],
            },
            {
                "path": "about.md",
                "title": "About",
                "kind": "post",
                "date": None,
                "draft": False,
                "tags": [],
            },
        ]
        result = ServiceResult(
            ok=True, op="list_documents", data={"items": items, "count": 2, "total": 5}
        )
        output = render_result(result)
        assert "posts/a.md" in output
        assert "Alpha" in output
        assert "draft" in output
        assert "2 of 5 documents" in output

    def test_document_panel(self) -> None:
        result = ServiceResult(
            ok=True,
            op="get",
            data={
                "path": "work/acme.md",
                "kind": "work",
                "format": "yaml",
                "frontmatter": {
                    "title": "Engineer",
                    "employer": {"name": "Acme"},
                    "tools": ["go", "sql"],
                },
                "body": "Did [things].\n",
            },
        )
        output = render_result(result)
        assert "work/acme.md — Engineer" in output
        assert "tools: go, sql" in output
        assert '{"name":"Acme"}' in output
        assert "Did [things]." in output

    def test_tags_table(self) -> None:
        result = ServiceResult(
            ok=True, op="tags", data={"items": [{"tag": "python", "count": 2}], "count": 1}
        )
        output = render_result(result)
        assert "python" in output
        assert "1 tags" in output


class TestRenderQuiet:
    def test_tags(self) -> None:
        result = ServiceResult(ok=True, op="tags", data={"items": [{"tag": "go", "count": 1}]})
        assert render_quiet(result) == "go"

    def test_check_paths(self) -> None:
        issues = [_issue("b.md", "error", "x"), _issue("a.md", "warning", "y")]
        result = ServiceResult(ok=True, op="check", data={"issues": issues})
        assert render_quiet(result) == "a.md\nb.md"

    def test_nothing_to_list(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="fix", data={"count": 0})) == "OK: fix"

    def test_error(self) -> None:
        result = ServiceResult(ok=False, op="get", error=ServiceError(code="X", message="nope"))
        assert render_quiet(result) == "ERROR: get — nope"
