"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from postctl.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from postctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    # For listings, return one path (or tag) per line
    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(_extract_key(item) for item in items if _extract_key(item))

    paths = sorted({i["path"] for i in result.data.get("issues", [])})
    if paths:
        return "\n".join(paths)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_key(item: Any) -> str:
    if isinstance(item, dict):
        for key in ("path", "tag"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="post.ok")
    op = Text(f"  {result.op}", style="post.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="post.key")
    if key == "path":
        v = Text(str(value), style="post.path")
    elif key == "title":
        v = Text(str(value), style="post.title")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    if result.data.get("issues"):
        _render_issues(result.data["issues"], console, verbose=verbose)
        console.print()

    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="post.error")
    op = Text(f"  {result.op}", style="post.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Check renderers ───────────────────────────────────────────────────


def _render_issues(
    issues: list[dict[str, Any]], console: Console, *, verbose: bool = False
) -> None:
    """Print issues grouped by document path."""
    severity_styles = {"error": "post.error", "warning": "post.warning"}

    by_path: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_path.setdefault(str(issue.get("path", "?")), []).append(issue)

    for path, path_issues in by_path.items():
        console.print(f"\n[post.path]{escape(path)}[/post.path]")
        for issue in path_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            where = f" {issue['field']}" if issue.get("field") else ""
            console.print(f"  {prefix} [dim]{issue.get('code', '')}[/dim]{escape(where)}: ", end="")
            console.print(Text(str(issue.get("message", ""))))
            if verbose:
                console.print(f"    [dim]category: {issue.get('category', '')}[/dim]")


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by document."""
    issues = result.data.get("issues", [])
    checked = result.data.get("documents_checked", 0)

    if not issues:
        console.print(f"[post.ok]OK[/post.ok]  No issues found in {checked} documents.")
        return

    _render_issues(issues, console, verbose=verbose)
    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", 0)
    console.print(f"\n{errors} errors, {warnings} warnings in {checked} documents")


def _render_fix(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    fixes = result.data.get("fixes", [])
    _field(console, "fixes_applied", result.data.get("count", len(fixes)))
    if verbose:
        for fix in fixes:
            console.print(Text(f"  - {fix}"))


# ── Query renderers ───────────────────────────────────────────────────


def _render_document_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render list_documents results as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Path", style="post.path", no_wrap=True)
    table.add_column("Title", style="post.title")
    table.add_column("Kind")
    table.add_column("Date", no_wrap=True)
    table.add_column("Draft")
    if verbose:
        table.add_column("Tags", style="dim")

    for item in items:
        kind = str(item.get("kind", ""))
        row: list[Text | str] = [
            Text(str(item.get("path", ""))),
            Text(str(item.get("title", ""))),
            Text(kind, style=style_for_kind(kind)),
            str(item.get("date") or "—"),
            Text("draft", style="post.draft") if item.get("draft") else "",
        ]
        if verbose:
            row.append(Text(", ".join(item.get("tags", []))))
        table.add_row(*row)

    console.print(table)
    total = result.data.get("total", len(items))
    shown = result.data.get("count", len(items))
    suffix = f" of {total}" if total != shown else ""
    console.print(f"\n{shown}{suffix} documents")


def _render_document(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single document as a panel with its metadata."""
    d = result.data
    fm = d.get("frontmatter", {})

    lines: list[str] = [f"kind: {d.get('kind')}"]
    for key, value in fm.items():
        if key == "title":
            continue
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        elif isinstance(value, dict):
            value = _json.dumps(value, separators=(",", ":"))
        lines.append(f"{key}: {value}")

    content = Text("\n".join(lines))
    body = d.get("body", "")
    if body.strip():
        content.append("\n\n")
        content.append(body.strip())

    title = f"{d.get('path', '?')} — {fm.get('title', 'Untitled')}"
    style = style_for_kind(str(d.get("kind", "")))
    console.print(Panel(content, title=escape(title), border_style=style or "dim", expand=False))


def _render_tags(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Tag")
    table.add_column("Documents", style="post.count", justify="right")
    for item in items:
        table.add_row(Text(str(item.get("tag", ""))), str(item.get("count", 0)))
    console.print(table)
    console.print(f"\n{len(items)} tags")


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Check
    "check": _render_check,
    "fix": _render_fix,
    # Query
    "list_documents": _render_document_table,
    "get": _render_document,
    "tags": _render_tags,
}
