"""Command group: listing, retrieval, and tag statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostGroup
from postctl.services.query import DRAFT_FILTERS, SORT_KEYS, QueryService

if TYPE_CHECKING:
    from postctl.commands._context import AppContext

_QUERY_EXAMPLES = """\
  postctl query list
  postctl query list --kind work --sort date
  postctl query get posts/higher-order-functions.md
  postctl query tags"""

_KINDS = click.Choice(["post", "work"])


@click.group(cls=PostGroup, examples=_QUERY_EXAMPLES)
@click.pass_obj
def query(app: AppContext) -> None:
    """List, show, and summarize documents."""


@query.command(
    "list",
    examples="""\
  postctl query list
  postctl query list --tag python --drafts exclude
  postctl query list --kind work
  postctl query list --sort title --limit 10
  postctl --json query list --drafts only""",
)
@click.option("--kind", type=_KINDS, default=None, help="Filter by document kind.")
@click.option("--tag", default=None, help="Filter by tag (case-insensitive).")
@click.option(
    "--drafts",
    type=click.Choice(DRAFT_FILTERS),
    default="include",
    help="Include, exclude, or show only drafts.",
)
@click.option("--sort", type=click.Choice(SORT_KEYS), default="date", help="Sort order.")
@click.option("--limit", default=None, type=click.IntRange(min=1), help="Max results.")
@click.pass_obj
def list_cmd(
    app: AppContext,
    kind: str | None,
    tag: str | None,
    drafts: str,
    sort: str,
    limit: int | None,
) -> None:
    """List documents, newest first."""
    svc = QueryService(app.repo)
    app.emit(svc.list_documents(kind=kind, tag=tag, drafts=drafts, sort=sort, limit=limit))


@query.command(
    examples="""\
  postctl query get posts/hello-world.md
  postctl --json query get work/acme.md""",
)
@click.argument("path")
@click.pass_obj
def get(app: AppContext, path: str) -> None:
    """Show one document's metadata and body."""
    app.emit(QueryService(app.repo).get_document(path))


@query.command(
    examples="""\
  postctl query tags
  postctl query tags --kind work
  postctl -q query tags""",
)
@click.option("--kind", type=_KINDS, default=None, help="Only count this document kind.")
@click.pass_obj
def tags(app: AppContext, kind: str | None) -> None:
    """Count documents per tag (tools count as tags for work entries)."""
    app.emit(QueryService(app.repo).tag_counts(kind=kind))
