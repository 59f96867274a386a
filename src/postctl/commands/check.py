"""Command: front-matter linting and repair."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postctl check
  postctl check --errors-only
  postctl check --strict
  postctl check --strict posts/new-post.md
  postctl --json check --min-severity error
  postctl check --fix
  postctl check --fix --level aggressive""",
)
@click.argument("paths", nargs=-1)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.option("--strict", is_flag=True, help="Exit with status 1 when errors are found.")
@click.option("--fix", is_flag=True, help="Rewrite YAML front matter in canonical form.")
@click.option(
    "--level",
    type=click.Choice(["safe", "aggressive"]),
    default="safe",
    help="Repair aggressiveness level.",
)
@click.pass_obj
def check(
    app: AppContext,
    paths: tuple[str, ...],
    min_severity: str,
    errors_only: bool,
    strict: bool,
    fix: bool,
    level: str,
) -> None:
    """Lint document front matter and optionally repair it.

    PATHS limits the check to specific files, relative to the content root.
    """
    from postctl.services.check import CheckService

    svc = CheckService(app.repo)

    if fix:
        if paths:
            raise click.UsageError("--fix rewrites the whole tree; it does not take PATHS.")
        app.emit(svc.fix(level=level))
    else:
        threshold = "error" if errors_only else min_severity
        app.emit(svc.check(min_severity=threshold, strict=strict, paths=paths))
