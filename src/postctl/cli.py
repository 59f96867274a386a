"""Root CLI group for postctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from postctl import __version__
from postctl.commands import register_commands
from postctl.commands._context import AppContext
from postctl.config.settings import PostSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="postctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (paths only).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--root",
    "content_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Content root (default: directory of postctl.toml, else CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    content_root: Path | None,
) -> None:
    """postctl — lint and query blog front matter."""
    ctx.ensure_object(dict)
    settings = PostSettings.from_cli(
        config_path=config_path,
        content_root=content_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
