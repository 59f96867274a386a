"""Subcommand modules for postctl.

Provides register_commands() which uses deferred imports to keep
``postctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from postctl.commands.query import query

    cli.add_command(query)

    # --- Standalone commands ---
    from postctl.commands.check import check

    cli.add_command(check)
