"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy repository initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from postctl.config.settings import PostSettings
    from postctl.infrastructure.repository import ContentRepository
    from postctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The repository is created on first use so ``--help`` and
    ``--version`` never touch the content tree.
    """

    def __init__(self, settings: PostSettings) -> None:
        self.settings = settings
        self._repo: ContentRepository | None = None

        from postctl.config.logging import bind_content_root, configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_content_root(str(settings.content_root))

    @property
    def repo(self) -> ContentRepository:
        """The content repository (created lazily on first access)."""
        if self._repo is None:
            from postctl.infrastructure.repository import ContentRepository

            self._repo = ContentRepository(self.settings)
        return self._repo

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
