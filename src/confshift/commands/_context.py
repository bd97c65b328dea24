"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Builds the services from the resolved settings and
centralizes result emission (stdout/stderr routing, output files and
exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from confshift.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from confshift.config.settings import ConfshiftSettings
    from confshift.services.convert import ConvertService
    from confshift.services.preferences import PreferencesService
    from confshift.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  Services are created
    on first use so ``--help`` and ``--version`` stay cheap.
    """

    def __init__(self, settings: ConfshiftSettings) -> None:
        self.settings = settings
        self._convert: ConvertService | None = None
        self._preferences: PreferencesService | None = None

        from confshift.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def convert_service(self) -> ConvertService:
        if self._convert is None:
            from confshift.services.convert import ConvertService

            self._convert = ConvertService(compose_host=self.settings.compose.host)
        return self._convert

    @property
    def preferences_service(self) -> PreferencesService:
        if self._preferences is None:
            from confshift.services.preferences import PreferencesService

            self._preferences = PreferencesService(self.settings.preferences)
        return self._preferences

    def emit(self, result: ServiceResult, *, output_path: str | None = None) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, or to *output_path*
          when given, and returns normally. Warnings are emitted to stderr
          so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1. Nothing is written
          to *output_path*.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(1)

        if output_path:
            try:
                Path(output_path).write_text(output + "\n", encoding="utf-8")
            except OSError as exc:
                click.echo(f"ERROR: cannot write {output_path}: {exc}", err=True)
                raise SystemExit(1) from exc
        else:
            click.echo(output)

        # In JSON mode, warnings are already in the serialized payload.
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
