"""Command: convert using the saved source/target preferences."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from confshift.commands._base import ConfCommand, io_options

if TYPE_CHECKING:
    from confshift.commands._context import AppContext


@click.command(
    cls=ConfCommand,
    examples="""\
  confshift prefs set --source properties --target yaml
  confshift run application.properties
  confshift run --reverse application.yml""",
)
@click.option(
    "--reverse",
    is_flag=True,
    help="Convert from the saved target back to the saved source.",
)
@io_options
@click.pass_obj
def run(
    app: AppContext,
    reverse: bool,
    source_file: TextIO,
    output_path: str | None,
) -> None:
    """Convert INPUT from the saved source format to the saved target format."""
    prefs = app.preferences_service.load()
    source, target = prefs.source_format, prefs.target_format
    if reverse:
        source, target = target, source
    result = app.convert_service.convert(source_file.read(), source, target)
    app.emit(result, output_path=output_path)
