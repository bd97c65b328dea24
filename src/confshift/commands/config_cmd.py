"""Command: convert between .properties and simplified YAML."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from confshift.commands._base import ConfCommand, io_options

if TYPE_CHECKING:
    from confshift.commands._context import AppContext


@click.command(
    "config",
    cls=ConfCommand,
    examples="""\
  confshift config properties yaml application.properties
  confshift config yaml properties application.yml -o application.properties
  cat application.yml | confshift config yaml properties""",
)
@click.argument("from_format", metavar="FROM")
@click.argument("to_format", metavar="TO")
@io_options
@click.pass_obj
def config_cmd(
    app: AppContext,
    from_format: str,
    to_format: str,
    source_file: TextIO,
    output_path: str | None,
) -> None:
    """Convert a config document from FROM to TO (properties or yaml)."""
    result = app.convert_service.convert_config(source_file.read(), from_format, to_format)
    app.emit(result, output_path=output_path)
