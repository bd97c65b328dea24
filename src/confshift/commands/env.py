"""Command: convert environment-variable lists between dialects."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from confshift.commands._base import ConfCommand, io_options

if TYPE_CHECKING:
    from confshift.commands._context import AppContext


@click.command(
    cls=ConfCommand,
    examples="""\
  confshift env idea dotenv vars.txt
  confshift env dotenv linux .env -o env.sh
  echo 'A=1;B=2' | confshift env idea dotenv""",
)
@click.argument("from_format", metavar="FROM")
@click.argument("to_format", metavar="TO")
@io_options
@click.pass_obj
def env(
    app: AppContext,
    from_format: str,
    to_format: str,
    source_file: TextIO,
    output_path: str | None,
) -> None:
    """Convert env variables from FROM to TO (idea, dotenv or linux).

    \b
    idea    KEY=value pairs, one per line or separated by ';'
    dotenv  .env file, values quoted where needed
    linux   export KEY="value" lines
    """
    result = app.convert_service.convert_env(source_file.read(), from_format, to_format)
    app.emit(result, output_path=output_path)
