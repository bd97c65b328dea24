"""Command: derive Spring Boot settings from a Docker Compose file."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from confshift.commands._base import ConfCommand, io_options
from confshift.domain.types import SpringOutput

if TYPE_CHECKING:
    from confshift.commands._context import AppContext


@click.command(
    cls=ConfCommand,
    examples="""\
  confshift compose docker-compose.yml
  confshift compose --to spring-properties docker-compose.yml -o application.properties
  confshift compose --to spring-env docker-compose.yml
  confshift compose --inspect docker-compose.yml""",
)
@click.option(
    "--to",
    "to_format",
    default=SpringOutput.YAML.value,
    show_default=True,
    help="Output: spring-yaml, spring-properties or spring-env.",
)
@click.option(
    "--inspect",
    is_flag=True,
    help="Show the detected MySQL/Redis settings instead of converting.",
)
@io_options
@click.pass_obj
def compose(
    app: AppContext,
    to_format: str,
    inspect: bool,
    source_file: TextIO,
    output_path: str | None,
) -> None:
    """Convert MySQL and Redis services of a Compose file to Spring config."""
    text = source_file.read()
    if inspect:
        result = app.convert_service.inspect_compose(text)
    else:
        result = app.convert_service.compose_to_spring(text, to_format)
    app.emit(result, output_path=output_path)
