"""Command group: remembered source/target format selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from confshift.commands._base import ConfGroup
from confshift.domain.types import SOURCE_FORMATS, TARGET_FORMATS

if TYPE_CHECKING:
    from confshift.commands._context import AppContext


@click.group(
    cls=ConfGroup,
    examples="""\
  confshift prefs show
  confshift prefs set --source compose --target spring-properties
  confshift prefs swap
  confshift prefs reset""",
)
@click.pass_obj
def prefs(app: AppContext) -> None:
    """Show or change the formats used by 'confshift run'."""


@prefs.command()
@click.pass_obj
def show(app: AppContext) -> None:
    """Show the saved source and target formats."""
    app.emit(app.preferences_service.show())


@prefs.command(
    "set",
    examples="""\
  confshift prefs set --source dotenv
  confshift prefs set --source yaml --target properties""",
)
@click.option("--source", default=None, help=f"One of: {', '.join(SOURCE_FORMATS)}.")
@click.option("--target", default=None, help=f"One of: {', '.join(TARGET_FORMATS)}.")
@click.pass_obj
def set_cmd(app: AppContext, source: str | None, target: str | None) -> None:
    """Save a new source and/or target format."""
    if source is None and target is None:
        click.echo("No changes specified. Use --source and/or --target.", err=True)
        raise SystemExit(1)
    app.emit(app.preferences_service.set(source=source, target=target))


@prefs.command()
@click.pass_obj
def swap(app: AppContext) -> None:
    """Exchange the saved source and target formats."""
    app.emit(app.preferences_service.swap())


@prefs.command()
@click.pass_obj
def reset(app: AppContext) -> None:
    """Forget the saved formats and return to the defaults."""
    app.emit(app.preferences_service.reset())
