"""Subcommand modules for confshift.

Provides register_commands() which uses deferred imports to keep
``confshift --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the conversion commands and the prefs group on the root CLI group."""
    from confshift.commands.compose import compose
    from confshift.commands.config_cmd import config_cmd
    from confshift.commands.env import env
    from confshift.commands.prefs import prefs
    from confshift.commands.run import run

    cli.add_command(config_cmd)
    cli.add_command(env)
    cli.add_command(compose)
    cli.add_command(run)
    cli.add_command(prefs)
