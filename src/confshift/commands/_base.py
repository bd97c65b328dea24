"""Custom Click base classes with --examples support.

Provides ConfCommand and ConfGroup that accept an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class ConfCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class ConfGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = ConfCommand`` so all subcommands accept the
    ``examples`` parameter without an explicit ``cls=``.
    """

    command_class = ConfCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


P = ParamSpec("P")
R = TypeVar("R")


def io_options(func: Callable[P, R]) -> Callable[P, R]:
    """Apply the shared ``INPUT`` argument and ``-o/--output`` option."""
    func = click.option(
        "-o",
        "--output",
        "output_path",
        type=click.Path(dir_okay=False, writable=True),
        default=None,
        help="Write the result to FILE instead of stdout.",
    )(func)
    func = click.argument("source_file", metavar="[INPUT]", type=click.File("r"), default="-")(
        func
    )
    return func
