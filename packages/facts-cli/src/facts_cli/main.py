"""CLI entry point for facts-runtime.

Subcommands are imported only when invoked so that ``facts --help`` does
not pay for loading compiler collaborators.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from facts_cli import __version__
from facts_cli.output import set_no_color
from facts_core.observability import configure_logging

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that imports subcommands on first use.

    Attributes:
        lazy_subcommands: Mapping of command names to "module.attr" paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_name, attr_name = self.lazy_subcommands[cmd_name].rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "compile": "facts_cli.commands.compile.compile_cmd",
    "extensions": "facts_cli.commands.extensions.extensions",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="facts")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Log source resolution and compiler events.",
)
def cli(verbose: bool) -> None:
    """Facts - compile CQL fact models.

    Read CQL (or FIML, FIDL, FIQL) source and hand it to a compiler.

    **Getting Started:**

    - `facts compile model.cql` - Compile a source file
    - `cat model.cql | facts compile -.cql` - Compile standard input
    - `facts extensions` - List recognised source extensions
    """
    configure_logging(log_level="DEBUG" if verbose else "WARNING", json_format=False)


if __name__ == "__main__":
    cli()
