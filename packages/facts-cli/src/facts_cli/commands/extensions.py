"""facts extensions command - List recognised source extensions."""

from __future__ import annotations

import click

from facts_cli.output import info


@click.command("extensions")
def extensions() -> None:
    """List recognised source extensions in match order.

    For each extension, `-.<ext>` given to `facts compile` reads standard input.
    """
    from facts_core import LoaderConfig

    for extension in LoaderConfig().extensions:
        info(f".{extension}")
