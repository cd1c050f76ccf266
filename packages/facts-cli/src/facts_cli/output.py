"""Rich console output for facts-cli.

Success, error and warning lines plus JSON rendering of compiled models.
Colour is disabled by the NO_COLOR environment variable or ``--no-color``.
"""

from __future__ import annotations

import os
from typing import Any

from rich.console import Console
from rich.markup import escape

_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console honouring NO_COLOR.

    Args:
        no_color: If True, disable colored output.

    Returns:
        Configured Console instance.
    """
    disabled = no_color or _force_no_color
    return Console(force_terminal=False if disabled else None, no_color=disabled)


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success line.

    Example:
        >>> success("Compiled orders.cql")
        ✓ Compiled orders.cql
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error line.

    Markup in ``message`` is not interpreted, so compiler output such as
    ``[Errno 2]`` prints verbatim.

    Example:
        >>> error("In missing.cql [Errno 2] No such file or directory")
        ✗ In missing.cql [Errno 2] No such file or directory
    """
    console.print(f"[red]✗[/red] {escape(message)}", highlight=False, **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning line."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print a plain line without markup."""
    console.print(message, markup=False, highlight=False, **kwargs)


def print_json(text: str, **kwargs: Any) -> None:
    """Print a JSON document with syntax highlighting.

    Args:
        text: Serialised JSON.
        **kwargs: Additional arguments passed to console.print_json().
    """
    console.print_json(text, **kwargs)


def set_no_color(no_color: bool) -> None:
    """Replace the module console, enabling or disabling colour."""
    global console
    console = create_console(no_color=no_color)
