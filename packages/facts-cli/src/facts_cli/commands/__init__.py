"""CLI command modules.

Each subcommand lives in its own module and is loaded lazily by
facts_cli.main.LazyGroup.
"""

from __future__ import annotations

__all__: list[str] = []
