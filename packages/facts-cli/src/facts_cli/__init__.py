"""facts-cli: Command-line interface for facts-runtime."""

from __future__ import annotations

__version__ = "0.1.0"
