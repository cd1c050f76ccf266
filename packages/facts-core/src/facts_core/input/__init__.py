"""Source input for facts-core.

This module exports the SourceLoader and its source request types:
- SourceLoader: Read a file, stream or string and compile it
- is_stdin_sentinel: Detect ``-.<ext>`` paths that mean standard input
- FileSource / StreamSource / StringSource: Source requests for SourceLoader.load
- readfile / read / readstring: Shortcuts using the environment configuration
"""

from __future__ import annotations

from facts_core.input.source import (
    DEFAULT_STREAM_LABEL,
    DEFAULT_STRING_LABEL,
    STDIN_LABEL,
    STDIN_SENTINEL,
    FileSource,
    SourceLoader,
    SourceRequest,
    StreamSource,
    StringSource,
    default_loader,
    is_stdin_sentinel,
    read,
    readfile,
    readstring,
)

__all__: list[str] = [
    "SourceLoader",
    "SourceRequest",
    "FileSource",
    "StreamSource",
    "StringSource",
    "is_stdin_sentinel",
    "default_loader",
    "readfile",
    "read",
    "readstring",
    "STDIN_SENTINEL",
    "STDIN_LABEL",
    "DEFAULT_STREAM_LABEL",
    "DEFAULT_STRING_LABEL",
]
