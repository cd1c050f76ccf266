"""facts-core: Source loading for fact-model compilers.

This package provides:
- SourceLoader: Read CQL source from a file, stdin, stream or string and
  hand it to a compiler collaborator
- Compiler: Protocol for compiler collaborators
- LoaderConfig: Recognised extensions, encoding and compiler reference
- Exception hierarchy (CompileFailure carries the path-prefixed message)
"""

from __future__ import annotations

__version__ = "0.1.0"

from facts_core.compiler import (
    CompiledModel,
    Compiler,
    CompilerFactory,
    resolve_compiler_factory,
)
from facts_core.config import (
    COMPILER_ENV_VAR,
    ENCODING_ENV_VAR,
    SOURCE_EXTENSIONS,
    LoaderConfig,
)
from facts_core.errors import (
    CompileError,
    CompileFailure,
    ConfigurationError,
    FactsError,
    SourceIOError,
    SourceLocation,
)
from facts_core.input import (
    FileSource,
    SourceLoader,
    SourceRequest,
    StreamSource,
    StringSource,
    is_stdin_sentinel,
    read,
    readfile,
    readstring,
)
from facts_core.observability import configure_logging

__all__ = [
    "__version__",
    # Loader
    "SourceLoader",
    "SourceRequest",
    "FileSource",
    "StreamSource",
    "StringSource",
    "is_stdin_sentinel",
    "readfile",
    "read",
    "readstring",
    # Compiler contract
    "Compiler",
    "CompilerFactory",
    "CompiledModel",
    "resolve_compiler_factory",
    # Configuration
    "LoaderConfig",
    "SOURCE_EXTENSIONS",
    "COMPILER_ENV_VAR",
    "ENCODING_ENV_VAR",
    # Errors
    "FactsError",
    "SourceIOError",
    "CompileError",
    "CompileFailure",
    "ConfigurationError",
    "SourceLocation",
    # Logging
    "configure_logging",
]
