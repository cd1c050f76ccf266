"""Load fact-model source text and hand it to a compiler.

Source text comes from one of three places:
- A named file (``readfile``), or standard input when the path is the
  ``-.<ext>`` sentinel for a recognised extension (e.g. ``-.cql``)
- An open stream (``read``)
- An in-memory string (``readstring``)

Only ``readfile`` adds context to failures: anything that goes wrong while
reading or compiling the file is re-raised as CompileFailure with the path
prefixed to the message and the original traceback attached.

Example:
    >>> loader = SourceLoader(AcmeCompiler)
    >>> model = loader.readfile("orders.cql")
    >>> model = loader.readfile("-.cql")  # reads stdin
    >>> model = loader.readstring("Person is identified by Name.")
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING, AnyStr

import structlog

from facts_core.compiler.resolver import resolve_compiler_factory
from facts_core.config import LoaderConfig
from facts_core.errors import CompileFailure, ConfigurationError, SourceIOError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from facts_core.compiler.contract import CompiledModel, CompilerFactory

logger = structlog.get_logger(__name__)

STDIN_SENTINEL = "-"

# Label used when readfile is redirected to standard input
STDIN_LABEL = "<standard input>"

DEFAULT_STREAM_LABEL = "stdin"
DEFAULT_STRING_LABEL = "string"


def is_stdin_sentinel(path: str | os.PathLike[str], extensions: Iterable[str]) -> bool:
    """Check whether ``path`` designates standard input.

    For each extension in order, ``.<ext>`` is stripped from the basename of
    ``path``; the path is the sentinel if what remains is exactly ``-``.
    No filesystem access takes place.

    Args:
        path: Path given to ``readfile``.
        extensions: Recognised extensions, without leading dot.

    Returns:
        True if the path means "read from standard input".

    Example:
        >>> is_stdin_sentinel("-.cql", ("fiml", "fidl", "fiql", "cql"))
        True
        >>> is_stdin_sentinel("-", ("cql",))
        False
    """
    basename = os.path.basename(os.fspath(path))
    for extension in extensions:
        suffix = f".{extension}"
        if basename.endswith(suffix) and basename[: -len(suffix)] == STDIN_SENTINEL:
            return True
    return False


@dataclass(frozen=True)
class FileSource:
    """Request to compile a named file (or stdin via the sentinel)."""

    path: str


@dataclass(frozen=True)
class StreamSource:
    """Request to compile everything remaining on an open stream."""

    stream: IO[str] | IO[bytes]
    label: str = DEFAULT_STREAM_LABEL


@dataclass(frozen=True)
class StringSource:
    """Request to compile in-memory text."""

    text: str
    label: str = DEFAULT_STRING_LABEL


SourceRequest = FileSource | StreamSource | StringSource


class SourceLoader:
    """Resolve source text and compile it with a compiler collaborator.

    The loader holds no mutable state; independent calls may run on
    separate threads as long as they do not share a stream.

    Attributes:
        compiler_factory: Builds a compiler for a source label.
        config: Extensions and encoding used for reading.
    """

    def __init__(
        self,
        compiler_factory: CompilerFactory | None = None,
        config: LoaderConfig | None = None,
    ) -> None:
        """Initialize the SourceLoader.

        Args:
            compiler_factory: Compiler class or factory. If not given, the
                reference in ``config.compiler`` is imported.
            config: Loader configuration. Defaults to ``LoaderConfig()``.

        Raises:
            ConfigurationError: If no compiler is given or configured, or the
                configured reference cannot be resolved.
        """
        self.config = config or LoaderConfig()

        if compiler_factory is None:
            if not self.config.compiler:
                raise ConfigurationError(
                    "No compiler configured. Pass a compiler factory or set a compiler reference",
                    setting="FACTS_COMPILER",
                )
            compiler_factory = resolve_compiler_factory(self.config.compiler)

        self.compiler_factory = compiler_factory

    def readfile(self, path: str | os.PathLike[str]) -> CompiledModel:
        """Read and compile the file at ``path``.

        A sentinel path such as ``-.cql`` reads standard input instead,
        labelled ``<standard input>``. Otherwise the file is opened with the
        configured encoding and closed on every exit path.

        Any Exception raised while reading or compiling is wrapped, whatever
        its class. MemoryError, RecursionError and BaseExceptions such as
        KeyboardInterrupt propagate untouched.

        Args:
            path: Source file path, or a stdin sentinel.

        Returns:
            The model produced by the compiler.

        Raises:
            CompileFailure: If the file cannot be read or the compiler
                rejects it. The message is ``"In {path} {message}"`` and the
                original traceback and location trail are preserved.
        """
        path = os.fspath(path)

        try:
            if is_stdin_sentinel(path, self.config.extensions):
                logger.debug("source_resolved", label=STDIN_LABEL, kind="stdin")
                # Raw bytes so the configured encoding applies to stdin too
                stdin = getattr(sys.stdin, "buffer", sys.stdin)
                return self.read(stdin, STDIN_LABEL)

            logger.debug("source_resolved", label=path, kind="file")
            with open(path, encoding=self.config.encoding) as source:
                return self.read(source, path)

        except (MemoryError, RecursionError):
            raise

        except (OSError, UnicodeDecodeError) as e:
            io_error = SourceIOError.from_exception(path, e)
            logger.info("source_failed", path=path, error_type=type(io_error).__name__)
            raise CompileFailure.augment(path, io_error) from io_error

        except Exception as e:
            # Compiler collaborators may reject text with their own exception classes
            logger.info("source_failed", path=path, error_type=type(e).__name__)
            raise CompileFailure.augment(path, e) from e

    def read(
        self,
        stream: IO[AnyStr],
        label: str = DEFAULT_STREAM_LABEL,
    ) -> CompiledModel:
        """Read ``stream`` to end of input and compile the text.

        Byte streams are decoded with the configured encoding. The stream
        is not closed. Failures propagate unchanged.

        Args:
            stream: Open text or binary stream.
            label: Source label passed to the compiler.

        Returns:
            The model produced by the compiler.
        """
        content = stream.read()
        text = content.decode(self.config.encoding) if isinstance(content, bytes) else content
        return self.readstring(text, label)

    def readstring(self, text: str, label: str = DEFAULT_STRING_LABEL) -> CompiledModel:
        """Compile ``text`` with a compiler built for ``label``.

        Whatever the compiler returns or raises is passed through unchanged.

        Args:
            text: Complete source text.
            label: Source label passed to the compiler.

        Returns:
            The model produced by the compiler.

        Raises:
            ValueError: If ``label`` is empty.
        """
        if not label:
            msg = "source label must not be empty"
            raise ValueError(msg)

        compiler = self.compiler_factory(label)
        model = compiler.compile(text)
        logger.debug("source_compiled", label=label, length=len(text))
        return model

    def load(self, request: SourceRequest) -> CompiledModel:
        """Compile whichever source ``request`` describes.

        Args:
            request: FileSource, StreamSource or StringSource.

        Returns:
            The model produced by the compiler.

        Raises:
            TypeError: If ``request`` is not a known source request.
        """
        if isinstance(request, FileSource):
            return self.readfile(request.path)
        if isinstance(request, StreamSource):
            return self.read(request.stream, request.label)
        if isinstance(request, StringSource):
            return self.readstring(request.text, request.label)
        msg = f"unsupported source request: {type(request).__name__}"
        raise TypeError(msg)


def default_loader() -> SourceLoader:
    """Build a SourceLoader from environment configuration.

    Returns:
        Loader using the compiler named by FACTS_COMPILER.

    Raises:
        ConfigurationError: If no compiler is configured.
    """
    return SourceLoader(config=LoaderConfig.from_env())


def readfile(path: str | os.PathLike[str]) -> CompiledModel:
    """Compile a source file using the environment-configured compiler."""
    return default_loader().readfile(path)


def read(stream: IO[AnyStr], label: str = DEFAULT_STREAM_LABEL) -> CompiledModel:
    """Compile an open stream using the environment-configured compiler."""
    return default_loader().read(stream, label)


def readstring(text: str, label: str = DEFAULT_STRING_LABEL) -> CompiledModel:
    """Compile a string using the environment-configured compiler."""
    return default_loader().readstring(text, label)
