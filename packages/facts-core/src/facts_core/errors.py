"""Exception hierarchy for facts-core.

This module defines the exception classes raised while loading and
compiling fact-model sources:
- FactsError: Base exception for all facts-related errors
- SourceIOError: A named source file could not be opened, read or decoded
- CompileError: Raised by compiler collaborators for rejected source text
- CompileFailure: A reading or compile failure re-raised with its source path
- ConfigurationError: Invalid loader configuration

User-facing messages are safe to display. Technical details passed as
``internal_details`` are logged via structlog and never shown to the user.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SourceLocation:
    """One frame of a compiler location trail.

    Attributes:
        label: Source label the frame points into (file path, "stdin", ...).
        line: 1-based line number, if known.
        column: 1-based column number, if known.
    """

    label: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        parts = [self.label]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


class FactsError(Exception):
    """Base exception for facts-runtime.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details. Logged internally,
            never exposed to the user.

    Example:
        >>> raise FactsError(
        ...     "Compiler not available",
        ...     internal_details="No module named 'acme_cql'",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "facts_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class SourceIOError(FactsError):
    """Raised when a named source file cannot be opened, read or decoded.

    The underlying OSError or UnicodeDecodeError is kept as ``__cause__``.

    Attributes:
        path: The path that failed.
    """

    def __init__(
        self,
        user_message: str,
        *,
        path: str,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message, internal_details=internal_details)
        self.path = path

    @classmethod
    def from_exception(cls, path: str, err: OSError | UnicodeDecodeError) -> SourceIOError:
        """Normalise a low-level read failure, keeping its traceback.

        Args:
            path: The path being read.
            err: The OSError or UnicodeDecodeError that was raised.

        Returns:
            SourceIOError carrying the original message and traceback.
        """
        io_error = cls(str(err), path=path).with_traceback(err.__traceback__)
        io_error.__cause__ = err
        return io_error


class CompileError(FactsError):
    """Raised by a compiler collaborator when it rejects source text.

    Collaborators may report where the fault was found, either as a single
    ``label``/``line``/``column`` position or as a full ``location`` trail
    (outermost frame first).

    Attributes:
        label: Source label the compiler was constructed with.
        line: Line of the fault, if known.
        column: Column of the fault, if known.
        location: Location trail, possibly empty.

    Example:
        >>> raise CompileError(
        ...     "unexpected '(' after 'Person'",
        ...     label="model.cql",
        ...     line=3,
        ...     column=12,
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        label: str | None = None,
        line: int | None = None,
        column: int | None = None,
        location: tuple[SourceLocation, ...] = (),
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message, internal_details=internal_details)
        self.label = label
        self.line = line
        self.column = column
        if not location and label is not None and line is not None:
            location = (SourceLocation(label, line, column),)
        self.location = tuple(location)


class CompileFailure(FactsError):
    """A reading or compile failure re-raised with the source path.

    Only ``readfile`` produces this. The message becomes
    ``"In {path} {original message stripped}"``; the original exception,
    its class, its traceback and its location trail are carried unchanged.

    Attributes:
        path: Path passed to ``readfile``.
        original: The exception that was intercepted.
        original_message: ``str(original)`` before prefixing.
        location: Location trail of the original (empty if it had none).
    """

    def __init__(self, path: str, original: BaseException) -> None:
        self.path = path
        self.original = original
        self.original_message = str(original)
        self.location: tuple[SourceLocation, ...] = tuple(getattr(original, "location", ()))
        super().__init__(f"In {path} {self.original_message.strip()}")

    @property
    def kind(self) -> type[BaseException]:
        """Class of the intercepted failure."""
        return type(self.original)

    @classmethod
    def augment(cls, path: str, original: BaseException) -> CompileFailure:
        """Wrap ``original``, attaching its traceback to the new failure.

        Args:
            path: Path passed to ``readfile``.
            original: The intercepted failure.

        Returns:
            CompileFailure ready to be raised ``from original``.
        """
        return cls(path, original).with_traceback(original.__traceback__)


class ConfigurationError(FactsError):
    """Raised when the loader configuration is invalid.

    Use this exception when:
    - No compiler is configured
    - A compiler reference cannot be imported or is not callable

    Attributes:
        setting: Name of the offending setting, if known.

    Example:
        >>> raise ConfigurationError(
        ...     "Compiler 'acme.cql:Compiler' could not be imported",
        ...     setting="FACTS_COMPILER",
        ... )
        # User sees: "Compiler 'acme.cql:Compiler' could not be imported (setting FACTS_COMPILER)"
    """

    def __init__(
        self,
        user_message: str,
        *,
        setting: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        full_message = f"{user_message} (setting {setting})" if setting else user_message
        super().__init__(full_message, internal_details=internal_details)
        self.setting = setting
