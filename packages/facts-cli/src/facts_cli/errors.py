"""CLI error handling for facts-cli.

Maps facts-core exceptions to user-facing messages and exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from facts_cli.output import error

if TYPE_CHECKING:
    from facts_core import CompileFailure, ConfigurationError
    from pydantic_core import ErrorDetails


# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Rejected source, bad configuration
EXIT_SYSTEM_ERROR = 2  # Source unreadable, output not writable


class CLIError(click.ClickException):
    """CLI exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format a Pydantic validation error as one line per field.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Invalid configuration:\\n  - encoding: Value error, unknown encoding: klingon"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Invalid configuration:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")

    return "\n".join(lines)


def handle_validation_error(err: PydanticValidationError) -> NoReturn:
    """Report an invalid loader configuration.

    Raises:
        CLIError: Always, with the formatted field errors.
    """
    raise CLIError(format_pydantic_error(err))


def handle_configuration_error(err: ConfigurationError) -> NoReturn:
    """Report a missing or unresolvable compiler.

    Raises:
        CLIError: Always, with a hint on how to name a compiler.
    """
    raise CLIError(
        f"{err.user_message}\n\n"
        "Use --compiler package.module:Compiler or set FACTS_COMPILER."
    )


def handle_compile_failure(failure: CompileFailure) -> NoReturn:
    """Report a source that could not be read or compiled.

    Unreadable sources exit with EXIT_SYSTEM_ERROR, rejected sources with
    EXIT_USER_ERROR. Location frames, when present, are listed under the
    message.

    Raises:
        CLIError: Always.
    """
    from facts_core import SourceIOError

    lines = [failure.user_message]
    lines.extend(f"  at {frame}" for frame in failure.location)

    exit_code = EXIT_SYSTEM_ERROR if issubclass(failure.kind, SourceIOError) else EXIT_USER_ERROR
    raise CLIError("\n".join(lines), exit_code=exit_code)
