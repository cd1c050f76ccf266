"""Loader configuration for facts-core.

This module provides:
- LoaderConfig: Recognised source extensions, source encoding and compiler
- Environment variable overrides (FACTS_COMPILER, FACTS_SOURCE_ENCODING)
"""

from __future__ import annotations

import codecs
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Environment variable naming the compiler factory ("package.module:attr")
COMPILER_ENV_VAR = "FACTS_COMPILER"

# Environment variable overriding the source file encoding
ENCODING_ENV_VAR = "FACTS_SOURCE_ENCODING"

# Source file extensions recognised for the stdin sentinel, in match order
SOURCE_EXTENSIONS = ("fiml", "fidl", "fiql", "cql")

DEFAULT_ENCODING = "utf-8"


class LoaderConfig(BaseModel):
    """Configuration for SourceLoader.

    Attributes:
        extensions: Recognised source extensions, checked in order when
            deciding whether a path designates standard input.
        encoding: Text encoding used to read source files and byte streams.
        compiler: Optional compiler factory reference ("package.module:attr").

    Example:
        >>> config = LoaderConfig(compiler="acme_cql.compiler:Compiler")
        >>> config.extensions
        ('fiml', 'fidl', 'fiql', 'cql')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    extensions: tuple[str, ...] = Field(
        default=SOURCE_EXTENSIONS,
        min_length=1,
        description="Recognised source extensions, without leading dot",
    )
    encoding: str = Field(
        default=DEFAULT_ENCODING,
        min_length=1,
        description="Encoding of source files",
    )
    compiler: str | None = Field(
        default=None,
        description="Compiler factory reference (package.module:attr)",
    )

    @field_validator("extensions")
    @classmethod
    def normalise_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Strip leading dots, lowercase, and reject empty extensions."""
        normalised = tuple(ext.lstrip(".").lower() for ext in v)
        if any(not ext for ext in normalised):
            msg = "extensions must not be empty"
            raise ValueError(msg)
        return normalised

    @field_validator("encoding")
    @classmethod
    def encoding_must_exist(cls, v: str) -> str:
        """Validate that the codec is known to Python."""
        try:
            codecs.lookup(v)
        except LookupError:
            msg = f"unknown encoding: {v}"
            raise ValueError(msg) from None
        return v

    @classmethod
    def from_env(cls, **overrides: Any) -> LoaderConfig:
        """Build a config from environment variables.

        Explicit keyword overrides win over the environment; overrides that
        are None are ignored.

        Args:
            **overrides: Field values that take precedence.

        Returns:
            Validated LoaderConfig.

        Raises:
            pydantic.ValidationError: If a value is invalid.

        Example:
            >>> config = LoaderConfig.from_env(compiler="acme_cql:Compiler")
        """
        values: dict[str, Any] = {}
        compiler = os.environ.get(COMPILER_ENV_VAR)
        if compiler:
            values["compiler"] = compiler
        encoding = os.environ.get(ENCODING_ENV_VAR)
        if encoding:
            values["encoding"] = encoding

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(values)
