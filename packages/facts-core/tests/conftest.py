"""Shared pytest fixtures for facts-core tests.

Provides a recording fake compiler so loader behaviour can be tested
without a real CQL grammar.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
import structlog

from facts_core.config import COMPILER_ENV_VAR, ENCODING_ENV_VAR
from facts_core.errors import CompileError

# Source text the fake compiler rejects
INVALID_MARKER = "((("


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture(autouse=True)
def clean_facts_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove facts environment overrides so tests see defaults."""
    monkeypatch.delenv(COMPILER_ENV_VAR, raising=False)
    monkeypatch.delenv(ENCODING_ENV_VAR, raising=False)


class FakeCompiler:
    """Compiler double that echoes its input into a dict model."""

    def __init__(self, label: str, calls: list[tuple[str, str]]) -> None:
        self.label = label
        self._calls = calls

    def compile(self, text: str) -> dict[str, Any]:
        self._calls.append((self.label, text))
        if INVALID_MARKER in text:
            column = text.index(INVALID_MARKER) + 1
            raise CompileError(
                f"  {self.label}: unexpected '{INVALID_MARKER}' at line 1 column {column}\n",
                label=self.label,
                line=1,
                column=column,
            )
        return {"label": self.label, "statements": text.split()}


class FakeCompilerFactory:
    """Builds FakeCompiler instances and records every compile call."""

    def __init__(self) -> None:
        self.labels: list[str] = []
        self.calls: list[tuple[str, str]] = []

    def __call__(self, label: str) -> FakeCompiler:
        self.labels.append(label)
        return FakeCompiler(label, self.calls)


@pytest.fixture
def compiler_factory() -> FakeCompilerFactory:
    """Return a fresh recording compiler factory."""
    return FakeCompilerFactory()


@pytest.fixture
def valid_source() -> str:
    """Return source text the fake compiler accepts."""
    return "Person is identified by Name.\nPerson has Age.\n"


@pytest.fixture
def invalid_source() -> str:
    """Return source text the fake compiler rejects."""
    return "garbage ((( syntax"


@pytest.fixture
def cql_file(tmp_path: Path, valid_source: str) -> Path:
    """Write a valid source file and return its path."""
    path = tmp_path / "model.cql"
    path.write_text(valid_source, encoding="utf-8")
    return path
