"""Shared test fixtures for facts-cli tests.

Provides CliRunner fixtures and an importable fake compiler module so the
CLI can resolve a compiler by reference.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from textwrap import dedent
from unittest.mock import MagicMock, patch

import pytest
import structlog
from click.testing import CliRunner

from facts_core.config import COMPILER_ENV_VAR, ENCODING_ENV_VAR

FAKE_COMPILER_MODULE = "facts_cli_fake_compiler"

# Model-returning compiler (pydantic) and a plain-dict variant
FAKE_COMPILER_SOURCE = dedent(
    '''
    from pydantic import BaseModel

    from facts_core import CompileError


    class Vocabulary(BaseModel):
        label: str
        statements: list[str]


    class Compiler:
        def __init__(self, label):
            self.label = label

        def compile(self, text):
            if "(((" in text:
                raise CompileError(
                    f"unexpected '(((' in {self.label}\\n",
                    label=self.label,
                    line=1,
                    column=text.index("(((") + 1,
                )
            return Vocabulary(label=self.label, statements=text.split("."))


    class DictCompiler:
        def __init__(self, label):
            self.label = label

        def compile(self, text):
            return {"label": self.label, "text": text}
    '''
)


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Keep structlog quiet below WARNING so command output stays clean."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def configure_logging_mock() -> Generator[MagicMock, None, None]:
    """Stop the CLI group from reconfiguring global logging during tests."""
    with patch("facts_cli.main.configure_logging") as mock:
        yield mock


@pytest.fixture(autouse=True)
def clean_facts_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove facts environment overrides so tests see defaults."""
    monkeypatch.delenv(COMPILER_ENV_VAR, raising=False)
    monkeypatch.delenv(ENCODING_ENV_VAR, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner inside a temporary working directory."""
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def fake_compiler(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Install the fake compiler module and return its reference.

    Returns:
        Reference to the pydantic-model compiler ("module:Compiler").
    """
    module_dir = tmp_path / "compilers"
    module_dir.mkdir()
    (module_dir / f"{FAKE_COMPILER_MODULE}.py").write_text(FAKE_COMPILER_SOURCE)
    monkeypatch.syspath_prepend(str(module_dir))
    return f"{FAKE_COMPILER_MODULE}:Compiler"


@pytest.fixture
def dict_compiler(fake_compiler: str) -> str:
    """Return the reference to the plain-dict compiler."""
    return f"{FAKE_COMPILER_MODULE}:DictCompiler"


@pytest.fixture
def valid_cql() -> str:
    """Return source text the fake compiler accepts."""
    return "Person is identified by Name.Person has Age."


@pytest.fixture
def write_source(isolated_runner: CliRunner) -> Callable[..., Path]:
    """Factory fixture writing source files in the isolated filesystem.

    Returns:
        Function that writes content to a file and returns its path.
    """

    def _write(content: str, filename: str = "model.cql") -> Path:
        path = Path(filename)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
