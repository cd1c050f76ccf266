"""Contract between the source loader and compiler collaborators.

A compiler is built for one source label and turns source text into a
model, or raises CompileError. The loader never looks inside the model.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

# Opaque result of a successful compile
CompiledModel = Any


@runtime_checkable
class Compiler(Protocol):
    """A compiler instance scoped to a single source label.

    Implementations are constructed as ``factory(label)`` and must not fail
    on construction. ``compile`` raises CompileError for rejected text.

    Example:
        >>> class EchoCompiler:
        ...     def __init__(self, label: str) -> None:
        ...         self.label = label
        ...
        ...     def compile(self, text: str) -> str:
        ...         return text
    """

    def compile(self, text: str) -> CompiledModel:
        """Compile ``text`` into a model."""
        ...


# A compiler class, or any callable taking a label and returning a Compiler
CompilerFactory = Callable[[str], Compiler]
