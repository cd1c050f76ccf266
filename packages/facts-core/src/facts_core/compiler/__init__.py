"""Compiler collaborator contract for facts-core.

This module exports:
- Compiler: Protocol implemented by compiler collaborators
- CompilerFactory: Callable building a Compiler for a source label
- CompiledModel: Opaque compile result
- resolve_compiler_factory: Import a factory from a dotted reference
"""

from __future__ import annotations

from facts_core.compiler.contract import CompiledModel, Compiler, CompilerFactory
from facts_core.compiler.resolver import resolve_compiler_factory

__all__: list[str] = [
    "Compiler",
    "CompilerFactory",
    "CompiledModel",
    "resolve_compiler_factory",
]
