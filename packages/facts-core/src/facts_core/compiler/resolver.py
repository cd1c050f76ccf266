"""Resolve compiler factory references.

A reference names an importable callable, either as
``package.module:attr`` or as ``package.module.attr``. Nested attributes
are allowed after the colon (``package.module:Outer.factory``).
"""

from __future__ import annotations

import importlib

import structlog

from facts_core.compiler.contract import CompilerFactory
from facts_core.config import COMPILER_ENV_VAR
from facts_core.errors import ConfigurationError

logger = structlog.get_logger(__name__)


def _split_reference(reference: str) -> tuple[str, str]:
    module_name, sep, attr_path = reference.strip().partition(":")
    if not sep:
        module_name, _, attr_path = module_name.rpartition(".")
    if not module_name or not attr_path:
        raise ConfigurationError(
            f"Invalid compiler reference '{reference}'. Expected 'package.module:attr'",
            setting=COMPILER_ENV_VAR,
        )
    return module_name, attr_path


def resolve_compiler_factory(reference: str) -> CompilerFactory:
    """Import the compiler factory named by ``reference``.

    Args:
        reference: ``package.module:attr`` or ``package.module.attr``.

    Returns:
        The callable compiler factory.

    Raises:
        ConfigurationError: If the module cannot be imported, the attribute
            does not exist, or it is not callable.

    Example:
        >>> factory = resolve_compiler_factory("acme_cql.compiler:Compiler")
        >>> compiler = factory("model.cql")
    """
    module_name, attr_path = _split_reference(reference)

    try:
        target: object = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"Compiler module '{module_name}' could not be imported",
            setting=COMPILER_ENV_VAR,
            internal_details=str(e),
        ) from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ConfigurationError(
                f"Compiler '{reference}' not found in module '{module_name}'",
                setting=COMPILER_ENV_VAR,
            ) from e

    if not callable(target):
        raise ConfigurationError(
            f"Compiler '{reference}' is not callable",
            setting=COMPILER_ENV_VAR,
        )

    logger.debug("compiler_resolved", reference=reference)
    return target  # type: ignore[return-value]
