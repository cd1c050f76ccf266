"""facts compile command - Compile a CQL source file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from facts_cli.errors import (
    EXIT_SYSTEM_ERROR,
    CLIError,
    handle_compile_failure,
    handle_configuration_error,
    handle_validation_error,
)
from facts_cli.output import print_json, success


def dump_model(model: Any) -> str:
    """Serialise a compiled model to indented JSON.

    Pydantic models use their own JSON serialisation; anything else goes
    through json.dumps with str() as the fallback.
    """
    if hasattr(model, "model_dump_json"):
        return model.model_dump_json(indent=2)  # type: ignore[no-any-return]
    return json.dumps(model, indent=2, default=str)


class SourceCommand(click.Command):
    """Click command that takes ``-.<ext>`` stdin sentinels as arguments.

    Click would otherwise parse ``-.cql`` as a cluster of short options.
    Sentinel tokens that are not the value of an option are moved behind
    ``--`` before parsing. Arguments already given after ``--`` are left
    alone.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if "--" not in args:
            args = self._shift_sentinels(args)
        return super().parse_args(ctx, args)

    def _value_options(self) -> set[str]:
        names: set[str] = set()
        for param in self.params:
            if isinstance(param, click.Option) and not (param.is_flag or param.count):
                names.update(param.opts)
                names.update(param.secondary_opts)
        return names

    def _shift_sentinels(self, args: list[str]) -> list[str]:
        from facts_core.config import SOURCE_EXTENSIONS
        from facts_core.input import is_stdin_sentinel

        value_options = self._value_options()
        kept: list[str] = []
        sentinels: list[str] = []
        for token in args:
            is_option_value = bool(kept) and kept[-1] in value_options
            is_sentinel = token.startswith("-") and is_stdin_sentinel(token, SOURCE_EXTENSIONS)
            if is_sentinel and not is_option_value:
                sentinels.append(token)
            else:
                kept.append(token)
        if not sentinels:
            return args
        return [*kept, "--", *sentinels]


@click.command("compile", cls=SourceCommand)
@click.argument("source", type=click.Path(path_type=str))
@click.option(
    "-c",
    "--compiler",
    "compiler_ref",
    type=str,
    default=None,
    help="Compiler factory as package.module:attr [default: $FACTS_COMPILER]",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the compiled model as JSON to this file",
)
@click.option(
    "--encoding",
    type=str,
    default=None,
    help="Source file encoding [default: utf-8]",
)
@click.option(
    "--json",
    "show_json",
    is_flag=True,
    default=False,
    help="Print the compiled model as JSON",
)
def compile_cmd(
    source: str,
    compiler_ref: str | None,
    output_path: str | None,
    encoding: str | None,
    show_json: bool,
) -> None:
    """Compile a CQL source file.

    SOURCE is a path ending in .cql, .fiml, .fidl or .fiql. A path whose
    name is `-` plus a recognised extension (such as `-.cql`) reads
    standard input instead.

    Examples:

        facts compile orders.cql --compiler acme_cql:Compiler

        cat orders.cql | facts compile -.cql --json
    """
    from pydantic import ValidationError as PydanticValidationError

    from facts_core import CompileFailure, ConfigurationError, LoaderConfig, SourceLoader

    try:
        config = LoaderConfig.from_env(compiler=compiler_ref, encoding=encoding)
        loader = SourceLoader(config=config)
    except PydanticValidationError as e:
        handle_validation_error(e)
    except ConfigurationError as e:
        handle_configuration_error(e)

    try:
        model = loader.readfile(source)
    except CompileFailure as e:
        handle_compile_failure(e)

    if output_path is not None:
        output = Path(output_path)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(dump_model(model), encoding="utf-8")
        except OSError:
            raise CLIError(f"Cannot write to: {output_path}", exit_code=EXIT_SYSTEM_ERROR) from None

    # Stdout carries only the JSON document with --json
    if show_json:
        print_json(dump_model(model))
        return

    success(f"Compiled {source}")
    if output_path is not None:
        success(f"Model written to {output_path}")
