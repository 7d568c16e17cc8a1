#!/usr/bin/env python3
"""
json_mapper.cli.cli

Typer-based CLI for trying converters on single values.

The library itself has no CLI dependency; install the ``cli`` extra to get
the ``json-mapper`` entrypoint:

    pip install -e ".[cli]"

Examples
--------
    json-mapper convert date '"2024-01-05"'
    json-mapper convert date 2024-01-05 --to-json --param format=dd/MM/yyyy
    json-mapper convert enum_numeric 1 --enum mypkg.models:Color
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

import orjson
import typer

from json_mapper.errors import ConversionError, ConverterPluginError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="json-mapper",
    help="Convert single values between JSON and rich Python types.",
    no_args_is_help=True,
)


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"[red]✗ {type(exc).__name__}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _parse_parameters(parameter_items: list[str] | None) -> dict[str, str] | None:
    """Parse repeated KEY=VALUE converter parameters."""
    if not parameter_items:
        return None
    parsed: dict[str, str] = {}
    for item in parameter_items:
        if "=" not in item:
            raise typer.BadParameter(
                f"Invalid parameter entry '{item}'. Use KEY=VALUE format."
            )
        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter("Parameter key cannot be empty.")
        parsed[key] = value
    return parsed


def _parse_value(raw: str) -> Any:
    """Read VALUE as JSON, falling back to the raw text."""
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def _render(result: Any, to_json: bool) -> str:
    if to_json:
        return orjson.dumps(result, default=str).decode("utf-8")
    return repr(result)


@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logs and full tracebacks."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug logging and error output.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)
    ctx.obj = {"debug": debug}


@app.command("list")
def list_cmd(
    converter_modules: list[str] | None = typer.Option(
        None,
        "--converter-module",
        help="Python module or file path registering custom converters (repeatable).",
    ),
) -> None:
    """List registered converters and their capabilities."""
    from json_mapper.plugins.registry import create_default_registry

    try:
        registry = create_default_registry(converter_modules)
    except ConverterPluginError as exc:
        raise typer.BadParameter(str(exc)) from exc

    for name in registry.names():
        capabilities = ", ".join(sorted(c.value for c in registry.capabilities(name)))
        typer.echo(f"{name}\t{capabilities or '-'}")


@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    converter: str = typer.Argument(..., help="Registered converter name."),
    value: str = typer.Argument(..., help="Input value as JSON (plain text if not JSON)."),
    to_json: bool = typer.Option(
        False, "--to-json", help="Convert a runtime value to JSON instead of from JSON."
    ),
    parameters: list[str] | None = typer.Option(
        None, "--param", help="Converter parameter KEY=VALUE (repeatable)."
    ),
    enum_type: str | None = typer.Option(
        None, "--enum", help="Enum supplying members, as module:Class."
    ),
    converter_modules: list[str] | None = typer.Option(
        None,
        "--converter-module",
        help="Python module or file path registering custom converters (repeatable).",
    ),
) -> None:
    """Convert one value with a registered converter.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    converter : str
        Registered converter name, see ``json-mapper list``.
    value : str
        Input value; parsed as JSON when possible.
    to_json : bool, default=False
        Direction of the conversion.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    parsed_parameters = _parse_parameters(parameters)

    try:
        from json_mapper.api import convert_value

        result = convert_value(
            _parse_value(value),
            converter=converter,
            direction="to_json" if to_json else "from_json",
            parameters=parsed_parameters,
            enum_type=enum_type,
            converter_modules=converter_modules,
        )
        typer.echo(_render(result, to_json))
    except (ConversionError, ConverterPluginError) as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        logger.exception("unexpected error during conversion")
        raise typer.Exit(code=_print_conversion_error(exc, debug))


def main() -> None:
    """Console-script entrypoint."""
    app()


if __name__ == "__main__":
    main()
