"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from json_mapper.cli import cli as cli_module
from json_mapper.errors import MissingConversionContextError

runner = CliRunner()

CAPABILITY_ENUM = "json_mapper.converters.base:Capability"


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the available subcommands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "convert" in result.output
    assert "list" in result.output


def test_list_shows_converters_and_capabilities() -> None:
    """List every built-in converter with its declared capabilities."""
    result = runner.invoke(cli_module.app, ["list"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "date\t-" in lines
    assert "map\tinstance, recursion" in lines
    assert "enum_annotated\tenum_values" in lines


def test_list_with_broken_converter_module_fails() -> None:
    """Report unimportable converter modules as bad parameters."""
    result = runner.invoke(
        cli_module.app, ["list", "--converter-module", "json_mapper_missing_mod"]
    )
    assert result.exit_code != 0


def test_convert_date_from_json() -> None:
    """Convert ISO text into a date."""
    result = runner.invoke(cli_module.app, ["convert", "date", '"2024-01-05"'])
    assert result.exit_code == 0, result.output
    assert "datetime.date(2024, 1, 5)" in result.output


def test_convert_binary_accepts_plain_text_value() -> None:
    """Fall back to raw text when VALUE is not JSON."""
    result = runner.invoke(cli_module.app, ["convert", "binary", "AQID"])
    assert result.exit_code == 0, result.output
    assert "b'\\x01\\x02\\x03'" in result.output


def test_convert_number_to_json_renders_json() -> None:
    """Render to_json results as JSON text."""
    result = runner.invoke(cli_module.app, ["convert", "number", '"12"', "--to-json"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "12"


def test_convert_with_format_parameter() -> None:
    """Forward --param entries as converter parameters."""
    result = runner.invoke(
        cli_module.app,
        ["convert", "date", "05/01/2024", "--param", "format=dd/MM/yyyy"],
    )
    assert result.exit_code == 0, result.output
    assert "datetime.date(2024, 1, 5)" in result.output


def test_convert_numeric_enum_with_enum_members() -> None:
    """Load enum members from --enum for numeric lookups."""
    result = runner.invoke(
        cli_module.app, ["convert", "enum_numeric", "1", "--enum", CAPABILITY_ENUM]
    )
    assert result.exit_code == 0, result.output
    assert "Capability.RECURSION" in result.output


def test_convert_numeric_enum_out_of_range_exits_with_error() -> None:
    """Surface bounds errors with the conversion exit code."""
    result = runner.invoke(
        cli_module.app, ["convert", "enum_numeric", "9", "--enum", CAPABILITY_ENUM]
    )
    assert result.exit_code == 2
    assert "EnumIndexOutOfRangeError" in result.output


def test_convert_unknown_converter_exits_with_plugin_code() -> None:
    """Surface unknown converter names with the plugin exit code."""
    result = runner.invoke(cli_module.app, ["convert", "nope", "1"])
    assert result.exit_code == 3
    assert "Unknown converter 'nope'" in result.output


def test_convert_invalid_enum_type_exits_with_error() -> None:
    """Reject --enum values not in module:Class form."""
    result = runner.invoke(cli_module.app, ["convert", "enum", '"x"', "--enum", "bad"])
    assert result.exit_code == 2
    assert "InvalidContextError" in result.output


def test_convert_invalid_parameter_entry_is_usage_error() -> None:
    """Reject --param entries without '='."""
    result = runner.invoke(cli_module.app, ["convert", "number", "1", "--param", "bad"])
    assert result.exit_code != 0
    assert "KEY=VALUE" in result.output


def test_debug_prints_traceback() -> None:
    """Include traceback output when --debug is set."""
    result = runner.invoke(cli_module.app, ["--debug", "convert", "nope", "1"])
    assert result.exit_code == 3
    assert "Traceback" in result.output


def test_convert_loads_converter_module(tmp_path: Path) -> None:
    """Use converters registered by --converter-module."""
    module_file = tmp_path / "shout_mod.py"
    module_file.write_text(
        "class Shout:\n"
        "    def to_json(self, value, context=None):\n"
        "        return str(value).upper()\n"
        "    def from_json(self, json_value, context=None):\n"
        "        return str(json_value).lower()\n"
        "NAME = 'shout'\n"
        "CONVERTER = Shout()\n",
        encoding="utf-8",
    )
    result = runner.invoke(
        cli_module.app,
        ["convert", "shout", '"hi"', "--to-json", "--converter-module", str(module_file)],
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == '"HI"'


def test_unexpected_errors_are_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    """Exit with code 1 for errors outside the conversion hierarchy."""

    def boom(*_args: object, **_kwargs: object) -> object:
        raise RuntimeError("boom")

    monkeypatch.setattr("json_mapper.api.convert_value", boom)
    result = runner.invoke(cli_module.app, ["convert", "number", "1"])
    assert result.exit_code == 1
    assert "RuntimeError" in result.output


def test_print_conversion_error_uses_exit_code() -> None:
    """Use the exception exit code when present."""
    assert cli_module._print_conversion_error(MissingConversionContextError("x"), False) == 2
    assert cli_module._print_conversion_error(RuntimeError("x"), False) == 1


def test_parse_parameters_rejects_empty_key() -> None:
    """Reject KEY=VALUE entries with an empty key."""
    with pytest.raises(typer.BadParameter, match="cannot be empty"):
        cli_module._parse_parameters(["=x"])
    assert cli_module._parse_parameters(None) is None
    assert cli_module._parse_parameters(["format=a=b"]) == {"format": "a=b"}
