"""Stateless scalar converters: dates, numbers, symbols, binary and big integers."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, ClassVar

from json_mapper.context import ConverterContext, get_parameter
from json_mapper.converters.base import ScalarConverter, default_text
from json_mapper.errors import InvalidFormatError
from json_mapper.formatting import DateFormat, DateFormatFactory, NumberFormat, NumberFormatFactory
from json_mapper.formatting.dates import compile_date_format
from json_mapper.formatting.numbers import compile_number_format
from json_mapper.results import Converted, Outcome

FORMAT_PARAMETER = "format"

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Symbol:
    """Symbolic identifier value exposing its name directly."""

    name: str

    def __str__(self) -> str:
        return f'Symbol("{self.name}")'


def parse_iso_date(text: str) -> date:
    """Parse ISO-8601 text into a ``date`` (date-only text) or ``datetime``."""
    try:
        return date.fromisoformat(text)
    except ValueError:
        return datetime.fromisoformat(text)


def try_parse_number(text: str) -> int | float | None:
    """Parse decimal, ``0x`` hexadecimal or floating point text; ``None`` on failure."""
    candidate = text.strip()
    if "_" in candidate:
        return None
    try:
        return int(candidate, 10)
    except ValueError:
        pass
    if candidate.lower().lstrip("+-").startswith("0x"):
        try:
            return int(candidate, 16)
        except ValueError:
            return None
    try:
        return float(candidate)
    except ValueError:
        return None


class DateConverter(ScalarConverter):
    """Converter for ``date``/``datetime`` values with an optional ``format`` parameter."""

    name: ClassVar[str] = "date"

    def __init__(self, format_factory: DateFormatFactory = compile_date_format) -> None:
        self._format_factory = format_factory

    def date_format(self, context: ConverterContext | None = None) -> DateFormat | None:
        pattern = get_parameter(FORMAT_PARAMETER, context)
        return self._format_factory(pattern) if pattern is not None else None

    def decode(self, json_value: Any, context: ConverterContext | None = None) -> Outcome:
        if not isinstance(json_value, str):
            return self._unchanged(json_value, "not text")
        try:
            fmt = self.date_format(context)
        except InvalidFormatError as exc:
            return self._unchanged(json_value, str(exc))
        try:
            parsed = fmt.parse(json_value) if fmt is not None else parse_iso_date(json_value)
        except ValueError as exc:
            return self._unchanged(json_value, str(exc))
        return Converted(parsed)

    def encode(self, value: Any, context: ConverterContext | None = None) -> Outcome:
        try:
            fmt = self.date_format(context)
        except InvalidFormatError as exc:
            return self._unchanged(value, str(exc))
        if fmt is not None and value is not None and not isinstance(value, str):
            try:
                return Converted(fmt.format(value))
            except TypeError as exc:
                return self._unchanged(value, str(exc))
        if isinstance(value, (list, tuple)):
            return Converted([default_text(item) for item in value])
        if value is None:
            return Converted(None)
        return Converted(default_text(value))


class NumberConverter(ScalarConverter):
    """Converter for numbers with an optional ``format`` parameter."""

    name: ClassVar[str] = "number"

    def __init__(self, format_factory: NumberFormatFactory = compile_number_format) -> None:
        self._format_factory = format_factory

    def number_format(self, context: ConverterContext | None = None) -> NumberFormat | None:
        pattern = get_parameter(FORMAT_PARAMETER, context)
        return self._format_factory(pattern) if pattern is not None else None

    def decode(self, json_value: Any, context: ConverterContext | None = None) -> Outcome:
        if not isinstance(json_value, str):
            return self._unchanged(json_value, "not text")
        try:
            fmt = self.number_format(context)
        except InvalidFormatError as exc:
            return self._unchanged(json_value, str(exc))
        if fmt is not None:
            try:
                return Converted(fmt.parse(json_value))
            except ValueError as exc:
                return self._unchanged(json_value, str(exc))
        parsed = try_parse_number(json_value)
        if parsed is None:
            return self._unchanged(json_value, "not numeric text")
        return Converted(parsed)

    def encode(self, value: Any, context: ConverterContext | None = None) -> Outcome:
        try:
            fmt = self.number_format(context)
        except InvalidFormatError as exc:
            return self._unchanged(value, str(exc))
        if value is not None and fmt is not None:
            try:
                return Converted(fmt.format(value))
            except TypeError as exc:
                return self._unchanged(value, str(exc))
        if isinstance(value, str):
            # unparseable text becomes None rather than passing through
            return Converted(try_parse_number(value))
        return self._unchanged(value, "not text")


class SymbolConverter(ScalarConverter):
    """Converter between text and :class:`Symbol`."""

    name: ClassVar[str] = "symbol"

    def decode(self, json_value: Any, context: ConverterContext | None = None) -> Outcome:
        if isinstance(json_value, str):
            return Converted(Symbol(json_value))
        return self._unchanged(json_value, "not text")

    def encode(self, value: Any, context: ConverterContext | None = None) -> Outcome:
        if isinstance(value, Symbol):
            return Converted(value.name)
        return self._unchanged(value, "not a symbol")


class BinaryConverter(ScalarConverter):
    """Converter between byte buffers and base64 text."""

    name: ClassVar[str] = "binary"

    def decode(self, json_value: Any, context: ConverterContext | None = None) -> Outcome:
        if not isinstance(json_value, str):
            return self._unchanged(json_value, "not text")
        try:
            return Converted(base64.b64decode(json_value, validate=True))
        except (binascii.Error, ValueError) as exc:
            return self._unchanged(json_value, f"invalid base64: {exc}")

    def encode(self, value: Any, context: ConverterContext | None = None) -> Outcome:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return Converted(base64.b64encode(value).decode("ascii"))
        return self._unchanged(value, "not a byte buffer")


class BigIntConverter(ScalarConverter):
    """Converter between arbitrary-precision integers and decimal text."""

    name: ClassVar[str] = "bigint"

    def decode(self, json_value: Any, context: ConverterContext | None = None) -> Outcome:
        if not isinstance(json_value, str):
            return self._unchanged(json_value, "not text")
        if _INTEGER_TEXT.fullmatch(json_value) is None:
            return self._unchanged(json_value, "not integer text")
        # Decimal has no int/str digit limit
        return Converted(int(Decimal(json_value)))

    def encode(self, value: Any, context: ConverterContext | None = None) -> Outcome:
        if isinstance(value, int) and not isinstance(value, bool):
            return Converted(format(Decimal(value), "f"))
        return self._unchanged(value, "not an integer")


class DefaultConverter(ScalarConverter):
    """Identity converter used when no type-specific converter applies."""

    name: ClassVar[str] = "default"

    def decode(self, json_value: Any, context: ConverterContext | None = None) -> Outcome:
        return Converted(json_value)

    def encode(self, value: Any, context: ConverterContext | None = None) -> Outcome:
        return Converted(value)


date_converter = DateConverter()
number_converter = NumberConverter()
symbol_converter = SymbolConverter()
binary_converter = BinaryConverter()
bigint_converter = BigIntConverter()
default_converter = DefaultConverter()
