"""Bidirectional converters between JSON values and rich Python types."""

from __future__ import annotations

from json_mapper.context import ConverterContext, TypeDescriptor, build_context, get_parameter
from json_mapper.converters import (
    AnnotatedEnumConverter,
    BigIntConverter,
    BinaryConverter,
    Capability,
    Converter,
    DateConverter,
    DefaultConverter,
    EnumConverter,
    IterableConverter,
    MapConverter,
    NumberConverter,
    NumericEnumConverter,
    ShortEnumConverter,
    Symbol,
    SymbolConverter,
    annotated_enum_converter,
    bigint_converter,
    binary_converter,
    date_converter,
    default_converter,
    enum_converter,
    iterable_converter,
    map_converter,
    number_converter,
    numeric_enum_converter,
    short_enum_converter,
    symbol_converter,
)
from json_mapper.errors import (
    ConversionError,
    ConverterPluginError,
    EnumIndexOutOfRangeError,
    InvalidContextError,
    InvalidFormatError,
    MalformedJsonError,
    MissingConversionContextError,
    UnknownConverterError,
)
from json_mapper.results import Converted, Unchanged

__version__ = "0.1.0"


def convert_value(value: object, *, converter: str, **kwargs: object) -> object:
    """Convert one value with a registered converter via lazy API import."""
    from .api import convert_value as _impl

    return _impl(value, converter=converter, **kwargs)  # type: ignore[arg-type]


__all__ = [
    "AnnotatedEnumConverter",
    "BigIntConverter",
    "BinaryConverter",
    "Capability",
    "ConversionError",
    "Converted",
    "Converter",
    "ConverterContext",
    "ConverterPluginError",
    "DateConverter",
    "DefaultConverter",
    "EnumConverter",
    "EnumIndexOutOfRangeError",
    "InvalidContextError",
    "InvalidFormatError",
    "IterableConverter",
    "MalformedJsonError",
    "MapConverter",
    "MissingConversionContextError",
    "NumberConverter",
    "NumericEnumConverter",
    "ShortEnumConverter",
    "Symbol",
    "SymbolConverter",
    "TypeDescriptor",
    "Unchanged",
    "UnknownConverterError",
    "annotated_enum_converter",
    "bigint_converter",
    "binary_converter",
    "build_context",
    "convert_value",
    "date_converter",
    "default_converter",
    "enum_converter",
    "get_parameter",
    "iterable_converter",
    "map_converter",
    "number_converter",
    "numeric_enum_converter",
    "short_enum_converter",
    "symbol_converter",
]
