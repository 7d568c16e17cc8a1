"""Built-in converters and their shared singleton instances."""

from .base import (
    Capability,
    Converter,
    EnumValuesSink,
    InstanceSink,
    RecursionSink,
    ScalarConverter,
    default_text,
    qualified_name,
    short_name,
)
from .containers import IterableConverter, MapConverter, iterable_converter, map_converter
from .enums import (
    AnnotatedEnumConverter,
    EnumConverter,
    NumericEnumConverter,
    ShortEnumConverter,
    annotated_enum_converter,
    enum_converter,
    numeric_enum_converter,
    short_enum_converter,
)
from .scalars import (
    BigIntConverter,
    BinaryConverter,
    DateConverter,
    DefaultConverter,
    NumberConverter,
    Symbol,
    SymbolConverter,
    bigint_converter,
    binary_converter,
    date_converter,
    default_converter,
    number_converter,
    symbol_converter,
)

__all__ = [
    "AnnotatedEnumConverter",
    "BigIntConverter",
    "BinaryConverter",
    "Capability",
    "Converter",
    "DateConverter",
    "DefaultConverter",
    "EnumConverter",
    "EnumValuesSink",
    "InstanceSink",
    "IterableConverter",
    "MapConverter",
    "NumberConverter",
    "NumericEnumConverter",
    "RecursionSink",
    "ScalarConverter",
    "ShortEnumConverter",
    "Symbol",
    "SymbolConverter",
    "annotated_enum_converter",
    "bigint_converter",
    "binary_converter",
    "date_converter",
    "default_converter",
    "default_text",
    "enum_converter",
    "iterable_converter",
    "map_converter",
    "number_converter",
    "numeric_enum_converter",
    "qualified_name",
    "short_enum_converter",
    "short_name",
    "symbol_converter",
]
