"""Name-based conversion API used by the CLI and by callers without a walker."""

from __future__ import annotations

import enum
import importlib
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from json_mapper.context import ConverterContext, build_context
from json_mapper.errors import InvalidContextError
from json_mapper.plugins.registry import ConverterRegistry, create_default_registry
from json_mapper.schemas import ConversionRequestConfig, Direction


def load_enum_members(enum_type: str) -> list[Any]:
    """Import ``module:Class`` and return its members in definition order.

    Raises
    ------
    InvalidContextError
        If the target cannot be imported or is not an ``enum.Enum``.
    """
    module_name, _, attr = enum_type.partition(":")
    try:
        target = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as exc:
        raise InvalidContextError(f"Unable to import enum type '{enum_type}': {exc}") from exc
    if not isinstance(target, type) or not issubclass(target, enum.Enum):
        raise InvalidContextError(f"'{enum_type}' is not an Enum type.")
    return list(target)


def convert_value(
    value: Any,
    *,
    converter: str,
    direction: Direction = "from_json",
    parameters: Mapping[str, object] | None = None,
    enum_type: str | None = None,
    registry: ConverterRegistry | None = None,
    converter_modules: Iterable[str] | None = None,
) -> Any:
    """Convert one value with a registered converter.

    Parameters
    ----------
    value : Any
        Runtime value (``to_json``) or JSON value (``from_json``).
    converter : str
        Registered converter name.
    direction : {"to_json", "from_json"}, default="from_json"
        Conversion direction.
    parameters : Mapping[str, object] | None, default=None
        Converter parameters such as ``format``.
    enum_type : str | None, default=None
        ``module:Class`` path of the enum supplying the member sequence.
    registry : ConverterRegistry | None, default=None
        Registry to use; the default registry is created when omitted.
    converter_modules : Iterable[str] | None, default=None
        Extra converter modules loaded into a newly created registry.

    Returns
    -------
    Any
        Converted value.

    Raises
    ------
    InvalidContextError
        If the request parameters are invalid.
    """
    try:
        request = ConversionRequestConfig(
            converter=converter,
            direction=direction,
            parameters=dict(parameters) if parameters is not None else None,
            enum_type=enum_type,
        )
    except ValidationError as exc:
        raise InvalidContextError(f"Invalid conversion request: {exc}") from exc

    registry = registry or create_default_registry(converter_modules)
    target = registry.get(request.converter)

    context: ConverterContext | None = None
    if request.parameters is not None or request.enum_type is not None:
        context = build_context(
            parameters=request.parameters,
            enum_members=load_enum_members(request.enum_type)
            if request.enum_type is not None
            else None,
        )

    if request.direction == "to_json":
        return target.to_json(value, context)
    return target.from_json(value, context)
