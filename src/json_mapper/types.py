"""Shared type aliases for converter modules."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from json_mapper.context import TypeDescriptor

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | Sequence["JsonValue"] | Mapping[str, "JsonValue"]
type ParameterMap = Mapping[str, str]

type SerializeFn = Callable[[Any], JsonValue]
type DeserializeFn = Callable[[Any, "TypeDescriptor"], Any]
