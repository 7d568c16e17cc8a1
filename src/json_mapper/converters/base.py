"""Converter protocol, capability declarations and shared helpers."""

from __future__ import annotations

import abc
import enum
import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, time
from typing import Any, ClassVar, Protocol, Self, runtime_checkable

from json_mapper.context import ConverterContext, TypeDescriptor
from json_mapper.results import Converted, Outcome, Unchanged
from json_mapper.types import DeserializeFn, JsonValue, SerializeFn

logger = logging.getLogger(__name__)


class Capability(enum.Enum):
    """Optional wiring a converter accepts besides ``to_json``/``from_json``."""

    ENUM_VALUES = "enum_values"
    RECURSION = "recursion"
    INSTANCE = "instance"


@runtime_checkable
class Converter(Protocol):
    """Bidirectional conversion between a runtime value and a JSON value."""

    capabilities: ClassVar[frozenset[Capability]]

    def to_json(self, value: Any, context: ConverterContext | None = None) -> JsonValue:
        """Convert a runtime value into its JSON representation."""

    def from_json(self, json_value: Any, context: ConverterContext | None = None) -> Any:
        """Convert a JSON representation back into a runtime value."""


class EnumValuesSink(Protocol):
    """Converter accepting a default enum member sequence."""

    def with_enum_values(self, enum_values: Iterable[Any]) -> Self:
        """Return a copy that falls back to ``enum_values``."""


class RecursionSink(Protocol):
    """Converter delegating nested values back to the object walker."""

    def with_recursion(
        self,
        serialize: SerializeFn | None,
        deserialize: DeserializeFn | None,
    ) -> Self:
        """Return a copy bound to the walker callbacks."""


class InstanceSink(Protocol):
    """Converter able to populate an existing container in place."""

    def with_instance(
        self,
        instance: Any,
        type_descriptor: TypeDescriptor | None = None,
    ) -> Self:
        """Return a copy that fills ``instance`` instead of building a new one."""


def qualified_name(member: Any) -> str:
    """Return ``"Type.member"`` for enum members and ``str(member)`` otherwise."""
    if isinstance(member, enum.Enum):
        return f"{type(member).__name__}.{member.name}"
    return str(member)


def short_name(value: Any) -> str:
    """Return the part of the textual form after the last ``.``."""
    return default_text(value).rsplit(".", 1)[-1]


def default_text(value: Any) -> str:
    """Return the default textual form of ``value``.

    Enum members render qualified, dates and times as ISO-8601, anything else
    through ``str``.
    """
    if isinstance(value, enum.Enum):
        return qualified_name(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def is_collection(value: Any) -> bool:
    """Return whether ``value`` is an element collection (not text, bytes or a mapping)."""
    if isinstance(value, (str, bytes, bytearray, memoryview, Mapping)):
        return False
    return isinstance(value, (Sequence, set, frozenset)) or (
        isinstance(value, Iterable) and hasattr(value, "__len__")
    )


class ScalarConverter(abc.ABC):
    """Base class for stateless converters with lenient passthrough.

    Subclasses implement :meth:`encode` and :meth:`decode`, returning
    :class:`~json_mapper.results.Converted` or
    :class:`~json_mapper.results.Unchanged`.
    """

    name: ClassVar[str] = "scalar"
    capabilities: ClassVar[frozenset[Capability]] = frozenset()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @abc.abstractmethod
    def encode(self, value: Any, context: ConverterContext | None = None) -> Outcome:
        """Convert a runtime value, reporting whether it changed."""

    @abc.abstractmethod
    def decode(self, json_value: Any, context: ConverterContext | None = None) -> Outcome:
        """Convert a JSON value, reporting whether it changed."""

    def to_json(self, value: Any, context: ConverterContext | None = None) -> JsonValue:
        return self.encode(value, context).value

    def from_json(self, json_value: Any, context: ConverterContext | None = None) -> Any:
        return self.decode(json_value, context).value

    def _unchanged(self, value: Any, reason: str) -> Unchanged:
        logger.debug(
            "%s passed %s through unchanged: %s",
            self.name,
            type(value).__name__,
            reason,
        )
        return Unchanged(value)


__all__ = [
    "Capability",
    "Converted",
    "Converter",
    "EnumValuesSink",
    "InstanceSink",
    "RecursionSink",
    "ScalarConverter",
    "Unchanged",
    "default_text",
    "is_collection",
    "qualified_name",
    "short_name",
]
