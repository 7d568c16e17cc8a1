"""Enum converters: annotated, qualified-name, short-name and numeric-index policies."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, ClassVar, Self

from json_mapper.context import ConverterContext
from json_mapper.converters.base import Capability, default_text, short_name
from json_mapper.errors import EnumIndexOutOfRangeError, MissingConversionContextError
from json_mapper.types import JsonValue

logger = logging.getLogger(__name__)


def _map_scalar_or_list(value: Any, convert: Callable[[Any], Any]) -> Any:
    if isinstance(value, (list, tuple)):
        return [convert(item) for item in value]
    return convert(value)


def require_enum_members(
    context: ConverterContext | None,
    converter_name: str,
) -> Sequence[Any]:
    """Return the context enum members or raise when they are missing.

    Raises
    ------
    MissingConversionContextError
        If ``context`` is absent or carries no enum member sequence.
    """
    if context is None or context.enum_members is None:
        raise MissingConversionContextError(
            f"{converter_name} converter requires enum members in the conversion context."
        )
    return context.enum_members


def _first_match(
    members: Iterable[Any],
    candidate: Any,
    key: Callable[[Any], str],
) -> Any:
    wanted = key(candidate)
    for member in members:
        if key(member) == wanted:
            return member
    logger.debug("no enum member matches %r", candidate)
    return None


@dataclasses.dataclass(frozen=True)
class AnnotatedEnumConverter:
    """Enum converter matching on the textual form of members.

    Members come from the field context when it has them, otherwise from the
    converter's default set bound with :meth:`with_enum_values`. Quotes around
    textual candidates are ignored.
    """

    name: ClassVar[str] = "enum_annotated"
    capabilities: ClassVar[frozenset[Capability]] = frozenset({Capability.ENUM_VALUES})

    enum_values: tuple[Any, ...] = ()

    def with_enum_values(self, enum_values: Iterable[Any]) -> Self:
        return dataclasses.replace(self, enum_values=tuple(enum_values))

    def from_json(self, json_value: Any, context: ConverterContext | None = None) -> Any:
        members: Sequence[Any] = self.enum_values
        if context is not None and context.enum_members is not None:
            members = context.enum_members

        def convert(item: Any) -> Any:
            if isinstance(item, str):
                item = item.strip('"')
            return _first_match(members, item, default_text)

        return _map_scalar_or_list(json_value, convert)

    def to_json(self, value: Any, context: ConverterContext | None = None) -> JsonValue:
        def convert(item: Any) -> Any:
            if item is None or isinstance(item, str):
                return item
            return default_text(item)

        return _map_scalar_or_list(value, convert)


class _MatchingEnumConverter:
    """Shared behaviour of the qualified and short-name converters."""

    name: ClassVar[str] = "enum"
    capabilities: ClassVar[frozenset[Capability]] = frozenset()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def key(self, value: Any) -> str:
        return default_text(value)

    def from_json(self, json_value: Any, context: ConverterContext | None = None) -> Any:
        members = require_enum_members(context, self.name)
        return _map_scalar_or_list(
            json_value, lambda item: _first_match(members, item, self.key)
        )

    def to_json(self, value: Any, context: ConverterContext | None = None) -> JsonValue:
        return _map_scalar_or_list(
            value, lambda item: None if item is None else self.key(item)
        )


class EnumConverter(_MatchingEnumConverter):
    """Enum converter using the qualified ``Type.member`` form."""

    name: ClassVar[str] = "enum"


class ShortEnumConverter(_MatchingEnumConverter):
    """Enum converter using the bare member name."""

    name: ClassVar[str] = "enum_short"

    def key(self, value: Any) -> str:
        return short_name(value)


class NumericEnumConverter:
    """Enum converter using the zero-based position in the member sequence."""

    name: ClassVar[str] = "enum_numeric"
    capabilities: ClassVar[frozenset[Capability]] = frozenset()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def from_json(self, json_value: Any, context: ConverterContext | None = None) -> Any:
        members = require_enum_members(context, self.name)

        def convert(item: Any) -> Any:
            if isinstance(item, bool) or not isinstance(item, int):
                return item
            if not 0 <= item < len(members):
                raise EnumIndexOutOfRangeError(item, len(members))
            return members[item]

        return _map_scalar_or_list(json_value, convert)

    def to_json(self, value: Any, context: ConverterContext | None = None) -> JsonValue:
        members = require_enum_members(context, self.name)

        def convert(item: Any) -> int:
            for index, member in enumerate(members):
                if member == item:
                    return index
            return -1

        return _map_scalar_or_list(value, convert)


annotated_enum_converter = AnnotatedEnumConverter()
enum_converter = EnumConverter()
short_enum_converter = ShortEnumConverter()
numeric_enum_converter = NumericEnumConverter()
