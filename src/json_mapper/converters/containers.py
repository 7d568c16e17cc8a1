"""Container converters delegating nested values back to the object walker.

Configuration that the walker wires in (callbacks, an existing instance, the
generic type descriptor) is bound with the ``with_*`` methods, which return a
new converter. Shared module-level instances are never mutated, so nested and
concurrent conversions cannot observe each other's configuration.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet
from typing import Any, ClassVar, Self

import orjson

from json_mapper.context import ConverterContext, TypeDescriptor
from json_mapper.converters.base import Capability, is_collection
from json_mapper.converters.enums import enum_converter
from json_mapper.errors import MalformedJsonError, MissingConversionContextError
from json_mapper.types import DeserializeFn, JsonValue, SerializeFn

logger = logging.getLogger(__name__)


def json_key(key: Any) -> str:
    """Render a converted map key as JSON object key text."""
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return key if isinstance(key, str) else str(key)


@dataclasses.dataclass(frozen=True)
class MapConverter:
    """Converter for ``dict``-like values with per-entry recursion.

    Parameters
    ----------
    serialize : SerializeFn | None, default=None
        Walker callback serializing one nested value.
    deserialize : DeserializeFn | None, default=None
        Walker callback deserializing one nested value to a target type.
    instance : Any, default=None
        Existing mutable mapping to populate instead of returning a new one.
    type_descriptor : TypeDescriptor | None, default=None
        Generic parameters of the map field (key type first, value type last).
    recurse_into_entries : bool | None, default=None
        Explicit recursion policy. ``None`` infers it: recurse when the bound
        instance is a mapping, or, without an instance, when the context is
        absent or carries enum members.
    """

    name: ClassVar[str] = "map"
    capabilities: ClassVar[frozenset[Capability]] = frozenset(
        {Capability.RECURSION, Capability.INSTANCE}
    )

    serialize: SerializeFn | None = None
    deserialize: DeserializeFn | None = None
    instance: Any = None
    type_descriptor: TypeDescriptor | None = None
    recurse_into_entries: bool | None = None

    def with_recursion(
        self,
        serialize: SerializeFn | None,
        deserialize: DeserializeFn | None,
    ) -> Self:
        return dataclasses.replace(self, serialize=serialize, deserialize=deserialize)

    def with_instance(
        self,
        instance: Any,
        type_descriptor: TypeDescriptor | None = None,
    ) -> Self:
        return dataclasses.replace(
            self, instance=instance, type_descriptor=type_descriptor
        )

    def with_recursion_policy(self, recurse_into_entries: bool | None) -> Self:
        return dataclasses.replace(self, recurse_into_entries=recurse_into_entries)

    def should_recurse(self, context: ConverterContext | None = None) -> bool:
        """Return whether entries are converted through the walker callbacks."""
        if self.recurse_into_entries is not None:
            return self.recurse_into_entries
        if self.instance is not None:
            return isinstance(self.instance, Mapping)
        if context is None:
            return True
        return context.enum_members is not None

    def from_json(self, json_value: Any, context: ConverterContext | None = None) -> Any:
        """Convert a JSON object (or JSON object text) into a map.

        Raises
        ------
        MalformedJsonError
            If textual input is not a JSON document.
        MissingConversionContextError
            If recursion is needed but the callback or type descriptor is missing.
        """
        result = json_value
        if isinstance(json_value, str):
            try:
                result = orjson.loads(json_value)
            except orjson.JSONDecodeError as exc:
                raise MalformedJsonError(f"Map value is not valid JSON: {exc}") from exc

        if not isinstance(result, Mapping):
            return result
        descriptor = self.type_descriptor
        if descriptor is None:
            if self.recurse_into_entries:
                raise MissingConversionContextError(
                    "map converter requires a type descriptor to convert entries."
                )
            logger.debug("map converter has no type descriptor; entries left as-is")
            return result

        if self.should_recurse(context):
            result = {
                self._from_item(key, descriptor.key_type, context): self._from_item(
                    value, descriptor.value_type, context
                )
                for key, value in result.items()
            }
        if isinstance(self.instance, MutableMapping):
            self.instance.update(result)
            return self.instance
        return result

    def to_json(self, value: Any, context: ConverterContext | None = None) -> JsonValue:
        """Convert a map into a JSON object with text keys.

        Raises
        ------
        MissingConversionContextError
            If a non-enum entry needs the serialize callback and none is bound.
        """
        if not isinstance(value, Mapping):
            logger.debug("map converter passed %s through unchanged", type(value).__name__)
            return value
        return {
            json_key(self._to_item(key, context)): self._to_item(item, context)
            for key, item in value.items()
        }

    def _from_item(
        self,
        item: Any,
        target: TypeDescriptor,
        context: ConverterContext | None,
    ) -> Any:
        if context is not None and context.is_enum_type(target.type):
            return enum_converter.from_json(item, context)
        if self.deserialize is None:
            raise MissingConversionContextError(
                "map converter requires a deserialize callback to convert entries."
            )
        return self.deserialize(item, target)

    def _to_item(self, item: Any, context: ConverterContext | None) -> Any:
        if context is not None and context.is_enum_type(type(item)):
            return enum_converter.to_json(item, context)
        if self.serialize is None:
            raise MissingConversionContextError(
                "map converter requires a serialize callback to convert entries."
            )
        return self.serialize(item)


@dataclasses.dataclass(frozen=True)
class IterableConverter:
    """Default converter for lists and sets.

    ``from_json`` refills a bound instance in place, so fields that cannot be
    reassigned keep their identity. ``to_json`` is the identity: serializing
    the elements is left to the object walker.
    """

    name: ClassVar[str] = "iterable"
    capabilities: ClassVar[frozenset[Capability]] = frozenset({Capability.INSTANCE})

    instance: Any = None
    type_descriptor: TypeDescriptor | None = None

    def with_instance(
        self,
        instance: Any,
        type_descriptor: TypeDescriptor | None = None,
    ) -> Self:
        return dataclasses.replace(
            self, instance=instance, type_descriptor=type_descriptor
        )

    def from_json(self, json_value: Any, context: ConverterContext | None = None) -> Any:
        instance = self.instance
        if instance is None or json_value is instance or not is_collection(json_value):
            return json_value

        if context is not None and context.enum_members is not None:
            items = [enum_converter.from_json(item, context) for item in json_value]
        else:
            items = list(json_value)

        if isinstance(instance, MutableSequence):
            instance.clear()
            instance.extend(items)
        elif isinstance(instance, MutableSet):
            instance.clear()
            for item in items:
                instance.add(item)
        else:
            logger.debug(
                "iterable converter cannot refill %s instance", type(instance).__name__
            )
        return instance

    def to_json(self, value: Any, context: ConverterContext | None = None) -> JsonValue:
        return value


map_converter = MapConverter()
iterable_converter = IterableConverter()
