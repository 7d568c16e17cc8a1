"""Per-field conversion context and generic type descriptors."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, get_args, get_origin

from pydantic import ValidationError

from json_mapper.errors import InvalidContextError
from json_mapper.schemas import ConverterContextConfig


@dataclass(frozen=True)
class ConverterContext:
    """Per-field converter configuration supplied by the object walker.

    Parameters
    ----------
    parameters : Mapping[str, str] | None, default=None
        Named converter parameters such as ``format``.
    enum_members : Sequence[Any] | None, default=None
        Ordered enum members allowed for the field.
    enum_type_predicate : Callable[[Any], bool] | None, default=None
        Override for :meth:`is_enum_type`.
    """

    parameters: Mapping[str, str] | None = None
    enum_members: Sequence[Any] | None = None
    enum_type_predicate: Callable[[Any], bool] | None = None

    def is_enum_type(self, tp: Any) -> bool:
        """Return whether ``tp`` should be converted as an enum.

        Parameters
        ----------
        tp : Any
            Runtime type (or type descriptor target) to classify.

        Returns
        -------
        bool
            ``True`` when values of ``tp`` are enum members.
        """
        if self.enum_type_predicate is not None:
            return bool(self.enum_type_predicate(tp))
        if isinstance(tp, type) and issubclass(tp, enum.Enum):
            return True
        if self.enum_members:
            return any(type(member) is tp for member in self.enum_members)
        return False


@dataclass(frozen=True)
class TypeDescriptor:
    """Generic type description of a container field.

    ``parameters[0]`` is a map's key type and ``parameters[-1]`` its value
    type; single-parameter containers use the same descriptor for both.
    """

    type: Any = object
    parameters: tuple[TypeDescriptor, ...] = ()

    @property
    def key_type(self) -> TypeDescriptor:
        return self.parameters[0] if self.parameters else TypeDescriptor()

    @property
    def value_type(self) -> TypeDescriptor:
        return self.parameters[-1] if self.parameters else TypeDescriptor()

    @classmethod
    def of(cls, annotation: Any) -> TypeDescriptor:
        """Build a descriptor from a typing annotation like ``dict[str, list[int]]``."""
        origin = get_origin(annotation)
        if origin is None:
            return cls(type=annotation)
        return cls(
            type=origin,
            parameters=tuple(cls.of(arg) for arg in get_args(annotation)),
        )


def get_parameter(name: str, context: ConverterContext | None = None) -> str | None:
    """Return the named converter parameter, or ``None`` when absent.

    Parameters
    ----------
    name : str
        Parameter name, for example ``"format"``.
    context : ConverterContext | None, default=None
        Optional per-field context.

    Returns
    -------
    str | None
        Parameter value when both context and parameter mapping provide it.
    """
    if context is None or context.parameters is None:
        return None
    return context.parameters.get(name)


def build_context(
    *,
    parameters: Mapping[str, object] | None = None,
    enum_members: Sequence[Any] | None = None,
    enum_type_predicate: Callable[[Any], bool] | None = None,
) -> ConverterContext:
    """Validate raw configuration and build a :class:`ConverterContext`.

    Raises
    ------
    InvalidContextError
        If the parameters are not a mapping of non-empty names.
    """
    try:
        config = ConverterContextConfig(
            parameters=dict(parameters) if parameters is not None else None,
            enum_members=list(enum_members) if enum_members is not None else None,
        )
    except (TypeError, ValueError, ValidationError) as exc:
        raise InvalidContextError(f"Invalid converter context: {exc}") from exc

    return ConverterContext(
        parameters=config.parameters,
        enum_members=tuple(config.enum_members)
        if config.enum_members is not None
        else None,
        enum_type_predicate=enum_type_predicate,
    )
