"""Converter registry and custom converter module loading."""

from __future__ import annotations

import enum
import importlib
import importlib.util
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from types import ModuleType
from typing import Any

from json_mapper.converters import (
    Capability,
    Converter,
    Symbol,
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
from json_mapper.errors import ConverterPluginError, UnknownConverterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    """Registered converter with the capabilities it declared."""

    name: str
    converter: Converter
    capabilities: frozenset[Capability]
    types: tuple[type, ...] = ()


class ConverterRegistry:
    """Registry mapping converter names and runtime types to converters."""

    def __init__(self) -> None:
        self._by_name: dict[str, Registration] = {}
        self._by_type: dict[type, str] = {}

    def register(
        self,
        name: str,
        converter: Converter,
        types: Iterable[type] = (),
    ) -> None:
        """Register a converter under a unique name.

        Parameters
        ----------
        name : str
            Registry name, for example ``"date"``.
        converter : Converter
            Converter instance.
        types : Iterable[type], default=()
            Runtime types the converter handles in :meth:`resolve`.

        Raises
        ------
        ConverterPluginError
            If the name is empty or the object is not a converter.
        """
        name = (name or "").strip()
        if not name:
            raise ConverterPluginError("Converter must be registered under a non-empty name.")
        if not callable(getattr(converter, "to_json", None)) or not callable(
            getattr(converter, "from_json", None)
        ):
            raise ConverterPluginError(
                f"Converter '{name}' must implement to_json() and from_json()."
            )
        capabilities = frozenset(getattr(converter, "capabilities", frozenset()))
        handled = tuple(types)
        self._by_name[name] = Registration(name, converter, capabilities, handled)
        for tp in handled:
            self._by_type[tp] = name
        logger.debug(
            "registered converter %s (capabilities=%s, types=%s)",
            name,
            sorted(c.value for c in capabilities),
            [tp.__name__ for tp in handled],
        )

    def names(self) -> list[str]:
        """Return registered converter names, sorted."""
        return sorted(self._by_name)

    def registration(self, name: str) -> Registration:
        """Return the registration record for ``name``.

        Raises
        ------
        UnknownConverterError
            If ``name`` is not registered.
        """
        try:
            return self._by_name[name]
        except KeyError as exc:
            raise UnknownConverterError(
                f"Unknown converter '{name}'. Available converters: {', '.join(self.names())}"
            ) from exc

    def get(self, name: str) -> Converter:
        """Return the converter registered under ``name``."""
        return self.registration(name).converter

    def capabilities(self, name: str) -> frozenset[Capability]:
        """Return the capabilities declared by converter ``name`` at registration."""
        return self.registration(name).capabilities

    def supports(self, name: str, capability: Capability) -> bool:
        return capability in self.capabilities(name)

    def resolve(self, tp: type) -> Converter:
        """Select the converter for runtime type ``tp``.

        Exact registrations win, then enum types map to ``enum_annotated``,
        then the closest registered base class in the MRO; anything else gets
        ``default``.
        """
        name = self._by_type.get(tp)
        if name is not None:
            return self._by_name[name].converter
        if isinstance(tp, type) and issubclass(tp, enum.Enum) and "enum_annotated" in self._by_name:
            return self.get("enum_annotated")
        for candidate in getattr(tp, "__mro__", ()):
            name = self._by_type.get(candidate)
            if name is not None:
                return self._by_name[name].converter
        return self.get("default")

    def load_module(self, module_or_path: str) -> None:
        """Load custom converters from a module name or file path.

        .. warning::
            This executes code from the specified module. Only load converters
            from trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Raises
    ------
    ConverterPluginError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise ConverterPluginError(f"Unable to load converter module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise ConverterPluginError(
            f"Unable to import converter module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: ConverterRegistry) -> None:
    """Register converter definitions found in ``module``.

    A module exposes ``register_converters(registry)``, a ``CONVERTERS``
    mapping of name to converter, or a single ``CONVERTER`` with ``NAME``.
    """
    if hasattr(module, "register_converters"):
        module.register_converters(registry)
        return

    converters_obj: Any = getattr(module, "CONVERTERS", None)
    if converters_obj is not None:
        for name, converter in dict(converters_obj).items():
            registry.register(name, converter)
        return

    converter_obj = getattr(module, "CONVERTER", None)
    if converter_obj is not None:
        registry.register(getattr(module, "NAME", ""), converter_obj)
        return

    raise ConverterPluginError(
        "Converter module must expose register_converters(registry), CONVERTERS, "
        "or CONVERTER with NAME."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> ConverterRegistry:
    """Create a registry holding the built-in converters.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional converter modules to load.
    """
    registry = ConverterRegistry()
    registry.register("date", date_converter, (date, datetime))
    registry.register("number", number_converter, (int, float, Decimal))
    registry.register("symbol", symbol_converter, (Symbol,))
    registry.register("binary", binary_converter, (bytes, bytearray, memoryview))
    registry.register("bigint", bigint_converter)
    registry.register("enum", enum_converter)
    registry.register("enum_annotated", annotated_enum_converter)
    registry.register("enum_short", short_enum_converter)
    registry.register("enum_numeric", numeric_enum_converter)
    registry.register("map", map_converter, (dict,))
    registry.register("iterable", iterable_converter, (list, set, tuple, frozenset))
    registry.register("default", default_converter, (object,))
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
