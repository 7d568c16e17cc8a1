"""Converter registry and custom converter loading."""

from .registry import ConverterRegistry, Registration, create_default_registry

__all__ = ["ConverterRegistry", "Registration", "create_default_registry"]
