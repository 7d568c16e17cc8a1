"""Pydantic schemas for runtime validation of converter configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

type Direction = Literal["to_json", "from_json"]


def _normalize_parameters(value: object) -> dict[str, str] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError("parameters must be a mapping.")
    normalized: dict[str, str] = {}
    for key, item in value.items():
        name = str(key).strip()
        if not name:
            raise ValueError("parameter names cannot be empty.")
        normalized[name] = str(item)
    return normalized


class ConverterContextConfig(BaseModel):
    """Validated input for building a per-field converter context."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    parameters: dict[str, str] | None = None
    enum_members: list[object] | None = None

    @field_validator("parameters", mode="before")
    @classmethod
    def _validate_parameters(cls, value: object) -> dict[str, str] | None:
        return _normalize_parameters(value)


class ConversionRequestConfig(BaseModel):
    """Validated input for a name-based single value conversion."""

    model_config = ConfigDict(extra="forbid")

    converter: str = Field(min_length=1)
    direction: Direction = "from_json"
    parameters: dict[str, str] | None = None
    enum_type: str | None = None

    @field_validator("converter")
    @classmethod
    def _validate_converter(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("converter name cannot be blank.")
        return value

    @field_validator("parameters", mode="before")
    @classmethod
    def _validate_parameters(cls, value: object) -> dict[str, str] | None:
        return _normalize_parameters(value)

    @field_validator("enum_type")
    @classmethod
    def _validate_enum_type(cls, value: str | None) -> str | None:
        if value is None:
            return None
        module, sep, attr = value.partition(":")
        if not sep or not module.strip() or not attr.strip():
            raise ValueError("enum_type must use the 'module:Class' form.")
        return value
