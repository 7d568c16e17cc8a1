"""Exception hierarchy for value conversion."""

from __future__ import annotations


class ConversionError(Exception):
    """Base exception for failures while converting a single value.

    Lenient shape mismatches never raise; only contract violations do.
    """

    exit_code = 2


class MissingConversionContextError(ConversionError):
    """Raised when a converter needs context (members, callbacks, types) it was not given."""


class EnumIndexOutOfRangeError(ConversionError, IndexError):
    """Raised when a numeric enum index falls outside the member sequence."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(
            f"Enum index {index} is out of range for {size} member(s)."
        )
        self.index = index
        self.size = size


class MalformedJsonError(ConversionError):
    """Raised when textual container input is not a valid JSON document."""


class InvalidFormatError(ConversionError):
    """Raised when a date or number pattern cannot be compiled."""


class InvalidContextError(ConversionError):
    """Raised when raw context or request configuration fails validation."""


class ConverterPluginError(Exception):
    """Raised for converter registration and plugin loading failures."""

    exit_code = 3


class UnknownConverterError(ConverterPluginError, KeyError):
    """Raised when a converter name is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
