"""Pluggable date and number formatters used by the scalar converters."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from decimal import Decimal
from typing import Protocol, runtime_checkable

from .dates import IcuDateFormat
from .numbers import IcuNumberFormat


@runtime_checkable
class DateFormat(Protocol):
    """Formatter turning dates into text and back for one pattern."""

    def format(self, value: date) -> str:
        """Render a date or datetime."""

    def parse(self, text: str) -> date:
        """Parse text produced by :meth:`format`; raise ``ValueError`` on mismatch."""


@runtime_checkable
class NumberFormat(Protocol):
    """Formatter turning numbers into text and back for one pattern."""

    def format(self, value: int | float | Decimal) -> str:
        """Render a number."""

    def parse(self, text: str) -> int | float:
        """Parse text produced by :meth:`format`; raise ``ValueError`` on mismatch."""


type DateFormatFactory = Callable[[str], DateFormat]
type NumberFormatFactory = Callable[[str], NumberFormat]

__all__ = [
    "DateFormat",
    "DateFormatFactory",
    "IcuDateFormat",
    "IcuNumberFormat",
    "NumberFormat",
    "NumberFormatFactory",
]
