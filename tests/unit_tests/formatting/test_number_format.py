"""Unit tests for ICU decimal pattern formatting and parsing."""

from __future__ import annotations

from decimal import Decimal

import pytest

from json_mapper.errors import InvalidFormatError
from json_mapper.formatting import IcuNumberFormat, NumberFormat
from json_mapper.formatting.numbers import compile_number_format


@pytest.mark.parametrize(
    ("pattern", "value", "expected"),
    [
        ("#,##0.00", 1234.5, "1,234.50"),
        ("#,##0.00", 1234567, "1,234,567.00"),
        ("#,##0.##", 0.5, "0.5"),
        ("0.###", 3.14159, "3.142"),
        ("000", 7, "007"),
        ("#", 0, "0"),
        ("0.0", 2.25, "2.2"),
        ("0.0", 2.35, "2.4"),
        ("0%", 0.25, "25%"),
        ("'USD' #,##0", 1500, "USD 1,500"),
        ("#,##0.00", Decimal("-42.1"), "-42.10"),
        ("#,##0;(#,##0)", -1500, "(1,500)"),
    ],
)
def test_format(pattern: str, value: int | float | Decimal, expected: str) -> None:
    """Render values with grouping, padding, rounding and affixes."""
    assert IcuNumberFormat(pattern).format(value) == expected


@pytest.mark.parametrize(
    ("pattern", "text", "expected"),
    [
        ("#,##0.00", "1,234.50", 1234.5),
        ("#,##0", "1,500", 1500),
        ("0%", "25%", 0.25),
        ("'USD' #,##0", "USD 1,500", 1500),
        ("#,##0.00", "-42.10", -42.1),
        ("#,##0;(#,##0)", "(1,500)", -1500),
    ],
)
def test_parse(pattern: str, text: str, expected: int | float) -> None:
    """Parse text rendered by the same pattern."""
    assert IcuNumberFormat(pattern).parse(text) == expected


def test_parse_integral_values_return_int() -> None:
    """Return int for integral values and float otherwise."""
    fmt = IcuNumberFormat("#,##0.00")
    assert isinstance(fmt.parse("12.00"), int)
    assert isinstance(fmt.parse("12.50"), float)


@pytest.mark.parametrize("text", ["abc", "EUR 12", "1.2.3", ""])
def test_parse_rejects_non_matching_text(text: str) -> None:
    """Raise ValueError for text outside the pattern."""
    fmt = IcuNumberFormat("'USD' #,##0.00")
    with pytest.raises(ValueError):
        fmt.parse(text)


@pytest.mark.parametrize("value", ["12", True, None, float("nan")])
def test_format_rejects_non_numbers(value: object) -> None:
    """Raise TypeError for values that are not finite real numbers."""
    with pytest.raises(TypeError):
        IcuNumberFormat("0.00").format(value)  # type: ignore[arg-type]


@pytest.mark.parametrize("pattern", ["", "USD", "0.00E0", "¤#,##0", "'open 0"])
def test_invalid_patterns_raise(pattern: str) -> None:
    """Reject empty, digitless, scientific, currency and unterminated patterns."""
    with pytest.raises(InvalidFormatError):
        IcuNumberFormat(pattern)


def test_compiled_formats_are_cached_and_satisfy_protocol() -> None:
    """Reuse compiled patterns and satisfy the NumberFormat protocol."""
    assert compile_number_format("0.00") is compile_number_format("0.00")
    assert isinstance(compile_number_format("0.00"), NumberFormat)
