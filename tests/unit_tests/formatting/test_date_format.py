"""Unit tests for ICU date pattern formatting and parsing."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from json_mapper.errors import InvalidFormatError
from json_mapper.formatting import DateFormat, IcuDateFormat
from json_mapper.formatting.dates import compile_date_format


def test_day_precision_pattern_round_trips_to_date() -> None:
    """Format and parse a date-only pattern back to a date."""
    fmt = IcuDateFormat("yyyy-MM-dd")
    assert fmt.format(date(2024, 1, 5)) == "2024-01-05"
    assert fmt.parse("2024-01-05") == date(2024, 1, 5)
    assert type(fmt.parse("2024-01-05")) is date


def test_time_pattern_parses_to_datetime() -> None:
    """Patterns with time fields produce datetimes."""
    fmt = IcuDateFormat("dd/MM/yyyy HH:mm:ss")
    value = datetime(2023, 12, 31, 23, 59, 7)
    assert fmt.format(value) == "31/12/2023 23:59:07"
    assert fmt.parse("31/12/2023 23:59:07") == value


def test_unpadded_fields_and_month_names() -> None:
    """Render single-letter fields unpadded and month names in English."""
    fmt = IcuDateFormat("d MMM yyyy")
    assert fmt.format(date(2024, 3, 9)) == "9 Mar 2024"
    assert fmt.parse("9 mar 2024") == date(2024, 3, 9)
    assert IcuDateFormat("MMMM d, y").format(date(2024, 7, 4)) == "July 4, 2024"


def test_twelve_hour_clock_with_marker() -> None:
    """Handle h and a fields in both directions."""
    fmt = IcuDateFormat("yyyy-MM-dd hh:mm a")
    value = datetime(2024, 1, 5, 15, 30)
    assert fmt.format(value) == "2024-01-05 03:30 PM"
    assert fmt.parse("2024-01-05 03:30 PM") == value
    assert fmt.parse("2024-01-05 12:00 AM") == datetime(2024, 1, 5, 0, 0)


def test_quoted_literals_and_fraction_digits() -> None:
    """Keep quoted literal text and truncate fractional seconds."""
    fmt = IcuDateFormat("yyyy-MM-dd'T'HH:mm:ss.SSS")
    value = datetime(2024, 1, 5, 8, 9, 10, 123456)
    assert fmt.format(value) == "2024-01-05T08:09:10.123"
    assert fmt.parse("2024-01-05T08:09:10.123") == datetime(2024, 1, 5, 8, 9, 10, 123000)


def test_escaped_apostrophe_is_literal() -> None:
    """Render '' as a single apostrophe."""
    assert IcuDateFormat("HH 'o''clock'").format(datetime(2024, 1, 1, 7)) == "07 o'clock"


def test_timezone_offset_field() -> None:
    """Render and parse numeric offsets; naive values omit the offset."""
    fmt = IcuDateFormat("yyyy-MM-dd HH:mmZ")
    aware = datetime(2024, 1, 5, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    assert fmt.format(aware) == "2024-01-05 10:00+0200"
    assert fmt.parse("2024-01-05 10:00+0200") == aware
    assert fmt.format(datetime(2024, 1, 5, 10, 0)) == "2024-01-05 10:00"
    assert fmt.parse("2024-01-05 10:00").tzinfo is None


def test_two_digit_year_pivot() -> None:
    """Apply the POSIX pivot to two digit years."""
    fmt = IcuDateFormat("dd.MM.yy")
    assert fmt.format(date(2024, 1, 5)) == "05.01.24"
    assert fmt.parse("05.01.24") == date(2024, 1, 5)
    assert fmt.parse("05.01.99") == date(1999, 1, 5)


def test_parse_mismatch_raises_value_error() -> None:
    """Raise ValueError for text that does not match the pattern."""
    fmt = IcuDateFormat("yyyy-MM-dd")
    with pytest.raises(ValueError):
        fmt.parse("05/01/2024")
    with pytest.raises(ValueError):
        fmt.parse("2024-02-30")


def test_format_rejects_non_dates() -> None:
    """Raise TypeError when asked to format something that is not a date."""
    with pytest.raises(TypeError):
        IcuDateFormat("yyyy").format("2024")  # type: ignore[arg-type]


@pytest.mark.parametrize("pattern", ["", "yyyy-QQ", "yyyy 'open"])
def test_invalid_patterns_raise(pattern: str) -> None:
    """Reject empty, unsupported and unterminated patterns."""
    with pytest.raises(InvalidFormatError):
        IcuDateFormat(pattern)


def test_compiled_formats_are_cached_and_satisfy_protocol() -> None:
    """Reuse compiled patterns and satisfy the DateFormat protocol."""
    assert compile_date_format("yyyy-MM-dd") is compile_date_format("yyyy-MM-dd")
    assert isinstance(compile_date_format("yyyy-MM-dd"), DateFormat)
