"""ICU/LDML date pattern formatting (``yyyy-MM-dd HH:mm:ss`` style)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from functools import lru_cache

from json_mapper.errors import InvalidFormatError

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

_TIME_FIELDS = frozenset("HhKkmsSaZ")
_SUPPORTED_FIELDS = frozenset("yMLdEHhKkmsSaZ")


@dataclass(frozen=True)
class _Token:
    """One pattern element: a field run like ``yyyy`` or a literal."""

    field: str
    width: int
    literal: str = ""


def _tokenize(pattern: str) -> tuple[_Token, ...]:
    tokens: list[_Token] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "'":
            end = i + 1
            chunk: list[str] = []
            while end < len(pattern):
                if pattern[end] == "'":
                    if end + 1 < len(pattern) and pattern[end + 1] == "'":
                        chunk.append("'")
                        end += 2
                        continue
                    break
                chunk.append(pattern[end])
                end += 1
            else:
                raise InvalidFormatError(f"Unterminated quote in date pattern '{pattern}'.")
            # '' outside a quoted run is a literal apostrophe
            tokens.append(_Token("", 0, "".join(chunk) if end > i + 1 else "'"))
            i = end + 1
        elif ch.isascii() and ch.isalpha():
            end = i
            while end < len(pattern) and pattern[end] == ch:
                end += 1
            if ch not in _SUPPORTED_FIELDS:
                raise InvalidFormatError(
                    f"Unsupported date pattern field '{ch}' in '{pattern}'."
                )
            tokens.append(_Token(ch, end - i))
            i = end
        else:
            tokens.append(_Token("", 0, ch))
            i += 1
    return tuple(tokens)


def _numeric_regex(width: int) -> str:
    return r"\d{1,2}" if width == 1 else rf"\d{{{width}}}"


class IcuDateFormat:
    """Format and parse dates with an ICU date pattern.

    Supported fields: ``y M L d E H h K k m s S a Z``. Quoted text is literal.
    Patterns without time fields parse to :class:`datetime.date`, others to
    :class:`datetime.datetime`.
    """

    def __init__(self, pattern: str) -> None:
        if not pattern:
            raise InvalidFormatError("Date pattern cannot be empty.")
        self.pattern = pattern
        self._tokens = _tokenize(pattern)
        self._has_time = any(token.field in _TIME_FIELDS for token in self._tokens)
        self._short_year = any(t.field == "y" and t.width == 2 for t in self._tokens)
        self._regex = re.compile(self._build_regex(), re.IGNORECASE)

    def __repr__(self) -> str:
        return f"IcuDateFormat({self.pattern!r})"

    def format(self, value: date) -> str:
        """Render ``value`` with the pattern.

        Raises
        ------
        TypeError
            If ``value`` is not a date or datetime.
        """
        if not isinstance(value, date):
            raise TypeError(f"Cannot format {type(value).__name__} as a date.")
        return "".join(self._format_token(token, value) for token in self._tokens)

    def parse(self, text: str) -> date:
        """Parse ``text`` with the pattern.

        Raises
        ------
        ValueError
            If ``text`` does not match the pattern or names an invalid date.
        """
        match = self._regex.fullmatch(text.strip())
        if match is None:
            raise ValueError(f"'{text}' does not match date pattern '{self.pattern}'.")
        return self._build_value(match.groupdict())

    def _build_regex(self) -> str:
        parts: list[str] = []
        seen: set[str] = set()
        for token in self._tokens:
            field = token.field
            if not field:
                parts.append(re.escape(token.literal))
                continue
            group = field if field not in seen else None
            seen.add(field)
            parts.append(self._field_regex(token, group))
        return "".join(parts)

    @staticmethod
    def _field_regex(token: _Token, group: str | None) -> str:
        field, width = token.field, token.width
        if field == "y":
            body = r"\d{2}" if width == 2 else (r"\d+" if width == 1 else rf"\d{{{width},}}")
        elif field in "ML" and width >= 3:
            names = MONTH_NAMES if width >= 4 else tuple(n[:3] for n in MONTH_NAMES)
            body = "|".join(names)
        elif field == "E":
            names = WEEKDAY_NAMES if width >= 4 else tuple(n[:3] for n in WEEKDAY_NAMES)
            body = "|".join(names)
        elif field == "S":
            body = r"\d+"
        elif field == "a":
            body = "AM|PM"
        elif field == "Z":
            body = r"Z|[+-]\d{2}:?\d{2}"
        else:
            body = _numeric_regex(width)
        optional = "?" if field == "Z" else ""
        if group is None:
            return f"(?:{body}){optional}"
        return f"(?P<{group}>{body}){optional}"

    def _format_token(self, token: _Token, value: date) -> str:
        field, width = token.field, token.width
        if not field:
            return token.literal
        hour = getattr(value, "hour", 0)
        if field == "y":
            if width == 2:
                return f"{value.year % 100:02d}"
            return f"{value.year:0{width}d}"
        if field in "ML":
            if width >= 4:
                return MONTH_NAMES[value.month - 1]
            if width == 3:
                return MONTH_NAMES[value.month - 1][:3]
            return f"{value.month:0{width}d}"
        if field == "d":
            return f"{value.day:0{width}d}"
        if field == "E":
            name = WEEKDAY_NAMES[value.weekday()]
            return name if width >= 4 else name[:3]
        if field == "H":
            return f"{hour:0{width}d}"
        if field == "k":
            return f"{hour or 24:0{width}d}"
        if field == "K":
            return f"{hour % 12:0{width}d}"
        if field == "h":
            return f"{hour % 12 or 12:0{width}d}"
        if field == "m":
            return f"{getattr(value, 'minute', 0):0{width}d}"
        if field == "s":
            return f"{getattr(value, 'second', 0):0{width}d}"
        if field == "S":
            digits = f"{getattr(value, 'microsecond', 0):06d}"
            return digits[:width].ljust(width, "0")
        if field == "a":
            return "PM" if hour >= 12 else "AM"
        # Z
        offset = value.utcoffset() if isinstance(value, datetime) else None
        if offset is None:
            return ""
        total = int(offset.total_seconds() // 60)
        sign = "-" if total < 0 else "+"
        hours, minutes = divmod(abs(total), 60)
        separator = ":" if width >= 4 else ""
        return f"{sign}{hours:02d}{separator}{minutes:02d}"

    def _build_value(self, fields: dict[str, str | None]) -> date:
        year = int(fields.get("y") or 1970)
        if self._short_year and fields.get("y"):
            # POSIX strptime pivot: 69-99 -> 19xx, 00-68 -> 20xx
            year += 1900 if year >= 69 else 2000
        month = self._month(fields.get("M") or fields.get("L"))
        day = int(fields.get("d") or 1)
        if not self._has_time:
            return date(year, month, day)

        hour = 0
        if fields.get("H") is not None:
            hour = int(fields["H"] or 0)
        elif fields.get("k") is not None:
            hour = int(fields["k"] or 0) % 24
        elif fields.get("h") is not None or fields.get("K") is not None:
            hour = int(fields.get("h") or fields.get("K") or 0) % 12
            if (fields.get("a") or "").upper() == "PM":
                hour += 12
        fraction = fields.get("S") or "0"
        microsecond = int(fraction[:6].ljust(6, "0"))
        return datetime(
            year,
            month,
            day,
            hour,
            int(fields.get("m") or 0),
            int(fields.get("s") or 0),
            microsecond,
            tzinfo=self._timezone(fields.get("Z")),
        )

    @staticmethod
    def _month(raw: str | None) -> int:
        if raw is None:
            return 1
        if raw.isdigit():
            return int(raw)
        lowered = raw.lower()
        for index, name in enumerate(MONTH_NAMES, start=1):
            if name.lower() == lowered or name[:3].lower() == lowered:
                return index
        raise ValueError(f"Unknown month name '{raw}'.")

    @staticmethod
    def _timezone(raw: str | None) -> timezone | None:
        if raw is None:
            return None
        if raw.upper() == "Z":
            return timezone.utc
        sign = -1 if raw[0] == "-" else 1
        digits = raw[1:].replace(":", "")
        delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
        return timezone(sign * delta)


@lru_cache(maxsize=128)
def compile_date_format(pattern: str) -> IcuDateFormat:
    """Return a cached :class:`IcuDateFormat` for ``pattern``."""
    return IcuDateFormat(pattern)
