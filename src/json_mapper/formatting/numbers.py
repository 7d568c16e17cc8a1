"""ICU decimal pattern formatting (``#,##0.00`` style)."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext
from functools import lru_cache

from json_mapper.errors import InvalidFormatError

_NUMBER_CHARS = frozenset("#0,.")
_DIGITS_RE = re.compile(r"\d*\.?\d*")


def _split_affixes(subpattern: str, pattern: str) -> tuple[str, str, str]:
    """Split a subpattern into prefix, number body and suffix (quotes resolved)."""
    prefix: list[str] = []
    body: list[str] = []
    suffix: list[str] = []
    target = prefix
    quoted = False
    i = 0
    while i < len(subpattern):
        ch = subpattern[i]
        if ch == "'":
            if i + 1 < len(subpattern) and subpattern[i + 1] == "'":
                target.append("'")
                i += 2
                continue
            quoted = not quoted
            i += 1
            continue
        if not quoted and ch in _NUMBER_CHARS:
            if target is suffix:
                raise InvalidFormatError(f"Malformed number pattern '{pattern}'.")
            target = body
            body.append(ch)
        else:
            if not quoted and ch in "E¤":
                raise InvalidFormatError(
                    f"Unsupported number pattern element '{ch}' in '{pattern}'."
                )
            if target is body:
                target = suffix
            target.append(ch)
        i += 1
    if quoted:
        raise InvalidFormatError(f"Unterminated quote in number pattern '{pattern}'.")
    if not body:
        raise InvalidFormatError(f"Number pattern '{pattern}' has no digits.")
    return "".join(prefix), "".join(body), "".join(suffix)


class IcuNumberFormat:
    """Format and parse numbers with an ICU decimal pattern.

    Supports ``0``/``#`` digits, ``,`` grouping, ``.`` decimal separator,
    literal (optionally quoted) prefixes and suffixes, ``%`` and ``‰``
    multipliers and an optional ``;``-separated negative subpattern.
    Rounding is half-even.
    """

    def __init__(self, pattern: str) -> None:
        if not pattern:
            raise InvalidFormatError("Number pattern cannot be empty.")
        self.pattern = pattern
        positive, _, negative = pattern.partition(";")
        self.prefix, body, self.suffix = _split_affixes(positive, pattern)
        if negative:
            neg_prefix, _, neg_suffix = _split_affixes(negative, pattern)
            self.negative_prefix, self.negative_suffix = neg_prefix, neg_suffix
        else:
            self.negative_prefix, self.negative_suffix = "-" + self.prefix, self.suffix

        integer, _, fraction = body.partition(".")
        if "." in fraction or "," in fraction:
            raise InvalidFormatError(f"Malformed fraction in number pattern '{pattern}'.")
        self.min_integer_digits = integer.count("0")
        self.grouping_size = len(integer) - integer.rfind(",") - 1 if "," in integer else 0
        self.min_fraction_digits = fraction.count("0")
        self.max_fraction_digits = len(fraction)

        affixes = self.prefix + self.suffix
        if "%" in affixes:
            self.multiplier = Decimal(100)
        elif "‰" in affixes:
            self.multiplier = Decimal(1000)
        else:
            self.multiplier = Decimal(1)

    def __repr__(self) -> str:
        return f"IcuNumberFormat({self.pattern!r})"

    def format(self, value: int | float | Decimal) -> str:
        """Render ``value`` with the pattern.

        Raises
        ------
        TypeError
            If ``value`` is not a real number.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise TypeError(f"Cannot format {type(value).__name__} as a number.")
        number = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
        if not number.is_finite():
            raise TypeError(f"Cannot format non-finite number {value!r}.")

        with localcontext() as ctx:
            ctx.prec = max(64, len(number.as_tuple().digits) + self.max_fraction_digits + 4)
            scaled = abs(number * self.multiplier).quantize(
                Decimal(1).scaleb(-self.max_fraction_digits),
                rounding=ROUND_HALF_EVEN,
            )
        text = format(scaled, "f")
        integer, _, fraction = text.partition(".")
        fraction = fraction.rstrip("0")
        if len(fraction) < self.min_fraction_digits:
            fraction = fraction.ljust(self.min_fraction_digits, "0")
        integer = integer.lstrip("0").rjust(self.min_integer_digits, "0")
        if not integer and not fraction:
            integer = "0"
        integer = self._group(integer)

        body = f"{integer}.{fraction}" if fraction else integer
        if number < 0 and scaled != 0:
            return f"{self.negative_prefix}{body}{self.negative_suffix}"
        return f"{self.prefix}{body}{self.suffix}"

    def parse(self, text: str) -> int | float:
        """Parse ``text`` with the pattern.

        Raises
        ------
        ValueError
            If ``text`` does not match the pattern affixes or digits.
        """
        candidate = text.strip()
        negative = False
        if (
            self.negative_prefix != self.prefix
            and candidate.startswith(self.negative_prefix)
            and candidate.endswith(self.negative_suffix)
        ):
            negative = True
            candidate = self._strip(candidate, self.negative_prefix, self.negative_suffix)
        elif candidate.startswith(self.prefix) and candidate.endswith(self.suffix):
            candidate = self._strip(candidate, self.prefix, self.suffix)
        else:
            raise ValueError(f"'{text}' does not match number pattern '{self.pattern}'.")

        digits = candidate.replace(",", "")
        if not digits or digits == "." or not _DIGITS_RE.fullmatch(digits):
            raise ValueError(f"'{text}' does not match number pattern '{self.pattern}'.")
        try:
            number = Decimal(digits) / self.multiplier
        except InvalidOperation as exc:
            raise ValueError(f"'{text}' is not a number.") from exc
        if negative:
            number = -number
        if number == number.to_integral_value():
            return int(number)
        return float(number)

    def _group(self, integer: str) -> str:
        size = self.grouping_size
        if size <= 0 or len(integer) <= size:
            return integer
        groups: list[str] = []
        while len(integer) > size:
            groups.insert(0, integer[-size:])
            integer = integer[:-size]
        groups.insert(0, integer)
        return ",".join(groups)

    @staticmethod
    def _strip(text: str, prefix: str, suffix: str) -> str:
        end = len(text) - len(suffix) if suffix else len(text)
        return text[len(prefix):end]


@lru_cache(maxsize=128)
def compile_number_format(pattern: str) -> IcuNumberFormat:
    """Return a cached :class:`IcuNumberFormat` for ``pattern``."""
    return IcuNumberFormat(pattern)
