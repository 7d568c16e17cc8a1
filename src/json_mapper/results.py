"""Tagged conversion outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Converted:
    """Value successfully converted into the target representation."""

    value: Any

    @property
    def changed(self) -> bool:
        return True


@dataclass(frozen=True)
class Unchanged:
    """Original value passed through because its shape did not match."""

    value: Any

    @property
    def changed(self) -> bool:
        return False


type Outcome = Converted | Unchanged
