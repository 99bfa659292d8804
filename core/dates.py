from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import pandas as pd


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedDate:
    """A calendar day read from a response timestamp.

    The day is kept exactly as entered, so ``31/04/2024`` stays (2024, 4, 31).
    ``approximate`` marks values that came from the free-form fallback.
    """

    year: int
    month: int
    day: int
    approximate: bool = field(default=False, compare=False)

    @classmethod
    def from_date(cls, value: date) -> "ParsedDate":
        return cls(value.year, value.month, value.day)

    def ordinal(self) -> int:
        """Day number on the proleptic calendar; overflowing days roll into the next month."""
        first = date(self.year, self.month, 1)
        return first.toordinal() + self.day - 1

    def to_date(self) -> date:
        return date.fromordinal(self.ordinal())


def _parse_day_first(text: str) -> Optional[ParsedDate]:
    date_part = text.split()[0]
    pieces = date_part.split("/")
    if len(pieces) != 3:
        return None
    if not all(p.isascii() and p.isdigit() for p in pieces):
        return None
    day, month, year = (int(p, 10) for p in pieces)
    if not (1 <= month <= 12 and 1 <= day <= 31 and 1 <= year <= 9999):
        return None
    return ParsedDate(year, month, day)


def _parse_free_form(text: str, timezone: Optional[str]) -> Optional[ParsedDate]:
    ts = pd.to_datetime(text, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None and timezone:
        ts = ts.tz_convert(timezone)
    logger.debug("Timestamp %r parsed with free-form fallback", text)
    return ParsedDate(int(ts.year), int(ts.month), int(ts.day), approximate=True)


def parse_timestamp(raw: object, *, legacy: bool = False, timezone: Optional[str] = None) -> Optional[ParsedDate]:
    """Read ``dd/MM/yyyy[ HH:mm:ss]`` into a ParsedDate, or None when unparseable.

    With ``legacy`` set, values that are not slash-delimited go through
    ``pandas.to_datetime``. That path guesses the field order and only knows the
    timezone when the text carries one, so its results are flagged approximate.
    """
    if raw is None or not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None
    parsed = _parse_day_first(text)
    if parsed is not None or not legacy:
        return parsed
    try:
        return _parse_free_form(text, timezone)
    except (ValueError, TypeError, OverflowError):
        return None


def today_in(timezone: str) -> ParsedDate:
    return ParsedDate.from_date(pd.Timestamp.now(tz=timezone).date())
