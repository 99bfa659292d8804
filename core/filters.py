from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.buckets import BUCKETS


DEFAULT_LIMIT = 50


class QueryError(ValueError):
    """A request parameter is missing or not one of the accepted values."""


@dataclass(frozen=True)
class SalespersonQuery:
    name: str
    period: str


def normalize_period(raw: Optional[str]) -> str:
    period = (raw or "").strip().lower()
    if not period:
        raise QueryError("Missing required query parameter: period")
    if period not in BUCKETS:
        raise QueryError(f"Invalid period '{raw}'. Allowed values: {', '.join(BUCKETS)}.")
    return period


def normalize_salesperson_query(name: Optional[str], period: Optional[str]) -> SalespersonQuery:
    missing = [label for label, value in (("name", name), ("period", period)) if not (value or "").strip()]
    if missing:
        raise QueryError(f"Missing required query parameter(s): {', '.join(missing)}")
    return SalespersonQuery(name=str(name).strip(), period=normalize_period(period))


def normalize_limit(raw: object, total: int) -> int:
    """Default a missing or non-numeric limit to 50, then clamp it to [0, total]."""
    try:
        limit = int(str(raw).strip()) if raw is not None else DEFAULT_LIMIT
    except ValueError:
        limit = DEFAULT_LIMIT
    return max(0, min(int(total), limit))
