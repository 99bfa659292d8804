from __future__ import annotations

from typing import Literal, Optional, Tuple

from core.dates import ParsedDate


Bucket = Literal["today", "this_week", "this_month", "all"]

BUCKETS: Tuple[str, ...] = ("today", "this_week", "this_month", "all")

# Rolling window: the reference day plus the six before it.
WEEK_SPAN_DAYS = 6


def in_bucket(value: Optional[ParsedDate], bucket: Bucket, reference: ParsedDate) -> bool:
    if value is None:
        return False
    if bucket == "all":
        return True
    if bucket == "today":
        return (value.year, value.month, value.day) == (reference.year, reference.month, reference.day)
    if bucket == "this_month":
        return (value.year, value.month) == (reference.year, reference.month)
    if bucket == "this_week":
        end = reference.ordinal()
        return end - WEEK_SPAN_DAYS <= value.ordinal() <= end
    raise ValueError(f"Unknown bucket: {bucket!r}")
