from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional

import pandas as pd

from core.buckets import in_bucket
from core.data import column_values
from core.dates import ParsedDate, parse_timestamp


UNKNOWN = "Unknown"

# A predicate maps the record table to a boolean mask over its rows.
Predicate = Callable[[pd.DataFrame], pd.Series]


@dataclass(frozen=True)
class FrequencyEntry:
    label: str
    count: int


@dataclass(frozen=True)
class ComparisonEntry:
    group: str
    count: int


def labels(frame: pd.DataFrame, key: str) -> pd.Series:
    values = column_values(frame, key)
    return values.mask(values.eq(""), UNKNOWN)


def _ranked(series: pd.Series) -> pd.Series:
    if series.empty:
        return pd.Series(dtype="int64")
    # groupby(sort=False) keeps first-seen order, the stable sort keeps it among ties
    counts = series.groupby(series, sort=False).size()
    return counts.sort_values(ascending=False, kind="stable")


def count_by(frame: pd.DataFrame, key: str) -> List[FrequencyEntry]:
    return [FrequencyEntry(label=str(label), count=int(n)) for label, n in _ranked(labels(frame, key)).items()]


def resolve_timestamp_column(frame: pd.DataFrame, preferred: str) -> Optional[str]:
    if preferred in frame.columns:
        return preferred
    return str(frame.columns[0]) if len(frame.columns) else None


def in_period(
    period: str,
    reference: ParsedDate,
    column: str,
    *,
    legacy: bool = False,
    timezone: Optional[str] = None,
) -> Predicate:
    parse = partial(parse_timestamp, legacy=legacy, timezone=timezone)

    def predicate(frame: pd.DataFrame) -> pd.Series:
        ts_col = resolve_timestamp_column(frame, column)
        if ts_col is None:
            return pd.Series(False, index=frame.index, dtype=bool)
        dates = frame[ts_col].map(lambda v: parse(v) if isinstance(v, str) else None)
        return dates.map(lambda d: in_bucket(d, period, reference)).astype(bool)

    return predicate


def matches_name(name: str, column: str) -> Predicate:
    wanted = (name or "").strip().lower()

    def predicate(frame: pd.DataFrame) -> pd.Series:
        return column_values(frame, column).str.lower().eq(wanted)

    return predicate


def filter_by(frame: pd.DataFrame, *predicates: Predicate) -> pd.DataFrame:
    mask = pd.Series(True, index=frame.index, dtype=bool)
    for predicate in predicates:
        mask &= predicate(frame)
    return frame[mask]


def count_in_period(frame: pd.DataFrame, period: str, reference: ParsedDate, column: str, **parse_opts) -> int:
    return int(len(filter_by(frame, in_period(period, reference, column, **parse_opts))))


def compare_by(
    frame: pd.DataFrame,
    period: str,
    reference: ParsedDate,
    group_key: str,
    *,
    timestamp_column: str = "Timestamp",
    legacy: bool = False,
    timezone: Optional[str] = None,
) -> List[ComparisonEntry]:
    matching = filter_by(frame, in_period(period, reference, timestamp_column, legacy=legacy, timezone=timezone))
    return [ComparisonEntry(group=e.label, count=e.count) for e in count_by(matching, group_key)]
