from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from core.aggregate import FrequencyEntry, count_by
from core.data import column_values
from core.filters import normalize_limit


NAME_COLUMN = "Name"
REMARKS_COLUMN = "Remarks"
ATTENDED_BY_COLUMN = "attended by"

# Response field -> sheet column holding the categorical answer.
FREQUENCY_COLUMNS: Dict[str, str] = {
    "top_sources": "How did you come to know about us?",
    "top_requirements": "Requirements",
    "top_configurations": "Configuration",
    "top_industries": "I am working in",
    "income_distribution": "Current annual income",
}


@dataclass(frozen=True)
class TruncatedList:
    items: List[Any]
    total: int
    truncated: bool


@dataclass(frozen=True)
class AnalyticsReport:
    total_records: int
    limit: int
    top_sources: List[FrequencyEntry] = field(default_factory=list)
    top_requirements: List[FrequencyEntry] = field(default_factory=list)
    top_configurations: List[FrequencyEntry] = field(default_factory=list)
    top_industries: List[FrequencyEntry] = field(default_factory=list)
    income_distribution: List[FrequencyEntry] = field(default_factory=list)
    all_names: TruncatedList = field(default_factory=lambda: TruncatedList([], 0, False))
    remarks: TruncatedList = field(default_factory=lambda: TruncatedList([], 0, False))


def truncate(items: List[Any], limit: int) -> TruncatedList:
    total = len(items)
    kept = items[: max(0, limit)]
    return TruncatedList(items=kept, total=total, truncated=total > len(kept))


def _optional(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    return str(value)


def collect_names(frame: pd.DataFrame) -> List[str]:
    names = column_values(frame, NAME_COLUMN)
    return [n for n in names.tolist() if n]


def collect_remarks(frame: pd.DataFrame, *, attended_by_column: str = ATTENDED_BY_COLUMN) -> List[Dict[str, Optional[str]]]:
    remarks = column_values(frame, REMARKS_COLUMN)
    out: List[Dict[str, Optional[str]]] = []
    for idx, remark in remarks.items():
        if not remark:
            continue
        row = frame.loc[idx]
        out.append(
            {
                "name": _optional(row.get(NAME_COLUMN)),
                "attended_by": _optional(row.get(attended_by_column)),
                "remark": _optional(row.get(REMARKS_COLUMN)),
            }
        )
    return out


def build_report(frame: pd.DataFrame, limit: object = None, *, attended_by_column: str = ATTENDED_BY_COLUMN) -> AnalyticsReport:
    """Frequency tables for the form's categorical answers plus the name and remark lists.

    ``limit`` is the raw request value; it is defaulted and clamped against the
    record count before the two lists are cut.
    """
    applied = normalize_limit(limit, len(frame))
    tables = {name: count_by(frame, column) for name, column in FREQUENCY_COLUMNS.items()}
    return AnalyticsReport(
        total_records=int(len(frame)),
        limit=applied,
        all_names=truncate(collect_names(frame), applied),
        remarks=truncate(collect_remarks(frame, attended_by_column=attended_by_column), applied),
        **tables,
    )
