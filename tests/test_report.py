from __future__ import annotations

import pytest

from core.aggregate import UNKNOWN, FrequencyEntry
from core.data import rows_to_frame
from core.filters import DEFAULT_LIMIT, normalize_limit
from core.report import build_report, truncate


HEADERS = [
    "Timestamp",
    "Name",
    "How did you come to know about us? ",
    "Requirements",
    "Configuration",
    "I am working in",
    "Current annual income",
    "attended by",
    "Remarks",
]


def _frame():
    return rows_to_frame(
        [
            HEADERS,
            ["01/03/2024 10:00:00", "Alice", "Instagram", "Villa", "3BHK", "IT", "20-30L", "Ravi", "Call back Monday"],
            ["01/03/2024 11:00:00", "Bob", "Referral", "Plot", "", "Finance", "10-20L", "Meera", "   "],
            ["02/03/2024 09:00:00", "", "Instagram", "Villa", "4BHK", "IT", "20-30L", "Ravi", "Wants site visit"],
            ["03/03/2024 09:00:00", "Dana", "Hoarding"],
        ]
    )


def test_report_builds_frequency_tables() -> None:
    report = build_report(_frame())
    assert report.total_records == 4
    assert report.top_sources == [
        FrequencyEntry("Instagram", 2),
        FrequencyEntry("Referral", 1),
        FrequencyEntry("Hoarding", 1),
    ]
    assert report.top_configurations[0] == FrequencyEntry(UNKNOWN, 2)
    assert report.income_distribution[0] == FrequencyEntry("20-30L", 2)
    for table in (report.top_requirements, report.top_industries):
        assert sum(e.count for e in table) == report.total_records


def test_report_lists_names_and_remarks() -> None:
    report = build_report(_frame())
    assert report.all_names.items == ["Alice", "Bob", "Dana"]
    assert report.all_names.total == 3
    assert report.all_names.truncated is False
    assert report.remarks.items == [
        {"name": "Alice", "attended_by": "Ravi", "remark": "Call back Monday"},
        {"name": "", "attended_by": "Ravi", "remark": "Wants site visit"},
    ]


def test_report_truncates_lists_to_limit() -> None:
    report = build_report(_frame(), "1")
    assert report.limit == 1
    assert report.all_names.items == ["Alice"]
    assert report.all_names.total == 3
    assert report.all_names.truncated is True
    assert len(report.remarks.items) == 1
    assert report.remarks.total == 2
    assert report.remarks.truncated is True


def test_report_limit_zero_keeps_totals() -> None:
    report = build_report(_frame(), 0)
    assert report.all_names.items == []
    assert report.all_names.total == 3
    assert report.all_names.truncated is True


@pytest.mark.parametrize(
    "raw, total, expected",
    [
        (None, 500, DEFAULT_LIMIT),
        ("abc", 500, DEFAULT_LIMIT),
        ("", 500, DEFAULT_LIMIT),
        ("10", 500, 10),
        (" 7 ", 500, 7),
        ("-3", 500, 0),
        ("900", 12, 12),
        (None, 4, 4),
    ],
)
def test_normalize_limit_defaults_and_clamps(raw: object, total: int, expected: int) -> None:
    assert normalize_limit(raw, total) == expected


@pytest.mark.parametrize("limit", [0, 1, 2, 5])
def test_truncated_list_lengths(limit: int) -> None:
    items = ["a", "b", "c"]
    out = truncate(items, limit)
    assert len(out.items) == min(limit, out.total)
    assert out.truncated == (out.total > len(out.items))
