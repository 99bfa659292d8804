from __future__ import annotations

import pytest

from core.buckets import BUCKETS, in_bucket
from core.dates import ParsedDate


REFERENCE = ParsedDate(2024, 3, 10)


def test_today_matches_exact_day_only() -> None:
    assert in_bucket(ParsedDate(2024, 3, 10), "today", REFERENCE)
    assert not in_bucket(ParsedDate(2024, 3, 9), "today", REFERENCE)
    assert not in_bucket(ParsedDate(2023, 3, 10), "today", REFERENCE)


def test_week_window_is_inclusive_at_both_ends() -> None:
    assert in_bucket(ParsedDate(2024, 3, 10), "this_week", REFERENCE)
    assert in_bucket(ParsedDate(2024, 3, 4), "this_week", REFERENCE)
    assert not in_bucket(ParsedDate(2024, 3, 3), "this_week", REFERENCE)
    assert not in_bucket(ParsedDate(2024, 3, 11), "this_week", REFERENCE)


def test_week_window_crosses_month_and_year_boundaries() -> None:
    reference = ParsedDate(2024, 1, 2)
    assert in_bucket(ParsedDate(2023, 12, 27), "this_week", reference)
    assert not in_bucket(ParsedDate(2023, 12, 26), "this_week", reference)
    assert in_bucket(ParsedDate(2024, 2, 29), "this_week", ParsedDate(2024, 3, 1))


def test_week_window_rolls_out_of_calendar_days_forward() -> None:
    # 31 April is placed on 1 May
    assert in_bucket(ParsedDate(2024, 4, 31), "this_week", ParsedDate(2024, 5, 1))
    assert not in_bucket(ParsedDate(2024, 4, 31), "this_week", ParsedDate(2024, 4, 30))


def test_month_matches_calendar_month() -> None:
    assert in_bucket(ParsedDate(2024, 3, 31), "this_month", REFERENCE)
    assert in_bucket(ParsedDate(2024, 3, 1), "this_month", REFERENCE)
    assert not in_bucket(ParsedDate(2024, 2, 29), "this_month", REFERENCE)
    assert not in_bucket(ParsedDate(2023, 3, 10), "this_month", REFERENCE)


@pytest.mark.parametrize("bucket", ["today", "this_week", "this_month", "all"])
def test_unparseable_dates_never_match(bucket: str) -> None:
    assert in_bucket(None, bucket, REFERENCE) is False


def test_all_bucket_matches_every_parsed_date() -> None:
    assert in_bucket(ParsedDate(1990, 1, 1), "all", REFERENCE)
    assert in_bucket(ParsedDate(2099, 12, 31), "all", REFERENCE)


def test_unknown_bucket_raises() -> None:
    assert "yesterday" not in BUCKETS
    with pytest.raises(ValueError):
        in_bucket(REFERENCE, "yesterday", REFERENCE)
