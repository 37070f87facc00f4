import datetime

import pytest

from finreport.features.reports.date_range import (
    DEFAULT_LOOKBACK_DAYS,
    EARLIEST,
    format_period_label,
    parse_date_or_none,
    previous_month_range,
    resolve_report_range,
)

UTC = datetime.timezone.utc
NOW = datetime.datetime(2024, 6, 15, 12, 30, tzinfo=UTC)


def utc(*args) -> datetime.datetime:
    return datetime.datetime(*args, tzinfo=UTC)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-01-10", utc(2024, 1, 10)),
        ("2024-01-10T08:30:00", utc(2024, 1, 10, 8, 30)),
        ("2024-01-10T08:30:00Z", utc(2024, 1, 10, 8, 30)),
        ("2024-01-10T08:30:00+02:00", utc(2024, 1, 10, 6, 30)),
        ("  2024-01-10  ", utc(2024, 1, 10)),
    ],
)
def test_parse_date_accepts_iso_values(raw, expected):
    assert parse_date_or_none(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        None, "", "   ", "not-a-date", "2024-13-01", "2024-02-30", "Z",
        # Valid ISO values that leave the datetime range once converted to UTC
        "9999-12-31T23:00:00-05:00", "0001-01-01T01:00:00+05:00",
    ],
)
def test_parse_date_returns_none_for_missing_or_invalid(raw):
    assert parse_date_or_none(raw) is None


def test_inverted_range_is_swapped():
    result = resolve_report_range("2024-01-10", "2024-01-01", now=NOW)
    assert result.from_date == utc(2024, 1, 1)
    assert result.to_date == utc(2024, 1, 10)


def test_missing_from_defaults_to_thirty_days_before_to():
    result = resolve_report_range(None, "2024-03-15", now=NOW)
    assert result.from_date == utc(2024, 2, 14)
    assert result.to_date == utc(2024, 3, 15)


def test_lookback_crosses_year_boundary():
    result = resolve_report_range(None, "2024-01-10", now=NOW)
    assert result.from_date == utc(2023, 12, 11)


def test_both_missing_uses_now():
    result = resolve_report_range(now=NOW)
    assert result.to_date == NOW
    assert result.from_date == NOW - datetime.timedelta(days=DEFAULT_LOOKBACK_DAYS)


def test_both_missing_without_injected_now_is_close_to_wall_clock():
    before = datetime.datetime.now(UTC)
    result = resolve_report_range()
    after = datetime.datetime.now(UTC)
    assert before <= result.to_date <= after
    assert result.to_date - result.from_date == datetime.timedelta(days=30)


def test_garbage_values_behave_like_missing_values():
    assert resolve_report_range("garbage", "also-garbage", now=NOW) == resolve_report_range(now=NOW)
    assert resolve_report_range("garbage", "2024-03-15", now=NOW) == resolve_report_range(None, "2024-03-15", now=NOW)
    assert resolve_report_range("2024-01-01", "nope", now=NOW) == resolve_report_range("2024-01-01", None, now=NOW)


def test_future_from_without_to_is_swapped_not_rejected():
    result = resolve_report_range("2024-07-01", None, now=NOW)
    assert result.from_date == NOW
    assert result.to_date == utc(2024, 7, 1)


def test_valid_range_is_left_alone():
    result = resolve_report_range("2024-01-01", "2024-01-31", now=NOW)
    assert (result.from_date, result.to_date) == (utc(2024, 1, 1), utc(2024, 1, 31))


def test_equal_bounds_are_allowed():
    result = resolve_report_range("2024-01-01", "2024-01-01", now=NOW)
    assert result.from_date == result.to_date == utc(2024, 1, 1)


def test_resolution_is_idempotent_for_fixed_inputs():
    first = resolve_report_range("2024-05-01", "2024-04-01", now=NOW)
    second = resolve_report_range("2024-05-01", "2024-04-01", now=NOW)
    assert first == second


def test_custom_lookback_window():
    result = resolve_report_range(None, "2024-03-15", now=NOW, lookback_days=7)
    assert result.from_date == utc(2024, 3, 8)


def test_naive_now_is_treated_as_utc():
    result = resolve_report_range(now=datetime.datetime(2024, 6, 15, 12, 30))
    assert result.to_date == NOW


@pytest.mark.parametrize(
    "now, expected_start, expected_end",
    [
        (utc(2024, 3, 5), utc(2024, 2, 1), utc(2024, 2, 29, 23, 59, 59, 999999)),
        (utc(2024, 1, 1), utc(2023, 12, 1), utc(2023, 12, 31, 23, 59, 59, 999999)),
    ],
)
def test_previous_month_range(now, expected_start, expected_end):
    assert previous_month_range(now) == (expected_start, expected_end)


@pytest.mark.parametrize(
    "from_date, to_date, label",
    [
        (utc(2024, 1, 1), utc(2024, 1, 31), "January 1 - 31, 2024"),
        (utc(2024, 1, 20), utc(2024, 2, 10), "January 20 - February 10, 2024"),
        (utc(2023, 12, 20), utc(2024, 1, 10), "December 20, 2023 - January 10, 2024"),
    ],
)
def test_format_period_label(from_date, to_date, label):
    assert format_period_label(from_date, to_date) == label


def test_lookback_before_year_one_is_clamped():
    result = resolve_report_range(None, "0001-01-05", now=NOW)
    assert result.from_date == EARLIEST
    assert result.to_date == utc(1, 1, 5)


def test_out_of_range_from_falls_back_to_lookback():
    result = resolve_report_range("9999-12-31T23:00:00-05:00", None, now=NOW)
    assert result.to_date == NOW
    assert result.from_date == NOW - datetime.timedelta(days=DEFAULT_LOOKBACK_DAYS)


def test_latest_date_is_accepted():
    result = resolve_report_range("9999-12-01", "9999-12-31T23:59:59Z", now=NOW)
    assert result.from_date == utc(9999, 12, 1)
    assert result.to_date == utc(9999, 12, 31, 23, 59, 59)
