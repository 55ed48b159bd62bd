"""Tests for time-range bucket keys and grouping."""

from datetime import date, timedelta

import pytest

from extrack_core.buckets import (
    TimeRange, bucket_key, group_transactions, parse_transaction_date, week_number,
)
from extrack_core.errors import DateParseFailure, ErrorKind
from extrack_core.models import Transaction


def daily(start, days):
    return [start + timedelta(days=i) for i in range(days)]


class TestTimeRange:

    def test_parse_names(self):
        assert TimeRange.parse("Year") is TimeRange.YEAR
        assert TimeRange.parse("month") is TimeRange.MONTH
        assert TimeRange.parse(" WEEK ") is TimeRange.WEEK

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError, match="Quarter"):
            TimeRange.parse("Quarter")


class TestParseDate:

    def test_valid(self):
        assert parse_transaction_date("2023-01-05") == date(2023, 1, 5)

    @pytest.mark.parametrize("text", [
        "", "2023-1-5", "2023/01/05", "05-01-2023", "2023-02-30", "2023-13-01",
        "2023-01-05 10:00:00", "not a date", " 2023-01-05",
    ])
    def test_malformed_is_fatal(self, text):
        with pytest.raises(DateParseFailure) as exc:
            parse_transaction_date(text)
        assert exc.value.kind is ErrorKind.DATE_PARSE_FAILURE
        assert not exc.value.recoverable
        assert exc.value.text == text


class TestBucketKey:

    def test_year(self):
        assert bucket_key(date(2023, 1, 5), TimeRange.YEAR) == "2023"

    def test_month(self):
        assert bucket_key(date(2023, 1, 5), TimeRange.MONTH) == "2023-01"
        assert bucket_key(date(2023, 11, 30), TimeRange.MONTH) == "2023-11"

    def test_year_is_zero_padded(self):
        assert bucket_key(date(999, 3, 1), TimeRange.YEAR) == "0999"
        assert bucket_key(date(999, 3, 1), TimeRange.MONTH) == "0999-03"

    def test_week_days_before_first_monday_are_week_00(self):
        # 2023-01-01 is a Sunday, 2023-01-02 the first Monday
        assert bucket_key(date(2023, 1, 1), TimeRange.WEEK) == "2023-00"
        assert bucket_key(date(2023, 1, 2), TimeRange.WEEK) == "2023-01"
        assert bucket_key(date(2023, 1, 8), TimeRange.WEEK) == "2023-01"
        assert bucket_key(date(2023, 1, 9), TimeRange.WEEK) == "2023-02"

    def test_week_year_starting_on_monday(self):
        # 2024-01-01 is a Monday
        assert bucket_key(date(2024, 1, 1), TimeRange.WEEK) == "2024-01"
        assert bucket_key(date(2024, 12, 30), TimeRange.WEEK) == "2024-53"

    def test_week_end_of_year(self):
        assert bucket_key(date(2023, 12, 31), TimeRange.WEEK) == "2023-52"

    def test_week_number_matches_strftime_w(self):
        for day in daily(date(2019, 1, 1), 366 * 6):
            assert week_number(day) == int(day.strftime("%W")), day

    def test_string_order_is_chronological(self):
        assert "2023-02" < "2023-11"
        days = daily(date(2022, 6, 1), 500)
        for tr in TimeRange:
            keys = [bucket_key(d, tr) for d in days]
            assert keys == sorted(keys), tr


class TestGroupTransactions:

    def test_groups_by_month(self, scenario_transactions):
        grouped = group_transactions(scenario_transactions, TimeRange.MONTH)
        assert sorted(grouped) == ["2023-01", "2023-02"]
        assert [t.description for t in grouped["2023-01"]] == ["Coffee", "Salary"]

    def test_groups_by_year(self, scenario_transactions):
        grouped = group_transactions(scenario_transactions, TimeRange.YEAR)
        assert list(grouped) == ["2023"]
        assert len(grouped["2023"]) == 3

    def test_duplicates_preserved(self):
        txn = Transaction("2023-01-05", "Coffee", -4.5, "Food")
        grouped = group_transactions([txn, txn], TimeRange.MONTH)
        assert grouped["2023-01"] == [txn, txn]

    def test_malformed_date_aborts(self, scenario_transactions):
        bad = Transaction("05/01/2023", "Coffee", -4.5, "Food")
        with pytest.raises(DateParseFailure):
            group_transactions(scenario_transactions + [bad], TimeRange.MONTH)
