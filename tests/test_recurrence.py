"""Tests for core recurrence logic."""

from datetime import datetime, timedelta

import pytest

from ticklist.core.recurrence import (
    DAILY,
    MONTHLY,
    NEVER,
    WEEKLY,
    YEARLY,
    Frequency,
    ParseError,
    Recurrence,
    Weekday,
    add_months,
    next_occurrence,
    parse_recurrence,
)


@pytest.fixture
def monday():
    # 2024-01-01 was a Monday
    return datetime(2024, 1, 1, 9, 30)


class TestNextOccurrence:
    def test_never(self, monday):
        assert next_occurrence(monday, NEVER) is None

    def test_daily(self, monday):
        assert next_occurrence(monday, DAILY) == datetime(2024, 1, 2, 9, 30)

    def test_weekly(self, monday):
        assert next_occurrence(monday, WEEKLY) == datetime(2024, 1, 8, 9, 30)

    def test_daily_crosses_year(self):
        assert next_occurrence(datetime(2023, 12, 31), DAILY) == datetime(2024, 1, 1)

    def test_monthly_keeps_day_and_time(self, monday):
        assert next_occurrence(monday, MONTHLY) == datetime(2024, 2, 1, 9, 30)

    def test_monthly_rolls_year(self):
        assert next_occurrence(datetime(2024, 12, 15), MONTHLY) == datetime(2025, 1, 15)

    def test_monthly_missing_day_has_no_next(self):
        assert next_occurrence(datetime(2024, 1, 31), MONTHLY) is None

    def test_monthly_30th_into_february(self):
        assert next_occurrence(datetime(2023, 1, 30), MONTHLY) is None

    def test_monthly_short_month_to_long_month(self):
        assert next_occurrence(datetime(2024, 4, 30), MONTHLY) == datetime(2024, 5, 30)

    def test_yearly(self, monday):
        assert next_occurrence(monday, YEARLY) == datetime(2025, 1, 1, 9, 30)

    def test_yearly_leap_day_has_no_next(self):
        assert next_occurrence(datetime(2024, 2, 29), YEARLY) is None

    def test_weekdays_picks_earliest_member(self, monday):
        rule = Recurrence.on_weekdays([Weekday.WED, Weekday.FRI])
        assert next_occurrence(monday, rule) == datetime(2024, 1, 3, 9, 30)

    def test_weekdays_wraps_into_next_week(self):
        friday = datetime(2024, 1, 5)
        rule = Recurrence.on_weekdays([Weekday.MON, Weekday.TUE])
        assert next_occurrence(friday, rule) == datetime(2024, 1, 8)

    def test_weekdays_own_weekday_is_a_week_later(self, monday):
        rule = Recurrence.on_weekdays([Weekday.MON])
        assert next_occurrence(monday, rule) == monday + timedelta(days=7)

    def test_weekdays_empty_set_has_no_next(self, monday):
        assert next_occurrence(monday, Recurrence.on_weekdays([])) is None

    @pytest.mark.parametrize("day", list(Weekday))
    def test_weekdays_result_is_member_within_a_week(self, monday, day):
        result = next_occurrence(monday, Recurrence.on_weekdays([day]))
        assert result.weekday() == day
        assert monday < result <= monday + timedelta(days=7)


class TestAddMonths:
    def test_twelve_months_is_a_year(self):
        assert add_months(datetime(2023, 3, 10), 12) == datetime(2024, 3, 10)

    def test_does_not_clamp(self):
        assert add_months(datetime(2024, 3, 31), 1) is None


class TestParseRecurrence:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Never", NEVER),
            ("daily", DAILY),
            ("WEEKLY", WEEKLY),
            ("Monthly", MONTHLY),
            (" yearly ", YEARLY),
            ("", NEVER),
        ],
    )
    def test_named_rules(self, text, expected):
        assert parse_recurrence(text) == expected

    def test_weekday_list(self):
        rule = parse_recurrence("Mon, wed,Friday")
        assert rule.frequency == Frequency.WEEKDAYS
        assert rule.days == {Weekday.MON, Weekday.WED, Weekday.FRI}

    def test_unknown_word(self):
        with pytest.raises(ParseError, match="Invalid repeat format"):
            parse_recurrence("fortnightly")

    def test_bad_day_in_list(self):
        with pytest.raises(ParseError):
            parse_recurrence("Mon,Funday")

    def test_only_commas(self):
        with pytest.raises(ParseError):
            parse_recurrence(",,")


class TestRecurrenceStr:
    def test_named(self):
        assert str(DAILY) == "Daily"
        assert str(NEVER) == "Never"

    def test_weekdays_in_week_order(self):
        assert str(Recurrence.on_weekdays([Weekday.FRI, Weekday.MON])) == "Mon,Fri"

    def test_str_parses_back(self):
        rule = Recurrence.on_weekdays([Weekday.SAT, Weekday.SUN])
        assert parse_recurrence(str(rule)) == rule
