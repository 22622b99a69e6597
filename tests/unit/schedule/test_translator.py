"""Unit tests for crontab-to-calendar-interval translation."""

from __future__ import annotations

import pytest
import structlog
from hypothesis import given
from hypothesis import strategies as st

from launchd_plist.calendar import CalendarInterval
from launchd_plist.kernel.errors import ExpressionSyntaxError, RangeError
from launchd_plist.schedule import (
    ScheduleExpression,
    estimate_interval_count,
    translate_crontab,
    translate_schedule_expression,
)


# ---------------------------------------------------------------------------
# translate_schedule_expression
# ---------------------------------------------------------------------------


class TestTranslateScheduleExpression:
    def test_cross_product(self) -> None:
        expression = ScheduleExpression(minute={0, 30}, hour={9})
        assert translate_schedule_expression(expression) == [
            CalendarInterval(minute=0, hour=9),
            CalendarInterval(minute=30, hour=9),
        ]

    def test_all_wildcard_gives_single_empty_interval(self) -> None:
        assert translate_schedule_expression(ScheduleExpression()) == [CalendarInterval()]

    def test_wildcard_fields_stay_absent(self) -> None:
        (interval,) = translate_schedule_expression(ScheduleExpression(day={15}))
        assert interval.to_document() == {"Day": 15}

    def test_sunday_aliases_collapse(self) -> None:
        result = translate_schedule_expression(ScheduleExpression(weekday={0, 7}))
        assert result == [CalendarInterval(weekday=0)]

    def test_seven_alone_becomes_zero(self) -> None:
        result = translate_schedule_expression(ScheduleExpression(weekday={7}))
        assert result == [CalendarInterval(weekday=0)]

    def test_out_of_range_raises_with_field_details(self) -> None:
        with pytest.raises(RangeError) as exc_info:
            translate_schedule_expression(ScheduleExpression(hour={25}))
        assert exc_info.value.field == "hour"
        assert exc_info.value.value == 25
        assert exc_info.value.bounds == (0, 23)

    def test_one_bad_value_fails_the_whole_translation(self) -> None:
        with pytest.raises(RangeError) as exc_info:
            translate_schedule_expression(ScheduleExpression(minute={0, 1, 2}, day={0}))
        assert exc_info.value.field == "day"

    def test_day_and_weekday_share_an_interval(self) -> None:
        result = translate_schedule_expression(ScheduleExpression(day={1}, weekday={1}))
        assert result == [CalendarInterval(day=1, weekday=1)]

    def test_order_is_deterministic(self) -> None:
        expression = ScheduleExpression(minute={45, 0, 15}, hour={18, 6}, month={12, 1})
        first = translate_schedule_expression(expression)
        assert first == translate_schedule_expression(expression)
        assert first[0] == CalendarInterval(minute=0, hour=6, month=1)
        assert first[1] == CalendarInterval(minute=0, hour=6, month=12)
        assert first[-1] == CalendarInterval(minute=45, hour=18, month=12)

    def test_result_has_no_duplicates(self) -> None:
        result = translate_schedule_expression(
            ScheduleExpression(minute={0, 30}, hour={1, 2}, weekday={0, 7, 3})
        )
        assert len(result) == len(set(result)) == 8

    def test_logs_translation(self) -> None:
        with structlog.testing.capture_logs() as logs:
            translate_schedule_expression(ScheduleExpression(minute={0, 30}, hour={9}))
        (entry,) = [e for e in logs if e["event"] == "schedule.translated"]
        assert entry["interval_count"] == 2
        assert entry["constrained"] == ["minute", "hour"]

    @given(
        st.frozensets(st.integers(0, 59), min_size=1, max_size=6),
        st.frozensets(st.integers(0, 23), min_size=1, max_size=4),
    )
    def test_size_is_product_of_set_sizes(
        self, minutes: frozenset[int], hours: frozenset[int]
    ) -> None:
        expression = ScheduleExpression(minute=minutes, hour=hours)
        result = translate_schedule_expression(expression)
        assert len(result) == len(minutes) * len(hours)
        assert {(i.minute, i.hour) for i in result} == {(m, h) for m in minutes for h in hours}


# ---------------------------------------------------------------------------
# translate_crontab / estimate_interval_count
# ---------------------------------------------------------------------------


class TestTranslateCrontab:
    def test_weekday_mornings(self) -> None:
        result = translate_crontab("0 9 * * 1-5")
        assert result == [CalendarInterval(minute=0, hour=9, weekday=d) for d in range(1, 6)]

    def test_every_minute(self) -> None:
        assert translate_crontab("* * * * *") == [CalendarInterval()]

    def test_large_expansion_is_not_truncated(self) -> None:
        assert len(translate_crontab("*/5 */2 * * *")) == 144

    def test_syntax_error_propagates(self) -> None:
        with pytest.raises(ExpressionSyntaxError):
            translate_crontab("* * *")

    def test_out_of_range_is_a_syntax_error(self) -> None:
        with pytest.raises(ExpressionSyntaxError):
            translate_crontab("0 0 32 * *")


class TestEstimateIntervalCount:
    def test_wildcard(self) -> None:
        assert estimate_interval_count(ScheduleExpression()) == 1

    def test_product(self) -> None:
        expression = ScheduleExpression(minute={0, 15, 30, 45}, hour={1, 2, 3})
        assert estimate_interval_count(expression) == 12

    def test_sunday_aliases_count_once(self) -> None:
        assert estimate_interval_count(ScheduleExpression(weekday={0, 7, 1})) == 2

    def test_matches_translation(self) -> None:
        expression = ScheduleExpression.parse("*/10 8-17 * * mon-fri")
        assert estimate_interval_count(expression) == len(
            translate_schedule_expression(expression)
        )
