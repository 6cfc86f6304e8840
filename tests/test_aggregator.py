"""Тесты статистики активностей."""
from datetime import date, datetime, timedelta, timezone
import pytest
from healthbot.models import ActivityType
from healthbot.services.aggregator import (
    TrendPeriod,
    daily_totals,
    local_day,
    recent_activities,
    today_totals,
    trend_series,
)
from healthbot.services.records import ActivityRecord

UTC = timezone.utc
# Фиксированный пояс UTC-5 без перехода на летнее время
EST = timezone(timedelta(hours=-5))


def make_activity(activity_type, value, occurred_at, user_id="uid-1"):
    return ActivityRecord(
        user_id=user_id,
        type=ActivityType(activity_type),
        value=value,
        occurred_at=occurred_at,
        created_at=occurred_at,
    )


def test_today_water_total():
    """Две записи воды за сегодня: 250 + 500 = 750."""
    now = datetime(2024, 6, 10, 18, 0, tzinfo=UTC)
    activities = [
        make_activity("water", 250, datetime(2024, 6, 10, 8, 0, tzinfo=UTC)),
        make_activity("water", 500, datetime(2024, 6, 10, 13, 30, tzinfo=UTC)),
        make_activity("exercise", 30, datetime(2024, 6, 10, 7, 0, tzinfo=UTC)),
    ]

    totals = today_totals(activities, now=now, tz=UTC)

    assert totals[ActivityType.WATER] == 750
    assert totals[ActivityType.EXERCISE] == 30
    assert totals[ActivityType.SLEEP] == 0
    assert totals[ActivityType.MEAL] == 0


def test_today_excludes_yesterday():
    now = datetime(2024, 6, 10, 9, 0, tzinfo=UTC)
    activities = [
        make_activity("water", 300, datetime(2024, 6, 9, 23, 59, tzinfo=UTC)),
        make_activity("water", 200, datetime(2024, 6, 10, 0, 1, tzinfo=UTC)),
    ]

    assert today_totals(activities, now=now, tz=UTC)[ActivityType.WATER] == 200


def test_empty_totals_have_all_types():
    totals = today_totals([], now=datetime(2024, 6, 10, tzinfo=UTC), tz=UTC)
    assert totals == {activity_type: 0 for activity_type in ActivityType}


def test_late_evening_stays_on_local_day():
    """23:00 по местному времени (04:00 UTC следующего дня) относится к местному дню."""
    evening = datetime(2024, 6, 10, 23, 0, tzinfo=EST)
    activity = make_activity("meal", 600, evening.astimezone(UTC))

    assert local_day(activity.occurred_at, EST) == date(2024, 6, 10)
    assert daily_totals([activity], date(2024, 6, 10), EST)[ActivityType.MEAL] == 600
    assert daily_totals([activity], date(2024, 6, 11), EST)[ActivityType.MEAL] == 0

    series = trend_series([activity], TrendPeriod.WEEK, ActivityType.MEAL, today=date(2024, 6, 10), tz=EST)
    assert series[-1][1] == 600


@pytest.mark.parametrize("period", [TrendPeriod.WEEK, TrendPeriod.MONTH, 7, 30])
def test_trend_length_without_data(period):
    """Ряд всегда полной длины, даже без записей."""
    series = trend_series([], period, ActivityType.WATER, today=date(2024, 6, 10), tz=UTC)
    assert len(series) == int(period)
    assert all(total == 0 for _, total in series)


def test_week_labels_are_weekdays():
    """10.06.2024 — понедельник, ряд идёт со вторника 04.06."""
    series = trend_series([], TrendPeriod.WEEK, ActivityType.WATER, today=date(2024, 6, 10), tz=UTC)
    assert [label for label, _ in series] == ["Вт", "Ср", "Чт", "Пт", "Сб", "Вс", "Пн"]


def test_month_labels_are_day_numbers():
    series = trend_series([], TrendPeriod.MONTH, ActivityType.WATER, today=date(2024, 6, 10), tz=UTC)
    labels = [label for label, _ in series]
    assert labels[0] == "12"
    assert labels[19] == "31"
    assert labels[20] == "1"
    assert labels[-1] == "10"


def test_trend_sums_by_day_and_type():
    today = date(2024, 6, 10)
    activities = [
        make_activity("sleep", 7.5, datetime(2024, 6, 10, 6, 0, tzinfo=UTC)),
        make_activity("sleep", 0.5, datetime(2024, 6, 10, 14, 0, tzinfo=UTC)),
        make_activity("sleep", 6, datetime(2024, 6, 8, 6, 0, tzinfo=UTC)),
        make_activity("water", 1000, datetime(2024, 6, 10, 9, 0, tzinfo=UTC)),
        # За пределами недели
        make_activity("sleep", 9, datetime(2024, 6, 3, 6, 0, tzinfo=UTC)),
    ]

    series = trend_series(activities, TrendPeriod.WEEK, ActivityType.SLEEP, today=today, tz=UTC)

    assert [total for _, total in series] == [0, 0, 0, 0, 6, 0, 8]


@pytest.mark.parametrize("period", [0, 14, 31, "week"])
def test_trend_rejects_other_periods(period):
    with pytest.raises(ValueError):
        trend_series([], period, ActivityType.WATER, today=date(2024, 6, 10), tz=UTC)


def test_recent_returns_five_newest():
    base = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
    activities = [
        make_activity("water", i, base + timedelta(hours=i)) for i in (3, 0, 6, 1, 5, 2, 4)
    ]

    recent = recent_activities(activities)

    assert [a.value for a in recent] == [6, 5, 4, 3, 2]


def test_recent_with_few_records():
    activity = make_activity("meal", 300, datetime(2024, 6, 1, tzinfo=UTC))
    assert recent_activities([activity]) == [activity]
    assert recent_activities([]) == []
