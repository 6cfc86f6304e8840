"""Подсчёт статистики активностей по дням и типам.

Все функции чистые: принимают список записей и опорную дату/часовой пояс,
ничего не читают из БД. День записи — локальный календарный день
(запись в 23:00 относится к этому дню, а не к следующему дню по UTC).
"""
import enum
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional
from healthbot.config import config
from healthbot.models import ActivityType
from healthbot.services.records import ActivityRecord

# Подписи дней недели, индекс = date.weekday()
WEEKDAY_LABELS = ("Пн", "Вт", "Ср", "Чт", "Пт", "Сб", "Вс")

RECENT_LIMIT = 5


class TrendPeriod(int, enum.Enum):
    """Период графика прогресса (в днях)."""
    WEEK = 7
    MONTH = 30


def local_day(timestamp: datetime, tz: Optional[tzinfo] = None) -> date:
    """Локальный календарный день метки времени."""
    return timestamp.astimezone(tz or config.tz).date()


def empty_totals() -> dict[ActivityType, float]:
    """Нулевые итоги по всем четырём типам."""
    return {activity_type: 0 for activity_type in ActivityType}


def daily_totals(
    activities: Iterable[ActivityRecord], day: date, tz: Optional[tzinfo] = None
) -> dict[ActivityType, float]:
    """Сумма значений по типам за один календарный день."""
    tz = tz or config.tz
    totals = empty_totals()
    for activity in activities:
        if local_day(activity.occurred_at, tz) == day:
            totals[activity.type] += activity.value
    return totals


def today_totals(
    activities: Iterable[ActivityRecord],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> dict[ActivityType, float]:
    """Итоги за сегодня (по локальному календарю)."""
    tz = tz or config.tz
    now = now or datetime.now(tz)
    return daily_totals(activities, local_day(now, tz), tz)


def trend_series(
    activities: Iterable[ActivityRecord],
    period,
    activity_type: ActivityType,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> list[tuple[str, float]]:
    """Ряд для графика: (подпись, сумма) по каждому дню периода.

    Дни идут от старого к сегодняшнему, пропусков нет, день без записей
    даёт 0, длина ряда всегда равна периоду.

    Args:
        activities: записи пользователя
        period: TrendPeriod или 7/30
        activity_type: тип активности
        today: последний день ряда (по умолчанию — сегодня)
        tz: часовой пояс (по умолчанию — из конфигурации)
    """
    try:
        period = TrendPeriod(period)
    except ValueError:
        raise ValueError(f"Период должен быть 7 или 30 дней, получено: {period!r}") from None

    tz = tz or config.tz
    today = today or datetime.now(tz).date()
    activity_type = ActivityType(activity_type)

    first_day = today - timedelta(days=period.value - 1)
    buckets = {first_day + timedelta(days=i): 0 for i in range(period.value)}

    for activity in activities:
        if activity.type != activity_type:
            continue
        day = local_day(activity.occurred_at, tz)
        if day in buckets:
            buckets[day] += activity.value

    return [(_label(day, period), total) for day, total in buckets.items()]


def _label(day: date, period: TrendPeriod) -> str:
    if period == TrendPeriod.WEEK:
        return WEEKDAY_LABELS[day.weekday()]
    return str(day.day)


def recent_activities(
    activities: Iterable[ActivityRecord], limit: int = RECENT_LIMIT
) -> list[ActivityRecord]:
    """Последние записи по времени, все типы вместе."""
    return sorted(activities, key=lambda a: a.occurred_at, reverse=True)[:limit]
