"""Записи, с которыми работает бизнес-логика.

Хранилище отдаёт строки ORM, а вся остальная логика видит только эти
неизменяемые записи. Время всегда aware datetime в UTC, любые другие
представления приводятся один раз, в normalize_timestamp().
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from healthbot.models import Gender, Lifestyle, ActivityType


@dataclass(frozen=True)
class ProfileRecord:
    """Профиль пользователя."""

    user_id: str
    email: str
    age: int
    gender: Optional[Gender]
    height_cm: float
    weight_kg: float
    lifestyle: Optional[Lifestyle]
    bmi: float
    calorie_needs: int
    updated_at: datetime


@dataclass(frozen=True)
class ActivityRecord:
    """Запись об активности. id = None, пока запись не сохранена."""

    user_id: str
    type: ActivityType
    value: float
    occurred_at: datetime
    created_at: datetime
    notes: Optional[str] = None
    id: Optional[int] = None


def normalize_timestamp(value) -> datetime:
    """Привести метку времени к aware datetime в UTC.

    Поддерживается:
        - datetime (naive считается UTC, так его возвращает SQLite)
        - число секунд от эпохи
        - строка ISO 8601 (в т.ч. с суффиксом Z)
        - словарь вида {"seconds": ..., "nanoseconds": ...}
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, bool):
        raise TypeError(f"Неподдерживаемая метка времени: {value!r}")
    elif isinstance(value, (int, float)):
        dt = datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    elif isinstance(value, dict) and "seconds" in value:
        seconds = value["seconds"] + value.get("nanoseconds", 0) / 1e9
        dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    else:
        raise TypeError(f"Неподдерживаемая метка времени: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Текущее время в UTC."""
    return datetime.now(timezone.utc)
