"""Сервисы бизнес-логики."""
from healthbot.services.metrics import (
    calculate_bmi,
    calculate_bmr,
    calculate_calorie_needs,
    activity_multiplier,
    classify_bmi,
)
from healthbot.services.aggregator import today_totals, trend_series, recent_activities
from healthbot.services.auth_service import AuthService, AuthUser
from healthbot.services.storage import HealthRepository
from healthbot.services.health_state import HealthState, ProfileInput

__all__ = [
    "calculate_bmi",
    "calculate_bmr",
    "calculate_calorie_needs",
    "activity_multiplier",
    "classify_bmi",
    "today_totals",
    "trend_series",
    "recent_activities",
    "AuthService",
    "AuthUser",
    "HealthRepository",
    "HealthState",
    "ProfileInput",
]
