"""Модели базы данных."""
from healthbot.models.base import BaseModel, TimestampMixin
from healthbot.models.profile import UserProfile, Gender, Lifestyle
from healthbot.models.activity import Activity, ActivityType
from healthbot.models.auth_session import AuthSession

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "UserProfile",
    "Gender",
    "Lifestyle",
    "Activity",
    "ActivityType",
    "AuthSession",
]
