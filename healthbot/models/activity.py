"""Модель записи об активности (вода, тренировка, сон, еда)."""
from sqlalchemy import Column, String, Float, Text, DateTime, Enum
import enum
from healthbot.models.base import BaseModel


class ActivityType(str, enum.Enum):
    """Тип активности. Единица измерения определяется типом."""
    WATER = "water"        # мл
    EXERCISE = "exercise"  # минуты
    SLEEP = "sleep"        # часы
    MEAL = "meal"          # ккал


class Activity(BaseModel):
    """Запись об активности. Только добавляется, не редактируется."""

    __tablename__ = "activities"

    user_id = Column(String(128), nullable=False, index=True)

    type = Column(Enum(ActivityType), nullable=False)
    value = Column(Float, nullable=False)
    notes = Column(Text)

    # Когда произошло (UTC)
    occurred_at = Column(DateTime(timezone=True), nullable=False, index=True)

    def __repr__(self):
        return f"<Activity {self.type} {self.value}>"
