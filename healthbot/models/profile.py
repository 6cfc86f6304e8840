"""Модель профиля пользователя (биометрия и рассчитанные нормы)."""
from sqlalchemy import Column, Integer, Float, String, Enum
import enum
from typing import Optional
from healthbot.models.base import BaseModel


class Gender(str, enum.Enum):
    """Пол пользователя. Не указан — None."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @classmethod
    def parse(cls, value) -> Optional["Gender"]:
        """Строка из хранилища или формы -> Gender; пустое/неизвестное -> None."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Lifestyle(str, enum.Enum):
    """Образ жизни (уровень активности). Не указан — None."""
    SEDENTARY = "sedentary"                  # Сидячий образ жизни
    LIGHTLY_ACTIVE = "lightly_active"        # Спорт 1-3 раза в неделю
    MODERATELY_ACTIVE = "moderately_active"  # Спорт 3-5 раз в неделю
    VERY_ACTIVE = "very_active"              # Спорт 6-7 раз в неделю
    EXTRA_ACTIVE = "extra_active"            # Тяжёлые тренировки, физическая работа

    @classmethod
    def parse(cls, value) -> Optional["Lifestyle"]:
        """Строка из хранилища или формы -> Lifestyle; пустое/неизвестное -> None."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class UserProfile(BaseModel):
    """Профиль пользователя: один на пользователя, перезаписывается целиком."""

    __tablename__ = "user_profiles"

    # Идентификатор пользователя у провайдера аутентификации
    user_id = Column(String(128), unique=True, nullable=False, index=True)
    email = Column(String(254), nullable=False)

    # Личные данные
    age = Column(Integer, nullable=False)
    gender = Column(Enum(Gender), nullable=True)
    height_cm = Column(Float, nullable=False)
    weight_kg = Column(Float, nullable=False)
    lifestyle = Column(Enum(Lifestyle), nullable=True)

    # Рассчитываются при каждом сохранении
    bmi = Column(Float, nullable=False)
    calorie_needs = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<UserProfile {self.user_id} bmi={self.bmi}>"
