"""Состояние пользователя: профиль и список активностей.

Контейнер принадлежит слою представления (хранится в context.user_data).
Расчёты и статистика живут в чистых функциях из metrics.py и aggregator.py,
сюда им передаётся только текущий снимок данных.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional
from healthbot.models import Gender, Lifestyle, ActivityType
from healthbot.services import aggregator
from healthbot.services.auth_service import AuthUser
from healthbot.services.errors import StorageError, ValidationError
from healthbot.services.metrics import calculate_bmi, calculate_calorie_needs
from healthbot.services.records import ProfileRecord, ActivityRecord, utc_now
from healthbot.services.storage import HealthRepository

logger = logging.getLogger(__name__)


def parse_number(text, field: str) -> float:
    """Текст формы -> положительное число (запятая допускается)."""
    if text is None or not str(text).strip():
        raise ValidationError(f"{field}: заполни поле")
    try:
        value = float(str(text).strip().replace(",", "."))
    except ValueError:
        raise ValidationError(f"{field}: нужно число") from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{field}: нужно положительное число")
    return value


def parse_activity_value(text) -> float:
    """Значение активности из текста сообщения."""
    return parse_number(text, "Значение")


@dataclass(frozen=True)
class ProfileInput:
    """Поля формы профиля после проверки."""

    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    lifestyle: Lifestyle

    @classmethod
    def from_form(cls, form: dict) -> "ProfileInput":
        """Проверить сырые значения формы.

        Все пять полей обязательны; пол и образ жизни только из известных значений.
        """
        gender = Gender.parse(form.get("gender"))
        lifestyle = Lifestyle.parse(form.get("lifestyle"))
        if gender is None or lifestyle is None:
            raise ValidationError("Заполни все поля")

        age = parse_number(form.get("age"), "Возраст")
        if not age.is_integer():
            raise ValidationError("Возраст: нужно целое число")

        return cls(
            age=int(age),
            gender=gender,
            height_cm=parse_number(form.get("height"), "Рост"),
            weight_kg=parse_number(form.get("weight"), "Вес"),
            lifestyle=lifestyle,
        )


class HealthState:
    """Профиль и активности одного вошедшего пользователя.

    Обновления заменяют снимок целиком. При ошибке хранилища остаётся
    последнее успешно загруженное состояние, ошибка пробрасывается выше.
    """

    def __init__(self, user: AuthUser, repository: Optional[HealthRepository] = None):
        self.user = user
        self.repository = repository or HealthRepository()
        self._profile: Optional[ProfileRecord] = None
        self._activities: tuple[ActivityRecord, ...] = ()
        self._loading = False

    @property
    def profile(self) -> Optional[ProfileRecord]:
        return self._profile

    @property
    def activities(self) -> tuple[ActivityRecord, ...]:
        return self._activities

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def has_profile(self) -> bool:
        return self._profile is not None

    def load_profile(self) -> Optional[ProfileRecord]:
        """Перечитать профиль из хранилища."""
        self._loading = True
        try:
            profile = self.repository.get_profile(self.user.user_id)
        finally:
            self._loading = False
        if profile is not None:
            self._profile = profile
        return self._profile

    def load_activities(self) -> tuple[ActivityRecord, ...]:
        """Перечитать все активности (новые первыми)."""
        self._loading = True
        try:
            activities = tuple(self.repository.list_activities(self.user.user_id))
        finally:
            self._loading = False
        self._activities = activities
        return self._activities

    def refresh(self) -> None:
        """Перечитать профиль и активности (последовательно)."""
        self.load_profile()
        self.load_activities()

    def save_profile(self, data: ProfileInput) -> ProfileRecord:
        """Сохранить профиль; ИМТ и норма калорий пересчитываются всегда."""
        bmi = calculate_bmi(data.weight_kg, data.height_cm)
        calorie_needs = calculate_calorie_needs(
            data.weight_kg, data.height_cm, data.age, data.gender, data.lifestyle
        )

        profile = ProfileRecord(
            user_id=self.user.user_id,
            email=self.user.email,
            age=data.age,
            gender=data.gender,
            height_cm=data.height_cm,
            weight_kg=data.weight_kg,
            lifestyle=data.lifestyle,
            bmi=float(bmi),
            calorie_needs=calorie_needs,
            updated_at=utc_now(),
        )

        self._loading = True
        try:
            self.repository.put_profile(self.user.user_id, profile)
        finally:
            self._loading = False
        self._profile = profile
        return profile

    def log_activity(self, activity_type, value, notes: Optional[str] = None) -> int:
        """Добавить активность и перечитать список.

        StorageError пробрасывается, только если запись не сохранена.
        Если не удалось лишь перечитать список, остаётся прежний снимок.
        """
        try:
            activity_type = ActivityType(activity_type)
        except ValueError:
            raise ValidationError("Выбери тип активности") from None
        if isinstance(value, str):
            value = parse_activity_value(value)
        elif isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError("Значение: нужно число")
        elif not math.isfinite(value) or value <= 0:
            raise ValidationError("Значение: нужно положительное число")

        now = utc_now()
        activity = ActivityRecord(
            user_id=self.user.user_id,
            type=activity_type,
            value=float(value),
            notes=(notes or "").strip() or None,
            occurred_at=now,
            created_at=now,
        )

        self._loading = True
        try:
            activity_id = self.repository.append_activity(activity)
        finally:
            self._loading = False

        # Запись уже в хранилище
        try:
            self.load_activities()
        except StorageError as e:
            logger.error(f"Активность {activity_id} сохранена, но список не обновлён: {e}", exc_info=True)
        return activity_id

    def today_totals(self, now=None, tz=None) -> dict[ActivityType, float]:
        return aggregator.today_totals(self._activities, now=now, tz=tz)

    def trend(self, period, activity_type, today=None, tz=None) -> list[tuple[str, float]]:
        return aggregator.trend_series(self._activities, period, activity_type, today=today, tz=tz)

    def recent(self) -> list[ActivityRecord]:
        return aggregator.recent_activities(self._activities)
