"""Расчёт ИМТ и дневной нормы калорий."""
import enum
import logging
import math
from typing import Optional
from healthbot.models import Gender, Lifestyle
from healthbot.services.errors import ValidationError

logger = logging.getLogger(__name__)

# Коэффициент активности по образу жизни
ACTIVITY_MULTIPLIERS = {
    Lifestyle.SEDENTARY: 1.2,
    Lifestyle.LIGHTLY_ACTIVE: 1.375,
    Lifestyle.MODERATELY_ACTIVE: 1.55,
    Lifestyle.VERY_ACTIVE: 1.725,
    Lifestyle.EXTRA_ACTIVE: 1.9,
}

# Не указанный или неизвестный образ жизни считаем сидячим
DEFAULT_ACTIVITY_MULTIPLIER = 1.2


class BmiCategory(str, enum.Enum):
    """Категория ИМТ. Только для отображения, не сохраняется."""
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


def _positive(value, field: str) -> float:
    """Проверить, что значение — конечное положительное число."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field}: нужно число")
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{field}: нужно положительное число")
    return float(value)


def _age(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Возраст: нужно целое число")
    if value < 0:
        raise ValidationError("Возраст: не может быть отрицательным")
    return value


def calculate_bmi(weight_kg: float, height_cm: float) -> str:
    """Индекс массы тела: вес / рост² (кг/м²), строка с одним знаком после запятой."""
    weight = _positive(weight_kg, "Вес")
    height_m = _positive(height_cm, "Рост") / 100
    return f"{weight / (height_m * height_m):.1f}"


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: Optional[Gender]) -> float:
    """Базовый метаболизм (BMR) с фиксированными коэффициентами.

    Для мужчин своя формула, для всех остальных (в т.ч. пол не указан) — женская.
    """
    weight = _positive(weight_kg, "Вес")
    height = _positive(height_cm, "Рост")
    age = _age(age)

    if Gender.parse(gender) == Gender.MALE:
        return 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
    return 447.593 + 9.247 * weight + 3.098 * height - 4.330 * age


def activity_multiplier(lifestyle) -> float:
    """Коэффициент активности.

    None, пустая строка и любое неизвестное значение дают 1.2: профиль
    без указанного образа жизни считается сидячим. Неизвестное непустое
    значение логируется: это, скорее всего, ошибка данных.
    """
    multiplier = ACTIVITY_MULTIPLIERS.get(Lifestyle.parse(lifestyle))
    if multiplier is None:
        if lifestyle not in (None, ""):
            logger.warning(f"Неизвестный образ жизни {lifestyle!r}, коэффициент {DEFAULT_ACTIVITY_MULTIPLIER}")
        return DEFAULT_ACTIVITY_MULTIPLIER
    return multiplier


def calculate_calorie_needs(
    weight_kg: float,
    height_cm: float,
    age: int,
    gender: Optional[Gender],
    lifestyle: Optional[Lifestyle],
) -> int:
    """Дневная норма калорий: BMR × коэффициент активности.

    Округление встроенным round() (банковское, half-to-even).
    """
    bmr = calculate_bmr(weight_kg, height_cm, age, gender)
    return int(round(bmr * activity_multiplier(lifestyle)))


def classify_bmi(bmi: float) -> BmiCategory:
    """Категория ИМТ; нижняя граница каждого диапазона включительно."""
    if bmi < 18.5:
        return BmiCategory.UNDERWEIGHT
    if bmi < 25:
        return BmiCategory.NORMAL
    if bmi < 30:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE
