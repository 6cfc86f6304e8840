"""Тесты расчёта ИМТ и нормы калорий."""
import logging
import pytest
from healthbot.models import Gender, Lifestyle
from healthbot.services.errors import ValidationError
from healthbot.services.metrics import (
    BmiCategory,
    DEFAULT_ACTIVITY_MULTIPLIER,
    activity_multiplier,
    calculate_bmi,
    calculate_bmr,
    calculate_calorie_needs,
    classify_bmi,
)


def test_bmi_one_decimal():
    """70 кг / 1.75² = 22.857 -> '22.9'."""
    assert calculate_bmi(70, 175) == "22.9"
    assert calculate_bmi(50, 160) == "19.5"


def test_bmi_grows_with_weight():
    """При фиксированном росте ИМТ не убывает с ростом веса."""
    values = [float(calculate_bmi(weight, 170)) for weight in range(40, 150, 5)]
    assert values == sorted(values)


def test_bmi_falls_with_height():
    values = [float(calculate_bmi(70, height)) for height in range(150, 200, 5)]
    assert values == sorted(values, reverse=True)


def test_calorie_needs_male_sedentary():
    """Мужчина 30 лет, 70 кг, 175 см, сидячий: BMR 1695.667 × 1.2 = 2034.8 -> 2035."""
    bmr = calculate_bmr(70, 175, 30, Gender.MALE)
    assert bmr == pytest.approx(1695.667)
    assert calculate_calorie_needs(70, 175, 30, Gender.MALE, Lifestyle.SEDENTARY) == 2035


def test_calorie_needs_female_moderate():
    """Женщина 25 лет, 60 кг, 165 см: 1405.333 × 1.55 = 2178.27 -> 2178."""
    assert calculate_bmr(60, 165, 25, Gender.FEMALE) == pytest.approx(1405.333)
    assert calculate_calorie_needs(60, 165, 25, Gender.FEMALE, Lifestyle.MODERATELY_ACTIVE) == 2178


def test_non_male_uses_female_formula():
    """'other' и не указанный пол считаются по женской формуле."""
    female = calculate_bmr(60, 165, 25, Gender.FEMALE)
    assert calculate_bmr(60, 165, 25, Gender.OTHER) == female
    assert calculate_bmr(60, 165, 25, None) == female
    assert calculate_bmr(60, 165, 25, "male") == calculate_bmr(60, 165, 25, Gender.MALE)


def test_activity_multipliers():
    assert activity_multiplier(Lifestyle.SEDENTARY) == 1.2
    assert activity_multiplier(Lifestyle.LIGHTLY_ACTIVE) == 1.375
    assert activity_multiplier("moderately_active") == 1.55
    assert activity_multiplier(Lifestyle.VERY_ACTIVE) == 1.725
    assert activity_multiplier(Lifestyle.EXTRA_ACTIVE) == 1.9


@pytest.mark.parametrize("lifestyle", [None, "", "unknown"])
def test_unknown_lifestyle_falls_back_to_sedentary(lifestyle):
    """Не указанный или неизвестный образ жизни даёт коэффициент 1.2."""
    assert activity_multiplier(lifestyle) == DEFAULT_ACTIVITY_MULTIPLIER == 1.2
    assert calculate_calorie_needs(70, 175, 30, Gender.MALE, lifestyle) == 2035


def test_unknown_lifestyle_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="healthbot.services.metrics"):
        activity_multiplier("couch_potato")
    assert "couch_potato" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="healthbot.services.metrics"):
        activity_multiplier(None)
    assert caplog.text == ""


@pytest.mark.parametrize(
    "weight, height",
    [(0, 175), (70, 0), (-70, 175), (70, -1), ("70", 175), (float("nan"), 175), (True, 175)],
)
def test_bmi_rejects_bad_input(weight, height):
    with pytest.raises(ValidationError):
        calculate_bmi(weight, height)


@pytest.mark.parametrize("age", [-1, 30.5, "30", None])
def test_bmr_rejects_bad_age(age):
    with pytest.raises(ValidationError):
        calculate_bmr(70, 175, age, Gender.MALE)


@pytest.mark.parametrize(
    "bmi, category",
    [
        (16.0, BmiCategory.UNDERWEIGHT),
        (18.4, BmiCategory.UNDERWEIGHT),
        (18.5, BmiCategory.NORMAL),
        (24.9, BmiCategory.NORMAL),
        (25.0, BmiCategory.OVERWEIGHT),
        (29.9, BmiCategory.OVERWEIGHT),
        (30.0, BmiCategory.OBESE),
        (41.2, BmiCategory.OBESE),
    ],
)
def test_classify_bmi_boundaries(bmi, category):
    """Нижняя граница каждого диапазона включительно."""
    assert classify_bmi(bmi) == category
