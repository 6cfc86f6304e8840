"""Тесты для бота."""
from zoneinfo import ZoneInfo
import pytest
from healthbot.config import Config
from healthbot.database import init_db, get_db
from healthbot.models import ActivityType, UserProfile
from healthbot.services.aggregator import TrendPeriod
from healthbot.services.tips import HEALTH_TIPS, TipCategory, get_tips


def test_config_validation():
    """Тест валидации конфигурации."""
    config = Config(
        BOT_TOKEN="test_token",
        DATABASE_URL="sqlite:///test.db",
        AUTH_API_KEY="test_key",
        TIMEZONE="Europe/Moscow",
    )
    # Не должно вызывать ошибку
    config.validate()
    assert config.tz == ZoneInfo("Europe/Moscow")


@pytest.mark.parametrize(
    "overrides",
    [{"BOT_TOKEN": ""}, {"AUTH_API_KEY": ""}, {"TIMEZONE": "Mars/Olympus"}],
)
def test_config_validation_errors(overrides):
    settings = dict(BOT_TOKEN="test_token", DATABASE_URL="sqlite:///test.db", AUTH_API_KEY="test_key")
    settings.update(overrides)
    with pytest.raises(ValueError):
        Config(**settings).validate()


def test_config_local_timezone():
    config = Config(BOT_TOKEN="t", DATABASE_URL="sqlite:///test.db", AUTH_API_KEY="k")
    assert config.tz is not None


def test_database_creation(db):
    """Тест создания БД."""
    init_db()

    # Проверяем, что можем создать сессию
    with get_db() as session:
        assert session.query(UserProfile).count() == 0


def test_parse_activity_type():
    """Тест разбора типа активности из команды /log."""
    from healthbot.handlers.activity import parse_activity_type

    assert parse_activity_type("water") == ActivityType.WATER
    assert parse_activity_type(" Sleep ") == ActivityType.SLEEP
    assert parse_activity_type("yoga") is None
    assert parse_activity_type(None) is None


def test_parse_progress_data():
    from healthbot.handlers.stats import parse_progress_data

    assert parse_progress_data("progress:30:sleep") == (TrendPeriod.MONTH, ActivityType.SLEEP)
    assert parse_progress_data("progress:7:water") == (TrendPeriod.WEEK, ActivityType.WATER)


def test_format_helpers():
    from healthbot.handlers.common import format_bmi
    from healthbot.services.formatting import format_value

    assert format_value(70.0) == "70"
    assert format_value(7.5) == "7.5"
    assert format_bmi(22.9) == "22.9 (🟢 Норма)"
    assert format_bmi(30.0).startswith("30.0 (🔴")


def test_progress_without_data(user, fake_repository):
    """Пустой период: без графика, с сообщением."""
    from healthbot.handlers.stats import build_progress
    from healthbot.services.health_state import HealthState

    state = HealthState(user, fake_repository)
    chart, caption = build_progress(state, TrendPeriod.WEEK, ActivityType.WATER)

    assert chart is None
    assert "Нет данных за этот период." in caption


def test_tips_filter():
    """Тест фильтра советов по категориям."""
    assert len(get_tips()) == len(HEALTH_TIPS) == 10
    sleep_tips = get_tips(TipCategory.SLEEP)
    assert sleep_tips
    assert all(tip.category == TipCategory.SLEEP for tip in sleep_tips)
    assert get_tips("hydration") == get_tips(TipCategory.HYDRATION)


def test_trend_chart_is_png():
    """Тест генерации графика."""
    from healthbot.services.chart_generator import generate_trend_chart

    week = [("Пн", 0), ("Вт", 250), ("Ср", 1000), ("Чт", 0), ("Пт", 500), ("Сб", 750), ("Вс", 2000)]
    month = [(str(day), day * 10.5) for day in range(1, 31)]

    for series in (week, month):
        chart = generate_trend_chart(series, "Вода", "мл")
        assert chart is not None
        assert chart.startswith(b"\x89PNG")


def test_settings_date_uses_local_calendar(user, fake_repository, monkeypatch):
    """Дата обновления профиля показывается по местному календарю."""
    from datetime import datetime, timezone
    from healthbot.config import config
    from healthbot.handlers.settings import build_settings_text
    from healthbot.models import Gender, Lifestyle
    from healthbot.services import aggregator
    from healthbot.services.health_state import HealthState
    from healthbot.services.records import ProfileRecord

    fake_repository.profiles[user.user_id] = ProfileRecord(
        user_id=user.user_id,
        email=user.email,
        age=30,
        gender=Gender.MALE,
        height_cm=175.0,
        weight_kg=70.0,
        lifestyle=Lifestyle.SEDENTARY,
        bmi=22.9,
        calorie_needs=2035,
        # 02:30 по Москве уже 11 июня
        updated_at=datetime(2024, 6, 10, 23, 30, tzinfo=timezone.utc),
    )
    state = HealthState(user, fake_repository)
    state.load_profile()

    assert "обновлен 10.06.2024" in build_settings_text(state)

    moscow = Config(
        BOT_TOKEN=config.BOT_TOKEN,
        DATABASE_URL=config.DATABASE_URL,
        AUTH_API_KEY=config.AUTH_API_KEY,
        TIMEZONE="Europe/Moscow",
    )
    monkeypatch.setattr(aggregator, "config", moscow)

    assert "обновлен 11.06.2024" in build_settings_text(state)
