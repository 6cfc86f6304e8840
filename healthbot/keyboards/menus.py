"""Inline-клавиатуры бота."""
from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from healthbot.models import ActivityType, Gender, Lifestyle
from healthbot.services.aggregator import TrendPeriod
from healthbot.services.tips import TipCategory, CATEGORY_LABELS

# Подписи и единицы измерения по типам активности
ACTIVITY_LABELS = {
    ActivityType.WATER: "💧 Вода",
    ActivityType.EXERCISE: "🏃 Тренировка",
    ActivityType.SLEEP: "😴 Сон",
    ActivityType.MEAL: "🍽️ Еда",
}

ACTIVITY_UNITS = {
    ActivityType.WATER: "мл",
    ActivityType.EXERCISE: "мин",
    ActivityType.SLEEP: "ч",
    ActivityType.MEAL: "ккал",
}

GENDER_LABELS = {
    Gender.MALE: "Мужской",
    Gender.FEMALE: "Женский",
    Gender.OTHER: "Другой",
}

LIFESTYLE_LABELS = {
    Lifestyle.SEDENTARY: "Сидячий (почти без спорта)",
    Lifestyle.LIGHTLY_ACTIVE: "Лёгкая активность (1-3 раза в неделю)",
    Lifestyle.MODERATELY_ACTIVE: "Умеренная (3-5 раз в неделю)",
    Lifestyle.VERY_ACTIVE: "Высокая (6-7 раз в неделю)",
    Lifestyle.EXTRA_ACTIVE: "Очень высокая (физическая работа)",
}


def get_welcome_keyboard() -> InlineKeyboardMarkup:
    """Кнопки для невошедшего пользователя."""
    keyboard = [
        [InlineKeyboardButton("🔑 Войти", callback_data="start:login")],
        [InlineKeyboardButton("📝 Создать аккаунт", callback_data="start:signup")],
    ]
    return InlineKeyboardMarkup(keyboard)


def get_gender_keyboard() -> InlineKeyboardMarkup:
    keyboard = [
        [InlineKeyboardButton(label, callback_data=f"gender:{gender.value}")]
        for gender, label in GENDER_LABELS.items()
    ]
    return InlineKeyboardMarkup(keyboard)


def get_lifestyle_keyboard() -> InlineKeyboardMarkup:
    keyboard = [
        [InlineKeyboardButton(label, callback_data=f"lifestyle:{lifestyle.value}")]
        for lifestyle, label in LIFESTYLE_LABELS.items()
    ]
    return InlineKeyboardMarkup(keyboard)


def get_activity_type_keyboard(prefix: str = "logtype") -> InlineKeyboardMarkup:
    """Выбор типа активности (две кнопки в ряд)."""
    buttons = [
        InlineKeyboardButton(label, callback_data=f"{prefix}:{activity_type.value}")
        for activity_type, label in ACTIVITY_LABELS.items()
    ]
    return InlineKeyboardMarkup([buttons[:2], buttons[2:]])


def get_dashboard_keyboard() -> InlineKeyboardMarkup:
    """Быстрые действия под сводкой."""
    buttons = [
        InlineKeyboardButton(f"+ {label}", callback_data=f"quick:{activity_type.value}")
        for activity_type, label in ACTIVITY_LABELS.items()
    ]
    keyboard = [
        buttons[:2],
        buttons[2:],
        [
            InlineKeyboardButton("📈 Прогресс", callback_data="progress:7:water"),
            InlineKeyboardButton("🔄 Обновить", callback_data="dashboard:refresh"),
        ],
    ]
    return InlineKeyboardMarkup(keyboard)


def get_progress_keyboard(period: TrendPeriod, activity_type: ActivityType) -> InlineKeyboardMarkup:
    """Переключатели периода и типа на экране прогресса."""

    def mark(selected: bool, text: str) -> str:
        return f"✅ {text}" if selected else text

    periods = [
        InlineKeyboardButton(
            mark(p == period, f"{p.value} дней"),
            callback_data=f"progress:{p.value}:{activity_type.value}",
        )
        for p in TrendPeriod
    ]
    types = [
        InlineKeyboardButton(
            mark(t == activity_type, label),
            callback_data=f"progress:{period.value}:{t.value}",
        )
        for t, label in ACTIVITY_LABELS.items()
    ]
    return InlineKeyboardMarkup([periods, types[:2], types[2:]])


def get_tips_keyboard(selected: TipCategory | None = None) -> InlineKeyboardMarkup:
    """Фильтр советов по категориям."""
    all_label = "✅ Все" if selected is None else "Все"
    buttons = [InlineKeyboardButton(all_label, callback_data="tips:all")]
    for category, label in CATEGORY_LABELS.items():
        text = f"✅ {label}" if category == selected else label
        buttons.append(InlineKeyboardButton(text, callback_data=f"tips:{category.value}"))
    return InlineKeyboardMarkup([buttons[:3], buttons[3:]])


def get_settings_keyboard() -> InlineKeyboardMarkup:
    keyboard = [
        [InlineKeyboardButton("✏️ Изменить профиль", callback_data="settings:edit")],
        [InlineKeyboardButton("🚪 Выйти", callback_data="settings:logout")],
    ]
    return InlineKeyboardMarkup(keyboard)


def get_logout_confirm_keyboard() -> InlineKeyboardMarkup:
    keyboard = [
        [
            InlineKeyboardButton("🚪 Выйти", callback_data="settings:logout_confirm"),
            InlineKeyboardButton("◀️ Отмена", callback_data="settings:cancel"),
        ]
    ]
    return InlineKeyboardMarkup(keyboard)
