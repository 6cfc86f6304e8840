"""Общие помощники обработчиков: текущий пользователь, состояние, ответы."""
import logging
from typing import Optional
from telegram import Update
from telegram.ext import ContextTypes
from healthbot.services.auth_service import AuthService
from healthbot.services.errors import StorageError
from healthbot.services.health_state import HealthState
from healthbot.services.metrics import BmiCategory, classify_bmi

logger = logging.getLogger(__name__)

auth_service = AuthService()

# Ключ состояния пользователя в context.user_data
STATE_KEY = "health_state"

GENERIC_ERROR = "❌ Что-то пошло не так. Попробуй ещё раз."
LOGIN_REQUIRED = "🔑 Сначала войди: /login или создай аккаунт: /signup"
PROFILE_REQUIRED = "❌ Сначала заполни профиль: /setup"


def get_state(update: Update, context: ContextTypes.DEFAULT_TYPE) -> Optional[HealthState]:
    """Состояние вошедшего пользователя или None.

    При первом обращении (или после смены аккаунта) профиль и активности
    загружаются из хранилища.
    """
    user = auth_service.current_user(update.effective_user.id)
    if user is None:
        context.user_data.pop(STATE_KEY, None)
        return None

    state = context.user_data.get(STATE_KEY)
    if state is None or state.user != user:
        state = HealthState(user)
        state.refresh()
        context.user_data[STATE_KEY] = state
    return state


def drop_state(context: ContextTypes.DEFAULT_TYPE) -> None:
    context.user_data.pop(STATE_KEY, None)


async def reply(update: Update, text: str, **kwargs) -> None:
    """Ответить на сообщение или отредактировать сообщение с кнопкой."""
    kwargs.setdefault("parse_mode", "HTML")
    query = update.callback_query
    if query and query.message and query.message.text:
        await query.edit_message_text(text, **kwargs)
    elif query and query.message:
        await query.message.reply_text(text, **kwargs)
    else:
        await update.message.reply_text(text, **kwargs)


async def require_state(
    update: Update, context: ContextTypes.DEFAULT_TYPE, need_profile: bool = True
) -> Optional[HealthState]:
    """Состояние пользователя; если не вошёл или нет профиля — подсказка и None."""
    try:
        state = get_state(update, context)
    except StorageError as e:
        logger.error(f"Ошибка загрузки состояния: {e}", exc_info=True)
        await reply(update, GENERIC_ERROR)
        return None

    if state is None:
        await reply(update, LOGIN_REQUIRED)
        return None
    if need_profile and not state.has_profile:
        await reply(update, PROFILE_REQUIRED)
        return None
    return state


BMI_LABELS = {
    BmiCategory.UNDERWEIGHT: "🔵 Недостаточный вес",
    BmiCategory.NORMAL: "🟢 Норма",
    BmiCategory.OVERWEIGHT: "🟠 Избыточный вес",
    BmiCategory.OBESE: "🔴 Ожирение",
}


def format_bmi(bmi: float) -> str:
    """ИМТ с категорией: '22.9 (🟢 Норма)'."""
    return f"{bmi:.1f} ({BMI_LABELS[classify_bmi(bmi)]})"

