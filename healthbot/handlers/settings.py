"""Обработчики настроек: данные профиля и выход."""
import logging
from telegram import Update
from telegram.ext import Application, CommandHandler, CallbackQueryHandler, ContextTypes
from healthbot.handlers.common import (
    require_state,
    auth_service,
    drop_state,
    format_bmi,
    reply,
)
from healthbot.keyboards.menus import (
    get_settings_keyboard,
    get_logout_confirm_keyboard,
    GENDER_LABELS,
    LIFESTYLE_LABELS,
)
from healthbot.services.aggregator import local_day
from healthbot.services.errors import AuthError
from healthbot.services.formatting import format_value
from healthbot.services.health_state import HealthState

logger = logging.getLogger(__name__)


def build_settings_text(state: HealthState) -> str:
    """Аккаунт и данные профиля."""
    text = f"⚙️ <b>Настройки</b>\n\n📧 {state.user.email}\n"

    profile = state.profile
    if not profile:
        return text + "\nПрофиль не заполнен: /setup"

    gender = GENDER_LABELS.get(profile.gender, "не указан")
    lifestyle = LIFESTYLE_LABELS.get(profile.lifestyle, "не указан")
    updated = local_day(profile.updated_at).strftime("%d.%m.%Y")
    return text + (
        f"\n👤 <b>Профиль</b> (обновлен {updated})\n"
        f"Возраст: {profile.age}\n"
        f"Пол: {gender}\n"
        f"Рост: {format_value(profile.height_cm)} см\n"
        f"Вес: {format_value(profile.weight_kg)} кг\n"
        f"Образ жизни: {lifestyle}\n\n"
        f"📐 ИМТ: {format_bmi(profile.bmi)}\n"
        f"🔥 Дневная норма: {profile.calorie_needs} ккал"
    )


async def settings_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Экран настроек."""
    state = await require_state(update, context, need_profile=False)
    if state is None:
        return

    await update.message.reply_text(
        build_settings_text(state), reply_markup=get_settings_keyboard(), parse_mode="HTML"
    )


async def settings_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Кнопки выхода на экране настроек."""
    query = update.callback_query
    await query.answer()

    if query.data == "settings:logout":
        await query.edit_message_text(
            "🚪 Точно выйти из аккаунта?", reply_markup=get_logout_confirm_keyboard()
        )
    elif query.data == "settings:logout_confirm":
        try:
            auth_service.logout(update.effective_user.id)
        except AuthError as e:
            await query.edit_message_text(f"❌ {e.message}")
            return
        drop_state(context)
        await query.edit_message_text("👋 Ты вышел из аккаунта. Войти снова: /login")
    elif query.data == "settings:cancel":
        state = await require_state(update, context, need_profile=False)
        if state is None:
            return
        await reply(update, build_settings_text(state), reply_markup=get_settings_keyboard())


def register_handlers(application: Application) -> None:
    """Регистрация обработчиков."""
    application.add_handler(CommandHandler("settings", settings_command))
    # settings:edit обрабатывается диалогом профиля
    application.add_handler(
        CallbackQueryHandler(settings_callback, pattern=r"^settings:(logout|logout_confirm|cancel)$")
    )
