"""Обработчики команд /start и /help."""
import logging
from telegram import Update, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.ext import Application, CommandHandler, ContextTypes
from healthbot.handlers.common import get_state, GENERIC_ERROR
from healthbot.keyboards.menus import get_welcome_keyboard
from healthbot.services.errors import StorageError

logger = logging.getLogger(__name__)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Обработка команды /start."""
    try:
        state = get_state(update, context)
    except StorageError as e:
        logger.error(f"Ошибка загрузки состояния: {e}", exc_info=True)
        await update.message.reply_text(GENERIC_ERROR)
        return

    if state is None:
        await update.message.reply_text(
            "👋 Привет! Я помогу следить за здоровьем.\n\n"
            "💧 Вода, 🏃 тренировки, 😴 сон и 🍽️ питание — всё в одном месте.\n\n"
            "Для начала войди или создай аккаунт:",
            reply_markup=get_welcome_keyboard(),
        )
    elif not state.has_profile:
        keyboard = InlineKeyboardMarkup(
            [[InlineKeyboardButton("📝 Заполнить профиль", callback_data="start:setup")]]
        )
        await update.message.reply_text(
            f"👋 Привет, {state.user.email.split('@')[0]}!\n\n"
            "Заполни профиль, чтобы я посчитал твой ИМТ и норму калорий:",
            reply_markup=keyboard,
        )
    else:
        keyboard = InlineKeyboardMarkup(
            [
                [InlineKeyboardButton("📊 Сводка", callback_data="dashboard:refresh")],
                [InlineKeyboardButton("📈 Прогресс", callback_data="progress:7:water")],
            ]
        )
        await update.message.reply_text(
            f"👋 С возвращением, {state.user.email.split('@')[0]}!\n\n"
            f"📊 Твоя дневная норма: {state.profile.calorie_needs} ккал",
            reply_markup=keyboard,
        )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Обработка команды /help."""
    text = (
        "📖 <b>Команды бота:</b>\n\n"
        "🔑 <b>Аккаунт:</b>\n"
        "/signup - Создать аккаунт\n"
        "/login - Войти\n"
        "/logout - Выйти\n\n"
        "👤 <b>Профиль:</b>\n"
        "/setup - Заполнить профиль\n"
        "/edit_profile - Изменить профиль\n"
        "/settings - Настройки\n\n"
        "📝 <b>Записи:</b>\n"
        "/log - Записать активность (например: /log water)\n"
        "/today - Сводка за сегодня\n"
        "/progress - Графики за 7 и 30 дней\n\n"
        "💡 <b>Советы:</b>\n"
        "/tips - Советы по здоровью\n\n"
        "❓ <b>Помощь:</b>\n"
        "/help - Эта справка\n"
        "/start - Начать сначала"
    )
    await update.message.reply_text(text, parse_mode="HTML")


def register_handlers(application: Application) -> None:
    """Регистрация обработчиков."""
    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
