"""Обработчики записи активности: вода, тренировка, сон, еда."""
import logging
from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    CallbackQueryHandler,
    MessageHandler,
    ConversationHandler,
    filters,
    ContextTypes,
)
from healthbot.handlers.common import require_state, GENERIC_ERROR, STATE_KEY
from healthbot.keyboards.menus import get_activity_type_keyboard, ACTIVITY_LABELS, ACTIVITY_UNITS
from healthbot.models import ActivityType
from healthbot.services.errors import StorageError, ValidationError
from healthbot.services.formatting import format_value
from healthbot.services.health_state import parse_activity_value

logger = logging.getLogger(__name__)

# Состояния диалога
TYPE, VALUE, NOTES = range(3)

FORM_KEY = "log_form"

# Подсказки для ввода значения
VALUE_PROMPTS = {
    ActivityType.WATER: "Сколько воды выпито (мл)? Например: 250",
    ActivityType.EXERCISE: "Сколько минут длилась тренировка? Например: 30",
    ActivityType.SLEEP: "Сколько часов сна? Например: 7.5",
    ActivityType.MEAL: "Сколько калорий? Например: 450",
}


def parse_activity_type(text: str | None) -> ActivityType | None:
    """Тип из аргумента команды: '/log water' -> ActivityType.WATER."""
    if not text:
        return None
    try:
        return ActivityType(text.strip().lower())
    except ValueError:
        return None


async def _ask_value(update: Update, activity_type: ActivityType) -> None:
    text = f"{ACTIVITY_LABELS[activity_type]}\n\n{VALUE_PROMPTS[activity_type]}"
    if update.callback_query and update.callback_query.message.text:
        await update.callback_query.edit_message_text(text)
    else:
        await update.effective_chat.send_message(text)


async def log_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Начало записи: /log [тип] или быстрая кнопка со сводки."""
    query = update.callback_query
    if query:
        await query.answer()

    state = await require_state(update, context)
    if state is None:
        return ConversationHandler.END

    if query:
        activity_type = parse_activity_type(query.data.split(":", 1)[1])
    else:
        activity_type = parse_activity_type(context.args[0] if context.args else None)

    context.user_data[FORM_KEY] = {}
    if activity_type is None:
        await update.effective_chat.send_message(
            "📝 Что записать?", reply_markup=get_activity_type_keyboard()
        )
        return TYPE

    context.user_data[FORM_KEY]["type"] = activity_type
    await _ask_value(update, activity_type)
    return VALUE


async def type_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Обработка выбора типа."""
    query = update.callback_query
    await query.answer()

    activity_type = ActivityType(query.data.split(":", 1)[1])
    context.user_data.setdefault(FORM_KEY, {})["type"] = activity_type
    await _ask_value(update, activity_type)
    return VALUE


async def value_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Обработка значения."""
    try:
        value = parse_activity_value(update.message.text)
    except ValidationError as e:
        await update.message.reply_text(f"❌ {e.message}")
        return VALUE

    context.user_data.setdefault(FORM_KEY, {})["value"] = value
    await update.message.reply_text("✏️ Добавь заметку или отправь /skip")
    return NOTES


async def notes_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Заметка и сохранение."""
    return await _save(update, context, update.message.text)


async def skip_notes(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Сохранение без заметки."""
    return await _save(update, context, None)


async def _save(update: Update, context: ContextTypes.DEFAULT_TYPE, notes: str | None) -> int:
    form = context.user_data.pop(FORM_KEY, {})
    state = context.user_data.get(STATE_KEY)
    if state is None or "type" not in form or "value" not in form:
        await update.message.reply_text("❌ Сессия устарела. Начни заново: /log")
        return ConversationHandler.END

    activity_type = form["type"]
    try:
        state.log_activity(activity_type, form["value"], notes)
    except ValidationError as e:
        await update.message.reply_text(f"❌ {e.message}")
        return ConversationHandler.END
    except StorageError as e:
        logger.error(f"Ошибка записи активности: {e}", exc_info=True)
        await update.message.reply_text(f"{GENERIC_ERROR}\n\nЗапись не сохранена: /log")
        return ConversationHandler.END

    total = state.today_totals()[activity_type]
    unit = ACTIVITY_UNITS[activity_type]
    await update.message.reply_text(
        f"✅ Записано: {ACTIVITY_LABELS[activity_type]} — {format_value(form['value'])} {unit}\n"
        f"📊 Сегодня всего: {format_value(total)} {unit}\n\n"
        "Сводка: /today"
    )
    return ConversationHandler.END


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Отмена записи."""
    await update.message.reply_text("❌ Запись отменена.")
    context.user_data.pop(FORM_KEY, None)
    return ConversationHandler.END


def register_handlers(application: Application) -> None:
    """Регистрация обработчиков."""
    conv_handler = ConversationHandler(
        entry_points=[
            CommandHandler("log", log_start),
            CallbackQueryHandler(log_start, pattern="^quick:"),
        ],
        states={
            TYPE: [CallbackQueryHandler(type_handler, pattern="^logtype:")],
            VALUE: [MessageHandler(filters.TEXT & ~filters.COMMAND, value_handler)],
            NOTES: [
                CommandHandler("skip", skip_notes),
                MessageHandler(filters.TEXT & ~filters.COMMAND, notes_handler),
            ],
        },
        fallbacks=[CommandHandler("cancel", cancel)],
    )
    application.add_handler(conv_handler)
