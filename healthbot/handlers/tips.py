"""Обработчики советов по здоровью."""
from telegram import Update
from telegram.error import BadRequest
from telegram.ext import Application, CommandHandler, CallbackQueryHandler, ContextTypes
from healthbot.keyboards.menus import get_tips_keyboard
from healthbot.services.tips import TipCategory, CATEGORY_LABELS, get_tips


def build_tips_text(category: TipCategory | None) -> str:
    title = CATEGORY_LABELS[category] if category else "Все советы"
    tips = get_tips(category)
    body = "\n\n".join(f"<b>{tip.title}</b>\n{tip.content}" for tip in tips)
    return f"💡 <b>{title}</b>\n\n{body}"


async def tips_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Все советы + фильтр по категориям."""
    await update.message.reply_text(
        build_tips_text(None), reply_markup=get_tips_keyboard(), parse_mode="HTML"
    )


async def tips_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Выбор категории."""
    query = update.callback_query
    await query.answer()

    value = query.data.split(":", 1)[1]
    category = None if value == "all" else TipCategory(value)

    try:
        await query.edit_message_text(
            build_tips_text(category), reply_markup=get_tips_keyboard(category), parse_mode="HTML"
        )
    except BadRequest:
        # Та же категория: текст не изменился
        pass


def register_handlers(application: Application) -> None:
    """Регистрация обработчиков."""
    application.add_handler(CommandHandler("tips", tips_command))
    application.add_handler(CallbackQueryHandler(tips_callback, pattern=r"^tips:"))
