"""Обработчики регистрации аккаунта, входа и выхода."""
import logging
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    CommandHandler,
    CallbackQueryHandler,
    MessageHandler,
    ConversationHandler,
    filters,
    ContextTypes,
)
from healthbot.handlers.common import auth_service, drop_state
from healthbot.services.errors import AuthError, ValidationError

logger = logging.getLogger(__name__)

# Состояния диалогов
EMAIL, PASSWORD, CONFIRM = range(3)

FORM_KEY = "auth_form"


async def _ask(update: Update, text: str) -> None:
    if update.callback_query:
        await update.callback_query.answer()
        await update.callback_query.edit_message_text(text)
    else:
        await update.message.reply_text(text)


async def _delete_secret(update: Update) -> None:
    """Удалить сообщение с паролем из чата."""
    try:
        await update.message.delete()
    except TelegramError as e:
        logger.warning(f"Не удалось удалить сообщение с паролем: {e}")


async def signup_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Начало регистрации аккаунта."""
    context.user_data[FORM_KEY] = {"mode": "signup"}
    await _ask(update, "📝 Новый аккаунт\n\nШаг 1/3: Введи email:")
    return EMAIL


async def login_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Начало входа."""
    context.user_data[FORM_KEY] = {"mode": "login"}
    await _ask(update, "🔑 Вход\n\nВведи email:")
    return EMAIL


async def email_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Обработка ввода email."""
    form = context.user_data.setdefault(FORM_KEY, {"mode": "login"})
    email = update.message.text.strip()
    if "@" not in email:
        await update.message.reply_text("❌ Введи корректный email")
        return EMAIL

    form["email"] = email
    step = "Шаг 2/3: " if form["mode"] == "signup" else ""
    await update.message.reply_text(
        f"✅ Email сохранен\n\n{step}Введи пароль (сообщение будет удалено):"
    )
    return PASSWORD


async def password_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Обработка пароля: вход или переход к подтверждению."""
    form = context.user_data.setdefault(FORM_KEY, {"mode": "login"})
    form["password"] = update.message.text
    await _delete_secret(update)

    if form["mode"] == "signup":
        await update.effective_chat.send_message("Шаг 3/3: Повтори пароль:")
        return CONFIRM

    return await _finish(update, context, form)


async def confirm_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Подтверждение пароля и создание аккаунта."""
    form = context.user_data.setdefault(FORM_KEY, {"mode": "signup"})
    form["confirm"] = update.message.text
    await _delete_secret(update)
    return await _finish(update, context, form)


async def _finish(update: Update, context: ContextTypes.DEFAULT_TYPE, form: dict) -> int:
    telegram_id = update.effective_user.id
    chat = update.effective_chat

    try:
        if form["mode"] == "signup":
            user = auth_service.sign_up(
                telegram_id, form.get("email", ""), form.get("password", ""), form.get("confirm", "")
            )
        else:
            user = auth_service.login(telegram_id, form.get("email", ""), form.get("password", ""))
    except ValidationError as e:
        # Ошибка в форме: начинаем с пароля заново
        await chat.send_message(f"❌ {e.message}\n\nВведи пароль ещё раз:")
        form.pop("password", None)
        form.pop("confirm", None)
        return PASSWORD
    except AuthError as e:
        title = "Регистрация не удалась" if form["mode"] == "signup" else "Вход не удался"
        await chat.send_message(f"❌ {title}: {e.message}\n\nПопробуй снова: /{form['mode']}")
        context.user_data.pop(FORM_KEY, None)
        return ConversationHandler.END

    context.user_data.pop(FORM_KEY, None)
    drop_state(context)

    await chat.send_message(
        f"🎉 Готово, ты вошёл как {user.email}.\n\n"
        "Заполни профиль: /setup или посмотри сводку: /today"
    )
    return ConversationHandler.END


async def logout_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Выход из аккаунта."""
    try:
        auth_service.logout(update.effective_user.id)
    except AuthError as e:
        await update.message.reply_text(f"❌ {e.message}")
        return

    drop_state(context)
    await update.message.reply_text("👋 Ты вышел из аккаунта. Войти снова: /login")


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Отмена входа/регистрации."""
    await update.message.reply_text("❌ Отменено.")
    context.user_data.pop(FORM_KEY, None)
    return ConversationHandler.END


def register_handlers(application: Application) -> None:
    """Регистрация обработчиков."""
    conv_handler = ConversationHandler(
        entry_points=[
            CommandHandler("signup", signup_start),
            CommandHandler("login", login_start),
            CallbackQueryHandler(signup_start, pattern="^start:signup$"),
            CallbackQueryHandler(login_start, pattern="^start:login$"),
        ],
        states={
            EMAIL: [MessageHandler(filters.TEXT & ~filters.COMMAND, email_handler)],
            PASSWORD: [MessageHandler(filters.TEXT & ~filters.COMMAND, password_handler)],
            CONFIRM: [MessageHandler(filters.TEXT & ~filters.COMMAND, confirm_handler)],
        },
        fallbacks=[CommandHandler("cancel", cancel)],
    )
    application.add_handler(conv_handler)
    application.add_handler(CommandHandler("logout", logout_command))
