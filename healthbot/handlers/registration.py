"""Обработчики заполнения и редактирования профиля."""
import logging
from typing import Optional
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
from healthbot.handlers.common import (
    require_state,
    format_bmi,
    GENERIC_ERROR,
    STATE_KEY,
)
from healthbot.keyboards.menus import (
    get_gender_keyboard,
    get_lifestyle_keyboard,
    GENDER_LABELS,
    LIFESTYLE_LABELS,
)
from healthbot.services.errors import StorageError, ValidationError
from healthbot.services.formatting import format_value
from healthbot.services.health_state import ProfileInput, parse_number
from healthbot.services.records import ProfileRecord
from healthbot.services.metrics import calculate_bmi

logger = logging.getLogger(__name__)

# Состояния заполнения профиля
GENDER, AGE, HEIGHT, WEIGHT, LIFESTYLE = range(5)

FORM_KEY = "profile_form"

# Ответ "оставить текущее значение" при редактировании
KEEP = "-"


def _hint(form: dict, field: str) -> str:
    if form.get("edit") and form.get(field):
        return f"\nСейчас: {form[field]}. Отправь «{KEEP}», чтобы оставить."
    return ""


def profile_form(profile: Optional[ProfileRecord]) -> dict:
    """Форма профиля: пустая или с текущими значениями для редактирования.

    Числа попадают в форму без округления, иначе ответ «-» изменил бы профиль.
    """
    if profile is None:
        return {"edit": False}
    return {
        "edit": True,
        "gender": profile.gender.value if profile.gender else None,
        "age": str(profile.age),
        "height": str(profile.height_cm),
        "weight": str(profile.weight_kg),
        "lifestyle": profile.lifestyle.value if profile.lifestyle else None,
    }


async def register_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Начало заполнения профиля (или редактирования, если он уже есть)."""
    if update.callback_query:
        await update.callback_query.answer()

    state = await require_state(update, context, need_profile=False)
    if state is None:
        return ConversationHandler.END

    form = profile_form(state.profile)
    context.user_data[FORM_KEY] = form

    title = "✏️ <b>Изменение профиля</b>" if form["edit"] else "👤 <b>Профиль</b>"
    text = f"{title}\n\nШаг 1/5: Укажи свой пол:"
    if update.callback_query and update.callback_query.message.text:
        await update.callback_query.edit_message_text(
            text, reply_markup=get_gender_keyboard(), parse_mode="HTML"
        )
    else:
        await update.effective_chat.send_message(
            text, reply_markup=get_gender_keyboard(), parse_mode="HTML"
        )
    return GENDER


async def gender_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Обработка выбора пола."""
    query = update.callback_query
    await query.answer()

    form = context.user_data.setdefault(FORM_KEY, {})
    form["gender"] = query.data.split(":", 1)[1]

    await query.edit_message_text(
        "✅ Пол сохранен\n\n"
        "Шаг 2/5: Сколько тебе лет?\n"
        f"Отправь числом (например: 25){_hint(form, 'age')}"
    )
    return AGE


async def age_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Обработка ввода возраста."""
    form = context.user_data.setdefault(FORM_KEY, {})
    text = update.message.text.strip()

    if not (form.get("edit") and text == KEEP):
        try:
            age = parse_number(text, "Возраст")
            if not age.is_integer():
                raise ValidationError("Возраст: нужно целое число")
        except ValidationError as e:
            await update.message.reply_text(f"❌ {e.message}")
            return AGE
        form["age"] = str(int(age))

    await update.message.reply_text(
        "✅ Возраст сохранен\n\n"
        "Шаг 3/5: Какой у тебя рост (в см)?\n"
        f"Отправь числом (например: 175){_hint(form, 'height')}"
    )
    return HEIGHT


async def height_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Обработка ввода роста."""
    form = context.user_data.setdefault(FORM_KEY, {})
    text = update.message.text.strip()

    if not (form.get("edit") and text == KEEP):
        try:
            parse_number(text, "Рост")
        except ValidationError as e:
            await update.message.reply_text(f"❌ {e.message}")
            return HEIGHT
        form["height"] = text

    await update.message.reply_text(
        "✅ Рост сохранен\n\n"
        "Шаг 4/5: Какой у тебя вес (в кг)?\n"
        f"Отправь числом (например: 70.5){_hint(form, 'weight')}"
    )
    return WEIGHT


async def weight_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Обработка ввода веса + предпросмотр ИМТ."""
    form = context.user_data.setdefault(FORM_KEY, {})
    text = update.message.text.strip()

    if not (form.get("edit") and text == KEEP):
        try:
            parse_number(text, "Вес")
        except ValidationError as e:
            await update.message.reply_text(f"❌ {e.message}")
            return WEIGHT
        form["weight"] = text

    bmi = calculate_bmi(parse_number(form["weight"], "Вес"), parse_number(form["height"], "Рост"))
    current = ""
    if form.get("edit") and form.get("lifestyle"):
        current = f"\nСейчас: {LIFESTYLE_LABELS.get(form['lifestyle'], form['lifestyle'])}"

    await update.message.reply_text(
        "✅ Вес сохранен\n"
        f"📐 ИМТ: {format_bmi(float(bmi))}\n\n"
        f"Шаг 5/5: Какой у тебя образ жизни?{current}",
        reply_markup=get_lifestyle_keyboard(),
    )
    return LIFESTYLE


async def lifestyle_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Обработка образа жизни и сохранение профиля."""
    query = update.callback_query
    await query.answer()

    form = context.user_data.pop(FORM_KEY, {})
    form["lifestyle"] = query.data.split(":", 1)[1]

    state = context.user_data.get(STATE_KEY)
    if state is None:
        await query.edit_message_text("❌ Сессия устарела. Начни заново: /setup")
        return ConversationHandler.END

    try:
        profile = state.save_profile(ProfileInput.from_form(form))
    except ValidationError as e:
        await query.edit_message_text(f"❌ {e.message}\n\nНачни заново: /setup")
        return ConversationHandler.END
    except StorageError as e:
        logger.error(f"Ошибка сохранения профиля: {e}", exc_info=True)
        await query.edit_message_text(f"{GENERIC_ERROR}\n\nНачни заново: /setup")
        return ConversationHandler.END

    title = "✅ <b>Профиль обновлен!</b>" if form.get("edit") else "🎉 <b>Профиль создан!</b>"
    await query.edit_message_text(
        f"{title}\n\n"
        f"👤 {GENDER_LABELS[profile.gender]}, {profile.age} лет\n"
        f"📏 {format_value(profile.height_cm)} см, ⚖️ {format_value(profile.weight_kg)} кг\n"
        f"🏃 {LIFESTYLE_LABELS[profile.lifestyle]}\n\n"
        f"📐 ИМТ: {format_bmi(profile.bmi)}\n"
        f"🔥 Дневная норма: {profile.calorie_needs} ккал\n\n"
        f"Начни записывать: /log",
        parse_mode="HTML",
    )
    return ConversationHandler.END


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Отмена заполнения профиля."""
    await update.message.reply_text("❌ Заполнение профиля отменено.")
    context.user_data.pop(FORM_KEY, None)
    return ConversationHandler.END


def register_handlers(application: Application) -> None:
    """Регистрация обработчиков."""
    conv_handler = ConversationHandler(
        entry_points=[
            CommandHandler("setup", register_start),
            CommandHandler("edit_profile", register_start),
            CallbackQueryHandler(register_start, pattern="^start:setup$"),
            CallbackQueryHandler(register_start, pattern="^settings:edit$"),
        ],
        states={
            GENDER: [CallbackQueryHandler(gender_handler, pattern="^gender:")],
            AGE: [MessageHandler(filters.TEXT & ~filters.COMMAND, age_handler)],
            HEIGHT: [MessageHandler(filters.TEXT & ~filters.COMMAND, height_handler)],
            WEIGHT: [MessageHandler(filters.TEXT & ~filters.COMMAND, weight_handler)],
            LIFESTYLE: [CallbackQueryHandler(lifestyle_handler, pattern="^lifestyle:")],
        },
        fallbacks=[CommandHandler("cancel", cancel)],
    )
    application.add_handler(conv_handler)
