"""Обработчики статистики: сводка за сегодня и графики прогресса."""
import io
import logging
from telegram import Update, InputFile, InputMediaPhoto
from telegram.error import BadRequest
from telegram.ext import Application, CommandHandler, CallbackQueryHandler, ContextTypes
from healthbot.handlers.common import require_state, format_bmi, GENERIC_ERROR
from healthbot.keyboards.menus import (
    get_dashboard_keyboard,
    get_progress_keyboard,
    ACTIVITY_LABELS,
    ACTIVITY_UNITS,
)
from healthbot.models import ActivityType
from healthbot.services.aggregator import TrendPeriod, local_day
from healthbot.services.chart_generator import generate_trend_chart
from healthbot.services.errors import StorageError
from healthbot.services.formatting import format_value
from healthbot.services.health_state import HealthState

logger = logging.getLogger(__name__)


def build_dashboard_text(state: HealthState) -> str:
    """Текст сводки: профиль, итоги за сегодня, последние записи."""
    lines = ["📊 <b>Сводка за сегодня</b>\n"]

    profile = state.profile
    if profile:
        lines.append(
            f"📐 ИМТ: {format_bmi(profile.bmi)}\n"
            f"🔥 Дневная норма: {profile.calorie_needs} ккал\n"
        )

    totals = state.today_totals()
    lines.append("<b>Прогресс сегодня:</b>")
    for activity_type, label in ACTIVITY_LABELS.items():
        lines.append(f"{label}: {format_value(totals[activity_type])} {ACTIVITY_UNITS[activity_type]}")

    lines.append("\n<b>Последние записи:</b>")
    recent = state.recent()
    if not recent:
        lines.append("Пока нет записей.")
    for activity in recent:
        day = local_day(activity.occurred_at).strftime("%d.%m")
        lines.append(
            f"• {ACTIVITY_LABELS[activity.type]} — "
            f"{format_value(activity.value)} {ACTIVITY_UNITS[activity.type]} ({day})"
        )

    return "\n".join(lines)


async def today_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Сводка за сегодня."""
    state = await require_state(update, context)
    if state is None:
        return

    await update.message.reply_text(
        build_dashboard_text(state), reply_markup=get_dashboard_keyboard(), parse_mode="HTML"
    )


async def dashboard_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Кнопка «Обновить»: перечитать данные и показать сводку."""
    query = update.callback_query
    await query.answer()

    state = await require_state(update, context)
    if state is None:
        return

    try:
        state.refresh()
    except StorageError as e:
        # Показываем последнее успешно загруженное состояние
        logger.error(f"Ошибка обновления сводки: {e}", exc_info=True)
        await query.message.reply_text(GENERIC_ERROR)

    text = build_dashboard_text(state)
    if query.message.text:
        try:
            await query.edit_message_text(text, reply_markup=get_dashboard_keyboard(), parse_mode="HTML")
        except BadRequest as e:
            # "Message is not modified": данные не изменились
            logger.debug(f"Сводка не изменилась: {e}")
    else:
        await query.message.reply_text(text, reply_markup=get_dashboard_keyboard(), parse_mode="HTML")


def build_progress(state: HealthState, period: TrendPeriod, activity_type: ActivityType):
    """Картинка графика (или None) и подпись для экрана прогресса."""
    series = state.trend(period, activity_type)
    label = ACTIVITY_LABELS[activity_type]
    unit = ACTIVITY_UNITS[activity_type]
    title = f"{label} — последние {period.value} дней"

    if not any(total > 0 for _, total in series):
        return None, f"📈 {title}\n\nНет данных за этот период."

    total = sum(value for _, value in series)
    caption = (
        f"📈 {title}\n"
        f"Всего: {format_value(total)} {unit}, "
        f"в среднем: {format_value(total / period.value)} {unit}/день"
    )
    # Заголовок на картинке без эмодзи: их нет в шрифте
    chart = generate_trend_chart(series, title.split(' ', 1)[1], unit)
    if chart is None:
        table = "\n".join(f"{day}: {format_value(value)}" for day, value in series)
        caption = f"{caption}\n\n{table}"
    return chart, caption


def parse_progress_data(data: str) -> tuple[TrendPeriod, ActivityType]:
    """'progress:30:sleep' -> (TrendPeriod.MONTH, ActivityType.SLEEP)."""
    _, period, activity_type = data.split(":")
    return TrendPeriod(int(period)), ActivityType(activity_type)


async def progress_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Графики прогресса (по умолчанию — вода за неделю)."""
    state = await require_state(update, context, need_profile=False)
    if state is None:
        return

    period, activity_type = TrendPeriod.WEEK, ActivityType.WATER
    chart, caption = build_progress(state, period, activity_type)
    keyboard = get_progress_keyboard(period, activity_type)

    if chart:
        await update.message.reply_photo(
            photo=InputFile(io.BytesIO(chart), filename="progress.png"),
            caption=caption,
            reply_markup=keyboard,
        )
    else:
        await update.message.reply_text(caption, reply_markup=keyboard)


async def progress_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Переключение периода/типа на экране прогресса."""
    query = update.callback_query
    await query.answer()

    state = await require_state(update, context, need_profile=False)
    if state is None:
        return

    period, activity_type = parse_progress_data(query.data)
    chart, caption = build_progress(state, period, activity_type)
    keyboard = get_progress_keyboard(period, activity_type)

    if chart and query.message.photo:
        await query.edit_message_media(
            InputMediaPhoto(chart, caption=caption),
            reply_markup=keyboard,
        )
    elif chart:
        await query.message.reply_photo(
            photo=InputFile(io.BytesIO(chart), filename="progress.png"),
            caption=caption,
            reply_markup=keyboard,
        )
    elif query.message.photo:
        # Фото нельзя превратить в текст, отправляем новое сообщение
        await query.message.delete()
        await query.message.chat.send_message(caption, reply_markup=keyboard)
    else:
        await query.edit_message_text(caption, reply_markup=keyboard)


def register_handlers(application: Application) -> None:
    """Регистрация обработчиков."""
    application.add_handler(CommandHandler("today", today_command))
    application.add_handler(CommandHandler("progress", progress_command))
    application.add_handler(CallbackQueryHandler(dashboard_callback, pattern=r"^dashboard:"))
    application.add_handler(CallbackQueryHandler(progress_callback, pattern=r"^progress:"))
