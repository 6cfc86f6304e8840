"""Точка входа для Health Tracker Bot."""
import logging
from telegram.ext import Application
from healthbot.config import config
from healthbot.database import init_db
from healthbot.handlers import (
    register_start_handlers,
    register_auth_handlers,
    register_registration_handlers,
    register_activity_handlers,
    register_stats_handlers,
    register_tips_handlers,
    register_settings_handlers,
)

# Настройка логирования
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=config.LOG_LEVEL
)
# httpx логирует каждый запрос к Telegram API
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def main() -> None:
    """Запуск бота."""
    # Проверка конфигурации
    try:
        config.validate()
    except ValueError as e:
        logger.error(f"Ошибка конфигурации: {e}")
        return

    # Инициализация БД
    logger.info("Инициализация базы данных...")
    init_db()

    # Создание приложения
    logger.info("Запуск бота...")
    application = Application.builder().token(config.BOT_TOKEN).build()

    # Регистрация обработчиков (диалоги раньше общих callback-обработчиков)
    register_start_handlers(application)
    register_auth_handlers(application)
    register_registration_handlers(application)
    register_activity_handlers(application)
    register_stats_handlers(application)
    register_tips_handlers(application)
    register_settings_handlers(application)

    logger.info(f"Часовой пояс для статистики: {config.tz}")
    application.run_polling(allowed_updates=["message", "callback_query"])


if __name__ == "__main__":
    main()
