"""Конфигурация бота из переменных окружения."""
import os
from dataclasses import dataclass
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Config:
    """Настройки бота."""

    BOT_TOKEN: str
    DATABASE_URL: str
    # Web API key провайдера аутентификации (Firebase Identity Toolkit)
    AUTH_API_KEY: str
    AUTH_BASE_URL: str = "https://identitytoolkit.googleapis.com/v1"
    # IANA-зона для календарных дней; None означает локальную зону системы
    TIMEZONE: str | None = None
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Загрузка конфигурации из окружения."""
        return cls(
            BOT_TOKEN=os.getenv("BOT_TOKEN", ""),
            DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///health_bot.db"),
            AUTH_API_KEY=os.getenv("AUTH_API_KEY", ""),
            AUTH_BASE_URL=os.getenv("AUTH_BASE_URL", "https://identitytoolkit.googleapis.com/v1"),
            TIMEZONE=os.getenv("TIMEZONE") or None,
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> None:
        """Проверка обязательных настроек."""
        if not self.BOT_TOKEN:
            raise ValueError("BOT_TOKEN не установлен в .env")
        if not self.AUTH_API_KEY:
            raise ValueError("AUTH_API_KEY не установлен в .env")
        if self.TIMEZONE:
            try:
                ZoneInfo(self.TIMEZONE)
            except (KeyError, ValueError) as e:
                raise ValueError(f"Неизвестная TIMEZONE: {self.TIMEZONE}") from e

    @property
    def tz(self) -> tzinfo:
        """Часовой пояс для группировки по календарным дням."""
        if self.TIMEZONE:
            return ZoneInfo(self.TIMEZONE)
        return datetime.now().astimezone().tzinfo


# Глобальный экземпляр конфигурации
config = Config.from_env()
