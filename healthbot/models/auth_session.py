"""Модель сессии входа: связь чата Telegram с аккаунтом."""
from sqlalchemy import Column, BigInteger, String, Text
from healthbot.models.base import BaseModel


class AuthSession(BaseModel):
    """Текущий вошедший пользователь для Telegram-аккаунта.

    Создается при регистрации/входе, удаляется при выходе.
    """

    __tablename__ = "auth_sessions"

    telegram_id = Column(BigInteger, unique=True, nullable=False, index=True)

    # Данные от провайдера аутентификации
    user_id = Column(String(128), nullable=False)
    email = Column(String(254), nullable=False)
    refresh_token = Column(Text)

    def __repr__(self):
        return f"<AuthSession {self.telegram_id} -> {self.email}>"
