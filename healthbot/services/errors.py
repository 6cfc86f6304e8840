"""Ошибки бизнес-логики."""


class HealthBotError(Exception):
    """Базовая ошибка. Сообщение можно показывать пользователю."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HealthBotError):
    """Некорректный ввод: пустое поле, не число, не положительное значение.

    Выбрасывается до обращения к хранилищу и провайдеру входа.
    """


class AuthError(HealthBotError):
    """Ошибка регистрации/входа/выхода."""


class StorageError(HealthBotError):
    """Хранилище недоступно или отказало в доступе."""
