"""Регистрация и вход через Firebase Identity Toolkit (REST) + сессии чатов."""
import logging
from dataclasses import dataclass
from typing import Optional
import requests
from sqlalchemy.exc import SQLAlchemyError
from healthbot.config import config
from healthbot.database import get_db
from healthbot.models import AuthSession
from healthbot.services.errors import AuthError, StorageError, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# Коды ошибок провайдера -> текст для пользователя
AUTH_ERROR_MESSAGES = {
    "EMAIL_EXISTS": "Аккаунт с таким email уже существует.",
    "WEAK_PASSWORD": f"Слишком простой пароль (минимум {MIN_PASSWORD_LENGTH} символов).",
    "INVALID_EMAIL": "Некорректный email.",
    "MISSING_PASSWORD": "Введи пароль.",
    "EMAIL_NOT_FOUND": "Неверный email или пароль.",
    "INVALID_PASSWORD": "Неверный email или пароль.",
    "INVALID_LOGIN_CREDENTIALS": "Неверный email или пароль.",
    "USER_DISABLED": "Аккаунт заблокирован.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Слишком много попыток. Попробуй позже.",
    "OPERATION_NOT_ALLOWED": "Вход по паролю отключён.",
}

DEFAULT_AUTH_ERROR = "Не удалось выполнить вход. Попробуй ещё раз."
NETWORK_AUTH_ERROR = "Нет связи с сервером входа. Проверь подключение и попробуй ещё раз."


@dataclass(frozen=True)
class AuthUser:
    """Вошедший пользователь."""

    user_id: str
    email: str


def validate_credentials(email: str, password: str, confirm_password: Optional[str] = None) -> None:
    """Проверка полей формы до запроса к провайдеру."""
    if not email or not email.strip() or not password:
        raise ValidationError("Заполни все поля.")
    if confirm_password is not None:
        if password != confirm_password:
            raise ValidationError("Пароли не совпадают.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Пароль должен быть не короче {MIN_PASSWORD_LENGTH} символов.")


def _error_message(response: requests.Response) -> str:
    """Достать код ошибки из ответа провайдера и перевести в текст."""
    try:
        code = response.json().get("error", {}).get("message", "")
    except ValueError:
        return DEFAULT_AUTH_ERROR

    # Например: "WEAK_PASSWORD : Password should be at least 6 characters"
    code = code.split(":")[0].strip()
    return AUTH_ERROR_MESSAGES.get(code, DEFAULT_AUTH_ERROR)


class AuthService:
    """Клиент провайдера аутентификации и хранилище сессий чатов."""

    def __init__(self, api_key: str = None, base_url: str = None, session_factory=get_db):
        self.api_key = api_key if api_key is not None else config.AUTH_API_KEY
        self.base_url = (base_url or config.AUTH_BASE_URL).rstrip("/")
        self._session_factory = session_factory

    def _call(self, method: str, email: str, password: str) -> dict:
        """POST accounts:<method>; ошибки провайдера и сети -> AuthError."""
        url = f"{self.base_url}/accounts:{method}"
        payload = {"email": email.strip(), "password": password, "returnSecureToken": True}

        try:
            response = requests.post(url, params={"key": self.api_key}, json=payload, timeout=10)
        except requests.RequestException as e:
            logger.error(f"Провайдер входа недоступен ({method}): {e}")
            raise AuthError(NETWORK_AUTH_ERROR) from e

        if response.status_code != 200:
            message = _error_message(response)
            logger.info(f"Отказ провайдера входа ({method}, {response.status_code}): {message}")
            raise AuthError(message)

        return response.json()

    def sign_up(self, telegram_id: int, email: str, password: str, confirm_password: str) -> AuthUser:
        """Создать аккаунт и сразу войти."""
        validate_credentials(email, password, confirm_password)
        data = self._call("signUp", email, password)
        return self._start_session(telegram_id, data)

    def login(self, telegram_id: int, email: str, password: str) -> AuthUser:
        """Войти в существующий аккаунт."""
        validate_credentials(email, password)
        data = self._call("signInWithPassword", email, password)
        return self._start_session(telegram_id, data)

    def logout(self, telegram_id: int) -> None:
        """Выйти: удалить сессию чата."""
        try:
            with self._session_factory() as db:
                db.query(AuthSession).filter_by(telegram_id=telegram_id).delete()
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Ошибка выхода {telegram_id}: {e}", exc_info=True)
            raise AuthError("Не удалось выйти. Попробуй ещё раз.") from e

        logger.info(f"Пользователь Telegram {telegram_id} вышел")

    def current_user(self, telegram_id: int) -> Optional[AuthUser]:
        """Вошедший пользователь для чата или None."""
        try:
            with self._session_factory() as db:
                session = db.query(AuthSession).filter_by(telegram_id=telegram_id).first()
                if not session:
                    return None
                return AuthUser(user_id=session.user_id, email=session.email)
        except SQLAlchemyError as e:
            logger.error(f"Ошибка чтения сессии {telegram_id}: {e}", exc_info=True)
            raise StorageError("Не удалось проверить вход") from e

    def _start_session(self, telegram_id: int, data: dict) -> AuthUser:
        user = AuthUser(user_id=data["localId"], email=data.get("email", ""))

        try:
            with self._session_factory() as db:
                session = db.query(AuthSession).filter_by(telegram_id=telegram_id).first()
                if session is None:
                    session = AuthSession(telegram_id=telegram_id)
                    db.add(session)
                session.user_id = user.user_id
                session.email = user.email
                session.refresh_token = data.get("refreshToken")
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Ошибка сохранения сессии {telegram_id}: {e}", exc_info=True)
            raise AuthError(DEFAULT_AUTH_ERROR) from e

        logger.info(f"Пользователь Telegram {telegram_id} вошёл как {user.email}")
        return user
