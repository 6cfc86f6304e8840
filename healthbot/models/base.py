"""Базовые классы для моделей SQLAlchemy."""
from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.sql import func
from healthbot.database import Base


class TimestampMixin:
    """Миксин с временными метками записи.

    Значения, выставленные приложением явно, имеют приоритет
    над серверными умолчаниями.
    """

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class BaseModel(Base, TimestampMixin):
    """Базовая модель для всех таблиц."""

    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
