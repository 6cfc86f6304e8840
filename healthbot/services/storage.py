"""Хранилище профилей и активностей.

Граница с БД: на вход и выход только записи из records.py,
метки времени нормализуются здесь, ошибки SQLAlchemy превращаются в StorageError.
Повторных попыток нет.
"""
import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from healthbot.database import get_db
from healthbot.models import UserProfile, Activity, Gender, Lifestyle, ActivityType
from healthbot.services.errors import StorageError
from healthbot.services.records import ProfileRecord, ActivityRecord, normalize_timestamp

logger = logging.getLogger(__name__)


class HealthRepository:
    """CRUD для профилей и активностей."""

    def __init__(self, session_factory=get_db):
        self._session_factory = session_factory

    def get_profile(self, user_id: str) -> Optional[ProfileRecord]:
        """Профиль пользователя или None."""
        try:
            with self._session_factory() as db:
                row = db.query(UserProfile).filter_by(user_id=user_id).first()
                return _profile_from_row(row) if row else None
        except SQLAlchemyError as e:
            logger.error(f"Ошибка загрузки профиля {user_id}: {e}", exc_info=True)
            raise StorageError("Не удалось загрузить профиль") from e

    def put_profile(self, user_id: str, profile: ProfileRecord) -> None:
        """Сохранить профиль, полностью перезаписав предыдущий."""
        try:
            with self._session_factory() as db:
                row = db.query(UserProfile).filter_by(user_id=user_id).first()
                if row is None:
                    row = UserProfile(user_id=user_id)
                    db.add(row)

                row.email = profile.email
                row.age = profile.age
                row.gender = profile.gender
                row.height_cm = profile.height_cm
                row.weight_kg = profile.weight_kg
                row.lifestyle = profile.lifestyle
                row.bmi = profile.bmi
                row.calorie_needs = profile.calorie_needs
                row.updated_at = normalize_timestamp(profile.updated_at)

                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Ошибка сохранения профиля {user_id}: {e}", exc_info=True)
            raise StorageError("Не удалось сохранить профиль") from e

        logger.info(f"Профиль {user_id} сохранён (ИМТ {profile.bmi}, {profile.calorie_needs} ккал)")

    def append_activity(self, activity: ActivityRecord) -> int:
        """Добавить активность, вернуть сгенерированный id."""
        try:
            with self._session_factory() as db:
                row = Activity(
                    user_id=activity.user_id,
                    type=activity.type,
                    value=activity.value,
                    notes=activity.notes,
                    occurred_at=normalize_timestamp(activity.occurred_at),
                    created_at=normalize_timestamp(activity.created_at),
                )
                db.add(row)
                db.commit()
                db.refresh(row)
                activity_id = row.id
        except SQLAlchemyError as e:
            logger.error(f"Ошибка записи активности {activity.user_id}: {e}", exc_info=True)
            raise StorageError("Не удалось сохранить активность") from e

        logger.info(f"Активность {activity.type.value}={activity.value} добавлена (id={activity_id})")
        return activity_id

    def list_activities(self, user_id: str) -> list[ActivityRecord]:
        """Все активности пользователя, новые первыми."""
        try:
            with self._session_factory() as db:
                rows = (
                    db.query(Activity)
                    .filter(Activity.user_id == user_id)
                    .order_by(Activity.occurred_at.desc(), Activity.id.desc())
                    .all()
                )
                return [_activity_from_row(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Ошибка загрузки активностей {user_id}: {e}", exc_info=True)
            raise StorageError("Не удалось загрузить активности") from e


def _profile_from_row(row: UserProfile) -> ProfileRecord:
    return ProfileRecord(
        user_id=row.user_id,
        email=row.email,
        age=row.age,
        gender=Gender.parse(row.gender),
        height_cm=row.height_cm,
        weight_kg=row.weight_kg,
        lifestyle=Lifestyle.parse(row.lifestyle),
        bmi=row.bmi,
        calorie_needs=row.calorie_needs,
        updated_at=normalize_timestamp(row.updated_at),
    )


def _activity_from_row(row: Activity) -> ActivityRecord:
    return ActivityRecord(
        id=row.id,
        user_id=row.user_id,
        type=ActivityType(row.type),
        value=row.value,
        notes=row.notes,
        occurred_at=normalize_timestamp(row.occurred_at),
        created_at=normalize_timestamp(row.created_at),
    )
