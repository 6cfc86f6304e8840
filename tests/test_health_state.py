"""Тесты состояния пользователя: профиль и активности."""
import pytest
from healthbot.models import ActivityType, Gender, Lifestyle
from healthbot.services.errors import StorageError, ValidationError
from healthbot.services.health_state import HealthState, ProfileInput, parse_number

FORM = {
    "gender": "male",
    "age": "30",
    "height": "175",
    "weight": "70",
    "lifestyle": "sedentary",
}


def test_parse_number():
    assert parse_number("70", "Вес") == 70.0
    assert parse_number(" 70,5 ", "Вес") == 70.5
    for bad in ("", "   ", None, "abc", "0", "-5", "inf"):
        with pytest.raises(ValidationError):
            parse_number(bad, "Вес")


def test_profile_input_from_form():
    data = ProfileInput.from_form(FORM)
    assert data == ProfileInput(
        age=30, gender=Gender.MALE, height_cm=175.0, weight_kg=70.0, lifestyle=Lifestyle.SEDENTARY
    )


@pytest.mark.parametrize(
    "field, value",
    [
        ("gender", None),
        ("gender", "robot"),
        ("lifestyle", ""),
        ("age", "30.5"),
        ("age", ""),
        ("height", "abc"),
        ("weight", "0"),
    ],
)
def test_profile_input_rejects_invalid(field, value):
    """Все поля обязательны и проверяются до сохранения."""
    form = dict(FORM, **{field: value})
    with pytest.raises(ValidationError):
        ProfileInput.from_form(form)


def test_save_profile_calculates_metrics(user, fake_repository):
    state = HealthState(user, fake_repository)

    profile = state.save_profile(ProfileInput.from_form(FORM))

    assert profile.bmi == 22.9
    assert profile.calorie_needs == 2035
    assert profile.email == user.email
    assert profile.updated_at.tzinfo is not None
    assert state.profile == profile
    assert fake_repository.profiles[user.user_id] == profile


def test_saved_profile_loads_in_new_state(user, fake_repository):
    """Повторная загрузка возвращает сохранённое."""
    saved = HealthState(user, fake_repository).save_profile(ProfileInput.from_form(FORM))

    state = HealthState(user, fake_repository)
    assert state.profile is None
    assert state.load_profile() == saved
    assert state.has_profile


def test_save_profile_is_idempotent(user, fake_repository):
    state = HealthState(user, fake_repository)
    data = ProfileInput.from_form(FORM)

    first = state.save_profile(data)
    second = state.save_profile(data)

    assert (first.bmi, first.calorie_needs) == (second.bmi, second.calorie_needs)
    assert len(fake_repository.profiles) == 1


def test_failed_validation_keeps_state(user, fake_repository):
    state = HealthState(user, fake_repository)
    saved = state.save_profile(ProfileInput.from_form(FORM))

    with pytest.raises(ValidationError):
        state.save_profile(ProfileInput.from_form(dict(FORM, weight="-1")))

    assert state.profile == saved
    assert fake_repository.profiles[user.user_id] == saved


def test_storage_failure_keeps_last_snapshot(user, fake_repository):
    """При ошибке хранилища остаётся последнее загруженное состояние."""
    state = HealthState(user, fake_repository)
    state.save_profile(ProfileInput.from_form(FORM))
    state.log_activity(ActivityType.WATER, 250)
    profile, activities = state.profile, state.activities

    fake_repository.fail = True

    with pytest.raises(StorageError):
        state.refresh()
    with pytest.raises(StorageError):
        state.log_activity(ActivityType.WATER, 500)
    with pytest.raises(StorageError):
        state.save_profile(ProfileInput.from_form(dict(FORM, weight="80")))

    assert state.profile == profile
    assert state.activities == activities
    assert not state.loading


def test_load_profile_without_stored_profile(user, fake_repository):
    state = HealthState(user, fake_repository)
    assert state.load_profile() is None
    assert not state.has_profile


def test_log_activity_reloads_list(user, fake_repository):
    state = HealthState(user, fake_repository)

    first = state.log_activity(ActivityType.WATER, 250)
    second = state.log_activity("water", "500", notes="  после тренировки ")

    assert first != second
    assert len(state.activities) == 2
    assert {a.value for a in state.activities} == {250.0, 500.0}
    assert any(a.notes == "после тренировки" for a in state.activities)
    assert state.today_totals()[ActivityType.WATER] == 750


@pytest.mark.parametrize(
    "activity_type, value",
    [("yoga", 10), (ActivityType.WATER, 0), (ActivityType.WATER, -250), ("water", "abc"), ("sleep", None)],
)
def test_log_activity_rejects_invalid(user, fake_repository, activity_type, value):
    state = HealthState(user, fake_repository)

    with pytest.raises(ValidationError):
        state.log_activity(activity_type, value)

    assert fake_repository.activities == []
    assert state.activities == ()


def test_trend_and_recent_use_snapshot(user, fake_repository):
    state = HealthState(user, fake_repository)
    for value in (100, 200, 300, 400, 500, 600):
        state.log_activity(ActivityType.MEAL, value)

    assert len(state.recent()) == 5
    week = state.trend(7, ActivityType.MEAL)
    assert len(week) == 7
    assert week[-1][1] == 2100


def test_log_activity_survives_failed_reload(user, fake_repository, monkeypatch):
    """Запись сохранена, а список не перечитался: ошибки нет, снимок прежний."""
    state = HealthState(user, fake_repository)

    def broken_list(user_id):
        raise StorageError("Хранилище недоступно")

    monkeypatch.setattr(fake_repository, "list_activities", broken_list)

    activity_id = state.log_activity("water", 250)

    assert activity_id == 1
    assert len(fake_repository.activities) == 1
    assert state.activities == ()
    assert not state.loading


def test_edit_form_keeps_exact_values(user, fake_repository):
    """Редактирование с «-» во всех полях сохраняет профиль без изменений."""
    from healthbot.handlers.registration import profile_form

    state = HealthState(user, fake_repository)
    saved = state.save_profile(ProfileInput.from_form(dict(FORM, height="175.25", weight="70.25")))

    form = profile_form(state.profile)
    resaved = state.save_profile(ProfileInput.from_form(form))

    assert form["edit"] is True
    assert (resaved.height_cm, resaved.weight_kg) == (175.25, 70.25)
    assert (resaved.bmi, resaved.calorie_needs) == (saved.bmi, saved.calorie_needs)


def test_new_profile_form_is_empty():
    from healthbot.handlers.registration import profile_form

    assert profile_form(None) == {"edit": False}
