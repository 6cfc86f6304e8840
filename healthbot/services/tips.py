"""Каталог советов по здоровью."""
import enum
from dataclasses import dataclass
from typing import Optional


class TipCategory(str, enum.Enum):
    """Категория совета."""
    NUTRITION = "nutrition"
    EXERCISE = "exercise"
    SLEEP = "sleep"
    MENTAL = "mental"
    HYDRATION = "hydration"


CATEGORY_LABELS = {
    TipCategory.NUTRITION: "🥗 Питание",
    TipCategory.EXERCISE: "🏃 Спорт",
    TipCategory.SLEEP: "😴 Сон",
    TipCategory.MENTAL: "🧠 Психика",
    TipCategory.HYDRATION: "💧 Вода",
}


@dataclass(frozen=True)
class HealthTip:
    id: int
    category: TipCategory
    title: str
    content: str


HEALTH_TIPS = (
    HealthTip(1, TipCategory.NUTRITION, "Ешь радугу",
              "Добавляй в рацион овощи и фрукты разных цветов: каждый цвет — это свои витамины и антиоксиданты."),
    HealthTip(2, TipCategory.HYDRATION, "Начинай день со стакана воды",
              "Выпей стакан воды сразу после пробуждения, чтобы запустить обмен веществ и восполнить потерю жидкости."),
    HealthTip(3, TipCategory.EXERCISE, "Поднимайся по лестнице",
              "Выбирай лестницу вместо лифта. Это простое правило заметно повышает дневную активность."),
    HealthTip(4, TipCategory.SLEEP, "Режим сна",
              "Ложись и вставай в одно и то же время, даже в выходные, чтобы настроить внутренние часы."),
    HealthTip(5, TipCategory.MENTAL, "Глубокое дыхание",
              "Уделяй 5 минут в день дыхательным упражнениям — это снижает стресс и тревожность."),
    HealthTip(6, TipCategory.NUTRITION, "Контроль порций",
              "Используй тарелки поменьше: порции уменьшаются сами, а чувства голода нет."),
    HealthTip(7, TipCategory.EXERCISE, "Двигайся каждый час",
              "Поставь напоминание и каждый час 2-3 минуты двигайся, чтобы компенсировать долгое сидение."),
    HealthTip(8, TipCategory.HYDRATION, "Вода со вкусом",
              "Добавь в воду огурец, лимон или ягоды — пить станет приятнее."),
    HealthTip(9, TipCategory.SLEEP, "Цифровой закат",
              "Убирай экраны за час до сна: синий свет мешает засыпанию."),
    HealthTip(10, TipCategory.MENTAL, "Благодарность",
              "Записывай каждый день 3 вещи, за которые ты благодарен, — это улучшает настроение."),
)


def get_tips(category: Optional[TipCategory] = None) -> list[HealthTip]:
    """Советы категории; None — все советы."""
    if category is None:
        return list(HEALTH_TIPS)
    category = TipCategory(category)
    return [tip for tip in HEALTH_TIPS if tip.category == category]
