"""Форматирование чисел для сообщений и графиков."""


def format_value(value: float) -> str:
    """70.0 -> '70', 7.5 -> '7.5'."""
    return str(int(value)) if float(value).is_integer() else f"{value:.1f}"
