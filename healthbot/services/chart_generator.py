"""Генератор графика прогресса (PNG)."""
import io
from PIL import Image, ImageDraw, ImageFont
import logging
from healthbot.services.formatting import format_value

logger = logging.getLogger(__name__)

FONT_PATH = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"
FONT_BOLD_PATH = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"


def _load_fonts():
    try:
        return (
            ImageFont.truetype(FONT_BOLD_PATH, 16),
            ImageFont.truetype(FONT_PATH, 12),
        )
    except OSError:
        default = ImageFont.load_default()
        return default, default


def generate_trend_chart(
    series: list[tuple[str, float]], title: str, unit: str, color: str = "#4facfe"
) -> bytes | None:
    """
    Рисует линейный график по ряду (подпись, значение).

    Единица измерения выводится в заголовке: "Вода, мл".

    Returns:
        PNG в байтах или None, если нарисовать не удалось.
    """
    try:
        width = 700
        height = 380
        padding_left = 60
        padding_right = 25
        padding_top = 50
        padding_bottom = 45

        img = Image.new("RGB", (width, height), color="white")
        draw = ImageDraw.Draw(img)
        font_title, font_label = _load_fonts()

        color_text = "#333333"
        color_grid = "#e0e0e0"

        # Заголовок
        draw.text((padding_left, 15), f"{title}, {unit}", font=font_title, fill=color_text)

        plot_left = padding_left
        plot_right = width - padding_right
        plot_top = padding_top
        plot_bottom = height - padding_bottom

        values = [value for _, value in series]
        max_value = max(values) if values and max(values) > 0 else 1

        # Сетка и подписи оси Y (5 делений)
        for i in range(5):
            y = plot_bottom - (plot_bottom - plot_top) * i / 4
            draw.line([(plot_left, y), (plot_right, y)], fill=color_grid, width=1)
            draw.text((8, y - 7), format_value(max_value * i / 4), font=font_label, fill=color_text)

        # Точки
        count = len(series)
        step = (plot_right - plot_left) / (count - 1) if count > 1 else 0
        points = []
        for i, value in enumerate(values):
            x = plot_left + step * i
            y = plot_bottom - (plot_bottom - plot_top) * value / max_value
            points.append((x, y))

        if len(points) > 1:
            draw.line(points, fill=color, width=3)
        for x, y in points:
            draw.ellipse([(x - 4, y - 4), (x + 4, y + 4)], fill=color)

        # Подписи оси X (для месяца каждая пятая)
        label_every = 1 if count <= 7 else 5
        for i, (label, _) in enumerate(series):
            if i % label_every and i != count - 1:
                continue
            x = plot_left + step * i
            draw.text((x - 8, plot_bottom + 12), label, font=font_label, fill=color_text)

        # Рамка
        draw.rectangle([(0, 0), (width - 1, height - 1)], outline=color_grid, width=2)

        img_bytes = io.BytesIO()
        img.save(img_bytes, format="PNG")
        img_bytes.seek(0)

        return img_bytes.getvalue()

    except Exception as e:
        logger.error(f"Ошибка генерации графика: {e}")
        return None
