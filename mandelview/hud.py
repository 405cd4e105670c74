"""Status overlay drawn on top of rendered frames."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont

from .core import ViewStatus

CONTROLS_HINT = "Scroll: zoom at cursor | Click: center | Arrows: pan | +/-: zoom | R: reset"

_FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
)

PANEL_TOP = (18, 22, 40, 210)
PANEL_BOTTOM = (10, 12, 24, 150)
TEXT_FILL = (240, 244, 255, 255)


def load_font(image: PIL.Image.Image, scale: float = 1.0) -> PIL.ImageFont.ImageFont:
    base = max(min(image.size), 1)
    target_size = max(10, int(round(base * 0.028 * scale)))
    for path in _FONT_CANDIDATES:
        font_path = Path(path)
        if font_path.exists():
            try:
                return PIL.ImageFont.truetype(str(font_path), target_size)
            except OSError:
                continue
    return PIL.ImageFont.load_default()


def _vertical_gradient(
    size: tuple[int, int],
    top_color: tuple[int, int, int, int],
    bottom_color: tuple[int, int, int, int],
) -> PIL.Image.Image:
    width, height = max(size[0], 1), max(size[1], 1)
    gradient = PIL.Image.new("RGBA", (width, height))
    for y in range(height):
        ratio = y / (height - 1) if height > 1 else 0.0
        color = tuple(
            int(round(top_color[channel] + (bottom_color[channel] - top_color[channel]) * ratio))
            for channel in range(4)
        )
        gradient.paste(color, [0, y, width, y + 1])
    return gradient


def _rounded_panel(size: tuple[int, int], radius: int) -> PIL.Image.Image:
    gradient = _vertical_gradient(size, PANEL_TOP, PANEL_BOTTOM)
    mask = PIL.Image.new("L", gradient.size, 0)
    corner_radius = min(radius, min(gradient.size) // 2)
    PIL.ImageDraw.Draw(mask).rounded_rectangle(
        [(0, 0), (gradient.width - 1, gradient.height - 1)], radius=corner_radius, fill=255
    )
    transparent = PIL.Image.new("RGBA", gradient.size, (0, 0, 0, 0))
    return PIL.Image.composite(gradient, transparent, mask)


def _text_size(draw: PIL.ImageDraw.ImageDraw, text: str, font: PIL.ImageFont.ImageFont) -> tuple[int, int]:
    bbox = draw.textbbox((0, 0), text, font=font)
    return int(round(bbox[2] - bbox[0])), int(round(bbox[3] - bbox[1]))


def _draw_text_with_shadow(
    draw: PIL.ImageDraw.ImageDraw,
    position: tuple[float, float],
    text: str,
    font: PIL.ImageFont.ImageFont,
    shadow_offset: int,
) -> None:
    shadow = (position[0] + shadow_offset, position[1] + shadow_offset)
    draw.text(shadow, text, font=font, fill=(0, 0, 0, 170))
    draw.text(position, text, font=font, fill=TEXT_FILL)


def annotate_status(
    image: PIL.Image.Image,
    status: ViewStatus,
    hint: str | None = CONTROLS_HINT,
) -> PIL.Image.Image:
    """Overlay the zoom and center readout, plus an optional controls hint."""

    if image.mode != "RGBA":
        image = image.convert("RGBA")

    draw = PIL.ImageDraw.Draw(image, "RGBA")
    font = load_font(image)
    font_size = getattr(font, "size", 12)
    padding = max(6, int(round(font_size * 0.6)))
    spacing = max(3, int(round(font_size * 0.35)))
    shadow_offset = max(1, int(round(font_size * 0.1)))

    lines = status.lines()
    sizes = [_text_size(draw, line, font) for line in lines]
    box_width = max(width for width, _ in sizes) + padding * 2
    box_height = sum(height for _, height in sizes) + spacing * (len(lines) - 1) + padding * 2
    margin = 10

    panel = _rounded_panel((box_width, box_height), max(8, int(round(min(box_width, box_height) * 0.18))))
    image.paste(panel, (margin, margin), panel)

    text_y = margin + padding
    for line, (_, height) in zip(lines, sizes):
        _draw_text_with_shadow(draw, (margin + padding, text_y), line, font, shadow_offset)
        text_y += height + spacing

    if hint:
        hint_font = load_font(image, scale=0.8)
        _, hint_height = _text_size(draw, hint, hint_font)
        _draw_text_with_shadow(
            draw,
            (margin, image.height - hint_height - margin * 2),
            hint,
            hint_font,
            shadow_offset,
        )

    return image


def frame_to_image(frame: np.ndarray, status: ViewStatus | None = None, hint: str | None = None) -> PIL.Image.Image:
    """Wrap an RGB frame in a Pillow image, optionally with the HUD drawn on it."""

    image = PIL.Image.fromarray(np.ascontiguousarray(frame))
    if status is None:
        return image
    return annotate_status(image, status, hint=hint).convert("RGB")
