"""Color gradients that map escape counts to RGB values."""

from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np
from matplotlib import colormaps as _mpl_colormaps

from .errors import ConfigurationError


class Color(NamedTuple):
    r: int
    g: int
    b: int


INSIDE_COLOR = Color(0, 0, 0)

DEFAULT_ANCHORS: tuple[Color, ...] = (
    Color(0x00, 0x00, 0x11),
    Color(0x00, 0x00, 0x44),
    Color(0x00, 0x00, 0x88),
    Color(0x00, 0x44, 0xCC),
    Color(0x00, 0x88, 0xFF),
    Color(0x44, 0xCC, 0xFF),
    Color(0x88, 0xFF, 0xCC),
    Color(0xCC, 0xFF, 0x88),
    Color(0xFF, 0xCC, 0x44),
    Color(0xFF, 0x88, 0x00),
    Color(0xFF, 0x44, 0x00),
    Color(0xCC, 0x00, 0x00),
    Color(0xFF, 0xFF, 0xFF),
)


def parse_hex_color(text: str) -> Color:
    """Parse ``#RRGGBB`` (leading ``#`` optional) into a :class:`Color`."""

    hex_color = text.strip().lstrip('#')
    if len(hex_color) != 6:
        raise ConfigurationError(f"color '{text}' must be in the form #RRGGBB.")
    try:
        return Color(*(int(hex_color[i:i + 2], 16) for i in (0, 2, 4)))
    except ValueError as exc:
        raise ConfigurationError(f"color '{text}' must contain only hexadecimal digits.") from exc


def anchors_from_colormap(name: str, count: int = 13) -> tuple[Color, ...]:
    """Sample ``count`` evenly spaced anchors from a matplotlib colormap."""

    if count < 2:
        raise ConfigurationError("a colormap needs at least 2 anchors.")
    try:
        cmap = _mpl_colormaps[name]
    except KeyError as exc:
        raise ConfigurationError(f"unknown matplotlib colormap '{name}'.") from exc
    rgba = np.asarray(cmap(np.linspace(0.0, 1.0, count)), dtype=np.float64)
    channels = np.uint8(np.clip(rgba[:, :3] * 255, 0, 255))
    return tuple(Color(int(r), int(g), int(b)) for r, g, b in channels)


def _validate_anchors(anchors: Sequence[Color]) -> tuple[Color, ...]:
    if len(anchors) < 2:
        raise ConfigurationError(f"a palette needs at least 2 anchor colors, got {len(anchors)}.")
    checked = []
    for anchor in anchors:
        if len(anchor) != 3 or any(not 0 <= int(channel) <= 255 for channel in anchor):
            raise ConfigurationError(f"anchor {anchor!r} is not an RGB triple in 0..255.")
        checked.append(Color(*(int(channel) for channel in anchor)))
    return tuple(checked)


def interpolate_color(anchors: Sequence[Color], position: float) -> Color:
    if position <= 0.0:
        return anchors[0]
    if position >= 1.0:
        return anchors[-1]

    scaled = position * (len(anchors) - 1)
    index = int(scaled)
    fraction = scaled - index
    if index >= len(anchors) - 1:
        return anchors[-1]

    start = anchors[index]
    end = anchors[index + 1]
    # int() truncates; channels are non-negative so this is a floor
    return Color(*(int(a + fraction * (b - a)) for a, b in zip(start, end)))


def build_palette(anchors: Sequence[Color], size: int) -> tuple[Color, ...]:
    """Build a ``size`` entry gradient by linear interpolation between ``anchors``.

    Entry ``i`` sits at ``i / size`` along the gradient, so entry 0 is exactly
    the first anchor while the final entry approaches but does not always
    reach the last one.
    """

    if size <= 0:
        raise ConfigurationError(f"palette size must be positive, got {size}.")
    checked = _validate_anchors(anchors)
    return tuple(interpolate_color(checked, i / size) for i in range(size))


def palette_to_array(palette: Sequence[Color]) -> np.ndarray:
    """Pack a palette into a ``(len, 3)`` uint8 lookup table."""

    return np.array(palette, dtype=np.uint8).reshape(len(palette), 3)
