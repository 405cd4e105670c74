"""Translate discrete viewer input into view mutations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from .errors import ConfigurationError
from .plane import ComplexPlaneMapper
from .raster import FractalRaster

ZOOM_FACTOR = 1.5
PAN_STEP = 0.1


class ZoomDirection(Enum):
    IN = "in"
    OUT = "out"


class PanDirection(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Zoom:
    direction: ZoomDirection
    cursor: Optional[tuple[float, float]] = None


@dataclass(frozen=True)
class Click:
    x: float
    y: float


@dataclass(frozen=True)
class Pan:
    direction: PanDirection


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[Zoom, Click, Pan, Reset]

# unit (real, imaginary) offsets; the imaginary axis grows downward with the pixel rows
_PAN_VECTORS = {
    PanDirection.UP: (0.0, -1.0),
    PanDirection.DOWN: (0.0, 1.0),
    PanDirection.LEFT: (-1.0, 0.0),
    PanDirection.RIGHT: (1.0, 0.0),
}

_KEY_BINDINGS = {
    "r": Reset(),
    "R": Reset(),
    "+": Zoom(ZoomDirection.IN),
    "=": Zoom(ZoomDirection.IN),
    "-": Zoom(ZoomDirection.OUT),
    "up": Pan(PanDirection.UP),
    "down": Pan(PanDirection.DOWN),
    "left": Pan(PanDirection.LEFT),
    "right": Pan(PanDirection.RIGHT),
}


def event_for_key(key: Optional[str]) -> Optional[Event]:
    """Return the event bound to a keyboard key name, or ``None``."""

    if key is None:
        return None
    return _KEY_BINDINGS.get(key)


class ViewportController:
    """Apply :data:`Event` values to a mapper and keep the raster in sync."""

    def __init__(
        self,
        mapper: ComplexPlaneMapper,
        raster: FractalRaster,
        *,
        zoom_factor: float = ZOOM_FACTOR,
        pan_step: float = PAN_STEP,
        on_redraw: Optional[Callable[[], None]] = None,
    ) -> None:
        if zoom_factor <= 0:
            raise ConfigurationError(f"zoom factor must be positive, got {zoom_factor}.")
        if pan_step <= 0:
            raise ConfigurationError(f"pan step must be positive, got {pan_step}.")
        self.mapper = mapper
        self.raster = raster
        self.zoom_factor = float(zoom_factor)
        self.pan_step = float(pan_step)
        self.on_redraw = on_redraw

    def handle(self, event: Event) -> None:
        if isinstance(event, Zoom):
            self._zoom(event)
        elif isinstance(event, Click):
            self.mapper.set_center(self.mapper.pixel_to_complex(event.x, event.y))
        elif isinstance(event, Pan):
            step = self.pan_step / self.mapper.view.zoom
            d_real, d_imaginary = _PAN_VECTORS[event.direction]
            self.mapper.pan(d_real * step, d_imaginary * step)
        elif isinstance(event, Reset):
            self.mapper.reset()
        else:
            raise TypeError(f"unsupported viewport event: {event!r}")

        self.raster.invalidate()
        if self.on_redraw is not None:
            self.on_redraw()

    def _zoom(self, event: Zoom) -> None:
        factor = self.zoom_factor if event.direction is ZoomDirection.IN else 1.0 / self.zoom_factor
        if event.cursor is None:
            x, y = self.mapper.width / 2, self.mapper.height / 2
        else:
            x, y = event.cursor
        self.mapper.apply_zoom_at_cursor(factor, x, y)
