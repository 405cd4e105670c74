"""Embeddable facade used by host shells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from .controller import (
    PAN_STEP,
    ZOOM_FACTOR,
    Click,
    Event,
    Pan,
    PanDirection,
    Reset,
    ViewportController,
    Zoom,
    ZoomDirection,
)
from .errors import ConfigurationError
from .escape import EscapeTimeEvaluator
from .palette import DEFAULT_ANCHORS, Color, build_palette
from .plane import ComplexPlaneMapper
from .raster import FractalRaster
from .verbosity import log

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_MAX_ITERATIONS = 256


@dataclass(frozen=True)
class ViewStatus:
    """Snapshot of the view for on-screen display."""

    zoom: float
    center_real: float
    center_imaginary: float

    def zoom_text(self) -> str:
        return f"Zoom: {self.zoom:.2e}"

    def center_text(self) -> str:
        return f"Center: ({self.center_real:.6f}, {self.center_imaginary:.6f})"

    def lines(self) -> list[str]:
        return [self.zoom_text(), self.center_text()]


class CoreHandle:
    """Bundle the mapper, raster and controller behind one event interface."""

    def __init__(self, mapper: ComplexPlaneMapper, raster: FractalRaster, controller: ViewportController) -> None:
        self.mapper = mapper
        self.raster = raster
        self.controller = controller

    @property
    def width(self) -> int:
        return self.mapper.width

    @property
    def height(self) -> int:
        return self.mapper.height

    def handle(self, event: Event) -> None:
        self.controller.handle(event)

    def handle_zoom(
        self,
        direction: ZoomDirection | str,
        cursor_x: Optional[float] = None,
        cursor_y: Optional[float] = None,
    ) -> None:
        cursor = None if cursor_x is None or cursor_y is None else (cursor_x, cursor_y)
        self.handle(Zoom(ZoomDirection(direction), cursor))

    def handle_click(self, x: float, y: float) -> None:
        self.handle(Click(x, y))

    def handle_pan(self, direction: PanDirection | str) -> None:
        self.handle(Pan(PanDirection(direction)))

    def handle_reset(self) -> None:
        self.handle(Reset())

    def get_frame(self) -> np.ndarray:
        return self.raster.render()

    def get_status(self) -> ViewStatus:
        view = self.mapper.view
        return ViewStatus(zoom=view.zoom, center_real=view.center_real, center_imaginary=view.center_imaginary)


def initialize(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    anchor_colors: Sequence[Color] = DEFAULT_ANCHORS,
    *,
    zoom_factor: float = ZOOM_FACTOR,
    pan_step: float = PAN_STEP,
    lock_aspect: bool = False,
    evaluator: Optional[EscapeTimeEvaluator] = None,
    on_redraw: Optional[Callable[[], None]] = None,
) -> CoreHandle:
    """Validate the configuration and wire up a ready-to-render core.

    Raises :class:`ConfigurationError` for fewer than two anchors,
    non-positive dimensions, iteration limit, zoom factor or pan step.
    """

    if len(anchor_colors) < 2:
        raise ConfigurationError(f"at least 2 anchor colors are required, got {len(anchor_colors)}.")
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"grid dimensions must be positive, got {width}x{height}.")
    if max_iterations <= 0:
        raise ConfigurationError(f"max_iterations must be positive, got {max_iterations}.")
    if zoom_factor <= 0:
        raise ConfigurationError(f"zoom factor must be positive, got {zoom_factor}.")
    if pan_step <= 0:
        raise ConfigurationError(f"pan step must be positive, got {pan_step}.")

    palette = build_palette(anchor_colors, max_iterations)
    mapper = ComplexPlaneMapper(width, height, lock_aspect=lock_aspect)
    raster = FractalRaster(mapper, evaluator or EscapeTimeEvaluator(), palette, max_iterations)
    controller = ViewportController(
        mapper,
        raster,
        zoom_factor=zoom_factor,
        pan_step=pan_step,
        on_redraw=on_redraw,
    )
    log(f"Core ready: {width}x{height}, {max_iterations} iterations, {len(anchor_colors)} anchors")
    return CoreHandle(mapper, raster, controller)
