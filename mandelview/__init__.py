"""Public API for the Mandelbrot viewport core."""

from .controller import (
    Click,
    Event,
    Pan,
    PanDirection,
    Reset,
    ViewportController,
    Zoom,
    ZoomDirection,
    event_for_key,
)
from .core import CoreHandle, ViewStatus, initialize
from .errors import ConfigurationError
from .escape import EscapeTimeEvaluator, iterate
from .palette import DEFAULT_ANCHORS, INSIDE_COLOR, Color, anchors_from_colormap, build_palette, parse_hex_color
from .plane import ComplexPlaneMapper, ComplexPoint, GridSize, ViewState
from .raster import FractalRaster

__all__ = [
    "Click",
    "Color",
    "ComplexPlaneMapper",
    "ComplexPoint",
    "ConfigurationError",
    "CoreHandle",
    "DEFAULT_ANCHORS",
    "EscapeTimeEvaluator",
    "Event",
    "FractalRaster",
    "GridSize",
    "INSIDE_COLOR",
    "Pan",
    "PanDirection",
    "Reset",
    "ViewState",
    "ViewStatus",
    "ViewportController",
    "Zoom",
    "ZoomDirection",
    "anchors_from_colormap",
    "build_palette",
    "event_for_key",
    "initialize",
    "iterate",
    "parse_hex_color",
]
