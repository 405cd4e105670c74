"""Mapping between the pixel grid and the complex plane."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

from .errors import ConfigurationError

BASE_WIDTH = 4.0
BASE_HEIGHT = 3.0


@dataclass(frozen=True)
class ComplexPoint:
    real: float
    imaginary: float

    @classmethod
    def from_complex(cls, value: complex) -> "ComplexPoint":
        return cls(float(value.real), float(value.imag))

    def __complex__(self) -> complex:
        return complex(self.real, self.imaginary)

    def __add__(self, other: "ComplexPoint") -> "ComplexPoint":
        return ComplexPoint(self.real + other.real, self.imaginary + other.imaginary)

    def __sub__(self, other: "ComplexPoint") -> "ComplexPoint":
        return ComplexPoint(self.real - other.real, self.imaginary - other.imaginary)


@dataclass(frozen=True)
class ViewState:
    """Center and zoom level of the visible window into the complex plane."""

    center_real: float = -0.5
    center_imaginary: float = 0.0
    zoom: float = 1.0

    @property
    def center(self) -> ComplexPoint:
        return ComplexPoint(self.center_real, self.center_imaginary)


DEFAULT_VIEW = ViewState()


@dataclass(frozen=True)
class GridSize:
    width: int
    height: int


class ComplexPlaneMapper:
    """Own the :class:`ViewState` and convert between pixels and plane points.

    The view is replaced, never mutated, so a reference obtained from
    :attr:`view` is a consistent snapshot for a whole render pass.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        base_width: float = BASE_WIDTH,
        base_height: float | None = None,
        lock_aspect: bool = False,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"grid dimensions must be positive, got {width}x{height}.")
        if base_width <= 0:
            raise ConfigurationError(f"base width must be positive, got {base_width}.")
        self.grid = GridSize(int(width), int(height))
        self.base_width = float(base_width)
        if lock_aspect:
            self.base_height = self.base_width * self.grid.height / self.grid.width
        elif base_height is not None:
            if base_height <= 0:
                raise ConfigurationError(f"base height must be positive, got {base_height}.")
            self.base_height = float(base_height)
        else:
            self.base_height = BASE_HEIGHT
        self._view = DEFAULT_VIEW

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def plane_size(self, view: ViewState | None = None) -> tuple[float, float]:
        view = self._view if view is None else view
        return self.base_width / view.zoom, self.base_height / view.zoom

    def _origin(self, view: ViewState) -> tuple[float, float, float, float]:
        plane_width, plane_height = self.plane_size(view)
        left = view.center_real - plane_width / 2.0
        top = view.center_imaginary - plane_height / 2.0
        return left, top, plane_width, plane_height

    def pixel_to_complex(self, x: float, y: float, view: ViewState | None = None) -> ComplexPoint:
        left, top, plane_width, plane_height = self._origin(self._view if view is None else view)
        real = left + (x / self.grid.width) * plane_width
        imaginary = top + (y / self.grid.height) * plane_height
        return ComplexPoint(real, imaginary)

    def complex_to_pixel(self, point: ComplexPoint, view: ViewState | None = None) -> tuple[float, float]:
        left, top, plane_width, plane_height = self._origin(self._view if view is None else view)
        x = (point.real - left) / plane_width * self.grid.width
        y = (point.imaginary - top) / plane_height * self.grid.height
        return x, y

    def axes(self, view: ViewState | None = None) -> tuple[np.ndarray, np.ndarray]:
        """Return the real coordinate of every column and imaginary of every row.

        Uses the same float64 operations as :meth:`pixel_to_complex`, so each
        entry matches the scalar mapping exactly.
        """

        left, top, plane_width, plane_height = self._origin(self._view if view is None else view)
        columns = np.arange(self.grid.width, dtype=np.float64)
        rows = np.arange(self.grid.height, dtype=np.float64)
        reals = np.float64(left) + (columns / np.float64(self.grid.width)) * np.float64(plane_width)
        imaginaries = np.float64(top) + (rows / np.float64(self.grid.height)) * np.float64(plane_height)
        return reals, imaginaries

    def apply_zoom_at_cursor(self, factor: float, x: float, y: float) -> None:
        """Scale the zoom by ``factor`` while keeping the point under ``(x, y)`` fixed."""

        if factor <= 0:
            raise ConfigurationError(f"zoom factor must be positive, got {factor}.")
        before = self.pixel_to_complex(x, y)
        self._view = replace(self._view, zoom=self._view.zoom * factor)
        # sampled with the new zoom and the old center
        after = self.pixel_to_complex(x, y)
        self._view = replace(
            self._view,
            center_real=self._view.center_real + (before.real - after.real),
            center_imaginary=self._view.center_imaginary + (before.imaginary - after.imaginary),
        )

    def set_center(self, point: ComplexPoint) -> None:
        self._view = replace(self._view, center_real=point.real, center_imaginary=point.imaginary)

    def pan(self, d_real: float, d_imaginary: float) -> None:
        self._view = replace(
            self._view,
            center_real=self._view.center_real + d_real,
            center_imaginary=self._view.center_imaginary + d_imaginary,
        )

    def set_zoom(self, zoom: float) -> None:
        if zoom <= 0:
            raise ConfigurationError(f"zoom must be positive, got {zoom}.")
        self._view = replace(self._view, zoom=float(zoom))

    def reset(self) -> None:
        self._view = DEFAULT_VIEW
