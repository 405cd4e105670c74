"""Full-frame rasterization with a dirty-flag cache."""

from __future__ import annotations

import time
from typing import Sequence

import numpy as np

from .errors import ConfigurationError
from .escape import EscapeTimeEvaluator
from .palette import INSIDE_COLOR, Color, palette_to_array
from .plane import ComplexPlaneMapper
from .verbosity import log


class FractalRaster:
    """Produce the RGB pixel buffer for the mapper's current view.

    The buffer is recomputed only after :meth:`invalidate`; otherwise
    :meth:`render` hands back the cached frame. Callers get a read-only view
    of a buffer that later passes overwrite in place.
    """

    def __init__(
        self,
        mapper: ComplexPlaneMapper,
        evaluator: EscapeTimeEvaluator,
        palette: Sequence[Color],
        max_iterations: int,
    ) -> None:
        if max_iterations <= 0:
            raise ConfigurationError(f"max_iterations must be positive, got {max_iterations}.")
        if len(palette) != max_iterations:
            raise ConfigurationError(
                f"palette has {len(palette)} entries but max_iterations is {max_iterations}."
            )
        self.mapper = mapper
        self.evaluator = evaluator
        self.max_iterations = int(max_iterations)

        # one extra row so the in-set count indexes the sentinel color
        lookup = np.empty((self.max_iterations + 1, 3), dtype=np.uint8)
        lookup[:-1] = palette_to_array(palette)
        lookup[-1] = INSIDE_COLOR
        self._lookup = lookup

        self._buffer = np.zeros((mapper.height, mapper.width, 3), dtype=np.uint8)
        self._frame = self._buffer.view()
        self._frame.flags.writeable = False
        self._dirty = True
        self.render_count = 0
        self.last_counts: np.ndarray | None = None

    @property
    def dirty(self) -> bool:
        return self._dirty

    def invalidate(self) -> None:
        self._dirty = True

    def render(self) -> np.ndarray:
        if not self._dirty:
            return self._frame

        view = self.mapper.view
        log("Rendering frame - zoom: {0:.2e}".format(view.zoom))
        started = time.perf_counter()

        reals, imaginaries = self.mapper.axes(view)
        counts = np.asarray(self.evaluator.iterate_grid(reals, imaginaries, self.max_iterations))
        counts = np.clip(counts, 0, self.max_iterations)
        np.copyto(self._buffer, self._lookup[counts])

        self.last_counts = counts
        self.render_count += 1
        self._dirty = False
        log("Frame {0} done in {1:.3f}s".format(self.render_count, time.perf_counter() - started))
        return self._frame
