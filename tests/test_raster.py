import numpy as np
import pytest

from mandelview.errors import ConfigurationError
from mandelview.escape import iterate
from mandelview.palette import DEFAULT_ANCHORS, INSIDE_COLOR, build_palette
from mandelview.plane import ComplexPlaneMapper
from mandelview.raster import FractalRaster

MAX_ITERATIONS = 32


@pytest.fixture
def raster(counting_evaluator):
    mapper = ComplexPlaneMapper(16, 12)
    palette = build_palette(DEFAULT_ANCHORS, MAX_ITERATIONS)
    return FractalRaster(mapper, counting_evaluator, palette, MAX_ITERATIONS)


def test_starts_dirty_and_renders_full_frame(raster, counting_evaluator):
    assert raster.dirty

    frame = raster.render()

    assert frame.shape == (12, 16, 3)
    assert frame.dtype == np.uint8
    assert not raster.dirty
    assert raster.render_count == 1
    assert counting_evaluator.point_calls == 16 * 12


def test_pixels_follow_palette_and_inside_color(raster):
    palette = build_palette(DEFAULT_ANCHORS, MAX_ITERATIONS)
    frame = raster.render()

    for y in range(12):
        for x in range(16):
            n = iterate(raster.mapper.pixel_to_complex(x, y), MAX_ITERATIONS)
            expected = INSIDE_COLOR if n == MAX_ITERATIONS else palette[n]
            assert tuple(frame[y, x]) == tuple(expected)


def test_frame_contains_inside_and_escaped_pixels(raster):
    raster.render()
    counts = raster.last_counts

    assert (counts == MAX_ITERATIONS).any()
    assert (counts < MAX_ITERATIONS).any()


def test_clean_render_returns_cache_without_evaluating(raster, counting_evaluator):
    first = raster.render()
    snapshot = np.array(first, copy=True)

    second = raster.render()

    assert counting_evaluator.grid_calls == 1
    assert raster.render_count == 1
    assert second is first
    np.testing.assert_array_equal(second, snapshot)


def test_invalidate_triggers_recompute_in_place(raster, counting_evaluator):
    first = raster.render()
    before = np.array(first, copy=True)

    raster.mapper.apply_zoom_at_cursor(4.0, 3, 3)
    raster.invalidate()
    second = raster.render()

    assert counting_evaluator.grid_calls == 2
    assert second is first
    assert not np.array_equal(before, second)


def test_frame_is_read_only(raster):
    frame = raster.render()

    with pytest.raises(ValueError):
        frame[0, 0] = (1, 2, 3)


def test_rejects_palette_of_wrong_size(counting_evaluator):
    mapper = ComplexPlaneMapper(4, 4)
    with pytest.raises(ConfigurationError):
        FractalRaster(mapper, counting_evaluator, build_palette(DEFAULT_ANCHORS, 10), 11)


def test_default_evaluator_renders_same_frame(counting_evaluator):
    from mandelview.escape import EscapeTimeEvaluator

    palette = build_palette(DEFAULT_ANCHORS, MAX_ITERATIONS)
    scalar = FractalRaster(ComplexPlaneMapper(20, 15), counting_evaluator, palette, MAX_ITERATIONS)
    vectorized = FractalRaster(ComplexPlaneMapper(20, 15), EscapeTimeEvaluator(), palette, MAX_ITERATIONS)

    np.testing.assert_array_equal(scalar.render(), vectorized.render())
