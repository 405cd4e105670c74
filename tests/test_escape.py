import numpy as np
import pytest

from mandelview.escape import EscapeTimeEvaluator, iterate
from mandelview.plane import ComplexPlaneMapper, ComplexPoint


def test_known_points():
    assert iterate(ComplexPoint(0.0, 0.0), 256) == 256
    assert iterate(ComplexPoint(2.0, 0.0), 256) == 0
    assert iterate(ComplexPoint(-1.0, 0.0), 256) == 256


def test_accepts_python_complex():
    assert iterate(0j, 50) == 50
    assert iterate(2 + 0j, 50) == 0


def test_counts_completed_iterations_before_escape():
    # c = 1: z1 = 1, z2 = 2, z3 = 5 escapes on the third step
    assert iterate(1 + 0j, 256) == 2
    # c = i: period-2 cycle, stays bounded
    assert iterate(1j, 256) == 256


@pytest.mark.parametrize("c", [0.3 + 0.5j, -2.1 + 0j, 0.25 + 0j, -0.75 + 0.1j, 10 + 10j, -1.25 + 0j])
@pytest.mark.parametrize("max_iterations", [0, 1, 16, 256])
def test_result_is_bounded(c, max_iterations):
    assert 0 <= iterate(c, max_iterations) <= max_iterations


def test_grid_matches_scalar_iteration():
    mapper = ComplexPlaneMapper(24, 18)
    mapper.apply_zoom_at_cursor(1.5, 7, 11)
    reals, imaginaries = mapper.axes()

    counts = EscapeTimeEvaluator().iterate_grid(reals, imaginaries, 64)

    assert counts.shape == (18, 24)
    expected = np.array(
        [[iterate(ComplexPoint(r, i), 64) for r in reals] for i in imaginaries],
        dtype=np.int32,
    )
    np.testing.assert_array_equal(counts, expected)


def test_grid_known_points():
    evaluator = EscapeTimeEvaluator()
    counts = evaluator.iterate_grid(np.array([0.0, 2.0, -1.0, 1.0]), np.array([0.0]), 256)

    np.testing.assert_array_equal(counts, [[256, 0, 256, 2]])


def test_grid_with_empty_axes():
    counts = EscapeTimeEvaluator().iterate_grid(np.array([]), np.array([0.0, 1.0]), 10)

    assert counts.shape == (2, 0)


def test_evaluator_scalar_method_delegates():
    assert EscapeTimeEvaluator().iterate(ComplexPoint(0.0, 0.0), 12) == 12
