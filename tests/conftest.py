import numpy as np
import pytest

from mandelview.escape import EscapeTimeEvaluator, iterate
from mandelview.plane import ComplexPoint


class CountingEvaluator(EscapeTimeEvaluator):
    """Scalar evaluator that records how often it is asked for a frame."""

    def __init__(self):
        super().__init__()
        self.grid_calls = 0
        self.point_calls = 0

    def iterate(self, c, max_iterations):
        self.point_calls += 1
        return iterate(c, max_iterations)

    def iterate_grid(self, reals, imaginaries, max_iterations):
        self.grid_calls += 1
        return np.array(
            [[self.iterate(ComplexPoint(r, i), max_iterations) for r in reals] for i in imaginaries],
            dtype=np.int32,
        )


@pytest.fixture
def counting_evaluator():
    return CountingEvaluator()
