"""Escape-time iteration of z -> z**2 + c."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .plane import ComplexPoint

ESCAPE_RADIUS_SQUARED = 4.0


def iterate(c: ComplexPoint | complex, max_iterations: int) -> int:
    """Return how many iterations complete before the orbit of ``c`` escapes.

    The result lies in ``[0, max_iterations]``; ``max_iterations`` means the
    orbit stayed bounded and the point is taken to be in the set.
    """

    if isinstance(c, ComplexPoint):
        c_real, c_imaginary = c.real, c.imaginary
    else:
        c_real, c_imaginary = c.real, c.imag

    z_real = 0.0
    z_imaginary = 0.0
    for iteration in range(max_iterations):
        next_real = z_real * z_real - z_imaginary * z_imaginary + c_real
        next_imaginary = 2.0 * z_real * z_imaginary + c_imaginary
        if next_real * next_real + next_imaginary * next_imaginary > ESCAPE_RADIUS_SQUARED:
            return iteration
        z_real = next_real
        z_imaginary = next_imaginary
    return max_iterations


@tf.function
def _escape_step(
    z_real: tf.Tensor,
    z_imag: tf.Tensor,
    c_real: tf.Tensor,
    c_imag: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every still-bounded orbit by one step."""

    next_real = z_real * z_real - z_imag * z_imag + c_real
    next_imag = 2.0 * z_real * z_imag + c_imag
    escaped = next_real * next_real + next_imag * next_imag > ESCAPE_RADIUS_SQUARED
    active = tf.logical_and(active, tf.logical_not(escaped))
    z_real = tf.where(active, next_real, z_real)
    z_imag = tf.where(active, next_imag, z_imag)
    counts = counts + tf.cast(active, tf.int32)
    return z_real, z_imag, counts, active


@tf.function
def _escape_run(c_real: tf.Tensor, c_imag: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Iterate until every orbit escaped or ``max_iterations`` steps ran."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    z_real = tf.zeros_like(c_real)
    z_imag = tf.zeros_like(c_imag)
    counts = tf.zeros(tf.shape(c_real), tf.int32)
    active = tf.ones(tf.shape(c_real), tf.bool)

    def cond(i, z_real, z_imag, counts, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, z_real, z_imag, counts, active):
        z_real, z_imag, counts, active = _escape_step(z_real, z_imag, c_real, c_imag, counts, active)
        return i + 1, z_real, z_imag, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, z_real, z_imag, counts, active))
    return counts


class EscapeTimeEvaluator:
    """Evaluate escape counts for single points or whole pixel grids."""

    def __init__(self, device: Optional[str] = None) -> None:
        self.device = device if device is not None else "/CPU:0"

    def iterate(self, c: ComplexPoint | complex, max_iterations: int) -> int:
        return iterate(c, max_iterations)

    def iterate_grid(self, reals: np.ndarray, imaginaries: np.ndarray, max_iterations: int) -> np.ndarray:
        """Return an ``(len(imaginaries), len(reals))`` int32 array of escape counts."""

        reals = np.asarray(reals, dtype=np.float64)
        imaginaries = np.asarray(imaginaries, dtype=np.float64)
        if reals.size == 0 or imaginaries.size == 0 or max_iterations <= 0:
            return np.zeros((imaginaries.size, reals.size), dtype=np.int32)

        with tf.device(self.device):
            x_tf = tf.convert_to_tensor(reals, dtype=tf.float64)
            y_tf = tf.convert_to_tensor(imaginaries, dtype=tf.float64)
            c_real, c_imag = tf.meshgrid(x_tf, y_tf)
            counts = _escape_run(c_real, c_imag, tf.constant(max_iterations, dtype=tf.int32))
        return counts.numpy()
