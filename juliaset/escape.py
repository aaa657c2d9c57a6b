"""Escape-time membership tests for the quadratic map f(z) = z**2 + C."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
import tensorflow as tf

DEFAULT_ITERATIONS = 100
ESCAPE_RADIUS = 2.0

# Stage recorded for points that never escape.
IN_SET = -1


@dataclass(frozen=True)
class EscapeResult:
    """Outcome of iterating a single starting point."""

    in_set: bool
    escape_stage: Optional[int] = None


def is_in_set(z0: complex, c: complex, max_iterations: int = DEFAULT_ITERATIONS) -> EscapeResult:
    """Decide whether ``z0`` belongs to the Julia set of ``z**2 + c``.

    The map is applied at most ``max_iterations`` times. A point whose orbit
    leaves the disc of radius 2 is not a member and its ``escape_stage`` is the
    0-based iteration at which that happened. An orbit that lands on a fixed
    point (an iteration returns exactly the previous value) is a member.
    Longer cycles are not detected; they simply run out the iteration budget.
    """

    re, im = float(z0.real), float(z0.imag)
    c_re, c_im = float(c.real), float(c.imag)

    for i in range(max_iterations):
        next_re = re * re - im * im + c_re
        next_im = 2.0 * re * im + c_im

        if math.sqrt(next_re * next_re + next_im * next_im) > ESCAPE_RADIUS:
            return EscapeResult(in_set=False, escape_stage=i)

        if next_re == re and next_im == im:
            return EscapeResult(in_set=True)

        re, im = next_re, next_im

    return EscapeResult(in_set=True)


def _julia_step(
    i: tf.Tensor,
    zr: tf.Tensor,
    zi: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    stages: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every still-active point by one application of the map."""

    # Same operation order as is_in_set so both paths round identically.
    next_zr = zr * zr - zi * zi + c_re
    next_zi = tf.constant(2.0, dtype=tf.float64) * zr * zi + c_im

    distance = tf.sqrt(next_zr * next_zr + next_zi * next_zi)
    escaped = tf.logical_and(active, distance > tf.constant(ESCAPE_RADIUS, dtype=tf.float64))
    stationary = tf.logical_and(
        tf.logical_and(active, tf.logical_not(escaped)),
        tf.logical_and(tf.equal(next_zr, zr), tf.equal(next_zi, zi)),
    )

    stages = tf.where(escaped, tf.fill(tf.shape(stages), i), stages)
    zr = tf.where(active, next_zr, zr)
    zi = tf.where(active, next_zi, zi)
    active = tf.logical_and(active, tf.logical_not(tf.logical_or(escaped, stationary)))
    return zr, zi, stages, active


@tf.function(
    input_signature=(
        tf.TensorSpec(shape=[None, None], dtype=tf.float64),
        tf.TensorSpec(shape=[None, None], dtype=tf.float64),
        tf.TensorSpec(shape=[], dtype=tf.float64),
        tf.TensorSpec(shape=[], dtype=tf.float64),
        tf.TensorSpec(shape=[], dtype=tf.int32),
    )
)
def _julia_run(zr: tf.Tensor, zi: tf.Tensor, c_re: tf.Tensor, c_im: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Iterate the map over a grid of starting points using a while loop."""

    i = tf.constant(0, dtype=tf.int32)
    stages = tf.fill(tf.shape(zr), tf.constant(IN_SET, dtype=tf.int32))
    active = tf.ones_like(zr, dtype=tf.bool)

    def cond(i: tf.Tensor, zr: tf.Tensor, zi: tf.Tensor, stages: tf.Tensor, active: tf.Tensor) -> tf.Tensor:
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i: tf.Tensor, zr: tf.Tensor, zi: tf.Tensor, stages: tf.Tensor, active: tf.Tensor):
        zr, zi, stages, active = _julia_step(i, zr, zi, c_re, c_im, stages, active)
        return i + 1, zr, zi, stages, active

    _, _, _, stages, _ = tf.while_loop(cond, body, (i, zr, zi, stages, active))
    return stages


def escape_stages(real: np.ndarray, imag: np.ndarray, c: complex, max_iterations: int = DEFAULT_ITERATIONS) -> np.ndarray:
    """Vectorised :func:`is_in_set` over 2-D grids of starting points.

    ``real`` and ``imag`` hold the components of each starting point. The
    result has the same shape, with the escape stage of each point or
    ``IN_SET`` for members.
    """

    with tf.device("/CPU:0"):
        zr = tf.convert_to_tensor(np.asarray(real, dtype=np.float64))
        zi = tf.convert_to_tensor(np.asarray(imag, dtype=np.float64))
        stages = _julia_run(
            zr,
            zi,
            tf.constant(float(c.real), dtype=tf.float64),
            tf.constant(float(c.imag), dtype=tf.float64),
            tf.constant(int(max_iterations), dtype=tf.int32),
        )
    return stages.numpy()
