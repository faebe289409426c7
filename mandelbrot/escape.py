"""Escape-time evaluation of the Mandelbrot recurrence ``z <- z**2 + c``."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

ESCAPE_NORM_SQR = 4.0
NOT_ESCAPED = -1


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Return the iteration at which ``c`` escapes, or ``None``.

    The squared magnitude of the current iterate is checked before each
    update, starting from ``z = 0`` at iteration 0. ``None`` means no iterate
    left the radius-2 disc within ``limit`` iterations, so ``c`` is treated as
    a member of the set.
    """

    z_re = 0.0
    z_im = 0.0
    for i in range(limit):
        if z_re * z_re + z_im * z_im > ESCAPE_NORM_SQR:
            return i
        z_re, z_im = z_re * z_re - z_im * z_im + c.real, 2.0 * z_re * z_im + c.imag

    return None


@tf.function
def _escape_step(
    i: tf.Tensor,
    zs_re: tf.Tensor,
    zs_im: tf.Tensor,
    cs_re: tf.Tensor,
    cs_im: tf.Tensor,
    escaped_at: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Check and advance every point that has not escaped yet."""

    norm_sqr = zs_re * zs_re + zs_im * zs_im
    escaping = tf.logical_and(active, norm_sqr > ESCAPE_NORM_SQR)
    escaped_at = tf.where(escaping, i, escaped_at)
    active = tf.logical_and(active, tf.logical_not(escaping))

    re_new = zs_re * zs_re - zs_im * zs_im + cs_re
    im_new = 2.0 * zs_re * zs_im + cs_im
    zs_re = tf.where(active, re_new, zs_re)
    zs_im = tf.where(active, im_new, zs_im)
    return zs_re, zs_im, escaped_at, active


@tf.function
def _escape_run(cs_re: tf.Tensor, cs_im: tf.Tensor, limit: tf.Tensor) -> tf.Tensor:
    """Iterate a whole grid of points using a TensorFlow while loop."""

    limit = tf.cast(limit, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    zs_re = tf.zeros_like(cs_re)
    zs_im = tf.zeros_like(cs_im)
    escaped_at = tf.fill(tf.shape(cs_re), tf.constant(NOT_ESCAPED, dtype=tf.int32))
    active = tf.ones_like(escaped_at, tf.bool)

    def cond(i, zs_re, zs_im, escaped_at, active):
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(active))

    def body(i, zs_re, zs_im, escaped_at, active):
        zs_re, zs_im, escaped_at, active = _escape_step(i, zs_re, zs_im, cs_re, cs_im, escaped_at, active)
        return i + 1, zs_re, zs_im, escaped_at, active

    _, _, _, escaped_at, _ = tf.while_loop(cond, body, (i, zs_re, zs_im, escaped_at, active))
    return escaped_at


def escape_times(c_re: np.ndarray, c_im: np.ndarray, limit: int) -> np.ndarray:
    """Evaluate :func:`escape_time` for a grid of points at once.

    Returns an int32 array shaped like ``c_re`` holding the escape iteration
    of each point, or :data:`NOT_ESCAPED`.
    """

    if c_re.shape != c_im.shape:
        raise ValueError(f"real and imaginary grids differ in shape: {c_re.shape} != {c_im.shape}")
    if c_re.size == 0:
        return np.full(c_re.shape, NOT_ESCAPED, dtype=np.int32)

    with tf.device("/CPU:0"):
        cs_re = tf.convert_to_tensor(c_re, dtype=tf.float64)
        cs_im = tf.convert_to_tensor(c_im, dtype=tf.float64)
        escaped_at = _escape_run(cs_re, cs_im, tf.constant(limit, dtype=tf.int32))

    return escaped_at.numpy()
