"""Mapping between pixel positions and points of the complex plane."""

from __future__ import annotations

import numpy as np


def pixel_to_point(
    bounds: tuple[int, int],
    pixel: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Return the point of the complex plane under ``pixel``.

    ``bounds`` is ``(width, height)`` of the image and ``pixel`` is
    ``(col, row)``. Row 0 is the top edge, so increasing rows move towards
    ``lower_right.imag``.
    """

    width_span = lower_right.real - upper_left.real
    height_span = upper_left.imag - lower_right.imag
    return complex(
        upper_left.real + pixel[0] * width_span / bounds[0],
        upper_left.imag - pixel[1] * height_span / bounds[1],
    )


def band_points(
    bounds: tuple[int, int],
    rows: range,
    upper_left: complex,
    lower_right: complex,
) -> tuple[np.ndarray, np.ndarray]:
    """Sample the points of a band of rows as two float64 grids.

    The grids have shape ``(len(rows), width)`` and hold the real and
    imaginary parts. Values are bit-identical to :func:`pixel_to_point`.
    """

    width, height = bounds
    width_span = np.float64(lower_right.real - upper_left.real)
    height_span = np.float64(upper_left.imag - lower_right.imag)

    cols = np.arange(width, dtype=np.float64)
    row_values = np.arange(rows.start, rows.stop, dtype=np.float64)

    re = np.float64(upper_left.real) + cols * width_span / np.float64(width)
    im = np.float64(upper_left.imag) - row_values * height_span / np.float64(height)

    re_grid, im_grid = np.meshgrid(re, im)
    return re_grid, im_grid
