"""Rendering of the Mandelbrot set into grayscale pixel buffers."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import MutableSequence, Optional

import numpy as np

from .escape import NOT_ESCAPED, escape_time, escape_times
from .plane import band_points, pixel_to_point

DEFAULT_LIMIT = 255
MAX_LIMIT = 255
DEFAULT_BAND_ROWS = 64
BACKENDS = ("tensor", "scalar")


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of the Mandelbrot set."""

    bounds: tuple[int, int]
    upper_left: complex
    lower_right: complex
    limit: int = DEFAULT_LIMIT

    @property
    def size(self) -> int:
        return self.bounds[0] * self.bounds[1]


def intensity(escape: Optional[int]) -> int:
    """Gray level for an escape time: black inside the set, bright for fast escapes."""

    if escape is None:
        return 0
    return 255 - escape


def intensities(escaped_at: np.ndarray) -> np.ndarray:
    """Vectorized :func:`intensity` over an array of escape iterations."""

    levels = np.where(escaped_at == NOT_ESCAPED, 0, 255 - escaped_at)
    return levels.astype(np.uint8)


def _check_render_args(pixels: MutableSequence[int], bounds: tuple[int, int], limit: int) -> None:
    width, height = bounds
    if width <= 0 or height <= 0:
        raise ValueError(f"image bounds must be positive, got {width}x{height}")
    if len(pixels) != width * height:
        raise ValueError(f"pixel buffer holds {len(pixels)} entries, expected {width} * {height} = {width * height}")
    if not 1 <= limit <= MAX_LIMIT:
        raise ValueError(f"iteration limit must be between 1 and {MAX_LIMIT}, got {limit}")


def render_set(
    pixels: MutableSequence[int],
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    *,
    limit: int = DEFAULT_LIMIT,
) -> None:
    """Fill ``pixels`` row by row, one escape-time evaluation per pixel."""

    _check_render_args(pixels, bounds, limit)
    width, height = bounds

    for row in range(height):
        for col in range(width):
            point = pixel_to_point(bounds, (col, row), upper_left, lower_right)
            pixels[row * width + col] = intensity(escape_time(point, limit))


def split_bands(height: int, band_rows: int) -> list[range]:
    """Partition ``range(height)`` into consecutive bands of at most ``band_rows`` rows."""

    if band_rows <= 0:
        raise ValueError(f"band_rows must be positive, got {band_rows}")
    return [range(top, min(top + band_rows, height)) for top in range(0, height, band_rows)]


def render_bands(
    pixels: MutableSequence[int],
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    *,
    limit: int = DEFAULT_LIMIT,
    band_rows: int = DEFAULT_BAND_ROWS,
    workers: int = 1,
) -> None:
    """Fill ``pixels`` band by band with the batched evaluator.

    Each band of rows owns a disjoint slice of the buffer, so bands can be
    evaluated on ``workers`` threads. The result matches :func:`render_set`.
    """

    _check_render_args(pixels, bounds, limit)
    if workers <= 0:
        raise ValueError(f"workers must be positive, got {workers}")
    width, height = bounds
    bands = split_bands(height, band_rows)

    def render_band(rows: range) -> None:
        re_grid, im_grid = band_points(bounds, rows, upper_left, lower_right)
        levels = intensities(escape_times(re_grid, im_grid, limit))
        pixels[rows.start * width:rows.stop * width] = levels.ravel().tolist()

    if workers == 1:
        for rows in bands:
            render_band(rows)
        return

    with ThreadPoolExecutor(max_workers=workers) as executor:
        # list() re-raises the first failure from any band
        list(executor.map(render_band, bands))


def render_image(
    params: RenderParameters,
    *,
    backend: str = "tensor",
    band_rows: int = DEFAULT_BAND_ROWS,
    workers: int = 1,
) -> bytearray:
    """Allocate a buffer for ``params`` and render into it."""

    if backend not in BACKENDS:
        raise ValueError(f"unknown backend '{backend}'. Valid choices: {', '.join(BACKENDS)}.")

    pixels = bytearray(params.size)
    if backend == "scalar":
        render_set(pixels, params.bounds, params.upper_left, params.lower_right, limit=params.limit)
    else:
        render_bands(
            pixels,
            params.bounds,
            params.upper_left,
            params.lower_right,
            limit=params.limit,
            band_rows=band_rows,
            workers=workers,
        )
    return pixels
