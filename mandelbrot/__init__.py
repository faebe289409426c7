"""Public API for Mandelbrot rendering utilities."""

from .escape import NOT_ESCAPED, escape_time, escape_times
from .imaging import LOSSLESS_FORMATS, save_image, to_image
from .parsing import parse_complex, parse_dimensions, parse_pair
from .plane import band_points, pixel_to_point
from .renderer import (
    BACKENDS,
    DEFAULT_LIMIT,
    RenderParameters,
    intensity,
    render_bands,
    render_image,
    render_set,
)

__all__ = [
    "BACKENDS",
    "DEFAULT_LIMIT",
    "LOSSLESS_FORMATS",
    "NOT_ESCAPED",
    "RenderParameters",
    "band_points",
    "escape_time",
    "escape_times",
    "intensity",
    "parse_complex",
    "parse_dimensions",
    "parse_pair",
    "pixel_to_point",
    "render_bands",
    "render_image",
    "render_set",
    "save_image",
    "to_image",
]
