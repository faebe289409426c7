"""Encoding of rendered pixel buffers as grayscale image files."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

import PIL.Image

LOSSLESS_FORMATS = ("png", "bmp", "tiff", "tif", "pgm")


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "TIF":
        return "TIFF"
    if upper == "PGM":
        return "PPM"
    return upper


def to_image(pixels: Sequence[int], bounds: tuple[int, int]) -> PIL.Image.Image:
    """Wrap a row-major 8-bit buffer as a single-channel Pillow image."""

    width, height = bounds
    if len(pixels) != width * height:
        raise ValueError(f"pixel buffer holds {len(pixels)} entries, expected {width} * {height} = {width * height}")
    return PIL.Image.frombytes("L", (width, height), bytes(pixels))


def save_image(
    path: Union[str, Path],
    pixels: Sequence[int],
    bounds: tuple[int, int],
    image_format: str = "png",
) -> None:
    """Write ``pixels`` to ``path`` as an 8-bit grayscale image."""

    image_format = image_format.lower().lstrip(".")
    if image_format not in LOSSLESS_FORMATS:
        raise ValueError(f"unsupported image format '{image_format}'. Valid choices: {', '.join(LOSSLESS_FORMATS)}.")

    image = to_image(pixels, bounds)
    image.save(str(path), format=_pil_format_name(image_format))
