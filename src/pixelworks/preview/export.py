"""Image export utilities for producer buffers.

This module turns the flat row-major buffers delivered by the producers into
(H, W, 3) uint8 images and saves them as PNG files. It also provides
observers that save every result they receive.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.pixelworks.preview.export import FractalImageObserver
    >>> observer = FractalImageObserver("newton.png", 512, 512)
    >>> producer.produce(-2.0, 2.0, -2.0, 2.0, 512, 512, 1, observer)
"""

from __future__ import annotations

import colorsys
import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def _check_length(buffer: npt.NDArray[np.integer], width: int, height: int) -> None:
    if buffer.size != width * height:
        raise ValueError(
            f"Buffer of {buffer.size} elements does not match {width}x{height} image"
        )


def rgb_buffers_to_image(
    red: npt.NDArray[np.integer],
    green: npt.NDArray[np.integer],
    blue: npt.NDArray[np.integer],
    width: int,
    height: int,
) -> npt.NDArray[np.uint8]:
    """Combine three row-major channel buffers into an RGB image.

    Args:
        red: Red channel, values in [0, 255].
        green: Green channel, values in [0, 255].
        blue: Blue channel, values in [0, 255].
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Image array of shape (height, width, 3) with dtype uint8.

    Raises:
        ValueError: If a buffer does not hold width * height elements.
    """
    for channel in (red, green, blue):
        _check_length(channel, width, height)
    stacked = np.stack([red, green, blue], axis=-1)
    return np.clip(stacked, 0, 255).astype(np.uint8).reshape(height, width, 3)


def make_palette(size: int) -> npt.NDArray[np.uint8]:
    """Build a palette with black at index 0 and evenly spaced hues after it.

    Args:
        size: Number of palette entries (roots + 1 for fractals).

    Returns:
        Array of shape (size, 3) with dtype uint8.
    """
    if size < 1:
        raise ValueError(f"Palette size must be at least 1, got {size}")
    palette = np.zeros((size, 3), dtype=np.uint8)
    colors = size - 1
    for index in range(1, size):
        r, g, b = colorsys.hsv_to_rgb((index - 1) / colors, 0.85, 0.95)
        palette[index] = (round(r * 255), round(g * 255), round(b * 255))
    return palette


def palette_indices_to_image(
    data: npt.NDArray[np.integer],
    palette_size: int,
    width: int,
    height: int,
) -> npt.NDArray[np.uint8]:
    """Color a palette-index buffer.

    Raises:
        ValueError: If the buffer size does not match the image, or an index
            falls outside the palette.
    """
    _check_length(data, width, height)
    if data.size and (data.min() < 0 or data.max() >= palette_size):
        raise ValueError(f"Palette indices must lie in [0, {palette_size})")
    palette = make_palette(palette_size)
    return palette[data.astype(np.intp)].reshape(height, width, 3)


def save_png_from_array(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an (H, W, 3) uint8 array as a PNG file."""
    pil_image = PILImage.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
    pil_image.save(filepath)


class RayTracerImageObserver:
    """Ray-trace observer that saves each result as a PNG.

    Attributes:
        filepath: Where images are written.
        last_request: Request number of the most recent result, or None.
    """

    def __init__(self, filepath: str | Path, width: int, height: int) -> None:
        self.filepath = Path(filepath)
        self.width = width
        self.height = height
        self.last_request: int | None = None

    def accept_result(
        self,
        red: npt.NDArray[np.int16],
        green: npt.NDArray[np.int16],
        blue: npt.NDArray[np.int16],
        request_no: int,
    ) -> None:
        image = rgb_buffers_to_image(red, green, blue, self.width, self.height)
        save_png_from_array(image, self.filepath)
        self.last_request = request_no
        logger.info("Saved ray-trace request %d to %s", request_no, self.filepath)


class FractalImageObserver:
    """Fractal observer that colors each result and saves it as a PNG.

    Attributes:
        filepath: Where images are written.
        last_request: Request number of the most recent result, or None.
    """

    def __init__(self, filepath: str | Path, width: int, height: int) -> None:
        self.filepath = Path(filepath)
        self.width = width
        self.height = height
        self.last_request: int | None = None

    def accept_result(self, data: npt.NDArray[np.int16], palette_size: int, request_no: int) -> None:
        image = palette_indices_to_image(data, palette_size, self.width, self.height)
        save_png_from_array(image, self.filepath)
        self.last_request = request_no
        logger.info("Saved fractal request %d to %s", request_no, self.filepath)
