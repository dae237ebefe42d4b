"""Matplotlib-based static preview of rendered images.

Matplotlib is an optional dependency (the "preview" extra) and is only
imported when a preview is actually shown.

Example:
    >>> from src.pixelworks.preview.display import show_image
    >>> from src.pixelworks.preview.export import rgb_buffers_to_image
    >>> show_image(rgb_buffers_to_image(red, green, blue, 500, 500), title="Spheres")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def show_image(
    image: npt.NDArray[np.uint8],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display an (H, W, 3) uint8 image in a Matplotlib figure.

    Args:
        image: Image to display.
        title: Optional figure title.
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(image, interpolation="nearest")
    ax.axis("off")
    if title is not None:
        ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
