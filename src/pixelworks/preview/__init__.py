"""Preview module for output and visualization.

Components:
    display: Matplotlib-based static preview
    export: Buffer-to-image conversion, fractal palette, PNG export and
        observers that save every result they receive

Example:
    >>> from src.pixelworks.preview import RayTracerImageObserver
    >>> observer = RayTracerImageObserver("spheres.png", 500, 500)
    >>> producer.produce(eye, view, view_up, 20.0, 20.0, 500, 500, 1, observer)
"""

from src.pixelworks.preview.display import show_image
from src.pixelworks.preview.export import (
    FractalImageObserver,
    RayTracerImageObserver,
    make_palette,
    palette_indices_to_image,
    rgb_buffers_to_image,
    save_png_from_array,
)

__all__ = [
    # Display
    "show_image",
    # Conversion and export
    "make_palette",
    "palette_indices_to_image",
    "rgb_buffers_to_image",
    "save_png_from_array",
    # Observers
    "FractalImageObserver",
    "RayTracerImageObserver",
]
