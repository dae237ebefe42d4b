#!/usr/bin/env python3
"""Render a small scene of spheres with the ray caster.

This script builds a fixed scene of spheres and point lights, traces it with
the fork-join parallel producer (or the sequential one) and saves the result
as a PNG.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 500)
    --height HEIGHT     Image height in pixels (default: 500)
    --output OUTPUT     Output file path (default: spheres.png)
    --sequential        Trace on a single thread
    --workers N         Worker threads for the parallel producer
    --show              Display the result with Matplotlib
    --verbose           Enable debug logging

Example:
    python -m examples.render_spheres --width 300 --height 300 --output out.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene of spheres with Phong shading and shadows.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=500, help="Image width in pixels (default: 500)")
    parser.add_argument("--height", type=int, default=500, help="Image height in pixels (default: 500)")
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument("--sequential", action="store_true", help="Trace on a single thread")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads (default: CPU count)")
    parser.add_argument("--show", action="store_true", help="Display the result with Matplotlib")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def create_demo_scene():
    """Build the demo scene: three spheres lit by two point lights."""
    from src.pixelworks.core.vector import Vector3
    from src.pixelworks.geometry.sphere import Material, Sphere
    from src.pixelworks.scene.model import LightSource, Scene

    return Scene(
        objects=(
            Sphere(Vector3(0, 0, 0), 3.0, Material(1, 0.3, 0.3, 0.5, 0.5, 0.5, 10)),
            Sphere(Vector3(-1.5, 4, 1), 1.2, Material(0.3, 1, 0.3, 0.6, 0.6, 0.6, 30)),
            Sphere(Vector3(1, -4, -2), 1.6, Material(0.3, 0.3, 1, 0.3, 0.3, 0.3, 5)),
        ),
        lights=(
            LightSource(Vector3(10, 5, 5), 100, 100, 100),
            LightSource(Vector3(8, -8, 6), 80, 80, 60),
        ),
    )


def render_spheres(
    width: int = 500,
    height: int = 500,
    output_path: str = "spheres.png",
    sequential: bool = False,
    workers: int | None = None,
) -> Path:
    """Render the demo scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (PNG).
        sequential: If True, trace on the calling thread.
        workers: Worker threads for the parallel producer.

    Returns:
        Path to the saved image file.
    """
    from src.pixelworks.core.vector import Vector3
    from src.pixelworks.preview.export import RayTracerImageObserver
    from src.pixelworks.raytracer.producer import (
        RayTracerConfig,
        RayTracerProducer,
        SequentialRayTracerProducer,
    )

    scene = create_demo_scene()
    config = RayTracerConfig(parallelism=workers)
    producer_cls = SequentialRayTracerProducer if sequential else RayTracerProducer
    producer = producer_cls(scene, config)

    output_file = Path(output_path)
    observer = RayTracerImageObserver(output_file, width, height)

    print(f"Tracing {width}x{height} ({'sequential' if sequential else 'parallel'})...")
    start_time = time.time()
    producer.produce(
        eye=Vector3(10, 0, 0),
        view=Vector3(0, 0, 0),
        view_up=Vector3(0, 0, 10),
        horizontal=20.0,
        vertical=20.0,
        width=width,
        height=height,
        request_no=1,
        observer=observer,
    )
    total_time = time.time() - start_time

    print(f"Saved to: {output_file.absolute()}")
    print(f"Total time: {total_time:.2f}s")
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        output = render_spheres(
            width=args.width,
            height=args.height,
            output_path=args.output,
            sequential=args.sequential,
            workers=args.workers,
        )
        if args.show:
            import numpy as np
            from PIL import Image as PILImage

            from src.pixelworks.preview.display import show_image

            show_image(np.asarray(PILImage.open(output)), title="Spheres")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
