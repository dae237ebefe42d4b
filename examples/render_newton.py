#!/usr/bin/env python3
"""Render a Newton-Raphson fractal for a polynomial given by its roots.

Roots are complex literals such as "1", "-i", "2 + i" or "-2.71 - i3.15".
Each pixel is colored by the root its Newton iteration converges to; pixels
that do not converge stay black.

Usage:
    python -m examples.render_newton [options] -- ROOT ROOT [ROOT ...]

Roots go after "--" so literals such as "-i" or "-i2.71" are not read as
options.

Options:
    --width WIDTH       Image width in pixels (default: 512)
    --height HEIGHT     Image height in pixels (default: 512)
    --bounds RE_MIN RE_MAX IM_MIN IM_MAX
                        Region of the complex plane (default: -2 2 -2 2)
    --output OUTPUT     Output file path (default: newton.png)
    --workers N         Worker threads (default: CPU count)
    --show              Display the result with Matplotlib
    --verbose           Enable debug logging

Example:
    python -m examples.render_newton --width 256 --height 256 -- 1 -1 i -i
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].
    """
    parser = argparse.ArgumentParser(
        description="Render a Newton-Raphson fractal from polynomial roots.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("roots", nargs="+", help='Complex roots after "--", e.g. -- 1 -1 i -i "2 + i"')
    parser.add_argument("--width", type=int, default=512, help="Image width in pixels (default: 512)")
    parser.add_argument("--height", type=int, default=512, help="Image height in pixels (default: 512)")
    parser.add_argument(
        "--bounds",
        type=float,
        nargs=4,
        default=(-2.0, 2.0, -2.0, 2.0),
        metavar=("RE_MIN", "RE_MAX", "IM_MIN", "IM_MAX"),
        help="Region of the complex plane (default: -2 2 -2 2)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="newton.png",
        help="Output file path (default: newton.png)",
    )
    parser.add_argument("--workers", type=int, default=None, help="Worker threads (default: CPU count)")
    parser.add_argument("--show", action="store_true", help="Display the result with Matplotlib")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def render_newton(
    roots: list[str],
    width: int = 512,
    height: int = 512,
    bounds: tuple[float, float, float, float] = (-2.0, 2.0, -2.0, 2.0),
    output_path: str = "newton.png",
    workers: int | None = None,
) -> Path:
    """Render the fractal for the given root literals and save it to a file.

    Args:
        roots: Root literals, at least two.
        width: Image width in pixels.
        height: Image height in pixels.
        bounds: (re_min, re_max, im_min, im_max).
        output_path: Output file path (PNG).
        workers: Worker threads for the producer.

    Returns:
        Path to the saved image file.

    Raises:
        ValueError: If fewer than two roots are given or a root is malformed.
    """
    from src.pixelworks.fractals.complex import Complex
    from src.pixelworks.fractals.newton import NewtonConfig, NewtonFractalProducer
    from src.pixelworks.fractals.polynomial import ComplexRootedPolynomial
    from src.pixelworks.preview.export import FractalImageObserver

    if len(roots) < 2:
        raise ValueError("Please give at least two roots.")
    polynomial = ComplexRootedPolynomial(*(Complex.parse(root) for root in roots))
    print(polynomial)

    output_file = Path(output_path)
    observer = FractalImageObserver(output_file, width, height)
    re_min, re_max, im_min, im_max = bounds

    print(f"Computing {width}x{height} fractal...")
    start_time = time.time()
    with NewtonFractalProducer(polynomial, NewtonConfig(max_workers=workers)) as producer:
        producer.produce(re_min, re_max, im_min, im_max, width, height, 1, observer)
    total_time = time.time() - start_time

    print(f"Saved to: {output_file.absolute()}")
    print(f"Total time: {total_time:.2f}s")
    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        output = render_newton(
            roots=args.roots,
            width=args.width,
            height=args.height,
            bounds=tuple(args.bounds),
            output_path=args.output,
            workers=args.workers,
        )
        if args.show:
            import numpy as np
            from PIL import Image as PILImage

            from src.pixelworks.preview.display import show_image

            show_image(np.asarray(PILImage.open(output)), title="Newton fractal")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
