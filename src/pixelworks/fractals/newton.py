"""Newton-Raphson fractal kernel and strip-parallel producer.

Every pixel is mapped to a starting point z0 in the complex plane and
iterated with

    z[n+1] = z[n] - P(z[n]) / P'(z[n])

until the step is no larger than the convergence threshold or the iteration
cap is reached. The pixel's value is 1 + the index of the root the final
point lies closest to (within the root threshold), or 0 if no root is close
enough. Pixels with the same value form a basin of attraction.

NewtonFractalProducer cuts the image into a fixed number of horizontal
strips (strips_per_worker per worker, the last strip taking the remainder)
and submits each strip to a fixed ThreadPoolExecutor. Strips write disjoint
rows of one shared buffer. A strip that raises is logged and otherwise
ignored: the rows it had not yet written stay 0, and the buffer is still
delivered.

Example:
    >>> from src.pixelworks.fractals.complex import Complex
    >>> from src.pixelworks.fractals.newton import NewtonFractalProducer
    >>> from src.pixelworks.fractals.polynomial import ComplexRootedPolynomial
    >>> rooted = ComplexRootedPolynomial(Complex.ONE, Complex.ONE_NEG, Complex.IM, Complex.IM_NEG)
    >>> with NewtonFractalProducer(rooted) as producer:
    ...     producer.produce(-2.0, 2.0, -2.0, 2.0, 64, 64, 1, observer)
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

import numpy as np
import numpy.typing as npt

from src.pixelworks.core.checks import require, require_dimensions
from src.pixelworks.core.forkjoin import default_parallelism
from src.pixelworks.fractals.complex import Complex
from src.pixelworks.fractals.polynomial import ComplexPolynomial, ComplexRootedPolynomial

logger = logging.getLogger(__name__)

IndexBuffer = npt.NDArray[np.int16]

# =============================================================================
# Iteration Constants
# =============================================================================

MAX_ITERATIONS = 16 * 16 * 16
CONVERGENCE_THRESHOLD = 1e-3
ROOT_THRESHOLD = 2e-3
STRIPS_PER_WORKER = 8


class FractalResultObserver(Protocol):
    """Receiver of finished fractal buffers."""

    def accept_result(self, data: IndexBuffer, palette_size: int, request_no: int) -> None: ...


@dataclass(frozen=True)
class NewtonConfig:
    """Configuration for the Newton fractal kernel and producer.

    Attributes:
        max_iterations: Iteration cap per pixel.
        convergence_threshold: Step size at or below which iteration stops.
        root_threshold: Largest distance at which a root is credited.
        strips_per_worker: Strips submitted per worker thread.
        max_workers: Worker threads; None uses the number of hardware threads.
    """

    max_iterations: int = MAX_ITERATIONS
    convergence_threshold: float = CONVERGENCE_THRESHOLD
    root_threshold: float = ROOT_THRESHOLD
    strips_per_worker: int = STRIPS_PER_WORKER
    max_workers: int | None = None

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")
        if self.strips_per_worker < 1:
            raise ValueError(f"strips_per_worker must be at least 1, got {self.strips_per_worker}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")


@dataclass(frozen=True)
class ComplexViewport:
    """Rectangle of the complex plane sampled on a pixel grid.

    Row 0 is the top of the image and maps to im_max.
    """

    re_min: float
    re_max: float
    im_min: float
    im_max: float
    width: int
    height: int

    def __post_init__(self) -> None:
        require_dimensions(self.width, self.height)

    def map_pixel(self, x: int, y: int) -> Complex:
        """Return the complex coordinate of pixel (x, y)."""
        re = x / (self.width - 1.0) * (self.re_max - self.re_min) + self.re_min
        im = (self.height - 1.0 - y) / (self.height - 1) * (self.im_max - self.im_min) + self.im_min
        return Complex(re, im)


# =============================================================================
# Per-pixel Kernel
# =============================================================================


def newton_index(
    rooted: ComplexRootedPolynomial,
    derived: ComplexPolynomial,
    z0: Complex,
    config: NewtonConfig,
) -> int:
    """Iterate Newton's method from z0 and classify the result.

    At least one step is always taken.

    Args:
        rooted: The polynomial P in root form.
        derived: P' in coefficient form.
        z0: Starting point.
        config: Iteration cap and thresholds.

    Returns:
        1 + index of the matched root, or 0 if no root is within
        config.root_threshold of the final point.

    Raises:
        ZeroDivisionError: If P' vanishes at an iterate.
    """
    zn = z0
    iterations = 0
    while True:
        zn1 = zn.sub(rooted.apply(zn).divide(derived.apply(zn)))
        step = zn1.sub(zn).module()
        zn = zn1
        iterations += 1
        # NaN steps stop the loop too
        if iterations >= config.max_iterations or not step > config.convergence_threshold:
            break
    return rooted.index_of_closest_root_for(zn, config.root_threshold) + 1


def compute_strip(
    rooted: ComplexRootedPolynomial,
    derived: ComplexPolynomial,
    viewport: ComplexViewport,
    row_start: int,
    row_stop: int,
    data: IndexBuffer,
    config: NewtonConfig,
) -> None:
    """Fill rows [row_start, row_stop) of data, one pixel at a time."""
    width = viewport.width
    offset = row_start * width
    for y in range(row_start, row_stop):
        for x in range(width):
            data[offset] = newton_index(rooted, derived, viewport.map_pixel(x, y), config)
            offset += 1


def strip_ranges(height: int, strip_count: int) -> list[tuple[int, int]]:
    """Partition rows [0, height) into strip_count contiguous ranges.

    Every strip gets height // strip_count rows and the last strip also
    takes the remainder. Leading strips are empty when there are fewer
    rows than strips.
    """
    rows_per_strip = height // strip_count
    ranges = [(i * rows_per_strip, (i + 1) * rows_per_strip) for i in range(strip_count)]
    last_start, _ = ranges[-1]
    ranges[-1] = (last_start, height)
    return ranges


def render_serial(
    rooted: ComplexRootedPolynomial,
    viewport: ComplexViewport,
    config: NewtonConfig | None = None,
) -> IndexBuffer:
    """Compute the whole palette-index buffer on the calling thread."""
    config = config if config is not None else NewtonConfig()
    data = np.zeros(viewport.width * viewport.height, dtype=np.int16)
    derived = rooted.to_complex_polynom().derive()
    compute_strip(rooted, derived, viewport, 0, viewport.height, data, config)
    return data


# =============================================================================
# Producer
# =============================================================================


class NewtonFractalProducer:
    """Fractal producer running Newton strips on a fixed worker pool.

    The pool lives as long as the producer and is shared by all requests.
    close() stops it without draining queued strips.
    """

    def __init__(self, polynomial: ComplexRootedPolynomial, config: NewtonConfig | None = None) -> None:
        self.polynomial = require(polynomial, "Polynomial")
        self.config = config if config is not None else NewtonConfig()
        self.workers = self.config.max_workers or default_parallelism()
        self._coefficients = polynomial.to_complex_polynom()
        self._derived = self._coefficients.derive()
        self._pool = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="newton-worker")
        logger.debug("Newton producer for %s using %d workers", polynomial, self.workers)

    @property
    def palette_size(self) -> int:
        """Number of palette entries: one per root plus the background."""
        return self._coefficients.order() + 1

    def produce(
        self,
        re_min: float,
        re_max: float,
        im_min: float,
        im_max: float,
        width: int,
        height: int,
        request_no: int,
        observer: FractalResultObserver,
    ) -> None:
        """Render the fractal over a region and hand the buffer to observer.

        Args:
            re_min: Real coordinate of the left edge.
            re_max: Real coordinate of the right edge.
            im_min: Imaginary coordinate of the bottom edge.
            im_max: Imaginary coordinate of the top edge.
            width: Image width in pixels (at least 2).
            height: Image height in pixels (at least 2).
            request_no: Identifier passed back to the observer.
            observer: Receiver of the palette-index buffer.

        Raises:
            ValueError: If observer is None or the dimensions are too small.
        """
        require(observer, "Observer")
        viewport = ComplexViewport(re_min, re_max, im_min, im_max, width, height)
        data = np.zeros(width * height, dtype=np.int16)

        logger.info("Starting fractal request %d (%dx%d)", request_no, width, height)
        strip_count = self.config.strips_per_worker * self.workers
        futures = [
            self._pool.submit(
                compute_strip,
                self.polynomial,
                self._derived,
                viewport,
                row_start,
                row_stop,
                data,
                self.config,
            )
            for row_start, row_stop in strip_ranges(height, strip_count)
        ]
        for future in futures:
            try:
                future.result()
            except Exception:
                logger.warning("Fractal strip failed for request %d; rows left incomplete", request_no, exc_info=True)

        logger.info("Fractal request %d finished, notifying observer", request_no)
        observer.accept_result(data, self.palette_size, request_no)

    def close(self) -> None:
        """Stop the worker pool without waiting for queued strips."""
        self._pool.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "NewtonFractalProducer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
