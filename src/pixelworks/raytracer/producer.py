"""Ray-trace producers: compute RGB buffers for a scene and notify an observer.

Two producers share one contract:

- SequentialRayTracerProducer traces every pixel on the calling thread.
- RayTracerProducer recursively halves the row range [0, height) until a span
  holds at most leaf_rows rows, and traces the leaves on a ForkJoinPool.

Each leaf writes only its own rows of the pre-allocated buffers, so the
buffers need no locking; the pool's join is the only synchronization. The
observer is called once, after every row has been written.

Example:
    >>> from src.pixelworks.raytracer.producer import RayTracerProducer
    >>> producer = RayTracerProducer(scene)
    >>> producer.produce(eye, view, view_up, 20.0, 20.0, 500, 500, 1, observer)
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import numpy as np
import numpy.typing as npt

from src.pixelworks.camera.view_plane import ViewPlane, setup_view_plane
from src.pixelworks.core.checks import require
from src.pixelworks.core.forkjoin import ForkJoinPool, RecursiveAction
from src.pixelworks.core.integrator import AMBIENT_COLOR, BACKGROUND_COLOR, RGB, trace
from src.pixelworks.core.ray import Ray
from src.pixelworks.core.vector import Vector3
from src.pixelworks.scene.intersection import SHADOW_EPSILON
from src.pixelworks.scene.model import Scene

logger = logging.getLogger(__name__)

ChannelBuffer = npt.NDArray[np.int16]

# Maximum number of rows a leaf action traces directly
LEAF_ROWS = 16


class RayTracerResultObserver(Protocol):
    """Receiver of finished ray-trace buffers."""

    def accept_result(
        self,
        red: ChannelBuffer,
        green: ChannelBuffer,
        blue: ChannelBuffer,
        request_no: int,
    ) -> None: ...


@dataclass(frozen=True)
class RayTracerConfig:
    """Configuration for ray-trace producers.

    Attributes:
        leaf_rows: Largest row span traced without further splitting.
        ambient: Base color of every visible surface point.
        background: Color of pixels that see no outer surface.
        shadow_epsilon: Self-shadowing tolerance for shadow rays.
        parallelism: Worker count for the parallel producer; None uses the
            number of hardware threads.
    """

    leaf_rows: int = LEAF_ROWS
    ambient: RGB = AMBIENT_COLOR
    background: RGB = BACKGROUND_COLOR
    shadow_epsilon: float = SHADOW_EPSILON
    parallelism: int | None = None

    def __post_init__(self) -> None:
        if self.leaf_rows < 1:
            raise ValueError(f"leaf_rows must be at least 1, got {self.leaf_rows}")


# =============================================================================
# Row Computation
# =============================================================================


def render_rows(
    scene: Scene,
    eye: Vector3,
    plane: ViewPlane,
    row_start: int,
    row_stop: int,
    red: ChannelBuffer,
    green: ChannelBuffer,
    blue: ChannelBuffer,
    config: RayTracerConfig,
) -> None:
    """Trace rows [row_start, row_stop) into the row-major channel buffers."""
    width = plane.width
    offset = row_start * width
    for y in range(row_start, row_stop):
        for x in range(width):
            ray = Ray.from_points(eye, plane.screen_point(x, y))
            r, g, b = trace(scene, ray, config.ambient, config.shadow_epsilon, config.background)
            red[offset] = r
            green[offset] = g
            blue[offset] = b
            offset += 1


class TraceAction(RecursiveAction):
    """Traces a contiguous span of rows, splitting it while it is too large."""

    def __init__(
        self,
        scene: Scene,
        eye: Vector3,
        plane: ViewPlane,
        row_start: int,
        row_stop: int,
        red: ChannelBuffer,
        green: ChannelBuffer,
        blue: ChannelBuffer,
        config: RayTracerConfig,
    ) -> None:
        self.scene = scene
        self.eye = eye
        self.plane = plane
        self.row_start = row_start
        self.row_stop = row_stop
        self.red = red
        self.green = green
        self.blue = blue
        self.config = config

    def _child(self, row_start: int, row_stop: int) -> "TraceAction":
        return TraceAction(
            self.scene,
            self.eye,
            self.plane,
            row_start,
            row_stop,
            self.red,
            self.green,
            self.blue,
            self.config,
        )

    def compute(self, pool: ForkJoinPool) -> None:
        if self.row_stop - self.row_start <= self.config.leaf_rows:
            self.compute_direct()
            return
        # Lower half keeps the middle row
        split = self.row_start + (self.row_stop - 1 - self.row_start) // 2 + 1
        pool.invoke_all(self._child(self.row_start, split), self._child(split, self.row_stop))

    def compute_direct(self) -> None:
        render_rows(
            self.scene,
            self.eye,
            self.plane,
            self.row_start,
            self.row_stop,
            self.red,
            self.green,
            self.blue,
            self.config,
        )


# =============================================================================
# Producers
# =============================================================================


class SequentialRayTracerProducer:
    """Ray-trace producer computing every pixel on the calling thread."""

    def __init__(self, scene: Scene, config: RayTracerConfig | None = None) -> None:
        self.scene = require(scene, "Scene")
        self.config = config if config is not None else RayTracerConfig()

    def produce(
        self,
        eye: Vector3,
        view: Vector3,
        view_up: Vector3,
        horizontal: float,
        vertical: float,
        width: int,
        height: int,
        request_no: int,
        observer: RayTracerResultObserver,
    ) -> None:
        """Render the scene and hand the buffers to observer.

        Args:
            eye: Position of the observer.
            view: Point the observer looks at.
            view_up: Approximate up direction.
            horizontal: Screen width in world units.
            vertical: Screen height in world units.
            width: Image width in pixels (at least 2).
            height: Image height in pixels (at least 2).
            request_no: Identifier passed back to the observer.
            observer: Receiver of the finished red/green/blue buffers.

        Raises:
            ValueError: If an argument is missing or the view is degenerate.
        """
        require(observer, "Observer")
        plane = setup_view_plane(eye, view, view_up, horizontal, vertical, width, height)
        red, green, blue = _allocate_buffers(width, height)

        logger.info("Starting ray-trace request %d (%dx%d)", request_no, width, height)
        self._render(plane, eye, red, green, blue)
        logger.info("Ray-trace request %d finished, notifying observer", request_no)

        observer.accept_result(red, green, blue, request_no)

    def _render(
        self,
        plane: ViewPlane,
        eye: Vector3,
        red: ChannelBuffer,
        green: ChannelBuffer,
        blue: ChannelBuffer,
    ) -> None:
        render_rows(self.scene, eye, plane, 0, plane.height, red, green, blue, self.config)


class RayTracerProducer(SequentialRayTracerProducer):
    """Ray-trace producer splitting rows recursively over a fork-join pool."""

    def _render(
        self,
        plane: ViewPlane,
        eye: Vector3,
        red: ChannelBuffer,
        green: ChannelBuffer,
        blue: ChannelBuffer,
    ) -> None:
        root = TraceAction(self.scene, eye, plane, 0, plane.height, red, green, blue, self.config)
        with ForkJoinPool(self.config.parallelism) as pool:
            pool.invoke(root)


def _allocate_buffers(width: int, height: int) -> tuple[ChannelBuffer, ChannelBuffer, ChannelBuffer]:
    size = width * height
    return (
        np.zeros(size, dtype=np.int16),
        np.zeros(size, dtype=np.int16),
        np.zeros(size, dtype=np.int16),
    )
