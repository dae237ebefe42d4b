"""Ray-trace producers.

Components:
    producer: Sequential and fork-join parallel producers, the leaf row
        renderer and the observer protocol

Producers take a scene at construction and view parameters per request,
and deliver three row-major int16 buffers (red, green, blue) clamped to
[0, 255] to an observer.
"""

from .producer import (
    LEAF_ROWS,
    RayTracerConfig,
    RayTracerProducer,
    RayTracerResultObserver,
    SequentialRayTracerProducer,
    TraceAction,
    render_rows,
)

__all__ = [
    "LEAF_ROWS",
    "RayTracerConfig",
    "RayTracerProducer",
    "RayTracerResultObserver",
    "SequentialRayTracerProducer",
    "TraceAction",
    "render_rows",
]
