"""Core rendering module.

This module contains the fundamental building blocks shared by both kernels:

Components:
    checks: Argument validation helpers
    vector: Immutable 3D vector / point type
    ray: Ray data structure built from two points
    forkjoin: Fork-join worker pool for recursive row splitting
    integrator: Phong shading with hard shadows for the ray caster

All value types are immutable, so they can be shared freely between worker
threads while a frame is computed.
"""

from .checks import require, require_dimensions, require_non_negative
from .ray import Ray
from .vector import Point3D, Vector3

# Note: integrator and forkjoin are NOT imported here to avoid circular imports.
# Import directly from src.pixelworks.core.integrator or src.pixelworks.core.forkjoin.

__all__ = [
    "Point3D",
    "Ray",
    "Vector3",
    "require",
    "require_dimensions",
    "require_non_negative",
]
