"""Intersection dispatch over the closed set of scene primitives.

Scene objects are plain dataclasses; each variant is paired with a pure
intersection function. Adding a primitive means adding its dataclass to
Intersectable and its function to _INTERSECTORS.
"""

from collections.abc import Callable

from src.pixelworks.core.ray import Ray
from src.pixelworks.geometry.sphere import RayIntersection, Sphere, intersect_sphere

# Closed variant set of primitives a scene can hold
Intersectable = Sphere

_INTERSECTORS: dict[type, Callable[..., RayIntersection | None]] = {
    Sphere: intersect_sphere,
}


def find_closest_intersection(obj: Intersectable, ray: Ray) -> RayIntersection | None:
    """Intersect a ray with a single scene object.

    Args:
        obj: A scene primitive.
        ray: The ray to test.

    Returns:
        The closest intersection in front of the ray, or None.

    Raises:
        TypeError: If obj is not a supported primitive.
    """
    intersector = _INTERSECTORS.get(type(obj))
    if intersector is None:
        raise TypeError(f"Unsupported scene object: {type(obj).__name__}")
    return intersector(obj, ray)
