"""Scene-level ray intersection testing.

This module provides the nearest-hit query used for primary rays and the
occlusion test used for shadow rays. Both only read the scene.

Example:
    >>> from src.pixelworks.scene.intersection import intersect_scene, is_shadowed
    >>> hit = intersect_scene(scene, ray)
    >>> if hit is not None and hit.outer:
    ...     blocked = is_shadowed(scene, scene.lights[0], hit.point)
"""

from src.pixelworks.core.checks import require
from src.pixelworks.core.ray import Ray
from src.pixelworks.core.vector import Vector3
from src.pixelworks.geometry.intersectable import find_closest_intersection
from src.pixelworks.geometry.sphere import RayIntersection
from src.pixelworks.scene.model import LightSource, Scene

# Tolerance keeping a surface from shadowing itself
SHADOW_EPSILON = 0.01


def intersect_scene(scene: Scene, ray: Ray) -> RayIntersection | None:
    """Test ray against all objects in the scene.

    Iterates through all objects and keeps the hit with the strictly smallest
    distance, so on an exact tie the object listed first wins.

    Args:
        scene: The scene to query.
        ray: The ray to trace.

    Returns:
        The closest intersection, or None if no object is hit.
    """
    require(scene, "Scene")
    require(ray, "Ray")

    closest: RayIntersection | None = None
    closest_distance = float("inf")
    for obj in scene.objects:
        candidate = find_closest_intersection(obj, ray)
        if candidate is not None and candidate.distance < closest_distance:
            closest = candidate
            closest_distance = candidate.distance
    return closest


def is_shadowed(
    scene: Scene,
    light: LightSource,
    point: Vector3,
    epsilon: float = SHADOW_EPSILON,
) -> bool:
    """Check whether any object blocks light from reaching point.

    A ray is cast from the light toward point. The light is occluded if the
    nearest surface along that ray lies closer to the light than point by
    more than epsilon.

    Args:
        scene: The scene to query.
        light: The light source casting the shadow ray.
        point: The surface point being shaded.
        epsilon: Distance tolerance for the point's own surface.

    Returns:
        True if the light is blocked, False otherwise.
    """
    require(light, "Light source")
    require(point, "Point")

    shadow_ray = Ray.from_points(light.point, point)
    distance = light.point.sub(point).norm()
    blocker = intersect_scene(scene, shadow_ray)
    if blocker is None:
        return False
    return light.point.sub(blocker.point).norm() + epsilon < distance
