"""Phong shading integrator with hard shadows.

This module computes the color seen along a single primary ray. The ray is
intersected with the scene; a visible outer surface is shaded with an
ambient term plus, for every light that is not occluded, a diffuse and a
specular Phong term:

    I * (kd * max(0, l . n) + kr * max(0, r . v) ^ krn)

where l points to the light, n is the surface normal, r is l reflected
about n and v points back to the ray's start.

Colors are accumulated in integers: each light's contribution is truncated
toward zero when it is added, and the final channel is clamped to [0, 255].

Every function here only reads the scene and the ray it is given, so pixels
can be traced in any order and on any thread.

Example:
    >>> from src.pixelworks.core.integrator import trace
    >>> red, green, blue = trace(scene, ray)
"""

from src.pixelworks.core.ray import Ray
from src.pixelworks.geometry.sphere import RayIntersection
from src.pixelworks.scene.intersection import SHADOW_EPSILON, intersect_scene, is_shadowed
from src.pixelworks.scene.model import LightSource, Scene

# =============================================================================
# Shading Constants
# =============================================================================

# Color of a pixel whose ray hits nothing (or hits a surface from inside)
BACKGROUND_COLOR = (0, 0, 0)

# Base color of every visible surface point before lights are added
AMBIENT_COLOR = (15, 15, 15)

# Largest value a channel can take in the output buffers
MAX_CHANNEL = 255

RGB = tuple[int, int, int]


def clamp_channel(value: int) -> int:
    """Clamp an accumulated channel value to [0, MAX_CHANNEL]."""
    return max(0, min(MAX_CHANNEL, value))


def phong_contribution(
    light: LightSource,
    view_ray: Ray,
    intersection: RayIntersection,
) -> tuple[float, float, float]:
    """Compute the diffuse + specular contribution of one light.

    Args:
        light: The (unoccluded) light source.
        view_ray: The primary ray from the eye.
        intersection: The visible surface point.

    Returns:
        Per-channel (red, green, blue) contribution as floats.
    """
    point = intersection.point
    material = intersection.material

    l = light.point.sub(point).normalize()  # noqa: E741
    n = intersection.normal
    ln = l.dot(n)
    r = n.scale(2).scale(ln).sub(l).normalize()
    v = view_ray.start.sub(point).normalize()

    diffuse = max(0.0, ln)
    specular = max(0.0, r.dot(v)) ** material.krn

    return (
        light.r * (material.kdr * diffuse + material.krr * specular),
        light.g * (material.kdg * diffuse + material.krg * specular),
        light.b * (material.kdb * diffuse + material.krb * specular),
    )


def determine_color(
    scene: Scene,
    view_ray: Ray,
    intersection: RayIntersection,
    ambient: RGB = AMBIENT_COLOR,
    shadow_epsilon: float = SHADOW_EPSILON,
) -> RGB:
    """Shade a visible surface point.

    Starts from the ambient color and adds the Phong contribution of every
    light that reaches the point. Occluded lights are skipped entirely.

    Args:
        scene: The scene being rendered.
        view_ray: The primary ray from the eye.
        intersection: The nearest outer intersection of view_ray.
        ambient: Base color added before any light.
        shadow_epsilon: Self-shadowing tolerance for the shadow test.

    Returns:
        Clamped (red, green, blue) channel values.
    """
    red, green, blue = ambient
    for light in scene.lights:
        if is_shadowed(scene, light, intersection.point, shadow_epsilon):
            continue
        dr, dg, db = phong_contribution(light, view_ray, intersection)
        red = int(red + dr)
        green = int(green + dg)
        blue = int(blue + db)
    return clamp_channel(red), clamp_channel(green), clamp_channel(blue)


def trace(
    scene: Scene,
    view_ray: Ray,
    ambient: RGB = AMBIENT_COLOR,
    shadow_epsilon: float = SHADOW_EPSILON,
    background: RGB = BACKGROUND_COLOR,
) -> RGB:
    """Compute the color seen along a primary ray.

    Args:
        scene: The scene being rendered.
        view_ray: Ray from the eye through a point on the view plane.
        ambient: Base color of lit surfaces.
        shadow_epsilon: Self-shadowing tolerance for the shadow test.
        background: Color returned when nothing visible is hit.

    Returns:
        (red, green, blue) channel values in [0, 255].
    """
    intersection = intersect_scene(scene, view_ray)
    if intersection is None or not intersection.outer:
        return background
    return determine_color(scene, view_ray, intersection, ambient, shadow_epsilon)
