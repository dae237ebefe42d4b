"""Sphere primitive with analytic ray-sphere intersection.

This module provides the Sphere dataclass, the Phong material coefficients it
carries, and the intersection record returned by a successful ray query.

The ray-sphere intersection is found by solving:
    |start + l * direction - center|^2 = radius^2

For a unit direction this is the quadratic l^2 + b*l + c = 0 with:
    b = 2 * dot(direction, start - center)
    c = dot(start - center, start - center) - radius^2

Example:
    >>> from src.pixelworks.core.ray import Ray
    >>> from src.pixelworks.core.vector import Vector3
    >>> from src.pixelworks.geometry.sphere import Material, Sphere, intersect_sphere
    >>> sphere = Sphere(Vector3(0, 0, 0), 1.0, Material(1, 1, 1, 0.5, 0.5, 0.5, 10))
    >>> ray = Ray.from_points(Vector3(0, 0, 5), Vector3(0, 0, 0))
    >>> intersect_sphere(sphere, ray).distance
    4.0
"""

import math
from dataclasses import dataclass

from src.pixelworks.core.checks import require
from src.pixelworks.core.ray import Ray
from src.pixelworks.core.vector import Vector3


@dataclass(frozen=True)
class Material:
    """Phong reflection coefficients of a surface.

    Attributes:
        kdr: Diffuse coefficient for the red channel.
        kdg: Diffuse coefficient for the green channel.
        kdb: Diffuse coefficient for the blue channel.
        krr: Specular coefficient for the red channel.
        krg: Specular coefficient for the green channel.
        krb: Specular coefficient for the blue channel.
        krn: Shininess exponent of the specular term.
    """

    kdr: float
    kdg: float
    kdb: float
    krr: float
    krg: float
    krb: float
    krn: float


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive float).
        material: The Phong coefficients used when shading the sphere.
    """

    center: Vector3
    radius: float
    material: Material


@dataclass(frozen=True)
class RayIntersection:
    """Record of a ray-object intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        distance: Distance from the ray's start to point.
        outer: True if the ray approached the surface from outside the
            object, False if the ray started inside it.
        normal: Unit surface normal at point, always pointing away from the
            object's center.
        material: Material coefficients of the intersected object.
    """

    point: Vector3
    distance: float
    outer: bool
    normal: Vector3
    material: Material


def intersect_sphere(sphere: Sphere, ray: Ray) -> RayIntersection | None:
    """Find the closest intersection of a ray with a sphere.

    Root selection:
        - two distinct roots in front of the start: the nearer one, outer hit
        - start inside the sphere (l1 <= 0 < l2): the far root, inner hit
        - a tangent ray (l1 == l2): that root, outer hit, whatever its sign
        - anything else (sphere entirely behind the start): no hit

    Args:
        sphere: The sphere to test.
        ray: The ray to test; its direction must be unit length.

    Returns:
        A RayIntersection, or None if the ray misses the sphere.

    Raises:
        ValueError: If sphere or ray is None.
    """
    require(sphere, "Sphere")
    require(ray, "Ray")

    start = ray.start
    direction = ray.direction
    offset = start.sub(sphere.center)

    b = direction.scale(2).dot(offset)
    c = offset.dot(offset) - sphere.radius * sphere.radius
    discriminant = b * b - 4 * c
    if discriminant < 0:
        return None

    sqrt_d = math.sqrt(discriminant)
    l1 = (-b - sqrt_d) / 2
    l2 = (-b + sqrt_d) / 2

    outer = True
    if l1 != l2 and l1 > 0 and l2 > 0:
        distance_along = l1
    elif l1 != l2 and l1 <= 0 < l2:
        distance_along = l2
        outer = False
    elif l1 == l2:
        # Tangent ray: accepted even when the touching point is behind start
        distance_along = l1
    else:
        return None

    point = start.add(direction.scale(distance_along))
    return RayIntersection(
        point=point,
        distance=start.sub(point).norm(),
        outer=outer,
        normal=point.sub(sphere.center).normalize(),
        material=sphere.material,
    )
