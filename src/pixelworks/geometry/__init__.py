"""Geometry module for scene primitives.

Components:
    sphere: Sphere primitive, Phong material and intersection record
    intersectable: Dispatch from a primitive's type to its intersection test

Ray-object intersection follows the pattern:
    intersection = find_closest_intersection(obj, ray)  # RayIntersection | None
"""

from .intersectable import Intersectable, find_closest_intersection
from .sphere import Material, RayIntersection, Sphere, intersect_sphere

__all__ = [
    "Intersectable",
    "Material",
    "RayIntersection",
    "Sphere",
    "find_closest_intersection",
    "intersect_sphere",
]
