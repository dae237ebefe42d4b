"""Scene module for scene description and scene-level queries.

Components:
    model: LightSource and Scene value types
    intersection: Nearest-hit query and shadow-ray occlusion test

Scenes are authored by the caller (see examples/render_spheres.py) and are
never modified while a frame is being computed.
"""

from .intersection import SHADOW_EPSILON, intersect_scene, is_shadowed
from .model import LightSource, Scene

__all__ = [
    "SHADOW_EPSILON",
    "LightSource",
    "Scene",
    "intersect_scene",
    "is_shadowed",
]
