"""Camera module for primary ray generation.

Components:
    view_plane: Screen basis from eye / view / up and pixel-to-screen mapping

Primary rays are built per pixel as:
    Ray.from_points(eye, plane.screen_point(x, y))
"""

from .view_plane import ViewPlane, setup_view_plane

__all__ = [
    "ViewPlane",
    "setup_view_plane",
]
