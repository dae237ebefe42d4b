"""View plane setup for primary ray generation.

The observer looks from the eye point toward the view point; the view point
is the center of a rectangular screen of size horizontal x vertical lying in
the plane perpendicular to the viewing direction. The screen is sampled on a
width x height pixel grid whose first row is the top edge.

The plane builds an orthonormal basis from the view parameters:
- z: points from the eye toward the view point
- y: the up vector with its z component removed (screen up)
- x: z cross y (screen right)

Example:
    >>> from src.pixelworks.camera.view_plane import setup_view_plane
    >>> from src.pixelworks.core.vector import Vector3
    >>> plane = setup_view_plane(
    ...     eye=Vector3(10, 0, 0),
    ...     view=Vector3(0, 0, 0),
    ...     view_up=Vector3(0, 0, 10),
    ...     horizontal=20.0,
    ...     vertical=20.0,
    ...     width=500,
    ...     height=500,
    ... )
    >>> top_left = plane.screen_point(0, 0)
"""

from dataclasses import dataclass

from src.pixelworks.core.checks import require, require_dimensions
from src.pixelworks.core.vector import Vector3


@dataclass(frozen=True)
class ViewPlane:
    """Precomputed screen geometry for a render request.

    Attributes:
        x_axis: Unit vector pointing right along the screen.
        y_axis: Unit vector pointing up along the screen.
        screen_corner: World position of the top-left screen corner.
        horizontal: Width of the screen in world units.
        vertical: Height of the screen in world units.
        width: Number of pixel columns.
        height: Number of pixel rows.
    """

    x_axis: Vector3
    y_axis: Vector3
    screen_corner: Vector3
    horizontal: float
    vertical: float
    width: int
    height: int

    def screen_point(self, x: int, y: int) -> Vector3:
        """Map a pixel to its point on the screen.

        Args:
            x: Pixel column, 0 at the left edge.
            y: Pixel row, 0 at the top edge.

        Returns:
            The world-space point of the pixel on the view plane.
        """
        right = self.x_axis.scale(self.horizontal * x / (self.width - 1))
        down = self.y_axis.scale(self.vertical * y / (self.height - 1))
        return self.screen_corner.add(right).sub(down)


def setup_view_plane(
    eye: Vector3,
    view: Vector3,
    view_up: Vector3,
    horizontal: float,
    vertical: float,
    width: int,
    height: int,
) -> ViewPlane:
    """Compute the screen basis and corner from view parameters.

    Args:
        eye: Position of the observer.
        view: Point the observer looks at (center of the screen).
        view_up: Approximate up direction; it need not be perpendicular to
            the viewing direction.
        horizontal: Screen width in world units.
        vertical: Screen height in world units.
        width: Number of pixel columns (at least 2).
        height: Number of pixel rows (at least 2).

    Returns:
        The view plane for the request.

    Raises:
        ValueError: If a point is None, the dimensions are too small, or the
            view parameters are degenerate (eye == view, or up parallel to
            the viewing direction).
    """
    require(eye, "Eye")
    require(view, "View")
    require(view_up, "View up")
    require_dimensions(width, height)

    up = view_up.normalize()
    z_axis = view.sub(eye).normalize()
    y_axis = up.sub(z_axis.scale(z_axis.dot(up))).normalize()
    x_axis = z_axis.cross(y_axis).normalize()

    screen_corner = view.sub(x_axis.scale(horizontal / 2)).add(y_axis.scale(vertical / 2))

    return ViewPlane(
        x_axis=x_axis,
        y_axis=y_axis,
        screen_corner=screen_corner,
        horizontal=horizontal,
        vertical=vertical,
        width=width,
        height=height,
    )
