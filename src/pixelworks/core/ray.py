"""Ray data structure for the ray caster.

A ray is a starting point plus a unit direction. Primary rays run from the
eye through a point on the view plane; shadow rays run from a light source
toward a visible surface point.

Example:
    >>> from src.pixelworks.core.ray import Ray
    >>> from src.pixelworks.core.vector import Vector3
    >>> ray = Ray.from_points(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 5.0))
    >>> ray.point_at(2.0)
    Vector3(x=0.0, y=0.0, z=2.0)
"""

from dataclasses import dataclass

from src.pixelworks.core.checks import require
from src.pixelworks.core.vector import Vector3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        start: The origin of the ray.
        direction: The direction of the ray. Rays built with from_points
            always carry a unit-length direction.
    """

    start: Vector3
    direction: Vector3

    @classmethod
    def from_points(cls, start: Vector3, target: Vector3) -> "Ray":
        """Build a ray starting at start and pointing toward target.

        Args:
            start: The origin of the ray.
            target: Any point the ray passes through.

        Returns:
            A ray with direction normalize(target - start).

        Raises:
            ValueError: If either point is None or both points coincide.
        """
        require(start, "Start point")
        require(target, "Target point")
        return cls(start=start, direction=target.sub(start).normalize())

    def point_at(self, t: float) -> Vector3:
        """Compute the point start + t * direction."""
        return self.start.add(self.direction.scale(t))
