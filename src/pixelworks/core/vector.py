"""Immutable 3D vector used for points and directions.

The same type represents both points and direction vectors, so the ray
caster can subtract two points to obtain a direction and add a scaled
direction to a point without conversions.

Example:
    >>> from src.pixelworks.core.vector import Vector3
    >>> a = Vector3(1.0, 0.0, 0.0)
    >>> b = Vector3(0.0, 1.0, 0.0)
    >>> a.cross(b)
    Vector3(x=0.0, y=0.0, z=1.0)
"""

import math
from dataclasses import dataclass

from src.pixelworks.core.checks import require


@dataclass(frozen=True)
class Vector3:
    """A point or vector in 3D space.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    def add(self, other: "Vector3") -> "Vector3":
        """Return the component-wise sum of this vector and other."""
        require(other, "Addend")
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: "Vector3") -> "Vector3":
        """Return this vector minus other."""
        require(other, "Subtrahend")
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> "Vector3":
        """Return this vector multiplied by a scalar."""
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: "Vector3") -> float:
        """Compute the scalar (dot) product with other."""
        require(other, "Vector")
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        """Compute the vector (cross) product self x other."""
        require(other, "Vector")
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        """Return the Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> "Vector3":
        """Return a unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.norm()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero vector.")
        return Vector3(self.x / length, self.y / length, self.z / length)

    def __add__(self, other: "Vector3") -> "Vector3":
        return self.add(other)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return self.sub(other)

    def __mul__(self, factor: float) -> "Vector3":
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return self.scale(factor)

    def __rmul__(self, factor: float) -> "Vector3":
        return self.__mul__(factor)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


# Points and vectors share a representation
Point3D = Vector3
