"""Scene description: primitives and point light sources.

A Scene is built once by the caller for a render request and is only read
while pixels are computed, so it is shared by all workers without locking.

Example:
    >>> from src.pixelworks.core.vector import Vector3
    >>> from src.pixelworks.geometry.sphere import Material, Sphere
    >>> from src.pixelworks.scene.model import LightSource, Scene
    >>> scene = Scene()
    >>> scene = scene.add_object(Sphere(Vector3(0, 0, 0), 1.0, Material(1, 1, 1, 0.5, 0.5, 0.5, 10)))
    >>> scene = scene.add_light(LightSource(Vector3(5, 5, 5), 255, 255, 255))
    >>> len(scene.objects), len(scene.lights)
    (1, 1)
"""

from dataclasses import dataclass, field

from src.pixelworks.core.checks import require
from src.pixelworks.core.vector import Vector3
from src.pixelworks.geometry.intersectable import Intersectable


@dataclass(frozen=True)
class LightSource:
    """A point light with per-channel intensity.

    Attributes:
        point: Position of the light in world space.
        r: Red intensity, nominally 0-255 (not clamped).
        g: Green intensity, nominally 0-255 (not clamped).
        b: Blue intensity, nominally 0-255 (not clamped).
    """

    point: Vector3
    r: int
    g: int
    b: int


@dataclass(frozen=True)
class Scene:
    """An ordered collection of primitives and lights.

    Object order only matters when two objects are hit at exactly the same
    distance: the earlier one wins. Light order only changes the order in
    which contributions are accumulated.

    Attributes:
        objects: Primitives in the scene.
        lights: Point light sources illuminating the scene.
    """

    objects: tuple[Intersectable, ...] = field(default_factory=tuple)
    lights: tuple[LightSource, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but always store tuples
        object.__setattr__(self, "objects", tuple(self.objects))
        object.__setattr__(self, "lights", tuple(self.lights))

    def add_object(self, obj: Intersectable) -> "Scene":
        """Return a new scene with obj appended to the objects."""
        require(obj, "Scene object")
        return Scene(self.objects + (obj,), self.lights)

    def add_light(self, light: LightSource) -> "Scene":
        """Return a new scene with light appended to the lights."""
        require(light, "Light source")
        return Scene(self.objects, self.lights + (light,))
