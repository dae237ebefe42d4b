"""Tests for scene-level intersection and the shadow test.

Tests cover:
- Nearest-hit selection across objects
- Tie-breaking by object order
- Shadow ray occlusion and the self-shadowing tolerance
- Scene construction helpers
"""

import pytest

from src.pixelworks.core.ray import Ray
from src.pixelworks.core.vector import Vector3
from src.pixelworks.geometry.sphere import Material, Sphere
from src.pixelworks.scene.intersection import SHADOW_EPSILON, intersect_scene, is_shadowed
from src.pixelworks.scene.model import LightSource, Scene

RED = Material(1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0)
BLUE = Material(0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)

DOWN_Z = Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0))


class TestSceneModel:
    """Tests for Scene and LightSource."""

    def test_empty_scene(self):
        """Test a default scene has no objects and no lights."""
        scene = Scene()

        assert scene.objects == ()
        assert scene.lights == ()

    def test_lists_are_stored_as_tuples(self, unit_sphere):
        """Test that iterables passed to Scene become tuples."""
        light = LightSource(Vector3(1, 1, 1), 255, 255, 255)
        scene = Scene(objects=[unit_sphere], lights=[light])

        assert scene.objects == (unit_sphere,)
        assert scene.lights == (light,)

    def test_add_returns_new_scene(self, unit_sphere):
        """Test add_object and add_light leave the starting scene untouched."""
        light = LightSource(Vector3(1, 1, 1), 255, 255, 255)
        empty = Scene()

        scene = empty.add_object(unit_sphere).add_light(light)

        assert empty.objects == ()
        assert empty.lights == ()
        assert scene.objects == (unit_sphere,)
        assert scene.lights == (light,)

    def test_add_none_raises(self):
        """Test that None cannot be added to a scene."""
        with pytest.raises(ValueError):
            Scene().add_object(None)
        with pytest.raises(ValueError):
            Scene().add_light(None)


class TestIntersectScene:
    """Tests for the nearest-hit query."""

    def test_empty_scene_returns_none(self):
        """Test that nothing is hit in an empty scene."""
        assert intersect_scene(Scene(), DOWN_Z) is None

    def test_nearest_object_wins(self):
        """Test the closer of two spheres is returned regardless of order."""
        near = Sphere(Vector3(0.0, 0.0, 0.0), 1.0, RED)
        far = Sphere(Vector3(0.0, 0.0, -5.0), 1.0, BLUE)

        for objects in ((near, far), (far, near)):
            hit = intersect_scene(Scene(objects=objects), DOWN_Z)
            assert hit is not None
            assert hit.material is RED
            assert hit.distance == pytest.approx(4.0)

    def test_tie_keeps_first_object(self):
        """Test that on an exact distance tie the first listed object wins."""
        first = Sphere(Vector3(0.0, 0.0, 0.0), 1.0, RED)
        second = Sphere(Vector3(0.0, 0.0, 0.0), 1.0, BLUE)

        assert intersect_scene(Scene(objects=(first, second)), DOWN_Z).material is RED
        assert intersect_scene(Scene(objects=(second, first)), DOWN_Z).material is BLUE

    def test_miss_returns_none(self, unit_sphere):
        """Test a ray that misses every object."""
        ray = Ray(Vector3(0.0, 5.0, 5.0), Vector3(0.0, 0.0, -1.0))

        assert intersect_scene(Scene(objects=(unit_sphere,)), ray) is None


class TestShadow:
    """Tests for the shadow test."""

    def test_far_side_is_shadowed(self, unit_sphere):
        """Test a point on the far side of a sphere is occluded by it."""
        scene = Scene(objects=(unit_sphere,))
        light = LightSource(Vector3(0.0, 0.0, 5.0), 100, 100, 100)

        assert is_shadowed(scene, light, Vector3(0.0, 0.0, -1.0))

    def test_lit_point_does_not_shadow_itself(self, unit_sphere):
        """Test the facing surface point is not occluded by its own sphere."""
        scene = Scene(objects=(unit_sphere,))
        light = LightSource(Vector3(0.0, 0.0, 5.0), 100, 100, 100)

        assert not is_shadowed(scene, light, Vector3(0.0, 0.0, 1.0))

    def test_blocker_between_light_and_point(self, unit_sphere):
        """Test a second sphere between light and point casts a shadow."""
        blocker = Sphere(Vector3(0.0, 0.0, 3.0), 0.5, RED)
        scene = Scene(objects=(unit_sphere, blocker))
        light = LightSource(Vector3(0.0, 0.0, 5.0), 100, 100, 100)

        assert is_shadowed(scene, light, Vector3(0.0, 0.0, 1.0))

    def test_no_objects_no_shadow(self):
        """Test nothing is shadowed in an empty scene."""
        light = LightSource(Vector3(0.0, 0.0, 5.0), 100, 100, 100)

        assert not is_shadowed(Scene(), light, Vector3(0.0, 0.0, 0.0))

    def test_large_epsilon_hides_blocker(self, unit_sphere):
        """Test a blocker within epsilon of the point does not occlude it."""
        scene = Scene(objects=(unit_sphere,))
        light = LightSource(Vector3(0.0, 0.0, 5.0), 100, 100, 100)

        assert is_shadowed(scene, light, Vector3(0.0, 0.0, -1.0), epsilon=SHADOW_EPSILON)
        assert not is_shadowed(scene, light, Vector3(0.0, 0.0, -1.0), epsilon=2.5)
