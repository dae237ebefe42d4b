"""Pytest configuration for pixelworks tests.

This module provides shared fixtures for all test modules: small scenes for
the ray caster, the z^4 - 1 polynomial for the Newton fractal and observers
that collect whatever a producer delivers.
"""

import threading

import pytest

from src.pixelworks.core.vector import Vector3
from src.pixelworks.fractals.complex import Complex
from src.pixelworks.fractals.polynomial import ComplexRootedPolynomial
from src.pixelworks.geometry.sphere import Material, Sphere
from src.pixelworks.scene.model import LightSource, Scene


class CollectingRayTracerObserver:
    """Ray-trace observer that records every result it receives."""

    def __init__(self):
        self.results = []
        self.threads = []

    def accept_result(self, red, green, blue, request_no):
        self.results.append((red, green, blue, request_no))
        self.threads.append(threading.current_thread())


class CollectingFractalObserver:
    """Fractal observer that records every result it receives."""

    def __init__(self):
        self.results = []

    def accept_result(self, data, palette_size, request_no):
        self.results.append((data, palette_size, request_no))


@pytest.fixture
def diffuse_material():
    """Purely diffuse white material."""
    return Material(1.0, 1.0, 1.0, 0.0, 0.0, 0.0, 1.0)


@pytest.fixture
def unit_sphere(diffuse_material):
    """Sphere of radius 1 at the origin."""
    return Sphere(Vector3(0.0, 0.0, 0.0), 1.0, diffuse_material)


@pytest.fixture
def lit_sphere_scene(unit_sphere):
    """Unit sphere lit by a single light on the +z axis."""
    return Scene(
        objects=(unit_sphere,),
        lights=(LightSource(Vector3(0.0, 0.0, 5.0), 100, 100, 100),),
    )


@pytest.fixture
def demo_scene():
    """Three spheres and two lights seen from (10, 0, 0)."""
    return Scene(
        objects=(
            Sphere(Vector3(0, 0, 0), 3.0, Material(1, 0.3, 0.3, 0.5, 0.5, 0.5, 10)),
            Sphere(Vector3(-1.5, 4, 1), 1.2, Material(0.3, 1, 0.3, 0.6, 0.6, 0.6, 30)),
            Sphere(Vector3(1, -4, -2), 1.6, Material(0.3, 0.3, 1, 0.3, 0.3, 0.3, 5)),
        ),
        lights=(
            LightSource(Vector3(10, 5, 5), 100, 100, 100),
            LightSource(Vector3(8, -8, 6), 80, 80, 60),
        ),
    )


@pytest.fixture
def quartic():
    """The polynomial z^4 - 1 given by its roots 1, -1, i, -i."""
    return ComplexRootedPolynomial(Complex.ONE, Complex.ONE_NEG, Complex.IM, Complex.IM_NEG)


@pytest.fixture
def ray_observer():
    return CollectingRayTracerObserver()


@pytest.fixture
def fractal_observer():
    return CollectingFractalObserver()
