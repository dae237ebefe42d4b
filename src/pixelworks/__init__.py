"""Parallel per-pixel rendering engine.

This package renders images by evaluating an independent numerical function
at every pixel and writing the result into a shared buffer. Two kernels are
provided:
- Ray casting over spheres and point lights with Phong shading and shadows
- Newton-Raphson root convergence over a complex polynomial (basin coloring)

Subpackages:
    core: Vector/ray value types, argument checks, fork-join pool, shading
    camera: View plane setup and screen-point mapping
    geometry: Sphere primitive and intersection dispatch
    scene: Lights, scenes and scene-level ray queries
    raytracer: Sequential and recursively split parallel ray-trace producers
    fractals: Complex numbers, polynomials and the Newton fractal producer
    preview: Buffer-to-image conversion, PNG export and static preview
"""

__version__ = "0.1.0"
