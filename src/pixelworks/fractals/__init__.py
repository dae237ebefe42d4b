"""Fractals module: complex algebra and the Newton-Raphson fractal.

Components:
    complex: Immutable complex number, root-literal parsing and formatting
    polynomial: Coefficient-form and root-form complex polynomials
    newton: Per-pixel Newton kernel, strip partitioning and the producer

The producer delivers one row-major int16 buffer of palette indices
(0 = unconverged, k = basin of root k - 1) plus the palette size.
"""

from .complex import Complex, ComplexParseError
from .newton import (
    ComplexViewport,
    FractalResultObserver,
    NewtonConfig,
    NewtonFractalProducer,
    compute_strip,
    newton_index,
    render_serial,
    strip_ranges,
)
from .polynomial import ComplexPolynomial, ComplexRootedPolynomial

__all__ = [
    "Complex",
    "ComplexParseError",
    "ComplexPolynomial",
    "ComplexRootedPolynomial",
    "ComplexViewport",
    "FractalResultObserver",
    "NewtonConfig",
    "NewtonFractalProducer",
    "compute_strip",
    "newton_index",
    "render_serial",
    "strip_ranges",
]
