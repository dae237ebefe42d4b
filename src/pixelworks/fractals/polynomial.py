"""Complex polynomials in coefficient form and in root form.

ComplexPolynomial stores coefficients from degree 0 upward:

    ComplexPolynomial(c0, c1, c2)  ->  c0 + c1*z + c2*z^2

ComplexRootedPolynomial stores the roots of a monic polynomial:

    ComplexRootedPolynomial(r1, r2)  ->  (z - r1) * (z - r2)

The Newton kernel evaluates P in root form, P' in coefficient form, and
matches converged points against the roots.

Example:
    >>> from src.pixelworks.fractals.complex import Complex
    >>> from src.pixelworks.fractals.polynomial import ComplexRootedPolynomial
    >>> rooted = ComplexRootedPolynomial(Complex.ONE, Complex.ONE_NEG)
    >>> str(rooted.to_complex_polynom())
    'f(z) = z^2  -  1'
"""

from src.pixelworks.core.checks import require
from src.pixelworks.fractals.complex import Complex


class ComplexPolynomial:
    """Immutable coefficient-form complex polynomial.

    Trailing (highest degree) zero coefficients are dropped on construction,
    but at least one coefficient is always kept.
    """

    __slots__ = ("_factors",)

    def __init__(self, *factors: Complex) -> None:
        """Create a polynomial from coefficients of degree 0 to n.

        Raises:
            ValueError: If any coefficient is None.
        """
        trimmed = [require(factor, "Complex factor") for factor in factors]
        while len(trimmed) > 1 and trimmed[-1] == Complex.ZERO:
            trimmed.pop()
        self._factors: tuple[Complex, ...] = tuple(trimmed)

    @property
    def factors(self) -> tuple[Complex, ...]:
        """Coefficients ordered from degree 0 upward."""
        return self._factors

    def order(self) -> int:
        """Return the degree, i.e. coefficient count minus one."""
        return len(self._factors) - 1

    def multiply(self, p: "ComplexPolynomial") -> "ComplexPolynomial":
        """Multiply this polynomial by p.

        Raises:
            ValueError: If p is None.
        """
        require(p, "Polynomial")
        product = [Complex.ZERO] * (len(self._factors) + len(p._factors) - 1)
        for i, a in enumerate(self._factors):
            for j, b in enumerate(p._factors):
                product[i + j] = product[i + j].add(a.multiply(b))
        return ComplexPolynomial(*product)

    def derive(self) -> "ComplexPolynomial":
        """Return the first derivative.

        The derivative of a constant is the zero polynomial, which still has
        one coefficient.
        """
        if len(self._factors) == 1:
            return ComplexPolynomial(Complex.ZERO)
        return ComplexPolynomial(
            *(factor.multiply(Complex(i, 0)) for i, factor in enumerate(self._factors) if i > 0)
        )

    def apply(self, z: Complex) -> Complex:
        """Evaluate the polynomial at z by summing c_i * z^i.

        Raises:
            ValueError: If z is None.
        """
        require(z, "Complex number")
        value = Complex.ZERO
        for i, factor in enumerate(self._factors):
            if factor == Complex.ZERO:
                continue
            value = value.add(factor.multiply(z.power(i)))
        return value

    def __call__(self, z: Complex) -> Complex:
        return self.apply(z)

    def __str__(self) -> str:
        terms = ["f(z) = "]
        first = len(self._factors) - 1
        for i in range(first, -1, -1):
            factor = self._factors[i]
            if factor == Complex.ZERO and len(self._factors) > 1:
                continue

            real = factor.real
            im = factor.imaginary
            if real == 0 or im == 0:
                if (real < 0 or im < 0) and i != first:
                    terms.append("  -  ")
                    factor = factor.negate()
                    real = factor.real
                    im = factor.imaginary
                elif i != first:
                    terms.append(" + ")
                if real == -1 or im == -1:
                    terms.append("-")
                elif (real != 1 and im != 1) or i == 0:
                    terms.append(str(factor))
            else:
                if i != first:
                    terms.append(" + ")
                terms.append(f"({factor})")

            if i == 1:
                terms.append("z")
            elif i != 0:
                terms.append(f"z^{i}")
        return "".join(terms)

    def __repr__(self) -> str:
        return f"ComplexPolynomial({', '.join(map(repr, self._factors))})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComplexPolynomial):
            return NotImplemented
        return self._factors == other._factors

    def __hash__(self) -> int:
        return hash(self._factors)


class ComplexRootedPolynomial:
    """Immutable monic complex polynomial given by its roots."""

    __slots__ = ("_roots",)

    def __init__(self, *roots: Complex) -> None:
        """Create a polynomial (z - r1)(z - r2)...(z - rn).

        Raises:
            ValueError: If any root is None.
        """
        self._roots: tuple[Complex, ...] = tuple(require(root, "Complex root") for root in roots)

    @property
    def roots(self) -> tuple[Complex, ...]:
        return self._roots

    def apply(self, z: Complex) -> Complex:
        """Evaluate the product of (z - root) over all roots.

        Raises:
            ValueError: If z is None.
        """
        require(z, "Complex number")
        value = Complex.ONE
        for root in self._roots:
            value = value.multiply(z.sub(root))
        return value

    def __call__(self, z: Complex) -> Complex:
        return self.apply(z)

    def to_complex_polynom(self) -> ComplexPolynomial:
        """Expand into coefficient form, starting from the constant 1."""
        result = ComplexPolynomial(Complex.ONE)
        for root in self._roots:
            result = result.multiply(ComplexPolynomial(root.negate(), Complex.ONE))
        return result

    def index_of_closest_root_for(self, z: Complex, threshold: float) -> int:
        """Find the root nearest to z within threshold.

        Every root is examined; the accepted distance shrinks to the best
        match found so far, so the globally nearest qualifying root wins.

        Args:
            z: The point to match.
            threshold: Largest accepted distance between z and a root.

        Returns:
            Index of the nearest root with distance <= threshold, or -1.

        Raises:
            ValueError: If z is None.
        """
        require(z, "Complex number")
        index = -1
        for i, root in enumerate(self._roots):
            distance = z.sub(root).module()
            if distance <= threshold:
                threshold = distance
                index = i
        return index

    def __str__(self) -> str:
        terms = ["f(z) = "]
        for root in self._roots:
            real = root.real
            im = root.imaginary
            if (real == 0 and im < 0) or (im == 0 and real < 0):
                terms.append(f"(z+{root.negate()})")
            elif real == 0 or im == 0:
                terms.append(f"(z-{root})")
            else:
                terms.append(f"(z-({root}))")
        return "".join(terms)

    def __repr__(self) -> str:
        return f"ComplexRootedPolynomial({', '.join(map(repr, self._roots))})"

    def __len__(self) -> int:
        return len(self._roots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComplexRootedPolynomial):
            return NotImplemented
        return self._roots == other._roots

    def __hash__(self) -> int:
        return hash(self._roots)
