"""Unit tests for the Vector3 value type.

Tests cover:
- Component-wise arithmetic and operators
- Dot and cross products
- Length and normalization, including the zero vector
- Argument checks
"""

import math

import pytest

from src.pixelworks.core.vector import Point3D, Vector3


class TestVectorArithmetic:
    """Tests for addition, subtraction and scaling."""

    def test_add_and_sub(self):
        """Test component-wise addition and subtraction."""
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(4.0, -1.0, 0.5)

        assert a.add(b) == Vector3(5.0, 1.0, 3.5)
        assert a.sub(b) == Vector3(-3.0, 3.0, 2.5)

    def test_operators_match_methods(self):
        """Test that +, -, * and unary - agree with the named methods."""
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(0.0, 1.0, -1.0)

        assert a + b == a.add(b)
        assert a - b == a.sub(b)
        assert a * 2 == a.scale(2)
        assert 2 * a == a.scale(2)
        assert -a == Vector3(-1.0, -2.0, -3.0)

    def test_vector_times_vector_is_unsupported(self):
        """Test that multiplying two vectors raises TypeError."""
        with pytest.raises(TypeError):
            Vector3(1, 0, 0) * Vector3(0, 1, 0)

    def test_none_operand_rejected(self):
        """Test that None operands raise ValueError."""
        with pytest.raises(ValueError, match="cannot be None"):
            Vector3(1, 0, 0).add(None)
        with pytest.raises(ValueError, match="cannot be None"):
            Vector3(1, 0, 0).dot(None)

    def test_vectors_are_immutable(self):
        """Test that components cannot be reassigned."""
        v = Vector3(1.0, 2.0, 3.0)
        with pytest.raises(AttributeError):
            v.x = 5.0

    def test_point_alias(self):
        """Test that points and vectors share one type."""
        assert Point3D is Vector3


class TestVectorProducts:
    """Tests for dot and cross products."""

    def test_dot_product(self):
        """Test the scalar product."""
        assert Vector3(1, 2, 3).dot(Vector3(4, 5, 6)) == 32

    def test_cross_product_of_axes(self):
        """Test x cross y = z and y cross x = -z."""
        x = Vector3(1, 0, 0)
        y = Vector3(0, 1, 0)

        assert x.cross(y) == Vector3(0, 0, 1)
        assert y.cross(x) == Vector3(0, 0, -1)

    def test_cross_product_is_perpendicular(self):
        """Test that a x b is perpendicular to both a and b."""
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(-2.0, 0.5, 4.0)
        c = a.cross(b)

        assert abs(c.dot(a)) < 1e-12
        assert abs(c.dot(b)) < 1e-12


class TestVectorLength:
    """Tests for norm and normalize."""

    def test_norm(self):
        """Test the Euclidean length."""
        assert Vector3(3, 4, 12).norm() == 13

    def test_normalize_returns_unit_vector(self):
        """Test that normalize keeps direction and yields length 1."""
        v = Vector3(2.0, -3.0, 6.0).normalize()

        assert math.isclose(v.norm(), 1.0)
        assert v.to_tuple() == pytest.approx((2 / 7, -3 / 7, 6 / 7))

    def test_normalize_zero_vector_raises(self):
        """Test that the zero vector cannot be normalized."""
        with pytest.raises(ValueError, match="zero vector"):
            Vector3(0.0, 0.0, 0.0).normalize()
