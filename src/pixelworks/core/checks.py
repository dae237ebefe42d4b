"""Argument checks shared by the math value types."""

from typing import TypeVar

T = TypeVar("T")


def require(value: T | None, name: str) -> T:
    """Return value unchanged, or raise if it is None.

    Args:
        value: The argument to check.
        name: Human-readable argument name used in the error message.

    Returns:
        The given value.

    Raises:
        ValueError: If value is None.
    """
    if value is None:
        raise ValueError(f"{name} cannot be None.")
    return value


def require_non_negative(n: int, name: str = "n") -> int:
    """Return n unchanged, or raise if it is negative.

    Raises:
        ValueError: If n is less than zero.
    """
    if n < 0:
        raise ValueError(f"The exponent {name} must be a number equal to or higher than zero.")
    return n


def require_dimensions(width: int, height: int) -> None:
    """Validate pixel dimensions for the pixel-to-plane mappings.

    Both mappings divide by (width - 1) and (height - 1), so an image must be
    at least two pixels in each direction.

    Raises:
        ValueError: If width or height is smaller than 2.
    """
    if width < 2 or height < 2:
        raise ValueError(f"Image dimensions must be at least 2x2, got {width}x{height}")
