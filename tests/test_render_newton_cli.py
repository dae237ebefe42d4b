"""Tests for the Newton fractal command-line script.

Tests cover:
- Root literals that start with "-" passed after "--"
- A full run writing a PNG
"""

from PIL import Image

from examples.render_newton import main, parse_args
from src.pixelworks.fractals.complex import Complex


class TestParseArgs:
    """Tests for argument parsing."""

    def test_imaginary_roots_after_separator(self):
        """Test "-i" and "-i2.71" are read as roots, not options."""
        args = parse_args(["--width", "8", "--height", "8", "--", "1", "-1", "i", "-i", "-i2.71"])

        assert args.roots == ["1", "-1", "i", "-i", "-i2.71"]
        assert args.width == 8
        assert args.height == 8
        assert Complex.parse(args.roots[3]) == Complex(0.0, -1.0)
        assert Complex.parse(args.roots[4]) == Complex(0.0, -2.71)

    def test_negative_bounds_before_separator(self):
        """Test negative bounds still parse as option values."""
        args = parse_args(["--bounds", "-1.9", "2.1", "-2.05", "1.95", "--", "-i", "i"])

        assert args.bounds == [-1.9, 2.1, -2.05, 1.95]
        assert args.roots == ["-i", "i"]


class TestMain:
    """Tests for the script entry point."""

    def test_renders_png(self, tmp_path):
        """Test a run with imaginary roots writes an image of the requested size."""
        output = tmp_path / "newton.png"

        status = main(
            [
                "--width", "8",
                "--height", "8",
                "--bounds", "-1.9", "2.1", "-2.05", "1.95",
                "--workers", "2",
                "--output", str(output),
                "--", "1", "-1", "i", "-i",
            ]
        )

        assert status == 0
        assert output.exists()
        with Image.open(output) as image:
            assert image.size == (8, 8)

    def test_too_few_roots(self, tmp_path, capsys):
        """Test a single root is reported as an error."""
        status = main(["--output", str(tmp_path / "one.png"), "--", "-i"])

        assert status == 1
        assert "at least two roots" in capsys.readouterr().err
