"""Line number rendering."""

from __future__ import annotations

from .models import NumberFormat


def render_number(number: int, width: int, number_format: NumberFormat) -> str:
    """Render a line number into a field of at least `width` characters.

    Numbers wider than the field are never truncated; the field grows to fit.
    Zero padding is inserted after a leading minus sign.

    Args:
        number: Line number to render; may be negative.
        width: Minimum field width.
        number_format: Justification rule.

    Returns:
        str: The rendered field.

    Examples:
        render_number(7, 4, NumberFormat.RIGHT_ZERO)  # "0007"
        render_number(7, 4, NumberFormat.RIGHT)  # "   7"
        render_number(7, 4, NumberFormat.LEFT)  # "7   "
        render_number(-7, 4, NumberFormat.RIGHT_ZERO)  # "-007"
    """
    if number_format is NumberFormat.LEFT:
        return f"{number:<{width}d}"
    if number_format is NumberFormat.RIGHT:
        return f"{number:>{width}d}"
    if number_format is NumberFormat.RIGHT_ZERO:
        return f"{number:0{width}d}"
    raise ValueError(f"Unsupported number format: {number_format!r}")


def blank_prefix(width: int) -> str:
    """Padding that stands in for the number field on unnumbered lines."""
    return " " * width
