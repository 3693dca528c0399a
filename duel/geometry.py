"""Axis-aligned rectangle helpers shared by every collision check."""

from __future__ import annotations

from typing import NamedTuple


class Bounds(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class Arena(NamedTuple):
    width: int
    height: int

    def contains(self, px: float, py: float) -> bool:
        """Inclusive bounds check; a point on the edge is still inside."""
        return 0 <= px <= self.width and 0 <= py <= self.height


def intersects(a, b) -> bool:
    """True if two rectangles overlap.

    Rectangles that only touch along an edge do not overlap. Accepts any
    objects exposing ``x``, ``y``, ``width`` and ``height``.
    """
    return not (
        b.x >= a.x + a.width
        or b.x + b.width <= a.x
        or b.y >= a.y + a.height
        or b.y + b.height <= a.y
    )


def point_inside(px: float, py: float, rect) -> bool:
    """Strict interior containment: points on the border are outside."""
    return rect.x < px < rect.x + rect.width and rect.y < py < rect.y + rect.height


def clamp(value: float, lo: float, hi: float) -> float:
    return lo if value < lo else hi if value > hi else value


__all__ = ["Arena", "Bounds", "intersects", "point_inside", "clamp"]
