"""
Grid Map Editor - Geometry Utilities

Pure math for hit-testing, selection rectangles and group transforms.
No Qt dependencies; everything works on plain floats and (x, y) tuples
in world units.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

Point = Tuple[float, float]

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle given by its min and max corners."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float) -> bool:
        """Inclusive point containment."""
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def overlaps(self, other: 'Bounds') -> bool:
        """Strict overlap test; rectangles that only touch do not overlap."""
        return (self.min_x < other.max_x and self.max_x > other.min_x and
                self.min_y < other.max_y and self.max_y > other.min_y)

    def expanded(self, amount: float) -> 'Bounds':
        return Bounds(self.min_x - amount, self.min_y - amount,
                      self.max_x + amount, self.max_y + amount)

    def union(self, other: 'Bounds') -> 'Bounds':
        return Bounds(min(self.min_x, other.min_x), min(self.min_y, other.min_y),
                      max(self.max_x, other.max_x), max(self.max_y, other.max_y))


def normalize_rect(x1: float, y1: float, x2: float, y2: float) -> Bounds:
    """Build Bounds from two arbitrary corner points (e.g. a drag start/end)."""
    return Bounds(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))


def point_in_circle(px: float, py: float, cx: float, cy: float, radius: float) -> bool:
    """Strict circle containment: distance < radius."""
    return math.hypot(px - cx, py - cy) < radius


def rotate_point(px: float, py: float, cx: float, cy: float, radians: float) -> Point:
    """Rotate a point around a center

    Args:
        px, py: Point to rotate
        cx, cy: Rotation center
        radians: Rotation angle (positive = clockwise in screen space, y down)

    Returns:
        Tuple of (x, y) rotated coordinates
    """
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    dx = px - cx
    dy = py - cy
    return (cx + dx * cos_a - dy * sin_a,
            cy + dx * sin_a + dy * cos_a)


def scale_point(px: float, py: float, cx: float, cy: float, factor: float) -> Point:
    """Scale a point's offset from a center by factor."""
    return (cx + (px - cx) * factor, cy + (py - cy) * factor)


def normalize_angle(radians: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    wrapped = math.fmod(radians, TWO_PI)
    if wrapped < 0:
        wrapped += TWO_PI
    # fmod of a tiny negative can round back up to exactly 2*pi
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def centroid(points: Iterable[Point]) -> Point:
    """Arithmetic mean of points

    Raises:
        ValueError: If points is empty
    """
    pts = list(points)
    if not pts:
        raise ValueError("centroid of empty point set")
    sx = sum(p[0] for p in pts)
    sy = sum(p[1] for p in pts)
    return (sx / len(pts), sy / len(pts))
