"""Transform data structures for coordinate and view state representation."""
import math
from dataclasses import dataclass

from constants import MIN_SCALE, MAX_SCALE
from utils.geometry import Bounds


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Screen pixels (widget top-left origin)
    - World units (scene space, y down)
    - Logical cell units (export space)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


class ViewTransform:
    """Pan/zoom mapping between screen pixels and world units.

    screen = world * scale + offset
    world  = (screen - offset) / scale

    Scale always stays within [min_scale, max_scale].
    """

    def __init__(self, offset_x: float = 0.0, offset_y: float = 0.0, scale: float = 1.0,
                 min_scale: float = MIN_SCALE, max_scale: float = MAX_SCALE):
        self.offset_x = float(offset_x)
        self.offset_y = float(offset_y)
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.scale = max(min_scale, min(max_scale, float(scale)))

    # ========================================
    # Conversions
    # ========================================

    def world_to_screen(self, x: float, y: float) -> Vec2:
        return Vec2(x * self.scale + self.offset_x, y * self.scale + self.offset_y)

    def screen_to_world(self, x: float, y: float) -> Vec2:
        return Vec2((x - self.offset_x) / self.scale, (y - self.offset_y) / self.scale)

    def visible_world_bounds(self, width: float, height: float) -> Bounds:
        """World-space rectangle covered by a viewport of width x height pixels."""
        top_left = self.screen_to_world(0, 0)
        bottom_right = self.screen_to_world(width, height)
        return Bounds(top_left.x, top_left.y, bottom_right.x, bottom_right.y)

    # ========================================
    # Mutators
    # ========================================

    def pan(self, dx: float, dy: float) -> None:
        """Shift the view by a screen-space delta."""
        self.offset_x += dx
        self.offset_y += dy

    def zoom_at_point(self, sx: float, sy: float, new_scale: float) -> bool:
        """Zoom keeping the world point under (sx, sy) fixed on screen

        Args:
            sx, sy: Screen-space anchor (usually the cursor)
            new_scale: Requested scale

        Returns:
            False (and no change) if new_scale is outside [min_scale, max_scale]
            or not a finite number, True otherwise
        """
        if not math.isfinite(new_scale) or new_scale < self.min_scale or new_scale > self.max_scale:
            return False
        anchor = self.screen_to_world(sx, sy)
        self.scale = new_scale
        self.offset_x = sx - anchor.x * new_scale
        self.offset_y = sy - anchor.y * new_scale
        return True

    def set_state(self, offset_x: float, offset_y: float, scale: float) -> None:
        """Assign pan/zoom directly (used when restoring snapshots)."""
        self.offset_x = float(offset_x)
        self.offset_y = float(offset_y)
        self.scale = max(self.min_scale, min(self.max_scale, float(scale)))

    def copy(self) -> 'ViewTransform':
        return ViewTransform(self.offset_x, self.offset_y, self.scale,
                             self.min_scale, self.max_scale)

    def __repr__(self):
        return f"ViewTransform(offset=({self.offset_x}, {self.offset_y}), scale={self.scale})"
