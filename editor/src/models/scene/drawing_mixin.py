"""
Scene Drawing Mixin

Mutators driven by the drawing instruments, plus raw entity access.

Methods:
    Drawing:
        - cell_coord_at
        - grid_draw / grid_draw_at
        - freeform_stroke / end_stroke
        - place_object
        - erase

    Entity access:
        - add_mark / remove_mark / get_mark / marks
        - add_object / remove_object / get_object / objects
"""

import math
from typing import List, Optional, Tuple

from ._internal.layer import CellCoord, cell_key
from ._internal.entities import FreeformMark, PlacedObject
from ._internal.settings import DrawDefaults
from constants import BASE_CELL_SIZE


class SceneDrawingMixin:
    """Mixin providing drawing mutators for Scene

    This mixin assumes the parent class has:
        - self._marks / self._mark_order
        - self._objects / self._object_order
        - self._last_stroke_point
        - self.settings: SceneSettings
        - self.active_layer: Layer
        - self.selection: Selection
        - self._logger: logging.Logger instance
    """

    def cell_coord_at(self, x: float, y: float) -> CellCoord:
        """Lattice cell containing world point (x, y)."""
        size = self.settings.cell_size
        return (math.floor(x / size), math.floor(y / size))

    # ========================================
    # Grid drawing
    # ========================================

    def grid_draw(self, coord: CellCoord, style: Optional[DrawDefaults] = None) -> bool:
        """Upsert a cell on the active layer

        Args:
            coord: Cell coordinates
            style: Fill/border style, defaults to settings.draw_defaults

        Returns:
            False if an identical cell was already there (no-op)
        """
        style = style or self.settings.draw_defaults
        cell = style.make_cell(coord[0], coord[1])
        return self.active_layer.set_cell(cell)

    def grid_draw_at(self, x: float, y: float, style: Optional[DrawDefaults] = None) -> bool:
        return self.grid_draw(self.cell_coord_at(x, y), style)

    # ========================================
    # Free drawing
    # ========================================

    def freeform_stroke(self, x: float, y: float) -> Optional[str]:
        """Emit a mark at (x, y) if the stroke has travelled far enough

        A mark is emitted when there is no previous point, when period is 0,
        or when the distance from the last emitted point exceeds
        period * cell_size. The last point only moves on emission.

        Returns:
            Id of the new mark, or None if gated
        """
        defaults = self.settings.mark_defaults
        cell_size = self.settings.cell_size
        if defaults.period > 0 and self._last_stroke_point is not None:
            lx, ly = self._last_stroke_point
            if math.hypot(x - lx, y - ly) <= defaults.period * cell_size:
                return None

        mark = FreeformMark(
            x=x,
            y=y,
            radius=defaults.size * cell_size / 2,
            fill_color=defaults.fill_color,
            stroke_color=defaults.stroke_color,
            asset=defaults.asset,
        )
        self._last_stroke_point = (x, y)
        return self.add_mark(mark)

    def end_stroke(self) -> None:
        """Forget the last stroke point so the next stroke starts fresh."""
        self._last_stroke_point = None

    # ========================================
    # Objects
    # ========================================

    def place_object(self, x: float, y: float, natural_width: float, natural_height: float,
                     asset: Optional[str] = None) -> str:
        """Place an object centered at (x, y)

        Size follows the asset's natural pixel size scaled by
        cell_size / BASE_CELL_SIZE, so it tracks the logical grid scale
        and not the live zoom.

        Returns:
            Id of the new object
        """
        factor = self.settings.cell_size / BASE_CELL_SIZE
        obj = PlacedObject(
            x=x,
            y=y,
            width=natural_width * factor,
            height=natural_height * factor,
            rotation=0.0,
            asset=asset if asset is not None else self.settings.object_asset_ref,
        )
        return self.add_object(obj)

    # ========================================
    # Erase
    # ========================================

    def erase(self, x: float, y: float) -> bool:
        """Remove whatever lies under world point (x, y)

        - the active-layer cell containing the point
        - every mark whose center is closer than its radius
          (undefined radius falls back to half a cell)
        - every object whose axis-aligned box contains the point
          (rotation ignored)

        Returns:
            True if anything was removed
        """
        removed = False

        cx, cy = self.cell_coord_at(x, y)
        key = cell_key(cx, cy)
        if self.active_layer.remove_cell(key):
            self.selection.discard_cell(key)
            removed = True

        fallback = self.settings.cell_size / 2
        for mark_id in list(self._mark_order):
            mark = self._marks[mark_id]
            if math.hypot(x - mark.x, y - mark.y) < mark.effective_radius(fallback):
                self.remove_mark(mark_id)
                removed = True

        for obj_id in list(self._object_order):
            if self._objects[obj_id].bounds().contains(x, y):
                self.remove_object(obj_id)
                removed = True

        return removed

    # ========================================
    # Entity access
    # ========================================

    def add_mark(self, mark: FreeformMark, mark_id: Optional[str] = None) -> str:
        """Add a mark on top of the z-order

        Returns:
            The mark id (generated if not given)
        """
        mark_id = mark_id or self._new_id()
        if mark_id in self._marks:
            raise ValueError(f"Mark id already exists: {mark_id}")
        self._marks[mark_id] = mark
        self._mark_order.append(mark_id)
        return mark_id

    def remove_mark(self, mark_id: str) -> FreeformMark:
        """Remove a mark

        Raises:
            KeyError: If no mark has this id
        """
        mark = self._marks.pop(mark_id)
        self._mark_order.remove(mark_id)
        self.selection.discard_mark(mark_id)
        return mark

    def get_mark(self, mark_id: str) -> FreeformMark:
        return self._marks[mark_id]

    def has_mark(self, mark_id: str) -> bool:
        return mark_id in self._marks

    def marks(self) -> List[Tuple[str, FreeformMark]]:
        """(id, mark) pairs bottom to top."""
        return [(mark_id, self._marks[mark_id]) for mark_id in self._mark_order]

    @property
    def mark_count(self) -> int:
        return len(self._marks)

    def add_object(self, obj: PlacedObject, obj_id: Optional[str] = None) -> str:
        """Add an object on top of the z-order

        Returns:
            The object id (generated if not given)
        """
        obj_id = obj_id or self._new_id()
        if obj_id in self._objects:
            raise ValueError(f"Object id already exists: {obj_id}")
        self._objects[obj_id] = obj
        self._object_order.append(obj_id)
        return obj_id

    def remove_object(self, obj_id: str) -> PlacedObject:
        """Remove an object

        Raises:
            KeyError: If no object has this id
        """
        obj = self._objects.pop(obj_id)
        self._object_order.remove(obj_id)
        self.selection.discard_object(obj_id)
        return obj

    def get_object(self, obj_id: str) -> PlacedObject:
        return self._objects[obj_id]

    def has_object(self, obj_id: str) -> bool:
        return obj_id in self._objects

    def objects(self) -> List[Tuple[str, PlacedObject]]:
        """(id, object) pairs bottom to top."""
        return [(obj_id, self._objects[obj_id]) for obj_id in self._object_order]

    @property
    def object_count(self) -> int:
        return len(self._objects)
