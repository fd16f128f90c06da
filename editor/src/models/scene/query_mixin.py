"""
Scene Query Mixin

Hit-testing, selection building and bounding-box queries.

Methods:
    - topmost_at
    - is_hit_selected
    - select_hit / select_at / select_in_rect / finalize_selection
    - clear_selection / prune_selection
    - selection_centroid
    - logical_bounding_box
"""

import math
from collections import namedtuple
from typing import Optional

from models.selection import Selection
from models.transform import Vec2
from utils.geometry import Bounds, normalize_rect, point_in_circle, centroid
from constants import EMPTY_SCENE_BOUNDS, EXPORT_PADDING

HIT_OBJECT = 'object'
HIT_MARK = 'mark'
HIT_CELL = 'cell'

# kind is HIT_OBJECT / HIT_MARK / HIT_CELL; id is the object/mark id or the cell key
HitResult = namedtuple('HitResult', ['kind', 'id'])


class SceneQueryMixin:
    """Mixin providing query and selection operations for Scene

    This mixin assumes the parent class has:
        - self._marks / self._mark_order
        - self._objects / self._object_order
        - self._layers / self.active_layer
        - self.settings: SceneSettings
        - self.selection: Selection
    """

    # ========================================
    # Hit testing
    # ========================================

    def topmost_at(self, x: float, y: float) -> Optional[HitResult]:
        """Topmost item under world point (x, y)

        Objects (top to bottom, rotation ignored) win over marks
        (top to bottom, distance < radius), which win over the
        active layer's cell.
        """
        for obj_id in reversed(self._object_order):
            if self._objects[obj_id].bounds().contains(x, y):
                return HitResult(HIT_OBJECT, obj_id)

        for mark_id in reversed(self._mark_order):
            mark = self._marks[mark_id]
            if point_in_circle(x, y, mark.x, mark.y, mark.radius or 0.0):
                return HitResult(HIT_MARK, mark_id)

        cell = self.active_layer.get_cell(*self.cell_coord_at(x, y))
        if cell is not None:
            return HitResult(HIT_CELL, cell.key)
        return None

    def is_hit_selected(self, hit: Optional[HitResult]) -> bool:
        if hit is None:
            return False
        if hit.kind == HIT_OBJECT:
            return hit.id in self.selection.object_ids
        if hit.kind == HIT_MARK:
            return hit.id in self.selection.mark_ids
        return hit.id in self.selection.cell_keys

    # ========================================
    # Selection building
    # ========================================

    def select_hit(self, hit: Optional[HitResult]) -> None:
        """Selection becomes exactly the hit item, or empty for None."""
        self.selection.clear()
        if hit is None:
            return
        if hit.kind == HIT_OBJECT:
            self.selection.object_ids.add(hit.id)
        elif hit.kind == HIT_MARK:
            self.selection.mark_ids.add(hit.id)
        else:
            self.selection.cell_keys.add(hit.id)

    def select_at(self, x: float, y: float) -> Optional[HitResult]:
        """Click selection at a world point."""
        hit = self.topmost_at(x, y)
        self.select_hit(hit)
        return hit

    def select_in_rect(self, x1: float, y1: float, x2: float, y2: float) -> Selection:
        """Drag selection over the rectangle spanned by two corners

        - cells: center in [min, max)
        - marks: center in [min, max)
        - objects: axis-aligned box overlaps the rectangle

        Returns:
            The new selection
        """
        rect = normalize_rect(x1, y1, x2, y2)

        def center_inside(px, py):
            return rect.min_x <= px < rect.max_x and rect.min_y <= py < rect.max_y

        self.selection.clear()
        cell_size = self.settings.cell_size
        for cell in self.active_layer.cells():
            if center_inside(*cell.center(cell_size)):
                self.selection.cell_keys.add(cell.key)

        for mark_id in self._mark_order:
            mark = self._marks[mark_id]
            if center_inside(mark.x, mark.y):
                self.selection.mark_ids.add(mark_id)

        for obj_id in self._object_order:
            if self._objects[obj_id].bounds().overlaps(rect):
                self.selection.object_ids.add(obj_id)

        return self.selection

    def finalize_selection(self, start: Vec2, end: Vec2) -> Selection:
        """Classify a pointer-down/up pair: identical points click, else drag."""
        if start.x == end.x and start.y == end.y:
            self.select_at(start.x, start.y)
        else:
            self.select_in_rect(start.x, start.y, end.x, end.y)
        return self.selection

    def clear_selection(self) -> bool:
        """Returns False if the selection was already empty."""
        if self.selection.is_empty():
            return False
        self.selection.clear()
        return True

    def prune_selection(self) -> None:
        """Drop selection entries whose entity no longer exists."""
        layer_keys = self.active_layer.keys()
        self.selection.cell_keys &= layer_keys
        self.selection.mark_ids &= set(self._marks)
        self.selection.object_ids &= set(self._objects)

    def selection_centroid(self) -> Optional[Vec2]:
        """Mean of selected cell centers, mark positions and object positions

        Returns:
            Vec2, or None when nothing is selected
        """
        cell_size = self.settings.cell_size
        points = []
        for key in self.selection.cell_keys:
            cell = self.active_layer.get_cell_by_key(key)
            if cell is not None:
                points.append(cell.center(cell_size))
        for mark_id in self.selection.mark_ids:
            mark = self._marks[mark_id]
            points.append((mark.x, mark.y))
        for obj_id in self.selection.object_ids:
            obj = self._objects[obj_id]
            points.append((obj.x, obj.y))
        if not points:
            return None
        return Vec2(*centroid(points))

    # ========================================
    # Bounds
    # ========================================

    def logical_bounding_box(self) -> Bounds:
        """Content extent in cell units, padded by one cell

        Cells contribute their full square (all layers), marks their
        radius and objects their half diagonal. An empty scene yields
        the default 10 x 10 area.
        """
        cell_size = self.settings.cell_size
        boxes = []
        for layer in self._layers:
            for cell in layer.cells():
                boxes.append(Bounds(cell.x, cell.y, cell.x + 1, cell.y + 1))

        for mark in self._marks.values():
            r = (mark.radius or 0.0) / cell_size
            lx, ly = mark.x / cell_size, mark.y / cell_size
            boxes.append(Bounds(lx - r, ly - r, lx + r, ly + r))

        for obj in self._objects.values():
            half_diag = math.hypot(obj.width, obj.height) / 2 / cell_size
            lx, ly = obj.x / cell_size, obj.y / cell_size
            boxes.append(Bounds(lx - half_diag, ly - half_diag, lx + half_diag, ly + half_diag))

        if not boxes:
            return Bounds(*EMPTY_SCENE_BOUNDS)

        total = boxes[0]
        for box in boxes[1:]:
            total = total.union(box)
        return total.expanded(EXPORT_PADDING)
