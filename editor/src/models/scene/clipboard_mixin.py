"""
Scene Clipboard Mixin

Copy, paste and delete of the current selection.

Paste placement:
    - marks/objects: translated so the centroid of the copied free items
      lands on the cursor (a single item lands exactly on it); without a
      cursor they shift by half a cell
    - grid cells: shifted by a whole-cell delta that puts the top-left of
      the copied block on the cursor's cell; without a cursor by (+1, +1)

Methods:
    - copy_selection
    - has_clipboard
    - paste_selection
    - delete_selection
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ._internal.layer import GridCell
from ._internal.entities import FreeformMark, PlacedObject
from utils.geometry import centroid


@dataclass
class ClipboardContent:
    cells: List[GridCell] = field(default_factory=list)
    marks: List[FreeformMark] = field(default_factory=list)
    objects: List[PlacedObject] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.cells or self.marks or self.objects)


class SceneClipboardMixin:
    """Mixin providing clipboard operations for Scene

    This mixin assumes the parent class has:
        - self._clipboard: Optional[ClipboardContent]
        - self._marks / self._objects
        - self.active_layer / self.selection / self.settings
        - add_mark / add_object / remove_mark / remove_object
        - self._logger: logging.Logger instance
    """

    def copy_selection(self) -> bool:
        """Deep-copy the selected entities into the clipboard

        Returns:
            False if nothing is selected (clipboard unchanged)
        """
        if self.selection.is_empty():
            return False

        layer = self.active_layer
        # Sorted for a stable paste order
        cells = [layer.get_cell_by_key(key) for key in sorted(self.selection.cell_keys)]
        self._clipboard = ClipboardContent(
            cells=[cell for cell in cells if cell is not None],
            marks=[self._marks[mark_id].copy() for mark_id in self._mark_order
                   if mark_id in self.selection.mark_ids],
            objects=[self._objects[obj_id].copy() for obj_id in self._object_order
                     if obj_id in self.selection.object_ids],
        )
        self._logger.debug(f"Copied {len(self._clipboard.cells)} cells, "
                           f"{len(self._clipboard.marks)} marks, "
                           f"{len(self._clipboard.objects)} objects")
        return True

    def has_clipboard(self) -> bool:
        return self._clipboard is not None and not self._clipboard.is_empty()

    def paste_selection(self, cursor: Optional[Tuple[float, float]] = None) -> bool:
        """Instantiate the clipboard contents with fresh ids

        Pasted entities become the new selection.

        Args:
            cursor: World-space cursor position, or None

        Returns:
            False if the clipboard is empty
        """
        if not self.has_clipboard():
            return False

        clip = self._clipboard
        self.selection.clear()

        # Free items
        free_points = [(m.x, m.y) for m in clip.marks] + [(o.x, o.y) for o in clip.objects]
        if free_points:
            if cursor is not None:
                cx, cy = centroid(free_points)
                dx, dy = cursor[0] - cx, cursor[1] - cy
            else:
                dx = dy = self.settings.cell_size / 2

            for mark in clip.marks:
                new_mark = mark.copy()
                new_mark.x += dx
                new_mark.y += dy
                self.selection.mark_ids.add(self.add_mark(new_mark))

            for obj in clip.objects:
                new_obj = obj.copy()
                new_obj.x += dx
                new_obj.y += dy
                self.selection.object_ids.add(self.add_object(new_obj))

        # Grid cells
        if clip.cells:
            if cursor is not None:
                target_x, target_y = self.cell_coord_at(*cursor)
                anchor_x = min(cell.x for cell in clip.cells)
                anchor_y = min(cell.y for cell in clip.cells)
                step_x, step_y = target_x - anchor_x, target_y - anchor_y
            else:
                step_x, step_y = 1, 1

            layer = self.active_layer
            for cell in clip.cells:
                new_cell = cell.moved(step_x, step_y)
                layer.set_cell(new_cell)
                self.selection.cell_keys.add(new_cell.key)

        self._logger.debug(f"Pasted {self.selection.count()} items")
        return True

    def delete_selection(self) -> bool:
        """Remove every selected cell, mark and object

        Returns:
            False if nothing was selected
        """
        if self.selection.is_empty():
            return False

        layer = self.active_layer
        for key in list(self.selection.cell_keys):
            layer.remove_cell(key)
        for mark_id in list(self.selection.mark_ids):
            if mark_id in self._marks:
                self.remove_mark(mark_id)
        for obj_id in list(self.selection.object_ids):
            if obj_id in self._objects:
                self.remove_object(obj_id)

        self.selection.clear()
        return True
