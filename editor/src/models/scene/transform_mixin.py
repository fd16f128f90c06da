"""
Scene Transform Mixin

Group transforms applied to the current selection around its centroid.
Grid cells take part in the centroid but are never rotated, resized
or relocated.

Methods:
    - rotate_selection
    - resize_selection
    - move_selection
"""

import math

from utils.geometry import rotate_point, scale_point, normalize_angle


class SceneTransformMixin:
    """Mixin providing group transform operations for Scene

    This mixin assumes the parent class has:
        - self._marks / self._objects
        - self.selection: Selection
        - self.selection_centroid()
        - self._logger: logging.Logger instance
    """

    def rotate_selection(self, degrees: float) -> bool:
        """Rotate selected marks/objects about the selection centroid

        Objects also gain the rotation, normalized into [0, 2*pi).

        Returns:
            False if the selection is empty, True otherwise (even if only
            grid cells are selected and nothing moved)
        """
        center = self.selection_centroid()
        if center is None:
            self._logger.debug("Rotate ignored: empty selection")
            return False

        radians = math.radians(degrees)
        for mark_id in self.selection.mark_ids:
            mark = self._marks[mark_id]
            mark.x, mark.y = rotate_point(mark.x, mark.y, center.x, center.y, radians)

        for obj_id in self.selection.object_ids:
            obj = self._objects[obj_id]
            obj.x, obj.y = rotate_point(obj.x, obj.y, center.x, center.y, radians)
            obj.rotation = normalize_angle(obj.rotation + radians)

        self._logger.debug(f"Rotated selection by {degrees} degrees around ({center.x}, {center.y})")
        return True

    def resize_selection(self, factor: float) -> bool:
        """Scale selected marks/objects about the selection centroid

        Offsets from the centroid, mark radii and object sizes are all
        multiplied by factor.

        Returns:
            False if factor <= 0 or the selection is empty
        """
        if factor <= 0:
            self._logger.debug(f"Resize ignored: factor {factor} <= 0")
            return False
        center = self.selection_centroid()
        if center is None:
            self._logger.debug("Resize ignored: empty selection")
            return False

        for mark_id in self.selection.mark_ids:
            mark = self._marks[mark_id]
            mark.x, mark.y = scale_point(mark.x, mark.y, center.x, center.y, factor)
            if mark.radius is not None:
                mark.radius *= factor

        for obj_id in self.selection.object_ids:
            obj = self._objects[obj_id]
            obj.x, obj.y = scale_point(obj.x, obj.y, center.x, center.y, factor)
            obj.width *= factor
            obj.height *= factor

        self._logger.debug(f"Resized selection by {factor}")
        return True

    def move_selection(self, dx: float, dy: float) -> bool:
        """Translate selected marks/objects by (dx, dy)

        Returns:
            False if no mark or object is selected or the delta is zero
        """
        if not self.selection.has_free_items() or (dx == 0 and dy == 0):
            return False

        for mark_id in self.selection.mark_ids:
            mark = self._marks[mark_id]
            mark.x += dx
            mark.y += dy

        for obj_id in self.selection.object_ids:
            obj = self._objects[obj_id]
            obj.x += dx
            obj.y += dy

        return True
