"""
Scene Serialization Mixin

Snapshot API used by history and persistence.

Methods:
    - get_snapshot
    - set_snapshot
    - asset_sources
"""

from typing import Dict, Set

from ._internal.scene_serializer import build_record, parse_record


class SceneSerializationMixin:
    """Mixin providing snapshot operations for Scene

    This mixin assumes the parent class has:
        - self._layers / self._active_layer_index
        - self._marks / self._mark_order / self._objects / self._object_order
        - self.settings / self.view / self.selection
        - self._logger: logging.Logger instance
    """

    def get_snapshot(self) -> Dict:
        """Serialize scene, view and settings into a fresh record

        The record shares no mutable state with the scene and holds only
        plain JSON-compatible values (asset fields as source strings).
        """
        return build_record(
            layers=self._layers,
            marks=self.marks(),
            objects=self.objects(),
            settings=self.settings,
            view_offset=(self.view.offset_x, self.view.offset_y),
            view_scale=self.view.scale,
            active_layer_index=self._active_layer_index,
        )

    def set_snapshot(self, record: Dict) -> None:
        """Replace scene, view and settings from a record

        The record is fully parsed first, so a malformed record leaves
        the scene untouched. Selection and stroke state are cleared.

        Raises:
            InvalidSnapshotError: If the record is malformed
        """
        parsed = parse_record(record)

        self._layers = parsed.layers
        self._active_layer_index = parsed.active_layer_index

        self._marks = dict(parsed.marks)
        self._mark_order = [mark_id for mark_id, _ in parsed.marks]
        self._objects = dict(parsed.objects)
        self._object_order = [obj_id for obj_id, _ in parsed.objects]

        self.settings = parsed.settings
        self.view.set_state(parsed.view_offset[0], parsed.view_offset[1], parsed.view_scale)

        self.selection.clear()
        self._last_stroke_point = None
        self._logger.debug(f"Restored snapshot: {len(self._layers)} layers, "
                           f"{len(self._marks)} marks, {len(self._objects)} objects")

    def asset_sources(self) -> Set[str]:
        """Every asset source identifier referenced anywhere in the scene."""
        sources = set(self.settings.asset_sources())
        for layer in self._layers:
            for cell in layer.cells():
                if cell.asset_source:
                    sources.add(cell.asset_source)
        for mark in self._marks.values():
            if mark.asset:
                sources.add(mark.asset)
        for obj in self._objects.values():
            if obj.asset:
                sources.add(obj.asset)
        return sources
