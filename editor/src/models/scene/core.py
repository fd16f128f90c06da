"""
Grid Map Editor - Scene Data Model

THE MODEL of the editor. Owns all map data and the operations on it.

This class handles:
- Ordered layers of grid cells (at least one layer always exists)
- Global freeform marks and placed objects (explicit z-order lists)
- Scene settings and the view transform
- Drawing mutators (grid draw, free-draw stroke, object placement, erase)
- Hit-testing and selection
- Group transforms (rotate, resize, move) around the selection centroid
- Clipboard (copy / paste / delete)
- Snapshot API (for undo/redo and persistence)

The Scene model is INDEPENDENT of UI:
- No Qt imports
- No rendering logic
- No undo stack (the engine records snapshots into a HistoryManager)
- No asset handles (entities only store asset source identifiers)

Usage:
    scene = Scene()
    scene.grid_draw((2, 3))
    mark_id = scene.freeform_stroke(100.0, 40.0)

    scene.select_in_rect(0, 0, 200, 200)
    scene.rotate_selection(90)

    snapshot = scene.get_snapshot()
    scene.set_snapshot(snapshot)
"""

import logging
import uuid as uuid_module
from typing import Dict, List, Optional, Tuple

from models.selection import Selection
from models.transform import ViewTransform
from ._internal.layer import Layer
from ._internal.entities import FreeformMark, PlacedObject
from ._internal.settings import SceneSettings
from .layer_mixin import SceneLayerMixin
from .drawing_mixin import SceneDrawingMixin
from .query_mixin import SceneQueryMixin
from .transform_mixin import SceneTransformMixin
from .clipboard_mixin import SceneClipboardMixin
from .serialization_mixin import SceneSerializationMixin
from constants import DEFAULT_LAYER_NAME, MIN_CELL_SIZE, MAX_CELL_SIZE


class Scene(SceneLayerMixin, SceneDrawingMixin, SceneQueryMixin, SceneTransformMixin,
            SceneClipboardMixin, SceneSerializationMixin):
    """Layered grid map with global marks and objects

    Properties:
        settings: SceneSettings (cell size, styles, instrument defaults)
        view: ViewTransform (pan/zoom)
        selection: Selection (transient, never persisted)
        layers: Ordered list of Layer
        active_layer_index: Index of the layer that drawing targets
    """

    def __init__(self):
        self._logger = logging.getLogger('Scene')

        self.settings = SceneSettings()
        self.view = ViewTransform()
        self.selection = Selection()

        self._layers: List[Layer] = [Layer(DEFAULT_LAYER_NAME.format(1))]
        self._active_layer_index = 0

        # id -> entity, plus explicit z-order (last = topmost)
        self._marks: Dict[str, FreeformMark] = {}
        self._mark_order: List[str] = []
        self._objects: Dict[str, PlacedObject] = {}
        self._object_order: List[str] = []

        # Free-draw period gating
        self._last_stroke_point: Optional[Tuple[float, float]] = None

        # Copied entities (asset fields as source identifiers)
        self._clipboard = None

    # ========================================
    # Cell size
    # ========================================

    @property
    def cell_size(self) -> float:
        return self.settings.cell_size

    def update_cell_size(self, size: float) -> bool:
        """Change the world size of one cell

        Does not move marks or objects; they live in world units.

        Returns:
            False if size is outside [MIN_CELL_SIZE, MAX_CELL_SIZE] or unchanged
        """
        if not MIN_CELL_SIZE <= size <= MAX_CELL_SIZE:
            self._logger.debug(f"Rejected cell size {size}")
            return False
        if size == self.settings.cell_size:
            return False
        self.settings.cell_size = size
        self._logger.debug(f"Cell size set to {size}")
        return True

    @staticmethod
    def _new_id() -> str:
        return str(uuid_module.uuid4())

    def __repr__(self):
        return (f"Scene(layers={len(self._layers)}, marks={len(self._marks)}, "
                f"objects={len(self._objects)})")
