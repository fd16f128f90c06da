"""
Scene Layer Management Mixin

Layer CRUD and whole-scene clearing for the Scene model.

Methods:
    - layers / layer_count / active_layer_index / active_layer
    - get_layer
    - add_layer
    - remove_active_layer
    - set_active_layer
    - set_layer_visible
    - rename_layer
    - set_layer_shadow
    - clear_content
    - reset
"""

from typing import List, Optional

from models.selection import Selection
from models.transform import ViewTransform
from ._internal.layer import Layer, ShadowConfig
from ._internal.settings import SceneSettings
from constants import DEFAULT_LAYER_NAME


class SceneLayerMixin:
    """Mixin providing layer management operations for Scene

    This mixin assumes the parent class has:
        - self._layers: List[Layer]
        - self._active_layer_index: int
        - self.selection: Selection
        - self._logger: logging.Logger instance
    """

    # ========================================
    # Layer Queries
    # ========================================

    @property
    def layers(self) -> List[Layer]:
        return list(self._layers)

    @property
    def layer_count(self) -> int:
        return len(self._layers)

    @property
    def active_layer_index(self) -> int:
        return self._active_layer_index

    @property
    def active_layer(self) -> Layer:
        return self._layers[self._active_layer_index]

    def get_layer(self, index: int) -> Layer:
        """Get layer by index

        Raises:
            ValueError: If index is out of range
        """
        if not 0 <= index < len(self._layers):
            raise ValueError(f"Layer index {index} out of range (0-{len(self._layers) - 1})")
        return self._layers[index]

    # ========================================
    # Layer CRUD Operations
    # ========================================

    def add_layer(self, name: Optional[str] = None) -> int:
        """Append a new empty layer and make it active

        Args:
            name: Layer name, defaults to "Layer N"

        Returns:
            Index of the new layer
        """
        if name is None:
            name = DEFAULT_LAYER_NAME.format(len(self._layers) + 1)
        self._layers.append(Layer(name))
        self._active_layer_index = len(self._layers) - 1
        self.selection.clear()
        self._logger.debug(f"Added layer '{name}' at index {self._active_layer_index}")
        return self._active_layer_index

    def remove_active_layer(self) -> bool:
        """Remove the active layer

        The previous layer (or the first one) becomes active.

        Returns:
            False if this is the last remaining layer (nothing removed)
        """
        if len(self._layers) <= 1:
            self._logger.debug("Refused to remove the last layer")
            return False
        removed = self._layers.pop(self._active_layer_index)
        self._active_layer_index = min(max(0, self._active_layer_index - 1), len(self._layers) - 1)
        self.selection.clear()
        self._logger.debug(f"Removed layer '{removed.name}', active is now {self._active_layer_index}")
        return True

    def set_active_layer(self, index: int) -> bool:
        """Make a layer active; clears the selection

        Returns:
            False for an invalid or unchanged index
        """
        if not 0 <= index < len(self._layers) or index == self._active_layer_index:
            return False
        self._active_layer_index = index
        self.selection.clear()
        self._logger.debug(f"Set active layer: {index}")
        return True

    def set_layer_visible(self, index: int, visible: bool) -> bool:
        layer = self.get_layer(index)
        if layer.visible == bool(visible):
            return False
        layer.visible = bool(visible)
        return True

    def rename_layer(self, index: int, name: str) -> bool:
        layer = self.get_layer(index)
        if layer.name == name:
            return False
        layer.name = name
        return True

    def set_layer_shadow(self, index: int, shadow: ShadowConfig) -> bool:
        layer = self.get_layer(index)
        if layer.shadow == shadow:
            return False
        layer.shadow = shadow.copy()
        return True

    # ========================================
    # Whole-scene operations
    # ========================================

    def clear_content(self) -> None:
        """Empty every layer and remove all marks and objects (layers are kept)."""
        for layer in self._layers:
            layer.clear()
        self._marks.clear()
        self._mark_order.clear()
        self._objects.clear()
        self._object_order.clear()
        self._last_stroke_point = None
        self.selection.clear()
        self._logger.debug("Cleared scene content")

    def reset(self) -> None:
        """Return to a pristine single-layer scene with default settings and view."""
        self.clear_content()
        self._layers = [Layer(DEFAULT_LAYER_NAME.format(1))]
        self._active_layer_index = 0
        self.settings = SceneSettings()
        self.view = ViewTransform()
        self.selection = Selection()
        self._clipboard = None
        self._logger.debug("Scene reset")
