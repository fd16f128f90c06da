"""
Editor Engine Actions Mixin

Discrete editor commands (menu items and shortcuts). Each successful
command records exactly one history entry; rejected commands return
False without recording.

Methods:
    - rotate_selection / resize_selection / delete_selection / clear_selection
    - copy_selection / paste_selection
    - add_layer / remove_active_layer / set_active_layer
    - set_layer_visible / rename_layer / set_layer_shadow
    - clear_canvas / reset
    - update_cell_size
    - settings setters (draw, mark, object, border, empty cell, grid assets)
"""

from typing import List, Optional

from models.color import Color
from models.scene import ShadowConfig, FILL_MODE_COLOR, FILL_MODE_TEXTURED
from engine.events import SELECTION_CHANGED, LAYERS_CHANGED, NOTICE
from constants import ROTATE_STEP_DEGREES


class EngineActionsMixin:
    """Mixin providing command-style operations for EditorEngine

    This mixin assumes the parent class has:
        - self.scene / self.assets / self.events / self.frames
        - self.history_manager: HistoryManager
        - self.record() / self.cancel_gesture()
        - self._cursor_world
        - self._logger: logging.Logger instance
    """

    # ========================================
    # Selection commands
    # ========================================

    def rotate_selection(self, degrees=ROTATE_STEP_DEGREES):
        if not self.scene.rotate_selection(degrees):
            self._logger.debug("Rotate ignored: empty selection")
            return False
        self.record(f"Rotate selection {degrees:g}°")
        self.frames.request()
        return True

    def resize_selection(self, factor):
        if not self.scene.resize_selection(factor):
            self._logger.debug(f"Resize ignored (factor={factor})")
            return False
        self.record(f"Resize selection x{factor:g}")
        self.frames.request()
        return True

    def delete_selection(self):
        if not self.scene.delete_selection():
            return False
        self.record("Delete selection")
        self.events.emit(SELECTION_CHANGED)
        self.frames.request()
        return True

    def clear_selection(self):
        """Deselect everything (never records)"""
        if not self.scene.clear_selection():
            return False
        self.events.emit(SELECTION_CHANGED)
        self.frames.request()
        return True

    def copy_selection(self):
        """Copy the selection to the internal clipboard (never records)"""
        return self.scene.copy_selection()

    def paste_selection(self, cursor=None):
        """Paste the clipboard at a world point, or the last known cursor"""
        if cursor is None and self._cursor_world is not None:
            cursor = (self._cursor_world.x, self._cursor_world.y)
        if not self.scene.paste_selection(cursor):
            return False
        self.record("Paste")
        self.events.emit(SELECTION_CHANGED)
        self.frames.request()
        return True

    # ========================================
    # Layer commands
    # ========================================

    def add_layer(self, name=None):
        index = self.scene.add_layer(name)
        self._layers_changed(f"Add layer {index + 1}")
        return index

    def remove_active_layer(self):
        if not self.scene.remove_active_layer():
            self.events.emit(NOTICE, "Cannot remove the last layer.")
            return False
        self._layers_changed("Remove layer")
        return True

    def set_active_layer(self, index):
        """Switch the active layer (not recorded)"""
        if not self.scene.set_active_layer(index):
            return False
        self.cancel_gesture()
        self.events.emit(LAYERS_CHANGED)
        self.events.emit(SELECTION_CHANGED)
        self.frames.request()
        return True

    def set_layer_visible(self, index, visible):
        if not self.scene.set_layer_visible(index, visible):
            return False
        self._layers_changed("Show layer" if visible else "Hide layer")
        return True

    def rename_layer(self, index, name):
        if not self.scene.rename_layer(index, name):
            return False
        self._layers_changed(f"Rename layer to '{name}'")
        return True

    def set_layer_shadow(self, index, shadow: ShadowConfig):
        if not self.scene.set_layer_shadow(index, shadow):
            return False
        self._layers_changed("Change layer shadow")
        return True

    def _layers_changed(self, description):
        self.record(description)
        self.events.emit(LAYERS_CHANGED)
        self.events.emit(SELECTION_CHANGED)
        self.frames.request()

    # ========================================
    # Whole-scene commands
    # ========================================

    def clear_canvas(self):
        """Empty every layer, mark and object (undoable)"""
        self.cancel_gesture()
        self.scene.clear_content()
        self.record("Clear canvas")
        self.events.emit(SELECTION_CHANGED)
        self.frames.request()

    def reset(self):
        """Pristine single-layer scene; history restarts from here"""
        self.cancel_gesture()
        self.scene.reset()
        self.history_manager.load(self._capture_current_state(), "New map")
        self.events.emit(SELECTION_CHANGED)
        self.events.emit(LAYERS_CHANGED)
        self.frames.request()

    # ========================================
    # Settings
    # ========================================

    def update_cell_size(self, size):
        """Change the world size of one cell (not recorded)"""
        if not self.scene.update_cell_size(size):
            self._logger.debug(f"Cell size rejected: {size}")
            return False
        self.frames.request()
        return True

    def set_draw_fill(self, fill_mode=None, fill_color: Optional[Color] = None,
                      border_color: Optional[Color] = None, asset: Optional[str] = None):
        """Update the grid-draw defaults; arguments left as None are unchanged"""
        defaults = self.scene.settings.draw_defaults
        if fill_mode is not None:
            if fill_mode not in (FILL_MODE_COLOR, FILL_MODE_TEXTURED):
                raise ValueError(f"Unknown fill mode: {fill_mode!r}")
            defaults.fill_mode = fill_mode
        if fill_color is not None:
            defaults.fill_color = fill_color
        if border_color is not None:
            defaults.border_color = border_color
        if asset is not None:
            defaults.asset = asset or None
            self.assets.resolve(asset)

    def set_mark_defaults(self, size=None, period=None, fill_color: Optional[Color] = None,
                          stroke_color: Optional[Color] = None, asset: Optional[str] = None):
        defaults = self.scene.settings.mark_defaults
        if size is not None:
            if size <= 0:
                raise ValueError(f"Mark size must be positive, got {size}")
            defaults.size = float(size)
        if period is not None:
            if period < 0:
                raise ValueError(f"Mark period must not be negative, got {period}")
            defaults.period = float(period)
        if fill_color is not None:
            defaults.fill_color = fill_color
        if stroke_color is not None:
            defaults.stroke_color = stroke_color
        if asset is not None:
            defaults.asset = asset or None
            self.assets.resolve(asset)

    def set_object_asset(self, source: Optional[str]):
        """Choose the image placed by the add-object instrument"""
        self.scene.settings.object_asset_ref = source or None
        self.assets.resolve(source)

    def set_grid_assets(self, sources: List[str]):
        self.scene.settings.grid_asset_list = list(sources)
        self.assets.resolve_all(sources)

    def set_border_style(self, enabled: bool, image: Optional[str] = None):
        style = self.scene.settings.border_style
        style.enabled = bool(enabled)
        if image is not None:
            style.image = image or None
            self.assets.resolve(image)
        self.record("Change border style")
        self.frames.request()

    def set_empty_cell_style(self, fill_color: Optional[Color] = None,
                             border_color: Optional[Color] = None, pattern: Optional[str] = None):
        style = self.scene.settings.empty_cell_style
        if fill_color is not None:
            style.fill_color = fill_color
        if border_color is not None:
            style.border_color = border_color
        if pattern is not None:
            style.pattern = pattern or None
            self.assets.resolve(pattern)
        self.record("Change empty cell style")
        self.frames.request()
