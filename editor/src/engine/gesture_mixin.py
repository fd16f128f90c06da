"""Pointer and wheel gesture handling for the editor engine.

Screen coordinates in, scene mutations out. A gesture starts on
pointer_down, updates on pointer_move and is finalized on pointer_up;
history is recorded at most once per gesture, on release.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

from models.transform import Vec2
from utils.geometry import Bounds, normalize_rect
from engine.events import SELECTION_CHANGED
from constants import ZOOM_INTENSITY


class Instrument(Enum):
    GRID_DRAW = 'gridDraw'
    FREE_DRAW = 'freeDraw'
    ERASE = 'erase'
    ADD_OBJECT = 'addObject'
    SELECT = 'select'


class MouseButton(IntEnum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


GESTURE_PAN = 'pan'
GESTURE_DRAW = 'draw'
GESTURE_SELECT = 'select'
GESTURE_MOVE = 'move'

_DRAW_DESCRIPTIONS = {
    Instrument.GRID_DRAW: "Draw cells",
    Instrument.FREE_DRAW: "Free draw",
    Instrument.ERASE: "Erase",
    Instrument.ADD_OBJECT: "Add object",
}


@dataclass
class Gesture:
    kind: str
    button: int
    start: Vec2
    current: Vec2
    last_screen: Tuple[float, float]
    changed: bool = False


class EngineGestureMixin:
    """Instrument-driven input handling

    This mixin assumes the parent class has:
        - self.scene / self.assets / self.events / self.frames
        - self.instrument: Instrument
        - self._gesture: Optional[Gesture]
        - self._cursor_world: Optional[Vec2]
        - self.record()
    """

    def set_instrument(self, instrument):
        """Switch the active instrument (never records)"""
        instrument = Instrument(instrument)
        if instrument is self.instrument:
            return
        self.cancel_gesture()
        self.instrument = instrument
        self._logger.debug(f"Instrument: {instrument.value}")

    @property
    def cursor_world(self) -> Optional[Vec2]:
        """Last known pointer position in world units"""
        return self._cursor_world

    @property
    def drag_rect(self) -> Optional[Bounds]:
        """In-progress selection rectangle in world units, for the renderer"""
        g = self._gesture
        if g is None or g.kind != GESTURE_SELECT:
            return None
        if g.start.x == g.current.x and g.start.y == g.current.y:
            return None
        return normalize_rect(g.start.x, g.start.y, g.current.x, g.current.y)

    @property
    def gesture_active(self) -> bool:
        return self._gesture is not None

    def cancel_gesture(self):
        """Drop any in-progress gesture without recording"""
        if self._gesture is not None and self._gesture.kind == GESTURE_DRAW:
            self.scene.end_stroke()
        self._gesture = None

    # ========================================
    # Pointer events
    # ========================================

    def pointer_down(self, sx, sy, button=MouseButton.LEFT):
        world = self.scene.view.screen_to_world(sx, sy)
        self._cursor_world = world
        if self._gesture is not None:
            return

        if button == MouseButton.MIDDLE:
            self._gesture = Gesture(GESTURE_PAN, button, world, world, (sx, sy))
            return
        if button != MouseButton.LEFT:
            return

        if self.instrument is Instrument.SELECT:
            hit = self.scene.topmost_at(world.x, world.y)
            if self.scene.is_hit_selected(hit):
                self._gesture = Gesture(GESTURE_MOVE, button, world, world, (sx, sy))
            else:
                self._gesture = Gesture(GESTURE_SELECT, button, world, world, (sx, sy))
                if self.scene.clear_selection():
                    self.events.emit(SELECTION_CHANGED)
            self.frames.request()
            return

        self._gesture = Gesture(GESTURE_DRAW, button, world, world, (sx, sy))
        if self._apply_instrument(world, initial=True):
            self._gesture.changed = True
            self.frames.request()

    def pointer_move(self, sx, sy):
        world = self.scene.view.screen_to_world(sx, sy)
        self._cursor_world = world
        g = self._gesture
        if g is None:
            return

        if g.kind == GESTURE_PAN:
            self.scene.view.pan(sx - g.last_screen[0], sy - g.last_screen[1])
            g.last_screen = (sx, sy)
            self.frames.request()
        elif g.kind == GESTURE_DRAW:
            if self._apply_instrument(world, initial=False):
                g.changed = True
                self.frames.request()
        elif g.kind == GESTURE_SELECT:
            g.current = world
            self.frames.request()
        elif g.kind == GESTURE_MOVE:
            if self.scene.move_selection(world.x - g.current.x, world.y - g.current.y):
                g.changed = True
                self.frames.request()
            g.current = world

    def pointer_up(self, sx, sy, button=MouseButton.LEFT):
        g = self._gesture
        if g is None or g.button != button:
            return
        world = self.scene.view.screen_to_world(sx, sy)
        self._cursor_world = world
        self._gesture = None

        if g.kind == GESTURE_DRAW:
            self.scene.end_stroke()
            if g.changed:
                self.record(_DRAW_DESCRIPTIONS[self.instrument])
        elif g.kind == GESTURE_SELECT:
            # Selection is never recorded
            self.scene.finalize_selection(g.start, world)
            self.events.emit(SELECTION_CHANGED)
            self.frames.request()
        elif g.kind == GESTURE_MOVE:
            if self.scene.move_selection(world.x - g.current.x, world.y - g.current.y):
                g.changed = True
                self.frames.request()
            if g.changed:
                self.record("Move selection")

    def wheel(self, sx, sy, delta_y):
        """Zoom around the cursor

        Returns:
            False if the resulting scale is out of range (view unchanged)
        """
        view = self.scene.view
        new_scale = view.scale * (1 - delta_y * ZOOM_INTENSITY)
        if not view.zoom_at_point(sx, sy, new_scale):
            self._logger.debug(f"Zoom rejected: scale {new_scale:.4f} out of range")
            return False
        self.frames.request()
        return True

    # ========================================
    # Instruments
    # ========================================

    def _apply_instrument(self, world: Vec2, initial: bool) -> bool:
        """Apply the drawing instrument at a world point; True if the scene changed"""
        scene = self.scene
        if self.instrument is Instrument.GRID_DRAW:
            return scene.grid_draw_at(world.x, world.y)
        if self.instrument is Instrument.FREE_DRAW:
            return scene.freeform_stroke(world.x, world.y) is not None
        if self.instrument is Instrument.ERASE:
            had_selection = scene.selection.count()
            removed = scene.erase(world.x, world.y)
            if removed and scene.selection.count() != had_selection:
                self.events.emit(SELECTION_CHANGED)
            return removed
        if self.instrument is Instrument.ADD_OBJECT:
            # One object per press
            return initial and self.place_object_at(world.x, world.y)
        return False

    def place_object_at(self, x, y):
        """Place the current object asset centered at a world point

        Returns:
            False if no object asset is chosen or it is not loaded yet
        """
        source = self.scene.settings.object_asset_ref
        if not source:
            self._logger.debug("Add object ignored: no object image selected")
            return False
        handle = self.assets.resolve(source)
        if not handle.is_ready():
            self._logger.debug(f"Add object ignored: asset not ready ({handle.state.value})")
            return False
        self.scene.place_object(x, y, handle.natural_width, handle.natural_height, source)
        return True
