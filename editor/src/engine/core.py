"""
Grid Map Editor - Editor Engine

Qt-free glue between input, the Scene model, the asset pool and the
undo history. The canvas widget forwards pointer, wheel and key input
here; the window subscribes to engine events to refresh its panels.

Functionality is split across mixins:
    - history_mixin.py  : record / restore / undo / redo / load
    - gesture_mixin.py  : instruments, pointer and wheel gestures
    - actions_mixin.py  : selection, layer and settings commands
"""

import logging

from models.scene import Scene
from services.asset_pool import AssetPool
from utils.history_manager import HistoryManager
from engine.events import EventHub, FrameScheduler, HISTORY_CHANGED
from engine.history_mixin import EngineHistoryMixin
from engine.gesture_mixin import EngineGestureMixin, Instrument
from engine.actions_mixin import EngineActionsMixin
from constants import MAX_HISTORY_ENTRIES


class EditorEngine(EngineHistoryMixin, EngineGestureMixin, EngineActionsMixin):
    """Owns the scene, its history and the active instrument

    Attributes:
        scene: The Scene being edited
        assets: Shared AssetPool resolving image sources
        events: EventHub for UI notifications
        frames: FrameScheduler coalescing redraw requests
        history_manager: Snapshot history
        instrument: Active Instrument
    """

    def __init__(self, scene=None, assets=None, max_history=MAX_HISTORY_ENTRIES):
        self._logger = logging.getLogger('Engine')
        self.scene = scene if scene is not None else Scene()
        self.assets = assets if assets is not None else AssetPool()
        self.events = EventHub()
        self.frames = FrameScheduler(self.events)
        self.history_manager = HistoryManager(max_history=max_history)
        self.instrument = Instrument.GRID_DRAW

        self._gesture = None
        self._cursor_world = None
        self._is_applying_history = False

        self.history_manager.add_listener(self._on_history_changed)
        self.assets.add_listener(self._on_asset_settled)
        self.assets.resolve_all(self.scene.asset_sources())

        self.record("Initial state")

    def add_listener(self, event, callback):
        """Subscribe to an engine event (see engine.events)"""
        self.events.add_listener(event, callback)

    def remove_listener(self, event, callback):
        self.events.remove_listener(event, callback)

    def _on_history_changed(self, can_undo, can_redo):
        self.events.emit(HISTORY_CHANGED, can_undo, can_redo)

    def _on_asset_settled(self, handle):
        self.frames.request()
