"""History management and undo/redo for the editor engine"""

from engine.events import SELECTION_CHANGED, LAYERS_CHANGED, SCENE_LOADED


class EngineHistoryMixin:
    """Snapshot recording, undo/redo, restore and load

    This mixin assumes the parent class has:
        - self.scene: Scene
        - self.assets: AssetPool
        - self.history_manager: HistoryManager
        - self.events: EventHub / self.frames: FrameScheduler
        - self._is_applying_history: bool
        - self.cancel_gesture()
    """

    def _capture_current_state(self):
        """Capture the current state for history"""
        return self.scene.get_snapshot()

    def record(self, description=""):
        """Snapshot the scene into history (one call per completed gesture)

        Returns:
            False while a restore is in progress (nothing recorded)
        """
        if self._is_applying_history:
            return False
        self.history_manager.record(self._capture_current_state(), description)
        return True

    def restore(self, snapshot):
        """Replace scene, view and settings from a snapshot

        Stored asset identifiers are re-resolved through the asset pool;
        selection and any in-progress gesture are cleared.

        Raises:
            InvalidSnapshotError: If the snapshot is malformed (scene untouched)
        """
        self._is_applying_history = True
        try:
            self.scene.set_snapshot(snapshot)
            self.cancel_gesture()
            self.assets.resolve_all(self.scene.asset_sources())
        finally:
            self._is_applying_history = False

        self.events.emit(SELECTION_CHANGED)
        self.events.emit(LAYERS_CHANGED)
        self.frames.request()

    def load(self, snapshot, description="Load map"):
        """Restore a snapshot and reset history to that single entry

        Raises:
            InvalidSnapshotError: If the snapshot is malformed (scene and history untouched)
        """
        self.restore(snapshot)
        self.history_manager.load(self._capture_current_state(), description)
        self._logger.debug(f"Loaded map: {self.scene!r}")
        self.events.emit(SCENE_LOADED)

    def undo(self):
        """Undo the last recorded action

        Returns:
            False if there is nothing to undo
        """
        state = self.history_manager.undo()
        if state is None:
            return False
        self.restore(state)
        return True

    def redo(self):
        """Redo the last undone action

        Returns:
            False if there is nothing to redo
        """
        state = self.history_manager.redo()
        if state is None:
            return False
        self.restore(state)
        return True

    def can_undo(self):
        return self.history_manager.can_undo()

    def can_redo(self):
        return self.history_manager.can_redo()

    # ========================================
    # Persistence collaborator
    # ========================================

    def get_map_data(self):
        """Snapshot record of the current scene (for saving)"""
        return self._capture_current_state()

    def load_map_data(self, record):
        """Load a record from storage; not undoable past this point"""
        self.load(record, "Load map")
