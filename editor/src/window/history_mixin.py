"""Undo/redo menu state and status bar updates for GridMapEditor"""

# Entries that represent a freshly opened or created map
CLEAN_DESCRIPTIONS = ("Initial state", "New map", "Load map")


class HistoryMixin:
    """Reacts to engine history changes

    This mixin assumes the parent class has:
        - self.engine: EditorEngine
        - self.undo_action / self.redo_action
        - self.status_left / self.status_right
    """
    
    def _on_history_changed(self, can_undo, can_redo):
        """Called when history state changes to update UI"""
        if hasattr(self, 'undo_action'):
            self.undo_action.setEnabled(can_undo)
            self.undo_action.setText(self._action_label("&Undo", self.engine.history_manager.get_current_description()
                                                        if can_undo else ""))
        if hasattr(self, 'redo_action'):
            self.redo_action.setEnabled(can_redo)
            self.redo_action.setText(self._action_label("&Redo", self.engine.history_manager.get_redo_description()))
        
        if self.engine.history_manager.get_current_description() not in CLEAN_DESCRIPTIONS:
            self.is_saved = False
            self._update_window_title()
        self._update_status_bar()
    
    @staticmethod
    def _action_label(base, description):
        return f"{base} {description}" if description else base
    
    def _update_status_bar(self):
        """Update status bar with current action and stats"""
        if not hasattr(self, 'status_left'):
            return
        current_desc = self.engine.history_manager.get_current_description()
        self.status_left.setText(f"Last action: {current_desc}" if current_desc else "Ready")
        
        scene = self.engine.scene
        layer = scene.active_layer
        selected = scene.selection.count()
        right_msg = (f"Layer: {layer.name} ({scene.active_layer_index + 1}/{scene.layer_count}) | "
                     f"Cells: {layer.cell_count} | Marks: {scene.mark_count} | Objects: {scene.object_count}")
        if selected:
            right_msg += f" | Selected: {selected}"
        self.status_right.setText(right_msg)
    
    def undo(self):
        """Undo the last action"""
        self.engine.undo()
    
    def redo(self):
        """Redo the last undone action"""
        self.engine.redo()
