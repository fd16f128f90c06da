"""Menu bar creation and menu action handlers for GridMapEditor"""

from PyQt5.QtWidgets import QMessageBox, QActionGroup

from engine import Instrument
from version import get_version
from constants import APP_NAME, ROTATE_STEP_DEGREES, SCALE_UP_FACTOR, SCALE_DOWN_FACTOR


INSTRUMENT_ACTIONS = [
    (Instrument.GRID_DRAW, "&Grid Draw", "G"),
    (Instrument.FREE_DRAW, "&Free Draw", "B"),
    (Instrument.ERASE, "&Erase", "E"),
    (Instrument.ADD_OBJECT, "Add &Object", "O"),
    (Instrument.SELECT, "&Select", "S"),
]


class MenuMixin:
    """Menu bar and menu action handlers"""
    
    def _create_menu_bar(self):
        """Create the menu bar with File, Edit, Tools, Layers, Help menus"""
        menubar = self.menuBar()
        
        # File Menu
        file_menu = menubar.addMenu("&File")
        
        new_action = file_menu.addAction("&New")
        new_action.setShortcut("Ctrl+N")
        new_action.triggered.connect(self.file_actions.new_map)
        
        open_action = file_menu.addAction("&Open...")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.file_actions.load_map)
        
        # Recent Files submenu
        self.recent_menu = file_menu.addMenu("Recent Files")
        self._update_recent_files_menu()
        
        file_menu.addSeparator()
        
        save_action = file_menu.addAction("&Save")
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self.file_actions.save_map)
        
        save_as_action = file_menu.addAction("Save &As...")
        save_as_action.setShortcut("Ctrl+Shift+S")
        save_as_action.triggered.connect(self.file_actions.save_map_as)
        
        file_menu.addSeparator()
        
        export_png_action = file_menu.addAction("Export as &PNG...")
        export_png_action.setShortcut("Ctrl+E")
        export_png_action.triggered.connect(self.file_actions.export_png)
        
        file_menu.addSeparator()
        
        copy_map_action = file_menu.addAction("&Copy Map to Clipboard")
        copy_map_action.setShortcut("Ctrl+Shift+C")
        copy_map_action.triggered.connect(self.clipboard_actions.copy_map)
        
        paste_map_action = file_menu.addAction("&Paste Map from Clipboard")
        paste_map_action.setShortcut("Ctrl+Shift+V")
        paste_map_action.triggered.connect(self.clipboard_actions.paste_map)
        
        file_menu.addSeparator()
        
        exit_action = file_menu.addAction("E&xit")
        exit_action.setShortcut("Alt+F4")
        exit_action.triggered.connect(self.close)
        
        # Edit Menu
        self.edit_menu = menubar.addMenu("&Edit")
        
        self.undo_action = self.edit_menu.addAction("&Undo")
        self.undo_action.setShortcut("Ctrl+Z")
        self.undo_action.triggered.connect(self.undo)
        self.undo_action.setEnabled(False)
        
        self.redo_action = self.edit_menu.addAction("&Redo")
        self.redo_action.setShortcut("Ctrl+Y")
        self.redo_action.triggered.connect(self.redo)
        self.redo_action.setEnabled(False)
        
        self.edit_menu.addSeparator()
        
        self.cut_action = self.edit_menu.addAction("Cu&t")
        self.cut_action.setShortcut("Ctrl+X")
        self.cut_action.triggered.connect(self.clipboard_actions.cut_selection)
        
        self.copy_action = self.edit_menu.addAction("&Copy")
        self.copy_action.setShortcut("Ctrl+C")
        self.copy_action.triggered.connect(self.clipboard_actions.copy_selection)
        
        self.paste_action = self.edit_menu.addAction("&Paste")
        self.paste_action.setShortcut("Ctrl+V")
        self.paste_action.triggered.connect(self.clipboard_actions.paste_selection)
        
        self.delete_action = self.edit_menu.addAction("&Delete")
        self.delete_action.triggered.connect(lambda: self.engine.delete_selection())
        
        self.deselect_action = self.edit_menu.addAction("Select &None")
        self.deselect_action.setShortcut("Ctrl+D")
        self.deselect_action.triggered.connect(lambda: self.engine.clear_selection())
        
        self.edit_menu.addSeparator()
        
        # Transform submenu
        transform_menu = self.edit_menu.addMenu("&Transform")
        
        self.rotate_cw_action = transform_menu.addAction(f"Rotate &{ROTATE_STEP_DEGREES:g}°")
        self.rotate_cw_action.triggered.connect(lambda: self.engine.rotate_selection(ROTATE_STEP_DEGREES))
        
        self.rotate_ccw_action = transform_menu.addAction(f"Rotate &-{ROTATE_STEP_DEGREES:g}°")
        self.rotate_ccw_action.triggered.connect(lambda: self.engine.rotate_selection(-ROTATE_STEP_DEGREES))
        
        transform_menu.addSeparator()
        
        self.scale_up_action = transform_menu.addAction(f"Scale &Up x{SCALE_UP_FACTOR:g}")
        self.scale_up_action.triggered.connect(lambda: self.engine.resize_selection(SCALE_UP_FACTOR))
        
        self.scale_down_action = transform_menu.addAction(f"Scale &Down x{SCALE_DOWN_FACTOR:g}")
        self.scale_down_action.triggered.connect(lambda: self.engine.resize_selection(SCALE_DOWN_FACTOR))
        
        # Store selection-dependent actions for enabling/disabling
        self.selection_action_list = [
            self.cut_action,
            self.copy_action,
            self.delete_action,
            self.deselect_action,
            self.rotate_cw_action,
            self.rotate_ccw_action,
            self.scale_up_action,
            self.scale_down_action,
        ]
        
        self.edit_menu.addSeparator()
        
        clear_action = self.edit_menu.addAction("C&lear Canvas")
        clear_action.triggered.connect(self._clear_canvas)
        
        # Tools Menu
        tools_menu = menubar.addMenu("&Tools")
        self.instrument_group = QActionGroup(self)
        self.instrument_group.setExclusive(True)
        self.instrument_actions = {}
        for instrument, label, shortcut in INSTRUMENT_ACTIONS:
            action = tools_menu.addAction(label)
            action.setShortcut(shortcut)
            action.setCheckable(True)
            action.setChecked(instrument is self.engine.instrument)
            action.triggered.connect(lambda checked, i=instrument: self._set_instrument(i))
            self.instrument_group.addAction(action)
            self.instrument_actions[instrument] = action
        
        # Layers Menu
        self.layers_menu = menubar.addMenu("&Layers")
        
        add_layer_action = self.layers_menu.addAction("&Add Layer")
        add_layer_action.setShortcut("Ctrl+Shift+N")
        add_layer_action.triggered.connect(lambda: self.engine.add_layer())
        
        self.remove_layer_action = self.layers_menu.addAction("&Remove Layer")
        self.remove_layer_action.triggered.connect(lambda: self.engine.remove_active_layer())
        
        # Help Menu
        help_menu = menubar.addMenu("&Help")
        about_action = help_menu.addAction("&About")
        about_action.triggered.connect(self._show_about)
        
        self._update_menu_actions()
    
    def _set_instrument(self, instrument):
        self.engine.set_instrument(instrument)
        self.status_left.setText(f"Tool: {self.instrument_actions[instrument].text().replace('&', '')}")
    
    def _clear_canvas(self):
        reply = QMessageBox.question(
            self,
            "Clear Canvas",
            "Remove every cell, mark and object from all layers?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self.engine.clear_canvas()
    
    def _show_about(self):
        """Show about dialog"""
        QMessageBox.about(self, f"About {APP_NAME}",
            f"<h3>{APP_NAME}</h3>"
            "<p>A layered grid map editor with free-form marks and placed objects.</p>"
            f"<p>Version {get_version()}</p>")
    
    def _update_menu_actions(self):
        """Update menu action states based on current selection"""
        has_selection = not self.engine.scene.selection.is_empty()
        for action in self.selection_action_list:
            action.setEnabled(has_selection)
        self.paste_action.setEnabled(self.engine.scene.has_clipboard())
        self.remove_layer_action.setEnabled(self.engine.scene.layer_count > 1)
