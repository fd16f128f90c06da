"""Clipboard operations - selection copy/paste and whole-map clipboard text"""
from PyQt5.QtWidgets import QMessageBox, QApplication

from models.scene import InvalidSnapshotError
from services.file_operations import scene_to_json_text, scene_from_json_text
from utils.logger import loggerRaise


class ClipboardActions:
    """Handles clipboard operations for the map and the selection"""
    
    def __init__(self, main_window):
        """Initialize with reference to main window
        
        Args:
            main_window: The GridMapEditor main window instance
        """
        self.main_window = main_window
    
    def copy_selection(self):
        """Copy selected cells, marks and objects to the editor clipboard"""
        if not self.main_window.engine.copy_selection():
            self.main_window.status_left.setText("Nothing selected")
            return
        count = self.main_window.engine.scene.selection.count()
        self.main_window.status_left.setText(f"{count} item(s) copied")
    
    def cut_selection(self):
        engine = self.main_window.engine
        if engine.copy_selection():
            engine.delete_selection()
    
    def paste_selection(self):
        """Paste at the last cursor position"""
        if not self.main_window.engine.scene.has_clipboard():
            self.main_window.status_left.setText("Clipboard is empty")
            return
        self.main_window.engine.paste_selection()
    
    def copy_map(self):
        """Copy the whole map record to the system clipboard as JSON"""
        try:
            text = scene_to_json_text(self.main_window.engine.get_map_data())
            QApplication.clipboard().setText(text)
            self.main_window.status_left.setText("Map copied to clipboard")
        except Exception as e:
            loggerRaise(e, f"Failed to copy map: {str(e)}")
    
    def paste_map(self):
        """Replace the map with a record from the system clipboard"""
        text = QApplication.clipboard().text()
        if not text:
            QMessageBox.information(self.main_window, "Paste Map", "Clipboard is empty")
            return
        
        if not self.main_window._prompt_save_if_needed():
            return
        
        try:
            record = scene_from_json_text(text)
            self.main_window.engine.load_map_data(record)
        except InvalidSnapshotError as e:
            QMessageBox.warning(self.main_window, "Paste Map", f"Clipboard does not hold a map:\n{e}")
            return
        
        self.main_window.current_file_path = None
        self.main_window.is_saved = False
        self.main_window._update_window_title()
        self.main_window.status_left.setText("Map pasted from clipboard")
