"""File operations for the main window - new, save, open, export"""
import os
from PyQt5.QtWidgets import QFileDialog, QMessageBox, QInputDialog

from models.scene import InvalidSnapshotError
from services.file_operations import save_scene_to_file, load_scene_from_file
from utils.logger import loggerRaise
from constants import MAP_FILE_EXTENSION, MAP_FILE_FILTER, EXPORT_FILE_FILTER, DEFAULT_EXPORT_PIXELS_PER_CELL


class FileActions:
	"""Handles all file menu operations"""
	
	def __init__(self, main_window):
		"""Initialize with reference to main window
		
		Args:
			main_window: The GridMapEditor main window instance
		"""
		self.main_window = main_window
	
	def new_map(self):
		"""Start a pristine map, prompting to save if needed"""
		if not self.main_window._prompt_save_if_needed():
			return
		self.main_window.engine.reset()
		self.main_window.current_file_path = None
		self.main_window.is_saved = True
		self.main_window._update_window_title()
		self.main_window.status_left.setText("New map")
	
	def save_map(self):
		"""Save the current map"""
		if self.main_window.current_file_path:
			self._save_to_file(self.main_window.current_file_path)
		else:
			self.save_map_as()
	
	def save_map_as(self):
		"""Save the current map to a new file"""
		filename, _ = QFileDialog.getSaveFileName(
			self.main_window,
			"Save Map",
			"",
			MAP_FILE_FILTER
		)
		if not filename:
			return
		if not os.path.splitext(filename)[1]:
			filename += MAP_FILE_EXTENSION
		self._save_to_file(filename)
	
	def _save_to_file(self, filename):
		"""Internal save method
		
		Args:
			filename: Path to save file to
		"""
		try:
			save_scene_to_file(self.main_window.engine.get_map_data(), filename)
		except OSError as e:
			QMessageBox.critical(self.main_window, "Error", f"Failed to save file:\n{e}")
			return
		
		self.main_window.current_file_path = filename
		self.main_window.is_saved = True
		self.main_window._update_window_title()
		self.main_window._add_to_recent_files(filename)
		self.main_window._remove_autosave()
		self.main_window.status_left.setText(f"Saved to {os.path.basename(filename)}")
	
	def load_map(self):
		"""Pick a map file and open it"""
		if not self.main_window._prompt_save_if_needed():
			return
		
		filename, _ = QFileDialog.getOpenFileName(
			self.main_window,
			"Open Map",
			"",
			MAP_FILE_FILTER
		)
		if filename:
			self.open_file(filename)
	
	def open_file(self, filename):
		"""Load a map file into the engine; history restarts at the loaded state
		
		Returns:
			True if the map was loaded
		"""
		try:
			record = load_scene_from_file(filename)
			self.main_window.engine.load_map_data(record)
		except (OSError, InvalidSnapshotError) as e:
			# Scene is left untouched by a failed load
			QMessageBox.critical(self.main_window, "Error", f"Failed to open map:\n{e}")
			return False
		
		self.main_window.current_file_path = filename
		self.main_window.is_saved = True
		self.main_window._update_window_title()
		self.main_window._add_to_recent_files(filename)
		self.main_window.status_left.setText(f"Opened {os.path.basename(filename)}")
		return True
	
	def export_png(self):
		"""Export the whole map as a PNG image"""
		try:
			pixels_per_cell, ok = QInputDialog.getInt(
				self.main_window,
				"Export as PNG",
				"Pixels per cell:",
				DEFAULT_EXPORT_PIXELS_PER_CELL, 1, 512
			)
			if not ok:
				return
			
			filename, _ = QFileDialog.getSaveFileName(
				self.main_window,
				"Export as PNG",
				"",
				EXPORT_FILE_FILTER
			)
			if not filename:
				return
			if not filename.lower().endswith('.png'):
				filename += '.png'
			
			if not self.main_window.canvas_widget.export_to_png(filename, pixels_per_cell):
				QMessageBox.warning(
					self.main_window,
					"Export Failed",
					"Failed to export PNG. Check console for errors."
				)
				return
			
			self.main_window.status_left.setText(f"Exported to {os.path.basename(filename)}")
		except Exception as e:
			loggerRaise(e, "Failed to export PNG")
