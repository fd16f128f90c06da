"""Configuration management for GridMapEditor"""

import os
import json
import logging
from PyQt5.QtWidgets import QMessageBox
from utils.logger import loggerRaise
from services.file_operations import scene_to_json_text, scene_from_json_text
from models.scene import InvalidSnapshotError
from constants import APP_NAME


class ConfigMixin:
	"""Configuration file operations, recent files, and autosave

	This mixin assumes the parent class has:
		- self.engine: EditorEngine
		- self.config_dir / self.config_file / self.autosave_file
		- self.recent_files / self.max_recent_files
		- self.current_file_path / self.is_saved
		- self.file_actions: FileActions
	"""
	
	def _load_config(self):
		"""Load recent files from config file"""
		try:
			if os.path.exists(self.config_file):
				with open(self.config_file, 'r', encoding='utf-8') as f:
					config = json.load(f)
				self.recent_files = [p for p in config.get('recent_files', []) if os.path.exists(p)]
		except (OSError, ValueError) as e:
			# A broken config must not prevent startup
			logging.getLogger('Config').warning(f"Ignoring unreadable config {self.config_file}: {e}")
			self.recent_files = []
	
	def _save_config(self):
		"""Save recent files to config file"""
		try:
			os.makedirs(self.config_dir, exist_ok=True)
			config = {
				'recent_files': self.recent_files[:self.max_recent_files]
			}
			with open(self.config_file, 'w', encoding='utf-8') as f:
				json.dump(config, f, indent=2)
		except Exception as e:
			loggerRaise(e, "Error saving config")
	
	def _add_to_recent_files(self, filepath):
		"""Move or add a file to the front of the recent files list"""
		if filepath in self.recent_files:
			self.recent_files.remove(filepath)
		self.recent_files.insert(0, filepath)
		self.recent_files = self.recent_files[:self.max_recent_files]
		
		if hasattr(self, 'recent_menu'):
			self._update_recent_files_menu()
		self._save_config()
	
	def _update_recent_files_menu(self):
		"""Update the Recent Files submenu"""
		self.recent_menu.clear()
		
		if not self.recent_files:
			no_recent = self.recent_menu.addAction("No recent files")
			no_recent.setEnabled(False)
			return
		
		for filepath in self.recent_files:
			action = self.recent_menu.addAction(os.path.basename(filepath))
			action.setToolTip(filepath)
			action.triggered.connect(lambda checked, f=filepath: self._open_recent_file(f))
		
		self.recent_menu.addSeparator()
		clear_action = self.recent_menu.addAction("Clear Recent Files")
		clear_action.triggered.connect(self._clear_recent_files)
	
	def _clear_recent_files(self):
		self.recent_files = []
		self._update_recent_files_menu()
		self._save_config()
	
	def _open_recent_file(self, filepath):
		"""Open a file from the recent files list"""
		if not os.path.exists(filepath):
			QMessageBox.warning(self, "File Not Found", f"The file no longer exists:\n{filepath}")
			self.recent_files.remove(filepath)
			self._update_recent_files_menu()
			self._save_config()
			return
		
		if not self._prompt_save_if_needed():
			return
		self.file_actions.open_file(filepath)
	
	# ========================================
	# Autosave
	# ========================================
	
	def _autosave(self):
		"""Write the current map to the autosave file when there are unsaved changes"""
		if self.is_saved:
			return
		try:
			os.makedirs(self.config_dir, exist_ok=True)
			with open(self.autosave_file, 'w', encoding='utf-8') as f:
				f.write(scene_to_json_text(self.engine.get_map_data()))
			self._logger.info("Autosaved")
		except Exception as e:
			loggerRaise(e, "Autosave failed")
	
	def _remove_autosave(self):
		if os.path.exists(self.autosave_file):
			os.remove(self.autosave_file)
	
	def _check_autosave_recovery(self):
		"""Offer to recover the autosave file left by a previous session"""
		if not os.path.exists(self.autosave_file):
			return
		reply = QMessageBox.question(
			self,
			"Recover Autosave",
			"An autosave file was found. Would you like to recover it?",
			QMessageBox.Yes | QMessageBox.No,
			QMessageBox.Yes
		)
		if reply != QMessageBox.Yes:
			self._remove_autosave()
			return
		
		try:
			with open(self.autosave_file, 'r', encoding='utf-8') as f:
				record = scene_from_json_text(f.read())
			self.engine.load_map_data(record)
		except InvalidSnapshotError as e:
			QMessageBox.warning(self, "Recover Autosave", f"The autosave file is damaged:\n{e}")
			self._remove_autosave()
			return
		except Exception as e:
			loggerRaise(e, "Error recovering autosave")
		
		# Recovered work is unsaved until written to a real file
		self.current_file_path = None
		self.is_saved = False
		self._update_window_title()
		self._remove_autosave()
	
	# ========================================
	# Window state
	# ========================================
	
	def _update_window_title(self):
		"""Update window title with current file name"""
		modified = "" if self.is_saved else "*"
		if self.current_file_path:
			filename = os.path.basename(self.current_file_path)
			self.setWindowTitle(f"{filename}{modified} - {APP_NAME}")
		else:
			self.setWindowTitle(f"Untitled{modified} - {APP_NAME}")
	
	def _prompt_save_if_needed(self):
		"""Prompt user to save if there are unsaved changes
		
		Returns:
			True if it's safe to proceed (saved or discarded)
			False if user cancelled
		"""
		if not self.is_saved:
			reply = QMessageBox.question(
				self,
				"Unsaved Changes",
				"Do you want to save your changes?",
				QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel,
				QMessageBox.Save
			)
			
			if reply == QMessageBox.Save:
				self.file_actions.save_map()
				# The save dialog may have been cancelled
				return self.is_saved
			elif reply == QMessageBox.Cancel:
				return False
		
		return True
