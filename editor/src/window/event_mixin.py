"""Engine and window event handlers for GridMapEditor"""

from PyQt5.QtWidgets import QMessageBox, QMenu

from engine import SELECTION_CHANGED, LAYERS_CHANGED, HISTORY_CHANGED, SCENE_LOADED, NOTICE


class EventMixin:
	"""Engine listeners, context menu and close handling"""
	
	def _connect_engine_events(self):
		"""Subscribe the window to engine notifications"""
		self.engine.add_listener(SELECTION_CHANGED, self._on_selection_changed)
		self.engine.add_listener(LAYERS_CHANGED, self._on_layers_changed)
		self.engine.add_listener(HISTORY_CHANGED, self._on_history_changed)
		self.engine.add_listener(SCENE_LOADED, self._on_scene_loaded)
		self.engine.add_listener(NOTICE, self._on_notice)
	
	def _on_selection_changed(self):
		self._update_menu_actions()
		self._update_status_bar()
	
	def _on_layers_changed(self):
		self._update_menu_actions()
		self._update_status_bar()
	
	def _on_scene_loaded(self):
		self._update_menu_actions()
		self._update_status_bar()
	
	def _on_notice(self, message):
		QMessageBox.information(self, self.windowTitle(), message)
	
	def showEvent(self, event):
		"""Offer autosave recovery once the window is visible"""
		super().showEvent(event)
		if not getattr(self, '_autosave_checked', False):
			self._autosave_checked = True
			self._check_autosave_recovery()
	
	def _show_canvas_context_menu(self, pos):
		"""Edit menu as context menu over the canvas"""
		menu = QMenu(self)
		for action in self.edit_menu.actions():
			if action.isSeparator():
				menu.addSeparator()
			else:
				menu.addAction(action)
		menu.exec_(self.canvas_widget.mapToGlobal(pos))
	
	def closeEvent(self, event):
		"""Prompt to save before closing"""
		if not self._prompt_save_if_needed():
			event.ignore()
			return
		self.autosave_timer.stop()
		self._remove_autosave()
		event.accept()
