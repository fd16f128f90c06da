"""
Undo/Redo History Manager for Grid Map Editor

Bounded log of scene snapshots with a pointer to the current entry.
Invariant: -1 <= pointer < len(entries) <= max_history
"""

import copy
import logging


class HistoryManager:
	"""Manages undo/redo history with state snapshots"""
	
	def __init__(self, max_history=50):
		"""
		Initialize the history manager
		
		Args:
			max_history: Maximum number of snapshots to keep (oldest evicted first)
		"""
		if max_history < 1:
			raise ValueError(f"max_history must be at least 1, got {max_history}")
		self._logger = logging.getLogger('History')
		self.max_history = max_history
		self.entries = []  # List of {'data', 'description'}
		self.pointer = -1  # Current position in entries (-1 means empty)
		self._listeners = []  # Callbacks to notify on state changes
	
	def record(self, state_data, description=""):
		"""
		Append a snapshot after the current position
		
		Any redo branch beyond the pointer is discarded. When the log
		exceeds max_history the oldest entry is evicted.
		
		Args:
			state_data: Snapshot record (deep-copied)
			description: Optional description of the change
		"""
		# Discard the redo branch
		del self.entries[self.pointer + 1:]
		
		self.entries.append({
			'data': copy.deepcopy(state_data),
			'description': description
		})
		self.pointer = len(self.entries) - 1
		
		if len(self.entries) > self.max_history:
			self.entries.pop(0)
			self.pointer -= 1
		
		self._notify_listeners()
		self._logger.debug(f"Recorded state: {description} (pointer: {self.pointer}, total: {len(self.entries)})")
	
	def load(self, state_data, description=""):
		"""Reset the log to a single entry holding state_data"""
		self.entries = []
		self.pointer = -1
		self.record(state_data, description)
	
	def undo(self):
		"""
		Move back one entry
		
		Returns:
			Deep copy of the previous snapshot, or None if at the first entry
		"""
		if not self.can_undo():
			self._logger.debug("Cannot undo - at beginning of history")
			return None
		
		self.pointer -= 1
		entry = self.entries[self.pointer]
		self._notify_listeners()
		self._logger.debug(f"Undo to: {entry['description']} (pointer: {self.pointer})")
		return copy.deepcopy(entry['data'])
	
	def redo(self):
		"""
		Move forward one entry
		
		Returns:
			Deep copy of the next snapshot, or None if at the last entry
		"""
		if not self.can_redo():
			self._logger.debug("Cannot redo - at end of history")
			return None
		
		self.pointer += 1
		entry = self.entries[self.pointer]
		self._notify_listeners()
		self._logger.debug(f"Redo to: {entry['description']} (pointer: {self.pointer})")
		return copy.deepcopy(entry['data'])
	
	def current(self):
		"""Deep copy of the snapshot at the pointer, or None if empty"""
		if 0 <= self.pointer < len(self.entries):
			return copy.deepcopy(self.entries[self.pointer]['data'])
		return None
	
	def can_undo(self):
		"""Check if undo is available"""
		return self.pointer > 0
	
	def can_redo(self):
		"""Check if redo is available"""
		return self.pointer < len(self.entries) - 1
	
	def clear(self):
		"""Clear all history"""
		self.entries = []
		self.pointer = -1
		self._notify_listeners()
		self._logger.debug("History cleared")
	
	def __len__(self):
		return len(self.entries)
	
	def add_listener(self, callback):
		"""
		Add a listener to be notified when history state changes
		
		Args:
			callback: Function to call when history changes (receives can_undo, can_redo)
		"""
		self._listeners.append(callback)
	
	def remove_listener(self, callback):
		"""Remove a listener"""
		if callback in self._listeners:
			self._listeners.remove(callback)
	
	def _notify_listeners(self):
		"""Notify all listeners of history state change"""
		for callback in list(self._listeners):
			try:
				callback(self.can_undo(), self.can_redo())
			except Exception:
				self._logger.exception("Error notifying history listener")
	
	def get_current_description(self):
		"""Get the description of the current state"""
		if 0 <= self.pointer < len(self.entries):
			return self.entries[self.pointer]['description']
		return ""
	
	def get_undo_description(self):
		"""Get the description of the state that would be restored by undo"""
		if self.can_undo():
			return self.entries[self.pointer - 1]['description']
		return ""
	
	def get_redo_description(self):
		"""Get the description of the state that would be restored by redo"""
		if self.can_redo():
			return self.entries[self.pointer + 1]['description']
		return ""
