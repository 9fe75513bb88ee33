"""
Undo History Manager for Layer Aligner

Bounded stack of full layer snapshots. A snapshot is taken immediately BEFORE a
mutation, so undo simply pops the latest one and restores it. There is no redo.

Drag and resize gestures capture their snapshot at gesture start and only push
it when the gesture ends, so one gesture is one undo step.
"""

import copy
import logging

from layer_aligner.constants import MAX_HISTORY_ENTRIES


class HistoryManager:
	"""Manages undo history with state snapshots"""
	
	def __init__(self, max_history=MAX_HISTORY_ENTRIES):
		"""
		Initialize the history manager
		
		Args:
			max_history: Maximum number of snapshots to keep; the oldest is dropped first
		"""
		self.max_history = max_history
		self.history = []  # Oldest first
		self._pending = None  # Snapshot captured at gesture start
		self._listeners = []  # Callbacks to notify on state changes
		self._logger = logging.getLogger('History')
	
	def checkpoint(self, state_data, description=""):
		"""
		Push a snapshot of the pre-mutation state
		
		Args:
			state_data: Full state to save (deep copied)
			description: Optional description of the change about to happen
		"""
		self._push({
			'data': copy.deepcopy(state_data),
			'description': description
		})
	
	def undo(self):
		"""
		Pop the most recent snapshot
		
		Returns:
			The saved state, or None when history is empty
		"""
		if not self.can_undo():
			self._logger.debug("Cannot undo - history is empty")
			return None
		
		snapshot = self.history.pop()
		self._notify_listeners()
		
		self._logger.debug(f"Undo: {snapshot['description']} (remaining: {len(self.history)})")
		return snapshot['data']
	
	def can_undo(self):
		"""Check if undo is available"""
		return len(self.history) > 0
	
	# ========================================
	# Gesture checkpoints
	# ========================================
	
	def begin_pending(self, state_data, description=""):
		"""Capture a snapshot at gesture start without pushing it yet"""
		self._pending = {
			'data': copy.deepcopy(state_data),
			'description': description
		}
	
	def has_pending(self):
		return self._pending is not None
	
	def commit_pending(self):
		"""
		Push the snapshot captured by begin_pending, if any
		
		Returns:
			True if a snapshot was pushed
		"""
		if self._pending is None:
			return False
		snapshot, self._pending = self._pending, None
		self._push(snapshot)
		return True
	
	def discard_pending(self):
		self._pending = None
	
	# ========================================
	# Housekeeping
	# ========================================
	
	def clear(self):
		"""Clear all history"""
		self.history = []
		self._pending = None
		self._notify_listeners()
		self._logger.debug("History cleared")
	
	def get_undo_description(self):
		"""Get the description of the change that undo would revert"""
		if self.can_undo():
			return self.history[-1]['description']
		return ""
	
	def add_listener(self, callback):
		"""
		Add a listener to be notified when history changes
		
		Args:
			callback: Function called with can_undo (bool)
		"""
		self._listeners.append(callback)
	
	def remove_listener(self, callback):
		"""Remove a listener"""
		if callback in self._listeners:
			self._listeners.remove(callback)
	
	def _push(self, snapshot):
		self.history.append(snapshot)
		
		# Bounded stack: evict the oldest entry
		if len(self.history) > self.max_history:
			self.history.pop(0)
		
		self._notify_listeners()
		self._logger.debug(f"State saved: {snapshot['description']} (total: {len(self.history)})")
	
	def _notify_listeners(self):
		"""Notify all listeners of history state change"""
		for callback in self._listeners:
			callback(self.can_undo())
