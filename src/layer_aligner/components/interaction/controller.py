"""Interaction controller - pointer input state machine for the layer canvas.

Converts raw pointer positions (canvas pixels) into layer geometry and guide
updates:

    Idle --press on handle--> ResizingLayer --release/leave--> Idle (commit)
    Idle --press on guide---> DraggingGuide --release/leave--> Idle
    Idle --press on layer---> DraggingLayer --release/leave--> Idle (commit)

A drag or resize captures one history snapshot at press time and pushes it on
release, so a gesture is exactly one undo step.
"""

import logging

from layer_aligner.models.transform import Vec2
from layer_aligner.services.layer_operations import paint_order
from .drag_context import IDLE, DraggingGuide, DraggingLayer, ResizingLayer
from .handles import HANDLES, get_handle_at_pos


class InteractionController:
	"""Pointer state machine bound to a LayerStore and its guide lines."""
	
	def __init__(self, store, guides, bounds=None):
		"""
		Args:
			store: LayerStore receiving geometry updates
			guides: GuideLines receiving guide drags
			bounds: CanvasBounds of the surface (needed for guide hit-test/drag)
		"""
		self.store = store
		self.guides = guides
		self.bounds = bounds
		self.state = IDLE
		self._logger = logging.getLogger('Interaction')
	
	@property
	def is_idle(self):
		return self.state is IDLE
	
	# ========================================
	# Gesture starts
	# ========================================
	
	def pointer_down(self, px, py):
		"""Dispatch a press by hit-testing in priority order.
		
		Selected layer's handles, then guides, then layer bodies (top-most first),
		then empty canvas (clears selection).
		
		Returns:
			The resulting state
		"""
		selected = self.store.selected_layer
		if selected is not None and selected.visible:
			handle = get_handle_at_pos(px, py, selected.geometry)
			if handle is not None:
				return self.begin_resize(selected.id, handle.name, px, py)
		
		if self.bounds is not None and self.store.get_layer_count() > 0:
			which = self.guides.hit_test(px, py, self.bounds)
			if which is not None:
				return self.begin_guide_drag(which)
		
		order = paint_order(self.store.layers, self.store.selected_id)
		layer = self.store.layer_at(px, py, order)
		if layer is not None:
			return self.begin_layer_drag(layer.id, px, py)
		
		self.store.clear_selection()
		return self.state
	
	def begin_layer_drag(self, layer_id, px, py):
		layer = self.store.get_layer(layer_id)
		if layer is None:
			return self.state
		self.store.select(layer_id)
		self.store.history.begin_pending(self.store.layers, "Move layer")
		self.state = DraggingLayer(layer_id, Vec2(px - layer.x, py - layer.y))
		self._logger.debug(f"Drag start: {layer_id}")
		return self.state
	
	def begin_resize(self, layer_id, handle, px, py):
		layer = self.store.get_layer(layer_id)
		if layer is None:
			return self.state
		self.store.select(layer_id)
		self.store.history.begin_pending(self.store.layers, "Resize layer")
		self.state = ResizingLayer(layer_id, handle, layer.geometry, Vec2(px, py))
		self._logger.debug(f"Resize start: {layer_id} ({handle})")
		return self.state
	
	def begin_guide_drag(self, which):
		"""Pick up a guide; locked guides swallow the press without moving."""
		if self.guides.locked:
			return self.state
		self.state = DraggingGuide(which)
		return self.state
	
	# ========================================
	# Movement
	# ========================================
	
	def pointer_move(self, px, py):
		"""Apply the current gesture for an absolute pointer position.
		
		Returns:
			True if something changed
		"""
		state = self.state
		
		if isinstance(state, DraggingGuide):
			if self.bounds is None:
				return False
			self.guides.drag_to(state.which, px, py, self.bounds, self.store.layers)
			return True
		
		if isinstance(state, ResizingLayer):
			layer = self.store.get_layer(state.layer_id)
			if layer is None:
				return False
			geometry = HANDLES[state.handle].drag(
				px - state.start_pointer.x,
				py - state.start_pointer.y,
				state.start_geometry,
				layer.aspect_ratio,
			)
			return self.store.update_geometry(state.layer_id, geometry)
		
		if isinstance(state, DraggingLayer):
			layer = self.store.get_layer(state.layer_id)
			if layer is None:
				return False
			geometry = layer.geometry.replace(x=px - state.pointer_offset.x, y=py - state.pointer_offset.y)
			return self.store.update_geometry(state.layer_id, geometry)
		
		return False
	
	# ========================================
	# Gesture end
	# ========================================
	
	def pointer_up(self):
		"""End any gesture, committing the pending checkpoint of a drag/resize.
		
		The checkpoint is dropped when the layer was removed mid-gesture (the
		removal already pushed its own).
		
		Returns:
			True if a history entry was pushed
		"""
		committed = False
		if isinstance(self.state, (DraggingLayer, ResizingLayer)):
			if self.store.has_layer(self.state.layer_id):
				committed = self.store.history.commit_pending()
				self._logger.debug(f"Gesture committed: {type(self.state).__name__}")
			else:
				self.store.history.discard_pending()
		self.state = IDLE
		return committed
	
	def pointer_leave(self):
		"""Leaving the surface ends the gesture like a release."""
		return self.pointer_up()
