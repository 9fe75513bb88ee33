"""Layer import and layer panel actions for LayerAlignerWindow"""

import logging

from PyQt5.QtCore import QTimer
from PyQt5.QtWidgets import QFileDialog, QMessageBox

from layer_aligner.constants import ACCEPTED_IMAGE_EXTENSIONS, MIN_LAYOUT_BOUNDS
from layer_aligner.services.image_loader import filter_supported, read_image_size

logger = logging.getLogger(__name__)


class LayerMixin:
	"""Image import, asynchronous size correction and layer edits"""
	
	def open_images(self):
		"""Show a file dialog and import the chosen images"""
		patterns = ' '.join(f"*.{ext}" for ext in ACCEPTED_IMAGE_EXTENSIONS)
		paths, _ = QFileDialog.getOpenFileNames(self, "Select images", "", f"Images ({patterns})")
		if paths:
			self.add_images(paths)
	
	def add_images(self, paths):
		"""Import images as new layers on top of the stack
		
		Layers appear immediately with placeholder geometry; each one is
		corrected once its size has been read.
		
		Returns:
			Ids of the new layers
		"""
		accepted = filter_supported(paths)
		if not accepted:
			return []
		
		ids = self.store.add_layers(accepted)
		
		# First import: both opacities start at 1/N
		count = self.store.get_layer_count()
		if not self._opacity_initialized:
			self._opacity_initialized = True
			self.settings.opacity_selected = 1 / count
			self.settings.opacity_unselected = 1 / count
			self._sync_opacity_sliders()
		
		bounds = self._known_bounds()
		if bounds is None:
			self._layout_pending = True
		else:
			self.store.layout_new_layers(bounds)
		
		for layer_id, path in zip(ids, accepted):
			QTimer.singleShot(0, lambda layer_id=layer_id, path=path: self._on_image_decoded(layer_id, path))
		
		self._refresh()
		return ids
	
	def _on_image_decoded(self, layer_id, path):
		"""Correct a layer for its real image size (no-op if it was removed)"""
		if not self.store.has_layer(layer_id):
			return
		try:
			width, height = read_image_size(path)
		except OSError as e:
			# Unreadable file: the placeholder goes away, the editor keeps running
			logger.warning(f"Could not read image {path}: {e}")
			self.store.drop_layer(layer_id)
			self._refresh()
			QMessageBox.warning(self, "Import error", f"Could not read image:\n{path}")
			return
		self.store.apply_decoded_size(layer_id, width, height, self._known_bounds())
		self._refresh()
	
	def _known_bounds(self):
		"""Canvas bounds once the canvas is large enough to lay layers out, else None"""
		bounds = self.canvas.bounds
		if bounds.width < MIN_LAYOUT_BOUNDS or bounds.height < MIN_LAYOUT_BOUNDS:
			return None
		return bounds
	
	def _on_canvas_bounds_changed(self, bounds):
		"""Lay out layers imported before the canvas had a usable size"""
		if not self._layout_pending or bounds.width < MIN_LAYOUT_BOUNDS or bounds.height < MIN_LAYOUT_BOUNDS:
			return
		self._layout_pending = False
		self.store.layout_new_layers(bounds)
		self._refresh()
	
	def remove_selected_layer(self):
		if self.store.selected_id is None:
			return
		self.store.remove_layer(self.store.selected_id)
		self._refresh()
	
	def move_selected_layer(self, direction):
		"""Bring the selected layer forward ('up') or send it backward ('down')"""
		index = self.store.selected_index - 1
		if index < 0:
			return
		self.store.move_adjacent(index, direction)
		self._refresh()
	
	def toggle_selected_visibility(self):
		if self.store.selected_id is None:
			return
		self.store.toggle_visible(self.store.selected_id)
		self._refresh()
