"""Layer canvas widget - paints layers and forwards pointer input.

The widget owns no layer state. It paints what the LayerStore, GuideLines,
EditorSettings and ReferenceWizard describe, and hands pointer events to the
InteractionController (or to the wizard while it is running).
"""

import logging

from PyQt5.QtCore import Qt, QRectF, QPointF, pyqtSignal
from PyQt5.QtGui import QPainter, QPen, QBrush, QColor, QPixmap
from PyQt5.QtWidgets import QWidget

from layer_aligner.components.interaction import HANDLES, InteractionController
from layer_aligner.constants import (
	BORDER_COLOR, SELECTED_BORDER_COLOR, GUIDE_COLOR, MARKER_COLOR,
	HORIZONTAL_GUIDES, VERTICAL_GUIDES, HANDLE_SIZE
)
from layer_aligner.models.transform import CanvasBounds
from layer_aligner.services.layer_operations import paint_order
from layer_aligner.utils.coordinate_transforms import contain_rect, from_canvas

MARKER_RADIUS = 6


class CanvasWidget(QWidget):
	"""Canvas surface for the layer stack"""
	
	boundsChanged = pyqtSignal(object)  # CanvasBounds
	layersChanged = pyqtSignal()  # geometry/selection changed by the pointer
	wizardPicked = pyqtSignal()  # wizard recorded a point
	
	def __init__(self, store, guides, settings, wizard, parent=None):
		super().__init__(parent)
		self.store = store
		self.guides = guides
		self.settings = settings
		self.wizard = wizard
		self.controller = InteractionController(store, guides)
		self._pixmaps = {}  # source -> QPixmap
		self._logger = logging.getLogger('Canvas')
		
		self.setMouseTracking(True)
		self.setMinimumSize(400, 300)
	
	@property
	def bounds(self):
		return CanvasBounds(self.width(), self.height())
	
	def resizeEvent(self, event):
		super().resizeEvent(event)
		self.controller.bounds = self.bounds
		self.boundsChanged.emit(self.bounds)
	
	# ========================================
	# Pointer input
	# ========================================
	
	def mousePressEvent(self, event):
		"""Route presses to the wizard while it runs, else to the controller"""
		if event.button() != Qt.LeftButton:
			super().mousePressEvent(event)
			return
		
		self.controller.bounds = self.bounds
		if self.wizard.active:
			layer = self.wizard.current_layer
			if layer is not None:
				u, v = from_canvas(layer, event.pos().x(), event.pos().y())
				self.wizard.record_pick(u, v)
				self.wizardPicked.emit()
		else:
			self.controller.pointer_down(event.pos().x(), event.pos().y())
			self.layersChanged.emit()
		self.update()
		event.accept()
	
	def mouseMoveEvent(self, event):
		if self.controller.pointer_move(event.pos().x(), event.pos().y()):
			self.layersChanged.emit()
			self.update()
		self._update_cursor(event.pos().x(), event.pos().y())
	
	def mouseReleaseEvent(self, event):
		if event.button() == Qt.LeftButton:
			self.controller.pointer_up()
			self.update()
		event.accept()
	
	def leaveEvent(self, event):
		"""Leaving the canvas ends any gesture"""
		self.controller.pointer_leave()
		super().leaveEvent(event)
	
	def _update_cursor(self, px, py):
		if not self.controller.is_idle or self.wizard.active:
			return
		selected = self.store.selected_layer
		if selected is not None:
			for handle in HANDLES.values():
				if handle.hit_test(px, py, selected.geometry):
					if handle.name in ('n', 's'):
						self.setCursor(Qt.SizeVerCursor)
					elif handle.name in ('e', 'w'):
						self.setCursor(Qt.SizeHorCursor)
					elif handle.name in ('nw', 'se'):
						self.setCursor(Qt.SizeFDiagCursor)
					else:
						self.setCursor(Qt.SizeBDiagCursor)
					return
		self.setCursor(Qt.ArrowCursor)
	
	# ========================================
	# Painting
	# ========================================
	
	def pixmap_for(self, source):
		"""Cached pixmap for an image source (null pixmap if unreadable)"""
		if source not in self._pixmaps:
			self._pixmaps[source] = QPixmap(str(source))
		return self._pixmaps[source]
	
	def paintEvent(self, event):
		painter = QPainter(self)
		painter.setRenderHint(QPainter.Antialiasing)
		painter.setRenderHint(QPainter.SmoothPixmapTransform)
		painter.fillRect(self.rect(), QColor(self.settings.background_color))
		
		wizard_layer_id = self.wizard.current_layer_id if self.wizard.active else None
		selected_id = self.store.selected_id
		for layer in paint_order(self.store.layers, selected_id, wizard_layer_id):
			if not layer.visible:
				continue
			self._draw_layer(painter, layer, layer.id == selected_id)
		
		selected = self.store.selected_layer
		if selected is not None and selected.visible and not self.wizard.active:
			self._draw_handles(painter, selected)
		
		if self.guides.visible and self.store.get_layer_count() > 0:
			self._draw_guides(painter)
		
		if self.wizard.active:
			self._draw_markers(painter)
		
		painter.end()
	
	def _draw_layer(self, painter, layer, is_selected):
		left, top, img_w, img_h = contain_rect(layer)
		pixmap = self.pixmap_for(layer.source)
		
		painter.save()
		painter.setOpacity(self.settings.opacity_selected if is_selected else self.settings.opacity_unselected)
		if not pixmap.isNull():
			painter.drawPixmap(QRectF(left, top, img_w, img_h), pixmap, QRectF(pixmap.rect()))
		painter.restore()
		
		if self.settings.show_borders:
			color = SELECTED_BORDER_COLOR if is_selected else BORDER_COLOR
			painter.setPen(QPen(QColor(color), 2 if is_selected else 1))
			painter.setBrush(Qt.NoBrush)
			painter.drawRect(QRectF(layer.x, layer.y, layer.width, layer.height))
	
	def _draw_handles(self, painter, layer):
		painter.setPen(QPen(QColor(SELECTED_BORDER_COLOR), 2))
		painter.setBrush(QBrush(QColor('#18181b')))
		for handle in HANDLES.values():
			hx, hy = handle.get_pixel_pos(layer.geometry)
			painter.drawEllipse(QPointF(hx, hy), HANDLE_SIZE / 2, HANDLE_SIZE / 2)
	
	def _draw_guides(self, painter):
		pen = QPen(QColor(GUIDE_COLOR), 1, Qt.DashLine)
		painter.setPen(pen)
		for which in HORIZONTAL_GUIDES:
			y = self.guides[which] * self.height()
			painter.drawLine(QPointF(0, y), QPointF(self.width(), y))
		for which in VERTICAL_GUIDES:
			x = self.guides[which] * self.width()
			painter.drawLine(QPointF(x, 0), QPointF(x, self.height()))
	
	def _draw_markers(self, painter):
		"""Crosshairs for the current wizard layer's reference points"""
		current_step = self.wizard.step
		for step, pos in self.wizard.marker_positions():
			width = 3 if step is current_step else 1
			painter.setPen(QPen(QColor(MARKER_COLOR), width))
			if step.x_field is None:
				layer = self.wizard.current_layer
				painter.drawLine(QPointF(layer.x, pos.y), QPointF(layer.x + layer.width, pos.y))
			else:
				painter.drawLine(QPointF(pos.x - MARKER_RADIUS, pos.y), QPointF(pos.x + MARKER_RADIUS, pos.y))
				painter.drawLine(QPointF(pos.x, pos.y - MARKER_RADIUS), QPointF(pos.x, pos.y + MARKER_RADIUS))
