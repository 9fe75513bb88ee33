"""Window event handlers for LayerAlignerWindow"""


class EventMixin:
	"""Drag-and-drop import and close handling"""
	
	def dragEnterEvent(self, event):
		"""Accept drags that carry local files"""
		if event.mimeData().hasUrls():
			event.acceptProposedAction()
		else:
			event.ignore()
	
	def dropEvent(self, event):
		"""Import dropped image files (unsupported types are filtered out)"""
		paths = [url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()]
		if paths:
			self.add_images(paths)
			event.acceptProposedAction()
	
	def closeEvent(self, event):
		self._save_config()
		super().closeEvent(event)
