"""Configuration management for LayerAlignerWindow"""

import os
import json

from layer_aligner.models.settings import EditorSettings
from layer_aligner.utils.logger import loggerRaise


class ConfigMixin:
	"""Preferences file load/save (layer state is never persisted)"""
	
	def _load_config(self):
		"""Load preferences from the config file, defaults when absent"""
		self.settings = EditorSettings()
		try:
			if os.path.exists(self.config_file):
				with open(self.config_file, 'r', encoding='utf-8') as f:
					self.settings = EditorSettings.from_dict(json.load(f))
		except Exception as e:
			loggerRaise(e, "Error loading config")
		return self.settings
	
	def _save_config(self):
		"""Save preferences to the config file"""
		try:
			# Create config directory if it doesn't exist
			os.makedirs(self.config_dir, exist_ok=True)
			
			with open(self.config_file, 'w', encoding='utf-8') as f:
				json.dump(self.settings.to_dict(), f, indent=2)
		except Exception as e:
			loggerRaise(e, "Error saving config")
	
	def _apply_guide_settings(self):
		"""Copy guide toggles from settings onto the guide lines"""
		self.guides.visible = self.settings.show_guides
		self.guides.locked = self.settings.guides_locked
		self.guides.snap_to_layer_centers = self.settings.snap_to_layer_centers
	
	def _set_setting(self, name, value):
		"""Change a preference, keep guides in sync, persist and repaint"""
		setattr(self.settings, name, value)
		self._apply_guide_settings()
		self._save_config()
		self.canvas.update()
