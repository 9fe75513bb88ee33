"""Reference point wizard and auto-align actions for LayerAlignerWindow"""

from PyQt5.QtWidgets import QMessageBox

from layer_aligner.services.alignment_solver import run_auto_align


class WizardMixin:
	"""Wizard navigation and alignment"""
	
	def start_wizard(self):
		if self.wizard.begin():
			self.store.clear_selection()
		self._refresh()
	
	def wizard_previous(self):
		self.wizard.retreat_step()
		self._refresh()
	
	def wizard_next(self):
		self.wizard.advance_step()
		self._refresh()
	
	def finish_wizard(self):
		self.wizard.finish()
		self._refresh()
	
	def auto_align(self):
		"""Align every layer to the first one and report inconsistencies once"""
		result = run_auto_align(self.store, self.settings.alignment)
		if self.wizard.active:
			self.wizard.finish()
		self._refresh()
		if result.warnings:
			QMessageBox.warning(self, "Alignment mismatch", result.message)
		return result
