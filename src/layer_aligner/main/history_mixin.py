"""Undo handling and status bar updates for LayerAlignerWindow"""


class HistoryMixin:
    """Undo, history listener and status bar updates"""
    
    def undo(self):
        """Undo the last action"""
        if not self.canvas.controller.is_idle:
            return  # never restore a snapshot under an active gesture
        self.store.undo()
        self._refresh()
    
    def _on_history_changed(self, can_undo):
        """Called when history changes to update UI"""
        if hasattr(self, 'undo_action'):
            self.undo_action.setEnabled(can_undo)
        self._update_status_bar()
    
    def _update_status_bar(self):
        """Update status bar with wizard prompt or selection stats"""
        count = self.store.get_layer_count()
        
        if self.wizard.active:
            left_msg = f"Layer {self.wizard.layer_index + 1} of {count}: {self.wizard.prompt}"
            if self.wizard.is_complete:
                left_msg = "All reference points marked - run Auto align"
        else:
            last = self.store.history.get_undo_description()
            left_msg = f"Last action: {last}" if last else "Ready"
        
        if self.store.selected_index:
            right_msg = f"Layer {self.store.selected_index} of {count}"
        else:
            right_msg = f"{count} layer{'s' if count != 1 else ''}"
        
        if hasattr(self, 'status_left'):
            self.status_left.setText(left_msg)
        if hasattr(self, 'status_right'):
            self.status_right.setText(right_msg)
    
    def _refresh(self):
        """Repaint canvas and refresh enabled states after any model change"""
        self.canvas.update()
        self._update_actions()
        self._update_status_bar()
