"""Toolbar creation and action handlers for LayerAlignerWindow"""

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QIcon, QPixmap
from PyQt5.QtWidgets import QColorDialog, QLabel, QSlider, QToolBar

from layer_aligner.constants import PRESET_BG_COLORS
from layer_aligner.utils.snapping import snap_opacity

SLIDER_STEPS = 100


class MenuMixin:
    """Toolbars and their actions"""
    
    def _create_toolbars(self):
        """Create the layer, display and alignment toolbars"""
        layer_bar = QToolBar("Layers", self)
        self.addToolBar(layer_bar)
        
        open_action = layer_bar.addAction("Select images")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.open_images)
        
        self.undo_action = layer_bar.addAction("Undo")
        self.undo_action.setShortcut("Ctrl+Z")
        self.undo_action.setEnabled(False)
        self.undo_action.triggered.connect(self.undo)
        
        layer_bar.addSeparator()
        
        self.forward_action = layer_bar.addAction("Bring forward")
        self.forward_action.triggered.connect(lambda: self.move_selected_layer('up'))
        
        self.backward_action = layer_bar.addAction("Send backward")
        self.backward_action.triggered.connect(lambda: self.move_selected_layer('down'))
        
        self.visibility_action = layer_bar.addAction("Hide/show layer")
        self.visibility_action.setShortcut("H")
        self.visibility_action.triggered.connect(self.toggle_selected_visibility)
        
        self.remove_action = layer_bar.addAction("Remove layer")
        self.remove_action.setShortcut(Qt.Key_Delete)
        self.remove_action.triggered.connect(self.remove_selected_layer)
        
        self._create_display_toolbar()
        self._create_alignment_toolbar()
        self._update_actions()
    
    def _create_display_toolbar(self):
        display_bar = QToolBar("Display", self)
        self.addToolBar(display_bar)
        
        display_bar.addWidget(QLabel("Background "))
        for color in PRESET_BG_COLORS:
            pixmap = QPixmap(16, 16)
            pixmap.fill(QColor(color))
            action = display_bar.addAction(QIcon(pixmap), color)
            action.triggered.connect(lambda checked, c=color: self._set_setting('background_color', c))
        custom_action = display_bar.addAction("Custom...")
        custom_action.triggered.connect(self._pick_background_color)
        
        display_bar.addSeparator()
        
        self.opacity_unselected_slider = self._add_opacity_slider(display_bar, "Unsel ", 'opacity_unselected')
        self.opacity_selected_slider = self._add_opacity_slider(display_bar, "Sel ", 'opacity_selected')
        
        display_bar.addSeparator()
        
        self._add_toggle(display_bar, "Show borders", 'show_borders')
        self._add_toggle(display_bar, "Guide lines", 'show_guides')
        self._add_toggle(display_bar, "Lock guides", 'guides_locked')
        self._add_toggle(display_bar, "Snap to centers", 'snap_to_layer_centers')
    
    def _create_alignment_toolbar(self):
        align_bar = QToolBar("Alignment", self)
        self.addToolBar(align_bar)
        
        self.wizard_action = align_bar.addAction("Mark reference points")
        self.wizard_action.triggered.connect(self.start_wizard)
        
        self.prev_action = align_bar.addAction("Prev")
        self.prev_action.triggered.connect(self.wizard_previous)
        
        self.next_action = align_bar.addAction("Next")
        self.next_action.triggered.connect(self.wizard_next)
        
        self.finish_action = align_bar.addAction("Done")
        self.finish_action.triggered.connect(self.finish_wizard)
        
        self.align_action = align_bar.addAction("Auto align")
        self.align_action.triggered.connect(self.auto_align)
    
    def _add_toggle(self, toolbar, label, setting):
        action = toolbar.addAction(label)
        action.setCheckable(True)
        action.setChecked(getattr(self.settings, setting))
        action.toggled.connect(lambda checked, s=setting: self._set_setting(s, checked))
        return action
    
    def _add_opacity_slider(self, toolbar, label, setting):
        """Opacity slider that snaps to the nearest snap point on release"""
        toolbar.addWidget(QLabel(label))
        slider = QSlider(Qt.Horizontal)
        slider.setRange(0, SLIDER_STEPS)
        slider.setFixedWidth(80)
        slider.setValue(round(getattr(self.settings, setting) * SLIDER_STEPS))
        slider.valueChanged.connect(lambda value, s=setting: self._on_opacity_changed(s, value))
        slider.sliderReleased.connect(lambda s=setting, w=slider: self._on_opacity_released(s, w))
        toolbar.addWidget(slider)
        
        one_over_n = toolbar.addAction("1/N")
        one_over_n.triggered.connect(lambda checked, s=setting: self._set_opacity(s, 1 / max(1, self.store.get_layer_count())))
        return slider
    
    def _on_opacity_changed(self, setting, value):
        setattr(self.settings, setting, value / SLIDER_STEPS)
        self.canvas.update()
    
    def _on_opacity_released(self, setting, slider):
        self._set_opacity(setting, slider.value() / SLIDER_STEPS)
    
    def _set_opacity(self, setting, value):
        """Store a snapped opacity and move the slider to match"""
        snapped = snap_opacity(value, self.store.get_layer_count())
        self._set_setting(setting, snapped)
        self._sync_opacity_sliders()
    
    def _sync_opacity_sliders(self):
        for slider, setting in ((self.opacity_selected_slider, 'opacity_selected'),
                                (self.opacity_unselected_slider, 'opacity_unselected')):
            slider.blockSignals(True)
            slider.setValue(round(getattr(self.settings, setting) * SLIDER_STEPS))
            slider.blockSignals(False)
    
    def _pick_background_color(self):
        color = QColorDialog.getColor(QColor(self.settings.background_color), self, "Background")
        if color.isValid():
            self._set_setting('background_color', color.name())
    
    def _update_actions(self):
        """Enable actions according to selection and wizard state"""
        has_selection = self.store.selected_id is not None
        index = self.store.selected_index
        count = self.store.get_layer_count()
        
        self.forward_action.setEnabled(has_selection and index < count)
        self.backward_action.setEnabled(has_selection and index > 1)
        self.visibility_action.setEnabled(has_selection)
        self.remove_action.setEnabled(has_selection)
        
        wizard_on = self.wizard.active
        self.wizard_action.setEnabled(count > 0 and not wizard_on)
        self.prev_action.setEnabled(wizard_on and self.wizard.previous_target() is not None)
        self.next_action.setEnabled(wizard_on and self.wizard.next_target() is not None)
        self.finish_action.setEnabled(wizard_on)
        self.align_action.setEnabled(count >= 2)
        self.undo_action.setEnabled(self.store.history.can_undo())
