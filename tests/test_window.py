"""
Integration tests for the Qt window and canvas widget.

Covers:
- Importing images (placeholder layers, size correction, first-import opacity)
- Pointer gestures routed through the canvas
- Wizard clicks and auto align from the toolbar handlers
- Preferences persisted to the config directory
"""
import json
import os

import pytest
from PyQt5.QtCore import QEvent, QPointF, Qt
from PyQt5.QtGui import QMouseEvent

from layer_aligner.app import LayerAlignerWindow
from layer_aligner.components.canvas_widget import CanvasWidget
from layer_aligner.components.interaction import DraggingLayer
from layer_aligner.models.transform import CanvasBounds


def mouse_event(kind, x, y):
    buttons = Qt.NoButton if kind == QEvent.MouseButtonRelease else Qt.LeftButton
    button = Qt.NoButton if kind == QEvent.MouseMove else Qt.LeftButton
    return QMouseEvent(kind, QPointF(x, y), button, buttons, Qt.NoModifier)


@pytest.fixture
def window(qtbot, tmp_path):
    win = LayerAlignerWindow(config_dir=str(tmp_path / 'config'))
    qtbot.addWidget(win)
    win.resize(1200, 900)
    win.show()
    qtbot.waitExposed(win)
    return win


@pytest.fixture
def loaded(window, qtbot, image_files):
    images, _ = image_files
    window.add_images(images[:2])
    # Sizes are read on the next event loop turn
    qtbot.waitUntil(lambda: window.store.layers[0].aspect_ratio == pytest.approx(400 / 600))
    qtbot.waitUntil(lambda: window.store.layers[1].aspect_ratio == pytest.approx(1.5))
    return window


# ══════════════════════════════════════════════════════════════════════════
# Import
# ══════════════════════════════════════════════════════════════════════════

class TestImport:

    def test_add_images_creates_layers(self, window, image_files):
        images, notes = image_files
        ids = window.add_images(images + [notes])
        assert len(ids) == 3
        assert window.store.get_layer_count() == 3

    def test_unsupported_only_is_ignored(self, window, image_files):
        _, notes = image_files
        assert window.add_images([notes]) == []
        assert window.store.get_layer_count() == 0

    def test_first_import_sets_opacity(self, window, image_files):
        images, _ = image_files
        window.add_images(images)
        assert window.settings.opacity_selected == pytest.approx(1 / 3)
        assert window.settings.opacity_unselected == pytest.approx(1 / 3)
        window.add_images(images[:1])
        assert window.settings.opacity_selected == pytest.approx(1 / 3)

    def test_size_correction_not_undoable(self, loaded):
        loaded.undo()
        assert loaded.store.get_layer_count() == 0
        assert not loaded.store.history.can_undo()

    def test_layers_centred_in_canvas(self, loaded):
        bounds = loaded.canvas.bounds
        layer = loaded.store.layers[0]
        assert layer.height == pytest.approx(bounds.height * 0.8)
        assert layer.x + layer.width / 2 == pytest.approx(bounds.width / 2)

    def test_decode_after_remove_is_ignored(self, window, qtbot, image_files):
        images, _ = image_files
        ids = window.add_images(images[:1])
        window.store.remove_layer(ids[0])
        qtbot.wait(50)
        assert window.store.get_layer_count() == 0

    def test_unreadable_image_is_dropped(self, window, qtbot, image_files, broken_image, monkeypatch):
        shown = []
        monkeypatch.setattr('layer_aligner.main.layer_mixin.QMessageBox.warning',
                            lambda *args: shown.append(args))
        images, _ = image_files
        window.add_images([broken_image, images[0]])
        qtbot.waitUntil(lambda: window.store.get_layer_count() == 1)
        qtbot.waitUntil(lambda: window.store.layers[0].aspect_ratio != 1.0)
        assert window.store.layers[0].source == images[0]
        assert len(shown) == 1
        assert broken_image in shown[0][2]
        # Only the import itself is undoable
        assert len(window.store.history.history) == 1

    def test_layout_waits_for_usable_canvas(self, window, qtbot, image_files, monkeypatch):
        images, _ = image_files
        monkeypatch.setattr(CanvasWidget, 'bounds', property(lambda self: CanvasBounds(0, 0)))
        window.add_images(images[:1])
        assert window._layout_pending
        assert window.store.layers[0].height == 200

        window.canvas.boundsChanged.emit(CanvasBounds(800, 600))
        assert not window._layout_pending
        assert window.store.layers[0].height == pytest.approx(480)

    def test_bounds_change_without_pending_layout_keeps_layers(self, loaded):
        before = loaded.store.get_snapshot()
        loaded.canvas.boundsChanged.emit(CanvasBounds(800, 600))
        assert loaded.store.layers == before


# ══════════════════════════════════════════════════════════════════════════
# Canvas gestures
# ══════════════════════════════════════════════════════════════════════════

class TestCanvasGestures:

    def _centre(self, layer):
        return layer.x + layer.width / 2, layer.y + layer.height * 0.6

    def test_drag_moves_top_layer(self, loaded):
        canvas = loaded.canvas
        top = loaded.store.layers[1]
        cx, cy = self._centre(top)
        start_x = top.x

        canvas.mousePressEvent(mouse_event(QEvent.MouseButtonPress, cx, cy))
        assert isinstance(canvas.controller.state, DraggingLayer)
        for step in range(1, 21):
            canvas.mouseMoveEvent(mouse_event(QEvent.MouseMove, cx + step, cy))
        canvas.mouseReleaseEvent(mouse_event(QEvent.MouseButtonRelease, cx + 20, cy))

        assert loaded.store.layers[1].x == pytest.approx(start_x + 20)
        assert loaded.store.selected_id == top.id
        assert loaded.store.history.get_undo_description() == "Move layer"

    def test_undo_ignored_during_gesture(self, loaded):
        canvas = loaded.canvas
        cx, cy = self._centre(loaded.store.layers[1])
        canvas.mousePressEvent(mouse_event(QEvent.MouseButtonPress, cx, cy))
        count = len(loaded.store.history.history)
        loaded.undo()
        assert len(loaded.store.history.history) == count
        assert loaded.store.get_layer_count() == 2

    def test_leaving_canvas_ends_gesture(self, loaded):
        canvas = loaded.canvas
        cx, cy = self._centre(loaded.store.layers[1])
        canvas.mousePressEvent(mouse_event(QEvent.MouseButtonPress, cx, cy))
        canvas.leaveEvent(QEvent(QEvent.Leave))
        assert canvas.controller.is_idle

    def test_remove_and_visibility_actions(self, loaded):
        top = loaded.store.layers[1]
        loaded.store.select(top.id)
        loaded.toggle_selected_visibility()
        assert not loaded.store.get_layer(top.id).visible
        loaded.remove_selected_layer()
        assert loaded.store.get_layer_count() == 1
        assert loaded.store.selected_id is None

    def test_move_selected_layer(self, loaded):
        bottom = loaded.store.layers[0]
        loaded.store.select(bottom.id)
        loaded.move_selected_layer('up')
        assert loaded.store.layers[1].id == bottom.id
        loaded.move_selected_layer('up')
        assert loaded.store.layers[1].id == bottom.id

    def test_paint_does_not_fail(self, loaded, qtbot):
        loaded.store.select(loaded.store.layers[0].id)
        loaded.canvas.repaint()
        loaded.start_wizard()
        loaded.canvas.repaint()


# ══════════════════════════════════════════════════════════════════════════
# Wizard and alignment
# ══════════════════════════════════════════════════════════════════════════

class TestWizardAndAlign:

    def test_ten_canvas_clicks_complete_wizard(self, loaded):
        loaded.start_wizard()
        assert loaded.wizard.active
        for _ in range(10):
            layer = loaded.wizard.current_layer
            x, y = layer.x + layer.width / 2, layer.y + layer.height / 2
            loaded.canvas.mousePressEvent(mouse_event(QEvent.MouseButtonPress, x, y))
            loaded.canvas.mouseReleaseEvent(mouse_event(QEvent.MouseButtonRelease, x, y))
        assert loaded.wizard.is_complete
        assert all(layer.refs is not None for layer in loaded.store.layers)
        assert not loaded.next_action.isEnabled()
        assert loaded.status_left.text().startswith("All reference points marked")

    def test_wizard_clicks_do_not_move_layers(self, loaded):
        before = [layer.geometry for layer in loaded.store.layers]
        loaded.start_wizard()
        loaded.canvas.mousePressEvent(mouse_event(QEvent.MouseButtonPress, 5, 5))
        assert [layer.geometry for layer in loaded.store.layers] == before
        assert loaded.store.layers[0].refs.body_top_y == 0.0

    def test_auto_align_without_warnings(self, window, qtbot, image_files, monkeypatch):
        shown = []
        monkeypatch.setattr('layer_aligner.main.wizard_mixin.QMessageBox.warning',
                            lambda *args: shown.append(args))
        images, _ = image_files
        window.add_images([images[0], images[0]])
        qtbot.waitUntil(lambda: all(layer.aspect_ratio != 1.0 for layer in window.store.layers))
        result = window.auto_align()
        assert result.warnings == []
        assert shown == []
        assert window.store.history.get_undo_description() == "Auto align"

    def test_auto_align_shows_warnings_once(self, loaded, monkeypatch, sample_refs):
        shown = []
        monkeypatch.setattr('layer_aligner.main.wizard_mixin.QMessageBox.warning',
                            lambda *args: shown.append(args))
        loaded.store.set_refs(loaded.store.layers[1].id, sample_refs)
        loaded.start_wizard()
        result = loaded.auto_align()
        assert result.warnings
        assert len(shown) == 1
        assert shown[0][2] == result.message
        assert not loaded.wizard.active


# ══════════════════════════════════════════════════════════════════════════
# Preferences
# ══════════════════════════════════════════════════════════════════════════

class TestPreferences:

    def test_setting_change_is_saved(self, window):
        window._set_setting('guides_locked', True)
        assert window.guides.locked
        with open(window.config_file, encoding='utf-8') as f:
            assert json.load(f)['guides_locked'] is True

    def test_preferences_reloaded(self, window, qtbot, tmp_path):
        window._set_setting('background_color', '#1f2937')
        window.close()
        reopened = LayerAlignerWindow(config_dir=window.config_dir)
        qtbot.addWidget(reopened)
        assert reopened.settings.background_color == '#1f2937'

    def test_close_writes_config(self, window):
        window.close()
        assert os.path.exists(window.config_file)

    def test_opacity_button_snaps(self, loaded):
        loaded._set_opacity('opacity_selected', 0.48)
        assert loaded.settings.opacity_selected == pytest.approx(0.5)
        assert loaded.opacity_selected_slider.value() == 50
