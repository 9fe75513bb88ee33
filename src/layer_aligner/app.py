"""Layer Aligner - desktop entry point.

Import portraits as layers, drag/resize them, mark reference points on each and
auto-align them to the first layer.
"""

import sys
import os
import logging

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Output to console
    ]
)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow, QLabel, QStatusBar

# Component imports
from layer_aligner.components.canvas_widget import CanvasWidget

# Model imports
from layer_aligner.models.guides import GuideLines
from layer_aligner.models.layer_store import LayerStore
from layer_aligner.services.reference_wizard import ReferenceWizard

# Utility imports
from layer_aligner.utils.logger import set_main_window
from layer_aligner.constants import CONFIG_DIR_NAME, CONFIG_FILE_NAME

# Mixin imports
from layer_aligner.main.menu_mixin import MenuMixin
from layer_aligner.main.event_mixin import EventMixin
from layer_aligner.main.config_mixin import ConfigMixin
from layer_aligner.main.history_mixin import HistoryMixin
from layer_aligner.main.layer_mixin import LayerMixin
from layer_aligner.main.wizard_mixin import WizardMixin


class LayerAlignerWindow(MenuMixin, EventMixin, ConfigMixin, HistoryMixin, LayerMixin, WizardMixin, QMainWindow):
    def __init__(self, config_dir=None):
        super().__init__()
        self.setWindowTitle("Layer Aligner")
        self.setAcceptDrops(True)
        
        # Config file paths
        self.config_dir = config_dir or os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
        self.config_file = os.path.join(self.config_dir, CONFIG_FILE_NAME)
        self._load_config()
        self._opacity_initialized = False
        self._layout_pending = False
        
        # Model
        self.store = LayerStore()
        self.guides = GuideLines()
        self._apply_guide_settings()
        self.wizard = ReferenceWizard(self.store)
        
        # Canvas
        self.canvas = CanvasWidget(self.store, self.guides, self.settings, self.wizard, self)
        self.canvas.layersChanged.connect(self._refresh)
        self.canvas.wizardPicked.connect(self._refresh)
        self.canvas.boundsChanged.connect(self._on_canvas_bounds_changed)
        self.setCentralWidget(self.canvas)
        
        # Status bar
        status_bar = QStatusBar(self)
        self.status_left = QLabel("Ready")
        self.status_right = QLabel("")
        status_bar.addWidget(self.status_left, 1)
        status_bar.addPermanentWidget(self.status_right)
        self.setStatusBar(status_bar)
        
        self._create_toolbars()
        self.store.history.add_listener(self._on_history_changed)
        self._update_status_bar()


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = LayerAlignerWindow()
    set_main_window(window)
    window.resize(1280, 860)
    window.show()
    
    # Images passed on the command line are imported straight away
    if len(sys.argv) > 1:
        window.add_images(sys.argv[1:])
    
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
