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

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QSplitter, QLabel, QScrollArea
from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QPalette, QColor

# Engine and services
from engine import EditorEngine
from services.asset_pool import AssetPool

# Component imports
from components.canvas_widget import CanvasWidget
from components.layer_panel import LayerPanel
from components.tool_panel import ToolPanel

# Utility imports
from utils.logger import set_main_window
from constants import (
    APP_NAME, MAX_HISTORY_ENTRIES, MAX_RECENT_FILES, AUTOSAVE_INTERVAL_MS,
    CONFIG_DIR_NAME, CONFIG_FILE_NAME, AUTOSAVE_FILE_NAME,
)

# Action imports
from actions.file_actions import FileActions
from actions.clipboard_actions import ClipboardActions

# Mixin imports
from window.menu_mixin import MenuMixin
from window.event_mixin import EventMixin
from window.config_mixin import ConfigMixin
from window.history_mixin import HistoryMixin


def qt_scheduler(callback):
    """Run callback on the next event loop iteration"""
    QTimer.singleShot(0, callback)


class GridMapEditor(MenuMixin, EventMixin, ConfigMixin, HistoryMixin, QMainWindow):
    def __init__(self):
        super().__init__()
        self._logger = logging.getLogger('MainWindow')
        self.resize(1280, 720)
        self.setMinimumSize(960, 600)

        # Engine owns the scene, its history and the shared asset pool
        self.engine = EditorEngine(assets=AssetPool(scheduler=qt_scheduler),
                                   max_history=MAX_HISTORY_ENTRIES)

        # Track current file and saved state
        self.current_file_path = None
        self.is_saved = True

        # Recent files and autosave
        self.recent_files = []
        self.max_recent_files = MAX_RECENT_FILES
        self.config_dir = os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
        self.config_file = os.path.join(self.config_dir, CONFIG_FILE_NAME)
        self.autosave_file = os.path.join(self.config_dir, AUTOSAVE_FILE_NAME)
        self._load_config()

        self.autosave_timer = QTimer()
        self.autosave_timer.timeout.connect(self._autosave)
        self.autosave_timer.start(AUTOSAVE_INTERVAL_MS)

        # Initialize global logger with main window reference
        set_main_window(self)

        # Initialize action handlers (composition pattern)
        self.file_actions = FileActions(self)
        self.clipboard_actions = ClipboardActions(self)

        self.setup_ui()
        self._connect_engine_events()
        self._update_window_title()
        self._update_status_bar()

    # ============= UI Setup =============

    def setup_ui(self):
        # Status bar labels are used by the menu handlers
        self.status_left = QLabel("Ready")
        self.status_right = QLabel("")
        self.statusBar().addWidget(self.status_left, 1)
        self.statusBar().addPermanentWidget(self.status_right)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Horizontal)

        # Left sidebar - instrument defaults and map settings
        self.tool_panel = ToolPanel(self.engine)
        tool_scroll = QScrollArea()
        tool_scroll.setWidgetResizable(True)
        tool_scroll.setWidget(self.tool_panel)
        splitter.addWidget(tool_scroll)

        # Center canvas
        self.canvas_widget = CanvasWidget(self.engine)
        self.canvas_widget.setContextMenuPolicy(Qt.CustomContextMenu)
        self.canvas_widget.customContextMenuRequested.connect(self._show_canvas_context_menu)
        splitter.addWidget(self.canvas_widget)

        # Right sidebar - layers
        self.layer_panel = LayerPanel(self.engine)
        splitter.addWidget(self.layer_panel)

        splitter.setSizes([250, 780, 250])
        splitter.setCollapsible(0, False)
        splitter.setCollapsible(1, False)
        splitter.setCollapsible(2, False)
        main_layout.addWidget(splitter)

        self._create_menu_bar()

    def export_image(self, pixels_per_cell):
        """Render the whole map to a QImage at pixels_per_cell"""
        return self.canvas_widget.export_image(pixels_per_cell)


def main():
    """Main entry point for the Grid Map Editor application"""
    app = QtWidgets.QApplication([])
    app.setApplicationName(APP_NAME)

    # Use Fusion style with dark palette
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ToolTipBase, Qt.white)
    dark_palette.setColor(QPalette.ToolTipText, Qt.white)
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.BrightText, Qt.red)
    dark_palette.setColor(QPalette.Link, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)

    app.setPalette(dark_palette)

    window = GridMapEditor()
    window.show()
    app.exec_()


if __name__ == "__main__":
    main()
