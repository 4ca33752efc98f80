"""
Main window for the Radiation Pattern GUI.
"""

import logging

from PyQt6.QtWidgets import (QMainWindow, QWidget, QHBoxLayout, QFileDialog,
                            QMessageBox, QSplitter)
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction

from .plot_widget import PlotWidget
from .controls import ControlsWidget
from ..metrics import evaluate
from ..plotting import ExportError, default_export_filename, export_composite_image
from ..scheduling import RedrawScheduler

logger = logging.getLogger(__name__)

RESIZE_DEBOUNCE_MS = 250


class MainWindow(QMainWindow):
    """Main window for the Radiation Pattern GUI application."""

    def __init__(self, initial_config=None):
        super().__init__()

        # Coalesce redraw requests into one pass per event loop tick
        self.redraw_scheduler = RedrawScheduler(
            self.redraw_all, lambda run: QTimer.singleShot(0, run))

        # Trailing-edge debounce for resize events
        self.resize_timer = QTimer()
        self.resize_timer.setSingleShot(True)
        self.resize_timer.timeout.connect(self.request_redraw)

        self.setup_ui()
        self.create_menus()
        if initial_config is not None:
            self.controls.apply_config(initial_config)
        self.statusBar().showMessage("Ready")

        self.request_redraw()

    def setup_ui(self):
        """Setup the main UI layout."""
        self.setWindowTitle("Radiation Pattern Viewer")
        self.setGeometry(100, 100, 1400, 950)

        # Create central widget and main layout
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # Controls (left side)
        self.controls = ControlsWidget()
        self.controls.parameters_changed.connect(self.request_redraw)
        self.controls.setMaximumWidth(350)
        self.controls.setMinimumWidth(260)

        # Plot widget (right side)
        self.plot_widget = PlotWidget()

        splitter.addWidget(self.controls)
        splitter.addWidget(self.plot_widget)
        splitter.setSizes([300, 1100])

        main_layout = QHBoxLayout()
        main_layout.addWidget(splitter)
        central_widget.setLayout(main_layout)

    def create_menus(self):
        """Create the menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("&File")

        export_action = QAction("Export Image...", self)
        export_action.triggered.connect(self.export_image)
        file_menu.addAction(export_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Help menu
        help_menu = menubar.addMenu("&Help")

        about_action = QAction("&About", self)
        about_action.triggered.connect(self.show_about)
        help_menu.addAction(about_action)

    def show_about(self):
        """Show about dialog."""
        QMessageBox.about(self, "About Radiation Pattern Viewer",
                         "Radiation Pattern Viewer\n\n"
                         "Azimuth, elevation and 3D views of dipole, monopole,\n"
                         "two-element array and Yagi-Uda radiation patterns.")

    def request_redraw(self):
        """Schedule a redraw; requests made before it runs are merged."""
        self.redraw_scheduler.request()

    def redraw_all(self):
        """Recompute metrics and redraw every view from a config snapshot."""
        config = self.controls.get_config()
        logger.debug(f"Redrawing {config.variant.value} pattern in {config.view_mode.value} mode")
        metrics = evaluate(config)

        self.controls.display_metrics(metrics)
        self.plot_widget.update_views(config, metrics)
        self.statusBar().showMessage(f"{config.variant.label} | {config.view_mode.value} view")

    def resizeEvent(self, event):
        """Restart the debounce timer on every resize step."""
        super().resizeEvent(event)
        self.resize_timer.stop()
        self.resize_timer.start(RESIZE_DEBOUNCE_MS)

    def export_image(self):
        """Export the three views as one image."""
        config = self.controls.get_config()

        file_path, _ = QFileDialog.getSaveFileName(
            self, "Export Image", default_export_filename(config.variant),
            "PNG Files (*.png);;All Files (*)"
        )

        if file_path:
            try:
                self.statusBar().showMessage("Saving image...")
                export_composite_image(config, file_path)
                self.statusBar().showMessage("Image saved successfully")
            except ExportError:
                self.show_error("Error capturing the image. Please try again.")
                self.statusBar().showMessage("Ready")

    def show_error(self, message):
        """Show an error message."""
        QMessageBox.critical(self, "Error", message)
