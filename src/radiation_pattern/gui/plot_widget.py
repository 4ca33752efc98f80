"""
Matplotlib integration widget for PyQt6.
"""

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.backends.backend_qtagg import NavigationToolbar2QT as NavigationToolbar
from matplotlib.figure import Figure

from PyQt6.QtWidgets import QWidget, QVBoxLayout

from ..plotting import plot_pattern_views


class PlotWidget(QWidget):
    """Widget containing the matplotlib canvas with the three pattern views."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.current_config = None
        self.setup_ui()

    def setup_ui(self):
        """Setup the plot widget UI."""
        layout = QVBoxLayout()

        # Create matplotlib figure and canvas
        self.figure = Figure(figsize=(10, 10))
        self.canvas = FigureCanvas(self.figure)
        self.toolbar = NavigationToolbar(self.canvas, self)

        layout.addWidget(self.toolbar)
        layout.addWidget(self.canvas)
        self.setLayout(layout)

    def update_views(self, config, metrics=None):
        """Redraw all three views for a configuration."""
        self.current_config = config

        try:
            plot_pattern_views(config, fig=self.figure, metrics=metrics)
        except Exception as e:
            # Show error message on plot
            self.figure.clear()
            ax = self.figure.add_subplot(111)
            ax.text(0.5, 0.5, f"Plot Error:\n{str(e)}",
                   ha='center', va='center', transform=ax.transAxes,
                   bbox=dict(boxstyle="round,pad=0.3", facecolor="lightcoral"))
            ax.set_xlim(0, 1)
            ax.set_ylim(0, 1)

        # Refresh canvas
        self.canvas.draw_idle()

