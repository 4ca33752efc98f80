"""
GUI package for radiation pattern visualization.
"""

from .main_window import MainWindow

__all__ = ['MainWindow']
