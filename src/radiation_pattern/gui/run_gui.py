#!/usr/bin/env python
"""
Entry point for the Radiation Pattern GUI application.

Usage:
    radiation-pattern-gui [--variant yagi] [--view power] [--log-level DEBUG]
"""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt

from radiation_pattern.config import AntennaVariant, RenderConfig, ViewMode
from radiation_pattern.gui.main_window import MainWindow

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def parse_args(argv=None):
    """Parse command line options into (RenderConfig, log level)."""
    parser = argparse.ArgumentParser(
        prog='radiation-pattern-gui',
        description='Interactive antenna radiation pattern viewer')
    parser.add_argument('--variant', type=str, default=AntennaVariant.DIPOLE.value,
                        choices=[variant.value for variant in AntennaVariant],
                        help='Antenna shown at startup (default: dipole)')
    parser.add_argument('--view', type=str, default=ViewMode.GAIN.value,
                        choices=[mode.value for mode in ViewMode],
                        help='Initial display scale (default: gain)')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Console log level (default: INFO)')

    args = parser.parse_args(argv)
    config = RenderConfig(variant=args.variant, view_mode=args.view)
    return config, getattr(logging, args.log_level)


def configure_logging(level=logging.INFO):
    """Send log records from every module to stdout."""
    logging.basicConfig(level=level, format=LOG_FORMAT,
                        handlers=[logging.StreamHandler(sys.stdout)])


def main(argv=None):
    """Launch the GUI application."""
    config, level = parse_args(argv)
    configure_logging(level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting Radiation Pattern Viewer ({config.variant.label}, {config.view_mode.value} view)")

    QApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.PassThrough)

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Radiation Pattern Viewer")

    main_window = MainWindow(initial_config=config)
    main_window.show()

    sys.exit(app.exec())


if __name__ == '__main__':
    main()
