"""
Antenna selection, parameter and results controls.
"""

from PyQt6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QLabel,
                            QRadioButton, QButtonGroup, QDoubleSpinBox, QLineEdit,
                            QStackedWidget, QFormLayout)
from PyQt6.QtCore import pyqtSignal

from ..config import (AntennaVariant, RenderConfig, ViewMode, parse_parameters,
                      DEFAULT_DIPOLE_LENGTH, DEFAULT_MONOPOLE_LENGTH,
                      DEFAULT_ARRAY_SEPARATION, DEFAULT_ARRAY_PHASE, DEFAULT_YAGI_DIRECTORS)
from ..metrics import Metrics, format_metrics
from ..projection import legend_for_mode


class ControlsWidget(QWidget):
    """Left-hand panel: antenna type, parameters, view mode and results."""

    parameters_changed = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setup_ui()

    def setup_ui(self):
        """Setup the controls UI."""
        layout = QVBoxLayout()

        # Antenna selection
        antenna_group = QGroupBox("Antenna")
        antenna_layout = QVBoxLayout()
        self.antenna_buttons = QButtonGroup(self)
        for variant in AntennaVariant:
            button = QRadioButton(variant.label)
            button.setProperty('variant', variant.value)
            self.antenna_buttons.addButton(button)
            antenna_layout.addWidget(button)
            if variant is AntennaVariant.DIPOLE:
                button.setChecked(True)
        self.antenna_buttons.buttonToggled.connect(self.on_antenna_toggled)
        antenna_group.setLayout(antenna_layout)
        layout.addWidget(antenna_group)

        # One parameter page per variant
        self.parameter_stack = QStackedWidget()
        self.parameter_pages = {}

        self.dipole_length_spin = self._length_spin(DEFAULT_DIPOLE_LENGTH)
        self._add_page(AntennaVariant.DIPOLE, [("Length:", self.dipole_length_spin)])

        self.monopole_length_spin = self._length_spin(DEFAULT_MONOPOLE_LENGTH)
        self._add_page(AntennaVariant.MONOPOLE, [("Length:", self.monopole_length_spin)])

        self.separation_spin = self._length_spin(DEFAULT_ARRAY_SEPARATION)
        self.phase_spin = QDoubleSpinBox()
        self.phase_spin.setRange(-360.0, 360.0)
        self.phase_spin.setSingleStep(15.0)
        self.phase_spin.setValue(DEFAULT_ARRAY_PHASE)
        self.phase_spin.setSuffix(" °")
        self.phase_spin.valueChanged.connect(self.parameters_changed.emit)
        self._add_page(AntennaVariant.ARRAY, [("Separation:", self.separation_spin),
                                              ("Phase:", self.phase_spin)])

        self.directors_edit = QLineEdit(str(DEFAULT_YAGI_DIRECTORS))
        self.directors_edit.setMaximumWidth(80)
        self.directors_edit.textChanged.connect(self.parameters_changed.emit)
        self._add_page(AntennaVariant.YAGI, [("Directors:", self.directors_edit)])

        parameter_group = QGroupBox("Parameters")
        parameter_layout = QVBoxLayout()
        parameter_layout.addWidget(self.parameter_stack)
        parameter_group.setLayout(parameter_layout)
        layout.addWidget(parameter_group)

        # View mode
        view_group = QGroupBox("View")
        view_layout = QHBoxLayout()
        self.gain_radio = QRadioButton("Gain (dB)")
        self.gain_radio.setChecked(True)
        self.power_radio = QRadioButton("Power (linear)")
        self.gain_radio.toggled.connect(self.on_view_toggled)
        view_layout.addWidget(self.gain_radio)
        view_layout.addWidget(self.power_radio)
        view_group.setLayout(view_layout)
        layout.addWidget(view_group)

        # Results
        results_group = QGroupBox("Results")
        results_layout = QFormLayout()
        self.gain_label = QLabel("-")
        self.beamwidth_label = QLabel("-")
        self.front_to_back_label = QLabel("-")
        results_layout.addRow("Gain (dBi):", self.gain_label)
        results_layout.addRow("Beamwidth:", self.beamwidth_label)
        results_layout.addRow("Front-to-back:", self.front_to_back_label)
        results_group.setLayout(results_layout)
        layout.addWidget(results_group)

        self.mode_label = QLabel(legend_for_mode(ViewMode.GAIN)['title'])
        layout.addWidget(self.mode_label)

        layout.addStretch()
        self.setLayout(layout)

    def _length_spin(self, value):
        spin = QDoubleSpinBox()
        spin.setRange(0.01, 2.0)
        spin.setDecimals(2)
        spin.setSingleStep(0.05)
        spin.setValue(value)
        spin.setSuffix(" λ")
        spin.valueChanged.connect(self.parameters_changed.emit)
        return spin

    def _add_page(self, variant, rows):
        page = QWidget()
        form = QFormLayout()
        for label, widget in rows:
            form.addRow(label, widget)
        page.setLayout(form)
        self.parameter_pages[variant] = self.parameter_stack.addWidget(page)

    def on_antenna_toggled(self, button, checked):
        """Show the parameters of the selected antenna."""
        if not checked:
            return
        variant = AntennaVariant.from_value(button.property('variant'))
        self.parameter_stack.setCurrentIndex(self.parameter_pages[variant])
        self.parameters_changed.emit()

    def on_view_toggled(self, checked):
        """Update the legend label and request a redraw."""
        self.mode_label.setText(legend_for_mode(self.get_view_mode())['title'])
        self.parameters_changed.emit()

    def get_variant(self):
        """Get the selected antenna variant."""
        button = self.antenna_buttons.checkedButton()
        return AntennaVariant.from_value(button.property('variant'))

    def get_view_mode(self):
        """Get the selected view mode."""
        return ViewMode.GAIN if self.gain_radio.isChecked() else ViewMode.POWER

    def get_config(self):
        """Snapshot the current controls as a RenderConfig."""
        parameters = parse_parameters(
            dipole_length=self.dipole_length_spin.value(),
            monopole_length=self.monopole_length_spin.value(),
            separation=self.separation_spin.value(),
            phase_offset=self.phase_spin.value(),
            director_count=self.directors_edit.text(),
        )
        return RenderConfig(variant=self.get_variant(), parameters=parameters,
                            view_mode=self.get_view_mode())

    def apply_config(self, config: RenderConfig):
        """Set every control from a configuration snapshot."""
        for button in self.antenna_buttons.buttons():
            if button.property('variant') == config.variant.value:
                button.setChecked(True)

        params = config.parameters
        self.dipole_length_spin.setValue(params.dipole_length)
        self.monopole_length_spin.setValue(params.monopole_length)
        self.separation_spin.setValue(params.separation)
        self.phase_spin.setValue(params.phase_offset)
        self.directors_edit.setText(str(params.director_count))

        if config.view_mode is ViewMode.GAIN:
            self.gain_radio.setChecked(True)
        else:
            self.power_radio.setChecked(True)

    def display_metrics(self, metrics: Metrics):
        """Show computed metrics in the results panel."""
        text = format_metrics(metrics)
        self.gain_label.setText(text['gain'])
        self.beamwidth_label.setText(text['beamwidth'])
        self.front_to_back_label.setText(text['front_to_back'])
