"""
Tests for beamwidth, front-to-back, directivity and the blended metrics.
"""
import math
import os
import sys

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import numpy as np
import pytest
from radiation_pattern import (AntennaParameters, AntennaVariant, Metrics, RenderConfig,
                               array_gain, calculate_beamwidth, calculate_directivity,
                               calculate_front_to_back, compute_metrics, dipole_gain, evaluate, format_metrics,
                               monopole_gain, sample_cut, yagi_gain)
from radiation_pattern.metrics import blend_metrics, is_omnidirectional, sector_indices


# Beamwidth

def test_beamwidth_two_crossings():
    """Crossings at samples 1 and 6 of 8 give the 135 degree minor arc."""
    values = np.array([1, 1, 0, 0, 0, 0, 0, 1], dtype=float)
    assert calculate_beamwidth(values, 1.0) == pytest.approx(135.0)


def test_beamwidth_constant_above_threshold():
    """No crossings with the first sample above threshold means 360."""
    assert calculate_beamwidth(np.ones(360), 1.0) == 360.0


def test_beamwidth_constant_below_threshold():
    """No crossings with the first sample below threshold means 0."""
    assert calculate_beamwidth(np.zeros(360), 1.0) == 0.0


def test_beamwidth_degenerate_inputs():
    """Empty sweeps give 90 and all-zero sweeps without a peak give 180."""
    assert calculate_beamwidth(np.array([])) == 90.0
    assert calculate_beamwidth(np.zeros(10)) == 180.0


def test_beamwidth_uses_sample_maximum_by_default():
    """Without max_intensity the threshold is half the sample peak."""
    values = np.array([4, 4, 0, 0, 0, 0, 0, 4], dtype=float)
    assert calculate_beamwidth(values) == pytest.approx(135.0)


@pytest.mark.parametrize('directors', [0, 1, 3, 7, 12])
def test_beamwidth_within_limits(directors):
    """Reported beamwidths always lie in [1, 360]."""
    config = RenderConfig(variant=AntennaVariant.YAGI).with_parameters(director_count=directors)
    metrics = evaluate(config)
    assert 1.0 <= metrics.beamwidth_deg <= 360.0


# Front-to-back

def test_sector_indices_wrap():
    """Sectors wrap around the end of the sweep."""
    indices = sector_indices(360, 0, 30)
    assert len(indices) == 61
    assert 0 in indices and 30 in indices and 330 in indices and 359 in indices
    assert 31 not in indices and 329 not in indices


def test_front_to_back_ratio():
    """Ten times more power in front than behind is 10 dB."""
    values = np.ones(360)
    values[:31] = 10.0
    values[330:] = 10.0
    assert calculate_front_to_back(values) == pytest.approx(10.0)


def test_front_to_back_infinite_without_back_lobe():
    """A silent back sector gives +inf."""
    values = np.ones(360)
    values[150:211] = 0.0
    assert calculate_front_to_back(values) == math.inf


def test_front_to_back_ignores_side_lobes():
    """Only the +/-30 degree sectors take part."""
    values = np.ones(360)
    values[90] = 100.0
    assert calculate_front_to_back(values) == pytest.approx(0.0)


# Directivity

def test_directivity_of_constant_sweep():
    """A constant sweep has a peak-to-mean ratio of 0 dB."""
    assert calculate_directivity(np.full(360, 3.0), 3.0) == pytest.approx(0.0)


def test_directivity_of_zero_sweep():
    """A zero mean is reported as 0 dBi."""
    assert calculate_directivity(np.zeros(360), 1.0) == 0.0


def test_is_omnidirectional():
    """Only constant sweeps are omnidirectional."""
    assert is_omnidirectional(np.full(360, 0.25))
    assert is_omnidirectional(np.zeros(360))
    assert not is_omnidirectional(np.linspace(0, 1, 360))


# Closed-form gains

@pytest.mark.parametrize('length, expected', [
    (0.05, 10 * math.log10(1.5)),
    (0.45, 2.15),
    (0.5, 2.15),
    (0.55, 2.15),
    (1.0, 3.82),
    (1.5, 3.5),
    (0.3, 1.64 + 0.5 * math.sin(0.3 * math.pi) ** 2),
])
def test_dipole_gain(length, expected):
    assert dipole_gain(length) == pytest.approx(expected)


def test_monopole_gain_adds_ground_plane():
    """A quarter-wave monopole is a half-wave dipole plus 3 dB."""
    assert monopole_gain(0.25) == pytest.approx(5.15)


def test_array_gain_default():
    """Half-wave spacing in phase: element, array, spacing and phase terms."""
    assert array_gain(0.5, 0.0) == pytest.approx(6.65, abs=0.02)
    assert array_gain(0.5, 180.0) == pytest.approx(array_gain(0.5, 0.0) - 1.0)


def test_yagi_gain_grows_with_directors():
    assert yagi_gain(0) == pytest.approx(7.0)
    assert yagi_gain(3) == pytest.approx(10.6)


# Blending

def test_blend_clamps_gain():
    """Large Yagis are capped at 25 dBi."""
    metrics = blend_metrics(AntennaVariant.YAGI, AntennaParameters(director_count=20),
                            40.0, 10.0, 12.0)
    assert metrics.gain_dbi == 25.0


def test_blend_clamps_beamwidth():
    """A zero measured beamwidth is reported as 1 degree."""
    metrics = blend_metrics(AntennaVariant.ARRAY, AntennaParameters(), 0.0, 3.0, 1.0)
    assert metrics.beamwidth_deg == 1.0


def test_blend_array_non_finite_front_to_back():
    """Arrays report 0 dB when the measured ratio is not finite."""
    metrics = blend_metrics(AntennaVariant.ARRAY, AntennaParameters(), 60.0, math.inf, 1.0)
    assert metrics.front_to_back_db == 0.0


def test_blend_dipole_large_front_to_back():
    """Dipole ratios above 30 dB are reported as infinite."""
    metrics = blend_metrics(AntennaVariant.DIPOLE, AntennaParameters(), 360.0, 35.0, 0.0)
    assert metrics.front_to_back_db == math.inf

    metrics = blend_metrics(AntennaVariant.DIPOLE, AntennaParameters(), 360.0, 5.0, 0.0)
    assert metrics.front_to_back_db == pytest.approx(5.0)


def test_blend_unknown_variant_uses_measured_values():
    """Without a closed form the measured directivity is the gain."""
    metrics = blend_metrics('helix', AntennaParameters(), 90.0, -math.inf, 4.0)
    assert metrics.gain_dbi == pytest.approx(4.0)
    assert metrics.front_to_back_db == 0.0
    assert metrics.theoretical_gain_dbi is None


# End to end

def test_half_wave_dipole_metrics():
    """Half-wave dipole: 2.15 dBi, omnidirectional azimuth, ~78 degree elevation beam."""
    metrics = evaluate(RenderConfig(variant=AntennaVariant.DIPOLE))

    assert metrics.gain_dbi == pytest.approx(2.15)
    assert metrics.beamwidth_deg == 360.0
    assert metrics.front_to_back_db == math.inf
    assert metrics.elevation_beamwidth_deg == pytest.approx(78.0, abs=2.0)


def test_quarter_wave_monopole_metrics():
    metrics = evaluate(RenderConfig(variant=AntennaVariant.MONOPOLE))

    assert metrics.gain_dbi == pytest.approx(5.15)
    assert metrics.front_to_back_db == math.inf


def test_default_yagi_metrics():
    """Three directors: at least 10.6 dBi and at least 19.5 dB front-to-back."""
    metrics = evaluate(RenderConfig(variant=AntennaVariant.YAGI))

    assert metrics.gain_dbi >= 10.6 - 1e-9
    assert metrics.front_to_back_db >= 19.5
    assert metrics.beamwidth_deg == pytest.approx(83.0, abs=1.0)


def test_default_array_metrics():
    """Symmetric broadside array: theoretical gain and equal front and back."""
    metrics = evaluate(RenderConfig(variant=AntennaVariant.ARRAY))

    assert metrics.gain_dbi == pytest.approx(6.65, abs=0.02)
    assert metrics.front_to_back_db == pytest.approx(0.0, abs=1e-9)


def test_null_azimuth_cut_metrics():
    """A two-wavelength dipole has no horizontal radiation."""
    config = RenderConfig().with_parameters(dipole_length=2.0)
    metrics = evaluate(config)

    assert metrics.beamwidth_deg == 1.0
    assert metrics.front_to_back_db == math.inf
    assert metrics.directivity_dbi == 0.0
    assert metrics.gain_dbi == pytest.approx(1.64)


def test_evaluate_is_deterministic():
    """Identical snapshots give identical metrics."""
    config = RenderConfig(variant=AntennaVariant.ARRAY).with_parameters(separation=0.8, phase_offset=45)
    assert evaluate(config) == evaluate(config)


def test_compute_metrics_matches_evaluate():
    """evaluate adds the elevation beamwidth to the azimuth metrics."""
    config = RenderConfig(variant=AntennaVariant.YAGI)
    metrics = compute_metrics(sample_cut(config, 'azimuth'), config)
    full = evaluate(config)

    assert metrics.gain_dbi == full.gain_dbi
    assert metrics.elevation_beamwidth_deg is None
    assert full.elevation_beamwidth_deg is not None


# Formatting

def test_format_metrics():
    metrics = Metrics(gain_dbi=2.15, beamwidth_deg=78.4, front_to_back_db=19.54)
    text = format_metrics(metrics)

    assert text['gain'] == '2.15'
    assert text['beamwidth'] == '78°'
    assert text['front_to_back'] == '19.5 dB'


def test_format_infinite_front_to_back():
    metrics = Metrics(gain_dbi=2.15, beamwidth_deg=360.0, front_to_back_db=math.inf)
    assert format_metrics(metrics)['front_to_back'] == '∞'


def test_format_rounds_halves_up():
    """Exact binary halves round up rather than to even."""
    metrics = Metrics(gain_dbi=2.125, beamwidth_deg=82.5, front_to_back_db=1.25)
    text = format_metrics(metrics)

    assert text['gain'] == '2.13'
    assert text['beamwidth'] == '83°'
    assert text['front_to_back'] == '1.3 dB'


def test_format_has_no_negative_zero():
    metrics = Metrics(gain_dbi=-0.001, beamwidth_deg=360.0, front_to_back_db=-1e-12)
    text = format_metrics(metrics)

    assert text['gain'] == '0.00'
    assert text['front_to_back'] == '0.0 dB'
