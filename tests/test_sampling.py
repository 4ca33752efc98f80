"""
Tests for azimuth/elevation cuts and the spherical grid.
"""
import os
import sys

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import numpy as np
import pytest
import xarray as xr
from radiation_pattern import (AntennaVariant, IntensitySample, PatternGrid, RenderConfig,
                               sample_cut, sample_grid)
from radiation_pattern.utilities import nearest_angle_index


def test_azimuth_cut_layout():
    """An azimuth cut has 360 samples at theta = pi/2, phi = 2*pi*i/360."""
    cut = sample_cut(RenderConfig(variant=AntennaVariant.YAGI), 'azimuth')

    assert len(cut) == 360
    assert isinstance(cut.data, xr.DataArray)
    assert cut.data.dims == ('angle',)
    np.testing.assert_allclose(cut.theta, np.pi / 2)
    np.testing.assert_allclose(cut.phi, np.arange(360) / 360 * 2 * np.pi)
    assert cut.data.attrs['variant'] == 'yagi'


def test_elevation_cut_layout():
    """An elevation cut sweeps theta at phi = 0."""
    cut = sample_cut(RenderConfig(), 'elevation')

    assert len(cut) == 360
    np.testing.assert_allclose(cut.phi, 0.0)
    np.testing.assert_allclose(cut.theta, np.arange(360) / 360 * 2 * np.pi)


def test_invalid_dimension_raises():
    """Only azimuth and elevation sweeps exist."""
    with pytest.raises(ValueError):
        sample_cut(RenderConfig(), 'diagonal')


def test_dipole_azimuth_cut_is_constant():
    """A dipole radiates equally in every azimuth direction."""
    cut = sample_cut(RenderConfig(variant=AntennaVariant.DIPOLE), 'azimuth')

    assert np.ptp(cut.intensities) == 0
    assert cut.max_intensity == pytest.approx(1.0)


def test_dipole_elevation_cut_is_symmetric():
    """The elevation cut mirrors about the horizon and vanishes at the poles."""
    cut = sample_cut(RenderConfig(), 'elevation')
    values = cut.intensities

    assert values[0] == 0.0
    assert values[180] == 0.0
    np.testing.assert_allclose(values[1:180], values[359:180:-1], atol=1e-12)


def test_all_zero_cut_uses_unit_maximum():
    """A cut with no radiation at all reports a maximum of 1."""
    # A two-wavelength dipole has a null in the horizontal plane
    config = RenderConfig().with_parameters(dipole_length=2.0)
    cut = sample_cut(config, 'azimuth')

    np.testing.assert_allclose(cut.intensities, 0.0, atol=1e-20)
    assert cut.max_intensity == 1.0


def test_cut_iteration_and_lookup():
    """Iteration yields indexed samples; value_at picks the nearest angle."""
    cut = sample_cut(RenderConfig(variant=AntennaVariant.YAGI), 'azimuth')
    samples = list(cut)

    assert len(samples) == 360
    assert isinstance(samples[0], IntensitySample)
    assert samples[10].angle_index == 10
    assert samples[0].intensity == pytest.approx(5.0)
    assert cut.value_at(0.2) == pytest.approx(5.0)
    assert cut.value_at(-360) == pytest.approx(5.0)


def test_cut_lookup_wraps_at_360():
    """Angles just below 360 degrees resolve to the first sample."""
    cut = sample_cut(RenderConfig(variant=AntennaVariant.YAGI), 'azimuth')

    assert cut.value_at(359.9) == cut.intensities[0]
    assert cut.value_at(359.4) == cut.intensities[359]
    assert cut.value_at(-0.3) == cut.intensities[0]
    assert cut.value_at(720.8) == cut.intensities[1]


def test_nearest_angle_index():
    angles = np.arange(0, 360, 10.0)

    assert nearest_angle_index(angles, 356.0) == 0
    assert nearest_angle_index(angles, 354.0) == 35
    assert nearest_angle_index(angles, 14.0) == 1
    with pytest.raises(ValueError):
        nearest_angle_index([], 10.0)


def test_custom_sample_count():
    """The sweep resolution can be changed."""
    cut = sample_cut(RenderConfig(), 'azimuth', num_samples=72)
    assert len(cut) == 72


def test_grid_shape_and_coordinates():
    """The default grid is 25 x 49 and includes both range endpoints."""
    grid = sample_grid(RenderConfig(variant=AntennaVariant.ARRAY))

    assert grid.shape == (25, 49)
    assert grid.data.dims == ('theta', 'phi')
    assert grid.theta[0] == 0.0
    assert grid.theta[-1] == pytest.approx(np.pi)
    assert grid.phi[-1] == pytest.approx(2 * np.pi)
    assert grid.max_intensity == pytest.approx(np.max(grid.intensities))


def test_grid_iteration_is_row_major():
    """Grid samples are yielded theta-major with flat indices."""
    grid = sample_grid(RenderConfig(), theta_steps=4, phi_steps=8)
    samples = list(grid)

    assert len(samples) == 5 * 9
    assert [s.angle_index for s in samples] == list(range(45))
    assert samples[9].theta == pytest.approx(np.pi / 4)
    assert samples[9].phi == 0.0


def test_grid_requires_positive_steps():
    """Step counts must be positive."""
    with pytest.raises(ValueError):
        sample_grid(RenderConfig(), theta_steps=0)


def test_grid_rejects_wrong_dims():
    """PatternGrid only accepts (theta, phi) data."""
    data = xr.DataArray(np.ones((3, 3)), dims=('phi', 'theta'))
    with pytest.raises(ValueError):
        PatternGrid(data)
