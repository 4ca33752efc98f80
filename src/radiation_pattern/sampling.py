"""
Angular sampling of the pattern models.

A PatternCut holds one full 1D sweep (azimuth or elevation) and a
PatternGrid holds the (theta, phi) grid used for the 3D view. Both keep
their samples in an xarray.DataArray with angle coordinates in radians.
"""
import logging
from typing import Iterator, NamedTuple, Tuple

import numpy as np
import xarray as xr

from .config import RenderConfig
from .pattern_models import intensity
from .utilities import (PATTERN_SAMPLES, THETA_STEPS_3D, PHI_STEPS_3D,
                        nearest_angle_index, sweep_angles)

# Configure logging
logger = logging.getLogger(__name__)

AZIMUTH = 'azimuth'
ELEVATION = 'elevation'
VALID_DIMENSIONS = (AZIMUTH, ELEVATION)


class IntensitySample(NamedTuple):
    """One evaluated direction of a sample set."""
    angle_index: int
    theta: float
    phi: float
    intensity: float


def _safe_maximum(values: np.ndarray) -> float:
    """Peak of a sample set, substituting 1 for an all-zero set."""
    peak = float(np.max(values)) if values.size else 0.0
    if peak <= 0:
        logger.debug("All-zero sample set, using unit maximum")
        return 1.0
    return peak


class PatternCut:
    """
    A 1D sweep of the radiation intensity.

    Attributes:
        data (xarray.DataArray): Intensities with dimension 'angle' (swept
            angle in radians) and non-dimension coordinates 'theta' and 'phi'
        fix_dimension (str): 'azimuth' (theta fixed at pi/2) or 'elevation'
            (phi fixed at 0)
        max_intensity (float): Peak intensity, 1 if every sample is zero
    """

    def __init__(self, data: xr.DataArray, fix_dimension: str):
        self.data = data
        self.fix_dimension = fix_dimension
        self.max_intensity = _safe_maximum(data.values)

    @property
    def intensities(self) -> np.ndarray:
        """Sampled intensities in sweep order."""
        return self.data.values

    @property
    def angles(self) -> np.ndarray:
        """Swept angle of each sample in radians."""
        return self.data.angle.values

    @property
    def theta(self) -> np.ndarray:
        return self.data.theta.values

    @property
    def phi(self) -> np.ndarray:
        return self.data.phi.values

    def __len__(self) -> int:
        return self.data.size

    def __iter__(self) -> Iterator[IntensitySample]:
        for idx, (theta, phi, value) in enumerate(zip(self.theta, self.phi, self.intensities)):
            yield IntensitySample(idx, float(theta), float(phi), float(value))

    def value_at(self, angle_deg: float) -> float:
        """Intensity of the sample nearest to a swept angle in degrees."""
        idx = nearest_angle_index(np.degrees(self.angles), angle_deg)
        return float(self.intensities[idx])


class PatternGrid:
    """
    Intensities over a uniform (theta, phi) grid covering the full sphere.

    Attributes:
        data (xarray.DataArray): Intensities with dims ('theta', 'phi'),
            coordinates in radians; both ends of each range are included
        max_intensity (float): Peak intensity, 1 if every sample is zero
    """

    def __init__(self, data: xr.DataArray):
        if data.dims != ('theta', 'phi'):
            raise ValueError(f"Grid dims must be ('theta', 'phi'), got {data.dims}")
        self.data = data
        self.max_intensity = _safe_maximum(data.values)

    @property
    def intensities(self) -> np.ndarray:
        """Intensity matrix with shape (theta, phi)."""
        return self.data.values

    @property
    def theta(self) -> np.ndarray:
        return self.data.theta.values

    @property
    def phi(self) -> np.ndarray:
        return self.data.phi.values

    @property
    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    def __iter__(self) -> Iterator[IntensitySample]:
        n_phi = len(self.phi)
        for ti, theta in enumerate(self.theta):
            for pi, phi in enumerate(self.phi):
                yield IntensitySample(ti * n_phi + pi, float(theta), float(phi),
                                      float(self.intensities[ti, pi]))


def sample_cut(config: RenderConfig, fix_dimension: str = AZIMUTH,
               num_samples: int = PATTERN_SAMPLES) -> PatternCut:
    """
    Sample a full 360 degree cut of the pattern.

    Args:
        config: Antenna and view snapshot
        fix_dimension: 'azimuth' sweeps phi at theta = pi/2,
            'elevation' sweeps theta at phi = 0
        num_samples: Number of uniformly spaced samples over [0, 2*pi)

    Returns:
        PatternCut: The sampled sweep

    Raises:
        ValueError: If fix_dimension is not 'azimuth' or 'elevation'
    """
    if fix_dimension not in VALID_DIMENSIONS:
        raise ValueError(f"Invalid sweep dimension: {fix_dimension}. Must be one of {VALID_DIMENSIONS}")

    angles = sweep_angles(num_samples)
    if fix_dimension == AZIMUTH:
        theta = np.full_like(angles, np.pi / 2)
        phi = angles
    else:
        theta = angles
        phi = np.zeros_like(angles)

    values = np.asarray(intensity(config.variant, theta, phi, config.parameters), dtype=float)

    data = xr.DataArray(
        values,
        dims=('angle',),
        coords={
            'angle': angles,
            'theta': ('angle', theta),
            'phi': ('angle', phi),
        },
        name='intensity',
        attrs={'fix_dimension': fix_dimension, 'variant': getattr(config.variant, 'value', str(config.variant))},
    )
    return PatternCut(data, fix_dimension)


def sample_grid(config: RenderConfig, theta_steps: int = THETA_STEPS_3D,
                phi_steps: int = PHI_STEPS_3D) -> PatternGrid:
    """
    Sample the pattern on a (theta_steps+1) x (phi_steps+1) spherical grid.

    Theta covers [0, pi] and phi covers [0, 2*pi], endpoints included, so
    the default grid is 25 x 49.

    Args:
        config: Antenna and view snapshot
        theta_steps: Number of theta intervals
        phi_steps: Number of phi intervals

    Returns:
        PatternGrid: The sampled grid
    """
    if theta_steps <= 0 or phi_steps <= 0:
        raise ValueError("Grid step counts must be positive")

    theta = np.arange(theta_steps + 1) / theta_steps * np.pi
    phi = np.arange(phi_steps + 1) / phi_steps * 2 * np.pi
    theta_mesh, phi_mesh = np.meshgrid(theta, phi, indexing='ij')

    values = np.asarray(intensity(config.variant, theta_mesh, phi_mesh, config.parameters), dtype=float)

    data = xr.DataArray(
        values,
        dims=('theta', 'phi'),
        coords={'theta': theta, 'phi': phi},
        name='intensity',
        attrs={'variant': getattr(config.variant, 'value', str(config.variant))},
    )
    return PatternGrid(data)
