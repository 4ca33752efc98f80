"""
Analysis functions for sampled radiation patterns.
"""
import logging
from typing import Tuple

import numpy as np
from scipy import integrate

from .sampling import PatternGrid

# Configure logging
logger = logging.getLogger(__name__)


def calculate_grid_directivity(grid: PatternGrid) -> float:
    """
    Calculate peak directivity by integrating the pattern over the sphere.

    Directivity is calculated as D = 4π * U_max / P_total where:
    - U_max is the peak radiation intensity on the grid
    - P_total = ∫∫ U(θ,φ) sin(θ) dθ dφ over the full sphere

    The double integral uses Simpson's rule over the grid coordinates, so
    the coarse 3D grid gives an estimate that improves with finer sampling
    (see sample_grid's step arguments).

    Args:
        grid: PatternGrid covering theta in [0, pi] and phi in [0, 2*pi]

    Returns:
        float: Peak directivity in dBi, 0 for an all-zero grid

    Raises:
        ValueError: If the grid does not cover the full sphere
    """
    theta = grid.theta
    phi = grid.phi

    if not (np.isclose(theta[0], 0) and np.isclose(theta[-1], np.pi)
            and np.isclose(phi[0], 0) and np.isclose(phi[-1], 2 * np.pi)):
        raise ValueError("Directivity integration needs a full-sphere grid")

    values = grid.intensities
    peak = float(np.max(values))
    if peak <= 0:
        return 0.0

    integrand = values * np.sin(theta)[:, np.newaxis]
    over_phi = integrate.simpson(integrand, x=phi, axis=1)
    total_power = float(integrate.simpson(over_phi, x=theta))

    if total_power <= 0:
        logger.warning("Non-positive integrated power, directivity undefined")
        return 0.0

    return float(10.0 * np.log10(4 * np.pi * peak / total_power))


def find_pattern_peak(grid: PatternGrid) -> Tuple[float, float]:
    """
    Direction of the grid maximum.

    Ties resolve to the first sample in row-major (theta, phi) order.

    Returns:
        Tuple of (theta_deg, phi_deg)
    """
    ti, pi = np.unravel_index(np.argmax(grid.intensities), grid.shape)
    return float(np.degrees(grid.theta[ti])), float(np.degrees(grid.phi[pi]))
