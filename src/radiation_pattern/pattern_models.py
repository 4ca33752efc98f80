"""
Closed-form radiation intensity models.

Each model maps (theta, phi) in radians to a non-negative, unnormalized
radiation intensity. Inputs may be scalars or numpy arrays; arrays are
broadcast against each other. Poles (|sin(theta)| < POLE_EPSILON) evaluate
to exactly zero.
"""
import numpy as np
from typing import Union

from .config import AntennaParameters, AntennaVariant
from .utilities import POLE_EPSILON

ArrayLike = Union[float, np.ndarray]


def _finish(values: np.ndarray) -> ArrayLike:
    """Return Python floats for scalar input, arrays otherwise."""
    values = np.maximum(values, 0.0)
    if values.ndim == 0:
        return float(values)
    return values


def _pole_mask(sin_theta: np.ndarray) -> np.ndarray:
    return np.abs(sin_theta) < POLE_EPSILON


def _linear_wire(theta: np.ndarray, length: float) -> np.ndarray:
    """[cos(pi*L*cos(theta)) - cos(pi*L)]^2 / sin^2(theta), zero at the poles."""
    kl = np.pi * length
    sin_theta = np.sin(theta)
    pole = _pole_mask(sin_theta)
    safe_sin = np.where(pole, 1.0, sin_theta)

    numerator = (np.cos(kl * np.cos(theta)) - np.cos(kl)) ** 2
    return np.where(pole, 0.0, numerator / safe_sin ** 2)


def dipole_intensity(theta: ArrayLike, phi: ArrayLike, length: float) -> ArrayLike:
    """
    Center-fed thin dipole of the given length.

    Args:
        theta: Elevation angle from the dipole axis in radians
        phi: Azimuth angle in radians (pattern is independent of phi)
        length: Dipole length in wavelengths

    Returns:
        Radiation intensity
    """
    theta, phi = np.broadcast_arrays(np.asarray(theta, dtype=float), np.asarray(phi, dtype=float))
    return _finish(_linear_wire(theta, length))


def monopole_intensity(theta: ArrayLike, phi: ArrayLike, length: float) -> ArrayLike:
    """
    Monopole over an infinite ground plane.

    Twice the dipole expression above the ground plane (image doubling) and
    zero for theta > pi/2.
    """
    theta, phi = np.broadcast_arrays(np.asarray(theta, dtype=float), np.asarray(phi, dtype=float))
    values = 2.0 * _linear_wire(theta, length)
    return _finish(np.where(theta > np.pi / 2, 0.0, values))


def array_intensity(theta: ArrayLike, phi: ArrayLike, separation: float, phase_offset: float) -> ArrayLike:
    """
    Two half-wave dipoles spaced along x with a progressive phase.

    Args:
        theta: Elevation angle in radians
        phi: Azimuth angle in radians
        separation: Element spacing in wavelengths
        phase_offset: Phase of the second element in degrees

    Returns:
        Radiation intensity (element pattern x array factor x 4)
    """
    theta, phi = np.broadcast_arrays(np.asarray(theta, dtype=float), np.asarray(phi, dtype=float))
    sin_theta = np.sin(theta)
    pole = _pole_mask(sin_theta)
    safe_sin = np.where(pole, 1.0, sin_theta)

    element = (np.cos(np.pi / 2 * np.cos(theta)) / safe_sin) ** 2
    psi = 2 * np.pi * separation * sin_theta * np.cos(phi) + np.radians(phase_offset)
    array_factor = np.cos(psi / 2) ** 2

    return _finish(np.where(pole, 0.0, element * array_factor * 4.0))


def yagi_intensity(theta: ArrayLike, phi: ArrayLike, director_count: int) -> ArrayLike:
    """
    Empirical Yagi-Uda model beaming toward phi = 0.

    This is a shaping function, not a physical solution: a sin^2 base
    pattern sharpened by max(0, cos(phi))^(0.8*N) with the rear half-plane
    suppressed by 10^(-0.3*N) and a (2 + N) gain factor.
    """
    theta, phi = np.broadcast_arrays(np.asarray(theta, dtype=float), np.asarray(phi, dtype=float))
    sin_theta = np.sin(theta)
    pole = _pole_mask(sin_theta)

    base = sin_theta ** 2
    directivity = np.power(np.maximum(0.0, np.cos(phi)), director_count * 0.8)
    rear = (phi > np.pi / 2) & (phi < 3 * np.pi / 2)
    suppression = np.where(rear, 10.0 ** (-0.3 * director_count), 1.0)

    values = base * directivity * suppression * (2 + director_count)
    return _finish(np.where(pole, 0.0, values))


def fallback_intensity(theta: ArrayLike, phi: ArrayLike) -> ArrayLike:
    """sin^2(theta) pattern used for unrecognized antenna variants."""
    theta, phi = np.broadcast_arrays(np.asarray(theta, dtype=float), np.asarray(phi, dtype=float))
    return _finish(np.sin(theta) ** 2)


def intensity(variant, theta: ArrayLike, phi: ArrayLike,
              params: AntennaParameters) -> ArrayLike:
    """
    Evaluate the radiation intensity of an antenna variant.

    Args:
        variant: AntennaVariant (or its string value). Anything that is not a
            known variant evaluates to the sin^2(theta) fallback pattern.
        theta: Elevation angle(s) in radians
        phi: Azimuth angle(s) in radians
        params: Antenna parameters

    Returns:
        Non-negative intensity, a float for scalar angles or an array
    """
    try:
        variant = AntennaVariant.from_value(variant)
    except ValueError:
        return fallback_intensity(theta, phi)

    if variant is AntennaVariant.DIPOLE:
        return dipole_intensity(theta, phi, params.dipole_length)
    elif variant is AntennaVariant.MONOPOLE:
        return monopole_intensity(theta, phi, params.monopole_length)
    elif variant is AntennaVariant.ARRAY:
        return array_intensity(theta, phi, params.separation, params.phase_offset)
    elif variant is AntennaVariant.YAGI:
        return yagi_intensity(theta, phi, params.director_count)

    return fallback_intensity(theta, phi)
