"""
Common utility functions and constants for radiation pattern rendering.
"""
import numpy as np
from typing import Union

# Sampling constants
PATTERN_SAMPLES = 360  # Samples per 1D sweep (azimuth or elevation)
THETA_STEPS_3D = 24    # Theta intervals of the 3D grid
PHI_STEPS_3D = 48      # Phi intervals of the 3D grid

# Display constants
DB_MIN = -30.0
DB_MAX = 0.0
GRID_LEVELS = 6
ISO_ANGLE = np.pi / 6  # Fixed isometric projection angle (rad)

# Numerical guards
POLE_EPSILON = 1e-6      # |sin(theta)| below this is treated as a pole
BACK_LOBE_FLOOR = 1e-10  # Back sector maxima below this give an infinite F/B
SECTOR_HALF_WIDTH_DEG = 30  # Front/back sector half width


def clamp(value: Union[float, np.ndarray], min_value: float, max_value: float) -> Union[float, np.ndarray]:
    """
    Clamp a value (or array of values) to [min_value, max_value].

    Scalars come back as Python floats, arrays as arrays.
    """
    clamped = np.clip(value, min_value, max_value)
    if np.ndim(clamped) == 0:
        return float(clamped)
    return clamped


def to_decibels(value: Union[float, np.ndarray], reference: float = 1.0) -> Union[float, np.ndarray]:
    """
    Convert a linear power value to dB relative to a reference.

    Non-positive values (or a non-positive reference) map to -inf rather
    than raising, so zero-intensity samples stay representable.

    Args:
        value: Linear value(s)
        reference: Linear reference level

    Returns:
        Value(s) in dB relative to the reference
    """
    value = np.asarray(value, dtype=float)

    if reference <= 0:
        result = np.full(value.shape, -np.inf)
    else:
        with np.errstate(divide='ignore', invalid='ignore'):
            result = np.where(value > 0, 10.0 * np.log10(np.maximum(value, 1e-300) / reference), -np.inf)

    if result.ndim == 0:
        return float(result)
    return result


def normalize_degrees(angle: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = np.mod(angle, 360.0)
    if np.ndim(wrapped) == 0:
        return float(wrapped)
    return wrapped


def sweep_angles(num_samples: int = PATTERN_SAMPLES) -> np.ndarray:
    """
    Uniform angles over [0, 2*pi) for a full 1D sweep.

    Args:
        num_samples: Number of samples in the sweep

    Returns:
        Array of angles in radians, angle[i] = 2*pi*i/num_samples

    Raises:
        ValueError: If num_samples is not positive
    """
    if num_samples <= 0:
        raise ValueError("Number of samples must be positive")

    return np.arange(num_samples) / num_samples * 2 * np.pi


def nearest_angle_index(angles_deg: np.ndarray, angle_deg: float) -> int:
    """
    Index of the angle closest to angle_deg on the circle.

    Distances wrap at 360 degrees, so 359.9 is nearest to 0.

    Raises:
        ValueError: If angles_deg is empty
    """
    angles_deg = np.asarray(angles_deg, dtype=float)
    if angles_deg.size == 0:
        raise ValueError("Input array is empty")

    distance = np.abs((angles_deg - angle_deg + 180.0) % 360.0 - 180.0)
    return int(np.argmin(distance))
