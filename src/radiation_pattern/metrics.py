"""
Engineering metrics derived from a sampled azimuth cut.

Measured values (half-power beamwidth, front-to-back ratio, directivity)
come straight from the sample array. The reported gain and front-to-back
ratio blend those measurements with closed-form estimates for each antenna
variant.
"""
import logging
import math
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional

import numpy as np

from .config import AntennaParameters, AntennaVariant, RenderConfig
from .sampling import AZIMUTH, ELEVATION, PatternCut, sample_cut
from .utilities import BACK_LOBE_FLOOR, SECTOR_HALF_WIDTH_DEG, clamp

# Configure logging
logger = logging.getLogger(__name__)

GAIN_LIMITS_DBI = (-10.0, 25.0)
BEAMWIDTH_LIMITS_DEG = (1.0, 360.0)

HALF_WAVE_DIPOLE_GAIN_DBI = 2.15
FULL_WAVE_DIPOLE_GAIN_DBI = 3.82
OMNI_FRONT_TO_BACK_LIMIT_DB = 30.0


@dataclass(frozen=True)
class Metrics:
    """
    Summary metrics of one rendered pattern.

    Attributes:
        gain_dbi: Reported peak gain in dBi, within [-10, 25]
        beamwidth_deg: Azimuth half-power beamwidth in degrees, within [1, 360]
        front_to_back_db: Front-to-back ratio in dB, may be +inf
        directivity_dbi: Directivity measured from the azimuth samples
        theoretical_gain_dbi: Closed-form gain estimate for the variant
            (None for unrecognized variants)
        elevation_beamwidth_deg: Half-power beamwidth of the elevation cut,
            if it was computed
    """
    gain_dbi: float
    beamwidth_deg: float
    front_to_back_db: float
    directivity_dbi: float = 0.0
    theoretical_gain_dbi: Optional[float] = None
    elevation_beamwidth_deg: Optional[float] = None


def calculate_beamwidth(intensities: np.ndarray, max_intensity: Optional[float] = None) -> float:
    """
    Half-power beamwidth from a circular 1D sweep.

    The sweep is scanned (with wrap-around) for threshold crossings between
    consecutive samples. The first two crossings in scan order bound the
    beam; their separation is reduced to the minor arc. With several lobes
    crossing the threshold the first two crossings need not bound the main
    lobe.

    Args:
        intensities: Samples uniformly spaced over 360 degrees
        max_intensity: Peak used for the half-power threshold. Defaults to
            the sample maximum.

    Returns:
        Beamwidth in degrees, clamped to [1, 360] when two crossings exist.
        With fewer crossings: 360 if the first sample is above threshold,
        else 0.
    """
    values = np.asarray(intensities, dtype=float)
    num_samples = values.size
    if num_samples == 0:
        return 90.0

    if max_intensity is None:
        max_intensity = float(np.max(values))
        if max_intensity == 0:
            return 180.0

    threshold = 0.5 * max_intensity

    current = values
    following = np.roll(values, -1)
    crossed = ((current >= threshold) & (following < threshold)) | \
              ((current < threshold) & (following >= threshold))
    crossings = np.flatnonzero(crossed)

    if crossings.size < 2:
        return 360.0 if values[0] >= threshold else 0.0

    angle1 = crossings[0] / num_samples * 360.0
    angle2 = crossings[1] / num_samples * 360.0
    beamwidth = abs(angle2 - angle1)

    # Take the minor arc
    if beamwidth > 180:
        beamwidth = 360 - beamwidth

    return clamp(beamwidth, *BEAMWIDTH_LIMITS_DEG)


def sector_indices(num_samples: int, center_index: int, half_width: int) -> np.ndarray:
    """Indices within +/- half_width samples of a center index, wrapped."""
    offsets = np.arange(-half_width, half_width + 1)
    return np.unique((center_index + offsets) % num_samples)


def calculate_front_to_back(intensities: np.ndarray) -> float:
    """
    Front-to-back ratio of a circular 1D sweep.

    Front sector: +/-30 degrees around sample 0. Back sector: +/-30 degrees
    around sample floor(N/2). Sector widths use integer sample counts,
    floor(N*30/360).

    Args:
        intensities: Samples uniformly spaced over 360 degrees

    Returns:
        Ratio in dB, +inf when the back sector maximum is below 1e-10
    """
    values = np.asarray(intensities, dtype=float)
    num_samples = values.size
    if num_samples == 0:
        return math.inf

    sample_range = num_samples * SECTOR_HALF_WIDTH_DEG // 360

    front_max = np.max(values[sector_indices(num_samples, 0, sample_range)])
    back_max = np.max(values[sector_indices(num_samples, num_samples // 2, sample_range)])

    if back_max < BACK_LOBE_FLOOR:
        return math.inf

    if front_max <= 0:
        # No forward radiation at all
        return -math.inf

    return float(10.0 * np.log10(front_max / back_max))


def is_omnidirectional(intensities: np.ndarray, rtol: float = 1e-9) -> bool:
    """True if a sweep is constant to within rtol of its peak."""
    values = np.asarray(intensities, dtype=float)
    if values.size == 0:
        return True
    return bool(np.ptp(values) <= rtol * max(float(np.max(np.abs(values))), 1.0))


def calculate_directivity(intensities: np.ndarray, max_intensity: float) -> float:
    """
    Directivity estimate from a 1D sweep, peak over mean.

    Returns:
        Directivity in dBi; 0 when the mean (or the peak) is zero
    """
    values = np.asarray(intensities, dtype=float)
    if values.size == 0 or max_intensity == 0:
        return 0.0

    mean = float(np.mean(values))
    if mean == 0:
        return 0.0

    return float(10.0 * np.log10(max_intensity / mean))


def dipole_gain(length: float) -> float:
    """
    Closed-form dipole gain in dBi as a function of length in wavelengths.

    Short (< 0.1) dipoles use the Hertzian 1.76 dBi; the half-wave, full-wave
    and 3/2-wave bands use tabulated values; other lengths use
    1.64 + 0.5*sin^2(pi*L) limited to [0, 4].
    """
    if length < 0.1:
        return 10 * math.log10(1.5)
    elif 0.45 <= length <= 0.55:
        return HALF_WAVE_DIPOLE_GAIN_DBI
    elif 0.95 <= length <= 1.05:
        return FULL_WAVE_DIPOLE_GAIN_DBI
    elif 1.45 <= length <= 1.55:
        return 3.5

    gain = 1.64 + 0.5 * math.sin(math.pi * length) ** 2
    return clamp(gain, 0.0, 4.0)


def monopole_gain(length: float) -> float:
    """Monopole gain: equivalent dipole of twice the length plus 3 dB."""
    return dipole_gain(2 * length) + 3.0


def array_gain(separation: float, phase_offset: float) -> float:
    """
    Closed-form gain of the two-element array in dBi.

    Element gain (2.15) + array gain (10*log10(2)) + a spacing factor that
    peaks for 0.3 < d < 0.7 + half of cos(phase).
    """
    element_gain = HALF_WAVE_DIPOLE_GAIN_DBI
    gain_from_array = 10 * math.log10(2)

    if 0.3 < separation < 0.7:
        spacing_factor = 1.0
    elif 0.7 <= separation < 1.0:
        spacing_factor = 0.5 + (separation - 0.7) * 0.5
    else:
        spacing_factor = max(0.0, 1.0 - abs(separation - 0.5) * 0.5)

    phase_factor = math.cos(math.radians(phase_offset))

    return element_gain + gain_from_array + spacing_factor + 0.5 * phase_factor


def yagi_gain(director_count: int) -> float:
    """Empirical Yagi gain, 7 dBi for reflector + driven element plus 1.2 dB per director."""
    return 7.0 + 1.2 * director_count


def yagi_front_to_back(director_count: int) -> float:
    """Empirical Yagi front-to-back ratio in dB."""
    return 12.0 + 2.5 * director_count


def theoretical_gain(variant: AntennaVariant, params: AntennaParameters) -> Optional[float]:
    """Closed-form gain for a variant, None if the variant is unrecognized."""
    if variant is AntennaVariant.DIPOLE:
        return dipole_gain(params.dipole_length)
    elif variant is AntennaVariant.MONOPOLE:
        return monopole_gain(params.monopole_length)
    elif variant is AntennaVariant.ARRAY:
        return array_gain(params.separation, params.phase_offset)
    elif variant is AntennaVariant.YAGI:
        return yagi_gain(params.director_count)
    return None


def blend_metrics(variant, params: AntennaParameters, beamwidth: float,
                  front_to_back: float, directivity: float,
                  omnidirectional: bool = False) -> Metrics:
    """
    Combine measured values with the closed-form estimates of a variant.

    Args:
        variant: AntennaVariant (unrecognized values use measured values only)
        params: Antenna parameters
        beamwidth: Measured beamwidth in degrees
        front_to_back: Measured front-to-back ratio in dB (may be infinite)
        directivity: Measured directivity in dBi
        omnidirectional: True when the measured cut does not vary with angle,
            so it has no distinct front or back

    Returns:
        Metrics with gain and beamwidth clamped to their display ranges
    """
    try:
        variant = AntennaVariant.from_value(variant)
    except ValueError:
        logger.debug(f"No closed-form model for variant {variant!r}")
        variant = None

    expected = theoretical_gain(variant, params) if variant is not None else None

    if variant in (AntennaVariant.DIPOLE, AntennaVariant.MONOPOLE):
        gain = max(directivity, expected)
        if (omnidirectional or not math.isfinite(front_to_back)
                or front_to_back > OMNI_FRONT_TO_BACK_LIMIT_DB):
            front_to_back = math.inf
    elif variant is AntennaVariant.ARRAY:
        gain = max(expected, directivity)
        if not math.isfinite(front_to_back):
            front_to_back = 0.0
    elif variant is AntennaVariant.YAGI:
        gain = max(expected, directivity)
        front_to_back = max(front_to_back, yagi_front_to_back(params.director_count))
    else:
        gain = directivity
        if not math.isfinite(front_to_back):
            front_to_back = 0.0

    return Metrics(
        gain_dbi=clamp(gain, *GAIN_LIMITS_DBI),
        beamwidth_deg=clamp(beamwidth, *BEAMWIDTH_LIMITS_DEG),
        front_to_back_db=float(front_to_back),
        directivity_dbi=directivity,
        theoretical_gain_dbi=expected,
    )


def compute_metrics(cut: PatternCut, config: RenderConfig) -> Metrics:
    """
    Metrics for an azimuth cut.

    Args:
        cut: Azimuth sweep produced by sample_cut
        config: Snapshot the cut was sampled with

    Returns:
        Metrics: Blended metrics
    """
    if cut.fix_dimension != AZIMUTH:
        logger.warning(f"Computing metrics from a {cut.fix_dimension} cut, expected {AZIMUTH}")

    beamwidth = calculate_beamwidth(cut.intensities, cut.max_intensity)
    front_to_back = calculate_front_to_back(cut.intensities)
    directivity = calculate_directivity(cut.intensities, cut.max_intensity)

    return blend_metrics(config.variant, config.parameters, beamwidth, front_to_back, directivity,
                         omnidirectional=is_omnidirectional(cut.intensities))


def evaluate(config: RenderConfig) -> Metrics:
    """
    Sample the azimuth and elevation cuts and compute all metrics.

    The reported beamwidth is the azimuth one; the elevation cut beamwidth
    is added as elevation_beamwidth_deg.
    """
    metrics = compute_metrics(sample_cut(config, AZIMUTH), config)

    elevation = sample_cut(config, ELEVATION)
    elevation_beamwidth = clamp(calculate_beamwidth(elevation.intensities, elevation.max_intensity),
                                *BEAMWIDTH_LIMITS_DEG)

    return replace(metrics, elevation_beamwidth_deg=elevation_beamwidth)


def round_half_up(value: float, places: int) -> str:
    """Fixed-point text of a float, exact binary halves rounded away from zero."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        # No "-0.0" for tiny negative values
        rounded = abs(rounded)
    return str(rounded)


def format_metrics(metrics: Metrics) -> Dict[str, str]:
    """
    Display strings for the metrics panel.

    Returns:
        Dict with 'gain' (2 decimals), 'beamwidth' (integer degrees) and
        'front_to_back' (1 decimal with unit, or the infinity symbol).
        Halves round up, so 2.125 shows as 2.13
    """
    if math.isfinite(metrics.front_to_back_db):
        front_to_back = f"{round_half_up(metrics.front_to_back_db, 1)} dB"
    else:
        front_to_back = '∞'

    return {
        'gain': round_half_up(metrics.gain_dbi, 2),
        'beamwidth': f"{round_half_up(metrics.beamwidth_deg, 0)}°",
        'front_to_back': front_to_back,
    }
