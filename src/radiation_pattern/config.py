"""
Antenna selection, parameters and view configuration.

Every recomputation receives a RenderConfig snapshot instead of reading
shared state, so the pattern, metrics and projection functions can be
called (and tested) without any UI.
"""
import enum
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union

from .utilities import normalize_degrees

# Configure logging
logger = logging.getLogger(__name__)

# Parameter defaults (wavelengths / degrees / count)
DEFAULT_DIPOLE_LENGTH = 0.5
DEFAULT_MONOPOLE_LENGTH = 0.25
DEFAULT_ARRAY_SEPARATION = 0.5
DEFAULT_ARRAY_PHASE = 0.0
DEFAULT_YAGI_DIRECTORS = 3

MIN_ELECTRICAL_LENGTH = 0.01  # Smallest accepted length/separation in wavelengths


class AntennaVariant(enum.Enum):
    """Supported antenna models."""
    DIPOLE = 'dipole'
    MONOPOLE = 'monopole'
    ARRAY = 'array'
    YAGI = 'yagi'

    @property
    def label(self) -> str:
        """Human readable name used in titles."""
        return {
            AntennaVariant.DIPOLE: 'Dipole',
            AntennaVariant.MONOPOLE: 'Monopole',
            AntennaVariant.ARRAY: 'Two-Element Array',
            AntennaVariant.YAGI: 'Yagi-Uda',
        }[self]

    @classmethod
    def from_value(cls, value: Union[str, 'AntennaVariant']) -> 'AntennaVariant':
        """
        Look up a variant by enum member, value or name (case-insensitive).

        Raises:
            ValueError: If the value names no known variant
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for variant in cls:
            if key in (variant.value, variant.name.lower()):
                return variant
        raise ValueError(f"Unknown antenna variant: {value}")


class ViewMode(enum.Enum):
    """Display scale for pattern radius and colour."""
    GAIN = 'gain'    # Logarithmic (dB)
    POWER = 'power'  # Linear, normalized to the peak

    @classmethod
    def from_value(cls, value: Union[str, 'ViewMode']) -> 'ViewMode':
        """
        Look up a view mode by enum member or value.

        Raises:
            ValueError: If the value names no known mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Invalid view mode: {value}. Must be 'gain' or 'power'") from None


@dataclass(frozen=True)
class AntennaParameters:
    """
    Parameters for every antenna variant.

    Only the fields belonging to the active variant are read by the
    pattern and metrics functions.

    Attributes:
        dipole_length: Dipole length in wavelengths
        monopole_length: Monopole length in wavelengths
        separation: Two-element array spacing in wavelengths
        phase_offset: Two-element array progressive phase in degrees [0, 360)
        director_count: Number of Yagi directors
    """
    dipole_length: float = DEFAULT_DIPOLE_LENGTH
    monopole_length: float = DEFAULT_MONOPOLE_LENGTH
    separation: float = DEFAULT_ARRAY_SEPARATION
    phase_offset: float = DEFAULT_ARRAY_PHASE
    director_count: int = DEFAULT_YAGI_DIRECTORS

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'dipole_length',
                           parse_positive(self.dipole_length, DEFAULT_DIPOLE_LENGTH, 'dipole length'))
        object.__setattr__(self, 'monopole_length',
                           parse_positive(self.monopole_length, DEFAULT_MONOPOLE_LENGTH, 'monopole length'))
        object.__setattr__(self, 'separation',
                           parse_positive(self.separation, DEFAULT_ARRAY_SEPARATION, 'array separation'))
        object.__setattr__(self, 'phase_offset', parse_phase(self.phase_offset))
        object.__setattr__(self, 'director_count', parse_director_count(self.director_count))


@dataclass(frozen=True)
class RenderConfig:
    """
    Immutable snapshot of everything one redraw depends on.

    Attributes:
        variant: Active antenna model
        parameters: Antenna parameters
        view_mode: Gain (dB) or normalized power display
    """
    variant: AntennaVariant = AntennaVariant.DIPOLE
    parameters: AntennaParameters = field(default_factory=AntennaParameters)
    view_mode: ViewMode = ViewMode.GAIN

    def __post_init__(self):
        # Accept string values, e.g. RenderConfig(variant='yagi')
        object.__setattr__(self, 'variant', AntennaVariant.from_value(self.variant))
        object.__setattr__(self, 'view_mode', ViewMode.from_value(self.view_mode))

    def with_variant(self, variant: Union[str, AntennaVariant]) -> 'RenderConfig':
        """Return a copy with a different antenna variant."""
        return replace(self, variant=AntennaVariant.from_value(variant))

    def with_view_mode(self, view_mode: Union[str, ViewMode]) -> 'RenderConfig':
        """Return a copy with a different view mode."""
        return replace(self, view_mode=ViewMode.from_value(view_mode))

    def with_parameters(self, **changes: Any) -> 'RenderConfig':
        """Return a copy with some antenna parameters changed."""
        return replace(self, parameters=replace(self.parameters, **changes))


def _to_float(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_positive(value: Any, default: float, name: str = 'value') -> float:
    """
    Parse a positive real length in wavelengths.

    Unparsable or non-finite input falls back to the default; values below
    MIN_ELECTRICAL_LENGTH are clamped up to it.

    Args:
        value: Raw input (number or string)
        default: Value used when the input cannot be parsed
        name: Parameter name for log messages

    Returns:
        float: Validated positive value
    """
    number = _to_float(value)
    if number is None:
        logger.warning(f"Invalid {name} {value!r}, using default {default}")
        return float(default)

    if number < MIN_ELECTRICAL_LENGTH:
        logger.warning(f"Clamping {name} {number} to {MIN_ELECTRICAL_LENGTH}")
        return MIN_ELECTRICAL_LENGTH

    return number


def parse_phase(value: Any) -> float:
    """Parse a phase in degrees and wrap it into [0, 360)."""
    number = _to_float(value)
    if number is None:
        logger.warning(f"Invalid array phase {value!r}, using default {DEFAULT_ARRAY_PHASE}")
        return DEFAULT_ARRAY_PHASE

    return normalize_degrees(number)


def parse_director_count(value: Any) -> int:
    """
    Parse the Yagi director count.

    Unparsable input defaults to 3, negative counts clamp to 0 and
    fractional counts truncate toward zero. Zero is a valid count.
    """
    if isinstance(value, bool):
        value = int(value)

    if isinstance(value, int):
        count = value
    else:
        number = _to_float(value)
        if number is None:
            logger.warning(f"Invalid director count {value!r}, using default {DEFAULT_YAGI_DIRECTORS}")
            return DEFAULT_YAGI_DIRECTORS
        count = int(number)

    if count < 0:
        logger.warning(f"Negative director count {count}, using 0")
        return 0

    return count


def parse_parameters(**raw: Any) -> AntennaParameters:
    """
    Build AntennaParameters from raw (possibly string) UI values.

    Keys not supplied keep their defaults; unknown keys raise TypeError
    like any dataclass constructor.
    """
    return AntennaParameters(**raw)
