"""
RadiationPattern package - Radiation pattern sampling, metrics and projection.

This package evaluates closed-form radiation patterns for dipole, monopole,
two-element array and Yagi-Uda antennas, samples azimuth/elevation cuts and a
spherical grid, derives gain, beamwidth and front-to-back ratio, and projects
the grid into a depth-sorted isometric view.
"""

__version__ = '0.1.0'

# Import key classes and functions to make them available at the package level
from .config import (
    AntennaVariant,
    AntennaParameters,
    RenderConfig,
    ViewMode,
    parse_parameters
)
from .pattern_models import intensity
from .sampling import (
    IntensitySample,
    PatternCut,
    PatternGrid,
    sample_cut,
    sample_grid
)
from .metrics import (
    Metrics,
    calculate_beamwidth,
    calculate_front_to_back,
    calculate_directivity,
    dipole_gain,
    monopole_gain,
    array_gain,
    yagi_gain,
    compute_metrics,
    evaluate,
    format_metrics
)
from .projection import (
    ProjectedQuad,
    isometric_project,
    project_grid,
    value_to_color,
    legend_for_mode
)
from .analysis import (
    calculate_grid_directivity,
    find_pattern_peak
)
from .scheduling import RedrawScheduler
from .utilities import (
    to_decibels
)

# Define what gets imported with "from radiation_pattern import *"
__all__ = [
    'AntennaVariant',
    'AntennaParameters',
    'RenderConfig',
    'ViewMode',
    'parse_parameters',
    'intensity',
    'IntensitySample',
    'PatternCut',
    'PatternGrid',
    'sample_cut',
    'sample_grid',
    'Metrics',
    'calculate_beamwidth',
    'calculate_front_to_back',
    'calculate_directivity',
    'dipole_gain',
    'monopole_gain',
    'array_gain',
    'yagi_gain',
    'compute_metrics',
    'evaluate',
    'format_metrics',
    'ProjectedQuad',
    'isometric_project',
    'project_grid',
    'value_to_color',
    'legend_for_mode',
    'calculate_grid_directivity',
    'find_pattern_peak',
    'RedrawScheduler',
    'to_decibels'
]
