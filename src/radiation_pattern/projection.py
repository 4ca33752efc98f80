"""
Isometric projection of a spherical pattern grid.

Each grid cell becomes a quad whose corners sit at a radius given by the
display scale of their intensity. Quads are projected with a fixed
isometric map and depth sorted far-to-near (painter's algorithm) so a
renderer can draw them in order without a depth buffer.
"""
import math
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

import numpy as np
from matplotlib.colors import LinearSegmentedColormap

from .config import ViewMode
from .sampling import PatternGrid
from .utilities import DB_MIN, DB_MAX, ISO_ANGLE, to_decibels

# Colormap anchors: blue -> cyan -> green -> yellow -> red
COLORMAP_ANCHORS = (
    (0.00, (0, 0, 255)),
    (0.25, (0, 255, 255)),
    (0.50, (0, 255, 0)),
    (0.75, (255, 255, 0)),
    (1.00, (255, 0, 0)),
)

Point2D = Tuple[float, float]


@dataclass(frozen=True)
class ProjectedQuad:
    """
    One depth-sorted surface patch ready for 2D drawing.

    Attributes:
        points: Four projected screen points in corner order
            (ti, pi), (ti, pi+1), (ti+1, pi+1), (ti+1, pi)
        depth: Mean pre-projection z of the corners (sort key)
        db: Mean dB of the corners relative to the grid maximum
        color: (r, g, b) colour for db
        grid_index: (theta index, phi index) of the cell
    """
    points: Tuple[Point2D, Point2D, Point2D, Point2D]
    depth: float
    db: float
    color: Tuple[int, int, int]
    grid_index: Tuple[int, int]


def value_to_color(value: float, min_value: float = DB_MIN,
                   max_value: float = DB_MAX) -> Tuple[int, int, int]:
    """
    Map a dB value to an RGB triple on the blue-cyan-green-yellow-red scale.

    Values outside [min_value, max_value] (including -inf) clamp to the end
    colours. Channels are floor(255 * t) within each of the four segments.
    """
    if math.isnan(value):
        value = min_value
    clamped = max(min_value, min(max_value, value))
    normalized = (clamped - min_value) / (max_value - min_value)

    if normalized < 0.25:
        t = normalized / 0.25
        return 0, math.floor(255 * t), 255
    elif normalized < 0.5:
        t = (normalized - 0.25) / 0.25
        return 0, 255, math.floor(255 * (1 - t))
    elif normalized < 0.75:
        t = (normalized - 0.5) / 0.25
        return math.floor(255 * t), 255, 0

    t = (normalized - 0.75) / 0.25
    return 255, math.floor(255 * (1 - t)), 0


def color_to_hex(color: Tuple[int, int, int]) -> str:
    """'#rrggbb' string for an RGB triple."""
    return '#{:02x}{:02x}{:02x}'.format(*color)


def pattern_colormap(name: str = 'radiation_pattern') -> LinearSegmentedColormap:
    """Matplotlib colormap with the same anchors as value_to_color."""
    return LinearSegmentedColormap.from_list(
        name, [(pos, tuple(c / 255 for c in rgb)) for pos, rgb in COLORMAP_ANCHORS])


def legend_for_mode(view_mode: Union[str, ViewMode]) -> Dict[str, object]:
    """
    Legend description for the active view mode.

    Returns:
        Dict with 'title', 'labels' (4 tick labels low to high) and
        'range' (numeric range of the colour scale)
    """
    view_mode = ViewMode.from_value(view_mode)
    if view_mode is ViewMode.GAIN:
        return {
            'title': 'Gain (dB) - Logarithmic Scale',
            'labels': ['-30 dB', '-20 dB', '-10 dB', '0 dB'],
            'range': (DB_MIN, DB_MAX),
        }

    return {
        'title': 'Normalized Power - Linear Scale',
        'labels': ['0%', '33%', '67%', '100%'],
        'range': (0.0, 1.0),
    }


def scale_values(intensities: np.ndarray, max_intensity: float,
                 view_mode: Union[str, ViewMode]) -> np.ndarray:
    """
    Display scale in [0, 1] for a set of intensities.

    Gain mode clamps dB (relative to max_intensity) to [-30, 0] and maps it
    linearly onto [0, 1]. Power mode is intensity / max_intensity.
    """
    view_mode = ViewMode.from_value(view_mode)
    intensities = np.asarray(intensities, dtype=float)

    if view_mode is ViewMode.GAIN:
        db = np.clip(to_decibels(intensities, max_intensity), DB_MIN, DB_MAX)
        return np.maximum(0.0, (db - DB_MIN) / (DB_MAX - DB_MIN))

    return np.maximum(0.0, intensities / max_intensity)


def spherical_to_cartesian(theta: np.ndarray, phi: np.ndarray,
                           scale: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Points on a sphere of radius `scale`.

    Args:
        theta: Angle from +z in radians
        phi: Angle from +x in the xy-plane in radians
        scale: Radius

    Returns:
        Tuple of (x, y, z)
    """
    sin_theta = np.sin(theta)
    x = scale * sin_theta * np.cos(phi)
    y = scale * sin_theta * np.sin(phi)
    z = scale * np.cos(theta)
    return x, y, z


def isometric_project(x: np.ndarray, y: np.ndarray, z: np.ndarray,
                      center: Point2D = (0.0, 0.0), size: float = 1.0,
                      angle: float = ISO_ANGLE) -> Tuple[np.ndarray, np.ndarray]:
    """
    Fixed isometric map from 3D to screen coordinates.

    Screen y grows downward, so +z points up the screen:
        X = cx + size * (x*cos(a) - y*cos(a))
        Y = cy + size * (-z + (x + y)*sin(a))

    Args:
        x, y, z: Cartesian coordinates (scalars or arrays of equal shape)
        center: Screen position of the origin
        size: Screen length of a unit vector
        angle: Isometric angle in radians

    Returns:
        Tuple of (screen_x, screen_y)
    """
    scalar_input = np.isscalar(x) and np.isscalar(y) and np.isscalar(z)
    x, y, z = np.broadcast_arrays(np.asarray(x, dtype=float), np.asarray(y, dtype=float),
                                  np.asarray(z, dtype=float))
    original_shape = x.shape
    # Stack coordinates as columns
    coords = np.vstack([x.ravel(), y.ravel(), z.ravel()])

    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    projection = np.array([
        [cos_a, -cos_a, 0.0],
        [sin_a, sin_a, -1.0],
    ])

    screen = size * (projection @ coords)
    screen_x = (center[0] + screen[0]).reshape(original_shape)
    screen_y = (center[1] + screen[1]).reshape(original_shape)

    if scalar_input:
        return screen_x.item(), screen_y.item()

    return screen_x, screen_y


def project_grid(grid: PatternGrid, view_mode: Union[str, ViewMode] = ViewMode.GAIN,
                 center: Point2D = (0.0, 0.0), size: float = 1.0) -> List[ProjectedQuad]:
    """
    Turn a pattern grid into depth-sorted, coloured quads.

    Every cell between adjacent (theta, phi) samples becomes one quad. The
    list is ordered by ascending mean z (far to near); cells with equal
    depth keep row-major grid order, so the result is fully deterministic.

    Args:
        grid: Sampled (theta, phi) grid
        view_mode: Gain (dB radius) or power (linear radius)
        center: Screen position of the origin
        size: Screen length of a unit radius

    Returns:
        List[ProjectedQuad]: (n_theta - 1) * (n_phi - 1) quads
    """
    view_mode = ViewMode.from_value(view_mode)
    values = grid.intensities
    theta = grid.theta
    phi = grid.phi

    db = to_decibels(values, grid.max_intensity)
    scale = scale_values(values, grid.max_intensity, view_mode)

    theta_mesh, phi_mesh = np.meshgrid(theta, phi, indexing='ij')
    x, y, z = spherical_to_cartesian(theta_mesh, phi_mesh, scale)
    screen_x, screen_y = isometric_project(x, y, z, center=center, size=size)

    n_theta, n_phi = values.shape
    quads = []
    for ti in range(n_theta - 1):
        for pi in range(n_phi - 1):
            corners = ((ti, pi), (ti, pi + 1), (ti + 1, pi + 1), (ti + 1, pi))

            points = tuple((float(screen_x[c]), float(screen_y[c])) for c in corners)
            depth = float(sum(z[c] for c in corners) / 4)
            with np.errstate(invalid='ignore'):
                mean_db = float(sum(db[c] for c in corners) / 4)

            quads.append(ProjectedQuad(
                points=points,
                depth=depth,
                db=mean_db,
                color=value_to_color(mean_db),
                grid_index=(ti, pi),
            ))

    # sorted() is stable: equal depths keep grid order
    return sorted(quads, key=lambda quad: quad.depth)
