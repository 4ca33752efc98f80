"""
Plotting functions for radiation pattern views.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection, PolyCollection
from matplotlib.colors import Normalize
from matplotlib.cm import ScalarMappable
from matplotlib.figure import Figure

from .config import AntennaVariant, RenderConfig, ViewMode
from .metrics import Metrics, evaluate, format_metrics
from .projection import (ProjectedQuad, color_to_hex, isometric_project, legend_for_mode,
                         pattern_colormap, project_grid, scale_values, value_to_color)
from .sampling import AZIMUTH, ELEVATION, PatternCut, sample_cut, sample_grid
from .utilities import DB_MIN, DB_MAX, GRID_LEVELS, to_decibels

# Configure logging
logger = logging.getLogger(__name__)

AXIS_COLORS = {
    'x': (1.0, 100 / 255, 100 / 255, 0.6),
    'y': (100 / 255, 1.0, 100 / 255, 0.6),
    'z': (100 / 255, 100 / 255, 1.0, 0.6),
}


class ExportError(Exception):
    """Raised when the composite image cannot be written."""


def plot_polar_cut(
    cut: PatternCut,
    view_mode: Union[str, ViewMode] = ViewMode.GAIN,
    ax: Optional[plt.Axes] = None,
    fig_size: Tuple[float, float] = (6, 6),
    title: Optional[str] = None
) -> plt.Figure:
    """
    Plot a 1D cut on polar axes.

    Zero degrees points up and angles increase clockwise. The radius is the
    display scale of each sample (dB clamped to [-30, 0] in gain mode,
    normalized power otherwise) and each segment is coloured by its dB
    value.

    Args:
        cut: Sampled azimuth or elevation cut
        view_mode: Gain or power display
        ax: Optional polar axes to plot on
        fig_size: Figure size as (width, height) in inches
        title: Optional title for the plot

    Returns:
        matplotlib.Figure: The figure containing the plot
    """
    view_mode = ViewMode.from_value(view_mode)

    # Create new figure and axes if not provided
    if ax is None:
        fig, ax = plt.subplots(figsize=fig_size, subplot_kw={'projection': 'polar'})
    else:
        fig = ax.figure

    angles = cut.angles
    radius = scale_values(cut.intensities, cut.max_intensity, view_mode)
    db = to_decibels(cut.intensities, cut.max_intensity)

    # Closed outline, one segment per sample
    closed_angles = np.append(angles, angles[0] + 2 * np.pi)
    closed_radius = np.append(radius, radius[0])
    points = np.column_stack([closed_angles, closed_radius])
    segments = np.stack([points[:-1], points[1:]], axis=1)
    colors = [color_to_hex(value_to_color(value)) for value in db]

    ax.add_collection(LineCollection(segments, colors=colors, linewidths=2.5))

    with np.errstate(invalid='ignore'):
        mean_db = float(np.mean(db))
    ax.fill(closed_angles, closed_radius, color=color_to_hex(value_to_color(mean_db)), alpha=0.2)

    ax.set_theta_zero_location('N')
    ax.set_theta_direction(-1)
    ax.set_ylim(0, 1)
    ax.set_thetagrids(np.arange(0, 360, 30))

    ring_levels = np.arange(1, GRID_LEVELS) / GRID_LEVELS
    if view_mode is ViewMode.GAIN:
        ring_labels = [f"{DB_MIN + (DB_MAX - DB_MIN) * level:.0f}dB" for level in ring_levels]
    else:
        ring_labels = [f"{level * 100:.0f}%" for level in ring_levels]
    ax.set_rgrids(ring_levels, labels=ring_labels, angle=0)
    ax.grid(True, alpha=0.3)

    if title is None:
        plane = 'Azimuth' if cut.fix_dimension == AZIMUTH else 'Elevation'
        title = f"{plane} Pattern"
    ax.set_title(title)

    return fig


def plot_projected_pattern(
    quads: List[ProjectedQuad],
    ax: Optional[plt.Axes] = None,
    fig_size: Tuple[float, float] = (10, 5),
    title: Optional[str] = None,
    show_axes: bool = True
) -> plt.Figure:
    """
    Draw depth-sorted quads from project_grid.

    Quads are painted in list order, so the nearest ones end up on top.
    Quads are expected in unit screen coordinates (center (0, 0), size 1).

    Args:
        quads: Output of project_grid
        ax: Optional cartesian axes to plot on
        fig_size: Figure size as (width, height) in inches
        title: Optional title for the plot
        show_axes: Draw the x (red), y (green) and z (blue) reference axes

    Returns:
        matplotlib.Figure: The figure containing the plot
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=fig_size)
    else:
        fig = ax.figure

    verts = [quad.points for quad in quads]
    face_colors = [tuple(c / 255 for c in quad.color) + (0.8,) for quad in quads]
    edge_colors = [tuple(c / 255 for c in quad.color) for quad in quads]

    ax.add_collection(PolyCollection(verts, facecolors=face_colors,
                                     edgecolors=edge_colors, linewidths=0.5))

    if show_axes:
        origin = isometric_project(0.0, 0.0, 0.0)
        ends = {
            'x': isometric_project(1.2, 0.0, 0.0),
            'y': isometric_project(0.0, 1.2, 0.0),
            'z': isometric_project(0.0, 0.0, 1.2),
        }
        for name, end in ends.items():
            ax.plot([origin[0], end[0]], [origin[1], end[1]], color=AXIS_COLORS[name], linewidth=2)

    ax.set_xlim(-1.5, 1.5)
    ax.set_ylim(-1.5, 1.5)
    ax.set_aspect('equal')
    # Screen coordinates grow downward
    ax.invert_yaxis()
    ax.axis('off')

    ax.set_title(title if title is not None else "3D Pattern (Isometric)")

    return fig


def add_pattern_legend(fig: plt.Figure, view_mode: Union[str, ViewMode],
                       ax: Optional[Union[plt.Axes, List[plt.Axes]]] = None):
    """
    Add a colour bar describing the active colormap and its range.

    Returns:
        matplotlib.colorbar.Colorbar
    """
    legend = legend_for_mode(view_mode)
    low, high = legend['range']
    mappable = ScalarMappable(norm=Normalize(vmin=low, vmax=high), cmap=pattern_colormap())
    mappable.set_array([])

    colorbar = fig.colorbar(mappable, ax=ax if ax is not None else fig.axes,
                            orientation='horizontal', fraction=0.04, pad=0.06)
    colorbar.set_ticks(np.linspace(low, high, len(legend['labels'])))
    colorbar.set_ticklabels(legend['labels'])
    colorbar.set_label(legend['title'])
    return colorbar


def plot_pattern_views(
    config: RenderConfig,
    fig: Optional[plt.Figure] = None,
    fig_size: Tuple[float, float] = (10, 10),
    metrics: Optional[Metrics] = None
) -> plt.Figure:
    """
    Plot the azimuth cut, the elevation cut and the 3D projection together.

    Args:
        config: Antenna and view snapshot
        fig: Optional figure to draw into (cleared first)
        fig_size: Figure size when a new figure is created
        metrics: Precomputed metrics; computed from config when None

    Returns:
        matplotlib.Figure: The figure with three views and a colour bar
    """
    if fig is None:
        fig = plt.figure(figsize=fig_size)
    else:
        fig.clear()

    if metrics is None:
        metrics = evaluate(config)

    ax_azimuth = fig.add_subplot(2, 2, 1, projection='polar')
    ax_elevation = fig.add_subplot(2, 2, 2, projection='polar')
    ax_3d = fig.add_subplot(2, 1, 2)

    plot_polar_cut(sample_cut(config, AZIMUTH), config.view_mode, ax=ax_azimuth)
    plot_polar_cut(sample_cut(config, ELEVATION), config.view_mode, ax=ax_elevation)
    plot_projected_pattern(project_grid(sample_grid(config), config.view_mode), ax=ax_3d)

    add_pattern_legend(fig, config.view_mode, ax=ax_3d)

    text = format_metrics(metrics)
    ax_3d.text(0.0, 0.0,
               f"Gain: {text['gain']} dBi   Beamwidth: {text['beamwidth']}   F/B: {text['front_to_back']}",
               transform=ax_3d.transAxes, fontsize=9)

    return fig


def export_title(variant: Union[str, AntennaVariant]) -> str:
    """Title naming the active antenna variant."""
    try:
        name = AntennaVariant.from_value(variant).value
    except ValueError:
        name = str(variant)
    return f"Radiation Pattern - {name.upper()}"


def default_export_filename(variant: Union[str, AntennaVariant], now: Optional[datetime] = None) -> str:
    """File name for an exported image, e.g. radiation-pattern-dipole-2024-05-01T12-30-00.png"""
    if now is None:
        now = datetime.now()
    try:
        name = AntennaVariant.from_value(variant).value
    except ValueError:
        name = str(variant)
    timestamp = now.strftime('%Y-%m-%dT%H-%M-%S')
    return f"radiation-pattern-{name}-{timestamp}.png"


def export_composite_image(config: RenderConfig, file_path: Union[str, Path],
                           dpi: int = 150) -> Path:
    """
    Save all three views and a title in a single raster image.

    Args:
        config: Antenna and view snapshot
        file_path: Output path; the format follows the extension (PNG by default)
        dpi: Output resolution

    Returns:
        Path: The written file

    Raises:
        ExportError: If rendering or writing the image fails
    """
    file_path = Path(file_path)

    try:
        # Detached from pyplot so exports work without a GUI backend
        fig = Figure(figsize=(10, 11), facecolor='#0a0e1a')
        plot_pattern_views(config, fig=fig)
        fig.suptitle(export_title(config.variant), color='#00d4ff', fontsize=16, fontweight='bold')
        fig.savefig(file_path, dpi=dpi, facecolor=fig.get_facecolor())
    except Exception as e:
        logger.error(f"Error exporting pattern image to {file_path}: {e}", exc_info=True)
        raise ExportError(f"Could not export image to {file_path}") from e

    logger.info(f"Pattern image saved to {file_path}")
    return file_path
