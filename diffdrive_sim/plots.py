"""Plotting utilities for the drive simulator.

This module provides:
- Robot outline geometry (wheels, frame, axle markers) for a pose
- Scene drawing onto a caller-supplied axis (field, grid, trail, robot)
- A static trajectory figure for headless runs
- Common axis styling and figure saving

Every drawing function takes the axis and the display state (camera, trail)
as arguments; nothing here keeps a global drawing context.
"""

import logging
import math
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Polygon

from .config import (
    COLOR_BACK,
    COLOR_BACKGROUND,
    COLOR_BODY,
    COLOR_BODY_EDGE,
    COLOR_FRONT,
    COLOR_GRID,
    COLOR_TEXT,
    COLOR_TRAIL,
    COLOR_WHEEL,
    VIEW_SIZE,
)
from .robot import Pose
from .simulation import Camera, Trail
from .vector_math import rotate

# ============================================================================
# Robot Geometry
# ============================================================================


def _rectangle(x: float, y: float, width: float, height: float) -> List[Tuple[float, float]]:
    return [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]


def robot_outline(pose: Pose, length: float) -> Dict[str, np.ndarray]:
    """Compute the drawn outline of the robot at a pose.

    The robot is drawn as a square body of side `length` with a wheel on each
    side, a red marker at the front and a blue marker at the back. Shapes are
    laid out facing +y and rotated by heading - pi/2 about the robot center.

    Args:
        pose: Robot pose.
        length: Wheelbase (meters), used as the body size.

    Returns:
        Dictionary mapping part name ('left_wheel', 'right_wheel', 'frame',
        'front', 'back') to an (N, 2) array of polygon vertices.
    """
    x, y = pose.x, pose.y
    r = length / 2
    angle = pose.heading - math.pi / 2
    center = (x, y)

    wheel_width = r * 0.25
    wheel_height = r * 1.5
    wheel_y = y - r * 0.75
    marker_x = x - r * 0.5
    marker_width = r
    marker_height = r * 0.25

    shapes = {
        "left_wheel": _rectangle(x - r * 1.25, wheel_y, wheel_width, wheel_height),
        "right_wheel": _rectangle(x + r * 1.25 - wheel_width, wheel_y, wheel_width, wheel_height),
        "frame": _rectangle(x - r, y - r, 2 * r, 2 * r),
        "front": _rectangle(marker_x, y + r * 0.75, marker_width, marker_height),
        "back": _rectangle(marker_x, y - r * 0.75 - marker_height, marker_width, marker_height),
    }

    return {
        name: np.array([rotate(vertex, angle, center) for vertex in vertices])
        for name, vertices in shapes.items()
    }


# ============================================================================
# Plot Styling Functions
# ============================================================================


def style_axis(ax: Axes, title: str = "", xlabel: str = "", ylabel: str = "") -> None:
    """Apply dark field styling to an axis.

    Args:
        ax: Matplotlib axis to style.
        title: Plot title (optional).
        xlabel: X-axis label (optional).
        ylabel: Y-axis label (optional).
    """
    if title:
        ax.set_title(title, fontweight="bold", color=COLOR_TEXT)
    if xlabel:
        ax.set_xlabel(xlabel, color=COLOR_TEXT)
    if ylabel:
        ax.set_ylabel(ylabel, color=COLOR_TEXT)

    ax.set_facecolor(COLOR_BACKGROUND)
    ax.set_aspect("equal", adjustable="box")
    ax.tick_params(colors=COLOR_TEXT)
    for spine in ax.spines.values():
        spine.set_edgecolor(COLOR_BODY_EDGE)


def draw_grid(ax: Axes, bounds: Tuple[float, float, float, float], spacing: float = 1.0) -> None:
    """Draw grid lines every `spacing` meters inside `bounds`."""
    x_min, x_max, y_min, y_max = bounds
    for gx in np.arange(math.floor(x_min), math.ceil(x_max) + spacing, spacing):
        ax.axvline(gx, color=COLOR_GRID, linewidth=0.5, zorder=0)
    for gy in np.arange(math.floor(y_min), math.ceil(y_max) + spacing, spacing):
        ax.axhline(gy, color=COLOR_GRID, linewidth=0.5, zorder=0)


def draw_robot(ax: Axes, pose: Pose, length: float) -> List[Polygon]:
    """Add the robot outline patches to an axis and return them."""
    outline = robot_outline(pose, length)
    styles = {
        "left_wheel": {"facecolor": COLOR_WHEEL, "edgecolor": "none"},
        "right_wheel": {"facecolor": COLOR_WHEEL, "edgecolor": "none"},
        "frame": {"facecolor": COLOR_BODY, "edgecolor": COLOR_BODY_EDGE, "linewidth": 1.5},
        "front": {"facecolor": COLOR_FRONT, "edgecolor": "none"},
        "back": {"facecolor": COLOR_BACK, "edgecolor": "none"},
    }

    patches = []
    for zorder, (name, vertices) in enumerate(outline.items(), start=3):
        patch = Polygon(vertices, closed=True, zorder=zorder, **styles[name])
        ax.add_patch(patch)
        patches.append(patch)
    return patches


def draw_scene(
    ax: Axes,
    pose: Pose,
    length: float,
    trail: Trail,
    camera: Camera,
    view_size: float = VIEW_SIZE,
    origin: Optional[Tuple[float, float]] = None,
) -> None:
    """Redraw the whole field view on `ax`.

    Args:
        ax: Axis to draw on. Its previous contents are cleared.
        pose: Robot pose to draw.
        length: Robot wheelbase (meters).
        trail: Path trail to draw.
        camera: Camera whose center fixes the view window.
        view_size: Width and height of the view window (meters).
        origin: Optional fixed point marked with a white dot (e.g. the start).
    """
    ax.clear()
    bounds = camera.bounds(view_size)
    ax.set_xlim(bounds[0], bounds[1])
    ax.set_ylim(bounds[2], bounds[3])
    style_axis(ax)
    draw_grid(ax, bounds)

    if origin is not None:
        ax.add_patch(Circle(origin, 0.3, facecolor="white", edgecolor="none", zorder=1))

    trail_x, trail_y = trail.xy()
    ax.plot(trail_x, trail_y, "-", color=COLOR_TRAIL, linewidth=5, zorder=2)

    draw_robot(ax, pose, length)


# ============================================================================
# Figures
# ============================================================================


def plot_trajectory(
    trail: Trail,
    pose: Pose,
    length: float,
    title: str = "Robot Trajectory",
    save_path: Optional[Path] = None,
) -> Figure:
    """Plot a whole run: trail, start and end markers, final robot outline.

    Args:
        trail: Recorded path.
        pose: Final robot pose.
        length: Robot wheelbase (meters).
        title: Plot title.
        save_path: Optional path to save the figure.

    Returns:
        Matplotlib figure object.
    """
    fig, ax = plt.subplots(figsize=(8, 8), facecolor=COLOR_BACKGROUND)
    style_axis(ax, title=title, xlabel="X (m)", ylabel="Y (m)")

    trail_x, trail_y = trail.xy()
    trail_x.append(pose.x)
    trail_y.append(pose.y)
    ax.plot(trail_x, trail_y, "-", color=COLOR_TRAIL, linewidth=3, label="Path", zorder=2)
    ax.plot(trail_x[0], trail_y[0], "o", color="white", markersize=8, label="Start", zorder=8)
    draw_robot(ax, pose, length)

    # Keep the final outline in view
    margin = length * 1.5
    ax.set_xlim(min(trail_x) - margin, max(trail_x) + margin)
    ax.set_ylim(min(trail_y) - margin, max(trail_y) + margin)
    ax.grid(True, alpha=0.3, linestyle="--", linewidth=0.5)
    ax.legend(loc="best", facecolor=COLOR_BACKGROUND, labelcolor=COLOR_TEXT, edgecolor=COLOR_BODY_EDGE)

    if save_path is not None:
        save_figure(fig, save_path)

    return fig


def save_figure(fig: Figure, filepath: Path, dpi: int = 150, bbox_inches: str = "tight") -> None:
    """Save figure with consistent settings.

    Args:
        fig: Matplotlib figure to save.
        filepath: Path where to save the figure.
        dpi: Resolution in dots per inch (default: 150).
        bbox_inches: Bounding box setting (default: "tight").
    """
    fig.savefig(filepath, dpi=dpi, bbox_inches=bbox_inches, facecolor=fig.get_facecolor())
    logging.info(f"Saved figure to {filepath}")
