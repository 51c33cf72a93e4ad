from __future__ import annotations

from typing import List, Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt

from .grid_map import GridMap
from .nav_grid_node import NavGridNode


def _cell_centers(cells: List[NavGridNode]) -> Tuple[np.ndarray, np.ndarray]:
    xs = np.array([c.x for c in cells], dtype=float)
    zs = np.array([c.z for c in cells], dtype=float)
    return xs, zs


def plot_map(grid: GridMap, ax: Optional[plt.Axes] = None, title: Optional[str] = None):
    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 7))
    ax.imshow(grid.occ, cmap="gray_r", origin="lower")  # obstacles appear dark, z grows upward
    ax.set_xlim(-0.5, grid.spec.width - 0.5)
    ax.set_ylim(-0.5, grid.spec.depth - 0.5)
    ax.set_aspect("equal")
    ax.axis("off")
    if title:
        ax.set_title(title)
    return ax


def plot_path(ax: plt.Axes, path: List[NavGridNode], linewidth: float = 1.3, marker: Optional[str] = None, label: Optional[str] = None):
    if not path:
        return
    xs, zs = _cell_centers(path)
    ax.plot(xs, zs, linewidth=linewidth, marker=marker, markersize=4.0, label=label)


def highlight_point(ax: plt.Axes, c: NavGridNode, marker: str = "o", size: float = 60.0, label: Optional[str] = None):
    ax.scatter([c.x], [c.z], s=size, marker=marker, label=label)


def save_fig(path: str):
    plt.tight_layout(pad=0.2)
    plt.savefig(path, dpi=220, bbox_inches="tight")
    plt.close()


def plot_raw_vs_smooth(grid: GridMap, start: NavGridNode, goal: NavGridNode, raw_path: List[NavGridNode], smooth_path: List[NavGridNode], out_path: str):
    fig, ax = plt.subplots(figsize=(7, 7))
    plot_map(grid, ax=ax, title="Raw grid path vs smoothed waypoints")
    if raw_path:
        plot_path(ax, raw_path, linewidth=1.5, label="raw path")
    if smooth_path:
        plot_path(ax, smooth_path, linewidth=2.6, marker="o", label="smoothed path")
    highlight_point(ax, start, marker="x", size=90.0, label="start")
    highlight_point(ax, goal, marker="*", size=120.0, label="goal")
    ax.legend(loc="lower left", framealpha=0.85)
    save_fig(out_path)
