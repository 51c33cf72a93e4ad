from __future__ import annotations

from dataclasses import dataclass
from typing import List
import numpy as np

from .nav_grid_node import Direction, NavGridNode


@dataclass(frozen=True)
class GridSpec:
    width: int
    depth: int


class GridMap:
    """
    Binary occupancy grid over (x, z) cells.

    Conventions:
    - occupancy[z, x] == 1 means obstacle
    - occupancy[z, x] == 0 means free
    - cells are NavGridNode(x, z), with 0 <= x < width, 0 <= z < depth
    - z increases with the row index, so row 0 is the southern edge
    """
    def __init__(self, occupancy: np.ndarray):
        occupancy = np.asarray(occupancy)
        if occupancy.ndim != 2:
            raise ValueError("occupancy must be a 2D array")
        self.occ = (occupancy > 0).astype(np.uint8)
        self.d, self.w = self.occ.shape
        self.spec = GridSpec(width=self.w, depth=self.d)

    @staticmethod
    def from_binary_image(path: str, obstacle_is_black: bool = True, threshold: int = 128) -> "GridMap":
        from PIL import Image
        img = Image.open(path).convert("L")
        # image rows run top-down, grid rows run south-north
        arr = np.flipud(np.array(img))
        if obstacle_is_black:
            occ = (arr < threshold).astype(np.uint8)
        else:
            occ = (arr >= threshold).astype(np.uint8)
        return GridMap(occ)

    @staticmethod
    def from_rows(rows: List[str], obstacle: str = "#") -> "GridMap":
        """
        Parse an ASCII map; the first row is the northern edge.
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ValueError("all rows must have the same length")
        occ = np.array([[1 if ch == obstacle else 0 for ch in r] for r in reversed(rows)], dtype=np.uint8)
        return GridMap(occ)

    def in_bounds(self, c: NavGridNode) -> bool:
        return 0 <= c.x < self.w and 0 <= c.z < self.d

    def is_obstacle(self, c: NavGridNode) -> bool:
        return bool(self.occ[c.z, c.x])

    def is_free(self, c: NavGridNode) -> bool:
        return self.in_bounds(c) and (not self.is_obstacle(c))

    def neighbors8(self, c: NavGridNode) -> List[NavGridNode]:
        cand = [c + d for d in Direction]
        return [p for p in cand if self.in_bounds(p)]

    def inflate_obstacles(self, radius_cells: int) -> "GridMap":
        if radius_cells <= 0:
            return GridMap(self.occ.copy())

        zs, xs = np.where(self.occ == 1)
        out = self.occ.copy()
        for x, z in zip(xs, zs):
            x0 = max(0, x - radius_cells)
            x1 = min(self.w - 1, x + radius_cells)
            z0 = max(0, z - radius_cells)
            z1 = min(self.d - 1, z + radius_cells)
            out[z0:z1+1, x0:x1+1] = 1
        return GridMap(out)

    def bresenham_line(self, a: NavGridNode, b: NavGridNode) -> List[NavGridNode]:
        x0, z0 = a.x, a.z
        x1, z1 = b.x, b.z
        dx = abs(x1 - x0)
        dz = abs(z1 - z0)
        sx = 1 if x0 < x1 else -1
        sz = 1 if z0 < z1 else -1
        err = dx - dz
        x, z = x0, z0
        pts: List[NavGridNode] = []
        while True:
            pts.append(NavGridNode(x, z))
            if x == x1 and z == z1:
                break
            e2 = 2 * err
            if e2 > -dz:
                err -= dz
                x += sx
            if e2 < dx:
                err += dx
                z += sz
        return pts

    def line_of_sight(self, a: NavGridNode, b: NavGridNode) -> bool:
        for p in self.bresenham_line(a, b):
            if not self.is_free(p):
                return False
        return True
