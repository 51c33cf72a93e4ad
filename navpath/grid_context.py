from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
import math

from .nav_grid_node import NavGridNode

Vec2 = Tuple[float, float]  # world (x, z)


class GridDefinitionError(ValueError):
    pass


@dataclass(frozen=True)
class GridDefinition:
    cell_count_x: int
    cell_count_z: int
    cell_distance: float


class GridContext:
    """
    Maps world positions to grid cells and back.

    The grid is centred on the world origin: cell (0, 0) sits at grid_min and
    neighbouring cells are cell_distance apart.
    """
    def __init__(self, definition: GridDefinition):
        if definition.cell_count_x <= 0 or definition.cell_count_z <= 0:
            raise GridDefinitionError("cell count must be greater than zero")
        d = definition.cell_distance
        if math.isnan(d):
            raise GridDefinitionError("cell distance is NaN")
        if math.isinf(d):
            raise GridDefinitionError("cell distance is infinite")
        if d == 0:
            raise GridDefinitionError("cell distance is zero")
        if d < 0:
            raise GridDefinitionError("cell distance is negative")
        self.definition = definition

    def grid_min(self) -> Vec2:
        d = self.definition
        x = ((d.cell_count_x - 1) * d.cell_distance) / 2.0
        z = ((d.cell_count_z - 1) * d.cell_distance) / 2.0
        return (-x, -z)

    def key_for(self, position: Vec2) -> Optional[NavGridNode]:
        d = self.definition
        min_x, min_z = self.grid_min()
        x = _round_half_away((position[0] - min_x) / d.cell_distance)
        z = _round_half_away((position[1] - min_z) / d.cell_distance)
        if x < 0 or z < 0 or x >= d.cell_count_x or z >= d.cell_count_z:
            return None
        return NavGridNode(int(x), int(z))

    def translation(self, node: NavGridNode) -> Vec2:
        d = self.definition
        min_x, min_z = self.grid_min()
        return (min_x + node.x * d.cell_distance, min_z + node.z * d.cell_distance)


def _round_half_away(v: float) -> int:
    # builtin round() rounds halves to even
    return int(math.copysign(math.floor(abs(v) + 0.5), v))
