from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import numpy as np
import random

from .grid_map import GridMap
from .nav_grid_node import NavGridNode


@dataclass
class Scenario:
    name: str
    grid: GridMap
    start: NavGridNode
    goal: NavGridNode


def _add_border_walls(occ: np.ndarray) -> None:
    occ[0, :] = 1
    occ[-1, :] = 1
    occ[:, 0] = 1
    occ[:, -1] = 1


def make_rooms_scenario(width: int = 40, depth: int = 30) -> Scenario:
    """
    Two rooms joined by a doorway, plus a pillar block in the second room.
    Start and goal sit in opposite corners so the raw path has several bends.
    """
    occ = np.zeros((depth, width), dtype=np.uint8)
    _add_border_walls(occ)

    x_wall = width // 2
    occ[:, x_wall] = 1
    # doorway
    door_z0 = depth // 2 - 2
    occ[door_z0:door_z0+4, x_wall] = 0

    # pillar in the second room
    occ[depth//2 + 3:depth//2 + 8, x_wall+6:x_wall+10] = 1

    grid = GridMap(occ)
    start = NavGridNode(3, 3)
    goal = NavGridNode(width - 4, depth - 4)
    return Scenario(name="rooms", grid=grid, start=start, goal=goal)


def make_random_scenario(width: int = 40, depth: int = 40, obstacle_prob: float = 0.2, seed: Optional[int] = None) -> Scenario:
    rng = random.Random(seed)
    occ = np.zeros((depth, width), dtype=np.uint8)
    _add_border_walls(occ)
    for z in range(1, depth-1):
        for x in range(1, width-1):
            if rng.random() < obstacle_prob:
                occ[z, x] = 1

    free = np.argwhere(occ == 0)
    if len(free) < 2:
        raise ValueError("not enough free cells in generated map")
    a, b = rng.sample(range(len(free)), 2)
    start = NavGridNode(int(free[a][1]), int(free[a][0]))
    goal = NavGridNode(int(free[b][1]), int(free[b][0]))
    grid = GridMap(occ)
    return Scenario(name=f"random_seed_{seed}", grid=grid, start=start, goal=goal)
