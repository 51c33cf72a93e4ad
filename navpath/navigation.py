from __future__ import annotations

import logging
import math
from enum import Enum, auto
from typing import List, Optional

from .astar import astar, octile_heuristic
from .config import NavigationConfig
from .grid_context import GridContext, GridDefinition, Vec2
from .grid_map import GridMap
from .nav_grid_node import NavGridNode
from .path_iterator import PathIterator

logger = logging.getLogger(__name__)


class NaivePath(Enum):
    OK = auto()
    CANNOT_COMPUTE = auto()


class Navigation:
    """
    World-space path queries over a GridMap.

    compute_path maps both positions onto grid cells, searches, smooths the
    reconstructed path and translates it back, ordered start -> end. The exact
    start and end positions replace their cells when the straight segment to
    the neighbouring waypoint is unobstructed.
    """
    def __init__(self, grid: GridMap, cfg: Optional[NavigationConfig] = None):
        self.cfg = cfg or NavigationConfig()
        self.grid = grid.inflate_obstacles(self.cfg.inflate_obstacles)
        self.context = GridContext(
            GridDefinition(
                cell_count_x=self.grid.spec.width,
                cell_count_z=self.grid.spec.depth,
                cell_distance=self.cfg.cell_distance,
            )
        )

    def node(self, position: Vec2) -> Optional[NavGridNode]:
        node = self.context.key_for(position)
        if node is None or not self.grid.is_free(node):
            return None
        return node

    def translation(self, node: NavGridNode) -> Vec2:
        return self.context.translation(node)

    def naive_path(self, origin: Vec2, to: NavGridNode) -> NaivePath:
        """
        Check the straight segment from a world position to a cell centre by
        sampling it at quarter-cell intervals.
        """
        target = self.translation(to)
        length = math.hypot(target[0] - origin[0], target[1] - origin[1])
        samples = max(1, int(math.ceil(length / (self.cfg.cell_distance / 4.0))))
        for i in range(samples + 1):
            t = i / samples
            p = (origin[0] + (target[0] - origin[0]) * t, origin[1] + (target[1] - origin[1]) * t)
            if self.node(p) is None:
                return NaivePath.CANNOT_COMPUTE
        return NaivePath.OK

    def compute_nodes(self, start_node: NavGridNode, end_node: NavGridNode) -> List[NavGridNode]:
        """Grid path from start_node to end_node, empty when unreachable."""
        result = astar(
            start=start_node,
            goal=end_node,
            neighbors_fn=self.grid.neighbors8,
            passable_fn=self.grid.is_free,
            heuristic_fn=octile_heuristic,
            max_expanded=self.cfg.max_expanded,
        )
        if result is None:
            logger.info("no path from %s to %s", start_node, end_node)
            return []

        path = PathIterator(result.closed_list, end_node, max_steps=self.cfg.max_walk_steps)
        if self.cfg.smooth:
            nodes = path.remove_redundant_nodes(self.grid.line_of_sight).collect_with_optimized_node_positions()
        else:
            nodes = list(path)

        # reconstruction runs end -> start, movement wants start -> end
        nodes.reverse()
        logger.info("path from %s to %s: %d waypoints, %d expanded", start_node, end_node, len(nodes), result.expanded)
        return nodes

    def compute_path(self, start: Vec2, end: Vec2) -> Optional[List[Vec2]]:
        start_node = self.node(start)
        end_node = self.node(end)
        if start_node is None or end_node is None:
            return None

        if start_node == end_node:
            return [start, end]

        nodes = self.compute_nodes(start_node, end_node)

        out: List[Vec2] = []
        for i, node in enumerate(nodes):
            if len(nodes) >= 2 and i == 0 and node == start_node:
                out.extend(self._replace_start(node, nodes[1], start))
            elif len(nodes) >= 2 and i == len(nodes) - 1 and node == end_node:
                out.extend(self._replace_end(node, nodes[-2], end))
            else:
                out.append(self.translation(node))
        return out

    def _replace_start(self, node: NavGridNode, next_node: NavGridNode, start: Vec2) -> List[Vec2]:
        if self.naive_path(start, next_node) == NaivePath.OK:
            return [start]
        return [self.translation(node)]

    def _replace_end(self, node: NavGridNode, previous: NavGridNode, end: Vec2) -> List[Vec2]:
        if self.naive_path(end, previous) == NaivePath.OK:
            return [end]
        return [self.translation(node)]
