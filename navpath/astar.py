from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple, Callable
import math

from .closed_list import ClosedList
from .nav_grid_node import NavGridNode


@dataclass
class AStarResult:
    closed_list: ClosedList
    goal: NavGridNode
    cost: float
    expanded: int


def astar(
    start: NavGridNode,
    goal: NavGridNode,
    neighbors_fn: Callable[[NavGridNode], List[NavGridNode]],
    passable_fn: Callable[[NavGridNode], bool],
    heuristic_fn: Callable[[NavGridNode, NavGridNode], float],
    max_expanded: Optional[int] = None,
) -> Optional[AStarResult]:
    """
    A* on an implicit 8-connected graph.

    Returns the closed list rooted at start, or None when goal is unreachable
    (or max_expanded nodes were expanded without reaching it). Path
    reconstruction is left to PathIterator.
    """
    if start == goal:
        return AStarResult(closed_list=ClosedList(start=start), goal=goal, cost=0.0, expanded=0)

    open_heap: List[Tuple[float, int, NavGridNode]] = []
    counter = 0

    g: Dict[NavGridNode, float] = {start: 0.0}
    came_from: Dict[NavGridNode, NavGridNode] = {}

    f0 = heuristic_fn(start, goal)
    heapq.heappush(open_heap, (f0, counter, start))

    closed: Set[NavGridNode] = set()
    expanded = 0

    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current in closed:
            continue
        closed.add(current)
        expanded += 1

        if current == goal:
            return AStarResult(
                closed_list=ClosedList(start=start, parents=came_from),
                goal=goal,
                cost=g[current],
                expanded=expanded,
            )

        if max_expanded is not None and expanded >= max_expanded:
            return None

        for nb in neighbors_fn(current):
            if not passable_fn(nb):
                continue
            tentative = g[current] + step_cost(current, nb)
            if nb not in g or tentative < g[nb]:
                g[nb] = tentative
                came_from[nb] = current
                counter += 1
                f = tentative + heuristic_fn(nb, goal)
                heapq.heappush(open_heap, (f, counter, nb))

    return None


def step_cost(a: NavGridNode, b: NavGridNode) -> float:
    return math.hypot(b.x - a.x, b.z - a.z)


def octile_heuristic(a: NavGridNode, b: NavGridNode) -> float:
    dx = abs(b.x - a.x)
    dz = abs(b.z - a.z)
    return max(dx, dz) + (math.sqrt(2) - 1) * min(dx, dz)
