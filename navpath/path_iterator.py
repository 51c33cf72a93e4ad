from __future__ import annotations

import copy
import logging
from typing import Callable, Iterator, List, Optional, TypeVar, Union, overload

from .closed_list import ClosedList
from .nav_grid_node import Direction, NavGridNode

logger = logging.getLogger(__name__)

LineOfSight = Callable[[NavGridNode, NavGridNode], bool]
TResult = TypeVar("TResult")


class PathCycleError(RuntimeError):
    """Raised when walking a closed list takes more steps than a well-formed one can."""


class PathIterator:
    """
    Lazy walk from `end` back to the closed list's `start`, both inclusive.

    The walk is one-shot; use `copy()` before consuming it to get an
    independent traversal over the same closed list.

    `max_steps` bounds the walk so a parent cycle that never reaches `start`
    raises PathCycleError instead of hanging. It defaults to the number of
    parent entries plus one, which no acyclic chain can exceed.
    """
    def __init__(self, closed_list: ClosedList, end: NavGridNode, max_steps: Optional[int] = None):
        self.closed_list = closed_list
        self.next_node: Optional[NavGridNode] = end
        self.max_steps = max_steps if max_steps is not None else len(closed_list) + 1
        self._steps = 0

    def parent(self, node: NavGridNode) -> Optional[NavGridNode]:
        # start may still resolve a parent in some closed lists, the walk ends there anyway
        if node == self.closed_list.start:
            return None
        return self.closed_list.parent(node)

    def ancestors(self, node: NavGridNode) -> Iterator[NavGridNode]:
        """Yield every parent of node, up to and including start."""
        steps = 0
        parent = self.parent(node)
        while parent is not None:
            steps += 1
            if steps > self.max_steps:
                raise PathCycleError(f"no path from {node} back to start {self.closed_list.start} within {self.max_steps} steps")
            yield parent
            parent = self.parent(parent)

    def copy(self) -> "PathIterator":
        return copy.copy(self)

    def remove_redundant_nodes(self, line_of_sight: LineOfSight) -> "CleanedPathIterator":
        return CleanedPathIterator(self, line_of_sight)

    def _advance(self) -> NavGridNode:
        current = self.next_node
        if current is None:
            raise StopIteration
        self._steps += 1
        if self._steps > self.max_steps:
            raise PathCycleError(f"path did not reach start {self.closed_list.start} within {self.max_steps} steps")
        return current

    def __iter__(self) -> "PathIterator":
        return self

    def __next__(self) -> NavGridNode:
        current = self._advance()
        self.next_node = self.parent(current)
        return current


class CleanedPathIterator:
    """
    Greedy any-angle reduction of a raw path.

    Each step emits the current node and jumps to the farthest ancestor on the
    raw chain that is still visible from it. Order stays end -> start.
    """
    def __init__(self, iterator: PathIterator, line_of_sight: LineOfSight):
        self.iterator = iterator
        self.los = line_of_sight

    def copy(self) -> "CleanedPathIterator":
        return CleanedPathIterator(self.iterator.copy(), self.los)

    def __iter__(self) -> "CleanedPathIterator":
        return self

    def __next__(self) -> NavGridNode:
        current = self.iterator._advance()

        explored = self.iterator.parent(current)
        if explored is None:
            self.iterator.next_node = None
            return current

        last_visible = explored
        for ancestor in self.iterator.ancestors(explored):
            if self.los(current, ancestor):
                last_visible = ancestor

        self.iterator.next_node = last_visible
        return current

    @overload
    def collect_with_optimized_node_positions(self, convert: None = None) -> List[NavGridNode]: ...

    @overload
    def collect_with_optimized_node_positions(self, convert: Callable[[NavGridNode], TResult]) -> List[TResult]: ...

    def collect_with_optimized_node_positions(
        self,
        convert: Optional[Callable[[NavGridNode], TResult]] = None,
    ) -> Union[List[NavGridNode], List[TResult]]:
        """
        Materialize the reduced path and smooth it in two passes:

        1. pull every interior node as close to each neighbor as visibility allows
        2. replace single "L" corners (one straight and one diagonal leg) with a
           two-point diagonal cut

        The first and last nodes are never moved. Each resulting node is passed
        through `convert` when given.
        """
        los = self.los
        first_pass = list(self)

        second_pass: List[NavGridNode] = []
        for i, node in enumerate(first_pass):
            if i == 0 or i == len(first_pass) - 1:
                second_pass.append(node)
                continue
            last = first_pass[i - 1]
            nxt = first_pass[i + 1]
            node = _try_move_closer_to(node, last, nxt, los)
            node = _try_move_closer_to(node, nxt, last, los)
            second_pass.append(node)

        third_pass: List[NavGridNode] = []
        for i, node in enumerate(second_pass):
            if i == 0 or i == len(second_pass) - 1:
                third_pass.append(node)
                continue
            third_pass.extend(_try_override_nodes(los, node, second_pass[i - 1], second_pass[i + 1]))

        logger.debug("reduced path to %d nodes, %d waypoints after smoothing", len(first_pass), len(third_pass))

        if convert is None:
            return third_pass
        return [convert(node) for node in third_pass]


def _walk(origin: NavGridNode, direction: Direction, target: NavGridNode) -> Iterator[NavGridNode]:
    """
    Cells origin + direction, origin + 2 * direction, ... toward target.

    Stops before reaching target, or before passing it on either axis when
    target is not on a straight or diagonal line from origin.
    """
    cell = origin + direction
    while cell != target and not _overshoots(cell, direction, target):
        yield cell
        cell = cell + direction


def _overshoots(cell: NavGridNode, direction: Direction, target: NavGridNode) -> bool:
    return (target.x - cell.x) * direction.dx < 0 or (target.z - cell.z) * direction.dz < 0


def _try_move_closer_to(
    node: NavGridNode,
    target: NavGridNode,
    other_los_node: NavGridNode,
    los: LineOfSight,
) -> NavGridNode:
    direction = node.eight_sided_direction_to(target)
    if direction is None:
        return node

    for moved in _walk(node, direction, target):
        if not los(moved, target):
            break
        if not los(moved, other_los_node):
            break
        node = moved

    return node


def _try_override_nodes(
    los: LineOfSight,
    node: NavGridNode,
    last: NavGridNode,
    next_node: NavGridNode,
) -> List[NavGridNode]:
    dir_last = node.eight_sided_direction_to(last)
    if dir_last is None:
        return [node]
    dir_next = node.eight_sided_direction_to(next_node)
    if dir_next is None:
        return [node]
    if dir_last.is_diagonal() and dir_next.is_diagonal():
        return [node]
    if dir_last.is_straight() and dir_next.is_straight():
        return [node]

    best = (node, node)
    best_len = 0
    for to_last in _walk(node, dir_last, last):
        # greedy: the first pair that is blocked or no wider ends the search along dir_next
        for to_next in _walk(node, dir_next, next_node):
            if not los(to_last, to_next):
                break
            separation = (to_last - to_next).right_angle_len()
            if separation <= best_len:
                break
            best, best_len = (to_last, to_next), separation

    if best != (node, node):
        return [best[0], best[1]]
    return [node]


def smooth_path(
    closed_list: ClosedList,
    end: NavGridNode,
    line_of_sight: LineOfSight,
    convert: Optional[Callable[[NavGridNode], TResult]] = None,
    max_steps: Optional[int] = None,
) -> Union[List[NavGridNode], List[TResult]]:
    """Reconstruct, reduce and smooth the path to `end`, ordered end -> start."""
    cleaned = PathIterator(closed_list, end, max_steps=max_steps).remove_redundant_nodes(line_of_sight)
    if convert is None:
        return cleaned.collect_with_optimized_node_positions()
    return cleaned.collect_with_optimized_node_positions(convert)
