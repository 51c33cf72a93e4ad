"""
Tests for raw path reconstruction and greedy visibility reduction.

Closed lists are written out by hand; line of sight is either a lambda or a
small GridMap so every expected path can be checked on paper.
"""

from __future__ import annotations

import pytest

from navpath.closed_list import ClosedList
from navpath.nav_grid_node import NavGridNode
from navpath.path_iterator import PathCycleError, PathIterator

from tests.fakes.paths import AROUND_BLOCK, BLOCK_MAP, RecordingLos, always, chain, grid_adjacent


def N(x: int, z: int) -> NavGridNode:
    return NavGridNode(x, z)


def test_raw_path_runs_from_end_to_start() -> None:
    closed = chain((2, 2), (1, 1), (1, 0), (0, 0))

    path = list(PathIterator(closed, N(2, 2)))

    assert path == [N(2, 2), N(1, 1), N(1, 0), N(0, 0)]
    assert path[0] == N(2, 2)
    assert path[-1] == closed.start
    for a, b in zip(path, path[1:]):
        assert closed.parent(a) == b


def test_raw_path_stops_at_start_even_if_start_has_parent() -> None:
    closed = ClosedList(start=N(0, 0), parents={N(1, 0): N(0, 0), N(0, 0): N(5, 5)})

    assert list(PathIterator(closed, N(1, 0))) == [N(1, 0), N(0, 0)]


def test_raw_path_from_start_is_single_node() -> None:
    closed = chain((1, 0), (0, 0))

    assert list(PathIterator(closed, N(0, 0))) == [N(0, 0)]


def test_raw_path_is_one_shot_but_copyable() -> None:
    it = PathIterator(chain((2, 0), (1, 0), (0, 0)), N(2, 0))
    fresh = it.copy()

    assert list(it) == [N(2, 0), N(1, 0), N(0, 0)]
    assert list(it) == []
    assert list(fresh) == [N(2, 0), N(1, 0), N(0, 0)]


def test_parent_cycle_raises_instead_of_hanging() -> None:
    closed = ClosedList(start=N(0, 0), parents={N(1, 0): N(2, 0), N(2, 0): N(1, 0)})

    with pytest.raises(PathCycleError):
        list(PathIterator(closed, N(1, 0)))

    with pytest.raises(PathCycleError):
        list(PathIterator(closed, N(1, 0)).remove_redundant_nodes(always))


def test_explicit_step_budget() -> None:
    closed = chain((3, 0), (2, 0), (1, 0), (0, 0))

    with pytest.raises(PathCycleError):
        list(PathIterator(closed, N(3, 0), max_steps=2))


def test_open_field_collapses_to_endpoints() -> None:
    closed = chain((2, 2), (1, 1), (1, 0), (0, 0))

    reduced = list(PathIterator(closed, N(2, 2)).remove_redundant_nodes(always))

    assert reduced == [N(2, 2), N(0, 0)]


def test_no_shortcuts_keeps_raw_path() -> None:
    closed = chain((4, 0), (3, 0), (2, 0), (1, 0), (0, 0))

    raw = list(PathIterator(closed, N(4, 0)))
    reduced = list(PathIterator(closed, N(4, 0)).remove_redundant_nodes(grid_adjacent))

    assert reduced == raw


def test_no_shortcuts_along_chain_keeps_staircase() -> None:
    closed = chain((2, 2), (2, 1), (1, 1), (1, 0), (0, 0))

    def chain_adjacent(a: NavGridNode, b: NavGridNode) -> bool:
        return closed.parent(a) == b or closed.parent(b) == a

    raw = list(PathIterator(closed, N(2, 2)))
    reduced = list(PathIterator(closed, N(2, 2)).remove_redundant_nodes(chain_adjacent))

    assert reduced == raw


def test_reduction_around_block() -> None:
    it = PathIterator(AROUND_BLOCK, N(4, 4))
    raw = list(it.copy())

    reduced = list(it.remove_redundant_nodes(BLOCK_MAP.line_of_sight))

    assert reduced == [N(4, 4), N(4, 0), N(0, 0)]
    assert len(reduced) <= len(raw)


def test_reduction_jumps_past_blocked_ancestors() -> None:
    # (1, 0) is hidden from (3, 0) but (0, 0) is visible again
    closed = chain((3, 0), (2, 0), (1, 0), (0, 0))

    def los(a: NavGridNode, b: NavGridNode) -> bool:
        return not (a == N(3, 0) and b == N(1, 0))

    reduced = list(PathIterator(closed, N(3, 0)).remove_redundant_nodes(los))

    assert reduced == [N(3, 0), N(0, 0)]


def test_reduction_line_of_sight_calls_are_linear_per_item() -> None:
    closed = chain((4, 0), (3, 0), (2, 0), (1, 0), (0, 0))
    los = RecordingLos(grid_adjacent)

    list(PathIterator(closed, N(4, 0)).remove_redundant_nodes(los))

    # (4,0) checks 3 ancestors beyond its parent, (3,0) checks 2, (2,0) checks 1
    assert len(los.calls) == 6
    assert los.calls[0] == (N(4, 0), N(2, 0))


def test_line_of_sight_errors_propagate() -> None:
    def broken(a: NavGridNode, b: NavGridNode) -> bool:
        raise KeyError("raycast failed")

    closed = chain((2, 0), (1, 0), (0, 0))

    with pytest.raises(KeyError):
        list(PathIterator(closed, N(2, 0)).remove_redundant_nodes(broken))
