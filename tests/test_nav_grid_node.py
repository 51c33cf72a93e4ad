from __future__ import annotations

import pytest

from navpath.nav_grid_node import Direction, NavGridNode


def test_add_and_subtract_direction() -> None:
    node = NavGridNode(2, 3)

    assert node + Direction.NE == NavGridNode(3, 4)
    assert node - Direction.N == NavGridNode(2, 2)


def test_difference_of_nodes_is_relative_vector() -> None:
    assert NavGridNode(5, 1) - NavGridNode(2, 4) == NavGridNode(3, -3)
    assert NavGridNode(1, 1) + NavGridNode(-1, 2) == NavGridNode(0, 3)


def test_adding_unrelated_type_raises() -> None:
    with pytest.raises(TypeError):
        NavGridNode(0, 0) + 1  # type: ignore[operator]


def test_direction_to_each_neighbor() -> None:
    origin = NavGridNode(0, 0)
    for direction in Direction:
        assert origin.eight_sided_direction_to(origin + direction) == direction


def test_direction_discards_magnitude() -> None:
    origin = NavGridNode(0, 0)

    assert origin.eight_sided_direction_to(NavGridNode(5, -3)) == Direction.SE
    assert origin.eight_sided_direction_to(NavGridNode(0, 7)) == Direction.N
    assert origin.eight_sided_direction_to(NavGridNode(-4, 0)) == Direction.W


def test_direction_to_self_is_undefined() -> None:
    assert NavGridNode(3, 3).eight_sided_direction_to(NavGridNode(3, 3)) is None


def test_diagonal_and_straight_partition_directions() -> None:
    diagonal = {d for d in Direction if d.is_diagonal()}
    straight = {d for d in Direction if d.is_straight()}

    assert diagonal == {Direction.NE, Direction.SE, Direction.SW, Direction.NW}
    assert straight == {Direction.N, Direction.E, Direction.S, Direction.W}
    assert diagonal.isdisjoint(straight)


def test_right_angle_len_of_difference() -> None:
    assert (NavGridNode(-2, -2) - NavGridNode(0, 2)).right_angle_len() == 6
    assert (NavGridNode(1, 1) - NavGridNode(1, 1)).right_angle_len() == 0


def test_nodes_are_hashable_values() -> None:
    parents = {NavGridNode(1, 0): NavGridNode(0, 0)}

    assert parents[NavGridNode(1, 0)] == NavGridNode(0, 0)
    assert NavGridNode(4, 2).as_tuple() == (4, 2)
