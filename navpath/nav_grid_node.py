from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Direction(Enum):
    """
    The eight unit steps on the grid, as (dx, dz).

    Conventions:
    - North is +z, East is +x
    """
    N = (0, 1)
    NE = (1, 1)
    E = (1, 0)
    SE = (1, -1)
    S = (0, -1)
    SW = (-1, -1)
    W = (-1, 0)
    NW = (-1, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dz(self) -> int:
        return self.value[1]

    def is_diagonal(self) -> bool:
        return self.dx != 0 and self.dz != 0

    def is_straight(self) -> bool:
        return not self.is_diagonal()


_BY_OFFSET = {d.value: d for d in Direction}


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


@dataclass(frozen=True)
class NavGridNode:
    x: int
    z: int

    def __add__(self, other: Union["NavGridNode", Direction]) -> "NavGridNode":
        if not isinstance(other, (NavGridNode, Direction)):
            return NotImplemented
        dx, dz = _offset(other)
        return NavGridNode(self.x + dx, self.z + dz)

    def __sub__(self, other: Union["NavGridNode", Direction]) -> "NavGridNode":
        if not isinstance(other, (NavGridNode, Direction)):
            return NotImplemented
        dx, dz = _offset(other)
        return NavGridNode(self.x - dx, self.z - dz)

    def eight_sided_direction_to(self, target: "NavGridNode") -> Optional[Direction]:
        """
        Direction of the single step from self toward target, or None if both are equal.
        Only the sign of each axis difference counts.
        """
        offset = (_sign(target.x - self.x), _sign(target.z - self.z))
        return _BY_OFFSET.get(offset)

    def right_angle_len(self) -> int:
        """|x| + |z|, meant to be called on the difference of two nodes."""
        return abs(self.x) + abs(self.z)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.z)


def _offset(other: Union[NavGridNode, Direction]) -> Tuple[int, int]:
    if isinstance(other, Direction):
        return other.value
    return other.x, other.z
