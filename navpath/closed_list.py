from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from .nav_grid_node import NavGridNode


@dataclass
class ClosedList:
    """
    Parent pointers left behind by a finished search, rooted at `start`.

    Following parents from any node in the list must reach `start` without cycles.
    The list is not mutated after the search hands it over.
    """
    start: NavGridNode
    parents: Dict[NavGridNode, NavGridNode] = field(default_factory=dict)

    def parent(self, node: NavGridNode) -> Optional[NavGridNode]:
        return self.parents.get(node)

    def __len__(self) -> int:
        return len(self.parents)

    def __contains__(self, node: object) -> bool:
        return node == self.start or node in self.parents

    @staticmethod
    def from_came_from(start: Tuple[int, int], came_from: Mapping[Tuple[int, int], Tuple[int, int]]) -> "ClosedList":
        """Build from a plain `came_from` map of (x, z) tuples, as classic A* produces it."""
        parents = {NavGridNode(*child): NavGridNode(*parent) for child, parent in came_from.items()}
        return ClosedList(start=NavGridNode(*start), parents=parents)
