from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class NavigationConfig:
    cell_distance: float = 1.0
    inflate_obstacles: int = 0  # inflate map obstacles by this many cells
    max_expanded: Optional[int] = None  # cap on A* expansions, None means unbounded
    max_walk_steps: Optional[int] = None  # path walk budget, None derives it from the closed list
    smooth: bool = True  # False returns the raw grid path

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "NavigationConfig":
        known = {f.name for f in fields(NavigationConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown navigation config keys: {', '.join(unknown)}")
        cfg = NavigationConfig(**data)
        if cfg.inflate_obstacles < 0:
            raise ValueError("inflate_obstacles must not be negative")
        return cfg

    @staticmethod
    def from_json(path: str) -> "NavigationConfig":
        return NavigationConfig.from_dict(json.loads(Path(path).read_text()))
