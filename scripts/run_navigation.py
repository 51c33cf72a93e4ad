from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path as _Path
sys.path.append(str(_Path(__file__).resolve().parents[1]))
import json
from pathlib import Path

from navpath.config import NavigationConfig
from navpath.grid_map import GridMap
from navpath.logging_config import configure_logging
from navpath.nav_grid_node import NavGridNode
from navpath.navigation import Navigation
from navpath.scenarios import Scenario, make_rooms_scenario, make_random_scenario
from navpath import viz


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--outdir", type=str, default="outputs")
    ap.add_argument("--scenario", type=str, default="rooms", choices=["rooms", "random"])
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--map_image", type=str, default=None, help="binary map image, overrides --scenario")
    ap.add_argument("--start", type=int, nargs=2, default=None, metavar=("X", "Z"))
    ap.add_argument("--goal", type=int, nargs=2, default=None, metavar=("X", "Z"))
    ap.add_argument("--config", type=str, default=None, help="JSON file with NavigationConfig fields")
    ap.add_argument("--inflate", type=int, default=None)
    ap.add_argument("--no_smooth", action="store_true")
    ap.add_argument("--log_level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()

    configure_logging(getattr(logging, args.log_level))

    cfg = NavigationConfig.from_json(args.config) if args.config else NavigationConfig()
    if args.inflate is not None:
        cfg.inflate_obstacles = args.inflate
    if args.no_smooth:
        cfg.smooth = False

    if args.map_image:
        if args.start is None or args.goal is None:
            ap.error("--map_image requires --start and --goal")
        scenario = Scenario(
            name=Path(args.map_image).stem,
            grid=GridMap.from_binary_image(args.map_image),
            start=NavGridNode(*args.start),
            goal=NavGridNode(*args.goal),
        )
    elif args.scenario == "random":
        scenario = make_random_scenario(seed=args.seed)
    else:
        scenario = make_rooms_scenario()

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    raw_nav = Navigation(scenario.grid, NavigationConfig(**{**vars(cfg), "smooth": False}))
    nav = Navigation(scenario.grid, cfg)

    raw_path = raw_nav.compute_nodes(scenario.start, scenario.goal)
    smooth_path = nav.compute_nodes(scenario.start, scenario.goal)

    viz.plot_raw_vs_smooth(
        nav.grid,
        start=scenario.start,
        goal=scenario.goal,
        raw_path=raw_path,
        smooth_path=smooth_path,
        out_path=str(outdir / "fig01_raw_vs_smooth.png"),
    )

    world_path = nav.compute_path(nav.translation(scenario.start), nav.translation(scenario.goal))

    summary = {
        "scenario": scenario.name,
        "start": list(scenario.start.as_tuple()),
        "goal": list(scenario.goal.as_tuple()),
        "raw_path_len": len(raw_path),
        "smooth_path_len": len(smooth_path),
        "waypoints": [list(n.as_tuple()) for n in smooth_path],
        "world_path": [list(p) for p in world_path] if world_path is not None else None,
    }

    (outdir / "summary.json").write_text(json.dumps(summary, indent=2))
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
