# robopath/app/cli.py
import argparse
import json
import sys

from pydantic import ValidationError

from robopath.app.build import build, plan
from robopath.io.config import load_scenario
from robopath.domain.errors import PlanningError
from robopath.io.world_files import WorldFormatError, write_commands

EXIT_OK, EXIT_PLANNING, EXIT_INPUT = 0, 1, 2


def _parse_args(argv=None):
    ap = argparse.ArgumentParser(
        prog="robopath",
        description="Plan a visibility-graph path and write turn/distance commands.",
    )
    ap.add_argument("world", help="world file: boundary polygon followed by obstacles")
    ap.add_argument("start_goal", help="start/goal file: two 'x y' lines")
    ap.add_argument("-o", "--output", default="robot_path.txt", help="command file to write")
    ap.add_argument("--config", default=None, help="scenario JSON (world section is replaced)")
    ap.add_argument("--safe", action="store_true", default=None, help="grow obstacles twice")
    ap.add_argument("--diameter", type=float, default=None, help="robot diameter (meters)")
    ap.add_argument("--search", choices=["dijkstra", "astar"], default=None)
    ap.add_argument("--builder", choices=["pairwise", "vectorized"], default=None)
    ap.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None)
    return ap.parse_args(argv)


def _scenario(args) -> dict:
    cfg: dict = {}
    if args.config:
        with open(args.config, encoding="utf-8") as fp:
            cfg = json.load(fp)
    cfg["world"] = {"by": "files", "world_file": args.world, "start_goal_file": args.start_goal}
    if args.safe is not None:
        cfg.setdefault("growth", {})["safe"] = args.safe
    if args.diameter is not None:
        cfg.setdefault("robot", {})["diameter"] = args.diameter
    if args.search is not None:
        cfg["search"] = {**cfg.get("search", {}), "kind": args.search}
    if args.builder is not None:
        cfg["graph_builder"] = {**cfg.get("graph_builder", {}), "kind": args.builder}
    if args.log_level is not None:
        cfg.setdefault("log", {})["level"] = args.log_level
    return cfg


def main(argv=None) -> int:
    args = _parse_args(argv)
    try:
        app = build(load_scenario(_scenario(args)))
    except (OSError, ValueError, ValidationError, WorldFormatError) as exc:
        print(f"robopath: {exc}", file=sys.stderr)
        return EXIT_INPUT

    try:
        result = plan(app)
    except PlanningError as exc:
        print(f"robopath: planning failed: {exc}", file=sys.stderr)
        return EXIT_PLANNING

    try:
        write_commands(args.output, result.commands)
    except OSError as exc:
        print(f"robopath: cannot write {args.output}: {exc}", file=sys.stderr)
        return EXIT_INPUT

    print(
        f"wrote {len(result.commands)} commands ({result.path.length:.3f} m) to {args.output}",
        file=sys.stderr,
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
