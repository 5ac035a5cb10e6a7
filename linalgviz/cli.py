from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from linalgviz.config import ConfigError, StoreConfig, load_config
from linalgviz.geometry.core import Euler, as_euler, as_vector3
from linalgviz.logging_config import setup_logging
from linalgviz.ops.interaction import seed_example_scene
from linalgviz.ops.replay import load_script, replay_script
from linalgviz.scene.equations import format_equation
from linalgviz.scene.objects import ObjectKind
from linalgviz.scene.store import GeometricObjectStore


def _print_scene(store: GeometricObjectStore, as_json: bool) -> None:
    if as_json:
        print(json.dumps(store.to_dict(), indent=2, ensure_ascii=False))
        return
    selected = store.selected_id
    for obj in store.objects:
        marker = "*" if obj.id == selected else " "
        hidden = "" if obj.visible else " (hidden)"
        print(f"{marker} {obj.kind.value:<5} {obj.id}  {obj.equation}{hidden}")


def _cmd_demo(args: argparse.Namespace) -> int:
    store = GeometricObjectStore(seed=args.seed)
    seed_example_scene(store)
    _print_scene(store, bool(args.json))
    return 0


def _cmd_replay(args: argparse.Namespace) -> int:
    script_path = Path(args.script).expanduser().resolve()
    if not script_path.is_file():
        print(f"[ERROR] Script not found: {script_path}")
        return 2

    config = StoreConfig()
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ConfigError) as e:
            print(f"[ERROR] Invalid config: {e}")
            return 2

    try:
        steps = load_script(script_path)
    except ValueError as e:
        print(f"[ERROR] Invalid script: {e}")
        return 2

    store = GeometricObjectStore(config, seed=args.seed)
    res = replay_script(store, steps)
    _print_scene(store, bool(args.json))
    if not args.json:
        print(f"Applied {res.applied_steps} step(s), skipped {res.skipped_steps}")
    if args.strict and res.skipped_steps:
        return 3
    return 0


def _cmd_equation(args: argparse.Namespace) -> int:
    try:
        position = as_vector3(args.position)
        rotation = as_euler(args.rotation)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 2
    if args.degrees:
        rotation = Euler.from_degrees(*rotation.to_tuple())
    print(format_equation(ObjectKind(args.kind), position, rotation))
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="linalgviz")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--log-file", default=None, help="Also write logs to this file")
    sub = p.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo", help="Build the example line/plane scene and print its equations.")
    demo.add_argument("--seed", type=int, default=None, help="Seed for ids and colors")
    demo.add_argument("--json", action="store_true", help="Print the scene snapshot as JSON")
    demo.set_defaults(func=_cmd_demo)

    r = sub.add_parser("replay", help="Apply a JSON script of store operations and print the result.")
    r.add_argument("script", help="Path to a .json script")
    r.add_argument("--config", default=None, help="Store config JSON (placement and color policies)")
    r.add_argument("--seed", type=int, default=None, help="Seed for ids, colors and random placement")
    r.add_argument("--json", action="store_true", help="Print the scene snapshot as JSON")
    r.add_argument("--strict", action="store_true", help="Exit with code 3 if any step was skipped")
    r.set_defaults(func=_cmd_replay)

    e = sub.add_parser("equation", help="Format the equation of a single line or plane.")
    e.add_argument("kind", choices=[k.value for k in ObjectKind])
    e.add_argument("--position", nargs=3, type=float, default=[0.0, 0.0, 0.0], metavar=("X", "Y", "Z"))
    e.add_argument("--rotation", nargs=3, type=float, default=[0.0, 0.0, 0.0], metavar=("RX", "RY", "RZ"))
    e.add_argument("--degrees", action="store_true", help="Rotation is given in degrees (default radians)")
    e.set_defaults(func=_cmd_equation)

    args = p.parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
