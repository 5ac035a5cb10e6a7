from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List

from linalgviz.ops.interaction import delete_selected, seed_example_scene, toggle_selected_visibility
from linalgviz.scene.store import GeometricObjectStore

logger = logging.getLogger(__name__)

_TARGETED_OPS = (
    "remove_object",
    "update_object_position",
    "update_object_rotation",
    "update_equation",
    "select_object",
    "toggle_visibility",
)


@dataclass(frozen=True)
class ReplayResult:
    applied_steps: int
    skipped_steps: int
    aliases: Dict[str, str] = field(default_factory=dict)


def load_script(path: str | Path) -> List[Dict[str, Any]]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("steps", [])
    if not isinstance(data, list):
        raise ValueError("replay script must be a JSON list of steps or an object with 'steps'")
    return data


def replay_script(store: GeometricObjectStore, steps: Iterable[Any]) -> ReplayResult:
    aliases: Dict[str, str] = {}
    applied = 0
    skipped = 0
    for index, step in enumerate(steps):
        if not isinstance(step, dict):
            logger.warning("Step %d skipped: not an object", index)
            skipped += 1
            continue
        op = str(step.get("op", ""))
        try:
            ok = _apply_step(store, op, step, aliases)
        except (TypeError, ValueError) as e:
            logger.warning("Step %d (%s) skipped: %s", index, op, e)
            ok = False
        if ok:
            applied += 1
        else:
            skipped += 1
    return ReplayResult(applied_steps=applied, skipped_steps=skipped, aliases=dict(aliases))


def _apply_step(store: GeometricObjectStore, op: str, step: Dict[str, Any], aliases: Dict[str, str]) -> bool:
    if op in ("add_line", "add_plane"):
        add = store.add_line if op == "add_line" else store.add_plane
        object_id = add(step.get("position"), step.get("rotation"))
        alias = step.get("as")
        if alias:
            aliases[str(alias)] = object_id
        return True

    if op in _TARGETED_OPS:
        raw = step.get("id")
        if op == "select_object" and raw is None:
            store.select_object(None)
            return True
        if raw is None:
            raise ValueError("missing 'id'")
        object_id = aliases.get(str(raw), str(raw))
        if op == "remove_object":
            store.remove_object(object_id)
        elif op == "update_object_position":
            store.update_object_position(object_id, _required(step, "position"))
        elif op == "update_object_rotation":
            store.update_object_rotation(object_id, _required(step, "rotation"))
        elif op == "update_equation":
            store.update_equation(object_id)
        elif op == "select_object":
            store.select_object(object_id)
        else:
            store.toggle_visibility(object_id)
        return True

    if op == "delete_selected":
        delete_selected(store)
        return True
    if op == "toggle_selected_visibility":
        toggle_selected_visibility(store)
        return True
    if op == "seed_example_scene":
        seed_example_scene(store)
        return True
    if op == "clear":
        store.clear()
        return True

    logger.warning("Unknown replay op: %r", op)
    return False


def _required(step: Dict[str, Any], key: str) -> Any:
    if step.get(key) is None:
        raise ValueError(f"missing '{key}'")
    return step[key]
