from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Literal, Optional

from linalgviz.geometry.core import Euler, Vector3, as_vector3
from linalgviz.scene.store import GeometricObjectStore

logger = logging.getLogger(__name__)

DragMode = Literal["move", "rotate"]

# Radians of rotation per unit of controller travel.
ROTATE_GAIN = 2.0

EXAMPLE_LINE_POSITION = (0.0, 0.0, 0.0)
EXAMPLE_PLANE_POSITION = (0.0, 0.5, 0.0)
EXAMPLE_PLANE_ROTATION = (math.pi / 4.0, 0.0, 0.0)


def delete_selected(store: GeometricObjectStore) -> bool:
    selected = store.selected_object()
    if selected is None:
        return False
    store.remove_object(selected.id)
    return True


def toggle_selected_visibility(store: GeometricObjectStore) -> bool:
    selected = store.selected_object()
    if selected is None:
        return False
    store.toggle_visibility(selected.id)
    return True


def seed_example_scene(store: GeometricObjectStore) -> List[str]:
    if len(store) > 0:
        return []
    line_id = store.add_line(EXAMPLE_LINE_POSITION, Euler.zero())
    plane_id = store.add_plane(EXAMPLE_PLANE_POSITION, EXAMPLE_PLANE_ROTATION)
    logger.info("Seeded example scene with line %s and plane %s", line_id, plane_id)
    return [line_id, plane_id]


@dataclass(frozen=True)
class DragSession:
    """Pose captured when a controller grab starts on the selected object."""

    object_id: str
    mode: DragMode
    start_controller: Vector3
    start_position: Vector3
    start_rotation: Euler

    def update(self, store: GeometricObjectStore, controller_position: Any) -> None:
        delta = as_vector3(controller_position) - self.start_controller
        if self.mode == "move":
            store.update_object_position(self.object_id, self.start_position + delta)
        else:
            r = self.start_rotation
            store.update_object_rotation(
                self.object_id,
                Euler(r.x + delta.y * ROTATE_GAIN, r.y + delta.x * ROTATE_GAIN, r.z),
            )


def begin_drag(
    store: GeometricObjectStore,
    controller_position: Any,
    mode: DragMode = "move",
) -> Optional[DragSession]:
    if mode not in ("move", "rotate"):
        raise ValueError(f"Unsupported drag mode: {mode}")
    selected = store.selected_object()
    if selected is None:
        return None
    return DragSession(
        object_id=selected.id,
        mode=mode,
        start_controller=as_vector3(controller_position),
        start_position=selected.position,
        start_rotation=selected.rotation,
    )
