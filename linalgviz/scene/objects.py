from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from linalgviz.geometry.core import Euler, Vector3


class ObjectKind(str, Enum):
    LINE = "line"
    PLANE = "plane"


# Reference vectors before rotation is applied.
LOCAL_LINE_DIRECTION = Vector3(1.0, 0.0, 0.0)
LOCAL_PLANE_NORMAL = Vector3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class MathObject:
    """A line or plane placed in the scene.

    Instances are immutable; the store replaces them wholesale on every
    mutation so a reader never sees a pose paired with a stale equation.
    """

    id: str
    kind: ObjectKind
    position: Vector3
    rotation: Euler
    color: str
    equation: str = ""
    visible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "position": list(self.position.to_tuple()),
            "rotation": list(self.rotation.to_tuple()),
            "color": self.color,
            "equation": self.equation,
            "visible": bool(self.visible),
        }


@dataclass(frozen=True)
class SceneSnapshot:
    objects: Tuple[MathObject, ...] = field(default_factory=tuple)
    selected_id: Optional[str] = None

    @property
    def selected(self) -> Optional[MathObject]:
        if self.selected_id is None:
            return None
        return next((o for o in self.objects if o.id == self.selected_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "objects": [o.to_dict() for o in self.objects],
            "selected_id": self.selected_id,
        }
