"""
Geometric Object Store
======================
Single source of truth for the lines and planes in a scene and for the
current selection.

The store is constructed explicitly and handed to whatever drives it (an
interaction layer, the replay runner, the CLI). It is the only writer of
object state:

* every mutation runs under the store lock, so a reader never observes a
  half-applied change;
* stored objects are frozen and are replaced wholesale, with the equation
  recomputed before the replacement is published;
* an id that is not in the collection turns any mutator into a no-op.

A store built with a seed (or an explicit generator) is reproducible: two
stores with the same seed issue the same ids, colors and random poses, so
ids are unique only within one store. Without a seed, ids come from
``uuid.uuid4()``.

Example:
    store = GeometricObjectStore(seed=7)
    line_id = store.add_line((0, 0, 0))
    store.update_object_rotation(line_id, Euler.from_degrees(0, 0, 90))
    store.get_object(line_id).equation
    # 'x = (0.0, 0.0, 0.0) + t·(0.0, 1.0, 0.0)'
"""
from __future__ import annotations

import logging
import math
import threading
from dataclasses import replace
from typing import Any, Dict, Iterator, Optional, Set, Tuple

import numpy as np

from linalgviz.config import StoreConfig
from linalgviz.geometry.core import Euler, Vector3, as_euler, as_vector3
from linalgviz.scene.equations import format_equation
from linalgviz.scene.identity import new_object_id, random_hsl_color
from linalgviz.scene.objects import MathObject, ObjectKind, SceneSnapshot

logger = logging.getLogger(__name__)


class ObjectNotFoundError(KeyError):
    pass


class GeometricObjectStore:
    """Ordered collection of MathObjects plus the selected id."""

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or StoreConfig()
        if seed is None:
            seed = self.config.seed
        reproducible = rng is not None or seed is not None
        if rng is None:
            rng = np.random.default_rng(seed)
        self._rng = rng
        # Unseeded stores take ids from uuid4 instead of the generator.
        self._id_rng: Optional[np.random.Generator] = rng if reproducible else None
        self._objects: Dict[str, MathObject] = {}
        self._selected_id: Optional[str] = None
        self._issued_ids: Set[str] = set()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def add_line(self, position: Any = None, rotation: Any = None) -> str:
        return self._add(ObjectKind.LINE, position, rotation)

    def add_plane(self, position: Any = None, rotation: Any = None) -> str:
        return self._add(ObjectKind.PLANE, position, rotation)

    def _add(self, kind: ObjectKind, position: Any, rotation: Any) -> str:
        pos_in = None if position is None else as_vector3(position)
        rot_in = None if rotation is None else as_euler(rotation)
        with self._lock:
            pos, rot = self._resolve_pose(pos_in, rot_in)
            object_id = self._fresh_id()
            obj = MathObject(
                id=object_id,
                kind=kind,
                position=pos,
                rotation=rot,
                color=random_hsl_color(self._rng, self.config.color),
                equation=format_equation(kind, pos, rot),
            )
            self._objects[object_id] = obj
            self._selected_id = object_id
        logger.debug("Added %s %s at %s", kind.value, object_id, pos.to_tuple())
        return object_id

    def _resolve_pose(self, position: Optional[Vector3], rotation: Optional[Euler]) -> Tuple[Vector3, Euler]:
        placement = self.config.placement
        if position is None:
            base = np.array(placement.default_position, dtype=float)
            if placement.mode == "random":
                extent = float(placement.random_extent)
                base = base + self._rng.uniform(-extent, extent, size=3)
            position = Vector3.from_array(base)
        if rotation is None:
            if placement.mode == "random":
                rotation = Euler(*(float(a) for a in self._rng.uniform(-math.pi, math.pi, size=3)))
            else:
                rotation = Euler(*placement.default_rotation)
        return position, rotation

    def _fresh_id(self) -> str:
        object_id = new_object_id(self._id_rng)
        while object_id in self._issued_ids:
            object_id = new_object_id(self._id_rng)
        self._issued_ids.add(object_id)
        return object_id

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def remove_object(self, object_id: str) -> None:
        with self._lock:
            if self._objects.pop(object_id, None) is None:
                logger.debug("remove_object ignored, unknown id %s", object_id)
                return
            if self._selected_id == object_id:
                self._selected_id = None
        logger.debug("Removed %s", object_id)

    def update_object_position(self, object_id: str, position: Any) -> None:
        pos = as_vector3(position)
        with self._lock:
            obj = self._objects.get(object_id)
            if obj is None:
                logger.debug("update_object_position ignored, unknown id %s", object_id)
                return
            self._publish(replace(obj, position=pos))

    def update_object_rotation(self, object_id: str, rotation: Any) -> None:
        rot = as_euler(rotation)
        with self._lock:
            obj = self._objects.get(object_id)
            if obj is None:
                logger.debug("update_object_rotation ignored, unknown id %s", object_id)
                return
            self._publish(replace(obj, rotation=rot))

    def update_equation(self, object_id: str) -> None:
        with self._lock:
            obj = self._objects.get(object_id)
            if obj is None:
                return
            self._publish(obj)

    def _publish(self, obj: MathObject) -> None:
        # Caller holds the lock.
        equation = format_equation(obj.kind, obj.position, obj.rotation)
        if equation != obj.equation:
            obj = replace(obj, equation=equation)
        self._objects[obj.id] = obj

    def select_object(self, object_id: Optional[str]) -> None:
        with self._lock:
            self._selected_id = object_id
        logger.debug("Selection set to %s", object_id)

    def toggle_visibility(self, object_id: str) -> None:
        with self._lock:
            obj = self._objects.get(object_id)
            if obj is None:
                logger.debug("toggle_visibility ignored, unknown id %s", object_id)
                return
            self._objects[object_id] = replace(obj, visible=not obj.visible)

    def clear(self) -> None:
        with self._lock:
            count = len(self._objects)
            self._objects.clear()
            self._selected_id = None
        logger.debug("Cleared %d object(s)", count)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def objects(self) -> Tuple[MathObject, ...]:
        with self._lock:
            return tuple(self._objects.values())

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def find_object(self, object_id: str) -> Optional[MathObject]:
        with self._lock:
            return self._objects.get(object_id)

    def get_object(self, object_id: str) -> MathObject:
        obj = self.find_object(object_id)
        if obj is None:
            raise ObjectNotFoundError(f"Unknown object: {object_id}")
        return obj

    def selected_object(self) -> Optional[MathObject]:
        with self._lock:
            if self._selected_id is None:
                return None
            return self._objects.get(self._selected_id)

    def visible_objects(self) -> Tuple[MathObject, ...]:
        return tuple(o for o in self.objects if o.visible)

    def snapshot(self) -> SceneSnapshot:
        with self._lock:
            return SceneSnapshot(objects=tuple(self._objects.values()), selected_id=self._selected_id)

    def to_dict(self) -> Dict[str, Any]:
        return self.snapshot().to_dict()

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._objects

    def __iter__(self) -> Iterator[MathObject]:
        return iter(self.objects)
