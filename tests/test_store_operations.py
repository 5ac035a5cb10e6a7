from __future__ import annotations

import math
import re

import numpy as np
import pytest

from linalgviz.geometry.core import Euler, Vector3
from linalgviz.scene.equations import line_equation, plane_equation
from linalgviz.scene.objects import ObjectKind
from linalgviz.scene.store import GeometricObjectStore, ObjectNotFoundError


def test_add_line_selects_and_computes_equation() -> None:
    store = GeometricObjectStore(seed=1)
    lid = store.add_line((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    obj = store.get_object(lid)
    assert obj.kind is ObjectKind.LINE
    assert obj.visible is True
    assert obj.equation == "x = (0.0, 0.0, 0.0) + t·(1.0, 0.0, 0.0)"
    assert store.selected_id == lid
    assert re.fullmatch(r"hsl\((\d{1,3}), 70%, 50%\)", obj.color)
    assert 0 <= int(obj.color[4:].split(",")[0]) < 360


def test_add_plane_with_default_pose() -> None:
    store = GeometricObjectStore(seed=1)
    pid = store.add_plane()
    obj = store.get_object(pid)
    assert obj.kind is ObjectKind.PLANE
    assert obj.position == Vector3(0.0, 1.0, 0.0)
    assert obj.rotation == Euler.zero()
    assert obj.equation == "0.00x + 0.00y + 1.00z + 0.00 = 0"


def test_ids_are_unique() -> None:
    store = GeometricObjectStore()
    ids = [store.add_line() if i % 2 else store.add_plane() for i in range(200)]
    assert len(set(ids)) == len(ids)
    assert [o.id for o in store.objects] == ids


def test_update_position_recomputes_equation() -> None:
    store = GeometricObjectStore(seed=2)
    lid = store.add_line((0.0, 0.0, 0.0))
    store.update_object_position(lid, (1.0, 2.0, 3.0))
    obj = store.get_object(lid)
    assert obj.position == Vector3(1.0, 2.0, 3.0)
    assert obj.equation == line_equation(obj.position, obj.rotation)
    assert obj.equation == "x = (1.0, 2.0, 3.0) + t·(1.0, 0.0, 0.0)"
    assert store.selected_id == lid


def test_huge_finite_coordinates_are_formatted() -> None:
    store = GeometricObjectStore(seed=2)
    lid = store.add_line((1e27, 0.0, 0.0), (0.0, 0.0, 0.0))
    assert store.get_object(lid).equation == f"x = ({int(1e27)}.0, 0.0, 0.0) + t·(1.0, 0.0, 0.0)"
    pid = store.add_plane()
    store.update_object_position(pid, (0.0, 0.0, 1e26))
    plane = store.get_object(pid)
    assert plane.position == Vector3(0.0, 0.0, 1e26)
    assert plane.equation == f"0.00x + 0.00y + 1.00z + -{int(1e26)}.00 = 0"
    store.update_equation(pid)
    assert store.get_object(pid) == plane


def test_update_rotation_recomputes_equation() -> None:
    store = GeometricObjectStore(seed=2)
    lid = store.add_line((0.0, 0.0, 0.0))
    pid = store.add_plane((0.0, 0.0, 0.0))
    store.update_object_rotation(lid, Euler(0.0, 0.0, math.pi / 2.0))
    store.update_object_rotation(pid, Euler.from_degrees(90.0, 0.0, 0.0))
    assert store.get_object(lid).equation == "x = (0.0, 0.0, 0.0) + t·(0.0, 1.0, 0.0)"
    plane = store.get_object(pid)
    assert plane.equation == plane_equation(plane.position, plane.rotation)
    assert plane.equation == "0.00x + -1.00y + 0.00z + 0.00 = 0"


def test_color_and_identity_survive_mutation() -> None:
    store = GeometricObjectStore(seed=3)
    pid = store.add_plane()
    before = store.get_object(pid)
    store.update_object_position(pid, (5.0, 5.0, 5.0))
    store.update_object_rotation(pid, (0.1, 0.2, 0.3))
    store.toggle_visibility(pid)
    after = store.get_object(pid)
    assert after.id == before.id
    assert after.kind is before.kind
    assert after.color == before.color


def test_update_equation_is_idempotent() -> None:
    store = GeometricObjectStore(seed=4)
    pid = store.add_plane((0.3, -1.2, 2.5), (0.5, 0.25, -1.0))
    first = store.get_object(pid).equation
    store.update_equation(pid)
    second = store.get_object(pid).equation
    store.update_equation(pid)
    assert store.get_object(pid).equation == first == second


def test_remove_selected_clears_selection() -> None:
    store = GeometricObjectStore(seed=5)
    a = store.add_line()
    b = store.add_plane()
    assert store.selected_id == b
    store.remove_object(b)
    assert store.selected_id is None
    assert b not in store
    assert [o.id for o in store.objects] == [a]


def test_remove_unselected_keeps_selection() -> None:
    store = GeometricObjectStore(seed=5)
    a = store.add_line()
    b = store.add_plane()
    store.select_object(a)
    store.remove_object(b)
    assert store.selected_id == a


def test_order_is_creation_order() -> None:
    store = GeometricObjectStore(seed=6)
    a = store.add_line()
    b = store.add_plane()
    c = store.add_line()
    store.update_object_position(a, (9.0, 9.0, 9.0))
    store.toggle_visibility(c)
    store.remove_object(b)
    store.update_object_rotation(c, (1.0, 0.0, 0.0))
    assert [o.id for o in store.objects] == [a, c]
    d = store.add_plane()
    assert [o.id for o in store] == [a, c, d]


def test_toggle_visibility_and_visible_objects() -> None:
    store = GeometricObjectStore(seed=7)
    a = store.add_line()
    b = store.add_plane()
    store.toggle_visibility(a)
    assert store.get_object(a).visible is False
    assert [o.id for o in store.visible_objects()] == [b]
    store.toggle_visibility(a)
    assert store.get_object(a).visible is True


def test_select_object_accepts_unknown_id_and_none() -> None:
    store = GeometricObjectStore(seed=8)
    a = store.add_line()
    store.select_object("ghost")
    assert store.selected_id == "ghost"
    assert store.selected_object() is None
    store.select_object(a)
    assert store.selected_object() == store.get_object(a)
    store.select_object(None)
    assert store.selected_id is None


def test_caller_input_is_not_aliased() -> None:
    store = GeometricObjectStore(seed=9)
    pos = np.array([1.0, 2.0, 3.0])
    rot = [0.0, 0.5, 0.0]
    lid = store.add_line(pos, rot)
    pos[0] = 100.0
    rot[1] = 2.0
    obj = store.get_object(lid)
    assert obj.position == Vector3(1.0, 2.0, 3.0)
    assert obj.rotation == Euler(0.0, 0.5, 0.0)
    assert obj.equation == line_equation(Vector3(1.0, 2.0, 3.0), Euler(0.0, 0.5, 0.0))


def test_invalid_geometry_is_rejected_before_mutation() -> None:
    store = GeometricObjectStore(seed=10)
    lid = store.add_line((0.0, 0.0, 0.0))
    before = store.snapshot()
    with pytest.raises(ValueError):
        store.update_object_position(lid, (float("nan"), 0.0, 0.0))
    with pytest.raises(ValueError):
        store.add_plane((1.0, 2.0))
    assert store.snapshot() == before


def test_get_object_raises_for_unknown_id() -> None:
    store = GeometricObjectStore()
    with pytest.raises(ObjectNotFoundError):
        store.get_object("missing")
    with pytest.raises(KeyError):
        store.get_object("missing")
    assert store.find_object("missing") is None


def test_clear_empties_store_and_never_reuses_ids() -> None:
    store = GeometricObjectStore(seed=11)
    old = {store.add_line(), store.add_plane()}
    store.clear()
    assert len(store) == 0
    assert store.selected_id is None
    new = store.add_line()
    assert new not in old


def test_snapshot_and_to_dict() -> None:
    store = GeometricObjectStore(seed=12)
    lid = store.add_line((0.0, 0.0, 0.0))
    snap = store.snapshot()
    assert snap.selected is not None and snap.selected.id == lid
    data = store.to_dict()
    assert data["selected_id"] == lid
    assert data["objects"][0]["kind"] == "line"
    assert data["objects"][0]["position"] == [0.0, 0.0, 0.0]
    assert data["objects"][0]["equation"] == "x = (0.0, 0.0, 0.0) + t·(1.0, 0.0, 0.0)"
    # Snapshots are detached from later mutations.
    store.update_object_position(lid, (1.0, 1.0, 1.0))
    assert snap.objects[0].position == Vector3(0.0, 0.0, 0.0)
