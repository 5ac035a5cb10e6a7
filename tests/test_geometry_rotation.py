from __future__ import annotations

import math

import numpy as np
import pytest

from linalgviz.geometry.core import Euler, Vector3, as_euler, as_vector3, rotation_matrix_xyz


def test_zero_rotation_is_identity() -> None:
    assert np.allclose(Euler.zero().rotation_matrix(), np.eye(3))
    assert Euler.zero().apply(Vector3(1.0, 2.0, 3.0)) == Vector3(1.0, 2.0, 3.0)


def test_quarter_turn_about_z_maps_x_to_y() -> None:
    out = Euler(0.0, 0.0, math.pi / 2.0).apply(Vector3(1.0, 0.0, 0.0))
    assert np.allclose(out.to_array(), [0.0, 1.0, 0.0])


def test_rotation_order_is_intrinsic_xyz() -> None:
    # Rx @ Ry @ Rz: Y first sends +X to -Z, then X sends -Z to +Y.
    out = Euler(math.pi / 2.0, math.pi / 2.0, 0.0).apply(Vector3(1.0, 0.0, 0.0))
    assert np.allclose(out.to_array(), [0.0, 1.0, 0.0])
    m = rotation_matrix_xyz(0.3, -0.7, 1.1)
    assert np.allclose(m @ m.T, np.eye(3))
    assert np.isclose(np.linalg.det(m), 1.0)


def test_degrees_round_trip() -> None:
    e = Euler.from_degrees(90.0, -45.0, 180.0)
    assert np.allclose(e.to_tuple(), (math.pi / 2.0, -math.pi / 4.0, math.pi))
    assert np.allclose(e.to_degrees(), (90.0, -45.0, 180.0))


def test_vector_ops_and_normalize() -> None:
    a = Vector3(1.0, 2.0, 2.0)
    assert a.length() == pytest.approx(3.0)
    assert np.allclose(a.normalize().to_array(), [1.0 / 3.0, 2.0 / 3.0, 2.0 / 3.0])
    assert (a - a) == Vector3.zero()
    assert Vector3.zero().normalize() == Vector3.zero()


def test_coercion_copies_and_validates() -> None:
    arr = np.array([1.0, 2.0, 3.0])
    v = as_vector3(arr)
    arr[0] = 99.0
    assert v == Vector3(1.0, 2.0, 3.0)
    assert as_euler([0, 0, 1]) == Euler(0.0, 0.0, 1.0)
    with pytest.raises(ValueError):
        as_vector3((1.0, 2.0))
    with pytest.raises(ValueError):
        as_vector3((1.0, float("nan"), 0.0))
    with pytest.raises(ValueError):
        as_euler((0.0, float("inf"), 0.0))
