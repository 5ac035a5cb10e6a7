"""
Linalgviz Geometry Module

Value types for positions and orientations of the objects shown in the
visualizer. Both types are immutable, so a stored pose can be handed to a
renderer without copying.

Rotation convention
-------------------
Orientations are Euler angles in radians applied in intrinsic XYZ order,
i.e. the rotation matrix is ``Rx(x) @ Ry(y) @ Rz(z)``. This is the only
rotation convention in the package; equation output and any visual transform
built from ``Euler.rotation_matrix()`` agree exactly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

import numpy as np

from linalgviz.geometry.tolerance import EPS_POS


# =============================================================================
# Vectors
# =============================================================================

@dataclass(frozen=True)
class Vector3:
    """3D vector for positions, directions and normals."""
    x: float
    y: float
    z: float

    def __add__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __truediv__(self, scalar: float) -> 'Vector3':
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other: 'Vector3') -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize(self) -> 'Vector3':
        """Return unit vector; a zero-length vector is returned unchanged."""
        L = self.length()
        if L < EPS_POS:
            return self
        return self / L

    def to_array(self) -> np.ndarray:
        """Convert to numpy array."""
        return np.array([self.x, self.y, self.z], dtype=float)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @staticmethod
    def from_array(arr: np.ndarray) -> 'Vector3':
        return Vector3(float(arr[0]), float(arr[1]), float(arr[2]))

    @staticmethod
    def zero() -> 'Vector3':
        return Vector3(0.0, 0.0, 0.0)


# =============================================================================
# Rotation
# =============================================================================

def rotation_matrix_xyz(rx: float, ry: float, rz: float) -> np.ndarray:
    """3x3 rotation matrix for intrinsic XYZ Euler angles in radians."""
    Rx = np.array([
        [1.0, 0.0, 0.0],
        [0.0, math.cos(rx), -math.sin(rx)],
        [0.0, math.sin(rx), math.cos(rx)]
    ])
    Ry = np.array([
        [math.cos(ry), 0.0, math.sin(ry)],
        [0.0, 1.0, 0.0],
        [-math.sin(ry), 0.0, math.cos(ry)]
    ])
    Rz = np.array([
        [math.cos(rz), -math.sin(rz), 0.0],
        [math.sin(rz), math.cos(rz), 0.0],
        [0.0, 0.0, 1.0]
    ])

    return Rx @ Ry @ Rz


@dataclass(frozen=True)
class Euler:
    """
    Orientation as Euler angles in radians.

    Angles are applied in intrinsic XYZ order (see module docstring).
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    ORDER = "XYZ"

    def rotation_matrix(self) -> np.ndarray:
        return rotation_matrix_xyz(self.x, self.y, self.z)

    def apply(self, vector: Vector3) -> Vector3:
        """Rotate ``vector`` by this orientation."""
        return Vector3.from_array(self.rotation_matrix() @ vector.to_array())

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_degrees(self) -> Tuple[float, float, float]:
        return (math.degrees(self.x), math.degrees(self.y), math.degrees(self.z))

    @classmethod
    def from_degrees(cls, x_deg: float, y_deg: float, z_deg: float) -> "Euler":
        return cls(math.radians(x_deg), math.radians(y_deg), math.radians(z_deg))

    @staticmethod
    def zero() -> 'Euler':
        return Euler(0.0, 0.0, 0.0)


# =============================================================================
# Coercion
# =============================================================================

def _finite_triple(value: Any, what: str) -> Tuple[float, float, float]:
    if isinstance(value, (Vector3, Euler)):
        raw: Sequence[Any] = value.to_tuple()
    else:
        arr = np.asarray(value, dtype=float).reshape(-1)
        if arr.shape[0] != 3:
            raise ValueError(f"{what} must have exactly 3 components, got {arr.shape[0]}")
        raw = arr.tolist()
    xyz = tuple(float(v) for v in raw)
    if not all(math.isfinite(v) for v in xyz):
        raise ValueError(f"{what} components must be finite: {xyz}")
    return xyz  # type: ignore[return-value]


def as_vector3(value: Any) -> Vector3:
    """Coerce a Vector3, sequence or array into a fresh, validated Vector3."""
    return Vector3(*_finite_triple(value, "position"))


def as_euler(value: Any) -> Euler:
    """Coerce an Euler, sequence or array (radians) into a fresh, validated Euler."""
    return Euler(*_finite_triple(value, "rotation"))
