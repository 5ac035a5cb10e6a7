"""
Linalgviz Geometry Module

Provides the 3D value types and the rotation convention shared by the store,
the equation formatter and any renderer.
"""

from linalgviz.geometry.core import (
    Vector3,
    Euler,
    rotation_matrix_xyz,
    as_vector3,
    as_euler,
)

__all__ = [
    "Vector3",
    "Euler",
    "rotation_matrix_xyz",
    "as_vector3",
    "as_euler",
]
