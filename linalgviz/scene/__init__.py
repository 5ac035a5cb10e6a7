from linalgviz.scene.objects import MathObject, ObjectKind, SceneSnapshot
from linalgviz.scene.equations import format_equation, line_equation, plane_equation
from linalgviz.scene.store import GeometricObjectStore, ObjectNotFoundError

__all__ = [
    "MathObject",
    "ObjectKind",
    "SceneSnapshot",
    "format_equation",
    "line_equation",
    "plane_equation",
    "GeometricObjectStore",
    "ObjectNotFoundError",
]
