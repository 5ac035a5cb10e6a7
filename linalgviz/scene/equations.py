"""
Equation formatting for lines and planes.

Lines use point-direction form, planes use normal form::

    x = (px, py, pz) + t·(dx, dy, dz)        one decimal place
    nx·x + ny·y + nz·z + d = 0               two decimal places, rendered as
    "{nx}x + {ny}y + {nz}z + {d} = 0"

Coefficients are printed literally, so a negative coefficient reads
``+ -0.71y``. Rounding is half-away-from-zero on the exact binary value of the
float, and a value that rounds to zero is always printed without a sign.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal

from linalgviz.geometry.core import Euler, Vector3
from linalgviz.scene.objects import LOCAL_LINE_DIRECTION, LOCAL_PLANE_NORMAL, ObjectKind

LINE_PLACES = 1
PLANE_PLACES = 2

# Wide enough for the integer digits of any finite double plus the places.
_FIXED_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def format_fixed(value: float, places: int) -> str:
    """Render ``value`` with exactly ``places`` digits after the point.

    Any finite float is accepted, including magnitudes far beyond the default
    28-digit decimal context. A result that rounds to zero drops its sign, so
    ``-0.004`` prints as ``0.00`` where plain fixed-point output would give
    ``-0.00``.
    """
    quantum = Decimal(1).scaleb(-int(places))
    d = Decimal(float(value)).quantize(quantum, context=_FIXED_CONTEXT)
    if d.is_zero():
        d = abs(d)
    return format(d, "f")


def line_direction(rotation: Euler) -> Vector3:
    return rotation.apply(LOCAL_LINE_DIRECTION).normalize()


def plane_normal(rotation: Euler) -> Vector3:
    return rotation.apply(LOCAL_PLANE_NORMAL).normalize()


def plane_offset(normal: Vector3, position: Vector3) -> float:
    return -normal.dot(position)


def _triple(v: Vector3, places: int) -> str:
    return ", ".join(format_fixed(c, places) for c in v.to_tuple())


def line_equation(position: Vector3, rotation: Euler) -> str:
    direction = line_direction(rotation)
    return f"x = ({_triple(position, LINE_PLACES)}) + t·({_triple(direction, LINE_PLACES)})"


def plane_equation(position: Vector3, rotation: Euler) -> str:
    normal = plane_normal(rotation)
    d = plane_offset(normal, position)
    nx, ny, nz = (format_fixed(c, PLANE_PLACES) for c in normal.to_tuple())
    return f"{nx}x + {ny}y + {nz}z + {format_fixed(d, PLANE_PLACES)} = 0"


def format_equation(kind: ObjectKind, position: Vector3, rotation: Euler) -> str:
    if kind is ObjectKind.LINE:
        return line_equation(position, rotation)
    if kind is ObjectKind.PLANE:
        return plane_equation(position, rotation)
    raise ValueError(f"Unsupported object kind: {kind}")
