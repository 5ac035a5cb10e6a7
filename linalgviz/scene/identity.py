from __future__ import annotations

import uuid
from typing import Optional

import numpy as np

from linalgviz.config import ColorPolicy


def new_object_id(rng: Optional[np.random.Generator] = None) -> str:
    """Return a UUID4 string.

    With a generator the id is drawn from it, so the same seed yields the same
    sequence of ids in every store that uses it. Without one, ``uuid.uuid4()``
    is used.
    """
    if rng is None:
        return str(uuid.uuid4())
    return str(uuid.UUID(bytes=rng.bytes(16), version=4))


def random_hue(rng: np.random.Generator) -> int:
    return int(rng.integers(0, 360))


def hsl_color(hue: int, policy: ColorPolicy) -> str:
    return f"hsl({int(hue)}, {int(policy.saturation)}%, {int(policy.lightness)}%)"


def random_hsl_color(rng: np.random.Generator, policy: ColorPolicy = ColorPolicy()) -> str:
    return hsl_color(random_hue(rng), policy)
