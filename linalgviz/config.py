"""
Store Configuration
===================
Policies the store applies at its boundary: where objects appear when the
caller does not give a pose, and how display colors are drawn.

Exports:
    PlacementPolicy: Default pose policy for add_line/add_plane.
    ColorPolicy: Fixed saturation/lightness for generated colors.
    StoreConfig: Bundle of the above plus an optional RNG seed.
    load_config: Read a StoreConfig from a JSON file.
"""
from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple

PlacementMode = Literal["fixed", "random"]

_PLACEMENT_MODES = ("fixed", "random")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class PlacementPolicy:
    """
    fixed:  omitted pose -> default_position / default_rotation.
    random: default_position jittered by U(-random_extent, random_extent) per
            axis, rotation U(-pi, pi) per axis.
    """
    mode: PlacementMode = "fixed"
    default_position: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    default_rotation: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    random_extent: float = 0.5

    def __post_init__(self) -> None:
        if self.mode not in _PLACEMENT_MODES:
            raise ConfigError(f"placement mode must be one of {_PLACEMENT_MODES}, got {self.mode!r}")
        if not math.isfinite(self.random_extent) or self.random_extent < 0.0:
            raise ConfigError("random_extent must be a finite value >= 0")


@dataclass(frozen=True)
class ColorPolicy:
    saturation: int = 70
    lightness: int = 50

    def __post_init__(self) -> None:
        for name in ("saturation", "lightness"):
            v = getattr(self, name)
            if not 0 <= int(v) <= 100:
                raise ConfigError(f"{name} must be within 0..100, got {v}")


@dataclass(frozen=True)
class StoreConfig:
    placement: PlacementPolicy = field(default_factory=PlacementPolicy)
    color: ColorPolicy = field(default_factory=ColorPolicy)
    seed: Optional[int] = None


def _triple(value: Any, key: str) -> Tuple[float, float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigError(f"{key} must be a list of 3 numbers")
    try:
        out = tuple(float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a list of 3 numbers") from e
    if not all(math.isfinite(v) for v in out):
        raise ConfigError(f"{key} must be finite")
    return out  # type: ignore[return-value]


def _check_keys(data: Dict[str, Any], allowed: Tuple[str, ...], section: str) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ConfigError(f"Unknown {section} keys: {', '.join(unknown)}")


def config_from_dict(data: Dict[str, Any]) -> StoreConfig:
    if not isinstance(data, dict):
        raise ConfigError("config root must be a JSON object")
    _check_keys(data, ("placement", "color", "seed"), "config")

    p = dict(data.get("placement") or {})
    _check_keys(p, ("mode", "default_position", "default_rotation", "random_extent"), "placement")
    defaults = PlacementPolicy()
    placement = PlacementPolicy(
        mode=str(p.get("mode", defaults.mode)),  # type: ignore[arg-type]
        default_position=_triple(p["default_position"], "default_position") if "default_position" in p else defaults.default_position,
        default_rotation=_triple(p["default_rotation"], "default_rotation") if "default_rotation" in p else defaults.default_rotation,
        random_extent=float(p.get("random_extent", defaults.random_extent)),
    )

    c = dict(data.get("color") or {})
    _check_keys(c, ("saturation", "lightness"), "color")
    color = ColorPolicy(
        saturation=int(c.get("saturation", ColorPolicy.saturation)),
        lightness=int(c.get("lightness", ColorPolicy.lightness)),
    )

    seed = data.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigError("seed must be an integer")
    return StoreConfig(placement=placement, color=color, seed=seed)


def load_config(path: str | Path) -> StoreConfig:
    p = Path(path).expanduser()
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config {p}: {e}") from e
    return config_from_dict(data)
