"""Unit presets for scenario files.

A scenario may state its values in a preset's base units; they are scaled
to SI when the simulation is built. Every quantity kind is a product of
powers of the base length, mass and time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


# exponents of (length, mass, time)
DIMENSIONS: dict[str, tuple[int, int, int]] = {
    "length": (1, 0, 0),
    "mass": (0, 1, 0),
    "time": (0, 0, 1),
    "velocity": (1, 0, -1),
    "G": (3, -1, -2),
}


@dataclass(frozen=True, slots=True)
class UnitPreset:
    name: str
    length: float
    mass: float
    time: float

    def scale(self, kind: str) -> float:
        """SI value of one unit of `kind` in this preset."""
        try:
            el, em, et = DIMENSIONS[kind]
        except KeyError:
            raise ValueError(f"unsupported unit kind: {kind}") from None
        return self.length**el * self.mass**em * self.time**et


@dataclass(frozen=True, slots=True)
class UnitsConfig:
    preset: str = "SI"
    enabled: bool = True

    @property
    def effective(self) -> UnitPreset:
        return PRESETS[self.preset] if self.enabled else PRESETS["SI"]


PRESETS: dict[str, UnitPreset] = {
    "SI": UnitPreset("SI", length=1.0, mass=1.0, time=1.0),
    "KM": UnitPreset("KM", length=1000.0, mass=1.0, time=1.0),
    # astronomical unit, solar mass, day
    "ASTRO": UnitPreset(
        "ASTRO", length=149_597_870_700.0, mass=1.98847e30, time=86_400.0
    ),
}


def config_from_defn(defn: dict[str, Any]) -> UnitsConfig:
    units = defn.get("units")
    if not isinstance(units, dict):
        return UnitsConfig()
    preset = str(units.get("preset", "SI")).upper()
    if preset not in PRESETS:
        raise ValueError(f"unknown units preset: {preset}")
    return UnitsConfig(preset=preset, enabled=bool(units.get("enabled", True)))


def to_si(value: Any, kind: str, cfg: UnitsConfig) -> Any:
    """Scale a scalar or nested sequence from `cfg` units to SI."""
    scale = cfg.effective.scale(kind)
    if isinstance(value, (list, tuple, np.ndarray)):
        return np.asarray(value, dtype=np.float64) * scale
    return float(value) * scale
