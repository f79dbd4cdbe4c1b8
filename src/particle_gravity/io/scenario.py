"""Scenario I/O and adapters."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import numpy as np

from ..core.forces import ForceLaw
from ..core.integrators import INTEGRATORS, make_integrator
from ..core.simulation import Simulation
from ..core.state import BodiesState
from .units import PRESETS, UnitsConfig, config_from_defn, to_si


ScenarioDefinition = dict[str, Any]

_FORCE_LAWS = {law.value for law in ForceLaw}


def new_default() -> ScenarioDefinition:
    return {
        "schema_version": 1,
        "metadata": {
            "name": "Untitled",
            "description": "Blank scenario.",
        },
        "simulation": {
            "dt": 0.01,
            "steps": 1000,
            "integrator": "symplectic_euler",
        },
        "gravity": {"G": 6.67430e-11},
        "bodies": {"dim": 3, "pos": [], "vel": [], "mass": []},
    }


def load_scenario(path: str | Path) -> ScenarioDefinition:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return _validate_scenario_v1(data)


def save_scenario(path: str | Path, defn: ScenarioDefinition) -> None:
    Path(path).write_text(
        json.dumps(defn, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def scenario_to_runtime(
    defn: ScenarioDefinition,
) -> tuple[Simulation, float, int, dict[str, Any]]:
    """Build a ready-to-step simulation from a scenario definition.

    Returns (simulation, dt, steps, aux). Values are converted to SI.
    `aux` holds "sample_every" and "id_map" (scenario name -> body id).
    """
    sim = defn["simulation"]
    units_cfg = config_from_defn(defn)
    dt = float(to_si(sim["dt"], "time", units_cfg))
    steps = int(sim["steps"])
    integrator = make_integrator(sim["integrator"])

    gravity = defn.get("gravity", {})
    state = _bodies_state(defn.get("bodies"), units_cfg)
    simulation = Simulation(
        G=float(to_si(gravity.get("G", 6.67430e-11), "G", units_cfg)),
        force_law=gravity.get("force_law", ForceLaw.INVERSE_SQUARE.value),
        softening=float(to_si(gravity.get("softening", 0.0), "length", units_cfg)),
        integrator=integrator,
        chunk_size=gravity.get("chunk_size"),
        workers=gravity.get("workers"),
        state=state,
    )

    id_map: dict[str, int] = {}
    bodies = defn.get("bodies") or {}
    for idx, name in enumerate(bodies.get("ids", [])):
        id_map[str(name)] = int(state.ids[idx])
    aux = {
        "sample_every": defn.get("sampling", {}).get("every"),
        "id_map": id_map,
    }
    return simulation, dt, steps, aux


def _bodies_state(
    bodies: dict[str, Any] | None, units_cfg: UnitsConfig
) -> BodiesState:
    if not bodies:
        return BodiesState(dim=3)
    dim = bodies.get("dim")
    return BodiesState.from_arrays(
        pos=np.asarray(to_si(bodies["pos"], "length", units_cfg), dtype=np.float64),
        vel=np.asarray(to_si(bodies["vel"], "velocity", units_cfg), dtype=np.float64),
        mass=np.asarray(to_si(bodies["mass"], "mass", units_cfg), dtype=np.float64),
        dim=int(dim) if dim is not None else None,
    )


def _require(obj: dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing required field: {ctx}.{key}")
    return obj[key]


def _validate_vectors(arr: Any, dim: int | None, ctx: str) -> int:
    a = np.asarray(arr, dtype=np.float64)
    if a.size == 0:
        return dim if dim is not None else 3
    if a.ndim != 2 or a.shape[1] not in (2, 3):
        raise ValueError(f"{ctx} must have shape (*, 2) or (*, 3)")
    if dim is not None and a.shape[1] != dim:
        raise ValueError(f"{ctx} must have shape (*, {dim})")
    return int(a.shape[1])


def _validate_optional_count(cfg: dict[str, Any], key: str, ctx: str) -> None:
    value = cfg.get(key)
    if value is None:
        return
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ValueError(f"{ctx}.{key} must be a positive integer")


def _validate_ids(values: Any, expected_len: int, ctx: str) -> None:
    if not isinstance(values, list) or len(values) != expected_len:
        raise ValueError(f"{ctx} must be a list of length {expected_len}")
    seen: set[str] = set()
    for idx, entry in enumerate(values):
        if not isinstance(entry, str) or not entry:
            raise ValueError(f"{ctx}[{idx}] must be a non-empty string")
        if entry in seen:
            raise ValueError(f"duplicate body id: {entry}")
        seen.add(entry)


def _validate_scenario_v1(data: dict[str, Any]) -> ScenarioDefinition:
    if not isinstance(data, dict):
        raise ValueError("scenario must be a JSON object")
    if data.get("schema_version") != 1:
        raise ValueError("schema_version must be 1")

    sim = _require(data, "simulation", "scenario")
    _require(sim, "dt", "simulation")
    _require(sim, "steps", "simulation")
    _require(sim, "integrator", "simulation")
    if sim["dt"] <= 0:
        raise ValueError("simulation.dt must be > 0")
    steps = sim["steps"]
    if not isinstance(steps, int) or isinstance(steps, bool) or steps < 0:
        raise ValueError("simulation.steps must be a non-negative integer")
    if sim["integrator"] not in INTEGRATORS:
        raise ValueError("simulation.integrator invalid")

    if "sampling" in data:
        if not isinstance(data["sampling"], dict):
            raise ValueError("sampling must be an object")
        _validate_optional_count(data["sampling"], "every", "sampling")

    if "units" in data:
        units = data["units"]
        if not isinstance(units, dict):
            raise ValueError("units must be an object")
        preset = str(units.get("preset", "SI")).upper()
        if preset not in PRESETS:
            raise ValueError("units.preset is not supported")
        if "enabled" in units and not isinstance(units["enabled"], bool):
            raise ValueError("units.enabled must be boolean")

    if "gravity" in data:
        gravity = data["gravity"]
        if not isinstance(gravity, dict):
            raise ValueError("gravity must be an object")
        if "G" in gravity and not math.isfinite(float(gravity["G"])):
            raise ValueError("gravity.G must be finite")
        if float(gravity.get("softening", 0.0)) < 0.0:
            raise ValueError("gravity.softening must be >= 0")
        if gravity.get("force_law", ForceLaw.INVERSE_SQUARE.value) not in _FORCE_LAWS:
            raise ValueError(
                "gravity.force_law must be 'inverse_square' or 'scalar_broadcast'"
            )
        _validate_optional_count(gravity, "chunk_size", "gravity")
        _validate_optional_count(gravity, "workers", "gravity")

    if "bodies" in data:
        b = data["bodies"]
        if not isinstance(b, dict):
            raise ValueError("bodies must be an object")
        _require(b, "pos", "bodies")
        _require(b, "vel", "bodies")
        _require(b, "mass", "bodies")
        dim = b.get("dim")
        if dim is not None and dim not in (2, 3):
            raise ValueError("bodies.dim must be 2 or 3")
        dim = _validate_vectors(b["pos"], dim, "bodies.pos")
        _validate_vectors(b["vel"], dim, "bodies.vel")
        if len(b["vel"]) != len(b["pos"]):
            raise ValueError("bodies.vel must have length N")
        if len(b["mass"]) != len(b["pos"]):
            raise ValueError("bodies.mass must have length N")
        for m in b["mass"]:
            if not math.isfinite(float(m)) or float(m) <= 0.0:
                raise ValueError("bodies.mass must be > 0")
        if "ids" in b:
            _validate_ids(b["ids"], len(b["mass"]), "bodies.ids")

    return data
