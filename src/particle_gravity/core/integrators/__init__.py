"""Integrator interfaces and implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..forces.base import Model
from ..state.bodies import BodiesState


class Integrator(Protocol):
    def step(self, state: BodiesState, model: Model, dt: float) -> None:
        """Advance state by one fixed step (mutating)."""


@dataclass(slots=True)
class SymplecticEuler:
    """Semi-implicit Euler: the updated velocity moves the position."""

    def step(self, state: BodiesState, model: Model, dt: float) -> None:
        if len(state) == 0:
            return
        a = model.acc(state)
        state.vel += a * dt
        state.pos += state.vel * dt


@dataclass(slots=True)
class VelocityVerlet:
    def step(self, state: BodiesState, model: Model, dt: float) -> None:
        if len(state) == 0:
            return
        a = model.acc(state)
        state.pos += state.vel * dt + 0.5 * a * dt * dt
        a_next = model.acc(state)
        state.vel += 0.5 * (a + a_next) * dt


INTEGRATORS: dict[str, type] = {
    "symplectic_euler": SymplecticEuler,
    "velocity_verlet": VelocityVerlet,
}


def make_integrator(name: str) -> Integrator:
    if name not in INTEGRATORS:
        raise ValueError(f"unsupported integrator: {name}")
    return INTEGRATORS[name]()
