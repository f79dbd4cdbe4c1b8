"""Body set diagnostics."""

from __future__ import annotations

import numpy as np

from ..state.bodies import BodiesState


def total_mass(state: BodiesState) -> float:
    if len(state) == 0:
        return 0.0
    return float(np.sum(state.mass))


def center_of_mass(state: BodiesState) -> np.ndarray:
    if len(state) == 0:
        raise ValueError("cannot compute center of mass for empty body set")
    m = state.mass
    return np.sum(state.pos * m[:, np.newaxis], axis=0) / np.sum(m)


def linear_momentum(state: BodiesState) -> np.ndarray:
    if len(state) == 0:
        return np.zeros(state.dim, dtype=np.float64)
    m = state.mass
    return np.sum(state.vel * m[:, np.newaxis], axis=0)


def kinetic_energy(state: BodiesState) -> float:
    if len(state) == 0:
        return 0.0
    v2 = np.sum(state.vel**2, axis=1)
    return float(0.5 * np.sum(state.mass * v2))


def potential_energy_gravity(
    state: BodiesState, G: float, softening: float = 0.0
) -> float:
    pos = state.pos
    mass = state.mass
    n = pos.shape[0]
    if n < 2:
        return 0.0

    eps2 = softening * softening
    delta = pos[None, :, :] - pos[:, None, :]
    r2 = np.sum(delta * delta, axis=-1)
    iu = np.triu_indices(n, k=1)
    r2 = r2[iu]
    # coincident pairs exert no force, so they carry no potential either
    live = r2 > 0.0
    dist = np.sqrt(r2[live] + eps2)
    mprod = mass[iu[0]][live] * mass[iu[1]][live]
    return float(-G * np.sum(mprod / dist))


def total_energy_gravity(state: BodiesState, G: float, softening: float = 0.0) -> float:
    return kinetic_energy(state) + potential_energy_gravity(state, G, softening)
