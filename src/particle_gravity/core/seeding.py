"""Initial body populations."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from .math.vector2 import Vector2
from .state.bodies import check_mass
from .simulation import Simulation


def seed_stack(
    simulation: Simulation,
    count: int,
    position: ArrayLike | Vector2,
    velocity: ArrayLike | Vector2 | None = None,
    mass: float = 1.0,
) -> list[int]:
    """Add `count` identical bodies sharing one position and velocity.

    The bodies are coincident, so they exert no force on each other until
    they separate.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    check_mass(mass)
    return [simulation.add_body(position, velocity, mass) for _ in range(count)]


def seed_cluster(
    simulation: Simulation,
    count: int,
    seed: int = 123,
    scale: float = 1.0,
    velocity_scale: float = 0.1,
    mass_range: tuple[float, float] = (0.5, 2.0),
    center: ArrayLike | Vector2 | None = None,
) -> list[int]:
    """Add a deterministic Gaussian cluster of `count` bodies."""
    if count < 0:
        raise ValueError("count must be >= 0")
    low, high = mass_range
    if low <= 0.0 or high < low:
        raise ValueError("mass_range must satisfy 0 < low <= high")
    dim = simulation.dim
    if center is None:
        origin = np.zeros(dim, dtype=np.float64)
    elif isinstance(center, Vector2):
        origin = center.as_array()
    else:
        origin = np.asarray(center, dtype=np.float64)
    if origin.shape != (dim,):
        raise ValueError(f"center must have length {dim}")

    rng = np.random.default_rng(seed)
    pos = origin + rng.normal(scale=scale, size=(count, dim))
    vel = rng.normal(scale=velocity_scale, size=(count, dim))
    mass = rng.uniform(low=low, high=high, size=(count,))
    return [
        simulation.add_body(pos[i], vel[i], float(mass[i])) for i in range(count)
    ]
