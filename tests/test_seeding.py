from __future__ import annotations

import warnings

import numpy as np
import pytest

from particle_gravity.core.errors import InvalidMassError
from particle_gravity.core.math import Vector2
from particle_gravity.core.seeding import seed_cluster, seed_stack
from particle_gravity.core.simulation import Simulation


def test_stacked_population_steps_without_error() -> None:
    sim = Simulation(dim=2)
    ids = seed_stack(sim, 100, Vector2(0.0, 0.0), Vector2(50.0, 0.0), mass=1.0)
    assert ids == list(range(100))

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        sim.step(0.016)
    pos = sim.positions()
    assert np.all(np.isfinite(pos))
    assert np.allclose(pos, [[0.8, 0.0]] * 100)


def test_seed_stack_validation() -> None:
    sim = Simulation()
    with pytest.raises(InvalidMassError):
        seed_stack(sim, 3, [0.0, 0.0, 0.0], mass=0.0)
    with pytest.raises(ValueError, match="count must be >= 0"):
        seed_stack(sim, -1, [0.0, 0.0, 0.0])
    assert len(sim) == 0


def test_seed_cluster_is_deterministic() -> None:
    a = Simulation(G=1.0)
    b = Simulation(G=1.0)
    seed_cluster(a, 25, seed=42)
    seed_cluster(b, 25, seed=42)
    assert np.array_equal(a.positions(), b.positions())
    assert np.array_equal(a.state.mass, b.state.mass)
    assert np.all((a.state.mass >= 0.5) & (a.state.mass <= 2.0))


def test_seed_cluster_in_plane_around_center() -> None:
    sim = Simulation(G=1.0, dim=2)
    ids = seed_cluster(sim, 400, seed=1, scale=0.1, center=Vector2(10.0, -5.0))
    assert len(ids) == 400
    assert sim.positions().shape == (400, 2)
    assert np.allclose(sim.positions().mean(axis=0), [10.0, -5.0], atol=0.05)


def test_seed_cluster_validation() -> None:
    sim = Simulation(dim=2)
    with pytest.raises(ValueError, match="mass_range"):
        seed_cluster(sim, 3, mass_range=(0.0, 1.0))
    with pytest.raises(ValueError, match="center must have length 2"):
        seed_cluster(sim, 3, center=[0.0, 0.0, 0.0])
