from __future__ import annotations

import numpy as np
import pytest

from particle_gravity import InvalidMassError, Simulation, Vector2, VelocityVerlet
from particle_gravity.core.diagnostics import linear_momentum
from particle_gravity.core.state import BodiesState


G = 6.67430e-11


def test_one_step_end_to_end() -> None:
    sim = Simulation()
    assert sim.G == G
    a = sim.add_body([0.0, 0.0, 0.0], [0.0, 0.0, 0.0], mass=1.0)
    b = sim.add_body([1.0, 0.0, 0.0], [0.0, 0.0, 0.0], mass=1.0)

    sim.step(1.0)

    body_a = sim.body(a)
    body_b = sim.body(b)
    assert np.array_equal(body_a.velocity, [G, 0.0, 0.0])
    assert np.array_equal(body_b.velocity, [-G, 0.0, 0.0])
    assert np.array_equal(body_a.position, [G, 0.0, 0.0])
    assert np.array_equal(body_b.position, [1.0 - G, 0.0, 0.0])
    assert sim.step_count == 1
    assert sim.time == 1.0


def test_rejected_bodies_never_enter_the_step() -> None:
    sim = Simulation(G=1.0)
    with pytest.raises(InvalidMassError):
        sim.add_body([0.0, 0.0, 0.0], mass=0.0)
    with pytest.raises(InvalidMassError):
        sim.add_body([0.5, 0.0, 0.0], mass=-5.0)
    assert len(sim) == 0

    sim.add_body([0.0, 0.0, 0.0], mass=1.0)
    sim.add_body([1.0, 0.0, 0.0], mass=1.0)
    sim.step(0.1)
    assert len(sim) == 2
    assert [body.id for body in sim.bodies()] == [0, 1]
    assert np.allclose(sim.positions()[:, 1:], 0.0)


def test_spawned_body_joins_next_step() -> None:
    sim = Simulation(G=1.0)
    sim.add_body([0.0, 0.0, 0.0], mass=1.0)
    sim.step(0.1)
    assert np.array_equal(sim.positions(), [[0.0, 0.0, 0.0]])

    spawned = sim.add_body([0.0, 2.0, 0.0], mass=4.0)
    sim.step(0.1)
    # pulled toward the heavy body at +y
    assert sim.body(0).velocity[1] > 0.0
    assert sim.body(spawned).velocity[1] < 0.0


def test_remove_body_between_steps() -> None:
    sim = Simulation(G=1.0)
    ids = [sim.add_body([float(i), 0.0, 0.0]) for i in range(3)]
    sim.remove_body(ids[1])
    sim.step(0.01)
    assert [body.id for body in sim.bodies()] == [0, 2]
    with pytest.raises(KeyError):
        sim.body(ids[1])


def test_positions_are_read_only() -> None:
    sim = Simulation(G=1.0)
    sim.add_body([0.0, 0.0, 0.0])
    pos = sim.positions()
    with pytest.raises(ValueError):
        pos[0, 0] = 1.0


def test_planar_simulation_with_vector2() -> None:
    sim = Simulation(G=1.0, dim=2)
    sim.add_body(Vector2(0.0, 0.0), Vector2(0.0, 0.0), mass=1.0)
    sim.add_body(Vector2(1, 0), mass=1.0)
    sim.step(1.0)
    assert np.array_equal(sim.body(0).velocity, [1.0, 0.0])
    assert np.array_equal(sim.body(1).velocity, [-1.0, 0.0])
    assert np.array_equal(sim.positions(), [[1.0, 0.0], [0.0, 0.0]])
    assert Vector2.from_array(sim.body(0).position) == Vector2(1.0, 0.0)


def test_momentum_conserved_across_steps() -> None:
    sim = Simulation(G=1.0, softening=0.05)
    rng = np.random.default_rng(5)
    for _ in range(12):
        sim.add_body(rng.normal(size=3), rng.normal(scale=0.1, size=3), rng.uniform(0.5, 2.0))
    p0 = linear_momentum(sim.state)
    for _ in range(500):
        sim.step(0.001)
    p1 = linear_momentum(sim.state)
    assert np.linalg.norm(p1 - p0) < 1e-9 * (np.linalg.norm(p0) + 1.0)


def test_scalar_broadcast_does_not_conserve_momentum() -> None:
    with pytest.warns(UserWarning):
        sim = Simulation(G=1.0, force_law="scalar_broadcast")
    sim.add_body([0.0, 0.0, 0.0])
    sim.add_body([2.0, 0.0, 0.0])
    sim.step(1.0)
    assert np.allclose(sim.body(0).velocity, [0.25, 0.25, 0.25])
    assert np.allclose(sim.body(1).velocity, [0.25, 0.25, 0.25])
    assert not np.allclose(linear_momentum(sim.state), 0.0)


def test_parallel_force_pass_matches_serial_trajectory() -> None:
    def build(**kwargs) -> Simulation:
        sim = Simulation(G=1.0, softening=0.01, **kwargs)
        rng = np.random.default_rng(3)
        for _ in range(30):
            sim.add_body(rng.normal(size=3), mass=rng.uniform(0.5, 2.0))
        return sim

    serial = build()
    with build(workers=4, chunk_size=7) as parallel:
        for _ in range(20):
            serial.step(0.001)
            parallel.step(0.001)
    assert np.allclose(parallel.positions(), serial.positions(), rtol=1e-12, atol=1e-14)


def test_clone_is_independent_and_keeps_integrator() -> None:
    sim = Simulation(G=1.0, integrator=VelocityVerlet())
    sim.add_body([0.0, 0.0, 0.0])
    sim.add_body([1.0, 0.0, 0.0])
    copy = sim.clone()
    copy.step(0.1)
    assert sim.step_count == 0
    assert np.array_equal(sim.positions(), [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    assert isinstance(copy.integrator, VelocityVerlet)


def test_diagnostics_report() -> None:
    sim = Simulation(G=1.0)
    sim.add_body([0.0, 0.0, 0.0], [1.0, 0.0, 0.0], mass=2.0)
    sim.add_body([4.0, 0.0, 0.0], mass=3.0)
    info = sim.diagnostics()
    assert info["step"] == 0
    assert info["bodies"] == 2
    assert np.allclose(info["momentum"], [2.0, 0.0, 0.0])
    assert info["kinetic_energy"] == 1.0
    assert info["energy"] == 1.0 - 1.5


def test_dim_must_agree_with_given_state() -> None:
    state = BodiesState(dim=2)
    assert Simulation(G=1.0, state=state).dim == 2
    assert Simulation(G=1.0, dim=2, state=state).dim == 2
    with pytest.raises(ValueError, match="dim must match state dim 2"):
        Simulation(G=1.0, dim=3, state=state)
    assert Simulation(G=1.0).dim == 3


def test_context_manager_releases_worker_pool() -> None:
    with Simulation(G=1.0, workers=2, chunk_size=1) as sim:
        sim.add_body([0.0, 0.0, 0.0])
        sim.add_body([1.0, 0.0, 0.0])
        sim.step(0.1)
        sim.step(0.1)
        assert sim.model._pool is not None
    assert sim.model._pool is None
    assert sim.step_count == 2
