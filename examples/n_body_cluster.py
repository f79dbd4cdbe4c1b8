"""Small N-body cluster example (deterministic)."""

from __future__ import annotations

import numpy as np

from particle_gravity.core.diagnostics import linear_momentum, total_energy_gravity
from particle_gravity.core.seeding import seed_cluster
from particle_gravity.core.simulation import Simulation


if __name__ == "__main__":
    sim = Simulation(G=1.0, softening=0.05, workers=4)
    seed_cluster(sim, 200, seed=123)

    dt = 0.001
    steps = 2000
    e0 = total_energy_gravity(sim.state, G=1.0, softening=0.05)

    with sim:
        for _ in range(steps):
            sim.step(dt)

    pos = sim.positions()
    any_nan = np.isnan(pos).any() or np.isnan(sim.state.vel).any()
    p = linear_momentum(sim.state)
    e = total_energy_gravity(sim.state, G=1.0, softening=0.05)

    print("any NaN:", any_nan)
    print("total momentum:", p)
    print("energy drift:", e - e0)
