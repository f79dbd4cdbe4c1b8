"""Two-body orbit example with diagnostics."""

from __future__ import annotations

import numpy as np

from particle_gravity.core.diagnostics import linear_momentum, total_energy_gravity
from particle_gravity.core.math import norm
from particle_gravity.core.simulation import Simulation


if __name__ == "__main__":
    G = 1.0
    v = np.sqrt(0.5)
    sim = Simulation(G=G)
    a = sim.add_body([-0.5, 0.0, 0.0], [0.0, v, 0.0], mass=1.0)
    b = sim.add_body([0.5, 0.0, 0.0], [0.0, -v, 0.0], mass=1.0)

    dt = 0.001
    steps = 10_000
    report_every = 500

    r = norm(sim.body(b).position - sim.body(a).position)
    r_min = r
    r_max = r
    e0 = total_energy_gravity(sim.state, G=G)

    for step in range(1, steps + 1):
        sim.step(dt)
        r = norm(sim.body(b).position - sim.body(a).position)
        r_min = min(r_min, r)
        r_max = max(r_max, r)

        if step % report_every == 0:
            p = linear_momentum(sim.state)
            e = total_energy_gravity(sim.state, G=G)
            print(
                f"step {step:5d} | r_min={r_min:.6f} r_max={r_max:.6f} | "
                f"|p|={norm(p):.6e} | dE={e - e0:.6e}"
            )
