"""Grow a planar system one body at a time, as a pointer-driven front end would."""

from __future__ import annotations

from particle_gravity.core.math import Turn, Vector2
from particle_gravity.core.simulation import Simulation


if __name__ == "__main__":
    sim = Simulation(G=1.0, dim=2, softening=0.01)
    sim.add_body(Vector2(0.0, 0.0), mass=100.0)

    dt = 1.0 / 60.0
    spawn = Vector2(5.0, 0.0)
    for frame in range(1, 601):
        if frame % 60 == 0:
            # tangential launch so each new body starts on a rough orbit
            speed = (100.0 / spawn.magnitude()) ** 0.5
            velocity = spawn.normalize().orthogonal(Turn.LEFT) * speed
            sim.add_body(spawn, velocity, mass=1.0)
            spawn = spawn.rotate(0.7) * 1.1
        sim.step(dt)

    for body in sim.bodies():
        x, y = body.position
        print(f"body {body.id:2d} | mass={body.mass:7.2f} | pos=({x:8.3f}, {y:8.3f})")
