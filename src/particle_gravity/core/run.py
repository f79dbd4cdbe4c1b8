"""Simulation run loop with optional sampling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .simulation import Simulation


@dataclass(slots=True)
class RunResult:
    final: Simulation
    time: np.ndarray | None = None
    ids: np.ndarray | None = None
    positions: np.ndarray | None = None
    velocities: np.ndarray | None = None


def run(
    simulation: Simulation,
    dt: float,
    steps: int,
    sample_every: int | None = None,
    callback: Callable[[int, Simulation], None] | None = None,
) -> RunResult:
    """Advance `simulation` by `steps` steps of `dt`.

    With `sample_every`, positions and velocities are recorded at step 0 and
    every `sample_every` steps after it; the body set must not change size
    while sampling.
    """
    if sample_every is not None and sample_every <= 0:
        raise ValueError("sample_every must be > 0")
    if steps < 0:
        raise ValueError("steps must be >= 0")

    times: list[float] = []
    pos: list[np.ndarray] = []
    vel: list[np.ndarray] = []
    ids = simulation.state.ids.copy()

    def sample() -> None:
        if not np.array_equal(simulation.state.ids, ids):
            raise ValueError("body set changed while sampling")
        times.append(simulation.time)
        pos.append(simulation.state.pos.copy())
        vel.append(simulation.state.vel.copy())

    if sample_every is not None:
        sample()

    for step in range(1, steps + 1):
        simulation.step(dt)
        if callback is not None:
            callback(step, simulation)
        if sample_every is not None and step % sample_every == 0:
            sample()

    if sample_every is None:
        return RunResult(final=simulation)

    return RunResult(
        final=simulation,
        time=np.asarray(times, dtype=np.float64),
        ids=ids,
        positions=np.asarray(pos, dtype=np.float64),
        velocities=np.asarray(vel, dtype=np.float64),
    )
