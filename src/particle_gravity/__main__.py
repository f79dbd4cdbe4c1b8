"""Run a scenario JSON and optionally save sampled data."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import numpy as np

from . import __version__
from .core.diagnostics import kinetic_energy, linear_momentum, total_mass
from .core.run import run
from .io import load_scenario, scenario_to_runtime


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="particle_gravity")
    parser.add_argument("scenario", type=Path, nargs="?", default=None)
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument("--out", type=Path, default=None)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.scenario is None:
        print(f"particle_gravity v{__version__}")
        return 0

    defn = load_scenario(args.scenario)
    simulation, dt, steps, aux = scenario_to_runtime(defn)
    if args.steps is not None:
        steps = args.steps
    sample_every = aux["sample_every"]
    if args.out is not None and sample_every is None:
        sample_every = 1

    with simulation:
        result = run(simulation, dt, steps, sample_every=sample_every)
    final = result.final
    info = final.diagnostics()

    print("steps:", steps)
    print("dt:", dt)
    print("sim time:", final.time)
    print("bodies:", len(final))
    print("total mass:", total_mass(final.state))
    print("momentum:", linear_momentum(final.state))
    print("KE:", kinetic_energy(final.state))
    if "energy" in info:
        print("total energy:", info["energy"])

    if args.out is not None:
        np.savez_compressed(
            args.out,
            time=result.time,
            ids=result.ids,
            positions=result.positions,
            velocities=result.velocities,
        )
        print("saved samples to:", args.out)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
