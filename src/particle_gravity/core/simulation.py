"""N-body simulation: the authoritative body set plus its stepping rules."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from .diagnostics.bodies import kinetic_energy, linear_momentum, total_energy_gravity
from .forces.nbody_gravity import ForceLaw, NBodyGravity
from .integrators import Integrator, SymplecticEuler
from .math.vector2 import Vector2
from .state.bodies import BodiesState, Body


class Simulation:
    """Owns the bodies, the gravity model and the integrator.

    Each `step` runs the force pass over the whole set before any velocity
    or position changes, then integrates every body. Bodies may be added or
    removed between steps; their ids stay stable.
    """

    def __init__(
        self,
        G: float = 6.67430e-11,
        dim: int | None = None,
        force_law: ForceLaw | str = ForceLaw.INVERSE_SQUARE,
        softening: float = 0.0,
        integrator: Integrator | None = None,
        chunk_size: int | None = None,
        workers: int | None = None,
        state: BodiesState | None = None,
    ) -> None:
        if state is None:
            state = BodiesState(dim=3 if dim is None else dim)
        elif dim is not None and dim != state.dim:
            raise ValueError(f"dim must match state dim {state.dim}, got {dim}")
        self.state = state
        self.model = NBodyGravity(
            G=G,
            softening=softening,
            chunk_size=chunk_size,
            force_law=force_law,
            workers=workers,
        )
        self.integrator = integrator if integrator is not None else SymplecticEuler()
        self.time = 0.0
        self.step_count = 0

    @property
    def G(self) -> float:
        return self.model.G

    @property
    def dim(self) -> int:
        return self.state.dim

    def __len__(self) -> int:
        return len(self.state)

    def add_body(
        self,
        position: ArrayLike | Vector2,
        velocity: ArrayLike | Vector2 | None = None,
        mass: float = 1.0,
    ) -> int:
        return self.state.append(position, velocity, mass)

    def remove_body(self, body_id: int) -> None:
        self.state.remove(body_id)

    def body(self, body_id: int) -> Body:
        return self.state.body(body_id)

    def bodies(self) -> list[Body]:
        return self.state.bodies()

    def positions(self) -> np.ndarray:
        pos = self.state.pos.copy()
        pos.flags.writeable = False
        return pos

    def step(self, dt: float) -> None:
        self.integrator.step(self.state, self.model, dt)
        self.time += dt
        self.step_count += 1

    def close(self) -> None:
        """Release the force pass thread pool, if any. Clones share it."""
        self.model.close()

    def __enter__(self) -> "Simulation":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def clone(self) -> "Simulation":
        other = Simulation.__new__(Simulation)
        other.state = self.state.copy()
        other.model = self.model
        other.integrator = self.integrator
        other.time = self.time
        other.step_count = self.step_count
        return other

    def diagnostics(self) -> dict[str, Any]:
        info: dict[str, Any] = {
            "step": self.step_count,
            "time": self.time,
            "bodies": len(self.state),
            "momentum": linear_momentum(self.state),
            "kinetic_energy": kinetic_energy(self.state),
        }
        if self.model.force_law is ForceLaw.INVERSE_SQUARE:
            info["energy"] = total_energy_gravity(
                self.state, self.model.G, self.model.softening
            )
        return info
