"""Force/model interfaces."""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from ..state.bodies import BodiesState


ArrayF = NDArray[np.float64]


class Model(Protocol):
    def forces(self, state: BodiesState) -> ArrayF:
        """Return the force accumulator for every body as (N, D)."""

    def acc(self, state: BodiesState) -> ArrayF:
        """Return accelerations as (N, D)."""


class ForceModel:
    """Base class deriving accelerations from `forces`."""

    def forces(self, state: BodiesState) -> ArrayF:
        raise NotImplementedError

    def acc(self, state: BodiesState) -> ArrayF:
        if len(state) == 0:
            return np.zeros((0, state.dim), dtype=np.float64)
        return self.forces(state) / state.mass[:, np.newaxis]
