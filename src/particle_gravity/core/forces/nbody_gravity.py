"""Newtonian N-body gravity for point masses."""

from __future__ import annotations

import math
import warnings
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from numbers import Integral

import numpy as np

from .base import ArrayF, ForceModel
from ..state.bodies import BodiesState


class ForceLaw(Enum):
    """Pairwise force law.

    INVERSE_SQUARE: G m_i m_j r / |r|^3, directed from body i toward body j.
    SCALAR_BROADCAST: G m_i m_j / |r|^2 added to every component of the
    accumulator with no direction. Kept to reproduce older runs; it does not
    model attraction.
    """

    INVERSE_SQUARE = "inverse_square"
    SCALAR_BROADCAST = "scalar_broadcast"


def _check_count(value: int | None, name: str) -> None:
    if value is None:
        return
    if not isinstance(value, Integral) or isinstance(value, bool) or value <= 0:
        raise ValueError(f"{name} must be a positive integer")


class NBodyGravity(ForceModel):
    """Pairwise gravity over a body set.

    With `workers > 1` the force pass runs on a thread pool owned by the
    model. The pool is created on first use and reused across steps; call
    `close()` to release it.
    """

    def __init__(
        self,
        G: float = 6.67430e-11,
        softening: float = 0.0,
        chunk_size: int | None = None,
        force_law: ForceLaw | str = ForceLaw.INVERSE_SQUARE,
        workers: int | None = None,
    ) -> None:
        _check_count(chunk_size, "chunk_size")
        _check_count(workers, "workers")
        self.G = float(G)
        self.softening = float(softening)
        self.chunk_size = None if chunk_size is None else int(chunk_size)
        self.force_law = ForceLaw(force_law)
        self.workers = None if workers is None else int(workers)
        self._pool: ThreadPoolExecutor | None = None
        if self.force_law is ForceLaw.SCALAR_BROADCAST:
            warnings.warn(
                "force_law='scalar_broadcast' adds an undirected magnitude to "
                "every force component and does not conserve momentum; use "
                "'inverse_square' for physical attraction",
                UserWarning,
                stacklevel=2,
            )

    def forces(self, state: BodiesState) -> ArrayF:
        if len(state) == 0:
            return np.zeros((0, state.dim), dtype=np.float64)
        return _nbody_forces(
            state.pos,
            state.mass,
            self.G,
            self.softening,
            self.force_law,
            self.chunk_size,
            self.workers,
            self._executor(),
        )

    def close(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def _executor(self) -> ThreadPoolExecutor | None:
        if self.workers is None or self.workers <= 1:
            return None
        if self._pool is None:
            self._pool = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="nbody-forces"
            )
        return self._pool


def _row_blocks(
    n: int, chunk_size: int | None, workers: int | None
) -> list[tuple[int, int]]:
    if chunk_size is None:
        chunk_size = n if not workers or workers <= 1 else math.ceil(n / workers)
    return [(i0, min(i0 + chunk_size, n)) for i0 in range(0, n, chunk_size)]


def _block_forces(
    pos: np.ndarray,
    mass: np.ndarray,
    i0: int,
    i1: int,
    eps2: float,
    force_law: ForceLaw,
) -> np.ndarray:
    delta = pos[None, :, :] - pos[i0:i1, None, :]
    r2 = np.sum(delta * delta, axis=-1)
    # self pairs and coincident pairs have zero separation and contribute nothing
    live = r2 > 0.0
    d2 = r2 + eps2
    mprod = mass[i0:i1, None] * mass[None, :]
    with np.errstate(divide="ignore", invalid="ignore"):
        if force_law is ForceLaw.INVERSE_SQUARE:
            coef = np.where(live, mprod * d2**-1.5, 0.0)
            return np.sum(delta * coef[..., np.newaxis], axis=1)
        mag = np.where(live, mprod / d2, 0.0)
    total = np.sum(mag, axis=1)
    return np.repeat(total[:, np.newaxis], pos.shape[1], axis=1)


def _nbody_forces(
    pos: np.ndarray,
    mass: np.ndarray,
    G: float,
    softening: float,
    force_law: ForceLaw,
    chunk_size: int | None,
    workers: int | None,
    pool: ThreadPoolExecutor | None,
) -> np.ndarray:
    n = pos.shape[0]
    eps2 = softening * softening
    out = np.zeros_like(pos, dtype=np.float64)
    blocks = _row_blocks(n, chunk_size, workers)

    def fill(block: tuple[int, int]) -> None:
        i0, i1 = block
        out[i0:i1] = _block_forces(pos, mass, i0, i1, eps2, force_law)

    if pool is None or len(blocks) == 1:
        for block in blocks:
            fill(block)
    else:
        # each block owns its rows of `out`; draining map() waits for every block
        list(pool.map(fill, blocks))
    return G * out
