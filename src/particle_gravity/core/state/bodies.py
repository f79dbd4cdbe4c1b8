"""Body set container."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..errors import InvalidMassError
from ..math.vector import as_vectors
from ..math.vector2 import Vector2


ArrayF = NDArray[np.float64]
ArrayI = NDArray[np.int64]

_MIN_CAPACITY = 16


@dataclass(frozen=True, slots=True, eq=False)
class Body:
    """Read-only snapshot of one body."""

    id: int
    position: ArrayF
    velocity: ArrayF
    mass: float


def check_mass(mass: float) -> float:
    m = float(mass)
    if not math.isfinite(m) or m <= 0.0:
        raise InvalidMassError(f"mass must be > 0, got {mass!r}")
    return m


class BodiesState:
    """Growable set of point masses indexed by stable integer ids.

    `pos`, `vel`, `mass` and `ids` are views over the first `len(self)` rows
    of over-allocated buffers. Appends are amortized O(1); removal is O(n)
    and keeps the remaining bodies in insertion order. Ids are never reused.
    """

    def __init__(self, dim: int = 3, capacity: int = _MIN_CAPACITY) -> None:
        if dim not in (2, 3):
            raise ValueError("dim must be 2 or 3")
        capacity = max(int(capacity), 1)
        self.dim = dim
        self._pos = np.zeros((capacity, dim), dtype=np.float64)
        self._vel = np.zeros((capacity, dim), dtype=np.float64)
        self._mass = np.zeros(capacity, dtype=np.float64)
        self._ids = np.zeros(capacity, dtype=np.int64)
        self._count = 0
        self._next_id = 0

    @classmethod
    def from_arrays(
        cls,
        pos: ArrayLike,
        vel: ArrayLike,
        mass: ArrayLike,
        ids: ArrayLike | None = None,
        dim: int | None = None,
    ) -> "BodiesState":
        pos_arr = np.asarray(pos, dtype=np.float64)
        if pos_arr.size == 0:
            pos_arr = pos_arr.reshape(0, dim if dim is not None else 3)
        if pos_arr.ndim != 2 or pos_arr.shape[1] not in (2, 3):
            raise ValueError("pos must have shape (N, 2) or (N, 3)")
        if dim is not None and pos_arr.shape[1] != dim:
            raise ValueError(f"pos must have shape (N, {dim})")
        dim = pos_arr.shape[1]
        vel_arr = as_vectors(vel, dim, "vel")
        if vel_arr.shape != pos_arr.shape:
            raise ValueError(f"vel must have shape (N, {dim})")
        mass_arr = np.asarray(mass, dtype=np.float64)
        if mass_arr.ndim != 1 or mass_arr.shape[0] != pos_arr.shape[0]:
            raise ValueError("mass must have shape (N,)")
        for m in mass_arr:
            check_mass(m)

        n = pos_arr.shape[0]
        if ids is None:
            id_arr = np.arange(n, dtype=np.int64)
        else:
            id_arr = np.asarray(ids, dtype=np.int64)
            if id_arr.shape != (n,):
                raise ValueError("ids must have shape (N,)")
            if np.unique(id_arr).shape[0] != n:
                raise ValueError("ids must be unique")

        state = cls(dim=dim, capacity=max(n, _MIN_CAPACITY))
        state._pos[:n] = pos_arr
        state._vel[:n] = vel_arr
        state._mass[:n] = mass_arr
        state._ids[:n] = id_arr
        state._count = n
        state._next_id = int(id_arr.max()) + 1 if n else 0
        return state

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Body]:
        return iter(self.bodies())

    @property
    def capacity(self) -> int:
        return self._mass.shape[0]

    @property
    def pos(self) -> ArrayF:
        return self._pos[: self._count]

    @pos.setter
    def pos(self, value: ArrayLike) -> None:
        self._pos[: self._count] = value

    @property
    def vel(self) -> ArrayF:
        return self._vel[: self._count]

    @vel.setter
    def vel(self, value: ArrayLike) -> None:
        self._vel[: self._count] = value

    @property
    def mass(self) -> ArrayF:
        return self._mass[: self._count]

    @property
    def ids(self) -> ArrayI:
        return self._ids[: self._count]

    def append(
        self,
        position: ArrayLike | Vector2,
        velocity: ArrayLike | Vector2 | None = None,
        mass: float = 1.0,
    ) -> int:
        """Add a body and return its id. Invalid input leaves the set unchanged."""
        m = check_mass(mass)
        p = self._row(position, "position")
        v = (
            np.zeros(self.dim, dtype=np.float64)
            if velocity is None
            else self._row(velocity, "velocity")
        )
        if self._count == self.capacity:
            self._grow(2 * self.capacity)
        i = self._count
        body_id = self._next_id
        self._pos[i] = p
        self._vel[i] = v
        self._mass[i] = m
        self._ids[i] = body_id
        self._count += 1
        self._next_id += 1
        return body_id

    def remove(self, body_id: int) -> None:
        i = self.index_of(body_id)
        n = self._count
        for buf in (self._pos, self._vel, self._mass, self._ids):
            buf[i : n - 1] = buf[i + 1 : n]
        self._count -= 1

    def index_of(self, body_id: int) -> int:
        hits = np.flatnonzero(self.ids == body_id)
        if hits.size == 0:
            raise KeyError(f"unknown body id: {body_id}")
        return int(hits[0])

    def body(self, body_id: int) -> Body:
        return self._snapshot(self.index_of(body_id))

    def bodies(self) -> list[Body]:
        return [self._snapshot(i) for i in range(self._count)]

    def validate(self) -> None:
        if self.pos.shape != (self._count, self.dim):
            raise ValueError(f"pos must have shape (N, {self.dim})")
        if self.vel.shape != self.pos.shape:
            raise ValueError(f"vel must have shape (N, {self.dim})")
        if np.any(~np.isfinite(self.mass)) or np.any(self.mass <= 0.0):
            raise InvalidMassError("mass must be > 0")

    def copy(self) -> "BodiesState":
        other = BodiesState(dim=self.dim, capacity=self.capacity)
        other._pos[:] = self._pos
        other._vel[:] = self._vel
        other._mass[:] = self._mass
        other._ids[:] = self._ids
        other._count = self._count
        other._next_id = self._next_id
        return other

    def _row(self, value: ArrayLike | Vector2, ctx: str) -> ArrayF:
        if isinstance(value, Vector2):
            value = value.as_array()
        row = np.asarray(value, dtype=np.float64)
        if row.shape != (self.dim,):
            raise ValueError(f"{ctx} must have length {self.dim}")
        return row

    def _snapshot(self, i: int) -> Body:
        pos = self._pos[i].copy()
        vel = self._vel[i].copy()
        pos.flags.writeable = False
        vel.flags.writeable = False
        return Body(
            id=int(self._ids[i]),
            position=pos,
            velocity=vel,
            mass=float(self._mass[i]),
        )

    def _grow(self, capacity: int) -> None:
        n = self._count
        pos = np.zeros((capacity, self.dim), dtype=np.float64)
        vel = np.zeros((capacity, self.dim), dtype=np.float64)
        mass = np.zeros(capacity, dtype=np.float64)
        ids = np.zeros(capacity, dtype=np.int64)
        pos[:n] = self._pos[:n]
        vel[:n] = self._vel[:n]
        mass[:n] = self._mass[:n]
        ids[:n] = self._ids[:n]
        self._pos, self._vel, self._mass, self._ids = pos, vel, mass, ids
