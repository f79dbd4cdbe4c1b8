from __future__ import annotations

import numpy as np
import pytest

from particle_gravity.core.diagnostics import (
    center_of_mass,
    kinetic_energy,
    linear_momentum,
    potential_energy_gravity,
    total_energy_gravity,
    total_mass,
)
from particle_gravity.core.state import BodiesState


def test_diagnostics_values() -> None:
    state = BodiesState.from_arrays(
        pos=[[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]],
        vel=[[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]],
        mass=[1.0, 3.0],
    )
    assert total_mass(state) == 4.0
    assert np.allclose(center_of_mass(state), np.array([1.5, 0.0, 0.0]))
    assert np.allclose(linear_momentum(state), np.array([1.0, 6.0, 0.0]))
    assert kinetic_energy(state) == 6.5


def test_diagnostics_empty_set_behavior() -> None:
    state = BodiesState(dim=2)
    assert total_mass(state) == 0.0
    assert np.array_equal(linear_momentum(state), np.zeros(2, dtype=np.float64))
    assert kinetic_energy(state) == 0.0
    assert potential_energy_gravity(state, G=1.0) == 0.0
    with pytest.raises(ValueError, match="empty body set"):
        _ = center_of_mass(state)


def test_gravity_potential_energy() -> None:
    state = BodiesState.from_arrays(
        pos=[[0.0, 0.0, 0.0], [4.0, 0.0, 0.0]],
        vel=[[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]],
        mass=[2.0, 3.0],
    )
    pe = potential_energy_gravity(state, G=1.0)
    assert pe == -1.5
    assert total_energy_gravity(state, G=1.0) == pe


def test_potential_skips_coincident_pairs() -> None:
    state = BodiesState.from_arrays(
        pos=[[0.0, 0.0], [0.0, 0.0], [2.0, 0.0]],
        vel=[[0.0, 0.0], [0.0, 0.0], [0.0, 0.0]],
        mass=[1.0, 1.0, 1.0],
    )
    assert potential_energy_gravity(state, G=1.0) == -1.0
