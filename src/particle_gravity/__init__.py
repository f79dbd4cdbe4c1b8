"""Point-mass N-body gravity simulation."""

from __future__ import annotations

__version__ = "0.1.0"

from .core.errors import InvalidDirectionError, InvalidMassError  # noqa: E402,F401
from .core.forces import ForceLaw, NBodyGravity  # noqa: E402,F401
from .core.integrators import SymplecticEuler, VelocityVerlet  # noqa: E402,F401
from .core.math import Direction, Turn, Vector2  # noqa: E402,F401
from .core.simulation import Simulation  # noqa: E402,F401
from .core.state import BodiesState, Body  # noqa: E402,F401
