"""Forces and model utilities."""

from .base import ForceModel, Model  # noqa: F401
from .nbody_gravity import ForceLaw, NBodyGravity  # noqa: F401
