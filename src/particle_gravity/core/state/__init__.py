"""State namespace."""

from .bodies import BodiesState, Body, check_mass  # noqa: F401
