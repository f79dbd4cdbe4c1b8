"""Error types raised by the simulation core."""

from __future__ import annotations


class InvalidMassError(ValueError):
    """A body was created with a mass that is not strictly positive."""


class InvalidDirectionError(ValueError):
    """An orthogonal turn was requested with something other than left/right."""
