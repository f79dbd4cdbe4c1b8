"""Math utilities namespace."""

from .vector import as_vectors, norm, unit  # noqa: F401
from .vector2 import Direction, Turn, Vector2  # noqa: F401
