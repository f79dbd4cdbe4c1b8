"""Two-dimensional vector value type.

Conventions:
- Components share one numeric kind: both int or both float. Mixed input
  is widened to float.
- Operators return new vectors; only +=, -= and *= mutate in place.
- Angles are radians, counter-clockwise positive.
- float -> int conversion rounds halves away from zero.
"""

from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Iterator, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..errors import InvalidDirectionError


Number = Union[int, float]


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Turn(Enum):
    """Quarter turn used by `Vector2.orthogonal`."""

    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def from_direction(cls, direction: Direction) -> "Turn":
        if direction is Direction.LEFT:
            return cls.LEFT
        if direction is Direction.RIGHT:
            return cls.RIGHT
        raise InvalidDirectionError(
            f"direction {direction!r} has no orthogonal turn; use LEFT or RIGHT"
        )


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _coerce(x: Number, y: Number) -> tuple[Number, Number]:
    if isinstance(x, numbers.Integral) and isinstance(y, numbers.Integral):
        return int(x), int(y)
    return float(x), float(y)


class Vector2:
    __slots__ = ("x", "y")

    def __init__(self, x: Number = 0, y: Number = 0) -> None:
        self.x, self.y = _coerce(x, y)

    @classmethod
    def from_array(cls, values: ArrayLike) -> "Vector2":
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != (2,):
            raise ValueError("Vector2 requires exactly two components")
        return cls(float(arr[0]), float(arr[1]))

    @property
    def is_integral(self) -> bool:
        return isinstance(self.x, int) and isinstance(self.y, int)

    def __iter__(self) -> Iterator[Number]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Vector2({self.x!r}, {self.y!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: "Vector2 | Number") -> "Vector2":
        result = Vector2(self.x, self.y)
        result += other
        return result

    def __sub__(self, other: "Vector2 | Number") -> "Vector2":
        result = Vector2(self.x, self.y)
        result -= other
        return result

    def __mul__(self, scalar: Number) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __iadd__(self, other: "Vector2 | Number") -> "Vector2":
        if isinstance(other, Vector2):
            self.x, self.y = _coerce(self.x + other.x, self.y + other.y)
        else:
            self.x, self.y = _coerce(self.x + other, self.y + other)
        return self

    def __isub__(self, other: "Vector2 | Number") -> "Vector2":
        if isinstance(other, Vector2):
            self.x, self.y = _coerce(self.x - other.x, self.y - other.y)
        else:
            self.x, self.y = _coerce(self.x - other, self.y - other)
        return self

    def __imul__(self, other: "Vector2 | Number") -> "Vector2":
        if isinstance(other, Vector2):
            self.x, self.y = _coerce(self.x * other.x, self.y * other.y)
        else:
            self.x, self.y = _coerce(self.x * other, self.y * other)
        return self

    def rotate(self, angle: float) -> "Vector2":
        """Rotate counter-clockwise by `angle` radians.

        Integer vectors are rotated in floating point and rounded back.
        """
        x = float(self.x)
        y = float(self.y)
        c = math.cos(angle)
        s = math.sin(angle)
        rotated = Vector2(x * c - y * s, x * s + y * c)
        return rotated.to_int() if self.is_integral else rotated

    def angle(self) -> float:
        """Return the polar angle in radians, in (-pi, pi].

        A negative-zero y on the negative x axis reports pi, not -pi.
        """
        a = math.atan2(float(self.y), float(self.x))
        return math.pi if a == -math.pi else a

    def orthogonal(self, turn: Turn) -> "Vector2":
        if turn is Turn.RIGHT:
            return Vector2(self.y, -self.x)
        if turn is Turn.LEFT:
            return Vector2(-self.y, self.x)
        raise InvalidDirectionError(
            f"orthogonal turn must be Turn.LEFT or Turn.RIGHT, got {turn!r}"
        )

    def dot(self, other: "Vector2") -> Number:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(float(self.x), float(self.y))

    def normalize(self) -> "Vector2":
        """Return the unit vector; a zero vector is returned unchanged."""
        mag = self.magnitude()
        if mag > 0.0:
            return Vector2(self.x / mag, self.y / mag)
        return Vector2(self.x, self.y)

    def to_int(self) -> "Vector2":
        return Vector2(_round_half_away(self.x), _round_half_away(self.y))

    def to_float(self) -> "Vector2":
        return Vector2(float(self.x), float(self.y))

    def as_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=np.float64)
