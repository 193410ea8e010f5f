"""2D vector and distance calculations for the game board."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2d:
    """Immutable 2D vector used for planet positions and transporter motion.

    Frozen so positions can be shared between copied game states without
    aliasing concerns.
    """

    x: float
    y: float

    def __add__(self, other: "Vec2d") -> "Vec2d":
        return Vec2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2d") -> "Vec2d":
        return Vec2d(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vec2d":
        return Vec2d(self.x * factor, self.y * factor)

    def dot(self, other: "Vec2d") -> float:
        return self.x * other.x + self.y * other.y

    def mag(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vec2d":
        """Return the unit vector in this direction (zero vector stays zero)."""
        length = self.mag()
        if length == 0.0:
            return Vec2d(0.0, 0.0)
        return Vec2d(self.x / length, self.y / length)

    def distance(self, other: "Vec2d") -> float:
        return euclidean_distance(self.x, self.y, other.x, other.y)


def euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Calculate straight-line distance between two points.

    Transporters fly in straight lines at a fixed speed, so travel time
    between planets is this distance divided by the transporter speed.

    Args:
        x1: X coordinate of first point
        y1: Y coordinate of first point
        x2: X coordinate of second point
        y2: Y coordinate of second point

    Returns:
        Euclidean distance between the two points

    Examples:
        >>> euclidean_distance(0, 0, 3, 4)
        5.0
    """
    return math.hypot(x2 - x1, y2 - y1)
