"""Planet data model."""

from dataclasses import dataclass
from typing import Optional

from ..utils.vector import Vec2d
from .player import Player
from .transporter import Transporter


@dataclass
class Planet:
    """Represents a capturable planet on the board.

    Planets are the main strategic locations in the game. Owned planets grow
    their garrison by growth_rate ships every tick; neutral planets never
    grow. A planet can have one transporter in flight at a time.
    """

    id: int  # Index into GameState.planets, stable across copies
    position: Vec2d
    radius: float
    owner: Player
    n_ships: float  # Garrison, never negative
    growth_rate: float  # Ships added per tick while owned by a real player
    transporter: Optional[Transporter] = None

    def __post_init__(self):
        """Validate planet data after initialization."""
        if self.id < 0:
            raise ValueError(f"Invalid id: {self.id} (must be >= 0)")
        if self.radius < 0:
            raise ValueError(f"Invalid radius: {self.radius} (must be >= 0)")
        if self.n_ships < 0:
            raise ValueError(f"Invalid n_ships: {self.n_ships} (must be >= 0)")
        if self.growth_rate < 0:
            raise ValueError(f"Invalid growth_rate: {self.growth_rate} (must be >= 0)")

    def copy(self) -> "Planet":
        """Return an independent copy, including the in-flight transporter."""
        return Planet(
            id=self.id,
            position=self.position,
            radius=self.radius,
            owner=self.owner,
            n_ships=self.n_ships,
            growth_rate=self.growth_rate,
            transporter=self.transporter.copy() if self.transporter else None,
        )
