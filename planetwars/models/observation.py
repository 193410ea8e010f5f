"""Partial-observation views of a game state.

An Observation is what one player is allowed to see: the board layout,
ownership and growth rates are public, but the ship counts of planets and
transporters owned by the opponent are hidden (None).
"""

from dataclasses import dataclass, field
from typing import Optional

from ..utils.vector import Vec2d
from .player import Player


@dataclass
class TransporterObservation:
    """Observed transporter; n_ships is None when owned by the opponent."""

    owner: Player
    n_ships: Optional[float]
    source_index: int
    destination_index: int
    position: Vec2d
    velocity: Vec2d


@dataclass
class PlanetObservation:
    """Observed planet; n_ships is None when owned by the opponent."""

    id: int
    position: Vec2d
    radius: float
    owner: Player
    n_ships: Optional[float]
    growth_rate: float
    transporter: Optional[TransporterObservation] = None


@dataclass
class Observation:
    """A single player's view of the board at one tick."""

    observer: Player
    observed_planets: list[PlanetObservation] = field(default_factory=list)
    game_tick: int = 0

    def __post_init__(self):
        """Validate observation data after initialization."""
        if not self.observer.is_real:
            raise ValueError(f"Invalid observer: {self.observer} (must be Player1 or Player2)")
