"""Transporter data model for ships in flight."""

from dataclasses import dataclass

from ..utils.vector import Vec2d
from .player import Player


@dataclass
class Transporter:
    """Represents ships flying between two planets.

    Transporters are created when a player launches ships from a planet.
    They travel in a straight line at a fixed velocity and resolve on arrival
    at the destination planet. A transporter is attributed to the planet that
    launched it until it arrives, so each planet has at most one in flight.
    """

    owner: Player  # Player1 or Player2
    n_ships: float  # Fixed at launch
    source_index: int  # Launching planet id
    destination_index: int  # Target planet id
    position: Vec2d  # Current position
    velocity: Vec2d  # Per-tick displacement (direction * speed)

    def __post_init__(self):
        """Validate transporter data after initialization."""
        if not self.owner.is_real:
            raise ValueError(f"Invalid owner: {self.owner} (must be Player1 or Player2)")
        if self.n_ships <= 0:
            raise ValueError(f"Invalid n_ships: {self.n_ships} (must be > 0)")
        if self.source_index == self.destination_index:
            raise ValueError(f"Transporter cannot target its own source: {self.source_index}")

    def copy(self) -> "Transporter":
        # Vec2d is frozen, so sharing positions is safe
        return Transporter(
            owner=self.owner,
            n_ships=self.n_ships,
            source_index=self.source_index,
            destination_index=self.destination_index,
            position=self.position,
            velocity=self.velocity,
        )
