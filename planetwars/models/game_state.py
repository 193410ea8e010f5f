"""Game state container."""

from dataclasses import dataclass, field

from .params import GameParams
from .planet import Planet
from .player import Player
from .transporter import Transporter


@dataclass
class GameState:
    """Main game state container.

    Holds the planets (index-stable, so planets[i].id == i) and the tick
    counter. The planet count is fixed for the lifetime of a match and only
    the forward model mutates a state. Search code works on deep copies.
    """

    planets: list[Planet] = field(default_factory=list)
    game_tick: int = 0
    params: GameParams | None = None  # Read-only, shared between copies

    def __post_init__(self):
        """Validate state data after initialization."""
        if self.game_tick < 0:
            raise ValueError(f"Invalid game_tick: {self.game_tick} (must be >= 0)")
        for index, planet in enumerate(self.planets):
            if planet.id != index:
                raise ValueError(f"Planet at index {index} has id {planet.id} (ids must match indices)")

    def deep_copy(self) -> "GameState":
        """Return a fully independent copy, transporters included."""
        return GameState(
            planets=[planet.copy() for planet in self.planets],
            game_tick=self.game_tick,
            params=self.params,
        )

    def transporters(self) -> list[Transporter]:
        """Return all transporters currently in flight."""
        return [planet.transporter for planet in self.planets if planet.transporter is not None]

    def planets_owned_by(self, player: Player) -> list[Planet]:
        return [planet for planet in self.planets if planet.owner == player]
