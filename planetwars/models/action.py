"""Action data model for player commands."""

from dataclasses import dataclass

from .player import Player


@dataclass(frozen=True)
class Action:
    """Represents a launch order submitted by a player for one tick.

    Actions are frozen so they can key MCTS children and be deduplicated.
    Legality (ownership, free transporter slot, enough ships) is checked by
    the forward model when the action is applied, not here.
    """

    player: Player
    source_planet_id: int
    destination_planet_id: int
    num_ships: float

    @staticmethod
    def do_nothing() -> "Action":
        """Return the shared do-nothing sentinel."""
        return DO_NOTHING

    @property
    def is_do_nothing(self) -> bool:
        return self == DO_NOTHING or self.source_planet_id < 0 or self.destination_planet_id < 0

    def __str__(self) -> str:
        if self.is_do_nothing:
            return "DoNothing"
        return (
            f"{self.player.value}: {self.source_planet_id} -> "
            f"{self.destination_planet_id} ({self.num_ships:.1f} ships)"
        )


DO_NOTHING = Action(
    player=Player.NEUTRAL,
    source_planet_id=-1,
    destination_planet_id=-1,
    num_ships=0.0,
)
