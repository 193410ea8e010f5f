"""Transporter movement and arrival detection.

This module handles:
1. Advancing every transporter in flight by its fixed velocity
2. Detecting arrivals (within the destination radius, or about to pass it)
3. Freeing the launching planet's transporter slot on arrival

Note: Ships are deducted from source planets when the launch order is
processed, NOT here. Arrival resolution (reinforcement or combat) happens in
the combat phase so that simultaneous arrivals can be grouped first.
"""

from dataclasses import dataclass

from ..models.game_state import GameState
from ..models.player import Player
from ..models.transporter import Transporter
from ..utils.vector import Vec2d


@dataclass
class Arrival:
    """Record of a transporter reaching its destination.

    Attributes:
        owner: Owner of the arriving ships
        n_ships: Number of arriving ships
        source_index: Planet that launched the transporter
        destination_index: Planet being reached
    """

    owner: Player
    n_ships: float
    source_index: int
    destination_index: int


def process_transporter_movement(state: GameState) -> tuple[GameState, list[Arrival]]:
    """Execute the movement phase.

    1. Move each transporter by its velocity
    2. Transporters that reach or pass their destination planet arrive:
       - Removed from their source planet's slot
       - Reported as Arrival records for the combat phase

    A transporter's distance to its destination strictly decreases every
    tick, so every transporter eventually arrives.

    Args:
        state: Current game state

    Returns:
        Tuple of (updated game state, arrivals this tick in planet order)
    """
    arrivals = []

    for planet in state.planets:
        transporter = planet.transporter
        if transporter is None:
            continue

        destination = state.planets[transporter.destination_index]
        if _advance(transporter, destination.position, destination.radius):
            arrivals.append(
                Arrival(
                    owner=transporter.owner,
                    n_ships=transporter.n_ships,
                    source_index=transporter.source_index,
                    destination_index=transporter.destination_index,
                )
            )
            planet.transporter = None

    return state, arrivals


def _advance(transporter: Transporter, target: Vec2d, target_radius: float) -> bool:
    """Move a transporter one tick; return True if it has arrived.

    Args:
        transporter: Transporter to move (updated in place)
        target: Destination planet position
        target_radius: Destination planet radius

    Returns:
        True if the transporter reached or passed the destination this tick
    """
    new_position = transporter.position + transporter.velocity
    remaining = target - new_position

    # Inside the planet, or the destination is now behind us
    if remaining.mag() <= target_radius or remaining.dot(transporter.velocity) <= 0.0:
        return True

    transporter.position = new_position
    return False
