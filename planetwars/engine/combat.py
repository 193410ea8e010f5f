"""Arrival and combat resolution.

This module handles:
1. Grouping arriving transporters by destination and owner
2. Reinforcement (arrivals owned by the planet owner)
3. Attacker vs attacker cancellation (both players hitting a third planet)
4. Attacker vs garrison combat and ownership updates
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..models.game_state import GameState
from ..models.planet import Planet
from ..models.player import Player
from .movement import Arrival

logger = logging.getLogger(__name__)


@dataclass
class CombatResult:
    """Result of a combat resolution.

    Attributes:
        winner: "attacker", "defender", or None (for tie)
        attacker_survivors: Number of ships remaining for attacker
        defender_survivors: Number of ships remaining for defender
    """

    winner: Optional[str]
    attacker_survivors: float
    defender_survivors: float


@dataclass
class CombatEvent:
    """Record of a combat at a planet.

    Attributes:
        planet_id: Planet where combat occurred
        attacker: Player whose ships attacked the garrison
        defender: Owner of the planet before combat (may be Neutral)
        attacker_ships: Attacking ships after attacker cancellation
        defender_ships: Garrison after reinforcements
        winner: "attacker", "defender", or None (tie)
        owner_after: Planet owner after combat
        ships_after: Planet garrison after combat
    """

    planet_id: int
    attacker: Player
    defender: Player
    attacker_ships: float
    defender_ships: float
    winner: Optional[str]
    owner_after: Player
    ships_after: float


def resolve_combat(attacker_ships: float, defender_ships: float) -> CombatResult:
    """Resolve combat between two forces.

    Combat rules:
    - attacker_ships > defender_ships: attacker wins with the difference
    - attacker_ships < defender_ships: defender keeps the difference
    - attacker_ships == defender_ships: tie, both eliminated

    Args:
        attacker_ships: Number of attacking ships
        defender_ships: Number of defending ships

    Returns:
        CombatResult with winner and survivors
    """
    if attacker_ships > defender_ships:
        return CombatResult(
            winner="attacker",
            attacker_survivors=attacker_ships - defender_ships,
            defender_survivors=0.0,
        )
    if attacker_ships < defender_ships:
        return CombatResult(
            winner="defender",
            attacker_survivors=0.0,
            defender_survivors=defender_ships - attacker_ships,
        )
    return CombatResult(winner=None, attacker_survivors=0.0, defender_survivors=0.0)


def resolve_arrival(planet: Planet, owner: Player, n_ships: float) -> Optional[CombatEvent]:
    """Apply a single arriving force to a planet.

    Reinforces the planet if the arriving owner already holds it, otherwise
    fights the garrison:
    - attacker wins: ownership flips, garrison = arriving - defending
    - defender wins: garrison = defending - arriving
    - tie: planet becomes Neutral with zero ships

    Args:
        planet: Destination planet (updated in place)
        owner: Owner of the arriving ships
        n_ships: Number of arriving ships

    Returns:
        CombatEvent if combat occurred, None for a reinforcement
    """
    if planet.owner == owner:
        planet.n_ships += n_ships
        return None

    defender = planet.owner
    defender_ships = planet.n_ships
    result = resolve_combat(n_ships, defender_ships)

    if result.winner == "attacker":
        planet.owner = owner
        planet.n_ships = result.attacker_survivors
    elif result.winner == "defender":
        planet.n_ships = result.defender_survivors
    else:
        planet.owner = Player.NEUTRAL
        planet.n_ships = 0.0

    return CombatEvent(
        planet_id=planet.id,
        attacker=owner,
        defender=defender,
        attacker_ships=n_ships,
        defender_ships=defender_ships,
        winner=result.winner,
        owner_after=planet.owner,
        ships_after=planet.n_ships,
    )


def process_arrivals(state: GameState, arrivals: list[Arrival]) -> tuple[GameState, list[CombatEvent]]:
    """Execute the combat phase for all arrivals of one tick.

    Arrivals are summed per destination and per owner before anything is
    resolved, so the order in which transporters arrived within the tick is
    not observable:
    1. Ships owned by the planet owner reinforce the garrison first
    2. If both players attack the same planet, their forces cancel and only
       the stronger remainder attacks (equal forces annihilate)
    3. The remaining attacker fights the garrison

    Args:
        state: Current game state
        arrivals: Arrivals produced by the movement phase

    Returns:
        Tuple of (updated game state, combat events in planet order)
    """
    incoming: dict[int, dict[Player, float]] = {}
    for arrival in arrivals:
        forces = incoming.setdefault(arrival.destination_index, {})
        forces[arrival.owner] = forces.get(arrival.owner, 0.0) + arrival.n_ships

    combat_events = []
    for planet_id in sorted(incoming):
        planet = state.planets[planet_id]
        forces = incoming[planet_id]

        # Reinforcements
        if planet.owner in forces:
            resolve_arrival(planet, planet.owner, forces.pop(planet.owner))

        if not forces:
            continue

        attacker, attacking_ships = _net_attacking_force(forces)
        if attacker is None:
            logger.debug(f"Attackers annihilated each other above planet {planet_id}")
            continue

        event = resolve_arrival(planet, attacker, attacking_ships)
        if event is not None:
            combat_events.append(event)

    return state, combat_events


def _net_attacking_force(forces: dict[Player, float]) -> tuple[Optional[Player], float]:
    """Cancel opposing attackers against each other.

    Args:
        forces: Attacking ships per player (planet owner already removed)

    Returns:
        Tuple of (surviving attacker or None, surviving ships)
    """
    if len(forces) == 1:
        ((attacker, ships),) = forces.items()
        return attacker, ships

    p1_ships = forces.get(Player.PLAYER1, 0.0)
    p2_ships = forces.get(Player.PLAYER2, 0.0)
    if p1_ships > p2_ships:
        return Player.PLAYER1, p1_ships - p2_ships
    if p2_ships > p1_ships:
        return Player.PLAYER2, p2_ships - p1_ships
    return None, 0.0
