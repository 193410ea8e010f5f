"""Termination and scoring.

This module handles:
1. Counting a player's ships (garrisons plus ships in flight)
2. Checking elimination (no planets AND no transporters in flight)
3. Checking the termination condition (tick limit or elimination)
4. Determining the leader
"""

from ..models.game_state import GameState
from ..models.params import GameParams
from ..models.player import REAL_PLAYERS, Player


def get_ships(state: GameState, player: Player) -> float:
    """Return ships on the player's planets plus ships on its transporters.

    Args:
        state: Current game state
        player: Player to count for

    Returns:
        Total ship count for the player
    """
    on_planets = sum(planet.n_ships for planet in state.planets if planet.owner == player)
    in_flight = sum(
        transporter.n_ships for transporter in state.transporters() if transporter.owner == player
    )
    return on_planets + in_flight


def is_eliminated(state: GameState, player: Player) -> bool:
    """Check whether a player owns no planets and has nothing in flight.

    A player with zero planets but a transporter still in flight is NOT
    eliminated: that transporter may yet capture a planet.
    """
    if any(planet.owner == player for planet in state.planets):
        return False
    return not any(transporter.owner == player for transporter in state.transporters())


def is_terminal(state: GameState, params: GameParams) -> bool:
    """Check whether the game is over.

    The game ends when the tick limit is reached, or when either real
    player has been eliminated.

    Args:
        state: Current game state
        params: Game parameters (for max_ticks)

    Returns:
        True if the game is over
    """
    if state.game_tick >= params.max_ticks:
        return True
    return any(is_eliminated(state, player) for player in REAL_PLAYERS)


def get_leader(state: GameState) -> Player:
    """Return the real player with more ships, or Neutral on a tie."""
    p1_ships = get_ships(state, Player.PLAYER1)
    p2_ships = get_ships(state, Player.PLAYER2)
    if p1_ships > p2_ships:
        return Player.PLAYER1
    if p2_ships > p1_ships:
        return Player.PLAYER2
    return Player.NEUTRAL
