"""Ship growth at owned planets.

Every planet owned by a real player gains growth_rate ships at the end of
the tick. Neutral planets never grow.
"""

from ..models.game_state import GameState


def process_growth(state: GameState) -> GameState:
    """Execute the growth phase.

    Args:
        state: Current game state

    Returns:
        Updated game state with growth added
    """
    for planet in state.planets:
        if planet.owner.is_real:
            planet.n_ships += planet.growth_rate
    return state


def total_growth(state: GameState) -> float:
    """Sum of growth rates over all planets owned by a real player."""
    return sum(planet.growth_rate for planet in state.planets if planet.owner.is_real)
