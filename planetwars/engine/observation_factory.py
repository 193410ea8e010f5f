"""Build per-player observations from the authoritative state.

Each player sees the full board layout, ownership, growth rates and
transporter trajectories. Ship counts belonging to the opponent (planet
garrisons and transporter loads) are hidden. Neutral garrisons stay visible.
"""

from ..models import (
    GameState,
    Observation,
    PlanetObservation,
    Player,
    TransporterObservation,
)


def create_observation(state: GameState, observer: Player) -> Observation:
    """Create the observation of a state for one player.

    Args:
        state: Authoritative game state (not modified)
        observer: Player1 or Player2

    Returns:
        Observation with opponent ship counts set to None

    Raises:
        ValueError: If observer is Neutral
    """
    opponent = observer.opponent()
    observed_planets = []

    for planet in state.planets:
        transporter = None
        if planet.transporter is not None:
            t = planet.transporter
            transporter = TransporterObservation(
                owner=t.owner,
                n_ships=None if t.owner == opponent else t.n_ships,
                source_index=t.source_index,
                destination_index=t.destination_index,
                position=t.position,
                velocity=t.velocity,
            )

        observed_planets.append(
            PlanetObservation(
                id=planet.id,
                position=planet.position,
                radius=planet.radius,
                owner=planet.owner,
                n_ships=None if planet.owner == opponent else planet.n_ships,
                growth_rate=planet.growth_rate,
                transporter=transporter,
            )
        )

    return Observation(observer=observer, observed_planets=observed_planets, game_tick=state.game_tick)
