"""Map generation: builds the initial GameState of a match."""

import logging

from ..models import GameParams, GameState, Planet, Player
from ..utils import GameRNG, Vec2d

logger = logging.getLogger(__name__)

# Attempts allowed per mirrored pair before giving up on a board
MAX_PLACEMENT_ATTEMPTS = 1000


class GameStateFactory:
    """Creates symmetric starting positions from GameParams.

    Algorithm:
    1. For an odd planet count, place one neutral planet at the board centre
    2. Place planets in point-mirrored pairs: a random position inside the
       edge margin and its reflection through the board centre, so both
       players face an identical map
    3. Reject a pair if any planet is closer to another than
       radial_separation * (r1 + r2)
    4. Give the first pairs to the players (one side each) and leave the
       rest neutral, according to initial_neutral_ratio

    Planet ids equal their index in GameState.planets.
    """

    def __init__(self, params: GameParams, seed: int | None = None):
        """Initialize the factory.

        Args:
            params: Game parameters to build states for
            seed: RNG seed for deterministic maps, or None
        """
        self.params = params
        self.rng = GameRNG(seed)

    def create_game(self) -> GameState:
        """Generate a new initial state.

        Returns:
            GameState at tick 0 with no transporters in flight

        Raises:
            RuntimeError: If the planets cannot be placed on the board
        """
        params = self.params
        n_pairs = params.num_planets // 2
        n_neutral = int(params.num_planets * params.initial_neutral_ratio)
        n_owned_pairs = max(1, min(n_pairs, (params.num_planets - n_neutral) // 2))

        placed: list[tuple[Vec2d, float, float, float]] = []
        if params.num_planets % 2 == 1:
            centre = Vec2d(params.width / 2.0, params.height / 2.0)
            placed.append(self._random_planet_stats(centre))

        pairs: list[tuple[tuple, tuple]] = []
        for pair_index in range(n_pairs):
            pair = self._place_pair(placed, pair_index)
            placed.extend(pair)
            pairs.append(pair)

        planets: list[Planet] = []
        for pair_index, (first, mirror) in enumerate(pairs):
            owned = pair_index < n_owned_pairs
            planets.append(self._make_planet(len(planets), first, Player.PLAYER1 if owned else Player.NEUTRAL))
            planets.append(self._make_planet(len(planets), mirror, Player.PLAYER2 if owned else Player.NEUTRAL))

        if params.num_planets % 2 == 1:
            planets.append(self._make_planet(len(planets), placed[0], Player.NEUTRAL))

        logger.debug(
            f"Generated map: {len(planets)} planets, {n_owned_pairs} starting planet(s) per player"
        )
        return GameState(planets=planets, game_tick=0, params=params)

    def _place_pair(self, placed: list, pair_index: int) -> tuple[tuple, tuple]:
        """Find a mirrored pair of planets that clears every placed planet.

        Raises:
            RuntimeError: If no valid pair is found after MAX_PLACEMENT_ATTEMPTS
        """
        params = self.params
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            position = Vec2d(
                self.rng.uniform(params.edge_separation, params.width - params.edge_separation),
                self.rng.uniform(params.edge_separation, params.height - params.edge_separation),
            )
            first = self._random_planet_stats(position)
            mirror = (Vec2d(params.width - position.x, params.height - position.y),) + first[1:]

            if not self._is_separated(first, [mirror, *placed]):
                continue
            if not self._is_separated(mirror, placed):
                continue
            return first, mirror

        raise RuntimeError(
            f"Could not place planet pair {pair_index} on a {params.width}x{params.height} board "
            f"after {MAX_PLACEMENT_ATTEMPTS} attempts"
        )

    def _random_planet_stats(self, position: Vec2d) -> tuple[Vec2d, float, float, float]:
        """Draw (position, radius, growth_rate, n_ships) for a planet."""
        params = self.params
        growth_rate = self.rng.uniform(params.min_growth_rate, params.max_growth_rate)
        n_ships = self.rng.uniform(
            params.min_initial_ships_per_planet, params.max_initial_ships_per_planet
        )
        radius = growth_rate * params.growth_to_radius_factor
        return position, radius, growth_rate, n_ships

    def _is_separated(self, candidate: tuple, others: list) -> bool:
        position, radius = candidate[0], candidate[1]
        return all(
            position.distance(other[0]) > self.params.radial_separation * (radius + other[1])
            for other in others
        )

    @staticmethod
    def _make_planet(planet_id: int, stats: tuple, owner: Player) -> Planet:
        position, radius, growth_rate, n_ships = stats
        return Planet(
            id=planet_id,
            position=position,
            radius=radius,
            owner=owner,
            n_ships=n_ships,
            growth_rate=growth_rate,
        )
