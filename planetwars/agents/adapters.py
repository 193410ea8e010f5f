"""Abstract game state adapters over the forward model.

ForwardModelAdapter wraps the true GameState (full observation).
ObservationAdapter determinizes an Observation into a belief GameState and
then simulates it exactly the same way (partial observation).
"""

import logging
from copy import copy as shallow_copy

from ..engine.forward_model import ForwardModel
from ..engine.victory import get_ships, is_terminal
from ..models import (
    Action,
    DO_NOTHING,
    GameParams,
    GameState,
    Observation,
    Planet,
    Player,
    REAL_PLAYERS,
    Transporter,
)
from ..utils.constants import EPSILON
from .abstract_state import AbstractGameState, Observability

logger = logging.getLogger(__name__)

# Smallest launch the coarse action set considers meaningful
MIN_LAUNCH_SHIPS = 1.0


class SimulatedGameState(AbstractGameState):
    """Shared implementation: a GameState advanced by a throwaway ForwardModel."""

    def __init__(self, state: GameState, params: GameParams | None = None):
        params = params if params is not None else state.params
        if params is None:
            raise ValueError(f"{type(self).__name__} requires GameParams")
        self._state = state
        self.params = params

    @property
    def game_state(self) -> GameState:
        return self._state

    def copy(self) -> "SimulatedGameState":
        return self._spawn(self._state.deep_copy())

    def is_terminal(self) -> bool:
        return is_terminal(self._state, self.params)

    def get_score(self) -> dict[Player, float]:
        scores = {player: get_ships(self._state, player) for player in REAL_PLAYERS}
        scores[Player.NEUTRAL] = 0.0
        return scores

    def get_legal_actions(self, player: Player) -> list[Action]:
        """Build the coarse action set for a player.

        Do-nothing always comes first. Every owned planet with a free
        transporter slot and at least one ship adds a send-all action to
        every other planet, plus a send-half action when half is still at
        least one ship.
        """
        actions = [DO_NOTHING]
        for source in self._state.planets:
            if source.owner != player or source.transporter is not None:
                continue
            if source.n_ships < MIN_LAUNCH_SHIPS:
                continue

            half = source.n_ships / 2.0
            for destination in self._state.planets:
                if destination.id == source.id:
                    continue
                actions.append(Action(player, source.id, destination.id, source.n_ships))
                if half >= MIN_LAUNCH_SHIPS:
                    actions.append(Action(player, source.id, destination.id, half))

        return list(dict.fromkeys(actions))

    def next(self, actions: dict[Player, Action]) -> "SimulatedGameState":
        state = self._state.deep_copy()
        ForwardModel(state, self.params).step(actions)
        return self._spawn(state)

    def _spawn(self, state: GameState) -> "SimulatedGameState":
        # Same adapter type and configuration, different state
        spawned = shallow_copy(self)
        spawned._state = state
        return spawned


class ForwardModelAdapter(SimulatedGameState):
    """Abstract game state over the true, fully observed GameState."""

    @property
    def observability(self) -> Observability:
        return Observability.FULL


class ObservationAdapter(SimulatedGameState):
    """Abstract game state over a belief built from one player's Observation.

    Hidden ship counts (opponent garrisons and opponent transporter loads)
    are filled in with the mean initial ship count per planet from
    GameParams. Everything else is copied from the observation as seen.
    """

    def __init__(self, observation: Observation, params: GameParams):
        super().__init__(build_belief_state(observation, params), params)

    @property
    def observability(self) -> Observability:
        return Observability.PARTIAL


def build_belief_state(observation: Observation, params: GameParams) -> GameState:
    """Determinize an observation into a concrete GameState.

    Args:
        observation: One player's view of the board
        params: Game parameters (source of the hidden-ship estimate)

    Returns:
        GameState with every hidden ship count replaced by an estimate
    """
    estimate = params.mean_initial_ships
    hidden = 0
    planets = []

    for observed in observation.observed_planets:
        transporter = None
        if observed.transporter is not None:
            t = observed.transporter
            if t.n_ships is None:
                hidden += 1
            transporter = Transporter(
                owner=t.owner,
                n_ships=max(t.n_ships if t.n_ships is not None else estimate, EPSILON),
                source_index=t.source_index,
                destination_index=t.destination_index,
                position=t.position,
                velocity=t.velocity,
            )

        if observed.n_ships is None:
            hidden += 1
        planets.append(
            Planet(
                id=observed.id,
                position=observed.position,
                radius=observed.radius,
                owner=observed.owner,
                n_ships=observed.n_ships if observed.n_ships is not None else estimate,
                growth_rate=observed.growth_rate,
                transporter=transporter,
            )
        )

    logger.debug(
        f"Belief state for {observation.observer.value}: {hidden} hidden ship count(s) "
        f"estimated at {estimate:.1f}"
    )
    return GameState(planets=planets, game_tick=observation.game_tick, params=params)
