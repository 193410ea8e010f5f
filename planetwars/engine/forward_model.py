"""Forward model: the authoritative one-tick state transition.

This module coordinates the tick phases in the correct order:
1. Action Processing (launch transporters)
2. Transporter Movement
3. Arrival & Combat Resolution
4. Growth
5. Tick counter increment

Both players' actions are validated against the state as it was at the
start of the tick and then applied together, so the order in which the
action map is iterated is not observable.

Architecture:
Each phase is an independent, composable method. step() composes these
phases in the correct order, which keeps individual phases testable.
"""

import logging
from dataclasses import dataclass, field

from ..models.action import Action
from ..models.game_state import GameState
from ..models.params import GameParams
from ..models.player import Player
from ..models.transporter import Transporter
from ..utils.constants import EPSILON
from .combat import CombatEvent, process_arrivals
from .movement import Arrival, process_transporter_movement
from .production import process_growth
from .victory import get_leader, get_ships, is_terminal

logger = logging.getLogger(__name__)


@dataclass
class DroppedAction:
    """An action the forward model refused to apply.

    Illegal actions are never raised to the caller; they are recorded here
    and logged at DEBUG level.
    """

    player: Player
    action: Action
    reason: str


@dataclass
class StepResult:
    """Everything that happened during one tick.

    Callers may ignore it; it exists for observation and testing.
    """

    launched: list[Transporter] = field(default_factory=list)
    dropped: list[DroppedAction] = field(default_factory=list)
    arrivals: list[Arrival] = field(default_factory=list)
    combat_events: list[CombatEvent] = field(default_factory=list)


class ForwardModel:
    """Advances one GameState by exactly one tick per step() call.

    The forward model exclusively owns the mutation of the state it was
    constructed against. Search code must hand it a deep copy.
    """

    def __init__(self, state: GameState, params: GameParams | None = None):
        """Bind the forward model to a state.

        Args:
            state: State to advance (mutated in place by step)
            params: Game parameters; defaults to state.params

        Raises:
            ValueError: If state or params is missing, or the state does not
                match the parameters
        """
        if state is None:
            raise ValueError("ForwardModel requires a GameState")
        params = params if params is not None else state.params
        if params is None:
            raise ValueError("ForwardModel requires GameParams")
        if not state.planets:
            raise ValueError("GameState has no planets")
        if len(state.planets) != params.num_planets:
            raise ValueError(
                f"GameState has {len(state.planets)} planets but params declare {params.num_planets}"
            )

        self.state = state
        self.params = params

    # =========================================================================
    # INDEPENDENT PHASE METHODS
    # Each method handles ONE phase and returns its events
    # =========================================================================

    def execute_phase_actions(
        self, actions: dict[Player, Action]
    ) -> tuple[list[Transporter], list[DroppedAction]]:
        """Execute Phase 1: Action Processing.

        Validates every action before applying any, then launches a
        transporter for each legal one. Ships are deducted from the source
        immediately. Invalid actions are logged but don't crash.

        Args:
            actions: Dictionary mapping player to its action for this tick

        Returns:
            Tuple of (launched transporters, dropped actions)
        """
        legal: list[tuple[Player, Action]] = []
        dropped: list[DroppedAction] = []

        for player, action in actions.items():
            if action is None or action.is_do_nothing:
                continue
            try:
                self._validate_action(player, action)
                legal.append((player, action))
            except ValueError as e:
                logger.debug(f"Dropping action from {player.value} ({action}): {e}")
                dropped.append(DroppedAction(player=player, action=action, reason=str(e)))

        launched = [self._launch(player, action) for player, action in legal]
        return launched, dropped

    def execute_phase_movement(self) -> list[Arrival]:
        """Execute Phase 2: Transporter Movement."""
        _, arrivals = process_transporter_movement(self.state)
        return arrivals

    def execute_phase_combat(self, arrivals: list[Arrival]) -> list[CombatEvent]:
        """Execute Phase 3: Arrival & Combat Resolution."""
        _, combat_events = process_arrivals(self.state, arrivals)
        return combat_events

    def execute_phase_growth(self) -> None:
        """Execute Phase 4: Growth at owned planets."""
        process_growth(self.state)

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def step(self, actions: dict[Player, Action]) -> StepResult:
        """Advance the state by one tick.

        Args:
            actions: Dictionary mapping player to its action for this tick.
                Players may be missing; do-nothing actions are skipped.

        Returns:
            StepResult describing launches, drops, arrivals and combats
        """
        launched, dropped = self.execute_phase_actions(actions)
        arrivals = self.execute_phase_movement()
        combat_events = self.execute_phase_combat(arrivals)
        self.execute_phase_growth()
        self.state.game_tick += 1

        return StepResult(
            launched=launched,
            dropped=dropped,
            arrivals=arrivals,
            combat_events=combat_events,
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    def is_terminal(self) -> bool:
        return is_terminal(self.state, self.params)

    def get_ships(self, player: Player) -> float:
        return get_ships(self.state, player)

    def get_leader(self) -> Player:
        return get_leader(self.state)

    def status_string(self) -> str:
        """One-line summary of the match for logging."""
        return (
            f"Tick: {self.state.game_tick}; "
            f"Planets: {len(self.state.planets_owned_by(Player.PLAYER1))} vs "
            f"{len(self.state.planets_owned_by(Player.PLAYER2))}; "
            f"Ships: {self.get_ships(Player.PLAYER1):.1f} vs {self.get_ships(Player.PLAYER2):.1f}; "
            f"Leader: {self.get_leader().value}"
        )

    # =========================================================================
    # INTERNAL HELPER METHODS
    # =========================================================================

    def _validate_action(self, player: Player, action: Action) -> None:
        """Validate a single action. Raises ValueError if invalid.

        Args:
            player: Player the action was submitted for
            action: Action to validate

        Raises:
            ValueError: If action is invalid
        """
        if not player.is_real:
            raise ValueError("Neutral cannot act")
        if action.player != player:
            raise ValueError(f"Action belongs to {action.player.value}")

        n_planets = len(self.state.planets)
        if not 0 <= action.source_planet_id < n_planets:
            raise ValueError(f"Source planet {action.source_planet_id} does not exist")
        if not 0 <= action.destination_planet_id < n_planets:
            raise ValueError(f"Destination planet {action.destination_planet_id} does not exist")
        if action.source_planet_id == action.destination_planet_id:
            raise ValueError("Cannot send a transporter from a planet to itself")

        source = self.state.planets[action.source_planet_id]
        if source.owner != player:
            raise ValueError(f"{player.value} does not own planet {source.id}")
        if source.transporter is not None:
            raise ValueError(f"Planet {source.id} already has a transporter in flight")
        if not EPSILON <= action.num_ships <= source.n_ships:
            raise ValueError(
                f"Invalid ship count at planet {source.id}: "
                f"requested {action.num_ships}, available {source.n_ships}"
            )

    def _launch(self, player: Player, action: Action) -> Transporter:
        """Launch a transporter for a validated action.

        Assumes the action has already been validated by _validate_action.
        """
        source = self.state.planets[action.source_planet_id]
        destination = self.state.planets[action.destination_planet_id]

        # Deduct ships immediately so they can't defend the source this tick
        source.n_ships = max(0.0, source.n_ships - action.num_ships)

        direction = (destination.position - source.position).normalized()
        transporter = Transporter(
            owner=player,
            n_ships=action.num_ships,
            source_index=source.id,
            destination_index=destination.id,
            position=source.position,
            velocity=direction * self.params.transporter_speed,
        )
        source.transporter = transporter
        return transporter
