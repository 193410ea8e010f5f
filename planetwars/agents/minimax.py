"""Depth-limited Minimax agent with optional alpha-beta pruning.

Plies alternate between the agent (max) and its opponent (min), each player
acting alone for one tick. Leaves are scored by material difference read
from the true game state, so this agent requires full observation.
"""

import logging
import math
import time

from ..models import DO_NOTHING, Action, GameState, Player
from .abstract_state import AbstractGameState
from .adapters import ForwardModelAdapter
from .base import PlanetWarsPlayer
from .config import MinimaxConfig
from .heuristics import material_score

logger = logging.getLogger(__name__)


class MinimaxAgent(PlanetWarsPlayer):
    """Exhaustive adversarial search over the coarse action set.

    Alpha-beta pruning returns the same root value and the same root action
    as plain minimax: the root keeps the first action with the strictly best
    value, and pruned children can never beat the current best.
    """

    def __init__(self, config: MinimaxConfig | None = None):
        super().__init__()
        self.config = config or MinimaxConfig()
        self.nodes_evaluated = 0

    def get_agent_type(self) -> str:
        return "MinimaxAgent"

    def decide(self, observable: GameState) -> Action:
        root = ForwardModelAdapter(observable.deep_copy(), self.params)
        return self.search(root)

    def search(self, root: AbstractGameState) -> Action:
        """Pick the best root action from any abstract state.

        Raises:
            ObservabilityError: If root is a partial-observation state
        """
        start = time.perf_counter()
        self.nodes_evaluated = 0

        actions = root.get_legal_actions(self.player)
        if not actions:
            return DO_NOTHING

        best_action = actions[0]
        best_value = -math.inf
        opponent = self.player.opponent()

        for action in actions:
            child = root.next({self.player: action})
            value = self._min_value(child, opponent, self.config.depth - 1, best_value, math.inf)
            if value > best_value:
                best_value = value
                best_action = action

        logger.debug(
            f"Minimax {self.player.value}: depth {self.config.depth}, "
            f"{self.nodes_evaluated} leaves, value {best_value:.1f}, chose {best_action} in "
            f"{(time.perf_counter() - start) * 1000:.1f}ms"
        )
        return best_action

    def _max_value(self, state: AbstractGameState, player: Player, depth: int, alpha: float, beta: float) -> float:
        if depth == 0 or state.is_terminal():
            return self._evaluate(state)

        actions = state.get_legal_actions(player)
        if not actions:
            return self._evaluate(state)

        value = -math.inf
        for action in actions:
            child = state.next({player: action})
            value = max(value, self._min_value(child, player.opponent(), depth - 1, alpha, beta))
            if self.config.use_alpha_beta:
                if value >= beta:
                    return value
                alpha = max(alpha, value)
        return value

    def _min_value(self, state: AbstractGameState, player: Player, depth: int, alpha: float, beta: float) -> float:
        if depth == 0 or state.is_terminal():
            return self._evaluate(state)

        actions = state.get_legal_actions(player)
        if not actions:
            return self._evaluate(state)

        value = math.inf
        for action in actions:
            child = state.next({player: action})
            value = min(value, self._max_value(child, player.opponent(), depth - 1, alpha, beta))
            if self.config.use_alpha_beta:
                if value <= alpha:
                    return value
                beta = min(beta, value)
        return value

    def _evaluate(self, state: AbstractGameState) -> float:
        """Material difference from this agent's point of view."""
        self.nodes_evaluated += 1
        game_state = state.full_state()
        return material_score(game_state, self.player) - material_score(game_state, self.player.opponent())
