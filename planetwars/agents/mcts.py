"""Monte Carlo Tree Search agent with progressive bias.

Each decision builds a fresh tree whose nodes alternate between the agent
and its opponent: a node's state is the result of the parent's player
acting alone for one tick. The tree is stored as a flat list of nodes
addressed by index, and the root is index 0.

One iteration:
1. Selection: descend by UCB1 plus a progressive bias term while the node
   is non-terminal and fully expanded
2. Expansion: add one untried action (sometimes the best by heuristic)
3. Simulation: average several random or heuristic-guided playouts
4. Backpropagation: add the value to every ancestor, root included
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Optional, Union

from ..analysis.game_phase import calculate_game_stage, estimate_game_phase
from ..models import DO_NOTHING, Action, GameState, Observation, Player
from ..utils import GameRNG
from .abstract_state import AbstractGameState
from .adapters import ForwardModelAdapter, ObservationAdapter
from .base import PlanetWarsPlayer
from .config import MCTSConfig
from .heuristics import action_heuristic, comprehensive_score

logger = logging.getLogger(__name__)

# Playout depth before early cutoff checks start, and the adaptive minimum
MIN_PLAYOUT_DEPTH = 5
# Normalized evaluation beyond which a playout is considered decided
DECIDED_SCORE = 0.8


@dataclass
class MCTSNode:
    """A node of the search tree.

    Attributes:
        state: Abstract state reached at this node
        player: Player to move at this node
        parent: Index of the parent node (None for the root)
        children: Child node index per action already expanded
        visits: Number of backpropagations through this node
        total_value: Sum of backpropagated values
        heuristic_values: Cached action heuristics for this node's player
    """

    state: AbstractGameState
    player: Player
    parent: Optional[int] = None
    children: dict[Action, int] = field(default_factory=dict)
    visits: int = 0
    total_value: float = 0.0
    heuristic_values: dict[Action, float] = field(default_factory=dict)
    _legal_actions: Optional[list[Action]] = field(default=None, repr=False)

    @property
    def legal_actions(self) -> list[Action]:
        if self._legal_actions is None:
            self._legal_actions = self.state.get_legal_actions(self.player)
        return self._legal_actions

    def is_fully_expanded(self) -> bool:
        return all(action in self.children for action in self.legal_actions)

    def mean_value(self) -> float:
        return self.total_value / self.visits if self.visits > 0 else -math.inf


class MCTSAgent(PlanetWarsPlayer):
    """Time- and iteration-bounded MCTS over the abstract game state.

    Accepts a GameState (searched through ForwardModelAdapter) or an
    Observation (searched through ObservationAdapter).
    """

    def __init__(self, config: Optional[MCTSConfig] = None):
        super().__init__()
        self.config = config or MCTSConfig()
        self.rng = GameRNG(self.config.seed)
        self.game_phase = 0.0

    @classmethod
    def create_fast(cls, seed: Optional[int] = None) -> "MCTSAgent":
        """Fast configuration for quick decisions."""
        return cls(
            MCTSConfig(
                simulation_count=30,
                max_rollout_depth=15,
                rollout_count=2,
                time_limit_ms=100,
                seed=seed,
            )
        )

    @classmethod
    def create_strong(cls, seed: Optional[int] = None) -> "MCTSAgent":
        """Slower, more deliberate configuration for stronger play."""
        return cls(
            MCTSConfig(
                simulation_count=100,
                max_rollout_depth=30,
                rollout_count=5,
                time_limit_ms=500,
                seed=seed,
            )
        )

    def get_agent_type(self) -> str:
        return "MCTSAgent"

    def decide(self, observable: Union[GameState, Observation]) -> Action:
        if isinstance(observable, Observation):
            root_state: AbstractGameState = ObservationAdapter(observable, self.params)
        else:
            root_state = ForwardModelAdapter(observable.deep_copy(), self.params)

        planets = root_state.game_state.planets
        self.game_phase = estimate_game_phase(planets, self.player)
        stage = calculate_game_stage(planets, self.player)

        tree = [MCTSNode(state=root_state, player=self.player)]
        start = time.perf_counter()
        deadline = start + self.config.time_limit_ms / 1000.0

        iterations = 0
        while iterations < self.config.simulation_count and time.perf_counter() < deadline:
            index = self._select(tree)
            if not tree[index].state.is_terminal():
                expanded = self._expand(tree, index)
                if expanded is not None:
                    index = expanded

            value = self._simulate(tree[index])
            self._backpropagate(tree, index, value)
            iterations += 1

        action = self._best_action(tree)
        logger.debug(
            f"MCTS {self.player.value}: {iterations} iterations, {len(tree)} nodes, "
            f"{stage} game (phase {self.game_phase:.2f}), chose {action} in "
            f"{(time.perf_counter() - start) * 1000:.1f}ms"
        )
        return action

    # =========================================================================
    # SEARCH PHASES
    # =========================================================================

    def _select(self, tree: list[MCTSNode]) -> int:
        """Descend from the root to a node that is terminal or not fully expanded."""
        index = 0
        while True:
            node = tree[index]
            if node.state.is_terminal() or not node.is_fully_expanded() or not node.children:
                return index
            index = max(
                node.children.items(),
                key=lambda item: self._selection_score(node, item[0], tree[item[1]]),
            )[1]

    def _expand(self, tree: list[MCTSNode], index: int) -> Optional[int]:
        """Add one untried child; return its index or None if fully expanded."""
        node = tree[index]
        untried = [action for action in node.legal_actions if action not in node.children]
        if not untried:
            return None

        if self.rng.random() < self.config.greedy_expansion_probability:
            action = max(untried, key=lambda a: self._cached_heuristic(node, a))
        else:
            action = self.rng.choice(untried)

        child = MCTSNode(
            state=node.state.next({node.player: action}),
            player=node.player.opponent(),
            parent=index,
        )
        tree.append(child)
        node.children[action] = len(tree) - 1
        return len(tree) - 1

    def _simulate(self, node: MCTSNode) -> float:
        """Average value of rollout_count playouts from a node."""
        depth_limit = self._playout_depth()
        total = 0.0

        for _ in range(self.config.rollout_count):
            state = node.state
            player = node.player
            depth = 0

            while not state.is_terminal() and depth < depth_limit:
                actions = state.get_legal_actions(player)
                if len(actions) > 1 and self.rng.random() < self.config.rollout_heuristic_probability:
                    current = state.game_state
                    action = max(actions, key=lambda a: action_heuristic(current, a, player))
                else:
                    action = self.rng.choice(actions) if actions else DO_NOTHING

                state = state.next({player: action})
                player = player.opponent()
                depth += 1

                if depth >= MIN_PLAYOUT_DEPTH and self.rng.random() < self.config.early_cutoff_probability:
                    if abs(self._evaluate(state)) > DECIDED_SCORE:
                        break

            total += self._evaluate(state)

        return total / self.config.rollout_count

    def _backpropagate(self, tree: list[MCTSNode], index: Optional[int], value: float) -> None:
        # Values are always from this agent's perspective, so no sign flip
        while index is not None:
            node = tree[index]
            node.visits += 1
            node.total_value += value
            index = node.parent

    # =========================================================================
    # SCORING
    # =========================================================================

    def _selection_score(self, parent: MCTSNode, action: Action, child: MCTSNode) -> float:
        if child.visits == 0:
            return math.inf

        exploitation = child.total_value / child.visits
        exploration = self.config.exploration_weight * math.sqrt(math.log(parent.visits) / child.visits)
        score = exploitation + exploration

        if self.config.progressive_bias > 0.0:
            score += (self.config.progressive_bias * self._cached_heuristic(parent, action)) / (
                1.0 + child.visits
            )
        return score

    def _cached_heuristic(self, node: MCTSNode, action: Action) -> float:
        if action not in node.heuristic_values:
            node.heuristic_values[action] = action_heuristic(node.state.game_state, action, node.player)
        return node.heuristic_values[action]

    def _evaluate(self, state: AbstractGameState) -> float:
        """Value of a state for this agent: +1/-1/0 if terminal, else in (-1, 1)."""
        if state.is_terminal():
            scores = state.get_score()
            mine = scores.get(self.player, 0.0)
            theirs = scores.get(self.player.opponent(), 0.0)
            if mine > theirs:
                return 1.0
            if mine < theirs:
                return -1.0
            return 0.0
        return comprehensive_score(state.game_state, self.player)

    def _playout_depth(self) -> int:
        max_depth = self.config.max_rollout_depth
        if not self.config.adaptive_playouts:
            return max_depth
        depth = int(MIN_PLAYOUT_DEPTH + (max_depth - MIN_PLAYOUT_DEPTH) * self.game_phase)
        return min(max(depth, MIN_PLAYOUT_DEPTH), max_depth)

    def _best_action(self, tree: list[MCTSNode]) -> Action:
        """Most visited child early on, best mean value late in the match."""
        root = tree[0]
        if not root.children:
            return DO_NOTHING

        if self.game_phase < self.config.late_game_threshold:
            return max(root.children.items(), key=lambda item: tree[item[1]].visits)[0]
        return max(root.children.items(), key=lambda item: tree[item[1]].mean_value())[0]
