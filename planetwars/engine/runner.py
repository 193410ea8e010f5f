"""In-process match runner: steps two agents through one game."""

import logging
from typing import TYPE_CHECKING

from ..models import DO_NOTHING, Action, GameParams, GameState, Player
from .forward_model import ForwardModel, StepResult
from .map_generator import GameStateFactory
from .observation_factory import create_observation

if TYPE_CHECKING:
    from ..agents.base import PlanetWarsAgent

logger = logging.getLogger(__name__)


class GameRunner:
    """Manages the tick loop and agent coordination for one match."""

    def __init__(
        self,
        agent1: "PlanetWarsAgent",
        agent2: "PlanetWarsAgent",
        params: GameParams,
        seed: int | None = None,
    ):
        """Initialize game runner.

        Args:
            agent1: Agent playing as Player1
            agent2: Agent playing as Player2
            params: Game parameters for every match this runner plays
            seed: Map generation seed, or None for a random map
        """
        self.agents = {Player.PLAYER1: agent1, Player.PLAYER2: agent2}
        self.params = params
        self.factory = GameStateFactory(params, seed=seed)
        self.forward_model: ForwardModel | None = None

    def new_game(self) -> GameState:
        """Generate a fresh map and bind both agents to their sides."""
        state = self.factory.create_game()
        self.forward_model = ForwardModel(state, self.params)

        for player, agent in self.agents.items():
            agent.prepare_to_play_as(player, self.params, opponent=self.agents[player.opponent()].get_agent_type())

        return state

    def step_game(self) -> StepResult:
        """Collect one action per agent and advance the game one tick.

        Raises:
            RuntimeError: If no game has been started with new_game()
        """
        if self.forward_model is None:
            raise RuntimeError("No game in progress; call new_game() first")

        actions = self._collect_actions()
        return self.forward_model.step(actions)

    def run_game(self) -> Player:
        """Play one full match.

        Returns:
            Leader at the end of the match (Neutral on a draw)
        """
        self.new_game()
        logger.info(
            f"Match start: {self.agents[Player.PLAYER1].get_agent_type()} vs "
            f"{self.agents[Player.PLAYER2].get_agent_type()}"
        )

        while not self.forward_model.is_terminal():
            self.step_game()

        leader = self.forward_model.get_leader()
        logger.info(f"Match end: {self.forward_model.status_string()}")
        return leader

    def _collect_actions(self) -> dict[Player, Action]:
        """Ask each agent for its move on its own copy of the state.

        A failing agent forfeits its move for this tick instead of ending
        the match.
        """
        state = self.forward_model.state
        actions = {}
        for player, agent in self.agents.items():
            if agent.partial_observation:
                view = create_observation(state, player)
            else:
                view = state.deep_copy()
            try:
                actions[player] = agent.get_action(view)
            except Exception as e:
                logger.warning(f"Agent {agent.get_agent_type()} failed as {player.value}: {e}")
                actions[player] = DO_NOTHING
        return actions
