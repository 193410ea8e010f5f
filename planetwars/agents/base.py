"""Agent base classes.

A driver binds an agent to a side with prepare_to_play_as() once per match,
then calls get_action() once per tick. Full-observation players receive a
deep copy of the GameState; partial-observation players receive an
Observation.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..models import Action, GameParams, GameState, Observation, Player


class PlanetWarsAgent(ABC):
    """Common lifecycle for every agent."""

    # True when get_action expects an Observation rather than a GameState
    partial_observation = False

    def __init__(self):
        self.player: Player | None = None
        self.params: GameParams | None = None
        self.opponent_type: str | None = None

    def prepare_to_play_as(
        self, player: Player, params: GameParams, opponent: str | None = None
    ) -> str:
        """Bind the agent to a side for the next match.

        Args:
            player: Player1 or Player2
            params: Parameters of the match about to start
            opponent: Optional agent type of the opponent

        Returns:
            This agent's type string
        """
        if not player.is_real:
            raise ValueError(f"Invalid player: {player} (agents play as Player1 or Player2)")
        self.player = player
        self.params = params
        self.opponent_type = opponent
        self.reset()
        return self.get_agent_type()

    def get_action(self, observable: Any) -> Action:
        """Return this agent's move for the current tick.

        Raises:
            RuntimeError: If prepare_to_play_as() was never called
        """
        if self.player is None or self.params is None:
            raise RuntimeError(
                f"{self.get_agent_type()} has no player bound; call prepare_to_play_as() first"
            )
        return self.decide(observable)

    @abstractmethod
    def decide(self, observable: Any) -> Action:
        """Choose a move. Returns do-nothing when there is nothing to do."""

    @abstractmethod
    def get_agent_type(self) -> str:
        """Short human-readable agent name."""

    def reset(self) -> None:
        """Clear per-match session state. Called by prepare_to_play_as()."""


class PlanetWarsPlayer(PlanetWarsAgent):
    """Agent that sees the full GameState."""

    @abstractmethod
    def decide(self, observable: GameState) -> Action:
        """Choose a move from the full game state."""


class PartialObservationPlayer(PlanetWarsAgent):
    """Agent that only sees its own Observation."""

    partial_observation = True

    @abstractmethod
    def decide(self, observable: Observation) -> Action:
        """Choose a move from a partial observation."""
