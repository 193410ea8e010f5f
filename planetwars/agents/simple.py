"""Baseline agents that do not search."""

from ..models import DO_NOTHING, Action, GameState
from ..utils import GameRNG
from .adapters import ForwardModelAdapter
from .base import PlanetWarsPlayer


class DoNothingAgent(PlanetWarsPlayer):
    """Never launches anything. Used as the default RHEA opponent model."""

    def decide(self, observable: GameState) -> Action:
        return DO_NOTHING

    def get_agent_type(self) -> str:
        return "DoNothingAgent"


class RandomAgent(PlanetWarsPlayer):
    """Picks uniformly among the coarse legal actions.

    Only launches from planets it owns with a free transporter slot, so its
    moves are never dropped by the forward model.
    """

    def __init__(self, seed: int | None = None):
        super().__init__()
        self.rng = GameRNG(seed)

    def decide(self, observable: GameState) -> Action:
        actions = ForwardModelAdapter(observable, self.params).get_legal_actions(self.player)
        return self.rng.choice(actions)

    def get_agent_type(self) -> str:
        return "RandomAgent"
