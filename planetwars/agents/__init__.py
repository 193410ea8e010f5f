"""Search and baseline agents for Planet Wars."""

from .abstract_state import AbstractGameState, Observability, ObservabilityError
from .adapters import ForwardModelAdapter, ObservationAdapter, SimulatedGameState
from .base import PartialObservationPlayer, PlanetWarsAgent, PlanetWarsPlayer
from .config import MCTSConfig, MinimaxConfig, RHEAConfig
from .mcts import MCTSAgent
from .minimax import MinimaxAgent
from .rhea import GenomeDecoder, PartialObservationRHEAAgent, RHEAAgent, RollingHorizonSearch
from .simple import DoNothingAgent, RandomAgent

__all__ = [
    "AbstractGameState",
    "DoNothingAgent",
    "ForwardModelAdapter",
    "GenomeDecoder",
    "MCTSAgent",
    "MCTSConfig",
    "MinimaxAgent",
    "MinimaxConfig",
    "Observability",
    "ObservabilityError",
    "ObservationAdapter",
    "PartialObservationPlayer",
    "PartialObservationRHEAAgent",
    "PlanetWarsAgent",
    "PlanetWarsPlayer",
    "RandomAgent",
    "RHEAAgent",
    "RHEAConfig",
    "RollingHorizonSearch",
    "SimulatedGameState",
]
