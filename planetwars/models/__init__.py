"""Data models for Planet Wars."""

from .action import DO_NOTHING, Action
from .game_state import GameState
from .observation import Observation, PlanetObservation, TransporterObservation
from .params import GameParams
from .planet import Planet
from .player import REAL_PLAYERS, Player
from .transporter import Transporter

__all__ = [
    "Action",
    "DO_NOTHING",
    "GameParams",
    "GameState",
    "Observation",
    "Planet",
    "PlanetObservation",
    "Player",
    "REAL_PLAYERS",
    "Transporter",
    "TransporterObservation",
]
