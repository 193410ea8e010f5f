"""Game engine components."""

from .forward_model import DroppedAction, ForwardModel, StepResult
from .map_generator import GameStateFactory
from .observation_factory import create_observation
from .runner import GameRunner

__all__ = [
    "create_observation",
    "DroppedAction",
    "ForwardModel",
    "GameRunner",
    "GameStateFactory",
    "StepResult",
]
