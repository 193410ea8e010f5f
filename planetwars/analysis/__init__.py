"""Analysis module for strategic gameplay metrics."""

from .game_phase import calculate_game_stage, estimate_game_phase

__all__ = ["calculate_game_stage", "estimate_game_phase"]
