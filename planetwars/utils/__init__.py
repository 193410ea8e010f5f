"""Utility functions and constants for Planet Wars."""

from .constants import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    EDGE_SEPARATION,
    EPSILON,
    GROWTH_RATE_RANGE,
    GROWTH_TO_RADIUS_FACTOR,
    INITIAL_NEUTRAL_RATIO,
    INITIAL_SHIPS_RANGE,
    MAX_TICKS,
    NUM_PLANETS,
    RADIAL_SEPARATION,
    TRANSPORTER_SPEED,
)
from .rng import GameRNG
from .vector import Vec2d, euclidean_distance

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "EDGE_SEPARATION",
    "EPSILON",
    "GROWTH_RATE_RANGE",
    "GROWTH_TO_RADIUS_FACTOR",
    "INITIAL_NEUTRAL_RATIO",
    "INITIAL_SHIPS_RANGE",
    "MAX_TICKS",
    "NUM_PLANETS",
    "RADIAL_SEPARATION",
    "TRANSPORTER_SPEED",
    "euclidean_distance",
    "GameRNG",
    "Vec2d",
]
