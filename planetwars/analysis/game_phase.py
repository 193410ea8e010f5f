"""Game phase estimation for strategic decision-making.

This module provides heuristics to place a match on the early/late axis
based on how many planets are still neutral and how lopsided ownership is.
Search agents use it to lengthen playouts late in a match and to switch
their root policy from robust (most visited) to greedy (best mean).
"""

from typing import Iterable

from ..models import Planet, Player

# Ownership ratio beyond which a match is treated as close to decided
DOMINANCE_HIGH = 2.0
DOMINANCE_LOW = 0.5


def estimate_game_phase(planets: Iterable[Planet], player: Player) -> float:
    """Estimate how far the match has progressed, from 0.0 (early) to 1.0 (late).

    The base estimate is the fraction of planets that are no longer neutral.
    When one side owns more than twice as many planets as the other (counted
    with +1 smoothing on the opponent), the estimate is pulled halfway
    towards 1.0.

    Args:
        planets: Planets of the current state (or observation)
        player: The player the estimate is computed for

    Returns:
        Phase estimate in [0.0, 1.0]
    """
    planets = list(planets)
    total = len(planets)
    mine = sum(1 for planet in planets if planet.owner == player)
    theirs = sum(1 for planet in planets if planet.owner == player.opponent())
    neutral = total - mine - theirs

    phase = 1.0 - neutral / max(total, 1)

    dominance = mine / (theirs + 1.0)
    if dominance > DOMINANCE_HIGH or dominance < DOMINANCE_LOW:
        phase = (phase + 1.0) / 2.0

    return phase


def calculate_game_stage(planets: Iterable[Planet], player: Player) -> str:
    """Determine current game stage for a player.

    Game stages:
    - EARLY: phase below 0.5 (most planets still neutral)
    - MID: phase below 0.8
    - LATE: otherwise (board mostly claimed, or one side dominating)

    Returns:
        One of: "early", "mid", "late"
    """
    phase = estimate_game_phase(planets, player)
    if phase < 0.5:
        return "early"
    if phase < 0.8:
        return "mid"
    return "late"
