"""Hand-tuned evaluation functions shared by the search agents.

All scores are player-relative. They are only ever compared within one
search, so their scale only needs to be internally consistent.
"""

from ..models import Action, GameState, Planet, Player

# Comprehensive evaluation weights
SHIP_WEIGHT = 1.0
SHIPS_IN_TRANSIT_WEIGHT = 0.8
PLANET_COUNT_WEIGHT = 10.0
GROWTH_RATE_WEIGHT = 20.0
POTENTIAL_TARGETS_WEIGHT = 5.0

# Garrison below which reinforcing a planet is considered urgent
VULNERABLE_GARRISON = 5.0


def action_heuristic(state: GameState, action: Action, player: Player) -> float:
    """Score a single launch for progressive bias and guided playouts.

    Captures are worth growth rate over distance, enemy captures more than
    neutral ones. Failed attacks on the enemy still score a little
    (harassment). Reinforcing is only worthwhile for weak garrisons.

    Args:
        state: State the action would be applied to
        action: Candidate action
        player: Player taking the action

    Returns:
        Non-negative heuristic value (0.0 for do-nothing)
    """
    if action.is_do_nothing:
        return 0.0

    n_planets = len(state.planets)
    if not (0 <= action.source_planet_id < n_planets and 0 <= action.destination_planet_id < n_planets):
        return 0.0

    source = state.planets[action.source_planet_id]
    destination = state.planets[action.destination_planet_id]
    distance = source.position.distance(destination.position)
    captures = action.num_ships - destination.n_ships > 0

    if destination.owner == Player.NEUTRAL:
        if captures:
            return (10.0 * destination.growth_rate) / (1.0 + 0.1 * distance)
        return 0.1

    if destination.owner == player.opponent():
        if captures:
            return (15.0 * destination.growth_rate) / (1.0 + 0.1 * distance)
        return (3.0 * destination.growth_rate) / (1.0 + 0.1 * distance)

    if destination.owner == player:
        if destination.n_ships < VULNERABLE_GARRISON:
            return 5.0 / (1.0 + 0.2 * distance)
        return 1.0 / (1.0 + 0.5 * distance)

    return 0.0


def comprehensive_score(state: GameState, player: Player) -> float:
    """Normalized positional evaluation in (-1, 1).

    Combines ships on planets, ships in transit, planet count and growth
    for both sides. Only the evaluating player is credited for nearby
    targets (enemy targets count double).

    Returns:
        (mine - theirs) / (mine + theirs + 1)
    """
    opponent = player.opponent()
    mine = 0.0
    theirs = 0.0

    for planet in state.planets:
        if planet.owner == player:
            mine += (
                planet.n_ships * SHIP_WEIGHT
                + PLANET_COUNT_WEIGHT
                + planet.growth_rate * GROWTH_RATE_WEIGHT
                + _potential_targets(state, planet, player) * POTENTIAL_TARGETS_WEIGHT
            )
        elif planet.owner == opponent:
            theirs += planet.n_ships * SHIP_WEIGHT + PLANET_COUNT_WEIGHT + planet.growth_rate * GROWTH_RATE_WEIGHT

        transporter = planet.transporter
        if transporter is not None:
            if transporter.owner == player:
                mine += transporter.n_ships * SHIPS_IN_TRANSIT_WEIGHT
            elif transporter.owner == opponent:
                theirs += transporter.n_ships * SHIPS_IN_TRANSIT_WEIGHT

    return (mine - theirs) / (mine + theirs + 1.0)


def _potential_targets(state: GameState, planet: Planet, player: Player) -> float:
    total = 0.0
    for other in state.planets:
        if other.id == planet.id or other.owner == player:
            continue
        weight = 1.0 if other.owner == Player.NEUTRAL else 2.0
        total += weight / (1.0 + planet.position.distance(other.position))
    return total


def material_score(state: GameState, player: Player) -> float:
    """Unnormalized material for one side.

    ships on planets + ships in transit + 10 * planets + 20 * growth
    """
    score = 0.0
    for planet in state.planets:
        if planet.owner == player:
            score += planet.n_ships + PLANET_COUNT_WEIGHT + planet.growth_rate * GROWTH_RATE_WEIGHT
        if planet.transporter is not None and planet.transporter.owner == player:
            score += planet.transporter.n_ships
    return score


def greedy_move_score(source: Planet, target: Planet) -> float:
    """Score a one-step (source, target) launch for the greedy first move.

    Favors cheap, high-growth, nearby targets and strong sources.
    """
    effective_defense = max(1.0, target.n_ships)
    distance = source.position.distance(target.position)
    return (target.growth_rate / effective_defense) / (distance + 1.0) + source.n_ships / (
        1.5 * effective_defense
    )


def growth_move_score(source: Planet, target: Planet) -> float:
    """Greedy score by target growth per defending ship, discounted by distance."""
    distance = source.position.distance(target.position)
    return (target.growth_rate / (target.n_ships + 1.0)) / (distance + 1.0)
