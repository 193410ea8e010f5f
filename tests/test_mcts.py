"""Tests for the MCTS agent."""

import logging
import math

import pydantic
import pytest

from planetwars.agents import ForwardModelAdapter, MCTSAgent, MCTSConfig
from planetwars.agents.mcts import MCTSNode
from planetwars.engine import GameStateFactory, create_observation
from planetwars.models import DO_NOTHING, Action, GameParams, GameState, Planet, Player
from planetwars.utils import Vec2d

ONE_CAPTURE_PARAMS = GameParams(num_planets=2, max_ticks=100)


def create_one_capture_game():
    """Create a position where sending everything now is the only winning move.

    Player1 (1.9 ships, no growth) sits next to Player2 (0.6 ships, growth
    0.7). Launching all 1.9 ships arrives the same tick and eliminates
    Player2. Waiting lets Player2 outgrow Player1 for good.
    """
    planets = [
        Planet(id=0, position=Vec2d(100.0, 100.0), radius=1.0, owner=Player.PLAYER1, n_ships=1.9, growth_rate=0.0),
        Planet(id=1, position=Vec2d(103.0, 100.0), radius=1.0, owner=Player.PLAYER2, n_ships=0.6, growth_rate=0.7),
    ]
    return GameState(planets=planets, params=ONE_CAPTURE_PARAMS)


def make_agent(seed, **overrides):
    settings = {"simulation_count": 10, "time_limit_ms": 60_000, "seed": seed}
    settings.update(overrides)
    agent = MCTSAgent(MCTSConfig(**settings))
    agent.prepare_to_play_as(Player.PLAYER1, ONE_CAPTURE_PARAMS)
    return agent


def test_converges_on_one_capture_position():
    """Test that MCTS finds the single winning capture across many seeds."""
    winning = Action(Player.PLAYER1, 0, 1, 1.9)

    picks = sum(1 for seed in range(100) if make_agent(seed).get_action(create_one_capture_game()) == winning)

    assert picks >= 95


def test_accepts_observation():
    """Test that MCTS can search from a partial observation."""
    agent = make_agent(0)
    observation = create_observation(create_one_capture_game(), Player.PLAYER1)

    action = agent.get_action(observation)

    assert action in (DO_NOTHING, Action(Player.PLAYER1, 0, 1, 1.9))


def test_terminal_root_returns_do_nothing():
    """Test that a search with no expandable root falls back to do-nothing."""
    state = create_one_capture_game()
    state.planets[1].owner = Player.PLAYER1

    assert make_agent(0).get_action(state) == DO_NOTHING


def test_does_not_mutate_input_state():
    """Test that searching leaves the caller's state untouched."""
    state = create_one_capture_game()
    before = state.deep_copy()

    make_agent(0).get_action(state)

    assert state == before


def test_action_is_legal_on_generated_map():
    """Test that the chosen action is one of the agent's legal actions."""
    params = GameParams(num_planets=6, max_ticks=200)
    state = GameStateFactory(params, seed=8).create_game()
    agent = MCTSAgent(MCTSConfig(simulation_count=20, time_limit_ms=60_000, seed=3))
    agent.prepare_to_play_as(Player.PLAYER2, params)

    action = agent.get_action(state)

    assert action.is_do_nothing or (
        action.player == Player.PLAYER2 and state.planets[action.source_planet_id].owner == Player.PLAYER2
    )


def test_requires_prepare_to_play_as():
    """Test that an unbound agent refuses to act."""
    with pytest.raises(RuntimeError, match="prepare_to_play_as"):
        MCTSAgent().get_action(create_one_capture_game())


def test_presets():
    """Test the fast and strong configurations."""
    fast = MCTSAgent.create_fast()
    strong = MCTSAgent.create_strong()

    assert fast.config.simulation_count == 30
    assert fast.config.time_limit_ms == 100
    assert strong.config.max_rollout_depth == 30
    assert strong.config.rollout_count == 5


def test_invalid_config_rejected():
    """Test that config validation happens at construction."""
    with pytest.raises(pydantic.ValidationError):
        MCTSConfig(simulation_count=0)


def create_arena():
    """Root with a do-nothing child and a capture child, plus one grandchild."""
    root_state = ForwardModelAdapter(create_one_capture_game(), ONE_CAPTURE_PARAMS)
    capture = Action(Player.PLAYER1, 0, 1, 1.9)
    tree = [
        MCTSNode(state=root_state, player=Player.PLAYER1),
        MCTSNode(state=root_state, player=Player.PLAYER2, parent=0),
        MCTSNode(state=root_state, player=Player.PLAYER2, parent=0),
        MCTSNode(state=root_state, player=Player.PLAYER1, parent=1),
    ]
    tree[0].children = {DO_NOTHING: 1, capture: 2}
    tree[1].children = {DO_NOTHING: 3}
    return tree, capture


class TestTreeOperations:
    """Test selection, backpropagation and root choice on a hand-built tree."""

    def test_unvisited_child_scores_infinite(self):
        """Test that selection always tries an unvisited child first."""
        agent = make_agent(0)
        tree, capture = create_arena()
        tree[0].visits = 5

        assert agent._selection_score(tree[0], capture, tree[2]) == math.inf

    def test_progressive_bias_decays_with_visits(self):
        """Test that the heuristic term shrinks as 1 / (1 + visits)."""
        agent = make_agent(0, exploration_weight=0.0, progressive_bias=1.0)
        tree, capture = create_arena()
        tree[0].visits = 10
        tree[0].heuristic_values[capture] = 4.0

        tree[2].visits, tree[2].total_value = 1, 0.5
        assert agent._selection_score(tree[0], capture, tree[2]) == pytest.approx(0.5 + 4.0 / 2.0)

        tree[2].visits, tree[2].total_value = 3, 1.5
        assert agent._selection_score(tree[0], capture, tree[2]) == pytest.approx(0.5 + 4.0 / 4.0)

    def test_exploration_term(self):
        """Test the UCB1 term without progressive bias."""
        agent = make_agent(0, exploration_weight=2.0, progressive_bias=0.0)
        tree, capture = create_arena()
        tree[0].visits = 8
        tree[2].visits, tree[2].total_value = 2, 1.0

        expected = 0.5 + 2.0 * math.sqrt(math.log(8) / 2)
        assert agent._selection_score(tree[0], capture, tree[2]) == pytest.approx(expected)

    def test_backpropagate_adds_same_value_to_ancestors(self):
        """Test that every ancestor receives the value unchanged, sign included."""
        agent = make_agent(0)
        tree, _ = create_arena()

        agent._backpropagate(tree, 3, -0.4)

        for index in (3, 1, 0):
            assert tree[index].visits == 1
            assert tree[index].total_value == pytest.approx(-0.4)
        assert tree[2].visits == 0
        assert tree[2].total_value == 0.0

    def test_root_choice_follows_phase(self):
        """Test most-visited early and best mean value from the late-game threshold."""
        agent = make_agent(0)
        tree, capture = create_arena()
        tree[1].visits, tree[1].total_value = 10, 2.0
        tree[2].visits, tree[2].total_value = 2, 1.8

        agent.game_phase = 0.2
        assert agent._best_action(tree) == DO_NOTHING

        agent.game_phase = agent.config.late_game_threshold
        assert agent._best_action(tree) == capture

        agent.game_phase = 1.0
        assert agent._best_action(tree) == capture


def test_search_summary_logged(caplog):
    """Test that each decision logs its game stage and choice at DEBUG."""
    agent = make_agent(0)

    with caplog.at_level(logging.DEBUG, logger="planetwars.agents.mcts"):
        agent.get_action(create_one_capture_game())

    assert "late game (phase 1.00)" in caplog.text
