"""Tests for the forward model: full tick integration."""

import logging

import pytest

from planetwars.engine import ForwardModel, GameStateFactory
from planetwars.engine.production import total_growth
from planetwars.models import DO_NOTHING, Action, GameParams, GameState, Planet, Player
from planetwars.utils import Vec2d


def create_basic_game(max_ticks=100, neutral_ships=10.0):
    """Create P1 and P2 planets facing a neutral planet between them."""
    params = GameParams(num_planets=3, max_ticks=max_ticks)
    planets = [
        Planet(id=0, position=Vec2d(100.0, 100.0), radius=10.0, owner=Player.PLAYER1, n_ships=20.0, growth_rate=0.1),
        Planet(id=1, position=Vec2d(400.0, 100.0), radius=10.0, owner=Player.PLAYER2, n_ships=20.0, growth_rate=0.1),
        Planet(id=2, position=Vec2d(250.0, 100.0), radius=10.0, owner=Player.NEUTRAL, n_ships=neutral_ships, growth_rate=0.2),
    ]
    return GameState(planets=planets, params=params), params


def total_ships(state):
    return sum(p.n_ships for p in state.planets) + sum(t.n_ships for t in state.transporters())


class TestConstruction:
    """Test forward model preconditions."""

    def test_requires_state(self):
        """Test that a missing state is a fatal precondition."""
        with pytest.raises(ValueError, match="requires a GameState"):
            ForwardModel(None, GameParams())

    def test_requires_params(self):
        """Test that params are required when the state carries none."""
        state, _ = create_basic_game()
        state.params = None

        with pytest.raises(ValueError, match="requires GameParams"):
            ForwardModel(state)

    def test_params_default_to_state_params(self):
        """Test that the state's own params are used when none are given."""
        state, params = create_basic_game()

        assert ForwardModel(state).params is params

    def test_planet_count_must_match_params(self):
        """Test that a state with the wrong planet count is rejected."""
        state, _ = create_basic_game()

        with pytest.raises(ValueError, match="planets but params declare"):
            ForwardModel(state, GameParams(num_planets=4))


class TestStep:
    """Test one tick of simulation."""

    def test_step_increments_tick(self):
        """Test that each step advances the tick counter by one."""
        state, params = create_basic_game()
        fm = ForwardModel(state, params)

        fm.step({})
        fm.step({Player.PLAYER1: DO_NOTHING, Player.PLAYER2: DO_NOTHING})

        assert state.game_tick == 2

    def test_launch_deducts_ships_immediately(self):
        """Test that launching removes ships from the source the same tick."""
        state, params = create_basic_game()
        fm = ForwardModel(state, params)

        result = fm.step({Player.PLAYER1: Action(Player.PLAYER1, 0, 2, 15.0)})

        assert len(result.launched) == 1
        assert state.planets[0].transporter is not None
        # 20 - 15 + 0.1 growth
        assert state.planets[0].n_ships == pytest.approx(5.1)
        assert state.planets[0].transporter.velocity == Vec2d(params.transporter_speed, 0.0)

    def test_capture_through_step(self):
        """Test a full launch, flight and capture of a neutral planet."""
        state, params = create_basic_game(neutral_ships=10.0)
        fm = ForwardModel(state, params)

        fm.step({Player.PLAYER1: Action(Player.PLAYER1, 0, 2, 15.0)})
        while state.planets[0].transporter is not None:
            fm.step({})

        assert state.planets[2].owner == Player.PLAYER1
        # 15 - 10 = 5, plus growth on the capture tick
        assert state.planets[2].n_ships == pytest.approx(5.2)

    def test_growth_only_for_owned_planets(self):
        """Test that neutral planets do not grow during a step."""
        state, params = create_basic_game()
        fm = ForwardModel(state, params)

        fm.step({})

        assert state.planets[0].n_ships == pytest.approx(20.1)
        assert state.planets[2].n_ships == 10.0


class TestIllegalActions:
    """Test that illegal actions are dropped, never raised."""

    @pytest.mark.parametrize(
        "action",
        [
            Action(Player.PLAYER1, 1, 2, 5.0),  # not the owner
            Action(Player.PLAYER1, 0, 2, 25.0),  # more ships than available
            Action(Player.PLAYER1, 0, 2, 0.0),  # below epsilon
            Action(Player.PLAYER1, 0, 0, 5.0),  # self target
            Action(Player.PLAYER1, 0, 9, 5.0),  # unknown destination
            Action(Player.PLAYER2, 0, 2, 5.0),  # submitted under the wrong player
        ],
    )
    def test_illegal_action_dropped(self, action):
        """Test that an illegal action leaves the board untouched."""
        state, params = create_basic_game()
        fm = ForwardModel(state, params)

        result = fm.step({Player.PLAYER1: action})

        assert result.launched == []
        assert len(result.dropped) == 1
        assert state.planets[0].transporter is None
        assert state.planets[0].n_ships == pytest.approx(20.1)

    def test_second_launch_while_in_flight_dropped(self):
        """Test that a planet cannot launch while its transporter is in flight."""
        state, params = create_basic_game()
        fm = ForwardModel(state, params)
        fm.step({Player.PLAYER1: Action(Player.PLAYER1, 0, 2, 5.0)})

        result = fm.step({Player.PLAYER1: Action(Player.PLAYER1, 0, 1, 5.0)})

        assert len(result.dropped) == 1
        assert state.planets[0].transporter.destination_index == 2

    def test_dropped_action_logged_at_debug(self, caplog):
        """Test that dropped actions are logged at DEBUG level."""
        state, params = create_basic_game()
        fm = ForwardModel(state, params)

        with caplog.at_level(logging.DEBUG, logger="planetwars.engine.forward_model"):
            fm.step({Player.PLAYER1: Action(Player.PLAYER1, 1, 2, 5.0)})

        assert "Dropping action" in caplog.text


class TestProperties:
    """Test determinism, conservation and termination."""

    def test_determinism(self):
        """Test that equal states and actions give equal results."""
        actions = [
            {Player.PLAYER1: Action(Player.PLAYER1, 0, 2, 12.0), Player.PLAYER2: Action(Player.PLAYER2, 1, 2, 9.0)},
            {},
            {Player.PLAYER2: Action(Player.PLAYER2, 1, 0, 5.0)},
        ]
        results = []
        for _ in range(2):
            state, params = create_basic_game()
            fm = ForwardModel(state, params)
            for tick_actions in actions * 20:
                fm.step(tick_actions)
            results.append(state)

        assert results[0] == results[1]

    def test_conservation_without_combat(self):
        """Test that total ships only change by growth when nothing fights."""
        state, params = create_basic_game()
        fm = ForwardModel(state, params)
        before = total_ships(state)

        # Launch towards the far side; arrival is many ticks away
        fm.step({Player.PLAYER1: Action(Player.PLAYER1, 0, 1, 10.0)})

        assert total_ships(state) == pytest.approx(before + 0.2)

    def test_conservation_with_capture(self):
        """Test that ship totals change only by growth and reported combat losses."""
        state, params = create_basic_game()
        fm = ForwardModel(state, params)
        orders = {Player.PLAYER1: Action(Player.PLAYER1, 0, 2, 15.0)}
        captured = False

        for _ in range(60):
            before = total_ships(state)
            result = fm.step(orders)
            orders = {}

            losses = sum(e.attacker_ships + e.defender_ships - e.ships_after for e in result.combat_events)
            assert total_ships(state) == pytest.approx(before + total_growth(state) - losses)
            captured = captured or any(e.winner == "attacker" for e in result.combat_events)

        assert captured
        assert state.planets[2].owner == Player.PLAYER1

    def test_terminates_at_max_ticks(self):
        """Test that a game run with do-nothing actions stops at max_ticks."""
        state, params = create_basic_game(max_ticks=5)
        fm = ForwardModel(state, params)

        steps = 0
        while not fm.is_terminal():
            fm.step({Player.PLAYER1: DO_NOTHING, Player.PLAYER2: DO_NOTHING})
            steps += 1

        assert steps == 5
        assert state.game_tick == 5

    def test_simultaneous_orders_order_independent(self):
        """Test that the iteration order of the action map is not observable."""
        p1 = Action(Player.PLAYER1, 0, 1, 20.0)
        p2 = Action(Player.PLAYER2, 1, 0, 20.0)

        first, params = create_basic_game()
        second, _ = create_basic_game()
        fm_first = ForwardModel(first, params)
        fm_second = ForwardModel(second, params)
        for _ in range(120):
            fm_first.step({Player.PLAYER1: p1, Player.PLAYER2: p2})
            fm_second.step({Player.PLAYER2: p2, Player.PLAYER1: p1})

        assert first == second

    def test_generated_game_runs_to_completion(self):
        """Test that a generated map runs to max_ticks without errors."""
        params = GameParams(num_planets=10, max_ticks=30)
        state = GameStateFactory(params, seed=3).create_game()
        fm = ForwardModel(state, params)

        while not fm.is_terminal():
            fm.step({})

        assert state.game_tick == 30
        assert "Tick: 30" in fm.status_string()
