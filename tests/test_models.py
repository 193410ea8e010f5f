"""Tests for data models."""

import pydantic
import pytest

from planetwars.models import (
    DO_NOTHING,
    Action,
    GameParams,
    GameState,
    Observation,
    Planet,
    Player,
    Transporter,
)
from planetwars.utils import Vec2d


def make_planet(planet_id=0, owner=Player.PLAYER1, n_ships=10.0, growth_rate=0.1, x=100.0, y=100.0):
    return Planet(
        id=planet_id,
        position=Vec2d(x, y),
        radius=10.0,
        owner=owner,
        n_ships=n_ships,
        growth_rate=growth_rate,
    )


class TestPlayer:
    """Test player identities."""

    def test_opponent(self):
        """Test that opponent swaps the real players."""
        assert Player.PLAYER1.opponent() == Player.PLAYER2
        assert Player.PLAYER2.opponent() == Player.PLAYER1
        assert Player.NEUTRAL.opponent() == Player.NEUTRAL

    def test_is_real(self):
        """Test that only the two players are real."""
        assert Player.PLAYER1.is_real
        assert Player.PLAYER2.is_real
        assert not Player.NEUTRAL.is_real


class TestPlanet:
    """Test planet validation."""

    def test_valid_planet(self):
        """Test creating a valid planet."""
        planet = make_planet()

        assert planet.owner == Player.PLAYER1
        assert planet.transporter is None

    def test_negative_ships(self):
        """Test that negative ship counts are rejected."""
        with pytest.raises(ValueError, match="Invalid n_ships"):
            make_planet(n_ships=-1.0)

    def test_negative_growth(self):
        """Test that negative growth rates are rejected."""
        with pytest.raises(ValueError, match="Invalid growth_rate"):
            make_planet(growth_rate=-0.5)


class TestTransporter:
    """Test transporter validation."""

    def test_neutral_owner_rejected(self):
        """Test that Neutral cannot own a transporter."""
        with pytest.raises(ValueError, match="Invalid owner"):
            Transporter(Player.NEUTRAL, 5.0, 0, 1, Vec2d(0, 0), Vec2d(1, 0))

    def test_empty_transporter_rejected(self):
        """Test that a transporter must carry ships."""
        with pytest.raises(ValueError, match="Invalid n_ships"):
            Transporter(Player.PLAYER1, 0.0, 0, 1, Vec2d(0, 0), Vec2d(1, 0))

    def test_self_target_rejected(self):
        """Test that a transporter cannot target its own source."""
        with pytest.raises(ValueError, match="cannot target its own source"):
            Transporter(Player.PLAYER1, 5.0, 2, 2, Vec2d(0, 0), Vec2d(1, 0))


class TestAction:
    """Test actions."""

    def test_do_nothing_sentinel(self):
        """Test that do_nothing returns the shared sentinel."""
        assert Action.do_nothing() is DO_NOTHING
        assert DO_NOTHING.is_do_nothing

    def test_actions_are_hashable(self):
        """Test that equal actions collapse in sets and dicts."""
        a = Action(Player.PLAYER1, 0, 1, 5.0)
        b = Action(Player.PLAYER1, 0, 1, 5.0)

        assert a == b
        assert len({a, b, DO_NOTHING}) == 2

    def test_negative_ids_mean_do_nothing(self):
        """Test that any action without a real source is a do-nothing."""
        assert Action(Player.PLAYER2, -1, 3, 4.0).is_do_nothing
        assert not Action(Player.PLAYER2, 0, 3, 4.0).is_do_nothing


class TestGameParams:
    """Test game parameter validation."""

    def test_defaults(self):
        """Test that default parameters are valid."""
        params = GameParams()

        assert params.num_planets >= 2
        assert params.min_growth_rate <= params.max_growth_rate

    def test_zero_planets_rejected(self):
        """Test that malformed parameters fail at construction."""
        with pytest.raises(pydantic.ValidationError):
            GameParams(num_planets=0)

    def test_inverted_ranges_rejected(self):
        """Test that min above max is rejected."""
        with pytest.raises(pydantic.ValidationError, match="min_growth_rate"):
            GameParams(min_growth_rate=0.5, max_growth_rate=0.1)

    def test_frozen(self):
        """Test that parameters are read-only."""
        params = GameParams()

        with pytest.raises(pydantic.ValidationError):
            params.max_ticks = 10

    def test_mean_initial_ships(self):
        """Test the mean initial ship count."""
        params = GameParams(min_initial_ships_per_planet=4.0, max_initial_ships_per_planet=10.0)

        assert params.mean_initial_ships == 7.0


class TestGameState:
    """Test the game state container."""

    def test_ids_must_match_indices(self):
        """Test that planet ids must equal their index."""
        with pytest.raises(ValueError, match="ids must match indices"):
            GameState(planets=[make_planet(planet_id=1)])

    def test_negative_tick_rejected(self):
        """Test that the tick counter cannot be negative."""
        with pytest.raises(ValueError, match="Invalid game_tick"):
            GameState(game_tick=-1)

    def test_deep_copy_independence(self):
        """Test that mutating a copy leaves the original unchanged."""
        planet = make_planet()
        planet.transporter = Transporter(Player.PLAYER1, 3.0, 0, 1, Vec2d(0, 0), Vec2d(1, 0))
        state = GameState(planets=[planet, make_planet(planet_id=1, owner=Player.PLAYER2)])

        copy = state.deep_copy()
        copy.planets[0].n_ships = 99.0
        copy.planets[0].transporter.n_ships = 50.0
        copy.planets[1].owner = Player.NEUTRAL
        copy.game_tick = 7

        assert state.planets[0].n_ships == 10.0
        assert state.planets[0].transporter.n_ships == 3.0
        assert state.planets[1].owner == Player.PLAYER2
        assert state.game_tick == 0

    def test_transporters_and_ownership_queries(self):
        """Test the transporter and ownership helpers."""
        p0 = make_planet(0)
        p0.transporter = Transporter(Player.PLAYER1, 3.0, 0, 1, Vec2d(0, 0), Vec2d(1, 0))
        state = GameState(planets=[p0, make_planet(1, owner=Player.NEUTRAL)])

        assert len(state.transporters()) == 1
        assert [p.id for p in state.planets_owned_by(Player.PLAYER1)] == [0]


class TestObservation:
    """Test observation validation."""

    def test_neutral_observer_rejected(self):
        """Test that only real players can observe."""
        with pytest.raises(ValueError, match="Invalid observer"):
            Observation(observer=Player.NEUTRAL)
