"""
Tests for game state and setup.

Tests:
- Direction parsing and clamped steps
- Copy-on-write helpers
- Initial state from setup_game
"""

import pytest

from ..engine_core.state import (
    Direction,
    Position,
    Resource,
    ResourceKind,
    PlayerState,
    EndReason,
    GameOutcome,
)
from ..engine_core.setup import setup_game
from ..rules import classic_rules, unlock_rules


class TestDirection:
    """Tests for directional input parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("up", Direction.UP),
        ("ArrowDown", Direction.DOWN),
        ("a", Direction.LEFT),
        (" RIGHT ", Direction.RIGHT),
        (Direction.UP, Direction.UP),
    ])
    def test_parse(self, raw, expected):
        assert Direction.parse(raw) == expected

    @pytest.mark.parametrize("raw", ["jump", 3, None])
    def test_parse_unknown(self, raw):
        with pytest.raises(ValueError):
            Direction.parse(raw)


class TestPosition:
    """Tests for clamped movement."""

    def test_step_clamps_each_axis(self):
        assert Position(0, 0).step(Direction.LEFT, 8) == Position(0, 0)
        assert Position(7, 7).step(Direction.DOWN, 8) == Position(7, 7)
        assert Position(7, 0).step(Direction.UP, 8) == Position(7, 0)
        assert Position(3, 3).step(Direction.RIGHT, 8) == Position(4, 3)


class TestCopyHelpers:
    """Copy-on-write helpers leave the original alone."""

    def test_resource_collected(self):
        """Finite piles shrink, infinite ones stay infinite."""
        finite = Resource(kind=ResourceKind.FOOD, position=Position(1, 1), amount=3)
        infinite = Resource(kind=ResourceKind.WOOD, position=Position(1, 1))

        assert finite.collected(Position(2, 2)).amount == 2
        assert finite.amount == 3
        assert infinite.collected(Position(2, 2)).amount is None
        assert not Resource(kind=ResourceKind.FOOD, position=Position(0, 0), amount=0).is_available

    def test_player_with_collected(self):
        player = PlayerState(player_id="p", name="P", position=Position(0, 0), water=2)

        updated = player.with_collected(ResourceKind.WATER)

        assert updated.water == 3
        assert player.water == 2
        assert updated.total == 3

    def test_with_player(self, classic, make_state):
        state = make_state(classic)
        moved = state.players[0].with_position(Position(4, 4))

        new_state = state.with_player(moved)

        assert new_state.players[0].position == Position(4, 4)
        assert state.players[0].position == Position(0, 0)

    def test_resource_at_uses_kind_order(self, classic, make_state):
        """Stacked piles resolve food, then water, then wood."""
        state = make_state(classic, resources={
            ResourceKind.WOOD: (2, 2),
            ResourceKind.WATER: (2, 2),
        })

        assert state.resource_at(Position(2, 2)).kind == ResourceKind.WATER
        assert [r.kind for r in state.resources_at(Position(2, 2))] == [
            ResourceKind.WATER, ResourceKind.WOOD,
        ]
        assert state.resource_at(Position(5, 5)) is None
        assert state.resources_at(Position(5, 5)) == []

    def test_outcome_messages(self):
        assert GameOutcome(EndReason.TIMEOUT, winner_name="Ann").message == "Time's up! Ann wins!"
        assert "Bo ran out" in GameOutcome(EndReason.OUT_OF_RESOURCES, loser_name="Bo").message


class TestSetupGame:
    """Tests for the initial state."""

    def test_unlock_setup(self):
        """Players start empty in opposite corners; resources avoid them."""
        state = setup_game([("Ann", "A"), ("Bo", "B")], rules=unlock_rules(), random_seed=1)

        assert [p.name for p in state.players] == ["Ann", "Bo"]
        assert state.players[0].position == Position(0, 0)
        assert state.players[1].position == Position(7, 7)
        assert all(p.total == 0 for p in state.players)
        assert state.time_remaining_ms == 120_000
        assert state.current_player_idx == 0
        assert set(state.resources) == set(ResourceKind)
        occupied = state.occupied_positions()
        for resource in state.resources.values():
            assert resource.amount is None
            assert resource.position not in occupied

    def test_unlock_piles_never_stacked(self):
        """Every pile starts on its own cell, so wood is always reachable."""
        for seed in range(300):
            state = setup_game([("Ann", "A"), ("Bo", "B")], rules=unlock_rules(), random_seed=seed)

            positions = [r.position for r in state.resources.values()]
            assert len(set(positions)) == len(positions), seed

    def test_classic_setup(self):
        """Classic players start with five of everything, piles hold three."""
        state = setup_game([("Ann", "A"), ("Bo", "B")], rules=classic_rules(), random_seed=1)

        assert state.variant == "classic"
        assert all(p.food == p.water == p.wood == 5 for p in state.players)
        assert all(r.amount == 3 for r in state.resources.values())

    def test_setup_is_reproducible(self):
        first = setup_game([("Ann", "A"), ("Bo", "B")], random_seed=42)
        second = setup_game([("Ann", "A"), ("Bo", "B")], random_seed=42)

        assert first.resources == second.resources

    def test_names_are_stripped(self):
        state = setup_game([("  Ann ", "A"), ("Bo", "B")])

        assert state.players[0].name == "Ann"

    @pytest.mark.parametrize("players", [
        [("", "A"), ("Bo", "B")],
        [("Ann", "A"), ("   ", "B")],
        [("Ann", ""), ("Bo", "B")],
        [("Ann", "A")],
        [("Ann", "A"), ("Bo", "B"), ("Cy", "C")],
    ])
    def test_invalid_setup_rejected(self, players):
        """Missing names, portraits or players never produce a state."""
        with pytest.raises(ValueError):
            setup_game(players)
