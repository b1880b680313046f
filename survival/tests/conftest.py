"""
Pytest fixtures for Survival Grid tests.
"""

import pytest

from ..rules import RuleSet, classic_rules, unlock_rules
from ..engine_core.state import (
    GameState,
    PlayerState,
    Position,
    Resource,
    ResourceKind,
    GamePhase,
)
from ..engine_core.reducer import Reducer


def build_state(
    rules: RuleSet,
    positions=((0, 0), (7, 7)),
    resources=None,
    stock=None,
    current=0,
    time_ms=None,
    players=None,
) -> GameState:
    """
    Build a state with everything pinned down.

    resources maps ResourceKind -> (x, y); unlisted kinds are parked
    along the bottom-left so they stay out of the way.
    """
    if stock is None:
        stock = rules.starting_stock

    if players is None:
        players = [
            PlayerState(
                player_id=f"player_{i + 1}",
                name=name,
                position=Position(x, y),
                food=stock,
                water=stock,
                wood=stock,
                portrait=name[0],
            )
            for i, (name, (x, y)) in enumerate(zip(["Alice", "Bob"], positions))
        ]

    parked = {
        ResourceKind.FOOD: (0, rules.grid_size - 1),
        ResourceKind.WATER: (1, rules.grid_size - 1),
        ResourceKind.WOOD: (2, rules.grid_size - 1),
    }
    parked.update(resources or {})

    return GameState(
        game_id="test_game",
        variant=rules.name,
        grid_size=rules.grid_size,
        phase=GamePhase.PLAYING,
        current_player_idx=current,
        time_remaining_ms=rules.duration_ms if time_ms is None else time_ms,
        players=players,
        resources={
            kind: Resource(kind=kind, position=Position(x, y), amount=rules.resource_amount)
            for kind, (x, y) in parked.items()
        },
        random_seed=7,
    )


@pytest.fixture
def classic() -> RuleSet:
    """Classic rules: finite resources, lose on empty stock."""
    return classic_rules()


@pytest.fixture
def unlock() -> RuleSet:
    """Unlock rules: wood gates food and water."""
    return unlock_rules()


@pytest.fixture
def make_state():
    """Factory for hand-built states."""
    return build_state


@pytest.fixture
def classic_reducer(classic) -> Reducer:
    return Reducer.for_rules(classic, seed=7)


@pytest.fixture
def unlock_reducer(unlock) -> Reducer:
    return Reducer.for_rules(unlock, seed=7)
