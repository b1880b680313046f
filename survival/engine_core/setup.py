"""
Game Setup - Creates the initial game state.

This module handles:
- Validating player names and portraits
- Placing players on their start cells
- Spawning one pile of each resource
- Seeding the RNG for deterministic replays
"""

from __future__ import annotations
import random
import uuid

from .state import (
    GameState,
    PlayerState,
    Position,
    Resource,
    ResourceKind,
    GamePhase,
)
from .placement import ResourcePlacer
from ..rules import RuleSet, unlock_rules


def setup_game(
    players: list[tuple[str, str]],
    rules: RuleSet | None = None,
    random_seed: int | None = None,
    game_id: str | None = None,
    placer: ResourcePlacer | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        players: (name, portrait) per player, in turn order
        rules: Variant parameters (defaults to the unlock rules)
        random_seed: Seed for deterministic resource placement
        game_id: Identifier for the game (generated if omitted)
        placer: Placement generator to use (built from the seed if omitted)

    Returns:
        Initial GameState ready for play
    """
    game_rules = (rules or unlock_rules()).validated()

    if len(players) != game_rules.num_players:
        raise ValueError(
            f"{game_rules.name} needs {game_rules.num_players} players, got {len(players)}"
        )
    for i, (name, portrait) in enumerate(players, start=1):
        if not name or not name.strip():
            raise ValueError(f"Player {i} needs a name")
        if not portrait or not portrait.strip():
            raise ValueError(f"Player {i} needs a portrait")

    if placer is None:
        placer = ResourcePlacer(
            grid_size=game_rules.grid_size,
            max_attempts=game_rules.placement_attempts,
            rng=random.Random(random_seed),
        )

    player_states = _create_players(players, game_rules)
    occupied = {p.position for p in player_states}

    resources = {}
    for kind in ResourceKind:
        resources[kind] = Resource(
            kind=kind,
            position=placer.place(
                occupied,
                avoid=game_rules.avoid_players,
                piles=[r.position for r in resources.values()],
            ),
            amount=game_rules.resource_amount,
        )

    return GameState(
        game_id=game_id or str(uuid.uuid4()),
        variant=game_rules.name,
        grid_size=game_rules.grid_size,
        phase=GamePhase.PLAYING,
        turn_number=0,
        current_player_idx=0,
        time_remaining_ms=game_rules.duration_ms,
        players=player_states,
        resources=resources,
        random_seed=random_seed,
    )


def _create_players(players: list[tuple[str, str]], rules: RuleSet) -> list[PlayerState]:
    """Create player states on their start cells."""
    stock = rules.starting_stock
    return [
        PlayerState(
            player_id=f"player_{i + 1}",
            name=name.strip(),
            position=Position(x, y),
            food=stock,
            water=stock,
            wood=stock,
            portrait=portrait,
        )
        for i, ((name, portrait), (x, y)) in enumerate(zip(players, rules.player_starts()))
    ]
