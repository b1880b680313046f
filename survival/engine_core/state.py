"""
Game State - The authoritative record of one game.

Design principles:
- Immutable-friendly: all mutations return new state
- Observable: every transition is a new value the UI can diff
- Variant-agnostic: rule differences live in RuleSet, not here
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from enum import Enum


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


class ResourceKind(Enum):
    """Collectible resources. Order is the lookup order on shared cells."""
    FOOD = "food"
    WATER = "water"
    WOOD = "wood"


class Direction(Enum):
    """Directional input. Values are (dx, dy) with y growing downward."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @classmethod
    def parse(cls, raw: str | Direction) -> Direction:
        """Accept enum values, arrow-key names and wasd."""
        if isinstance(raw, Direction):
            return raw
        if not isinstance(raw, str):
            raise ValueError(f"Unknown direction: {raw!r}")
        key = raw.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ValueError(f"Unknown direction: {raw!r}")


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_ALIASES = {
    "up": Direction.UP, "arrowup": Direction.UP, "w": Direction.UP,
    "down": Direction.DOWN, "arrowdown": Direction.DOWN, "s": Direction.DOWN,
    "left": Direction.LEFT, "arrowleft": Direction.LEFT, "a": Direction.LEFT,
    "right": Direction.RIGHT, "arrowright": Direction.RIGHT, "d": Direction.RIGHT,
}


@dataclass(frozen=True)
class Position:
    """A grid cell. x is the column, y is the row."""
    x: int
    y: int

    def step(self, direction: Direction, grid_size: int) -> Position:
        """Move one cell, clamped to the grid on each axis."""
        dx, dy = direction.delta
        return Position(
            x=min(max(self.x + dx, 0), grid_size - 1),
            y=min(max(self.y + dy, 0), grid_size - 1),
        )


@dataclass
class Resource:
    """
    A resource pile on the grid.

    amount of None means infinite. A pile at zero stays where it is
    and can no longer be collected.
    """
    kind: ResourceKind
    position: Position
    amount: int | None = None

    @property
    def is_available(self) -> bool:
        return self.amount is None or self.amount > 0

    def collected(self, new_position: Position) -> Resource:
        """Return the pile after one unit is taken and it moves."""
        amount = None if self.amount is None else self.amount - 1
        return Resource(kind=self.kind, position=new_position, amount=amount)


@dataclass
class PlayerState:
    """State for a single player."""
    player_id: str
    name: str
    position: Position
    food: int = 0
    water: int = 0
    wood: int = 0
    move_count: int = 0
    portrait: str = ""  # Opaque handle owned by the presentation layer

    def count(self, kind: ResourceKind) -> int:
        return getattr(self, kind.value)

    @property
    def total(self) -> int:
        return self.food + self.water + self.wood

    def with_position(self, position: Position) -> PlayerState:
        return self._copy_with(position=position)

    def with_collected(self, kind: ResourceKind) -> PlayerState:
        """Return new player state with one more of kind."""
        return self._copy_with(**{kind.value: self.count(kind) + 1})

    def _copy_with(self, **kwargs) -> PlayerState:
        return PlayerState(
            player_id=kwargs.get("player_id", self.player_id),
            name=kwargs.get("name", self.name),
            position=kwargs.get("position", self.position),
            food=kwargs.get("food", self.food),
            water=kwargs.get("water", self.water),
            wood=kwargs.get("wood", self.wood),
            move_count=kwargs.get("move_count", self.move_count),
            portrait=kwargs.get("portrait", self.portrait),
        )


class EndReason(Enum):
    """Why the game ended."""
    GOAL_REACHED = "goal_reached"
    OUT_OF_RESOURCES = "out_of_resources"
    MOVE_LIMIT = "move_limit"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class GameOutcome:
    """Terminal result. Either side may be absent depending on the reason."""
    reason: EndReason
    winner_id: str | None = None
    winner_name: str | None = None
    loser_id: str | None = None
    loser_name: str | None = None

    @property
    def message(self) -> str:
        if self.reason == EndReason.GOAL_REACHED:
            return f"{self.winner_name} gathered everything and wins!"
        if self.reason == EndReason.OUT_OF_RESOURCES:
            return f"{self.loser_name} ran out of resources! Game over."
        if self.reason == EndReason.MOVE_LIMIT:
            return f"{self.loser_name} ran out of moves and loses."
        return f"Time's up! {self.winner_name} wins!"


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    variant: str
    grid_size: int

    phase: GamePhase = GamePhase.PLAYING
    turn_number: int = 0
    current_player_idx: int = 0
    time_remaining_ms: int = 0

    players: list[PlayerState] = field(default_factory=list)
    resources: dict[ResourceKind, Resource] = field(default_factory=dict)

    outcome: GameOutcome | None = None

    # History (for replay, logging)
    action_history: list[Any] = field(default_factory=list)

    random_seed: int | None = None

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def seconds_remaining(self) -> int:
        return self.time_remaining_ms // 1000

    def occupied_positions(self) -> set[Position]:
        return {p.position for p in self.players}

    def resources_at(self, position: Position) -> list[Resource]:
        """Every pile on a cell, in ResourceKind order."""
        piles = []
        for kind in ResourceKind:
            resource = self.resources.get(kind)
            if resource and resource.position == position:
                piles.append(resource)
        return piles

    def resource_at(self, position: Position) -> Resource | None:
        """First resource on a cell, in ResourceKind order."""
        piles = self.resources_at(position)
        return piles[0] if piles else None

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        new_players = [
            player if p.player_id == player.player_id else p
            for p in self.players
        ]
        return self._copy_with(players=new_players)

    def with_resource(self, resource: Resource) -> GameState:
        """Return new state with updated resource."""
        new_resources = self.resources.copy()
        new_resources[resource.kind] = resource
        return self._copy_with(resources=new_resources)

    def finished(self, outcome: GameOutcome) -> GameState:
        """Return the terminal state for outcome."""
        return self._copy_with(phase=GamePhase.GAME_OVER, outcome=outcome)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            game_id=kwargs.get("game_id", self.game_id),
            variant=kwargs.get("variant", self.variant),
            grid_size=kwargs.get("grid_size", self.grid_size),
            phase=kwargs.get("phase", self.phase),
            turn_number=kwargs.get("turn_number", self.turn_number),
            current_player_idx=kwargs.get("current_player_idx", self.current_player_idx),
            time_remaining_ms=kwargs.get("time_remaining_ms", self.time_remaining_ms),
            players=kwargs.get("players", self.players),
            resources=kwargs.get("resources", self.resources),
            outcome=kwargs.get("outcome", self.outcome),
            action_history=kwargs.get("action_history", self.action_history),
            random_seed=kwargs.get("random_seed", self.random_seed),
        )
