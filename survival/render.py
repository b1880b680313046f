"""
Text rendering of a game snapshot.

Players are drawn over resources on shared cells. A one-character
portrait is used as the player's glyph, otherwise the player number.
"""

from __future__ import annotations

from .engine_core.state import GameState, PlayerState, Position, ResourceKind

RESOURCE_GLYPHS = {
    ResourceKind.FOOD: "F",
    ResourceKind.WATER: "~",
    ResourceKind.WOOD: "#",
}
EMPTY_CELL = "."


def player_glyph(player: PlayerState, index: int) -> str:
    if len(player.portrait) == 1 and not player.portrait.isspace():
        return player.portrait
    return str(index + 1)


def render_grid(state: GameState) -> str:
    """The board, one text line per row."""
    players = {p.position: player_glyph(p, i) for i, p in enumerate(state.players)}

    rows = []
    for y in range(state.grid_size):
        cells = []
        for x in range(state.grid_size):
            position = Position(x, y)
            if position in players:
                cells.append(players[position])
                continue
            resource = state.resource_at(position)
            cells.append(RESOURCE_GLYPHS[resource.kind] if resource else EMPTY_CELL)
        rows.append(" ".join(cells))
    return "\n".join(rows)


def render_status(state: GameState) -> str:
    """Timer, whose turn it is and every player's stock."""
    lines = [f"Time Remaining: {state.seconds_remaining} seconds"]
    if state.is_over:
        lines.append(state.outcome.message)
    else:
        lines.append(f"Current Player: {state.current_player.name}")

    for i, p in enumerate(state.players):
        lines.append(
            f"[{player_glyph(p, i)}] {p.name}: Food = {p.food}, Water = {p.water}, "
            f"Wood = {p.wood}, Moves = {p.move_count}"
        )
    return "\n".join(lines)


def render(state: GameState) -> str:
    return f"{render_grid(state)}\n\n{render_status(state)}"
