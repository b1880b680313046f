"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new state, input never modified
- Validates before applying
- Returns ActionResult with success/failure
- The only randomness is the placement draw on collection

A move resolves in this order: movement, collection, end conditions,
turn advance. End conditions are checked in precedence order:
goal reached, empty stock, move limit, timer.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, PlayerState, GameOutcome, EndReason, ResourceKind
from .action import Action, ActionType, ActionResult
from .placement import ResourcePlacer
from ..rules import RuleSet
from ..utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    RuleSet provides the variant parameters, the placer the RNG.
    """
    rules: RuleSet
    placer: ResourcePlacer

    @classmethod
    def for_rules(cls, rules: RuleSet, seed: int | None = None) -> Reducer:
        """Build a reducer with a placer matching the rules."""
        return cls(
            rules=rules,
            placer=ResourcePlacer(
                grid_size=rules.grid_size,
                seed=seed,
                max_attempts=rules.placement_attempts,
            ),
        )

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error. A terminal state
        is returned as-is for any action.
        """
        if state.is_over:
            return ActionResult.failure(
                state, "Game is over - no actions allowed", error_code="GAME_OVER"
            )

        validation_error = self._validate_action(state, action)
        if validation_error:
            error, code = validation_error
            return ActionResult.failure(state, error, error_code=code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                state,
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            result = handler(state, action)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(state, str(e), error_code="HANDLER_ERROR")

        # Moves are logged for replay; ticks would drown the history
        if result.success and action.action_type == ActionType.MOVE:
            result.new_state = result.new_state._copy_with(
                action_history=[*state.action_history, action]
            )
        return result

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action is legal in the current state.

        Returns (error message, error code) if invalid, None if valid.
        """
        if action.action_type == ActionType.MOVE:
            if action.payload.direction is None:
                return "Move has no direction", "INVALID_ACTION"
            player_id = action.payload.player_id
            if player_id is not None and player_id != state.current_player.player_id:
                return f"Not {player_id}'s turn", "NOT_YOUR_TURN"

        if action.action_type == ActionType.TICK and action.payload.elapsed_ms < 0:
            return "Clock cannot run backwards", "INVALID_ACTION"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.MOVE: self._handle_move,
            ActionType.TICK: self._handle_tick,
        }
        return handlers.get(action_type)

    def _handle_move(self, state: GameState, action: Action) -> ActionResult:
        """Handle a directional move by the current player."""
        player = state.current_player
        direction = action.payload.direction
        changes: list[str] = []

        moved = player.with_position(player.position.step(direction, state.grid_size))
        if moved.position == player.position:
            changes.append(f"{player.name} bumped into the edge")
        else:
            changes.append(
                f"{player.name} moved {direction.value} to "
                f"({moved.position.x}, {moved.position.y})"
            )

        next_state = state
        piles = [r for r in state.resources_at(moved.position) if r.is_available]
        # A locked pile only blocks the move when nothing else on the cell is open
        resource = next((r for r in piles if not self._is_locked(moved, r.kind)), None)
        if piles and resource is None:
            notice = (
                f"{player.name} needs {self.rules.unlock_threshold} wood "
                f"before gathering {piles[0].kind.value}."
            )
            logger.debug("Rejected move: %s", notice)
            return ActionResult.failure(
                state, notice, error_code="RESOURCE_LOCKED", notices=[notice]
            )

        if resource:
            if self._is_saturated(moved, resource.kind):
                changes.append(f"{player.name} already has enough {resource.kind.value}")
            else:
                moved = moved.with_collected(resource.kind)
                occupied = {
                    p.position for p in state.players if p.player_id != player.player_id
                }
                occupied.add(moved.position)
                new_position = self.placer.place(
                    occupied,
                    avoid=self.rules.avoid_players,
                    piles=[
                        r.position for r in state.resources.values() if r.kind != resource.kind
                    ],
                )
                next_state = next_state.with_resource(resource.collected(new_position))
                changes.append(f"{player.name} collected {resource.kind.value}")

        moved = moved._copy_with(move_count=moved.move_count + 1)
        next_state = next_state.with_player(moved)

        outcome = self._check_end(next_state, moved)
        if outcome:
            logger.info("Game %s over: %s", state.game_id, outcome.message)
            return ActionResult.success_with_state(
                next_state.finished(outcome), changes, notices=[outcome.message]
            )

        next_state = next_state._copy_with(
            current_player_idx=(state.current_player_idx + 1) % state.num_players,
            turn_number=state.turn_number + 1,
        )
        return ActionResult.success_with_state(next_state, changes)

    def _handle_tick(self, state: GameState, action: Action) -> ActionResult:
        """Run the clock down, ending the game at zero."""
        remaining = max(0, state.time_remaining_ms - action.payload.elapsed_ms)
        next_state = state._copy_with(time_remaining_ms=remaining)

        if remaining == 0:
            outcome = resolve_timeout(next_state)
            logger.info("Game %s over: %s", state.game_id, outcome.message)
            return ActionResult.success_with_state(
                next_state.finished(outcome), notices=[outcome.message]
            )
        return ActionResult.success_with_state(next_state)

    def _is_locked(self, player: PlayerState, kind: ResourceKind) -> bool:
        """Food and water stay locked until wood reaches the threshold."""
        threshold = self.rules.unlock_threshold
        if threshold is None or kind == ResourceKind.WOOD:
            return False
        return player.wood < threshold

    def _is_saturated(self, player: PlayerState, kind: ResourceKind) -> bool:
        """Wood stops being collectible once it has unlocked the rest."""
        threshold = self.rules.unlock_threshold
        return threshold is not None and kind == ResourceKind.WOOD and player.wood >= threshold

    def _check_end(self, state: GameState, player: PlayerState) -> GameOutcome | None:
        """End conditions for the acting player, in precedence order."""
        rules = self.rules

        if rules.goal_target is not None and all(
            player.count(kind) >= rules.goal_target for kind in ResourceKind
        ):
            return GameOutcome(
                reason=EndReason.GOAL_REACHED,
                winner_id=player.player_id,
                winner_name=player.name,
            )

        if rules.lose_on_empty_stock and any(
            player.count(kind) <= 0 for kind in ResourceKind
        ):
            return GameOutcome(
                reason=EndReason.OUT_OF_RESOURCES,
                loser_id=player.player_id,
                loser_name=player.name,
            )

        if rules.max_moves is not None and player.move_count >= rules.max_moves:
            return GameOutcome(
                reason=EndReason.MOVE_LIMIT,
                loser_id=player.player_id,
                loser_name=player.name,
            )

        if state.time_remaining_ms <= 0:
            return resolve_timeout(state)

        return None


def resolve_timeout(state: GameState) -> GameOutcome:
    """
    Highest food + water + wood wins when time runs out.

    Ties go to the later player in turn order.
    """
    winner = state.players[0]
    for player in state.players[1:]:
        if player.total >= winner.total:
            winner = player

    loser = None
    if state.num_players == 2:
        loser = next(p for p in state.players if p.player_id != winner.player_id)

    return GameOutcome(
        reason=EndReason.TIMEOUT,
        winner_id=winner.player_id,
        winner_name=winner.name,
        loser_id=loser.player_id if loser else None,
        loser_name=loser.name if loser else None,
    )


def apply_action(
    rules: RuleSet,
    state: GameState,
    action: Action,
    placer: ResourcePlacer | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer for the given rules and applies the action.
    """
    if placer is None:
        seed = None if state.random_seed is None else state.random_seed + state.turn_number
        placer = ResourcePlacer(
            grid_size=rules.grid_size,
            seed=seed,
            max_attempts=rules.placement_attempts,
        )
    reducer = Reducer(rules=rules, placer=placer)
    return reducer.apply(state, action)
