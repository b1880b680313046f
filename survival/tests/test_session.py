"""
Tests for sessions, the game loop and the clock.

Tests:
- Session lifecycle
- Moves and ticks through the loop
- Clock stops at game over and on teardown
- Concurrent moves and ticks lose no update
"""

import threading
import time

import pytest

from ..engine_core.state import ResourceKind, Position, Resource
from ..rules import unlock_rules, classic_rules
from ..session import SessionManager, SessionState, GameLoop, LoopState, GameClock

PLAYERS = [("Ann", "A"), ("Bo", "B")]


@pytest.fixture
def manager():
    return SessionManager()


@pytest.fixture
def session(manager):
    """Unlock session with resources parked on the bottom row."""
    session = manager.create_session(PLAYERS, rules=unlock_rules(), random_seed=3)
    state = session.game_state
    for x, kind in enumerate(ResourceKind):
        state = state.with_resource(Resource(kind=kind, position=Position(x, 7)))
    session.game_state = state
    return session


class TestSessionManager:
    """Tests for session lifecycle."""

    def test_create_session(self, session):
        """A new session holds a fresh state."""
        assert session.state == SessionState.CREATED
        assert session.game_state.game_id == session.session_id
        assert [p.name for p in session.game_state.players] == ["Ann", "Bo"]

    def test_invalid_players_rejected(self, manager):
        with pytest.raises(ValueError):
            manager.create_session([("Ann", ""), ("Bo", "B")])
        assert manager.list_active_sessions() == []

    def test_session_lifecycle(self, manager, session):
        """Session can be created and ended."""
        assert session.session_id in manager.list_active_sessions()

        assert manager.end_session(session.session_id)

        assert session.session_id not in manager.list_active_sessions()
        assert manager.get_session(session.session_id) is None
        assert session.state == SessionState.ABANDONED

    def test_end_unknown_session(self, manager):
        assert not manager.end_session("nope")

    def test_cleanup_stale_sessions(self, manager, session):
        """Only finished, old sessions are collected."""
        active = manager.create_session(PLAYERS)
        loop = GameLoop(session)
        loop.tick(10**9)
        session.created_at -= 7200
        active.created_at -= 7200

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == 1
        assert manager.get_session(session.session_id) is None
        assert manager.get_session(active.session_id) is active


class TestGameLoop:
    """Tests for the serialized update path."""

    def test_loop_initialization(self, session):
        loop = GameLoop(session)

        assert loop.state == LoopState.READY
        assert session.game_loop is loop

    def test_move_updates_session(self, session):
        loop = GameLoop(session)

        result = loop.move("right")

        assert result.success
        assert session.game_state.players[0].position == Position(1, 0)
        assert session.game_state.current_player_idx == 1

    def test_rejected_move_reports_notice(self, session):
        """Food before wood is refused and the turn stays put."""
        state = session.game_state
        session.game_state = state.with_resource(
            Resource(kind=ResourceKind.FOOD, position=Position(1, 0))
        )
        loop = GameLoop(session)

        result = loop.move("right")

        assert not result.success
        assert result.error_code == "RESOURCE_LOCKED"
        assert result.notices
        assert session.game_state.current_player_idx == 0

    def test_bad_direction_raises(self, session):
        loop = GameLoop(session)

        with pytest.raises(ValueError):
            loop.move("sideways")

    def test_listeners_notified(self, session):
        loop = GameLoop(session)
        seen = []
        loop.subscribe(seen.append)

        loop.move("down")
        loop.tick()

        assert len(seen) == 2
        assert seen[1].game_state.time_remaining_ms == 119_000

    def test_listeners_see_transitions_in_order(self, manager):
        """Snapshots from ticks and moves on many threads arrive in order."""
        session = manager.create_session(PLAYERS, rules=classic_rules(), random_seed=1)
        loop = GameLoop(session)
        seen = []
        loop.subscribe(lambda turn: seen.append(
            (turn.game_state.time_remaining_ms, turn.game_state.turn_number)
        ))
        barrier = threading.Barrier(6)

        def ticker():
            barrier.wait()
            for _ in range(25):
                loop.tick(100)

        def mover():
            barrier.wait()
            for i in range(25):
                loop.move("left" if i % 2 else "right")

        threads = [threading.Thread(target=ticker) for _ in range(3)]
        threads += [threading.Thread(target=mover) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == 150
        times = [t for t, _ in seen]
        turns = [n for _, n in seen]
        assert times == sorted(times, reverse=True)
        assert turns == sorted(turns)

    def test_timeout_stops_clock(self, session):
        """Running out of time ends the game and the clock."""
        loop = GameLoop(session)
        loop.start()
        assert loop.clock.is_running

        result = loop.tick(120_000)

        assert result.game_over
        assert result.outcome.reason.value == "timeout"
        assert not loop.clock.is_running
        assert loop.state == LoopState.GAME_OVER
        assert session.state == SessionState.GAME_OVER

    def test_input_after_game_over_ignored(self, session):
        loop = GameLoop(session)
        loop.tick(120_000)
        finished = session.game_state

        result = loop.move("right")

        assert not result.success
        assert result.error_code == "GAME_OVER"
        assert session.game_state is finished

    def test_end_session_stops_clock(self, manager, session):
        """Tearing the view down cancels the clock for good."""
        loop = GameLoop(session)
        loop.start()

        manager.end_session(session.session_id)

        assert not loop.clock.is_running
        assert loop.state == LoopState.CLOSED
        assert not loop.tick().success

    def test_concurrent_moves_and_ticks(self, manager):
        """Moves and ticks from many threads are all applied exactly once."""
        session = manager.create_session(PLAYERS, rules=classic_rules(), random_seed=1)
        loop = GameLoop(session)
        barrier = threading.Barrier(8)
        accepted = []

        def mover():
            barrier.wait()
            for i in range(20):
                result = loop.move("left" if i % 2 else "right")
                if result.success:
                    accepted.append(1)

        def ticker():
            barrier.wait()
            for _ in range(20):
                loop.tick(100)

        threads = [threading.Thread(target=mover) for _ in range(4)]
        threads += [threading.Thread(target=ticker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        state = session.game_state
        assert state.time_remaining_ms == 120_000 - 80 * 100
        if not state.is_over:
            assert state.turn_number == len(accepted)


class TestGameClock:
    """Tests for the countdown clock."""

    def test_clock_ticks_and_stops(self):
        fired = threading.Event()
        ticks = []

        def on_tick(elapsed):
            ticks.append(elapsed)
            fired.set()

        clock = GameClock(10, on_tick)
        clock.start()
        assert fired.wait(timeout=2)
        clock.stop()
        time.sleep(0.05)
        count = len(ticks)
        time.sleep(0.1)

        assert count >= 1
        assert len(ticks) == count
        assert all(elapsed == 10 for elapsed in ticks)
        assert not clock.is_running

    def test_start_twice_is_noop(self):
        clock = GameClock(10_000, lambda elapsed: None)
        clock.start()
        timer = clock._timer
        clock.start()

        assert clock._timer is timer
        clock.stop()

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            GameClock(0, lambda elapsed: None)
