"""Tests for the GameEngine module."""

import json
import threading

from classic_snake.config import GameConfig
from classic_snake.engine import GameEngine
from classic_snake.events import EventKind
from classic_snake.highscore import MemoryHighScoreStore
from classic_snake.snake import Direction, Snake
from classic_snake.state import GameState, Phase


def _place(engine: GameEngine, body, heading=Direction.RIGHT, food=(0, 0), score=0):
    engine.state = GameState(
        snake=Snake(tuple(body)),
        food=food,
        heading=heading,
        score=score,
        phase=Phase.RUNNING,
    )


class _FailingStore:
    def read(self) -> int:
        raise OSError("disk unavailable")

    def write(self, score: int) -> None:
        raise OSError("disk unavailable")


class _BrokenBackendStore:
    def read(self) -> int:
        raise RuntimeError("backend down")

    def write(self, score: int) -> None:
        raise RuntimeError("backend down")


class TestEngineInit:
    def test_default_init(self):
        engine = GameEngine(seed=0)
        assert engine.phase is Phase.IDLE
        assert engine.score == 0
        assert not engine.game_over
        assert engine.state.snake.head == (10, 10)
        assert engine.state.food == (15, 15)

    def test_reads_high_score_once(self):
        engine = GameEngine(store=MemoryHighScoreStore(120), seed=0)
        assert engine.high_score == 120

    def test_unreadable_store_defaults_to_zero(self):
        engine = GameEngine(store=_FailingStore(), seed=0)
        assert engine.high_score == 0

    def test_store_backend_error_on_read_defaults_to_zero(self):
        engine = GameEngine(store=_BrokenBackendStore(), seed=0)
        assert engine.high_score == 0
        assert engine.phase is Phase.IDLE


class TestEngineLifecycle:
    def test_start(self):
        engine = GameEngine(seed=0)
        state = engine.start()
        assert state.phase is Phase.RUNNING
        assert engine.state is state

    def test_idle_ticks_do_nothing(self):
        engine = GameEngine(seed=0)
        before = engine.state
        engine.advance_tick()
        assert engine.state is before

    def test_pause_blocks_ticks_and_turns(self):
        engine = GameEngine(seed=0)
        engine.start()
        engine.toggle_pause()
        before = engine.state
        engine.advance_tick()
        engine.set_heading(Direction.UP)
        assert engine.state is before
        engine.toggle_pause()
        assert engine.phase is Phase.RUNNING

    def test_reset_returns_to_idle(self):
        engine = GameEngine(seed=0)
        engine.start()
        engine.advance_tick()
        engine.reset()
        assert engine.phase is Phase.IDLE
        assert engine.state.snake.body == ((10, 10),)
        assert engine.score == 0


class TestEngineMovement:
    def test_basic_tick(self):
        engine = GameEngine(seed=0)
        engine.start()
        _place(engine, [(10, 10)], food=(0, 0))
        engine.advance_tick()
        assert engine.state.snake.head == (11, 10)

    def test_direction_change(self):
        engine = GameEngine(seed=0)
        engine.start()
        _place(engine, [(10, 10)], food=(0, 0))
        engine.set_heading(Direction.UP)
        engine.advance_tick()
        assert engine.state.snake.head == (10, 9)

    def test_reversal_ignored(self):
        engine = GameEngine(seed=0)
        engine.start()
        engine.set_heading(Direction.LEFT)
        assert engine.state.heading is Direction.RIGHT

    def test_ignored_turn_keeps_snapshot(self):
        engine = GameEngine(seed=0)
        before = engine.start()
        assert engine.set_heading(Direction.LEFT) is before
        assert engine.set_heading(Direction.RIGHT) is before
        assert engine.state is before


class TestEngineGameOver:
    def test_runs_into_wall(self):
        """A fresh game heading right ends at the right wall."""
        engine = GameEngine(GameConfig(grid_size=10), seed=7)
        engine.start()
        _place(engine, [(5, 5)], food=(0, 0))
        for _ in range(20):
            engine.advance_tick()
            if engine.game_over:
                break
        assert engine.game_over
        assert engine.state.snake.head == (9, 5)

    def test_state_frozen_after_game_over(self):
        engine = GameEngine(seed=0)
        engine.start()
        _place(engine, [(19, 3)])
        engine.advance_tick()
        over = engine.state
        engine.advance_tick()
        engine.set_heading(Direction.UP)
        engine.toggle_pause()
        assert engine.state is over


class TestEngineHighScore:
    def test_new_high_score_persisted(self):
        store = MemoryHighScoreStore(5)
        engine = GameEngine(store=store, seed=0)
        engine.start()
        _place(engine, [(10, 10)], food=(11, 10))
        engine.advance_tick()
        assert engine.high_score == 10
        assert store.score == 10
        assert store.writes == 1

    def test_lower_score_not_persisted(self):
        store = MemoryHighScoreStore(500)
        engine = GameEngine(store=store, seed=0)
        engine.start()
        _place(engine, [(10, 10)], food=(11, 10))
        engine.advance_tick()
        assert engine.high_score == 500
        assert store.writes == 0

    def test_write_failure_does_not_corrupt_state(self):
        engine = GameEngine(store=_FailingStore(), seed=0)
        engine.start()
        _place(engine, [(10, 10)], food=(11, 10))
        state = engine.advance_tick()
        assert state.score == 10
        assert engine.high_score == 10
        assert engine.phase is Phase.RUNNING

    def test_store_backend_error_still_delivers_events(self):
        engine = GameEngine(store=_BrokenBackendStore(), seed=0)
        seen = []
        engine.add_listener(seen.append)
        engine.start()
        _place(engine, [(10, 10)], food=(11, 10))
        state = engine.advance_tick()
        assert state.score == 10
        assert engine.state is state
        assert engine.high_score == 10
        assert engine.phase is Phase.RUNNING
        assert [e.kind for e in seen] == [
            EventKind.STARTED,
            EventKind.FOOD_EATEN,
            EventKind.NEW_HIGH_SCORE,
        ]
        # The game keeps going after the failed write.
        assert engine.advance_tick().snake.head == (12, 10)


class TestEngineNotifications:
    def test_events_delivered_in_order(self):
        engine = GameEngine(seed=0)
        seen = []
        engine.add_listener(seen.append)
        engine.start()
        engine.toggle_pause()
        engine.toggle_pause()
        _place(engine, [(10, 10)], food=(11, 10))
        engine.advance_tick()
        _place(engine, [(19, 0)], score=10)
        engine.advance_tick()
        engine.reset()
        assert [e.kind for e in seen] == [
            EventKind.STARTED,
            EventKind.PAUSED,
            EventKind.RESUMED,
            EventKind.FOOD_EATEN,
            EventKind.NEW_HIGH_SCORE,
            EventKind.GAME_OVER,
            EventKind.RESET,
        ]
        assert seen[5].score == 10

    def test_failing_listener_is_isolated(self):
        engine = GameEngine(seed=0)
        seen = []

        def boom(event):
            raise RuntimeError("sink down")

        engine.add_listener(boom)
        engine.add_listener(seen.append)
        engine.start()
        assert engine.phase is Phase.RUNNING
        assert len(seen) == 1

    def test_remove_listener(self):
        engine = GameEngine(seed=0)
        seen = []
        engine.add_listener(seen.append)
        engine.remove_listener(seen.append)
        engine.start()
        assert seen == []


class TestEngineConcurrency:
    def test_threads_share_engine_safely(self):
        engine = GameEngine(GameConfig(grid_size=30), seed=1)
        engine.start()
        headings = [Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT]

        def steer():
            for i in range(200):
                engine.set_heading(headings[i % 4])

        def tick():
            for _ in range(200):
                engine.advance_tick()

        threads = [threading.Thread(target=steer), threading.Thread(target=tick)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        body = engine.state.snake.body
        assert len(set(body)) == len(body)
        assert all(engine.grid.in_bounds(c) for c in body)


class TestEngineSerialization:
    def test_state_is_json_serializable(self):
        engine = GameEngine(GameConfig(grid_size=10), seed=42)
        engine.start()
        engine.advance_tick()
        serialized = json.dumps(engine.get_state())
        assert isinstance(serialized, str)

    def test_state_structure(self):
        engine = GameEngine(seed=0)
        state = engine.get_state()
        for key in (
            "phase", "score", "high_score", "is_over", "is_paused",
            "heading", "snake", "food", "grid",
        ):
            assert key in state
        assert state["phase"] == "idle"
        assert state["heading"] == "right"


class TestEngineDeterminism:
    def test_same_seed_same_outcome(self):
        actions = [Direction.UP, Direction.LEFT, Direction.DOWN, Direction.LEFT]
        assert self._run_game(123, actions) == self._run_game(123, actions)

    def test_different_seeds_differ(self):
        a = GameEngine(seed=1).start()
        b = GameEngine(seed=2).start()
        c = GameEngine(seed=3).start()
        assert len({a.food, b.food, c.food}) > 1

    @staticmethod
    def _run_game(seed: int, actions: list[Direction]) -> dict:
        engine = GameEngine(seed=seed)
        engine.start()
        for action in actions:
            engine.set_heading(action)
            engine.advance_tick()
        return engine.get_state()
