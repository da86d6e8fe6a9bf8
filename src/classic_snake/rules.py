"""Pure state-transition function for the snake game.

``transition`` maps a :class:`GameState` and a command to the next state
plus the events the change produced. It never mutates its inputs; every
piece of context it needs (board, food spawner, reward, known high
score) is passed in explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

from classic_snake import events
from classic_snake.events import GameEvent
from classic_snake.food import FoodSpawner
from classic_snake.grid import Grid
from classic_snake.snake import Direction, Snake
from classic_snake.state import GameState, Phase, initial_state


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class TogglePause:
    pass


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class SetHeading:
    direction: Direction


Command = Start | Reset | TogglePause | Tick | SetHeading


@dataclass(frozen=True)
class Rules:
    """Per-game constants shared by every transition."""

    grid: Grid
    spawner: FoodSpawner
    food_reward: int = 10


@dataclass(frozen=True)
class Transition:
    state: GameState
    events: tuple[GameEvent, ...] = ()
    # Set only when the transition beat the known high score.
    high_score: int | None = None
    changed: bool = True


def transition(
    state: GameState,
    command: Command,
    rules: Rules,
    high_score: int = 0,
) -> Transition:
    """Apply *command* to *state* and return the outcome."""
    if isinstance(command, Start):
        return _start(rules)
    if isinstance(command, Reset):
        return Transition(initial_state(rules.grid), (events.reset(),))
    if isinstance(command, TogglePause):
        return _toggle_pause(state)
    if isinstance(command, SetHeading):
        return _set_heading(state, command.direction)
    if isinstance(command, Tick):
        return _advance(state, rules, high_score)
    raise TypeError(f"Unknown command: {command!r}")


def _unchanged(state: GameState) -> Transition:
    return Transition(state, changed=False)


def _start(rules: Rules) -> Transition:
    x, y = rules.grid.center
    snake = Snake.at(x, y)
    state = GameState(
        snake=snake,
        food=rules.spawner.spawn(snake),
        heading=Direction.RIGHT,
        score=0,
        phase=Phase.RUNNING,
    )
    return Transition(state, (events.started(),))


def _toggle_pause(state: GameState) -> Transition:
    if state.phase is Phase.RUNNING:
        return Transition(
            state.evolve(phase=Phase.PAUSED), (events.paused(state.score),),
        )
    if state.phase is Phase.PAUSED:
        return Transition(
            state.evolve(phase=Phase.RUNNING), (events.resumed(state.score),),
        )
    return _unchanged(state)


def _set_heading(state: GameState, direction: Direction) -> Transition:
    if (
        state.phase is not Phase.RUNNING
        or direction is state.heading
        or direction.is_reverse_of(state.heading)
    ):
        return _unchanged(state)
    return Transition(state.evolve(heading=direction))


def _advance(state: GameState, rules: Rules, high_score: int) -> Transition:
    if state.phase is not Phase.RUNNING:
        return _unchanged(state)

    snake = state.snake
    new_head = snake.next_head(state.heading)

    # The whole pre-move body counts, including the tail about to vacate.
    if not rules.grid.in_bounds(new_head) or snake.occupies(new_head):
        return Transition(
            state.evolve(phase=Phase.OVER), (events.game_over(state.score),),
        )

    if new_head != state.food:
        return Transition(state.evolve(snake=snake.advance(new_head)))

    grown = snake.advance(new_head, grow=True)
    score = state.score + rules.food_reward
    food = rules.spawner.spawn(grown)
    emitted = [events.food_eaten(score)]
    beaten = None
    if score > high_score:
        beaten = score
        emitted.append(events.new_high_score(score))

    phase = Phase.RUNNING
    if food is None:
        phase = Phase.OVER
        emitted.append(events.game_over(score))

    return Transition(
        state.evolve(snake=grown, food=food, score=score, phase=phase),
        tuple(emitted),
        high_score=beaten,
    )
