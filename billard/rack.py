"""Setting up the balls on the table for the different kinds of game."""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

BALL_COUNT = 16
BALL_DIAMETER = 5.715
HEAD_SPOT = (-63.5, 0.0)
FOOT_SPOT_X = 63.5
RANDOM_HALF_LENGTH = 118.0
RANDOM_HALF_WIDTH = 59.0
RANDOM_MIN_DISTANCE = 7.0

_START = time.monotonic()

# (multiple of the row offset, multiple of the ball spacing) for each rack slot.
_EIGHT_BALL_SLOTS = [
    (12, -2.0), (9, -1.5), (6, -1.0), (3, -0.5), (0, 0.0),
    (12, -1.0), (9, -0.5), (6, 0.0), (3, 0.5), (12, 0.0),
    (9, 0.5), (6, 1.0), (12, 1.0), (9, 1.5), (12, 2.0),
]
_NINE_BALL_SLOTS = [
    (6, -1.0), (3, -0.5), (0, 0.0), (3, 0.5), (6, 1.0),
    (9, 0.5), (12, 0.0), (9, -0.5), (6, 0.0),
]


class GameState(IntEnum):
    """Phases of play."""

    START = 0
    VIEWING = 1
    AIMING = 2
    DRAWING_BACK = 3
    SHOT = 4
    NEW_CUE_BALL = 5
    REFEREE = 6


class GameType(IntEnum):
    """Ball arrangements that can be set up."""

    EMPTY = 0
    TWO_BALLS = 2
    RANDOM = 7
    EIGHT_BALL = 8
    NINE_BALL = 9


class Mode(IntEnum):
    """Kinds of session."""

    TRAINING = 101
    TWO_PLAYER = 102
    NETWORK = 103
    COMPUTER = 104
    TUTORIAL = 105


_RACKING_STATES = frozenset(
    {GameState.VIEWING, GameState.START, GameState.NEW_CUE_BALL, GameState.REFEREE}
)


@dataclass(frozen=True)
class Layout:
    """Ball positions in centimetres, plus which balls are in play."""

    positions: dict[int, tuple[float, float]]
    in_play: tuple[bool, ...]
    pocketed: tuple[bool, ...] = (False,) * BALL_COUNT
    improve_from_head: bool = field(default=True)

    @property
    def hidden(self) -> frozenset[int]:
        """Balls that are not on the table."""
        return frozenset(range(BALL_COUNT)) - self.positions.keys()


def elapsed_centiseconds() -> int:
    """Hundredths of a second since the program started."""
    return int((time.monotonic() - _START) * 100)


def jitter(epsilon: float, rng: random.Random) -> float:
    """A random offset in [-epsilon, epsilon]."""
    return epsilon * (rng.random() * 2.0 - 1.0)


def eight_ball_order(rng: random.Random) -> tuple[int, ...]:
    """Ball number for each of the 16 slots; slot 0 is the cue ball.

    The 8 sits in the middle of the rack and the two back corners hold one
    solid and one striped ball.
    """
    others = [n for n in range(1, BALL_COUNT) if n != 8]
    while True:
        rng.shuffle(others)
        order = (0, *others[:7], 8, *others[7:])
        first, last = order[1], order[15]
        if not ((first < 8 and last < 8) or (first > 8 and last > 8)):
            return order


def nine_ball_order(rng: random.Random) -> tuple[int, ...]:
    """Ball number for each of the 10 slots; the 1 leads and the 9 is central."""
    others = list(range(2, 9))
    rng.shuffle(others)
    return (0, *others[:2], 1, *others[2:], 9)


def _triangle(
    order: tuple[int, ...],
    slots: list[tuple[int, float]],
    epsilon: float,
    rng: random.Random,
) -> dict[int, tuple[float, float]]:
    spacing = BALL_DIAMETER + 3 * epsilon
    row_offset = spacing * math.sqrt(3) / 6
    positions = {order[0]: HEAD_SPOT}
    for ball, (row, across) in zip(order[1:], slots):
        x = FOOT_SPOT_X + row * row_offset + jitter(epsilon, rng)
        y = across * spacing + jitter(epsilon, rng)
        positions[ball] = (x, y)
    return positions


def _scattered(rng: random.Random) -> dict[int, tuple[float, float]]:
    positions: dict[int, tuple[float, float]] = {}
    for ball in range(BALL_COUNT):
        while True:
            x = RANDOM_HALF_LENGTH * (rng.random() * 2.0 - 1.0)
            y = RANDOM_HALF_WIDTH * (rng.random() * 2.0 - 1.0)
            nearest = min(
                (math.hypot(x - px, y - py) for px, py in positions.values()),
                default=3000.0,
            )
            if nearest >= RANDOM_MIN_DISTANCE:
                break
        positions[ball] = (x, y)
    return positions


def rack(
    game: int, epsilon: float, rng: Optional[random.Random] = None
) -> Layout:
    """Arrange the balls for ``game``; ``epsilon`` is the rack's looseness."""
    game = GameType(game)
    if rng is None:
        rng = random.Random(elapsed_centiseconds())

    if game is GameType.TWO_BALLS:
        positions = {0: (0.0, 0.0), 1: (20.0, 0.0)}
        in_play = set(positions)
    elif game is GameType.EIGHT_BALL:
        positions = _triangle(eight_ball_order(rng), _EIGHT_BALL_SLOTS, epsilon, rng)
        in_play = set(range(BALL_COUNT))
    elif game is GameType.NINE_BALL:
        positions = _triangle(nine_ball_order(rng), _NINE_BALL_SLOTS, epsilon, rng)
        in_play = set(range(10))
    elif game is GameType.RANDOM:
        positions = _scattered(rng)
        in_play = set(range(BALL_COUNT))
    else:
        positions = {}
        in_play = set()

    return Layout(
        positions=positions,
        in_play=tuple(ball in in_play for ball in range(BALL_COUNT)),
    )


def set_up_table(
    state: int,
    game: int,
    epsilon: float,
    rng: Optional[random.Random] = None,
) -> Optional[Layout]:
    """Rack the balls if the game is in a phase that allows it, else ``None``."""
    if state not in _RACKING_STATES:
        return None
    return rack(game, epsilon, rng)