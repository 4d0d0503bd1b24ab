import itertools
import math
import random

import pytest

from billard.rack import (
    BALL_DIAMETER,
    GameState,
    GameType,
    Layout,
    elapsed_centiseconds,
    eight_ball_order,
    jitter,
    nine_ball_order,
    rack,
    set_up_table,
)


def _min_distance(points):
    return min(
        math.hypot(ax - bx, ay - by)
        for (ax, ay), (bx, by) in itertools.combinations(points, 2)
    )


def test_elapsed_centiseconds_is_monotonic():
    first = elapsed_centiseconds()
    second = elapsed_centiseconds()
    assert 0 <= first <= second


def test_jitter_bounds():
    rng = random.Random(1)
    values = [jitter(0.5, rng) for _ in range(500)]
    assert all(-0.5 <= v <= 0.5 for v in values)
    assert jitter(0.0, rng) == 0.0


@pytest.mark.parametrize("seed", range(30))
def test_eight_ball_order(seed):
    order = eight_ball_order(random.Random(seed))
    assert sorted(order) == list(range(16))
    assert order[0] == 0 and order[8] == 8
    assert (order[1] < 8) != (order[15] < 8)


@pytest.mark.parametrize("seed", range(30))
def test_nine_ball_order(seed):
    order = nine_ball_order(random.Random(seed))
    assert sorted(order) == list(range(10))
    assert order[0] == 0 and order[3] == 1 and order[9] == 9


def test_two_balls():
    layout = rack(GameType.TWO_BALLS, 0.1, random.Random(0))
    assert layout.positions == {0: (0.0, 0.0), 1: (20.0, 0.0)}
    assert layout.in_play == (True, True) + (False,) * 14
    assert layout.hidden == frozenset(range(2, 16))


def test_empty_table():
    layout = rack(GameType.EMPTY, 0.1, random.Random(0))
    assert layout.positions == {}
    assert not any(layout.in_play)
    assert layout.hidden == frozenset(range(16))


def test_eight_ball_tight_rack():
    layout = rack(GameType.EIGHT_BALL, 0.0, random.Random(3))
    assert layout.positions[0] == (-63.5, 0.0)
    assert all(layout.in_play)
    assert layout.hidden == frozenset()
    assert not any(layout.pocketed)
    assert layout.improve_from_head
    racked = [layout.positions[b] for b in range(1, 16)]
    assert all(x >= 63.5 for x, _ in racked)
    assert layout.positions[8][1] == pytest.approx(0.0)
    assert _min_distance(racked) == pytest.approx(BALL_DIAMETER)


def test_loose_rack_stays_near_tight_rack():
    epsilon = 0.2
    tight = rack(GameType.EIGHT_BALL, 0.0, random.Random(9))
    loose = rack(GameType.EIGHT_BALL, epsilon, random.Random(9))
    assert tight.positions.keys() == loose.positions.keys()
    for ball, (x, y) in tight.positions.items():
        lx, ly = loose.positions[ball]
        # looser spacing shifts the rack by at most a few epsilons
        assert abs(lx - x) <= 20 * epsilon
        assert abs(ly - y) <= 10 * epsilon


def test_nine_ball_rack():
    layout = rack(GameType.NINE_BALL, 0.0, random.Random(5))
    assert set(layout.positions) == set(range(10))
    assert layout.in_play == (True,) * 10 + (False,) * 6
    assert layout.hidden == frozenset(range(10, 16))
    assert layout.positions[1][0] == pytest.approx(63.5)
    racked = [layout.positions[b] for b in range(1, 10)]
    assert _min_distance(racked) == pytest.approx(BALL_DIAMETER)


@pytest.mark.parametrize("seed", range(5))
def test_random_layout(seed):
    layout = rack(GameType.RANDOM, 0.1, random.Random(seed))
    assert set(layout.positions) == set(range(16))
    assert all(layout.in_play)
    points = list(layout.positions.values())
    assert all(abs(x) <= 118 and abs(y) <= 59 for x, y in points)
    assert _min_distance(points) >= 7


def test_unknown_game_rejected():
    with pytest.raises(ValueError):
        rack(5, 0.1, random.Random(0))


def test_set_up_table_ignores_play_phases():
    for state in (GameState.AIMING, GameState.DRAWING_BACK, GameState.SHOT):
        assert set_up_table(state, GameType.EIGHT_BALL, 0.1, random.Random(0)) is None


def test_set_up_table_racks_in_allowed_phases():
    expected = rack(GameType.NINE_BALL, 0.1, random.Random(4))
    for state in (GameState.START, GameState.VIEWING,
                  GameState.NEW_CUE_BALL, GameState.REFEREE):
        layout = set_up_table(state, GameType.NINE_BALL, 0.1, random.Random(4))
        assert isinstance(layout, Layout)
        assert layout.positions == expected.positions


def test_rack_without_rng_still_places_balls():
    layout = rack(GameType.EIGHT_BALL, 0.0)
    assert set(layout.positions) == set(range(16))