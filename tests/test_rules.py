import pytest

from falling_block_rl.game import ScoreState, ScoringRules
from falling_block_rl.game.rules import MAX_LEVEL, MAX_SCORE


def _scores(**kwargs) -> ScoreState:
    return ScoreState(ScoringRules(), **kwargs)


def test_two_lines_at_level_one():
    scores = _scores()
    assert scores.on_lines_cleared(2) is False
    assert scores.score == 200
    assert scores.level == 1
    assert scores.fall_interval_ms == 500


def test_zero_lines_is_a_no_op():
    scores = _scores(score=300, level=1)
    assert scores.on_lines_cleared(0) is False
    assert scores.score == 300


def test_zero_line_lock_still_checks_level_threshold():
    # the check runs on every lock, so a score already past the threshold
    # catches up one level per lock even when nothing is cleared
    scores = _scores(score=12000, level=1)
    assert scores.on_lines_cleared(0) is True
    assert (scores.score, scores.level) == (12000, 2)
    assert scores.on_lines_cleared(0) is True
    assert scores.level == 3
    assert scores.on_lines_cleared(0) is False
    assert scores.level == 3


def test_points_scale_with_level():
    scores = _scores(score=0, level=3)
    scores.on_lines_cleared(1)
    assert scores.score == 300


def test_level_up_halves_interval():
    scores = _scores(score=4900, level=1)
    assert scores.on_lines_cleared(1) is True
    assert scores.score == 5000
    assert scores.level == 2
    assert scores.fall_interval_ms == 250


def test_one_level_per_clear():
    scores = _scores(score=40000, level=1)
    scores.on_lines_cleared(1)
    assert scores.level == 2


def test_level_capped():
    scores = _scores(score=10**6, level=MAX_LEVEL)
    assert scores.on_lines_cleared(4) is False
    assert scores.level == MAX_LEVEL
    assert scores.fall_interval_ms == 50


def test_score_saturates():
    scores = _scores(score=MAX_SCORE - 50, level=MAX_LEVEL)
    scores.on_lines_cleared(4)
    assert scores.score == MAX_SCORE
    scores.on_lines_cleared(4)
    assert scores.score == MAX_SCORE


def test_negative_lines_rejected():
    with pytest.raises(ValueError):
        _scores().on_lines_cleared(-1)


def test_reset():
    scores = _scores(score=7000, level=2)
    scores.reset()
    assert (scores.score, scores.level) == (0, 1)
