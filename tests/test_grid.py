import pytest

from pushcore.grid import DIRECTIONS, Direction, idx, in_bounds, step, xy


def test_idx_xy_roundtrip():
    w = 7
    for i in range(w * 4):
        x, y = xy(i, w)
        assert idx(x, y, w) == i


def test_direction_order_and_chars():
    assert [d.char for d in DIRECTIONS] == ["u", "d", "l", "r"]
    assert Direction.from_char("L") is Direction.L
    assert Direction.from_char("r") is Direction.R
    with pytest.raises(ValueError):
        Direction.from_char("x")


def test_step_off_board_is_none():
    w, h = 3, 2
    assert step(0, Direction.U, w, h) is None
    assert step(0, Direction.L, w, h) is None
    assert step(2, Direction.R, w, h) is None
    assert step(5, Direction.D, w, h) is None
    assert step(0, Direction.R, w, h) == 1
    assert step(1, Direction.D, w, h) == 4
    assert in_bounds(2, 1, w, h)
    assert not in_bounds(3, 0, w, h)
