from __future__ import annotations

from .state import Position, iter_bits


def _blocked(pos: Position, x: int, y: int) -> bool:
    """Outside the board counts as a wall."""
    if x < 0 or x >= pos.width or y < 0 or y >= pos.height:
        return True
    return pos.is_wall(y * pos.width + x)


def is_corner_deadlock(pos: Position, box_idx: int) -> bool:
    """Box (not on goal) in a corner of two walls/board edges."""
    if pos.is_goal_cell(box_idx):
        return False
    w = pos.width
    x, y = box_idx % w, box_idx // w
    up = _blocked(pos, x, y - 1)
    down = _blocked(pos, x, y + 1)
    left = _blocked(pos, x - 1, y)
    right = _blocked(pos, x + 1, y)
    return (up and left) or (up and right) or (down and left) or (down and right)


def is_deadlocked(pos: Position) -> bool:
    """True if any box off a goal is cornered.

    Sufficient, not necessary: only single-box corner patterns are detected,
    so a False result says nothing about solvability.
    """
    for b in iter_bits(pos.boxes & ~pos.goals):
        if is_corner_deadlock(pos, b):
            return True
    return False
