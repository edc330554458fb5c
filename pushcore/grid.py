from __future__ import annotations
from enum import Enum
from typing import Optional, Tuple


class Direction(Enum):
    """Orthogonal move directions: (dx, dy, move char)."""

    U = (0, -1, "u")
    D = (0, 1, "d")
    L = (-1, 0, "l")
    R = (1, 0, "r")

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def char(self) -> str:
        return self.value[2]

    @classmethod
    def from_char(cls, ch: str) -> "Direction":
        try:
            return _BY_CHAR[ch.lower()]
        except KeyError:
            raise ValueError(f"invalid direction char: {ch!r}") from None


DIRECTIONS: Tuple[Direction, ...] = (Direction.U, Direction.D, Direction.L, Direction.R)
_BY_CHAR = {d.char: d for d in DIRECTIONS}


def idx(x: int, y: int, w: int) -> int:
    return y * w + x


def xy(i: int, w: int) -> Tuple[int, int]:
    return i % w, i // w


def in_bounds(x: int, y: int, w: int, h: int) -> bool:
    return 0 <= x < w and 0 <= y < h


def step(i: int, d: Direction, w: int, h: int) -> Optional[int]:
    """Neighbour of cell i in direction d, or None if it falls off the board."""
    x, y = xy(i, w)
    nx, ny = x + d.dx, y + d.dy
    if not in_bounds(nx, ny, w, h):
        return None
    return ny * w + nx
