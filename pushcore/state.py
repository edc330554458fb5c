from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .grid import xy

# Bit helpers
__all__ = [
    "Position",
    "bit",
    "has_bit",
    "set_bit",
    "clear_bit",
    "iter_bits",
]

def bit(idx: int) -> int:
    return 1 << idx

def has_bit(mask: int, idx: int) -> bool:
    return (mask >> idx) & 1 == 1

def set_bit(mask: int, idx: int) -> int:
    return mask | bit(idx)

def clear_bit(mask: int, idx: int) -> int:
    return mask & ~bit(idx)


@dataclass(slots=True)
class Position:
    """
    Mutable box-pushing position.

    Walls, goals and boxes are bitsets with one bit per cell, idx = y*width + x.
    Walls and goals never change after parsing; boxes and player move.
    Invariants: walls & boxes == 0, and the player is on neither a wall nor a box.
    """

    width: int
    height: int
    walls: int # bitset
    goals: int # bitset
    boxes: int # bitset
    player: int # index (y*W + x)


    # ---- state properties
    def is_win(self) -> bool:
        """All boxes are on goals: boxes ⊆ goals. No boxes is a win."""
        return (self.boxes & ~self.goals) == 0


    def clone(self) -> "Position":
        # ints are immutable, so a field copy is a deep copy
        return Position(self.width, self.height, self.walls, self.goals, self.boxes, self.player)


    # ---- convenient checks/conversions
    @property
    def size(self) -> int:
        return self.width * self.height


    def idx_to_xy(self, idx: int) -> Tuple[int, int]:
        return xy(idx, self.width)


    def is_wall(self, idx: int) -> bool:
        return has_bit(self.walls, idx)


    def is_goal_cell(self, idx: int) -> bool:
        return has_bit(self.goals, idx)


    def has_box(self, idx: int) -> bool:
        return has_bit(self.boxes, idx)


    def is_free(self, idx: int) -> bool:
        """Cell on the board, not a wall, not a box."""
        return 0 <= idx < self.size and not self.is_wall(idx) and not self.has_box(idx)


    def box_count(self) -> int:
        return bin(self.boxes).count("1")


    def box_cells(self) -> List[int]:
        return list(iter_bits(self.boxes))


def iter_bits(mask: int) -> Iterator[int]:
    """Iterates over the indices of set bits."""
    idx = 0
    m = mask
    while m:
        if m & 1:
            yield idx
        m >>= 1
        idx += 1
