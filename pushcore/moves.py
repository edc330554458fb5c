from dataclasses import dataclass
from typing import Iterable, List

from .grid import Direction, step
from .state import Position, clear_bit, set_bit, iter_bits

__all__ = [
    "Step",
    "MoveOutcome",
    "IllegalStepError",
    "apply_move",
    "format_steps",
    "parse_steps",
    "count_pushes",
    "replay",
    "iter_bits",
]


@dataclass(frozen=True, slots=True)
class Step:
    direction: Direction
    pushed: bool

    @property
    def char(self) -> str:
        """'u/d/l/r' for a walk, uppercase for a push."""
        c = self.direction.char
        return c.upper() if self.pushed else c


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    changed: bool
    pushed: bool


class IllegalStepError(ValueError):
    """A replayed step could not be applied as recorded."""


def apply_move(pos: Position, d: Direction) -> MoveOutcome:
    """Single-step transition, mutating ``pos`` in place.

    Rules:
      1) target off the board or a wall → nothing happens;
      2) target holds a box → push it if the cell beyond is on the board,
         not a wall and not another box, otherwise nothing happens;
      3) otherwise the player walks into the target.
    """
    w, h = pos.width, pos.height
    p1 = step(pos.player, d, w, h)
    if p1 is None or pos.is_wall(p1):
        return MoveOutcome(False, False)

    if pos.has_box(p1):
        p2 = step(p1, d, w, h)
        if p2 is None or pos.is_wall(p2) or pos.has_box(p2):
            return MoveOutcome(False, False)
        pos.boxes = set_bit(clear_bit(pos.boxes, p1), p2)
        pos.player = p1
        return MoveOutcome(True, True)

    pos.player = p1
    return MoveOutcome(True, False)


def format_steps(steps: Iterable[Step]) -> str:
    """Compact encoding: one char per step, uppercase = push, lowercase = walk."""
    return "".join(st.char for st in steps)


def parse_steps(text: str) -> List[Step]:
    return [Step(Direction.from_char(ch), ch.isupper()) for ch in text]


def count_pushes(steps: Iterable[Step]) -> int:
    return sum(1 for st in steps if st.pushed)


def replay(pos: Position, steps: Iterable[Step]) -> Position:
    """Applies ``steps`` to a copy of ``pos`` and returns the final position.

    Raises IllegalStepError if a step is blocked or its push flag does not
    match what actually happened on the board.
    """
    cur = pos.clone()
    for i, st in enumerate(steps):
        out = apply_move(cur, st.direction)
        if not out.changed:
            raise IllegalStepError(f"step {i} ({st.char}) is blocked")
        if out.pushed != st.pushed:
            raise IllegalStepError(
                f"step {i} ({st.char}) {'pushed' if out.pushed else 'did not push'} a box")
    return cur
