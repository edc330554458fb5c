from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, List, NamedTuple, Optional, Set, Tuple
import logging
import time

from pushcore.deadlocks import is_deadlocked
from pushcore.grid import DIRECTIONS, Direction
from pushcore.moves import Step, count_pushes
from pushcore.reach import build_walk_tree, shortest_path
from pushcore.state import Position, bit, iter_bits
from .result import FailureReason, SolveResult

logger = logging.getLogger(__name__)

DEFAULT_BUDGET = 200_000


class _Node(NamedTuple):
    boxes: int  # bitset, also the seen-set key
    player: int  # player cell right after the push that created this node
    parent: int  # arena index, -1 for the root
    walk: Tuple[Direction, ...]  # walk from the parent's player cell to the push origin
    push: Optional[Direction]


@contextmanager
def _pushed(scratch: Position, box: int, ahead: int) -> Iterator[Position]:
    """Moves ``box`` to ``ahead`` with the player behind it, and always restores."""
    boxes, player = scratch.boxes, scratch.player
    scratch.boxes = boxes ^ bit(box) ^ bit(ahead)
    scratch.player = box
    try:
        yield scratch
    finally:
        scratch.boxes = boxes
        scratch.player = player


def _check_position(pos: Position) -> None:
    if pos.walls & pos.boxes:
        raise ValueError("box on a wall cell")
    if not 0 <= pos.player < pos.size:
        raise ValueError(f"player index {pos.player} off the board")
    if pos.is_wall(pos.player) or pos.has_box(pos.player):
        raise ValueError("player on a wall or box cell")


def reconstruct(arena: List[_Node], goal: int) -> List[Step]:
    chain: List[_Node] = []
    cur = goal
    while cur != -1:
        chain.append(arena[cur])
        cur = arena[cur].parent
    chain.reverse()

    steps: List[Step] = []
    for node in chain:
        steps.extend(Step(d, False) for d in node.walk)
        if node.push is not None:
            steps.append(Step(node.push, True))
    return steps


def _failure(reason: FailureReason, expanded: int, t0: float) -> SolveResult:
    runtime = time.time() - t0
    logger.debug("solve failed: %s (expanded=%d, %.3fs)", reason.name, expanded, runtime)
    return SolveResult(success=False, nodes_expanded=expanded, elapsed_s=runtime, reason=reason)


def solve(initial: Position, budget: int = DEFAULT_BUDGET) -> SolveResult:
    """Push-minimal solve by breadth-first search over box configurations.

    The player cell is not part of a state's identity: reachability is
    recomputed for every expanded node, and each edge costs exactly one push,
    so the first win dequeued has the fewest pushes. ``budget`` caps the
    number of dequeued nodes. ``initial`` is never mutated.
    """
    t0 = time.time()
    _check_position(initial)
    logger.debug("solve: %dx%d, %d boxes, budget=%d",
                 initial.width, initial.height, initial.box_count(), budget)

    if budget <= 0:
        return _failure(FailureReason.BUDGET_EXCEEDED, 0, t0)
    if is_deadlocked(initial):
        return _failure(FailureReason.IMMEDIATE_DEADLOCK, 0, t0)
    if initial.is_win():
        return SolveResult(success=True, nodes_expanded=0,
                           elapsed_s=time.time() - t0, min_pushes=0)

    w, h = initial.width, initial.height
    walls = initial.walls

    arena: List[_Node] = [_Node(initial.boxes, initial.player, -1, (), None)]
    seen: Set[int] = {initial.boxes}
    scratch = initial.clone()
    head = 0
    expanded = 0

    while head < len(arena):
        if expanded >= budget:
            return _failure(FailureReason.BUDGET_EXCEEDED, expanded, t0)
        cur_i = head
        cur = arena[head]
        head += 1
        expanded += 1

        scratch.boxes = cur.boxes
        scratch.player = cur.player

        # win is checked on dequeue so the first one found is push-minimal
        if scratch.is_win():
            steps = reconstruct(arena, cur_i)
            runtime = time.time() - t0
            pushes = count_pushes(steps)
            logger.debug("solved: %d pushes, %d moves (expanded=%d, %.3fs)",
                         pushes, len(steps), expanded, runtime)
            return SolveResult(success=True, nodes_expanded=expanded, elapsed_s=runtime,
                               min_pushes=pushes, steps=steps)

        tree = build_walk_tree(scratch, cur.player)

        for b in iter_bits(cur.boxes):
            bx, by = b % w, b // w
            for d in DIRECTIONS:
                behind_x, behind_y = bx - d.dx, by - d.dy
                ahead_x, ahead_y = bx + d.dx, by + d.dy
                if not (0 <= behind_x < w and 0 <= behind_y < h):
                    continue
                if not (0 <= ahead_x < w and 0 <= ahead_y < h):
                    continue
                behind = behind_y * w + behind_x
                ahead = ahead_y * w + ahead_x
                if (walls >> ahead) & 1 or (cur.boxes >> ahead) & 1:
                    continue
                if not tree.reached(behind):
                    continue
                walk = shortest_path(tree, cur.player, behind)
                if walk is None:
                    continue

                with _pushed(scratch, b, ahead) as nxt:
                    if is_deadlocked(nxt):
                        continue
                    key = nxt.boxes
                    if key in seen:
                        continue
                    seen.add(key)
                    arena.append(_Node(key, nxt.player, cur_i, tuple(walk), d))

    return _failure(FailureReason.NO_SOLUTION, expanded, t0)
