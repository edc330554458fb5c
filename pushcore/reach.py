from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Set

from .grid import DIRECTIONS, Direction
from .state import Position, iter_bits, set_bit


@dataclass(slots=True)
class WalkTree:
    """BFS spanning tree of the cells the player can walk to from ``origin``.

    prev[i] is the predecessor of cell i (-1 if unvisited; the origin points
    to itself) and via[i] is the direction taken to enter it.
    """

    origin: int
    prev: List[int]
    via: List[Optional[Direction]]
    mask: int # bitset of visited cells

    def reached(self, idx: int) -> bool:
        return 0 <= idx < len(self.prev) and self.prev[idx] != -1


def build_walk_tree(pos: Position, origin: int) -> WalkTree:
    """BFS over the 4-neighbourhood of ``origin``; walls and boxes are impassable."""
    w, h = pos.width, pos.height
    size = w * h
    prev = [-1] * size
    via: List[Optional[Direction]] = [None] * size
    blocked = pos.walls | pos.boxes

    prev[origin] = origin
    visited = set_bit(0, origin)
    q = deque([origin])

    while q:
        cur = q.popleft()
        x, y = cur % w, cur // w
        for d in DIRECTIONS:
            nx, ny = x + d.dx, y + d.dy
            if nx < 0 or nx >= w or ny < 0 or ny >= h:
                continue
            nb = ny * w + nx
            if prev[nb] != -1 or (blocked >> nb) & 1:
                continue
            prev[nb] = cur
            via[nb] = d
            visited = set_bit(visited, nb)
            q.append(nb)
    return WalkTree(origin=origin, prev=prev, via=via, mask=visited)


def reachable_mask(pos: Position) -> int:
    """Returns the bitmask of cells reachable by the player without pushing boxes."""
    return build_walk_tree(pos, pos.player).mask


def reachable_set(pos: Position) -> Set[int]:
    return set(iter_bits(reachable_mask(pos)))


def shortest_path(tree: WalkTree, origin: int, target: int) -> Optional[List[Direction]]:
    """Shortest walk from ``origin`` to ``target``; [] if equal, None if unreachable."""
    if origin != tree.origin:
        raise ValueError(f"tree is rooted at {tree.origin}, not {origin}")
    if origin == target:
        return []
    if not tree.reached(target):
        return None
    path: List[Direction] = []
    cur = target
    while cur != origin:
        path.append(tree.via[cur])  # type: ignore[arg-type]
        cur = tree.prev[cur]
    path.reverse()
    return path
