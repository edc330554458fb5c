from typing import Sequence
from .state import Position, set_bit

TOK_WALL = "#"
TOK_GOAL = "."
TOK_BOX = "$"
TOK_BOX_ON_GOAL = "*"
TOK_PLAYER = "@"
TOK_PLAYER_ON_GOAL = "+"
TOK_FLOOR = " "


class MissingPlayerError(ValueError):
    """Board has no '@' or '+' marker."""


class MultiplePlayersError(ValueError):
    """Board has more than one player marker (strict parsing only)."""


def parse_rows(rows: Sequence[str], strict: bool = False) -> Position:
    """Parses a rectangular list of ASCII rows into a Position.

    Supported characters:
      '#': wall
      '.': goal
      '$': box
      '*': box on goal
      '@': player
      '+': player on goal
      ' ' (space): floor
    Other characters are treated as floor. Short rows are right-padded with floor.

    If several player markers are present the last one wins, unless
    ``strict`` is set, in which case a second marker raises MultiplePlayersError.
    """
    if not rows:
        raise ValueError("Empty level")
    height = len(rows)
    width = max(len(row) for row in rows)
    if width == 0:
        raise ValueError("Empty level")
    rows = [row.ljust(width, TOK_FLOOR) for row in rows]

    walls = goals = boxes = 0
    player_idx = -1

    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            idx = y * width + x

            if ch == TOK_WALL:
                walls = set_bit(walls, idx)
            elif ch == TOK_GOAL:
                goals = set_bit(goals, idx)
            elif ch == TOK_BOX:
                boxes = set_bit(boxes, idx)
            elif ch == TOK_BOX_ON_GOAL:
                boxes = set_bit(boxes, idx)
                goals = set_bit(goals, idx)
            elif ch in (TOK_PLAYER, TOK_PLAYER_ON_GOAL):
                if strict and player_idx != -1:
                    raise MultiplePlayersError(
                        f"second player marker at ({x}, {y})")
                player_idx = idx
                if ch == TOK_PLAYER_ON_GOAL:
                    goals = set_bit(goals, idx)

    if player_idx == -1:
        raise MissingPlayerError("No player '@' or '+' found in level")

    return Position(width=width, height=height, walls=walls, goals=goals,
                    boxes=boxes, player=player_idx)


def parse_level_str(level_str: str, strict: bool = False) -> Position:
    """Parses a newline-separated board; blank lines are skipped."""
    lines = [line.rstrip("\r\n") for line in level_str.splitlines() if line.strip() != ""]
    return parse_rows(lines, strict=strict)


def parse_level_file(path: str) -> Position:
    with open(path, "r", encoding="utf-8") as f:
        return parse_level_str(f.read())
