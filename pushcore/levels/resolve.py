from __future__ import annotations
from typing import Tuple

from ..parser import parse_level_str
from ..state import Position
from .io import split_levels


def parse_level_id(level_id: str) -> Tuple[str, int]:
    """Parses a string of the form "path/to/file.txt#3" into (path, index)."""
    if "#" not in level_id:
        return level_id, 0
    path, idx = level_id.rsplit("#", 1)
    try:
        k = int(idx)
    except ValueError:
        raise ValueError(f"bad level index in {level_id!r}") from None
    return path, k


def load_level_by_id(level_id: str) -> Position:
    """Loads level file#idx: open the file directly and take the block by index."""
    path, wanted = parse_level_id(level_id)
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    blocks = split_levels(content)
    if not blocks:
        raise ValueError(f"No levels found in {path}")
    if wanted < 0 or wanted >= len(blocks):
        raise IndexError(f"Index {wanted} out of range for {path} (total {len(blocks)})")
    return parse_level_str(blocks[wanted])
