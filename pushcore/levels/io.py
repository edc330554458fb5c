from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Tuple
import os


@dataclass
class LevelRef:
    path: str
    index: int  # index of the level inside the file (if there are multiple levels)

    @property
    def level_id(self) -> str:
        return f"{self.path}#{self.index}"


def split_levels(text: str) -> List[str]:
    """Splits a level pack into boards separated by blank lines."""
    blocks: List[str] = []
    cur: List[str] = []
    for line in text.splitlines():
        if line.strip() == "":
            if cur:
                blocks.append("\n".join(cur))
                cur = []
        else:
            cur.append(line.rstrip("\r\n"))
    if cur:
        blocks.append("\n".join(cur))
    return blocks


def iterate_level_strings(root_dir: str, rel_dirs: List[str]) -> Iterator[Tuple[LevelRef, str]]:
    """Iterate over all .txt in the given subfolders and return (level reference, level string)."""
    for rel in rel_dirs:
        abs_dir = os.path.join(root_dir, rel)
        if not os.path.isdir(abs_dir):
            continue
        for fname in sorted(os.listdir(abs_dir)):
            if not fname.endswith(".txt"):
                continue
            fpath = os.path.join(abs_dir, fname)
            with open(fpath, "r", encoding="utf-8") as f:
                content = f.read()
            for i, block in enumerate(split_levels(content)):
                yield LevelRef(path=fpath, index=i), block
