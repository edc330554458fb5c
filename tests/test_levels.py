from pathlib import Path

import pytest

from pushcore.levels.io import iterate_level_strings, split_levels
from pushcore.levels.resolve import load_level_by_id, parse_level_id
from pushcore.parser import parse_level_str

PACK = """
#####
#@$.#
#####

#####
#.@ #
# $ #
# . #
#####
"""

EXAMPLES = Path(__file__).resolve().parent.parent / "levels"


def test_split_levels():
    blocks = split_levels(PACK)
    assert len(blocks) == 2
    assert blocks[0].splitlines() == ["#####", "#@$.#", "#####"]


def test_parse_level_id():
    assert parse_level_id("a/b.txt#3") == ("a/b.txt", 3)
    assert parse_level_id("a/b.txt") == ("a/b.txt", 0)
    with pytest.raises(ValueError):
        parse_level_id("a/b.txt#x")


def test_load_level_by_id(tmp_path):
    pack = tmp_path / "pack.txt"
    pack.write_text(PACK, encoding="utf-8")
    s = load_level_by_id(f"{pack}#1")
    assert s.width == 5 and s.height == 5
    assert s.box_count() == 1
    with pytest.raises(IndexError):
        load_level_by_id(f"{pack}#2")


def test_iterate_level_strings(tmp_path):
    sub = tmp_path / "packs"
    sub.mkdir()
    (sub / "a.txt").write_text(PACK, encoding="utf-8")
    (sub / "notes.md").write_text("ignored", encoding="utf-8")
    pairs = list(iterate_level_strings(str(tmp_path), ["packs", "missing"]))
    assert [ref.index for ref, _ in pairs] == [0, 1]
    assert pairs[1][0].level_id.endswith("a.txt#1")


def test_examples_parse():
    pairs = list(iterate_level_strings(str(EXAMPLES), ["examples"]))
    assert len(pairs) >= 4
    for _, block in pairs:
        s = parse_level_str(block)
        assert s.walls & s.boxes == 0
