import csv
import sys

import yaml

PACK = """
#####
#@$.#
#####

#####
#$@ #
#   #
# . #
#####
"""


def _run(main, argv):
    argv_bak = list(sys.argv)
    sys.argv = argv
    try:
        main()
    finally:
        sys.argv = argv_bak


def test_run_batch_from_config(tmp_path):
    from scripts.run_batch import main as batch_main

    (tmp_path / "packs").mkdir()
    (tmp_path / "packs" / "p.txt").write_text(PACK, encoding="utf-8")
    out = tmp_path / "out" / "batch.csv"
    cfg = {
        "levels": {"root_dir": str(tmp_path), "sources": ["packs"]},
        "solver": {"budget": 1000},
        "run": {"jobs": 1, "out": str(out)},
    }
    cfg_path = tmp_path / "batch.yaml"
    cfg_path.write_text(yaml.safe_dump(cfg), encoding="utf-8")

    _run(batch_main, ["run_batch", "--config", str(cfg_path)])

    with open(out, newline="", encoding="utf-8") as f:
        rows = sorted(csv.DictReader(f), key=lambda r: r["level_id"])
    assert [r["success"] for r in rows] == ["True", "False"]
    assert rows[0]["solution"] == "R"
    assert rows[1]["reason"] == "IMMEDIATE_DEADLOCK"


def test_run_batch_records_bad_levels(tmp_path):
    from scripts.run_batch import main as batch_main

    pack = tmp_path / "p.txt"
    pack.write_text("#####\n#$ .#\n#####\n", encoding="utf-8")
    ids = tmp_path / "ids.txt"
    ids.write_text(f"# comment\n{pack}#0\n", encoding="utf-8")
    out = tmp_path / "b.csv"

    _run(batch_main, ["run_batch", "--list", str(ids), "--out", str(out), "--jobs", "1"])

    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["reason"] == "ERROR"


def test_run_search_prints_solution(tmp_path, capsys):
    from scripts.run_search import main as search_main

    pack = tmp_path / "p.txt"
    pack.write_text(PACK, encoding="utf-8")
    _run(search_main, ["run_search", f"{pack}#0", "--show"])
    out = capsys.readouterr().out
    assert "Solution: R" in out
    assert "-- push 1 --" in out
