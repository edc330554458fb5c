from __future__ import annotations
import argparse, csv, logging, os, time
from typing import Dict, List
from multiprocessing import Pool, cpu_count

import yaml
from tqdm import tqdm

from pushcore.levels.io import iterate_level_strings
from pushcore.levels.resolve import load_level_by_id
from pushsearch.bfs import DEFAULT_BUDGET, solve

logger = logging.getLogger("run_batch")

FIELDS = ["level_id", "success", "reason", "pushes", "moves", "nodes", "runtime", "solution"]


def _run_one(args_tuple) -> Dict[str, object]:
    level_id, budget = args_tuple
    try:
        s = load_level_by_id(level_id)
        res = solve(s, budget=budget)
        return {"level_id": level_id, **res.to_row()}
    except Exception:
        logger.exception("failed on %s", level_id)
        return {"level_id": level_id, "success": False, "reason": "ERROR", "pushes": -1,
                "moves": 0, "nodes": 0, "runtime": 0.0, "solution": ""}


def load_config(path: str) -> Dict[str, object]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def collect_level_ids(args, cfg) -> List[str]:
    if args.list:
        with open(args.list, "r", encoding="utf-8") as f:
            return [ln.strip() for ln in f if ln.strip() and not ln.strip().startswith("#")]
    levels = cfg.get("levels", {})
    root = levels.get("root_dir", "levels")
    rels = levels.get("sources", [])
    return [ref.level_id for ref, _ in iterate_level_strings(root, rels)]


def main():
    p = argparse.ArgumentParser(description="Batch min-push solves → CSV (parallel)")
    p.add_argument("--config", default=None, help="YAML config (see configs/batch.yaml)")
    p.add_argument("--list", default=None, help="file with one level id per line")
    p.add_argument("--out", default=None)
    p.add_argument("--budget", type=int, default=None)
    p.add_argument("--jobs", type=int, default=None, help="processes (0→cpu_count)")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args()

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not args.config and not args.list:
        p.error("one of --config or --list is required")
    cfg = load_config(args.config) if args.config else {}
    solver_cfg = cfg.get("solver", {})
    run_cfg = cfg.get("run", {})

    budget = args.budget if args.budget is not None else int(solver_cfg.get("budget", DEFAULT_BUDGET))
    jobs = args.jobs if args.jobs is not None else int(run_cfg.get("jobs", 0))
    out = args.out or run_cfg.get("out", "results/batch.csv")

    level_ids = collect_level_ids(args, cfg)
    if not level_ids:
        print("no levels found")
        return

    out_dir = os.path.dirname(out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    jobs = jobs or cpu_count()
    payload = [(lid, budget) for lid in level_ids]

    started = time.time()
    if jobs == 1:
        rows = [_run_one(t) for t in tqdm(payload, desc="Solving", unit="level")]
    else:
        with Pool(processes=jobs) as pool:
            rows = list(tqdm(pool.imap_unordered(_run_one, payload), total=len(payload), desc="Solving", unit="level"))

    with open(out, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        for r in rows:
            w.writerow(r)

    solved = sum(1 for r in rows if r["success"])
    print(f"done: {solved}/{len(rows)} solved → {out}; total_time={time.time()-started:.2f}s; jobs={jobs}")


if __name__ == "__main__":
    main()
