from __future__ import annotations
import argparse
import logging

from pushcore.levels.resolve import load_level_by_id
from pushcore.moves import apply_move
from pushcore.render import render_ascii
from pushsearch.bfs import DEFAULT_BUDGET, solve


def main():
    p = argparse.ArgumentParser(description="Push-minimal solve of a single level")
    p.add_argument("level_id", help="Level id like 'path/to/pack.txt#idx'.")
    p.add_argument("--budget", type=int, default=DEFAULT_BUDGET, help="max expanded nodes")
    p.add_argument("--show", action="store_true", help="print the board after every push")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args()

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    s = load_level_by_id(args.level_id)
    print(render_ascii(s))

    res = solve(s, budget=args.budget)
    print("Result:", {k: v for k, v in res.to_row().items() if k != "solution"})
    if not res.success:
        print("Reason:", res.reason.message)
        return
    print("Solution:", res.solution)

    if args.show:
        cur = s.clone()
        n = 0
        for st in res.steps:
            apply_move(cur, st.direction)
            if st.pushed:
                n += 1
                print(f"\n-- push {n} --\n{render_ascii(cur)}")


if __name__ == "__main__":
    main()
