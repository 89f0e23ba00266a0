from __future__ import annotations
import argparse, csv
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from brutalize.domains.puzzlen import HEURISTICS, SlidingPuzzle
from brutalize.search.best_first import best_first
from brutalize.search.bfs import bfs

Tiles = Tuple[int, ...]

HEADER = [
    "algorithm", "heuristic", "depth", "seed",
    "expanded", "generated", "duplicates", "g", "time_sec",
    "peak_open", "peak_closed", "termination", "solvable",
]


@dataclass
class Instance:
    seed: int
    depth: int
    state: Tiles


def _gen(dom: SlidingPuzzle, depths: List[int], per_depth: int, start_seed: int = 0) -> List[Instance]:
    out: List[Instance] = []
    seed = start_seed
    for d in depths:
        made = 0
        attempts = 0
        while made < per_depth:
            s = dom.scramble(d, seed)
            # a walk back onto the goal has no move left to solve
            if s != dom.GOAL and dom.is_solvable(s):
                out.append(Instance(seed=seed, depth=d, state=s))
                made += 1
            seed += 1
            attempts += 1
            if attempts > per_depth * 2000:
                raise RuntimeError(f"Instance generation took too long at depth={d}. Check solvability logic.")
    return out


def make_unsolvable_variant(s: Tiles) -> Tiles:
    lst = list(s)
    i = next(k for k, v in enumerate(lst) if v != 0)
    j = next(k for k, v in enumerate(lst[i + 1:], start=i + 1) if v != 0)
    lst[i], lst[j] = lst[j], lst[i]
    return tuple(lst)


def choose_domain(args) -> SlidingPuzzle:
    """
    Domain selection precedence:
    --rows/--cols  >  --n  >  --domain (p8|p15).
    """
    if args.rows is not None and args.cols is not None:
        return SlidingPuzzle(args.rows, args.cols, heuristic=args.heuristic)
    if args.n is not None:
        return SlidingPuzzle(args.n, heuristic=args.heuristic)
    if args.domain == "p15":
        return SlidingPuzzle(4, heuristic=args.heuristic)
    return SlidingPuzzle(3, heuristic=args.heuristic)


def run(dom: SlidingPuzzle, insts: List[Instance], out: Path, algo: str = "both",
        include_unsolvable: bool = False) -> int:
    """Solve every instance and write one CSV row per (instance, algorithm). Returns the row count."""
    want_best = algo in ("best", "both")
    want_bfs = algo in ("bfs", "both")
    rows = 0

    def write_row(w, res, inst: Instance, solvable_flag: int):
        w.writerow([
            res["algorithm"], dom.heuristic if res["algorithm"] != "BFS" else "",
            inst.depth, inst.seed,
            res["expanded"], res["generated"], res.get("duplicates", ""),
            res["g"] if res["g"] is not None else "",
            f"{res['time']:.6f}",
            res["peak_open"], res["peak_closed"], res["termination"], solvable_flag,
        ])

    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="") as f:
        w = csv.writer(f); w.writerow(HEADER)
        for inst in insts:
            cases = [(inst.state, 1)]
            # Optional unsolvable variants (flip parity).
            if include_unsolvable:
                cases.append((make_unsolvable_variant(inst.state), 0))
            for tiles, solvable_flag in cases:
                start = dom.initial(tiles)
                if want_best:
                    write_row(w, best_first(start, dom), inst, solvable_flag); rows += 1
                if want_bfs:
                    write_row(w, bfs(start, dom), inst, solvable_flag); rows += 1
    return rows


def main(argv=None):
    ap = argparse.ArgumentParser(description="Best-first (+BFS) sliding-puzzle experiment runner")
    ap.add_argument("--algo", choices=["best", "bfs", "both"], default="both",
                    help="'both' = best-first + BFS")
    ap.add_argument("--heuristic", choices=list(HEURISTICS), default="manhattan")
    ap.add_argument("--depths", type=int, nargs="+", default=[6, 10, 14, 18])
    ap.add_argument("--per_depth", type=int, default=10)
    ap.add_argument("--seed", type=int, default=0, help="First scramble seed")
    ap.add_argument("--out", type=Path, default=Path("results/last_run.csv"))

    # domain selection
    ap.add_argument("--domain", choices=["p8", "p15"], default="p8", help="3x3 or 4x4 shortcut")
    ap.add_argument("--n", type=int, default=None, help="Square board size (N×N)")
    ap.add_argument("--rows", type=int, default=None, help="Rows for rectangular board")
    ap.add_argument("--cols", type=int, default=None, help="Cols for rectangular board")

    ap.add_argument("--include_unsolvable", action="store_true",
                    help="Also run parity-flipped variants (exhausts the state space; p8 recommended)")
    args = ap.parse_args(argv)

    dom = choose_domain(args)
    insts = _gen(dom, args.depths, args.per_depth, start_seed=args.seed)
    run(dom, insts, args.out, algo=args.algo, include_unsolvable=args.include_unsolvable)
    print(f"Wrote {args.out} ({len(insts)} instances)")


if __name__ == "__main__":
    main()
