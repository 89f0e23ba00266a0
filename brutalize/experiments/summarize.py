#!/usr/bin/env python3
from __future__ import annotations
import argparse
from pathlib import Path

import numpy as np
import pandas as pd

METRICS = ("expanded", "generated", "duplicates", "g", "time_sec")


def load(files) -> pd.DataFrame:
    dfs = []
    for p in files:
        df = pd.read_csv(p)
        df["file"] = Path(p).name
        dfs.append(df)
    if not dfs:
        return pd.DataFrame()
    df = pd.concat(dfs, ignore_index=True)
    df["heuristic"] = df["heuristic"].fillna("")
    if "termination" in df.columns:
        df["termination"] = df["termination"].fillna("ok")
    # add missing numeric cols as NaN
    for c in METRICS:
        if c not in df.columns:
            df[c] = np.nan
    return df


def group_means(df: pd.DataFrame) -> pd.DataFrame:
    """Mean / std / n per (algorithm, heuristic, depth) over solved rows."""
    ok = df[df["termination"] == "ok"]
    agg = ok.groupby(["algorithm", "heuristic", "depth"])[list(METRICS)].agg(["mean", "std"])
    agg.columns = [f"{m}_{s}" for m, s in agg.columns]
    agg["n"] = ok.groupby(["algorithm", "heuristic", "depth"]).size()
    return agg.reset_index()


def optimality_check(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rows where best-first and BFS disagree on solution length (or on whether
    a solution exists) for the same instance. Empty when every answer matches.
    """
    key = ["file", "depth", "seed", "solvable"]
    best = df[df["algorithm"] == "best-first"][key + ["heuristic", "g"]]
    ref = df[df["algorithm"] == "BFS"][key + ["g"]]
    both = best.merge(ref, on=key, suffixes=("_best", "_bfs"))
    same = (both["g_best"] == both["g_bfs"]) | (both["g_best"].isna() & both["g_bfs"].isna())
    return both[~same]


def main(argv=None):
    ap = argparse.ArgumentParser(description="Summarize runner CSVs")
    ap.add_argument("csv", nargs="+", help="One or more CSV result files")
    ap.add_argument("--out", type=Path, default=Path("results/summary.csv"))
    args = ap.parse_args(argv)

    df = load(args.csv)
    if df.empty:
        print("No rows to summarize. Are your CSVs empty?")
        return

    means = group_means(df)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    means.to_csv(args.out, index=False)
    print(means.to_string(index=False))
    print(f"Saved: {args.out}")

    bad = optimality_check(df)
    if bad.empty:
        print("Optimality check: best-first matches BFS on every shared instance")
    else:
        print(f"Optimality check: {len(bad)} mismatches")
        print(bad.to_string(index=False))


if __name__ == "__main__":
    main()
