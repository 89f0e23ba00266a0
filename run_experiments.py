#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(cmd):
    print("Running:", cmd)
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run("python -m brutalize.experiments.runner --depths 6 10 14 --per_depth 10 --heuristic manhattan --algo both --out results/manhattan.csv")
    run("python -m brutalize.experiments.runner --depths 6 10 14 --per_depth 10 --heuristic linear_conflict --algo best --out results/linear_conflict.csv")
    run("python -m brutalize.experiments.runner --depths 6 10 14 --per_depth 10 --heuristic zero --algo best --out results/zero.csv")
    run("python -m brutalize.experiments.summarize results/manhattan.csv results/linear_conflict.csv results/zero.csv --out results/summary.csv")
    run("python -m brutalize.experiments.plot results/manhattan.csv results/linear_conflict.csv results/zero.csv --save results/plots")

if __name__ == "__main__":
    main()
