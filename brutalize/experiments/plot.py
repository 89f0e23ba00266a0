#!/usr/bin/env python3
import argparse, os, sys
from pathlib import Path

import numpy as np
import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from brutalize.experiments.summarize import load


def plot_metric(ax, df, metric):
    ok = df[df["termination"] == "ok"]
    series = ok.groupby(["algorithm", "heuristic", "depth"])[metric].agg(["mean", "std"]).fillna(0.0)
    keys = sorted({(a, h) for a, h, _ in series.index})
    for k, (algo, heur) in enumerate(keys):
        s = series.loc[(algo, heur)]
        xs = s.index.to_numpy(dtype=float)
        # offset series a tiny bit so curves don't overlap
        offset = (k - (len(keys) - 1) / 2) * 0.12
        label = f"{algo} | {heur or '—'}"
        ax.errorbar(xs + offset, s["mean"].to_numpy(), yerr=s["std"].to_numpy(),
                    marker="o", capsize=3, label=label)
    ax.set_xlabel("Depth")
    ax.set_ylabel(metric)
    ax.set_title(f"{metric} vs Depth (mean ± std)")
    if metric != "g":
        ax.set_yscale("symlog")
    ax.grid(True)
    ax.legend()


def save_fig(fig, outdir: Path, name: str) -> Path:
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path


def plot_all(df, outdir: Path, base: str):
    saved = []
    # Combined 3-panel figure
    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    for ax, metric in zip(np.ravel(axes), ["expanded", "generated", "time_sec"]):
        plot_metric(ax, df, metric)
    plt.tight_layout()
    saved.append(save_fig(fig, outdir, f"{base}_combined"))
    plt.close(fig)

    # Separate single-panel figures
    for metric in ["expanded", "duplicates", "g", "time_sec"]:
        if df[metric].isna().all():
            continue
        fig, ax = plt.subplots(figsize=(8, 6))
        plot_metric(ax, df, metric)
        plt.tight_layout()
        saved.append(save_fig(fig, outdir, f"{base}_{metric}"))
        plt.close(fig)
    return saved


def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot results CSVs and save PNGs.")
    ap.add_argument("csv", nargs="+", help="One or more CSV result files")
    ap.add_argument("--save", default="results/plots", help="Directory to save plots")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args(argv)

    df = load(args.csv)
    if df.empty:
        print("No rows to plot. Are your CSVs empty?")
        sys.exit(0)

    base = "combo" if len(args.csv) > 1 else Path(args.csv[0]).stem
    plot_all(df, Path(args.save), base)

    if args.show:
        # Only show if user asked for it
        plt.show()


if __name__ == "__main__":
    main()
