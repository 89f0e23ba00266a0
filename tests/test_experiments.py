import pandas as pd

from brutalize.domains.puzzlen import SlidingPuzzle
from brutalize.experiments import plot, runner, summarize


def test_generated_instances_are_solvable_and_not_solved():
    dom = SlidingPuzzle(3)
    insts = runner._gen(dom, [4, 8], per_depth=3)
    assert [i.depth for i in insts] == [4, 4, 4, 8, 8, 8]
    assert all(dom.is_solvable(i.state) and i.state != dom.GOAL for i in insts)
    # seeds are unique so every row can be matched across algorithms
    assert len({i.seed for i in insts}) == len(insts)


def test_recorded_seed_rebuilds_instance():
    dom = SlidingPuzzle(3)
    insts = runner._gen(dom, [3, 7], per_depth=4, start_seed=5)
    assert insts[0].seed >= 5
    for inst in insts:
        assert dom.scramble(inst.depth, inst.seed) == inst.state


def test_runner_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "run.csv"
    runner.main(["--depths", "4", "6", "--per_depth", "2", "--algo", "both", "--out", str(out)])
    assert "Wrote" in capsys.readouterr().out
    df = pd.read_csv(out)
    assert list(df.columns) == runner.HEADER
    assert len(df) == 8
    assert set(df["algorithm"]) == {"best-first", "BFS"}
    assert (df["termination"] == "ok").all()
    assert (df["g"] <= df["depth"]).all()


def test_summary_and_optimality_check(tmp_path):
    dom = SlidingPuzzle(2, 3, heuristic="linear_conflict")
    insts = runner._gen(dom, [6], per_depth=3)
    out = tmp_path / "r2x3.csv"
    assert runner.run(dom, insts, out, algo="both", include_unsolvable=True) == 12

    df = summarize.load([out])
    assert set(df.loc[df["solvable"] == 0, "termination"]) == {"exhausted"}
    assert summarize.optimality_check(df).empty

    means = summarize.group_means(df)
    assert set(means["algorithm"]) == {"best-first", "BFS"}
    assert (means["n"] == 3).all()
    assert "expanded_mean" in means.columns

    # a wrong length shows up as a mismatch
    broken = df.copy()
    broken.loc[broken["algorithm"] == "best-first", "g"] += 1
    assert len(summarize.optimality_check(broken)) == 3


def test_summarize_and_plot_main(tmp_path, capsys):
    csv_path = tmp_path / "p8.csv"
    runner.main(["--depths", "4", "--per_depth", "2", "--out", str(csv_path)])
    summary = tmp_path / "summary.csv"
    summarize.main([str(csv_path), "--out", str(summary)])
    assert "best-first matches BFS" in capsys.readouterr().out
    assert summary.exists()

    plots = tmp_path / "plots"
    plot.main([str(csv_path), "--save", str(plots)])
    assert (plots / "p8_combined.png").exists()
    assert (plots / "p8_expanded.png").exists()
