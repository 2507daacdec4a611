# ------------------------------------------------------------------------------
# Search-cost sweep for the control-flow lab.
# - For each sequence length n in benchmark.sizes, searches range(1, n + 1) for
#   one target (first / middle / last element, or an absent value) with:
#     * iterative bisection
#     * recursive bisection (must agree with the iterative form)
#     * linear scan (skipped above benchmark.linear_max_n)
# - Records probes, comparisons and best-of-`repeats` wall time.
# - Writes ONE results table and ONE figure:
#     * results_dir/search_costs.csv
#     * figures_dir/search_costs.pdf
# - Single global TQDM progress bar.
# - Optional maintenance.clean_run to delete results_dir before running.
# ------------------------------------------------------------------------------


from __future__ import annotations
from typing import Optional, List
import os
import math
import time
import shutil
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from tqdm import tqdm

from search import ExhaustedSearch, bisect_iterative, count_probes, default_probe_budget
from data_loaders import _load_config
from helpers import _coerce_int_list
from figures_static import apply_course_theme, plot_search_costs

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
CONFIG_PATH = os.path.join(ROOT_DIR, "config.yaml")

POSITIONS = ("first", "middle", "last", "absent")


def target_for(n: int, position: str) -> int:
    """
    Target value in range(1, n + 1) for a named position.

    'absent' is 0: below every key, so bisection keeps a one-element remainder
    alive and stops on its probe budget.
    """
    if position not in POSITIONS:
        raise ValueError(f"position must be one of {POSITIONS}, got: '{position}'")
    n = int(n)
    if position == "first":
        return 1
    if position == "middle":
        return n // 2 + 1
    if position == "last":
        return n
    return 0


def _best_time(fn, repeats: int) -> float:
    best = math.inf
    for _ in range(max(int(repeats), 1)):
        t0 = time.perf_counter()
        fn()
        best = min(best, time.perf_counter() - t0)
    return best


def _quiet(fn, *args):
    def run():
        try:
            fn(*args)
        except ExhaustedSearch:
            pass
    return run


def compare_search_costs(
    sizes,
    *,
    position: str = "last",
    max_probes: Optional[int] = None,
    linear_max_n: Optional[int] = None,
    repeats: int = 1,
    progress: bool = False,
) -> pd.DataFrame:
    """
    Probe/comparison counts and timings for bisection vs linear scan.

    Parameters
    ----------
    sizes : Iterable[int]
        Sequence lengths (each searched as range(1, n + 1)).
    position : {'first', 'middle', 'last', 'absent'}
        Which target to look for.
    max_probes : int, optional
        Fixed probe budget; default is ceil(log2 n) + 1 per size.
    linear_max_n : int, optional
        Skip the linear scan (NaN columns) for n above this.
    repeats : int
        Timing repetitions; the best time is kept.
    progress : bool
        Show a tqdm bar.

    Returns
    -------
    pd.DataFrame
        One row per size: n, target, found, bisection_probes, recursive_probes,
        probe_budget, log2_n, linear_comparisons, bisection_seconds, linear_seconds.

    Raises
    ------
    AssertionError
        If the iterative and recursive forms disagree.
    """
    sizes = [int(n) for n in sizes]
    if any(n <= 0 for n in sizes):
        raise ValueError(f"All sizes must be positive, got {sizes}")

    rows: List[dict] = []
    for n in tqdm(sizes, desc="Search sweep", unit="size", disable=not progress):
        seq = range(1, n + 1)
        target = target_for(n, position)

        it = count_probes(seq, target, method="iterative", max_probes=max_probes)
        rec = count_probes(seq, target, method="recursive", max_probes=max_probes)
        if it != rec:
            raise AssertionError(f"Iterative and recursive bisection disagree for n={n}: {it} vs {rec}")

        row = {
            "n": n,
            "target": target,
            "found": it["found"],
            "bisection_probes": it["probes"],
            "recursive_probes": rec["probes"],
            "probe_budget": default_probe_budget(n) if max_probes is None else int(max_probes),
            "log2_n": float(np.log2(n)),
            "bisection_seconds": _best_time(_quiet(bisect_iterative, seq, target, max_probes), repeats),
            "linear_comparisons": np.nan,
            "linear_seconds": np.nan,
        }
        if linear_max_n is None or n <= int(linear_max_n):
            lin = count_probes(seq, target, method="linear")
            row["linear_comparisons"] = lin["probes"]
            row["linear_seconds"] = _best_time(lambda: count_probes(seq, target, method="linear"), repeats)
        rows.append(row)

    cols = ["n", "target", "found", "bisection_probes", "recursive_probes", "probe_budget",
            "log2_n", "linear_comparisons", "bisection_seconds", "linear_seconds"]
    return pd.DataFrame(rows, columns=cols)


def main(config_path: Optional[str] = None, root_dir: Optional[str] = None) -> pd.DataFrame:
    root_dir = root_dir or ROOT_DIR
    cfg, paths = _load_config(root_dir, config_path or CONFIG_PATH)

    # Maintenance: clean run (delete results_dir)
    if bool(cfg.get("maintenance", {}).get("clean_run", False)):
        try:
            if os.path.isdir(paths["results_dir"]):
                shutil.rmtree(paths["results_dir"])
                print(f"[maintenance] Removed results_dir: {paths['results_dir']}")
        except OSError as e:
            print(f"[maintenance] Warning: failed to remove results_dir ({e}).")
    os.makedirs(paths["results_dir"], exist_ok=True)
    os.makedirs(paths["figures_dir"], exist_ok=True)

    bench = cfg["benchmark"]
    sizes = _coerce_int_list(bench.get("sizes")) or [10, 100, 1000]
    max_probes = cfg.get("search", {}).get("max_probes")
    verbose = bool(cfg.get("diagnostics", {}).get("verbose", True))

    if verbose:
        print(f"[benchmark] {len(sizes)} sizes from {min(sizes):,} to {max(sizes):,}; "
              f"target position = {bench.get('position', 'last')}.")
    costs = compare_search_costs(
        sizes,
        position=bench.get("position", "last"),
        max_probes=None if max_probes is None else int(max_probes),
        linear_max_n=bench.get("linear_max_n"),
        repeats=int(bench.get("repeats", 1)),
        progress=verbose,
    )

    out_csv = os.path.join(paths["results_dir"], bench.get("results_csv", "search_costs.csv"))
    costs.to_csv(out_csv, index=False)

    figs = cfg.get("figures", {})
    apply_course_theme(figs.get("style", "whitegrid"), figs.get("context", "notebook"),
                       figs.get("palette", "colorblind"), float(figs.get("font_scale", 1.0)))
    out_fig = os.path.join(paths["figures_dir"], bench.get("figure", "search_costs.pdf"))
    fig, _ = plot_search_costs(costs, save_path=out_fig, dpi=int(figs.get("dpi", 150)),
                               title="Bisection vs linear search")
    plt.close(fig)

    if verbose:
        largest = costs.loc[costs["n"].idxmax()]
        print(f"[benchmark] n = {int(largest['n']):,}: {int(largest['bisection_probes'])} probes "
              f"(budget {int(largest['probe_budget'])}).")
    print(f"[output] Results saved in {out_csv} and {out_fig}")
    return costs


if __name__ == "__main__":
    main()
