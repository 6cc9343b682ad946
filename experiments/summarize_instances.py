from __future__ import annotations

import argparse
import csv
import logging
import os
from dataclasses import asdict
from typing import Any, Dict, List, Optional

import matplotlib.pyplot as plt

from twcol.errors import ColParseError
from twcol.graph_io import ParseConfig, read_col
from twcol.stats import InstanceStats, summarize

FIELDS = [
    "dataset", "status", "error",
    "n_vertices", "declared_edges", "n_edges", "self_loops", "duplicate_edges", "isolated_vertices",
    "min_degree", "max_degree", "avg_degree", "density",
    "treewidth", "lower_bound", "upper_bound",
]


def ensure_dirs(*dirs: str):
    for d in dirs:
        os.makedirs(d, exist_ok=True)


def collect_paths(inputs: List[str]) -> List[str]:
    """Expand directories to the .col files they contain (sorted); files are kept as given."""
    paths: List[str] = []
    for p in inputs:
        if os.path.isdir(p):
            paths.extend(sorted(os.path.join(p, name) for name in os.listdir(p) if name.endswith(".col")))
        else:
            paths.append(p)
    return paths


def summarize_file(path: str, cfg: ParseConfig) -> Dict[str, Any]:
    tag = os.path.splitext(os.path.basename(path))[0]
    row: Dict[str, Any] = {k: "" for k in FIELDS}
    row["dataset"] = tag

    try:
        stats: InstanceStats = summarize(read_col(path, cfg))
    except ColParseError as exc:
        row["status"] = "error"
        row["error"] = f"{type(exc).__name__}: {exc}"
        return row

    row.update({k: ("" if v is None else v) for k, v in asdict(stats).items()})
    row["status"] = "ok"
    return row


def _opt(value: Any) -> str:
    return "-" if value == "" else str(value)


def save_csv(path: str, rows: List[Dict[str, Any]]):
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        w.writerows(rows)


def plot_instances(path: str, rows: List[Dict[str, Any]]):
    ok = [r for r in rows if r["status"] == "ok"]
    tags = [r["dataset"] for r in ok]
    xs = list(range(len(ok)))

    plt.figure()
    plt.bar(xs, [r["max_degree"] for r in ok], color="lightgray", label="max degree")
    for key, marker in (("lower_bound", "v"), ("treewidth", "o"), ("upper_bound", "^")):
        pts = [(x, r[key]) for x, r in zip(xs, ok) if r[key] != ""]
        if pts:
            plt.scatter([x for x, _ in pts], [y for _, y in pts], marker=marker, label=key)
    plt.xticks(xs, tags, rotation=45, ha="right")
    plt.ylabel("value")
    plt.title(f"{len(ok)} instances | max degree vs. known treewidth bounds")
    plt.legend()
    plt.tight_layout()
    plt.savefig(path, dpi=200)
    plt.close()


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser()
    parser.add_argument("inputs", nargs="+", help=".col files or directories containing them")
    parser.add_argument("--strict", action="store_true", help="Treat an edge count mismatch as an error")
    parser.add_argument("--results_dir", default="results")
    parser.add_argument("--plots_dir", default="plots")
    parser.add_argument("--name", default="instances", help="Prefix of the output files")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ensure_dirs(args.results_dir, args.plots_dir)

    cfg = ParseConfig(strict_edge_count=args.strict)
    rows = []
    for path in collect_paths(args.inputs):
        row = summarize_file(path, cfg)
        rows.append(row)
        if row["status"] == "ok":
            print(f"[{row['dataset']}] n={row['n_vertices']} m={row['n_edges']} "
                  f"tw={_opt(row['treewidth'])} lb={_opt(row['lower_bound'])} ub={_opt(row['upper_bound'])}")
        else:
            print(f"[{row['dataset']}] FAILED {row['error']}")

    if not rows:
        print("No .col files found")
        return 1

    out_csv = os.path.join(args.results_dir, f"{args.name}_summary.csv")
    save_csv(out_csv, rows)
    print(f"Saved: {out_csv}")

    if any(r["status"] == "ok" for r in rows):
        out_png = os.path.join(args.plots_dir, f"{args.name}_bounds.png")
        plot_instances(out_png, rows)
        print(f"Saved: {out_png}")

    return 0 if all(r["status"] == "ok" for r in rows) else 1


if __name__ == "__main__":
    raise SystemExit(main())
