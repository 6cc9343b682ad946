import csv
import os
import shutil

from experiments.summarize_instances import collect_paths, main


def _read_rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def test_collect_paths_expands_directories(data_dir, tmp_path):
    extra = tmp_path / "notes.txt"
    extra.write_text("x")

    paths = collect_paths([data_dir, str(extra)])

    assert [os.path.basename(p) for p in paths] == ["test_graph_one.col", "test_graph_two.col", "notes.txt"]


def test_main_writes_summary_and_plot(data_dir, tmp_path, capsys):
    results = tmp_path / "results"
    plots = tmp_path / "plots"

    rc = main([data_dir, "--results_dir", str(results), "--plots_dir", str(plots), "--name", "demo"])

    assert rc == 0
    rows = _read_rows(results / "demo_summary.csv")
    by_name = {r["dataset"]: r for r in rows}
    assert by_name["test_graph_one"]["n_edges"] == "45"
    assert by_name["test_graph_one"]["upper_bound"] == "1000"
    assert by_name["test_graph_one"]["treewidth"] == ""
    assert by_name["test_graph_two"]["treewidth"] == "2"
    assert (plots / "demo_bounds.png").exists()
    assert "[test_graph_two] n=4 m=4 tw=2 lb=2 ub=-" in capsys.readouterr().out


def test_main_records_failures(data_dir, tmp_path):
    shutil.copy(os.path.join(data_dir, "test_graph_two.col"), tmp_path / "good.col")
    (tmp_path / "bad.col").write_text("p edge 2 1\ne 1 3\n")
    (tmp_path / "short.col").write_text("p edge 2 2\ne 1 2\n")
    results = tmp_path / "results"

    rc = main([str(tmp_path), "--strict", "--results_dir", str(results), "--plots_dir", str(tmp_path / "plots")])

    assert rc == 1
    by_name = {r["dataset"]: r for r in _read_rows(results / "instances_summary.csv")}
    assert by_name["good"]["status"] == "ok"
    assert by_name["bad"]["status"] == "error"
    assert by_name["bad"]["error"].startswith("VertexOutOfBoundsError")
    assert by_name["short"]["error"].startswith("EdgeCountMismatchError")


def test_main_without_inputs_found(tmp_path):
    rc = main([str(tmp_path), "--results_dir", str(tmp_path / "r"), "--plots_dir", str(tmp_path / "p")])
    assert rc == 1


def test_main_reports_declared_and_read_edges(tmp_path):
    (tmp_path / "short.col").write_text("p edge 2 2\ne 1 2\n")
    results = tmp_path / "results"

    rc = main([str(tmp_path), "--results_dir", str(results), "--plots_dir", str(tmp_path / "plots")])

    assert rc == 0
    row = _read_rows(results / "instances_summary.csv")[0]
    assert row["status"] == "ok"
    assert row["declared_edges"] == "2"
    assert row["n_edges"] == "1"
