import json

import pytest

import runner


def write_graph(tmp_path, text, name="graph.txt"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_report_lines_for_solved_path(tmp_path, capsys):
    path = write_graph(tmp_path, "3\n1 2\n2 3\n")
    assert runner.main([path, "-K", "2", "--seed", "0"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("Final coloring:")
    assert len(lines[0].split()) == 2 + 3
    assert lines[1] == "Number of conflicts: 0"
    assert lines[2].startswith("Execution time: ")
    assert lines[2].endswith(" seconds")


def test_report_lists_each_conflict_once(tmp_path, capsys):
    path = write_graph(tmp_path, "2\n1 2\n")
    assert runner.main([path, "-K", "1", "--tabu-iters", "5", "--neighbor-reps", "3"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0] == "Final coloring: 0 0"
    assert lines[1] == "Conflict: 0 1 - color 0"
    assert lines[2] == "Number of conflicts: 1"


def test_parallel_strategy_and_json_output(tmp_path, capsys):
    path = write_graph(tmp_path, "c triangle\np edge 3 3\ne 1 2\ne 2 3\ne 1 3\n", name="tri.col")
    out_file = str(tmp_path / "result.json")
    code = runner.main([
        path, "-K", "3", "--strategy", "parallel", "--workers", "2", "--neighbor-reps", "30",
        "--seed", "1", "-O", out_file,
    ])
    assert code == 0
    assert "Result saved to:" in capsys.readouterr().out
    with open(out_file, encoding="utf-8") as f:
        result = json.load(f)
    assert result["conflicts"] == 0
    assert sorted(result["solution"]) == [0, 1, 2]
    assert result["nodes"] == 3
    assert result["edges"] == 3
    assert result["strategy"] == "parallel"
    assert result["selection"] == "best"


def test_missing_file(tmp_path, capsys):
    assert runner.main([str(tmp_path / "nope.txt")]) == 1
    assert "Error opening file" in capsys.readouterr().err


def test_malformed_file(tmp_path, capsys):
    path = write_graph(tmp_path, "3\n1 2\n2 oops\n")
    assert runner.main([path, "--format", "edges"]) == 1
    assert "expected an integer" in capsys.readouterr().err


def test_invalid_configuration(tmp_path, capsys):
    path = write_graph(tmp_path, "3\n1 2\n")
    assert runner.main([path, "-K", "0"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_unknown_strategy_rejected_by_argparse(tmp_path):
    path = write_graph(tmp_path, "3\n1 2\n")
    with pytest.raises(SystemExit):
        runner.main([path, "--strategy", "gpu"])
