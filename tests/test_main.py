import pytest

from main import main


GRAPH = """7
Dallas|Austin|98|47
Austin|Houston|95|39
Dallas|Houston|101|51
Austin|Chicago|144|60
Chicago|Austin|155|51
Houston|Chicago|111|70
Dallas|Chicago|350|80
"""

SEARCHES = """3
Dallas|Chicago|C
Dallas|Chicago|T
Houston|Dallas|C
"""

EXPECTED_REPORT = """FLIGHT 1: from DALLAS to CHICAGO (by COST)
Path 1: Dallas -> Houston -> Chicago. Time: 121, Cost: 212
Path 2: Dallas -> Austin -> Chicago. Time: 107, Cost: 242
Path 3: Dallas -> Chicago. Time: 80, Cost: 350

FLIGHT 2: from DALLAS to CHICAGO (by TIME)
Path 1: Dallas -> Chicago. Time: 80, Cost: 350
Path 2: Dallas -> Austin -> Chicago. Time: 107, Cost: 242
Path 3: Dallas -> Houston -> Chicago. Time: 121, Cost: 212

FLIGHT 3: from HOUSTON to DALLAS (by COST)
Path 1: No available path.
Path 2: No available path.
Path 3: No available path.

"""


@pytest.fixture
def inputs(tmp_path):
    graph_file = tmp_path / "graph.txt"
    search_file = tmp_path / "search.txt"
    graph_file.write_text(GRAPH, encoding="utf-8")
    search_file.write_text(SEARCHES, encoding="utf-8")
    return graph_file, search_file, tmp_path / "results.txt"


def run(tmp_path, *argv):
    return main(["--config", str(tmp_path / "absent.yaml"), *argv])


def test_writes_and_echoes_report(tmp_path, inputs, capsys):
    graph_file, search_file, results_file = inputs

    code = run(
        tmp_path,
        "--graph", str(graph_file),
        "--searches", str(search_file),
        "--results", str(results_file),
    )

    assert code == 0
    assert results_file.read_text(encoding="utf-8") == EXPECTED_REPORT
    assert capsys.readouterr().out == EXPECTED_REPORT


def test_no_echo(tmp_path, inputs, capsys):
    graph_file, search_file, results_file = inputs

    code = run(
        tmp_path,
        "--graph", str(graph_file),
        "--searches", str(search_file),
        "--results", str(results_file),
        "--no-echo",
    )

    assert code == 0
    assert capsys.readouterr().out == ""
    assert results_file.read_text(encoding="utf-8") == EXPECTED_REPORT


def test_file_names_from_config(tmp_path, inputs):
    graph_file, search_file, results_file = inputs
    config_file = tmp_path / "flights.yaml"
    config_file.write_text(
        f"graph_file: {graph_file}\nsearch_file: {search_file}\nresults_file: {results_file}\n",
        encoding="utf-8",
    )

    assert main(["--config", str(config_file), "--no-echo"]) == 0
    assert results_file.read_text(encoding="utf-8") == EXPECTED_REPORT


def test_missing_file_names_are_prompted(tmp_path, inputs, monkeypatch):
    graph_file, search_file, results_file = inputs
    answers = iter([str(graph_file), str(search_file), str(results_file)])
    monkeypatch.setattr("builtins.input", lambda prompt: next(answers))

    assert run(tmp_path, "--no-echo") == 0
    assert results_file.read_text(encoding="utf-8") == EXPECTED_REPORT


def test_missing_input_file(tmp_path, inputs, capsys):
    _, search_file, results_file = inputs

    code = run(
        tmp_path,
        "--graph", str(tmp_path / "nope.txt"),
        "--searches", str(search_file),
        "--results", str(results_file),
    )

    assert code == 1
    assert "Cannot open at least 1 of these files" in capsys.readouterr().err
    assert not results_file.exists()


def test_malformed_graph_file(tmp_path, inputs, capsys):
    graph_file, search_file, results_file = inputs
    graph_file.write_text("1\nDallas|Austin|98\n", encoding="utf-8")

    code = run(
        tmp_path,
        "--graph", str(graph_file),
        "--searches", str(search_file),
        "--results", str(results_file),
    )

    assert code == 2
    assert "graph.txt:2" in capsys.readouterr().err
    assert not results_file.exists()


def test_graph_file_that_is_not_utf8(tmp_path, inputs, capsys):
    graph_file, search_file, results_file = inputs
    graph_file.write_bytes(b"1\nA\xff|B|1|1\n")

    code = run(
        tmp_path,
        "--graph", str(graph_file),
        "--searches", str(search_file),
        "--results", str(results_file),
    )

    assert code == 2
    assert "not valid UTF-8" in capsys.readouterr().err
    assert not results_file.exists()


def test_numeric_log_level_from_config(tmp_path, inputs):
    graph_file, search_file, results_file = inputs
    config_file = tmp_path / "flights.yaml"
    config_file.write_text(
        f"graph_file: {graph_file}\nsearch_file: {search_file}\n"
        f"results_file: {results_file}\nlog_level: 10\n",
        encoding="utf-8",
    )

    assert main(["--config", str(config_file), "--no-echo"]) == 0
    assert results_file.read_text(encoding="utf-8") == EXPECTED_REPORT


def test_unknown_log_level_is_a_usage_error(tmp_path, inputs):
    graph_file, search_file, results_file = inputs

    with pytest.raises(SystemExit) as excinfo:
        run(
            tmp_path,
            "--graph", str(graph_file),
            "--searches", str(search_file),
            "--results", str(results_file),
            "--log-level", "loud",
        )

    assert excinfo.value.code == 2
