"""Tests for the BipartiteMatcher orchestration."""

from pathlib import Path

import pytest

from bimatch.io import build_graph
from bimatch.matcher import BipartiteMatcher, match_file


def test_sample_file(sample_text_file: Path):
    result = BipartiteMatcher.from_file(sample_text_file).solve()
    assert result.lines() == ["Alice / Dave", "Bob / Carol", "2 total matches"]
    assert result.max_flow == 2


def test_yaml_file_matches_text_file(sample_text_file: Path, sample_yaml_file: Path):
    assert match_file(sample_text_file) == match_file(sample_yaml_file)


def test_single_pair():
    matcher = BipartiteMatcher(build_graph(["Left", "Right"], [(1, 2)]))
    result = matcher.solve()
    assert [(p.left, p.right) for p in result.pairs] == [("Left", "Right")]
    assert result.total == 1


def test_solve_is_cached():
    matcher = BipartiteMatcher(build_graph(["a", "b", "c", "d"], [(1, 3), (2, 4)]))
    first = matcher.solve()
    assert matcher.solve() is first
    assert first.total == 2


def test_default_input_path(tmp_path: Path, monkeypatch, sample_text_file: Path):
    monkeypatch.chdir(sample_text_file.parent)
    assert BipartiteMatcher.from_file().solve().total == 2


def test_reload_clears_result(tmp_path: Path, sample_text_file: Path):
    other = tmp_path / "other.txt"
    other.write_text("2\nx\ny\n1\n1 2\n")

    matcher = BipartiteMatcher.from_file(sample_text_file)
    assert matcher.solve().total == 2
    matcher.load(other)
    assert matcher.result is None
    assert matcher.solve().lines() == ["x / y", "1 total matches"]


def test_solve_without_graph():
    with pytest.raises(RuntimeError, match="not initialized"):
        BipartiteMatcher().solve()


def test_solve_wires_source_and_sink():
    graph = build_graph(["a", "b"], [(1, 2)])
    BipartiteMatcher(graph).solve()
    net = graph.network
    # Saturated: source->1 and 2->sink carry their unit of flow
    assert net.capacity(0, 1) == 0
    assert net.capacity(1, 0) == 1
    assert net.capacity(3, 2) == 1


def test_result_to_dict(sample_text_file: Path):
    data = match_file(sample_text_file).to_dict()
    assert data["total"] == 2
    assert data["max_flow"] == 2
    assert data["pairs"][0] == {
        "left_index": 1,
        "right_index": 4,
        "left": "Alice",
        "right": "Dave",
    }


@pytest.mark.parametrize("name", ["program3data.txt", "program3data.yaml"])
def test_bundled_examples(name):
    path = Path(__file__).resolve().parents[1] / "examples" / name
    result = match_file(path)
    assert result.lines() == ["Alice / Dave", "Bob / Carol", "2 total matches"]


def test_complete_graph_matches_each_node_once(monkeypatch):
    from bimatch.config import MATCHER_CONFIG

    # A stray attribute on the global config must not widen any edge
    monkeypatch.setattr(MATCHER_CONFIG, "edge_capacity", 2, raising=False)
    graph = build_graph(["a", "b", "c", "d"], [(1, 3), (1, 4), (2, 3), (2, 4)])
    result = BipartiteMatcher(graph).solve()

    lefts = [p.left for p in result.pairs]
    rights = [p.right for p in result.pairs]
    assert result.total == result.max_flow == 2
    assert len(set(lefts)) == len(lefts)
    assert len(set(rights)) == len(rights)

    net = graph.network
    assert [net.capacity(1, 0), net.capacity(2, 0)] == [1, 1]
    assert [net.capacity(net.sink, 3), net.capacity(net.sink, 4)] == [1, 1]
