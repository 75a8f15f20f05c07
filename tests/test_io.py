"""Tests for input preparation: text and YAML loaders and validation."""

from pathlib import Path

import pytest
import yaml

from bimatch.errors import InputFormatError
from bimatch.io import (
    build_graph,
    cleanse_name,
    load_graph,
    orient_edge,
    parse_text,
    parse_yaml,
)


def text_input(names, edges, node_count=None, edge_count=None):
    lines = [str(len(names) if node_count is None else node_count)]
    lines += names
    lines.append(str(len(edges) if edge_count is None else edge_count))
    lines += [f"{u} {v}" for u, v in edges]
    return "\n".join(lines) + "\n"


class TestCleanseName:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Alice", "Alice"),
            ("  Mary  Ann  ", "Mary Ann"),
            ("O'Neil-Smith", "ONeilSmith"),
            ("Bob\r", "Bob"),
            ("Agent 007", "Agent 007"),
            ("  !!  ", ""),
            ("a \t b", "a b"),
            ("Zo\u00eb\u00b2", "Zo"),
            ("caf\u00e9 1", "caf 1"),
            ("\u00c5sa", "sa"),
            ("\u0661\u0662", ""),
        ],
    )
    def test_cleanse(self, raw, expected):
        assert cleanse_name(raw) == expected


class TestParseText:
    def test_sample(self):
        graph = parse_text(
            text_input(["Alice", "Bob", "Carol", "Dave"], [(1, 3), (1, 4), (2, 3)])
        )
        assert graph.names == ["Alice", "Bob", "Carol", "Dave"]
        assert graph.edges == [(1, 3), (1, 4), (2, 3)]
        assert graph.left_names == ["Alice", "Bob"]
        assert graph.right_names == ["Carol", "Dave"]
        assert graph.network.partition_size == 4
        assert graph.network.capacity(1, 3) == 1
        assert graph.network.capacity(3, 1) == 0
        # Source and sink are wired by the matcher, not the loader
        assert graph.network.neighbors(0) == []

    def test_right_to_left_edge_is_oriented(self):
        graph = parse_text(text_input(["a", "b"], [(2, 1)]))
        assert graph.edges == [(1, 2)]
        assert graph.network.capacity(1, 2) == 1
        assert graph.network.capacity(2, 1) == 0

    def test_extra_lines_ignored(self):
        text = text_input(["a", "b"], [(1, 2)]) + "garbage\n"
        assert parse_text(text).edges == [(1, 2)]

    def test_whitespace_around_numbers(self):
        graph = parse_text(" 2 \na\nb\n 1\n  1   2  \n")
        assert graph.edges == [(1, 2)]

    def test_empty(self):
        with pytest.raises(InputFormatError, match="Empty"):
            parse_text("")

    @pytest.mark.parametrize("count", ["0", "-2", "3", "1"])
    def test_bad_node_count(self, count):
        with pytest.raises(InputFormatError, match="even number of nodes"):
            parse_text(f"{count}\na\nb\nc\n1\n1 2\n")

    def test_non_numeric_node_count(self):
        with pytest.raises(InputFormatError, match="line 1"):
            parse_text("four\na\nb\nc\nd\n1\n1 3\n")

    def test_non_positive_edge_count(self):
        with pytest.raises(InputFormatError, match="greater than 0"):
            parse_text(text_input(["a", "b"], [], edge_count=0))

    def test_non_numeric_edge_count(self):
        with pytest.raises(InputFormatError, match="line 4"):
            parse_text("2\na\nb\nmany\n1 2\n")

    def test_invalid_name(self):
        with pytest.raises(InputFormatError, match="line 3: Name"):
            parse_text(text_input(["a", "#$%"], [(1, 2)]))

    def test_non_ascii_only_name_is_invalid(self):
        with pytest.raises(InputFormatError, match="line 2: Name"):
            parse_text(text_input(["\u00e9\u00e8", "b"], [(1, 2)]))

    def test_missing_names(self):
        with pytest.raises(InputFormatError, match="node name"):
            parse_text("4\na\nb\n")

    def test_missing_edges(self):
        with pytest.raises(InputFormatError, match="Reading edge"):
            parse_text(text_input(["a", "b"], [(1, 2)], edge_count=2))

    @pytest.mark.parametrize("line", ["1", "1 x", "", "1 2 3"])
    def test_unparsable_edge(self, line):
        with pytest.raises(InputFormatError, match="line 5"):
            parse_text(f"2\na\nb\n1\n{line}\n")

    @pytest.mark.parametrize("edge", [(0, 2), (1, 3), (5, 1)])
    def test_edge_out_of_range(self, edge):
        with pytest.raises(InputFormatError, match="outside 1..2"):
            parse_text(text_input(["a", "b"], [edge]))

    def test_edge_within_one_half(self):
        with pytest.raises(InputFormatError, match="does not join"):
            parse_text(text_input(["a", "b", "c", "d"], [(1, 2)]))


class TestParseYaml:
    def test_sample(self):
        graph = parse_yaml("nodes: [Alice, Bob, Carol, Dave]\nedges: [[1, 3], [4, 2]]\n")
        assert graph.names == ["Alice", "Bob", "Carol", "Dave"]
        assert graph.edges == [(1, 3), (2, 4)]

    def test_names_cleansed(self):
        graph = parse_yaml("nodes: ['Mary  Ann!', 7]\nedges: [[1, 2]]\n")
        assert graph.names == ["Mary Ann", "7"]

    def test_empty_document(self):
        with pytest.raises(InputFormatError, match="Empty"):
            parse_yaml("")

    def test_top_level_must_be_mapping(self):
        with pytest.raises(InputFormatError, match="dictionary"):
            parse_yaml("- a\n- b\n")

    def test_unknown_key(self):
        with pytest.raises(InputFormatError, match="Unrecognized"):
            parse_yaml("nodes: [a, b]\nedges: [[1, 2]]\nweights: [1]\n")

    def test_nodes_must_be_list(self):
        with pytest.raises(InputFormatError, match="'nodes'"):
            parse_yaml("nodes: {a: 1}\nedges: [[1, 2]]\n")

    def test_odd_node_count(self):
        with pytest.raises(InputFormatError, match="even number"):
            parse_yaml("nodes: [a, b, c]\nedges: [[1, 2]]\n")

    def test_no_edges(self):
        with pytest.raises(InputFormatError, match="greater than 0"):
            parse_yaml("nodes: [a, b]\nedges: []\n")

    @pytest.mark.parametrize("edge", ["[1]", "[1, 'x']", "[true, 2]", "'1 2'"])
    def test_malformed_edge(self, edge):
        with pytest.raises(InputFormatError, match="Edge"):
            parse_yaml(f"nodes: [a, b]\nedges: [{edge}]\n")

    def test_syntax_error_propagates(self):
        with pytest.raises(yaml.YAMLError):
            parse_yaml("nodes: [a, b\n")


class TestLoadGraph:
    def test_text_file(self, sample_text_file: Path):
        graph = load_graph(sample_text_file)
        assert graph.node_count == 4
        assert len(graph.edges) == 3

    def test_yaml_file(self, sample_yaml_file: Path):
        graph = load_graph(str(sample_yaml_file))
        assert graph.names[0] == "Alice"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_graph(tmp_path / "nope.txt")

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.txt"
        path.write_text("")
        with pytest.raises(InputFormatError, match="Empty file"):
            load_graph(path)


def test_orient_edge():
    assert orient_edge(3, 1, 4) == (1, 3)
    assert orient_edge(2, 4, 4) == (2, 4)


def test_build_graph_uses_unit_capacity():
    graph = build_graph(["a", "b", "c", "d"], [(1, 4)])
    assert graph.network.capacity(1, 4) == 1
    assert graph.network.edge_count() == 1
