"""Input preparation: parse matching problems into a `FlowNetwork`.

Two formats are accepted.

Text (one item per line)::

    4            node count N, even and >= 2
    Alice        N node names, first half is the left partition
    Bob
    Carol
    Dave
    3            edge count E >= 1
    1 3          E lines of 1-based node index pairs
    1 4
    2 3

YAML (files ending in ``.yaml`` or ``.yml``)::

    nodes: [Alice, Bob, Carol, Dave]
    edges: [[1, 3], [1, 4], [2, 3]]

Every edge must join the two halves. Edges are oriented left to right before
being added, so the reverse residual entries start at zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Tuple, Union

import yaml

from bimatch.errors import InputFormatError
from bimatch.logging import get_logger
from bimatch.network import UNIT_CAPACITY, FlowNetwork

logger = get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

Edge = Tuple[int, int]


@dataclass
class PreparedGraph:
    """A validated matching problem and the network built from it.

    Attributes:
        names: Node names; ``names[i - 1]`` names node ``i``.
        edges: Bipartite edges as ``(left, right)`` node indices, in input order.
        network: Flow network holding one unit edge per entry in ``edges``.
            Source and sink are not attached yet.
    """

    names: List[str]
    edges: List[Edge]
    network: FlowNetwork

    @property
    def node_count(self) -> int:
        return len(self.names)

    @property
    def left_names(self) -> List[str]:
        return self.names[: self.node_count // 2]

    @property
    def right_names(self) -> List[str]:
        return self.names[self.node_count // 2 :]


def cleanse_name(raw: str) -> str:
    """Keep ASCII letters, ASCII digits and single interior spaces.

    Leading spaces and runs of spaces collapse away; every other character,
    including non-ASCII letters and digits, is dropped.

    Examples:
        >>> cleanse_name("  Mary-Ann   O'Neil\\r")
        'MaryAnn ONeil'
    """
    chars: List[str] = []
    for ch in raw:
        keep_space = ch == " " and chars and chars[-1] != " "
        if (ch.isascii() and ch.isalnum()) or keep_space:
            chars.append(ch)
    return "".join(chars).rstrip(" ")


def validate_node_count(nodes: int, line: int | None = None) -> None:
    if nodes < 2 or nodes % 2 != 0:
        raise InputFormatError(
            f"There should be a positive even number of nodes, got {nodes}.",
            line=line,
        )


def validate_edge_count(edges: int, line: int | None = None) -> None:
    if edges < 1:
        raise InputFormatError(
            f"Edge count must be greater than 0, got {edges}.", line=line
        )


def orient_edge(u: int, v: int, nodes: int, line: int | None = None) -> Edge:
    """Return the edge as ``(left, right)`` after range and side checks."""
    for node in (u, v):
        if not 1 <= node <= nodes:
            raise InputFormatError(
                f"Edge endpoint {node} is outside 1..{nodes}.", line=line
            )
    half = nodes // 2
    if (u <= half) == (v <= half):
        raise InputFormatError(
            f"Edge {u} {v} does not join the two halves (1..{half} and "
            f"{half + 1}..{nodes}).",
            line=line,
        )
    return (u, v) if u <= half else (v, u)


def build_graph(names: Sequence[str], edges: Iterable[Edge]) -> PreparedGraph:
    """Create a `PreparedGraph` from already-validated names and edges."""
    network = FlowNetwork(len(names))
    edge_list = list(edges)
    for left, right in edge_list:
        network.add_edge(left, right, UNIT_CAPACITY)
    return PreparedGraph(names=list(names), edges=edge_list, network=network)


def _parse_int(text: str, what: str, line: int) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise InputFormatError(
            f"Reading {what} failed: {text.strip()!r} is not an integer.", line=line
        ) from None


def parse_text(text: str) -> PreparedGraph:
    """Parse the line-oriented text format.

    Lines after the last declared edge are ignored.

    Raises:
        InputFormatError: On empty input, bad counts, missing lines, invalid
            names or malformed edges.
    """
    if not text:
        raise InputFormatError("Empty file.")

    lines = text.splitlines()
    cursor = 0

    def next_line(what: str) -> Tuple[str, int]:
        nonlocal cursor
        if cursor >= len(lines):
            raise InputFormatError(f"Reading {what} failed: unexpected end of input.")
        cursor += 1
        return lines[cursor - 1], cursor

    raw, lineno = next_line("number of nodes")
    nodes = _parse_int(raw, "number of nodes", lineno)
    validate_node_count(nodes, lineno)

    names: List[str] = []
    for _ in range(nodes):
        raw, lineno = next_line("node name")
        name = cleanse_name(raw)
        if not name:
            raise InputFormatError(f"Name {raw!r} is invalid.", line=lineno)
        names.append(name)

    raw, lineno = next_line("number of edges")
    edge_count = _parse_int(raw, "number of edges", lineno)
    validate_edge_count(edge_count, lineno)

    edges: List[Edge] = []
    for _ in range(edge_count):
        raw, lineno = next_line("edge")
        tokens = raw.split()
        if len(tokens) != 2:
            raise InputFormatError(f"Edge {raw.strip()!r} is invalid.", line=lineno)
        u = _parse_int(tokens[0], "edge", lineno)
        v = _parse_int(tokens[1], "edge", lineno)
        edges.append(orient_edge(u, v, nodes, lineno))

    logger.debug(f"Parsed {nodes} nodes and {edge_count} edges")
    return build_graph(names, edges)


def parse_yaml(text: str) -> PreparedGraph:
    """Parse the YAML format (``nodes`` list and ``edges`` list of pairs).

    Raises:
        InputFormatError: On a document of the wrong shape or failed
            validation. YAML syntax errors propagate from PyYAML.
    """
    data: Any = yaml.safe_load(text)
    if data is None:
        raise InputFormatError("Empty file.")
    if not isinstance(data, dict):
        raise InputFormatError("The provided YAML must map to a dictionary at top-level.")

    unknown = set(data) - {"nodes", "edges"}
    if unknown:
        raise InputFormatError(f"Unrecognized key(s): {sorted(map(str, unknown))}")

    raw_names = data.get("nodes")
    if not isinstance(raw_names, list):
        raise InputFormatError("'nodes' must be a list of names")
    validate_node_count(len(raw_names))

    names: List[str] = []
    for raw in raw_names:
        name = cleanse_name(str(raw))
        if not name:
            raise InputFormatError(f"Name {raw!r} is invalid.")
        names.append(name)

    raw_edges = data.get("edges")
    if not isinstance(raw_edges, list):
        raise InputFormatError("'edges' must be a list of node index pairs")
    validate_edge_count(len(raw_edges))

    edges: List[Edge] = []
    for entry in raw_edges:
        if (
            not isinstance(entry, (list, tuple))
            or len(entry) != 2
            or not all(isinstance(x, int) and not isinstance(x, bool) for x in entry)
        ):
            raise InputFormatError(f"Edge {entry!r} is invalid.")
        edges.append(orient_edge(entry[0], entry[1], len(names)))

    logger.debug(f"Parsed {len(names)} nodes and {len(edges)} edges")
    return build_graph(names, edges)


def load_graph(path: Union[str, Path]) -> PreparedGraph:
    """Read a matching problem from ``path``.

    The format is chosen from the file suffix: YAML for ``.yaml``/``.yml``,
    the text format otherwise.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        InputFormatError: If the content is empty or invalid.
    """
    path = Path(path)
    logger.info(f"Loading matching input from: {path}")
    text = path.read_text()
    if not text.strip():
        raise InputFormatError(f"Empty file: {path}")

    if path.suffix.lower() in YAML_SUFFIXES:
        return parse_yaml(text)
    return parse_text(text)
