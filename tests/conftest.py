"""Shared fixtures: small bipartite networks and input files.

Node layout in every network: 0 is the source, ``1..N/2`` the left half,
``N/2+1..N`` the right half, ``N+1`` the sink.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from bimatch.network import FlowNetwork

SAMPLE_TEXT = """4
Alice
Bob
Carol
Dave
3
1 3
1 4
2 3
"""

SAMPLE_YAML = """
nodes: [Alice, Bob, Carol, Dave]
edges: [[1, 3], [1, 4], [2, 3]]
"""


def make_network(partition_size, edges, attach=True):
    """Build a network with unit edges and (optionally) source/sink wiring."""
    net = FlowNetwork(partition_size)
    for u, v in edges:
        net.add_edge(u, v, 1)
    if attach:
        net.attach_source_and_sink(net.source, net.sink)
    return net


@pytest.fixture
def square4():
    # Left {1, 2}, right {3, 4}; edges 1-3, 1-4, 2-3. The first path takes
    # 1-3, so the second phase has to reroute 1 to 4 through the reverse edge.
    return make_network(4, [(1, 3), (1, 4), (2, 3)])


@pytest.fixture
def single_pair():
    return make_network(2, [(1, 2)])


@pytest.fixture
def no_edges():
    return make_network(2, [])


@pytest.fixture
def complete6():
    # K(3,3): every left node joins every right node
    return make_network(6, [(u, v) for u in (1, 2, 3) for v in (4, 5, 6)])


@pytest.fixture
def chain8():
    # Ladder 1-5, 1-6, 2-5, 2-6, 3-6, 3-7, 4-7, 4-8 with a perfect matching
    return make_network(
        8, [(1, 5), (1, 6), (2, 5), (2, 6), (3, 6), (3, 7), (4, 7), (4, 8)]
    )


@pytest.fixture
def sample_text_file(tmp_path: Path) -> Path:
    path = tmp_path / "program3data.txt"
    path.write_text(SAMPLE_TEXT)
    return path


@pytest.fixture
def sample_yaml_file(tmp_path: Path) -> Path:
    path = tmp_path / "graph.yaml"
    path.write_text(SAMPLE_YAML)
    return path


@pytest.fixture
def network_factory():
    """Return ``make_network`` for tests that build their own graphs."""
    return make_network
