"""NetworkX conversion utilities.

Convert a bipartite NetworkX graph into a `PreparedGraph` ready for matching,
and expose a `FlowNetwork`'s residual matrix as a NetworkX digraph.

Example:
    >>> import networkx as nx
    >>> from bimatch.lib.nx import from_networkx
    >>>
    >>> G = nx.Graph()
    >>> G.add_edges_from([("a", "x"), ("a", "y"), ("b", "x")])
    >>> prepared, node_map = from_networkx(G, left_nodes={"a", "b"})
    >>> prepared.edges
    [(1, 3), (1, 4), (2, 3)]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Collection, Dict, Hashable, List, Tuple

from bimatch.errors import InvalidSizeError
from bimatch.io import PreparedGraph, build_graph, cleanse_name
from bimatch.network import FlowNetwork

if TYPE_CHECKING:
    import networkx as nx


@dataclass
class NodeMap:
    """Bidirectional mapping between NetworkX nodes and network indices.

    Attributes:
        to_index: Maps original node to its index (``1..N``).
        to_node: Maps index back to the original node.
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_node: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_nodes(cls, nodes: List[Hashable]) -> NodeMap:
        """Create a NodeMap assigning indices ``1..len(nodes)`` in list order."""
        to_index = {node: i for i, node in enumerate(nodes, start=1)}
        to_node = {i: node for i, node in enumerate(nodes, start=1)}
        return cls(to_index=to_index, to_node=to_node)

    def __len__(self) -> int:
        return len(self.to_index)


def from_networkx(
    G: Any, left_nodes: Collection[Hashable]
) -> Tuple[PreparedGraph, NodeMap]:
    """Convert an undirected bipartite NetworkX graph.

    Left nodes get indices ``1..k`` and right nodes ``k+1..2k``, each side
    sorted by ``str`` for a deterministic layout. Node names are the cleansed
    ``str`` of each node, falling back to the index when cleansing leaves
    nothing.

    Args:
        G: ``networkx.Graph`` whose edges all join the two sides.
        left_nodes: Nodes forming the left partition; every other node of
            ``G`` is on the right.

    Returns:
        Tuple of (prepared graph, node map).

    Raises:
        TypeError: If ``G`` is not an undirected NetworkX graph.
        InvalidSizeError: If the sides are empty or differ in size.
        ValueError: If a left node is missing from ``G`` or an edge stays on
            one side.
    """
    import networkx as nx

    if not isinstance(G, nx.Graph) or G.is_directed():
        raise TypeError(f"Expected undirected NetworkX graph, got {type(G).__name__}")

    left = set(left_nodes)
    missing = left - set(G.nodes())
    if missing:
        raise ValueError(f"Left nodes not in graph: {sorted(map(str, missing))}")
    right = set(G.nodes()) - left

    if not left or len(left) != len(right):
        raise InvalidSizeError(
            f"Partitions must be non-empty and equal in size, got "
            f"{len(left)} left and {len(right)} right nodes."
        )

    ordered = sorted(left, key=str) + sorted(right, key=str)
    node_map = NodeMap.from_nodes(ordered)

    edges: List[Tuple[int, int]] = []
    for u, v in G.edges():
        if (u in left) == (v in left):
            raise ValueError(f"Edge ({u!r}, {v!r}) does not join the two partitions.")
        lhs, rhs = (u, v) if u in left else (v, u)
        edges.append((node_map.to_index[lhs], node_map.to_index[rhs]))
    edges.sort()

    names = [cleanse_name(str(node)) or str(index) for index, node in node_map.to_node.items()]
    return build_graph(names, edges), node_map


def to_networkx(network: FlowNetwork) -> "nx.DiGraph":
    """Return the residual matrix as a DiGraph with a ``capacity`` attribute.

    All ``total_nodes`` indices become nodes, including source and sink; an
    edge exists for every positive matrix entry.
    """
    import networkx as nx

    G = nx.DiGraph()
    G.add_nodes_from(range(network.total_nodes))
    residual = network.residual_view()
    for u in range(network.total_nodes):
        for v in network.neighbors(u):
            G.add_edge(u, v, capacity=int(residual[u, v]))
    return G
