"""bimatch: maximum bipartite matching via blocking flows.

The matching problem is reduced to unit-capacity maximum flow: a synthetic
source feeds every left node, every right node drains into a synthetic sink,
and Dinic's blocking-flow algorithm saturates the network. Matched pairs are
read back from the residual capacities.

Primary API:
    BipartiteMatcher - Load an input file and compute its maximum matching
    FlowNetwork - Dense capacity matrix with synthetic source and sink
    BlockingFlowSolver - Dinic max flow over a FlowNetwork
    load_graph() - Parse a text or YAML input file

Example:
    from bimatch import FlowNetwork, BlockingFlowSolver

    net = FlowNetwork(4)
    net.add_edge(1, 3)
    net.add_edge(1, 4)
    net.add_edge(2, 3)
    net.attach_source_and_sink()

    flow = BlockingFlowSolver(net).max_flow(net.source, net.sink)
    result = net.extract_matching(["Alice", "Bob", "Carol", "Dave"])
"""

from __future__ import annotations

from bimatch import cli, logging
from bimatch._version import __version__
from bimatch.algorithms.blocking_flow import BlockingFlowSolver, calc_max_flow
from bimatch.config import MATCHER_CONFIG, MatcherConfig
from bimatch.errors import InputFormatError, InvalidSizeError, NodeIndexOutOfRangeError
from bimatch.io import PreparedGraph, load_graph, parse_text, parse_yaml
from bimatch.lib.nx import NodeMap, from_networkx, to_networkx
from bimatch.matcher import BipartiteMatcher, match_file
from bimatch.network import FlowNetwork
from bimatch.types import MatchedPair, MatchingResult

__all__ = [
    # Version
    "__version__",
    # Core
    "FlowNetwork",
    "BlockingFlowSolver",
    "calc_max_flow",
    # Matching
    "BipartiteMatcher",
    "match_file",
    "MatchedPair",
    "MatchingResult",
    # Input
    "PreparedGraph",
    "load_graph",
    "parse_text",
    "parse_yaml",
    # Errors
    "InvalidSizeError",
    "NodeIndexOutOfRangeError",
    "InputFormatError",
    # Configuration
    "MatcherConfig",
    "MATCHER_CONFIG",
    # Library integrations (NetworkX)
    "NodeMap",
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
