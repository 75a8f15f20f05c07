"""Bipartite matching orchestration.

`BipartiteMatcher` owns the prepared graph, wires the synthetic source and
sink, runs the blocking-flow solver and reads the matching back.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from bimatch.algorithms.blocking_flow import BlockingFlowSolver
from bimatch.config import MATCHER_CONFIG
from bimatch.io import PreparedGraph, load_graph
from bimatch.logging import get_logger
from bimatch.network import UNIT_CAPACITY
from bimatch.types import MatchingResult

logger = get_logger(__name__)


class BipartiteMatcher:
    """Load a bipartite graph and compute a maximum matching.

    Example:
        >>> matcher = BipartiteMatcher.from_file("program3data.txt")
        >>> for line in matcher.solve().lines():
        ...     print(line)
    """

    def __init__(self, graph: Optional[PreparedGraph] = None) -> None:
        self.graph = graph
        self.result: Optional[MatchingResult] = None

    @classmethod
    def from_file(cls, path: Union[str, Path, None] = None) -> BipartiteMatcher:
        """Create a matcher from an input file (default: the configured input)."""
        matcher = cls()
        matcher.load(path)
        return matcher

    def load(self, path: Union[str, Path, None] = None) -> PreparedGraph:
        """Read ``path`` and keep the resulting graph."""
        if path is None:
            path = MATCHER_CONFIG.default_input
        self.graph = load_graph(path)
        self.result = None
        return self.graph

    def solve(self) -> MatchingResult:
        """Compute the maximum matching of the loaded graph.

        The network is solved in place, so a second call on the same matcher
        returns the stored result instead of solving again.

        Raises:
            RuntimeError: If no graph has been loaded.
        """
        if self.result is not None:
            return self.result
        if self.graph is None or self.graph.network.partition_size == 0:
            raise RuntimeError("Graph is not initialized properly.")

        network = self.graph.network
        network.attach_source_and_sink(network.source, network.sink, UNIT_CAPACITY)

        solver = BlockingFlowSolver(network)
        flow = solver.max_flow(network.source, network.sink)

        result = replace(network.extract_matching(self.graph.names), max_flow=flow)
        if result.total != flow:
            raise RuntimeError(
                f"Matching size {result.total} does not equal max flow {flow}."
            )
        logger.info(f"Found {result.total} matches among {network.partition_size} nodes")
        self.result = result
        return result


def match_file(path: Union[str, Path, None] = None) -> MatchingResult:
    """Load ``path`` and return its maximum matching."""
    return BipartiteMatcher.from_file(path).solve()
