"""Blocking-flow (Dinic) maximum flow over a `FlowNetwork`.

Each phase builds a level graph with a breadth-first search from the source
and then repeatedly walks level-respecting paths to the sink, retreating from
dead ends and closing them for the rest of the phase. Every path found pushes
exactly one unit of flow. The algorithm stops when a level-graph build no
longer reaches the sink.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

import numpy as np

from bimatch.errors import NodeIndexOutOfRangeError
from bimatch.logging import get_logger
from bimatch.network import FlowNetwork

logger = get_logger(__name__)

#: Depth of a node the current level graph did not reach.
UNREACHED = -1


class BlockingFlowSolver:
    """Dinic-style max-flow solver bound to one `FlowNetwork`.

    The solver borrows the network for its whole lifetime and leaves the
    network's capacity matrix in its final residual state, from which the
    matching is read back.

    Attributes:
        network: The network being solved; owned by the caller.
        phases: Number of level graphs that reached the sink in the last solve.
        augmenting_paths: Number of paths augmented in the last solve.
    """

    def __init__(self, network: FlowNetwork) -> None:
        self.network = network
        total_nodes = network.total_nodes
        self._depth = np.full(total_nodes, UNREACHED, dtype=np.int64)
        # Working copy of the residual capacities, refreshed every phase
        self._flow_remaining = np.zeros((total_nodes, total_nodes), dtype=np.int64)
        self.phases = 0
        self.augmenting_paths = 0

    @property
    def depth(self) -> np.ndarray:
        """Read-only view of the BFS layer of each node; -1 when unreached."""
        view = self._depth.view()
        view.flags.writeable = False
        return view

    def max_flow(self, source: int, sink: int) -> int:
        """Compute the maximum flow from ``source`` to ``sink``.

        Args:
            source: Source node index.
            sink: Sink node index.

        Returns:
            Total flow pushed during this call.

        Raises:
            NodeIndexOutOfRangeError: If either index is outside
                ``[0, total_nodes)``. Raised before any search work.
        """
        self._check_index(source, "source")
        self._check_index(sink, "sink")

        self.phases = 0
        self.augmenting_paths = 0
        total_flow = 0

        while self.build_level_graph(source, sink):
            self.phases += 1
            self._take_snapshot()

            phase_flow = 0
            path = self.find_path(source, sink)
            while path is not None:
                phase_flow += self._augment(path)
                path = self.find_path(source, sink)

            logger.debug(
                f"Phase {self.phases}: sink depth {int(self._depth[sink])}, "
                f"pushed {phase_flow}"
            )
            total_flow += phase_flow

        logger.info(
            f"Max flow {total_flow} from {source} to {sink} after "
            f"{self.phases} phase(s), {self.augmenting_paths} augmenting path(s)"
        )
        return total_flow

    def build_level_graph(self, source: int, sink: int) -> bool:
        """Assign BFS depths from ``source`` over positive residual capacity.

        Stops as soon as ``sink`` receives a depth.

        Returns:
            True if ``sink`` is reachable, False once the queue drains without
            reaching it.
        """
        self._check_index(source, "source")
        self._check_index(sink, "sink")

        depth = self._depth
        depth.fill(UNREACHED)
        depth[source] = 0
        queue: Deque[int] = deque([source])

        while queue:
            node = queue.popleft()
            for neighbor in self.network.neighbors(node):
                if depth[neighbor] == UNREACHED:
                    depth[neighbor] = depth[node] + 1
                    if neighbor == sink:
                        return True
                    queue.append(neighbor)
        return False

    def find_path(self, source: int, sink: int) -> Optional[List[int]]:
        """Find one source-to-sink path inside the current level graph.

        Walks forward to the first neighbor (ascending index) one level deeper
        with remaining capacity. A node with no such neighbor is a dead end:
        all remaining capacity into it is zeroed for the rest of the phase and
        the walk retreats to the previous node.

        Returns:
            The node sequence from ``source`` to ``sink``, or None when the
            phase has no augmenting path left.
        """
        path = [source]
        node = source

        while node != sink:
            next_node = self._next_hop(node)
            if next_node is not None:
                path.append(next_node)
                node = next_node
                continue

            if node == source:
                return None

            # Dead end: close it off and retreat
            self._flow_remaining[:, node] = 0
            path.pop()
            node = path[-1]

        return path

    def _next_hop(self, node: int) -> Optional[int]:
        next_depth = self._depth[node] + 1
        remaining = self._flow_remaining[node]
        for neighbor in self.network.neighbors(node):
            if self._depth[neighbor] == next_depth and remaining[neighbor] > 0:
                return neighbor
        return None

    def _take_snapshot(self) -> None:
        np.copyto(self._flow_remaining, self.network.residual_view())

    def _augment(self, path: List[int]) -> int:
        # Every edge on a level-graph path has unit capacity in a matching
        # network, so each path carries exactly one unit.
        for u, v in zip(path, path[1:]):
            self._update_residual(u, v)
        self.augmenting_paths += 1
        logger.debug(f"Augmented path {path}")
        return 1

    def _update_residual(self, u: int, v: int) -> None:
        """Move one unit of residual capacity from ``u -> v`` to ``v -> u``."""
        self._check_index(u, "edge source")
        self._check_index(v, "edge target")

        capacity = self.network.residual_mutator()
        capacity[v, u] += 1
        capacity[u, v] -= 1

        self._flow_remaining[v, u] += 1
        self._flow_remaining[u, v] -= 1

    def _check_index(self, index: int, role: str) -> None:
        total_nodes = self.network.total_nodes
        if not 0 <= index < total_nodes:
            raise NodeIndexOutOfRangeError(
                f"{role.capitalize()} index {index} is out of range [0, {total_nodes}).",
                index=index,
                total_nodes=total_nodes,
            )


def calc_max_flow(
    network: FlowNetwork,
    source: Optional[int] = None,
    sink: Optional[int] = None,
) -> int:
    """Solve ``network`` in place and return the maximum flow value.

    Args:
        network: Network to solve; its capacity matrix is left in residual form.
        source: Source index (default: the network's source, 0).
        sink: Sink index (default: the network's sink, ``partition_size + 1``).
    """
    source = network.source if source is None else source
    sink = network.sink if sink is None else sink
    return BlockingFlowSolver(network).max_flow(source, sink)
