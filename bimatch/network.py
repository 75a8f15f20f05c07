"""Dense unit-capacity flow network for bipartite matching.

`FlowNetwork` stores residual capacities in a square numpy matrix over
``partition_size + 2`` nodes. Index ``0`` is the synthetic source, indices
``1..partition_size`` are the bipartite nodes (left half first), and index
``partition_size + 1`` is the synthetic sink.

Residual convention: ``capacity[u][v] > 0`` means a directed residual edge
``u -> v`` exists. Reverse entries start at zero and grow only as flow is
pushed forward; they are never derived by negation.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from bimatch.errors import InvalidSizeError
from bimatch.logging import get_logger
from bimatch.types import MatchedPair, MatchingResult

logger = get_logger(__name__)

#: Index reserved for the synthetic source node.
SOURCE_INDEX = 0

#: Capacity of every bipartite and source/sink edge. Matching reads a pair back
#: from a reverse entry equal to this value, so it is not configurable.
UNIT_CAPACITY = 1


class FlowNetwork:
    """Capacity matrix over the bipartite nodes plus a source and a sink.

    The network is filled by the input loader, mutated by the solver while it
    pushes flow, and read afterwards to recover the matching.

    Attributes:
        partition_size: Number of bipartite nodes (both halves together).
        total_nodes: ``partition_size + 2``.
    """

    def __init__(self, partition_size: int) -> None:
        """Allocate an all-zero capacity matrix.

        Args:
            partition_size: Number of bipartite nodes.

        Raises:
            InvalidSizeError: If ``partition_size`` is negative.
        """
        if partition_size < 0:
            raise InvalidSizeError(
                f"Partition size must be non-negative, got {partition_size}."
            )
        self.partition_size = int(partition_size)
        self.total_nodes = self.partition_size + 2
        self._capacity = np.zeros((self.total_nodes, self.total_nodes), dtype=np.int64)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(partition_size={self.partition_size}, "
            f"edges={self.edge_count()})"
        )

    @property
    def half(self) -> int:
        """Size of one partition (left or right)."""
        return self.partition_size // 2

    @property
    def source(self) -> int:
        return SOURCE_INDEX

    @property
    def sink(self) -> int:
        return self.partition_size + 1

    @property
    def left_nodes(self) -> range:
        """Indices of the left partition, ``1..N/2``."""
        return range(1, self.half + 1)

    @property
    def right_nodes(self) -> range:
        """Indices of the right partition, ``N/2+1..N``."""
        return range(self.half + 1, self.partition_size + 1)

    #
    # Construction
    #
    def add_edge(self, u: int, v: int, capacity: int = UNIT_CAPACITY) -> None:
        """Set the capacity of ``u -> v``, overwriting any previous value.

        Indices are not validated here; the loader checks them before wiring.
        """
        self._capacity[u, v] = capacity

    def attach_source_and_sink(
        self,
        source: Optional[int] = None,
        sink: Optional[int] = None,
        capacity: int = UNIT_CAPACITY,
    ) -> None:
        """Connect ``source`` to every left node and every right node to ``sink``.

        Unit capacities on these edges allow each node to be matched at most
        once.

        Args:
            source: Source index (default: 0).
            sink: Sink index (default: ``partition_size + 1``).
            capacity: Capacity of each synthetic edge.

        Raises:
            InvalidSizeError: If the partition size is odd.
        """
        if self.partition_size % 2 != 0:
            raise InvalidSizeError(
                f"Partition size must be even to split into two halves, "
                f"got {self.partition_size}."
            )
        source = self.source if source is None else source
        sink = self.sink if sink is None else sink

        for node in self.left_nodes:
            self.add_edge(source, node, capacity)
        for node in self.right_nodes:
            self.add_edge(node, sink, capacity)
        logger.debug(
            f"Attached source {source} to {len(self.left_nodes)} left nodes and "
            f"{len(self.right_nodes)} right nodes to sink {sink}"
        )

    #
    # Queries
    #
    def capacity(self, u: int, v: int) -> int:
        """Return the residual capacity of ``u -> v``."""
        return int(self._capacity[u, v])

    def neighbors(self, node: int) -> List[int]:
        """Return nodes reachable from ``node`` over positive capacity, ascending."""
        return np.flatnonzero(self._capacity[node] > 0).tolist()

    def edge_count(self) -> int:
        """Return the number of positive entries in the matrix."""
        return int(np.count_nonzero(self._capacity > 0))

    def residual_view(self) -> np.ndarray:
        """Return a read-only view of the capacity matrix."""
        view = self._capacity.view()
        view.flags.writeable = False
        return view

    def residual_mutator(self) -> np.ndarray:
        """Return the live, writable capacity matrix."""
        return self._capacity

    #
    # Result extraction
    #
    def extract_matching(self, names: Optional[Sequence[str]] = None) -> MatchingResult:
        """Read matched pairs from the residual matrix.

        A right node ``r`` is matched to left node ``l`` when the residual
        reverse edge ``r -> l`` holds exactly one unit, which only happens
        after a unit of flow crossed the original edge ``l -> r``.

        Args:
            names: Node names where ``names[i - 1]`` names node ``i``. When
                omitted, node indices are used as names.

        Returns:
            MatchingResult with pairs ordered by left index.
        """
        if names is not None and len(names) != self.partition_size:
            raise ValueError(
                f"Expected {self.partition_size} names, got {len(names)}."
            )

        def name_of(node: int) -> str:
            return str(node) if names is None else names[node - 1]

        pairs: List[MatchedPair] = []
        for left in self.left_nodes:
            for right in self.right_nodes:
                if self._capacity[right, left] == UNIT_CAPACITY:
                    pairs.append(
                        MatchedPair(left, right, name_of(left), name_of(right))
                    )
        return MatchingResult(pairs=tuple(pairs))
