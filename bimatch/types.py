"""Result containers for bipartite matching.

Frozen dataclasses describing the pairs recovered from a solved flow network
and their JSON-friendly representation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from bimatch.config import MATCHER_CONFIG


@dataclass(frozen=True)
class MatchedPair:
    """One left/right pair carrying a unit of flow.

    Attributes:
        left_index: Node index of the left-partition endpoint (``1..N/2``).
        right_index: Node index of the right-partition endpoint (``N/2+1..N``).
        left: Display name of the left endpoint.
        right: Display name of the right endpoint.
    """

    left_index: int
    right_index: int
    left: str
    right: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left_index": self.left_index,
            "right_index": self.right_index,
            "left": self.left,
            "right": self.right,
        }


@dataclass(frozen=True)
class MatchingResult:
    """Maximum matching read back from a residual flow network.

    Attributes:
        pairs: Matched pairs ordered by left index, then right index.
        max_flow: Flow value reported by the solver, when known.
    """

    pairs: Tuple[MatchedPair, ...] = ()
    max_flow: Optional[int] = None

    @property
    def total(self) -> int:
        """Number of matched pairs."""
        return len(self.pairs)

    def lines(self) -> List[str]:
        """Return the console report: one line per pair, then the count line."""
        out = [MATCHER_CONFIG.format_pair(p.left, p.right) for p in self.pairs]
        out.append(MATCHER_CONFIG.format_total(self.total))
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pairs": [p.to_dict() for p in self.pairs],
            "total": self.total,
            "max_flow": self.max_flow,
        }
