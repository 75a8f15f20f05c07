"""Configuration for the bipartite matcher and its console output."""

from dataclasses import dataclass


@dataclass
class MatcherConfig:
    """Defaults shared by the loader, the matcher and the CLI."""

    # Input file read when the CLI is invoked without a path
    default_input: str = "program3data.txt"

    # Separator between the left and right name of a matched pair
    pair_separator: str = " / "

    # Trailing text of the summary line
    total_suffix: str = "total matches"

    def format_pair(self, left: str, right: str) -> str:
        """Return one output line for a matched pair."""
        return f"{left}{self.pair_separator}{right}"

    def format_total(self, count: int) -> str:
        """Return the summary line for ``count`` matched pairs."""
        return f"{count} {self.total_suffix}"


# Global configuration instance
MATCHER_CONFIG = MatcherConfig()
