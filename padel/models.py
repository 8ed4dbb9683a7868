"""Data models for derived statistics."""

from dataclasses import dataclass, field
from typing import Dict, List

from .constants import NO_VALUE, RESULTS


@dataclass
class PointStats:
    """Container for one player's counts over a set of points."""
    player_id: str
    totals: Dict[str, int] = field(default_factory=lambda: {r: 0 for r in RESULTS})
    # strokes[result][stroke] = count, in first-encountered order
    strokes: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def top_stroke(self, result: str) -> str:
        """
        Most frequent stroke for a result kind.

        Ties go to the stroke seen first. Returns NO_VALUE when the player
        has no points of that kind.
        """
        counts = self.strokes.get(result)
        if not counts:
            return NO_VALUE
        return max(counts.items(), key=lambda item: item[1])[0]

    @property
    def total_points(self) -> int:
        return sum(self.totals.values())


@dataclass
class PlayerProfile:
    """Aggregate stats for a player across all of their matches."""
    player_id: str
    name: str
    match_count: int
    stats: PointStats
    averages: Dict[str, float] = field(default_factory=dict)
    top_strokes: Dict[str, str] = field(default_factory=dict)
    match_ids: List[str] = field(default_factory=list)  # newest first
