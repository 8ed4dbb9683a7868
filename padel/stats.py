"""Statistics engine: per-player counts and top strokes over point lists.

The same calc_stats() serves both the profile view (all points from all of a
player's matches) and the per-match breakdown (one match's points). Callers
control the scope by choosing which points to pass in.
"""

from typing import Iterable

from .constants import RESULTS
from .models import PlayerProfile, PointStats
from .schemas import Match, Player, Point


def calc_stats(points: Iterable[Point], player_id: str) -> PointStats:
    """
    Count a player's points by result and stroke.

    Args:
        points: Any sequence of points; points of other players are ignored
        player_id: Player to count for

    Returns:
        PointStats with totals for every result kind and stroke counts
    """
    stats = PointStats(player_id=player_id)

    for point in points:
        if point.player_id != player_id:
            continue
        stats.totals[point.result] = stats.totals.get(point.result, 0) + 1
        by_stroke = stats.strokes.setdefault(point.result, {})
        by_stroke[point.stroke] = by_stroke.get(point.stroke, 0) + 1

    return stats


def per_match_average(total: int, match_count: int) -> float:
    """Average per match; a player without matches averages 0.0."""
    return total / max(match_count, 1)


def result_counts(points: Iterable[Point]) -> dict[str, int]:
    """Count points of each result kind, regardless of player."""
    counts = {r: 0 for r in RESULTS}
    for point in points:
        counts[point.result] = counts.get(point.result, 0) + 1
    return counts


def sort_matches(matches: Iterable[Match]) -> list[Match]:
    """Matches by date, newest first. Matches on the same date keep their order."""
    return sorted(matches, key=lambda m: m.date, reverse=True)


def player_matches(matches: Iterable[Match], player_id: str) -> list[Match]:
    """Matches the player took part in, newest first."""
    return sort_matches(m for m in matches if m.has_player(player_id))


def match_breakdown(match: Match, player_id: str) -> PointStats:
    """A player's counts within a single match."""
    return calc_stats(match.points, player_id)


def build_player_profile(
    player: Player,
    matches: Iterable[Match],
    newest_first: bool = True,
) -> PlayerProfile:
    """
    Aggregate a player's stats over every match they played.

    Points are counted newest match first, or in the order given when
    newest_first is False. The order decides top-stroke ties.

    Args:
        player: Player to profile
        matches: All matches; the player's own are picked out here
        newest_first: Sort the player's matches by date before counting

    Returns:
        PlayerProfile with totals, per-match averages and top strokes
    """
    if newest_first:
        own = player_matches(matches, player.id)
    else:
        own = [m for m in matches if m.has_player(player.id)]
    all_points = [point for match in own for point in match.points]
    stats = calc_stats(all_points, player.id)

    return PlayerProfile(
        player_id=player.id,
        name=player.name,
        match_count=len(own),
        stats=stats,
        averages={r: per_match_average(stats.totals[r], len(own)) for r in RESULTS},
        top_strokes={r: stats.top_stroke(r) for r in RESULTS},
        match_ids=[m.id for m in sort_matches(own)],
    )
