"""Unit tests for the statistics engine."""

import datetime

import pytest

from padel.constants import FORCED_ERROR, NO_VALUE, RESULTS, UNFORCED_ERROR, WINNER
from padel.schemas import Match, Player, Point
from padel.stats import (
    build_player_profile,
    calc_stats,
    match_breakdown,
    per_match_average,
    player_matches,
    result_counts,
)


def pt(player_id, result, stroke='Smash'):
    return Point(player_id=player_id, result=result, stroke=stroke)


def make_match(match_id, day, points=(), teams=(('ana', 'luis'), ('marta', 'jon'))):
    return Match(
        id=match_id,
        date=datetime.date(2026, 3, day),
        location='Club Norte',
        teams=[list(t) for t in teams],
        points=list(points),
    )


class TestTotals:
    """Tests for per-result totals."""

    def test_counts_only_target_player(self):
        """Test that other players' points are ignored."""
        points = [
            pt('ana', WINNER),
            pt('luis', WINNER),
            pt('ana', UNFORCED_ERROR),
            pt('marta', FORCED_ERROR),
            pt('ana', WINNER),
        ]
        stats = calc_stats(points, 'ana')
        assert stats.totals == {WINNER: 2, UNFORCED_ERROR: 1, FORCED_ERROR: 0}

    def test_empty_points(self):
        """Test that every result kind defaults to 0."""
        stats = calc_stats([], 'ana')
        assert stats.totals == {r: 0 for r in RESULTS}
        assert stats.total_points == 0

    def test_totals_partition_player_points(self):
        """Test that totals add up to the player's point count exactly."""
        points = [
            pt('ana', WINNER), pt('ana', FORCED_ERROR), pt('jon', WINNER),
            pt('ana', UNFORCED_ERROR), pt('ana', UNFORCED_ERROR), pt('luis', FORCED_ERROR),
        ]
        stats = calc_stats(points, 'ana')
        assert stats.total_points == sum(1 for p in points if p.player_id == 'ana')
        assert set(stats.totals) == set(RESULTS)

    def test_unknown_player(self):
        """Test a player with no points at all."""
        stats = calc_stats([pt('ana', WINNER)], 'nobody')
        assert stats.total_points == 0


class TestTopStroke:
    """Tests for most-frequent stroke selection."""

    def test_most_frequent_wins(self):
        """Test the stroke with the highest count."""
        points = [
            pt('ana', WINNER, 'Smash'),
            pt('ana', WINNER, 'Bandeja'),
            pt('ana', WINNER, 'Bandeja'),
        ]
        assert calc_stats(points, 'ana').top_stroke(WINNER) == 'Bandeja'

    def test_tie_goes_to_first_seen(self):
        """Test that ties are broken by first occurrence, not by name."""
        points = [
            pt('ana', WINNER, 'Víbora'),
            pt('ana', WINNER, 'Bandeja'),
        ]
        assert calc_stats(points, 'ana').top_stroke(WINNER) == 'Víbora'

    def test_tie_after_counts_even_out(self):
        """Test a tie reached later still favours the earlier stroke."""
        points = [
            pt('ana', UNFORCED_ERROR, 'Serve'),
            pt('ana', UNFORCED_ERROR, 'BH Lob'),
            pt('ana', UNFORCED_ERROR, 'BH Lob'),
            pt('ana', UNFORCED_ERROR, 'Serve'),
        ]
        assert calc_stats(points, 'ana').top_stroke(UNFORCED_ERROR) == 'Serve'

    def test_deterministic(self):
        """Test that repeated runs give the same answer."""
        points = [pt('ana', WINNER, s) for s in ('Rulo', 'Smash', 'Rulo', 'Smash')]
        results = {calc_stats(points, 'ana').top_stroke(WINNER) for _ in range(10)}
        assert results == {'Rulo'}

    def test_no_points_of_kind(self):
        """Test the sentinel for a result with no points."""
        stats = calc_stats([pt('ana', WINNER)], 'ana')
        assert stats.top_stroke(FORCED_ERROR) == NO_VALUE

    def test_per_result_strokes_are_separate(self):
        """Test that strokes are counted per result kind."""
        points = [
            pt('ana', WINNER, 'Smash'),
            pt('ana', UNFORCED_ERROR, 'Bandeja'),
            pt('ana', UNFORCED_ERROR, 'Bandeja'),
        ]
        stats = calc_stats(points, 'ana')
        assert stats.top_stroke(WINNER) == 'Smash'
        assert stats.top_stroke(UNFORCED_ERROR) == 'Bandeja'


class TestAverages:
    """Tests for per-match averages."""

    def test_zero_matches(self):
        """Test that no matches averages to exactly 0.0."""
        assert per_match_average(0, 0) == 0.0

    def test_simple_average(self):
        """Test average over several matches."""
        assert per_match_average(9, 4) == pytest.approx(2.25)

    def test_profile_without_matches(self):
        """Test a profile for a player who never played."""
        player = Player(id='eva', name='Eva')
        profile = build_player_profile(player, [make_match('m1', 1, [pt('ana', WINNER)])])
        assert profile.match_count == 0
        assert profile.averages == {r: 0.0 for r in RESULTS}
        assert profile.top_strokes == {r: NO_VALUE for r in RESULTS}


class TestMatchScope:
    """Tests for profile and per-match scoping."""

    def test_player_matches_newest_first(self):
        """Test match filtering and ordering."""
        matches = [
            make_match('old', 1),
            make_match('other', 9, teams=(('eva', 'luis'), ('marta', 'jon'))),
            make_match('new', 7),
        ]
        assert [m.id for m in player_matches(matches, 'ana')] == ['new', 'old']

    def test_profile_aggregates_all_matches(self):
        """Test totals and averages across two matches."""
        matches = [
            make_match('m1', 1, [pt('ana', WINNER, 'Smash'), pt('ana', WINNER, 'Smash')]),
            make_match('m2', 2, [pt('ana', WINNER, 'Rulo'), pt('ana', UNFORCED_ERROR, 'Serve')]),
        ]
        profile = build_player_profile(Player(id='ana', name='Ana'), matches)
        assert profile.match_count == 2
        assert profile.stats.totals[WINNER] == 3
        assert profile.averages[WINNER] == pytest.approx(1.5)
        assert profile.averages[UNFORCED_ERROR] == pytest.approx(0.5)
        assert profile.top_strokes[WINNER] == 'Smash'
        assert profile.match_ids == ['m2', 'm1']

    def test_match_breakdown(self):
        """Test a single match breakdown for one player."""
        match = make_match('m1', 1, [pt('ana', WINNER), pt('luis', WINNER), pt('ana', FORCED_ERROR)])
        stats = match_breakdown(match, 'luis')
        assert stats.totals == {WINNER: 1, UNFORCED_ERROR: 0, FORCED_ERROR: 0}

    def test_result_counts_all_players(self):
        """Test per-result counts for a whole match."""
        points = [pt('ana', WINNER), pt('luis', WINNER), pt('jon', FORCED_ERROR)]
        assert result_counts(points) == {WINNER: 2, UNFORCED_ERROR: 0, FORCED_ERROR: 1}

    def test_top_stroke_tie_follows_match_order(self):
        """Test that newest_first decides which tied stroke counts first."""
        matches = [
            make_match('old', 1, [pt('ana', WINNER, 'Rulo')]),
            make_match('new', 7, [pt('ana', WINNER, 'Smash')]),
        ]
        player = Player(id='ana', name='Ana')
        assert build_player_profile(player, matches).top_strokes[WINNER] == 'Smash'
        stored_order = build_player_profile(player, matches, newest_first=False)
        assert stored_order.top_strokes[WINNER] == 'Rulo'
        assert stored_order.match_ids == ['new', 'old']
