"""Tests for the command-line interface."""

import json
import logging

import pytest

from padel.config import clear_config_cache
from padel_tracker import main, parse_result, parse_set, parse_stroke


@pytest.fixture
def data_dir(tmp_path):
    clear_config_cache()
    yield tmp_path / 'data'
    clear_config_cache()
    logger = logging.getLogger('padel')
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []


def run(data_dir, *args):
    return main(['--data-dir', str(data_dir), *args])


def match_id(data_dir):
    matches = json.loads((data_dir / 'padel_matches.json').read_text(encoding='utf-8'))
    return matches[0]['id']


@pytest.fixture
def with_match(data_dir):
    for name in ('Ana', 'Luis', 'Marta', 'Jon'):
        assert run(data_dir, 'players', 'add', name) == 0
    assert run(
        data_dir, 'matches', 'create', '--date', '2026-03-05', '--location', 'Club Norte',
        '--team1', 'Ana', 'Luis', '--team2', 'Marta', 'Jon',
    ) == 0
    return match_id(data_dir)


class TestArgumentParsing:
    """Tests for input helpers."""

    @pytest.mark.parametrize('value,expected', [
        ('W', 'Winner'), ('ue', 'Unforced Error'), ('FE', 'Forced Error'),
        ('winner', 'Winner'), ('forced error', 'Forced Error'), ('Let', 'Let'),
    ])
    def test_parse_result(self, value, expected):
        """Test short and long result names."""
        assert parse_result(value) == expected

    def test_parse_stroke(self):
        """Test case-insensitive stroke names."""
        assert parse_stroke('bh lob') == 'BH Lob'
        assert parse_stroke('VÍBORA') == 'Víbora'
        assert parse_stroke('Drop') == 'Drop'

    def test_parse_set(self):
        """Test splitting set scores."""
        assert parse_set('6-3') == ('6', '3')
        assert parse_set('6') == ('6', '')


class TestCommands:
    """Tests for full command runs against a data directory."""

    def test_players_roundtrip(self, data_dir, capsys):
        """Test adding and listing players."""
        assert run(data_dir, 'players', 'add', 'Ana') == 0
        assert run(data_dir, 'players', 'list') == 0
        assert 'Ana' in capsys.readouterr().out

    def test_blank_player_fails(self, data_dir, capsys):
        """Test that a validation failure exits with 1."""
        assert run(data_dir, 'players', 'add', '  ') == 1
        assert 'Please enter a player name.' in capsys.readouterr().out

    def test_match_flow(self, data_dir, with_match, capsys):
        """Test points, finishing and the match view."""
        assert run(data_dir, 'point', 'add', with_match, 'Ana', 'W', 'bandeja') == 0
        assert run(data_dir, 'point', 'add', with_match, 'Ana', 'W', 'Smash') == 0
        assert run(data_dir, 'point', 'edit-last', with_match, 'Marta', 'UE', 'serve') == 0
        assert run(data_dir, 'finish', with_match, '6-3', '4-6', '7-5') == 0
        capsys.readouterr()

        assert run(data_dir, 'matches', 'show', with_match) == 0
        out = capsys.readouterr().out
        assert 'Points Log (2)' in out
        assert 'Score: 6-3, 4-6, 7-5' in out

        stored = json.loads((data_dir / 'padel_matches.json').read_text(encoding='utf-8'))[0]
        assert stored['finished'] is True
        assert [p['stroke'] for p in stored['points']] == ['Bandeja', 'Serve']

    def test_point_after_finish_fails(self, data_dir, with_match, capsys):
        """Test the lock on finished matches."""
        assert run(data_dir, 'finish', with_match, '6-0') == 0
        assert run(data_dir, 'point', 'add', with_match, 'Ana', 'W', 'Smash') == 1
        assert 'finished' in capsys.readouterr().out

    def test_bad_set_score_fails(self, data_dir, with_match):
        """Test a set score above 7."""
        assert run(data_dir, 'finish', with_match, '9-3') == 1

    def test_uneven_teams_fail(self, data_dir, capsys):
        """Test a 3/1 team split from the command line."""
        for name in ('Ana', 'Luis', 'Marta', 'Jon'):
            run(data_dir, 'players', 'add', name)
        assert run(
            data_dir, 'matches', 'create', '--location', 'Club Norte',
            '--team1', 'Ana', 'Luis', 'Marta', '--team2', 'Jon',
        ) == 1
        assert 'Assign 2 players to each team.' in capsys.readouterr().out

    def test_profile(self, data_dir, with_match, capsys):
        """Test the player profile view."""
        run(data_dir, 'point', 'add', with_match, 'Ana', 'W', 'Rulo')
        capsys.readouterr()
        assert run(data_dir, 'players', 'show', 'ana') == 0
        out = capsys.readouterr().out
        assert 'Aggregate Stats (1 matches)' in out
        assert 'top stroke: Rulo' in out

    def test_export(self, data_dir, with_match, tmp_path):
        """Test CSV and workbook export."""
        run(data_dir, 'point', 'add', with_match, 'Jon', 'FE', 'FH Lob')
        out_dir = tmp_path / 'out'
        assert run(
            data_dir, 'export', '--dir', str(out_dir), '--xlsx', str(out_dir / 'stats.xlsx'),
        ) == 0
        assert sorted(p.name for p in out_dir.iterdir()) == [
            'padel_match_stats.csv',
            'padel_player_stats.csv',
            'padel_points_detail.csv',
            'stats.xlsx',
        ]
        detail = (out_dir / 'padel_points_detail.csv').read_text(encoding='utf-8')
        assert '"Jon","Forced Error","Forehand","FH Lob"' in detail

    def test_unknown_match(self, data_dir, capsys):
        """Test showing a match that doesn't exist."""
        assert run(data_dir, 'matches', 'show', 'nope') == 1
        assert 'Match not found' in capsys.readouterr().out
