"""Plain-text views of the tracker state, as printed by the CLI."""

import datetime

from .constants import RESULT_SHORT, RESULTS, STROKES
from .export import format_sets
from .schemas import Match, Player
from .stats import build_player_profile, match_breakdown
from .tracker import PadelTracker

SEPARATOR = '=' * 60


def format_date(value: datetime.date) -> str:
    """'05 Mar 2026'"""
    return value.strftime('%d %b %Y')


def _counts_line(counts: dict[str, int]) -> str:
    return '  '.join(f'{RESULT_SHORT[r]}: {counts.get(r, 0)}' for r in RESULTS)


def render_players(tracker: PadelTracker) -> str:
    if not tracker.players:
        return 'No players yet. Add one with: players add NAME'
    lines = ['Players', SEPARATOR]
    for player in tracker.players:
        lines.append(f'  {player.id}  {player.name}')
    return '\n'.join(lines)


def _match_header(tracker: PadelTracker, match: Match) -> list[str]:
    team_1, team_2 = tracker.team_names(match)
    lines = [
        f'{format_date(match.date)}  {match.location}  [{match.id}]',
        f'  {team_1} vs {team_2}',
    ]
    if match.sets:
        lines.append(f'  Score: {format_sets(match.sets)}')
    return lines


def render_matches(tracker: PadelTracker) -> str:
    matches = tracker.sorted_matches()
    if not matches:
        return 'No matches yet. Create one with: matches create'
    lines = ['Matches', SEPARATOR]
    for match in matches:
        lines.extend(_match_header(tracker, match))
        status = 'finished' if match.finished else 'in progress'
        lines.append(f'  {len(match.points)} points recorded ({status})')
        lines.append('')
    return '\n'.join(lines).rstrip()


def render_match(tracker: PadelTracker, match: Match) -> str:
    """
    Full match view: header, per-player breakdown and the points log.

    The log is printed newest point first, numbered by recording order.
    """
    lines = _match_header(tracker, match)
    lines.append(f'  Status: {"finished" if match.finished else "in progress"}')
    lines.append('')

    lines.append('Breakdown')
    lines.append(SEPARATOR)
    for player_id in match.player_ids:
        stats = match_breakdown(match, player_id)
        lines.append(f'  {tracker.player_name(player_id):<20} {_counts_line(stats.totals)}')
    lines.append('')

    lines.append(f'Points Log ({len(match.points)})')
    lines.append(SEPARATOR)
    if not match.points:
        lines.append('  No points recorded.')
    for number in range(len(match.points), 0, -1):
        point = match.points[number - 1]
        lines.append(
            f'  #{number:<4} {tracker.player_name(point.player_id):<20} '
            f'{RESULT_SHORT.get(point.result, point.result):<3} {point.stroke}'
        )
    return '\n'.join(lines)


def render_profile(tracker: PadelTracker, player: Player) -> str:
    """Aggregate stats and match history for one player."""
    profile = build_player_profile(player, tracker.matches)

    lines = [player.name, SEPARATOR]
    lines.append(f'Aggregate Stats ({profile.match_count} matches)')
    for result in RESULTS:
        lines.append(
            f'  {result:<16} {profile.averages[result]:.1f} avg / match'
            f'   top stroke: {profile.top_strokes[result]}'
        )
    lines.append('')

    lines.append('Match History')
    lines.append(SEPARATOR)
    own = [tracker.get_match(match_id) for match_id in profile.match_ids]
    if not own:
        lines.append('  No matches yet.')
    for match in own:
        lines.extend(_match_header(tracker, match))
        lines.append(f'  {_counts_line(match_breakdown(match, player.id).totals)}')
        lines.append('')
    return '\n'.join(lines).rstrip()


def render_strokes() -> str:
    lines = []
    for group, strokes in STROKES.items():
        lines.append(f'{group}: {", ".join(strokes)}')
    lines.append(f'Results: {", ".join(f"{r} ({RESULT_SHORT[r]})" for r in RESULTS)}')
    return '\n'.join(lines)
