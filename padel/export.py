"""Tabular reports over players and matches, and their CSV/xlsx output.

Each report is a list of rows, header first. Cells are plain values; to_csv()
turns a table into the quoted text format spreadsheet tools import.
"""

import logging
from pathlib import Path
from typing import Any, Sequence

import openpyxl
from openpyxl.styles import Font

from .constants import (
    FORCED_ERROR,
    MATCH_STATS_FILE,
    MATCH_STATS_HEADER,
    NO_VALUE,
    PLAYER_STATS_FILE,
    PLAYER_STATS_HEADER,
    POINTS_DETAIL_FILE,
    POINTS_DETAIL_HEADER,
    RESULTS,
    STROKE_GROUPS,
    UNFORCED_ERROR,
    WINNER,
)
from .schemas import Match, Player
from .stats import build_player_profile, result_counts, sort_matches
from .utils import write_text_atomic

logger = logging.getLogger('padel.export')

Table = list[list[Any]]


def _name_lookup(players: Sequence[Player]):
    """Id -> name, falling back to the id itself for deleted players."""
    names = {p.id: p.name for p in players}
    return lambda player_id: names.get(player_id, player_id)


def format_sets(sets: Sequence[Sequence[int]], separator: str = ', ') -> str:
    """'6-3, 4-6, 7-5', or NO_VALUE when no sets were entered."""
    if not sets:
        return NO_VALUE
    return separator.join(f'{a}-{b}' for a, b in sets)


def stroke_group(stroke: str) -> str:
    return STROKE_GROUPS.get(stroke, NO_VALUE)


def player_stats_table(players: Sequence[Player], matches: Sequence[Match]) -> Table:
    """
    One row per player: match count, per-match averages and top strokes.

    Averages are formatted with 2 decimals. Points are counted in collection
    order, so top-stroke ties go to the stroke stored first.
    """
    rows: Table = [list(PLAYER_STATS_HEADER)]
    for player in players:
        profile = build_player_profile(player, matches, newest_first=False)
        rows.append(
            [player.name, profile.match_count]
            + [f'{profile.averages[r]:.2f}' for r in RESULTS]
            + [profile.top_strokes[r] for r in RESULTS]
        )
    return rows


def match_summary_table(players: Sequence[Player], matches: Sequence[Match]) -> Table:
    """One row per match, newest first, with score and result counts."""
    name = _name_lookup(players)
    rows: Table = [list(MATCH_STATS_HEADER)]
    for match in sort_matches(matches):
        team_1, team_2 = (' & '.join(name(pid) for pid in team) for team in match.teams)
        counts = result_counts(match.points)
        rows.append([
            match.date.isoformat(),
            match.location,
            team_1,
            team_2,
            format_sets(match.sets),
            len(match.points),
            counts[WINNER],
            counts[UNFORCED_ERROR],
            counts[FORCED_ERROR],
        ])
    return rows


def point_detail_table(players: Sequence[Player], matches: Sequence[Match]) -> Table:
    """
    One row per recorded point across all matches.

    Matches are ordered newest first; points keep their recorded order and
    are numbered from 1 within each match.
    """
    name = _name_lookup(players)
    rows: Table = [list(POINTS_DETAIL_HEADER)]
    for match in sort_matches(matches):
        team_1, team_2 = (' & '.join(name(pid) for pid in team) for team in match.teams)
        for number, point in enumerate(match.points, start=1):
            rows.append([
                match.date.isoformat(),
                match.location,
                team_1,
                team_2,
                number,
                name(point.player_id),
                point.result,
                stroke_group(point.stroke),
                point.stroke,
            ])
    return rows


def to_csv(rows: Table) -> str:
    """
    Serialize a table as delimited text.

    Every cell is wrapped in double quotes and embedded quotes are doubled.
    Rows are separated by a newline, with no newline after the last row.
    """
    def quote(cell: Any) -> str:
        return '"' + str(cell).replace('"', '""') + '"'

    return '\n'.join(','.join(quote(cell) for cell in row) for row in rows)


def build_reports(players: Sequence[Player], matches: Sequence[Match]) -> dict[str, Table]:
    """All three reports keyed by export file name."""
    return {
        PLAYER_STATS_FILE: player_stats_table(players, matches),
        MATCH_STATS_FILE: match_summary_table(players, matches),
        POINTS_DETAIL_FILE: point_detail_table(players, matches),
    }


def write_csv_exports(
    players: Sequence[Player],
    matches: Sequence[Match],
    export_dir: Path | str,
) -> list[Path]:
    """
    Write the three CSV reports as UTF-8 files.

    Args:
        players: Current roster
        matches: All matches
        export_dir: Directory for the files (created if missing)

    Returns:
        Paths of the written files
    """
    export_dir = Path(export_dir)
    paths = []
    for filename, table in build_reports(players, matches).items():
        path = export_dir / filename
        write_text_atomic(path, to_csv(table))
        logger.info(f'Wrote {len(table) - 1} rows to {path}')
        paths.append(path)
    return paths


def write_workbook(
    players: Sequence[Player],
    matches: Sequence[Match],
    path: Path | str,
) -> Path:
    """
    Write the three reports as sheets of one Excel workbook.

    Args:
        players: Current roster
        matches: All matches
        path: Destination .xlsx file

    Returns:
        Path of the written workbook
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    sheet_titles = {
        PLAYER_STATS_FILE: 'Player Stats',
        MATCH_STATS_FILE: 'Matches',
        POINTS_DETAIL_FILE: 'Points',
    }

    wb = openpyxl.Workbook()
    wb.remove(wb.active)

    for filename, table in build_reports(players, matches).items():
        ws = wb.create_sheet(sheet_titles[filename])
        for row in table:
            ws.append(row)
        for cell in ws[1]:
            cell.font = Font(bold=True)
        ws.freeze_panes = 'A2'

    wb.save(str(path))
    logger.info(f'Wrote workbook {path}')
    return path
