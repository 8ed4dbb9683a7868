"""Validation functions for player, match, point and set-score input."""

import datetime
from typing import Optional

from .constants import (
    MAX_GAMES,
    MAX_SETS,
    MIN_GAMES,
    PLAYERS_PER_MATCH,
    RESULTS,
    STROKE_GROUPS,
    TEAM_SIZE,
)


def validate_player_name(name: Optional[str]) -> list[str]:
    """
    Validate a new player's name.

    Args:
        name: Name as typed by the user

    Returns:
        List of validation error messages (empty if valid)
    """
    if not name or not name.strip():
        return ['Please enter a player name.']
    return []


def validate_match_setup(
    match_date: Optional[datetime.date],
    location: Optional[str],
    teams: list[list[str]],
    known_player_ids: Optional[set[str]] = None,
) -> list[str]:
    """
    Validate the setup of a new match.

    Checks, in order:
    - A date is set
    - Location is not blank
    - Exactly 4 distinct players are selected
    - Each team has exactly 2 players and no player is on both teams
    - Every selected player exists in the roster (when known_player_ids given)

    Only the first failing check is reported.

    Args:
        match_date: Calendar date of the match
        location: Club or court name
        teams: Two lists of player ids
        known_player_ids: Ids currently in the roster

    Returns:
        List of validation error messages (empty if valid)
    """
    if match_date is None:
        return ['Please set a date.']
    if not location or not location.strip():
        return ['Please enter a location.']

    selected = [pid for team in teams for pid in team if pid]
    if len(set(selected)) != PLAYERS_PER_MATCH:
        return [f'Select exactly {PLAYERS_PER_MATCH} players.']

    if len(teams) != 2 or any(len(team) != TEAM_SIZE for team in teams):
        return [f'Assign {TEAM_SIZE} players to each team.']

    if known_player_ids is not None:
        missing = [pid for pid in selected if pid not in known_player_ids]
        if missing:
            return [f'Unknown players: {", ".join(str(pid) for pid in missing)}']

    return []


def validate_point(
    player_id: Optional[str],
    result: Optional[str],
    stroke: Optional[str],
    match_player_ids: Optional[list[str]] = None,
) -> list[str]:
    """
    Validate a point before it is recorded.

    Args:
        player_id: Player credited with the point
        result: One of RESULTS
        stroke: Stroke name from the stroke table
        match_player_ids: The four players of the match (optional)

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not player_id:
        errors.append('Select a player.')
    elif match_player_ids is not None and player_id not in match_player_ids:
        errors.append(f'Player {player_id} is not playing in this match.')

    if not result:
        errors.append('Select a result.')
    elif result not in RESULTS:
        errors.append(f'Invalid result: {result}')

    if not stroke:
        errors.append('Select a stroke.')
    elif stroke not in STROKE_GROUPS:
        errors.append(f'Invalid stroke: {stroke}')

    return errors


def parse_set_score(value) -> Optional[int]:
    """
    Parse a single set score as typed at the input site.

    Returns None for empty input, the integer for a valid score, and raises
    ValueError for non-numeric or out-of-range input so the caller can reject
    the keystroke without touching the set list.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f'Invalid set score: {value!r}')
    if isinstance(value, int):
        score = value
    else:
        text = str(value).strip()
        if text == '':
            return None
        if not text.isdigit():
            raise ValueError(f'Invalid set score: {value!r}')
        score = int(text)

    if not MIN_GAMES <= score <= MAX_GAMES:
        raise ValueError(f'Set score must be between {MIN_GAMES} and {MAX_GAMES}, got {score}')
    return score


def validate_set_scores(sets: list[tuple[Optional[int], Optional[int]]]) -> list[str]:
    """
    Validate set scores when a match is finished.

    Args:
        sets: One (team 1, team 2) pair per set; None marks an empty field

    Returns:
        List of validation error messages (empty if valid)
    """
    if not sets:
        return ['Enter at least one set.']
    if len(sets) > MAX_SETS:
        return [f'At most {MAX_SETS} sets can be entered.']

    for pair in sets:
        if len(pair) != 2 or any(score is None for score in pair):
            return ['Fill in all set scores.']

    errors = []
    for set_number, pair in enumerate(sets, start=1):
        for score in pair:
            if isinstance(score, bool) or not isinstance(score, int):
                errors.append(f'Set {set_number} has a non-numeric score: {score!r}')
            elif not MIN_GAMES <= score <= MAX_GAMES:
                errors.append(
                    f'Set {set_number} score {score} out of range ({MIN_GAMES}-{MAX_GAMES})'
                )
    return errors
