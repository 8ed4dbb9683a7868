"""In-memory tracker state backed by a key-value store.

PadelTracker reads the player and match collections once when it is created.
Every mutation is validated first, applied to the in-memory lists, and then
the whole affected collection is written back. Storage failures are logged and
otherwise ignored: the in-memory state stays the source of truth for the
session.
"""

import datetime
import json
import logging
from typing import Optional, Sequence

from pydantic import BaseModel, ValidationError

from .constants import MATCHES_KEY, PLAYERS_KEY, UNKNOWN_PLAYER
from .schemas import Match, Player, Point
from .stats import sort_matches
from .storage import Storage
from .validators import (
    parse_set_score,
    validate_match_setup,
    validate_player_name,
    validate_point,
    validate_set_scores,
)

logger = logging.getLogger('padel.tracker')


class TrackerError(Exception):
    """Base class for errors reported back to the user."""


class TrackerValidationError(TrackerError):
    """Input was rejected; nothing was changed."""

    def __init__(self, messages: Sequence[str]):
        self.messages = list(messages)
        super().__init__('; '.join(self.messages))


class NotFoundError(TrackerError):
    """No player or match with the given id."""


class MatchFinishedError(TrackerError):
    """The match is finished and its points and score are locked."""


def validation_messages(error: ValidationError) -> list[str]:
    """One 'Invalid field: reason' line per pydantic error."""
    return [
        f"Invalid {'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


def load_collection(
    storage: Storage,
    key: str,
    schema: type[BaseModel],
    rejected: Optional[list] = None,
) -> list:
    """
    Read one collection from storage.

    A missing value, a read error, malformed JSON or a non-list value all give
    an empty collection. Records that fail validation are skipped.

    Args:
        storage: Storage adapter
        key: Collection key
        schema: Pydantic model for each record
        rejected: If given, skipped raw records are appended here

    Returns:
        List of validated records
    """
    try:
        raw = storage.get(key)
    except Exception as e:
        logger.warning(f'Could not read {key}: {e}')
        return []

    if raw is None:
        return []

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f'Ignoring unparseable data under {key}: {e}')
        return []

    if not isinstance(data, list):
        logger.warning(f'Ignoring {key}: expected a list, got {type(data).__name__}')
        return []

    records = []
    for index, item in enumerate(data):
        try:
            records.append(schema.model_validate(item))
        except ValidationError as e:
            logger.warning(f'Skipping invalid record {index} in {key}: {e}')
            if rejected is not None:
                rejected.append(item)
    return records


class PadelTracker:
    """Players and matches for one user, with validated mutations."""

    def __init__(self, storage: Storage, unknown_player_label: str = UNKNOWN_PLAYER):
        """
        Load both collections from storage.

        Args:
            storage: Storage adapter holding the collections
            unknown_player_label: Name shown for ids no longer in the roster
        """
        self.storage = storage
        self.unknown_player_label = unknown_player_label
        # Records that failed validation, written back untouched on every save
        self._rejected: dict[str, list] = {PLAYERS_KEY: [], MATCHES_KEY: []}
        self.players: list[Player] = load_collection(
            storage, PLAYERS_KEY, Player, self._rejected[PLAYERS_KEY]
        )
        self.matches: list[Match] = load_collection(
            storage, MATCHES_KEY, Match, self._rejected[MATCHES_KEY]
        )
        logger.debug(f'Loaded {len(self.players)} players and {len(self.matches)} matches')

    # --- Persistence ---

    def _save(self, key: str, records: list) -> bool:
        value = json.dumps(
            [r.model_dump(mode='json', by_alias=True) for r in records]
            + self._rejected.get(key, []),
            ensure_ascii=False,
        )
        try:
            saved = self.storage.set(key, value)
        except Exception as e:
            logger.warning(f'Could not save {key}: {e}')
            return False
        if not saved:
            logger.warning(f'Could not save {key}; change is kept for this session only')
        return bool(saved)

    def save_players(self) -> bool:
        return self._save(PLAYERS_KEY, self.players)

    def save_matches(self) -> bool:
        return self._save(MATCHES_KEY, self.matches)

    # --- Lookups ---

    def get_player(self, player_id: str) -> Player:
        for player in self.players:
            if player.id == player_id:
                return player
        raise NotFoundError(f'Player not found: {player_id}')

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def resolve_player(self, ref: str) -> Player:
        """
        Find a player by id, or by name ignoring case.

        Raises:
            NotFoundError: If nothing matches
            TrackerValidationError: If the name matches more than one player
        """
        player = self.find_player(ref)
        if player:
            return player
        matches = [p for p in self.players if p.name.casefold() == ref.strip().casefold()]
        if len(matches) > 1:
            ids = ', '.join(p.id for p in matches)
            raise TrackerValidationError([f'Several players are named {ref}; use an id ({ids})'])
        if not matches:
            raise NotFoundError(f'Player not found: {ref}')
        return matches[0]

    def get_match(self, match_id: str) -> Match:
        for match in self.matches:
            if match.id == match_id:
                return match
        raise NotFoundError(f'Match not found: {match_id}')

    def player_name(self, player_id: str) -> str:
        """Name for a player id, or a fallback label if the player was deleted."""
        player = self.find_player(player_id)
        return player.name if player else self.unknown_player_label

    def team_names(self, match: Match) -> list[str]:
        """Both teams as 'A & B' strings."""
        return [' & '.join(self.player_name(pid) for pid in team) for team in match.teams]

    def sorted_matches(self) -> list[Match]:
        """All matches, newest date first."""
        return sort_matches(self.matches)

    # --- Players ---

    def add_player(self, name: Optional[str]) -> Player:
        """
        Add a player to the roster.

        Raises:
            TrackerValidationError: If the name is empty or whitespace
        """
        errors = validate_player_name(name)
        if errors:
            raise TrackerValidationError(errors)

        player = Player(name=name.strip())
        self.players.append(player)
        self.save_players()
        logger.info(f'Added player {player.name} ({player.id})')
        return player

    def delete_player(self, player_id: str) -> Player:
        """
        Remove a player from the roster.

        Matches that reference the player are left as they are.
        """
        player = self.get_player(player_id)
        self.players = [p for p in self.players if p.id != player_id]
        self.save_players()
        logger.info(f'Deleted player {player.name} ({player.id})')
        return player

    # --- Matches ---

    def create_match(
        self,
        match_date: Optional[datetime.date],
        location: Optional[str],
        teams: list[list[str]],
    ) -> Match:
        """
        Create a match between two teams of two.

        Args:
            match_date: Day the match was played
            location: Club or court
            teams: [[team 1 ids], [team 2 ids]]

        Returns:
            The new match, stored first in the collection

        Raises:
            TrackerValidationError: If the setup is incomplete or inconsistent
        """
        errors = validate_match_setup(
            match_date, location, teams, known_player_ids={p.id for p in self.players}
        )
        if errors:
            raise TrackerValidationError(errors)

        if isinstance(match_date, datetime.datetime):
            match_date = match_date.date()
        try:
            match = Match(
                date=match_date,
                location=location.strip(),
                teams=[list(team) for team in teams],
            )
        except ValidationError as e:
            raise TrackerValidationError(validation_messages(e)) from e
        self.matches.insert(0, match)
        self.save_matches()
        logger.info(f'Created match {match.id} on {match.date} at {match.location}')
        return match

    def delete_match(self, match_id: str) -> Match:
        match = self.get_match(match_id)
        self.matches = [m for m in self.matches if m.id != match_id]
        self.save_matches()
        logger.info(f'Deleted match {match.id}')
        return match

    def _open_match(self, match_id: str) -> Match:
        match = self.get_match(match_id)
        if match.finished:
            raise MatchFinishedError(f'Match {match_id} is finished')
        return match

    def _new_point(
        self,
        match: Match,
        player_id: Optional[str],
        result: Optional[str],
        stroke: Optional[str],
    ) -> Point:
        errors = validate_point(player_id, result, stroke, match.player_ids)
        if errors:
            raise TrackerValidationError(errors)
        try:
            return Point(player_id=player_id, result=result, stroke=stroke)
        except ValidationError as e:
            raise TrackerValidationError(validation_messages(e)) from e

    def record_point(
        self,
        match_id: str,
        player_id: Optional[str],
        result: Optional[str],
        stroke: Optional[str],
    ) -> Point:
        """
        Append a point to a match.

        Raises:
            NotFoundError: If the match doesn't exist
            MatchFinishedError: If the match is finished
            TrackerValidationError: If player, result or stroke is missing or invalid
        """
        match = self._open_match(match_id)
        point = self._new_point(match, player_id, result, stroke)
        match.points.append(point)
        self.save_matches()
        logger.info(
            f'Match {match.id} point {len(match.points)}: '
            f'{self.player_name(point.player_id)} {point.result} ({point.stroke})'
        )
        return point

    def edit_last_point(
        self,
        match_id: str,
        player_id: Optional[str],
        result: Optional[str],
        stroke: Optional[str],
    ) -> Point:
        """Replace the most recent point of a match."""
        match = self._open_match(match_id)
        if not match.points:
            raise TrackerValidationError(['There is no point to edit.'])
        point = self._new_point(match, player_id, result, stroke)
        match.points[-1] = point
        self.save_matches()
        logger.info(f'Match {match.id} point {len(match.points)} edited')
        return point

    def finish_match(self, match_id: str, sets: list[tuple]) -> Match:
        """
        Record the final set scores and lock the match.

        Args:
            match_id: Match to finish
            sets: (team 1, team 2) games per set; values may be ints or
                strings as typed, empty values are reported as missing

        Raises:
            NotFoundError: If the match doesn't exist
            MatchFinishedError: If the match is already finished
            TrackerValidationError: If a score is missing, non-numeric or out of range
        """
        match = self._open_match(match_id)

        parsed = []
        for pair in sets:
            try:
                parsed.append(tuple(parse_set_score(score) for score in pair))
            except ValueError as e:
                raise TrackerValidationError([str(e)]) from e

        errors = validate_set_scores(parsed)
        if errors:
            raise TrackerValidationError(errors)

        match.sets = [(a, b) for a, b in parsed]
        match.finished = True
        self.save_matches()
        score = ', '.join(f'{a}-{b}' for a, b in match.sets)
        logger.info(f'Finished match {match.id}: {score}')
        return match
