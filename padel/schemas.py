"""Pydantic schemas for persisted data and configuration."""

import datetime
import random
import string

from pydantic import BaseModel, Field, field_validator

from .constants import MAX_GAMES, MAX_SETS, MIN_GAMES, PLAYERS_PER_MATCH, TEAM_SIZE

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_id() -> str:
    """Generate an 8-character opaque id."""
    return ''.join(random.choices(_ID_ALPHABET, k=8))


class Player(BaseModel):
    """Player in the roster."""

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(..., min_length=1)
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.now, alias='createdAt')

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Ensure the name is not only whitespace."""
        if not v.strip():
            raise ValueError('Player name cannot be blank')
        return v

    class Config:
        extra = 'ignore'
        populate_by_name = True


class Point(BaseModel):
    """A single rally outcome credited to one player."""

    player_id: str = Field(..., min_length=1, alias='playerId')
    result: str = Field(..., pattern=r'^(Winner|Unforced Error|Forced Error)$')
    stroke: str = Field(..., min_length=1)

    class Config:
        extra = 'ignore'
        populate_by_name = True


class Match(BaseModel):
    """A doubles match with its point log and final set scores."""

    id: str = Field(default_factory=new_id, min_length=1)
    date: datetime.date
    location: str = Field(..., min_length=1)
    teams: list[list[str]]
    points: list[Point] = Field(default_factory=list)
    sets: list[tuple[int, int]] = Field(default_factory=list)
    finished: bool = False
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.now, alias='createdAt')

    @field_validator('teams')
    @classmethod
    def validate_teams(cls, v):
        """Ensure two teams of two with no player listed twice."""
        if len(v) != 2 or any(len(team) != TEAM_SIZE for team in v):
            raise ValueError(f'Expected 2 teams of {TEAM_SIZE} players, got {v}')
        if len({pid for team in v for pid in team}) != PLAYERS_PER_MATCH:
            raise ValueError(f'Teams must contain {PLAYERS_PER_MATCH} distinct players')
        return v

    @field_validator('sets')
    @classmethod
    def validate_sets(cls, v):
        """Ensure at most three sets with game counts in range."""
        if len(v) > MAX_SETS:
            raise ValueError(f'At most {MAX_SETS} sets allowed, got {len(v)}')
        for score_a, score_b in v:
            for score in (score_a, score_b):
                if not MIN_GAMES <= score <= MAX_GAMES:
                    raise ValueError(f'Set score out of range: {score}')
        return v

    @property
    def player_ids(self) -> list[str]:
        """All four player ids, team 1 first."""
        return [pid for team in self.teams for pid in team]

    def has_player(self, player_id: str) -> bool:
        return player_id in self.player_ids

    class Config:
        extra = 'ignore'
        populate_by_name = True


class TrackerConfig(BaseModel):
    """Tracker configuration settings."""

    export_dir: str = 'exports'
    log_dir: str = 'logs'
    unknown_player_label: str = Field(default='?', min_length=1)

    class Config:
        extra = 'forbid'
