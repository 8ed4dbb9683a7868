from .schemas import Match, Player, Point, TrackerConfig
from .models import PlayerProfile, PointStats
from .stats import (
    calc_stats,
    per_match_average,
    result_counts,
    player_matches,
    match_breakdown,
    build_player_profile,
)
from .storage import JsonFileStorage, MemoryStorage, Storage
from .tracker import (
    PadelTracker,
    TrackerError,
    TrackerValidationError,
    NotFoundError,
    MatchFinishedError,
)
from .export import (
    player_stats_table,
    match_summary_table,
    point_detail_table,
    to_csv,
    write_csv_exports,
    write_workbook,
)

__all__ = [
    # Schemas
    'Match',
    'Player',
    'Point',
    'TrackerConfig',
    # Derived models
    'PlayerProfile',
    'PointStats',
    # Statistics
    'calc_stats',
    'per_match_average',
    'result_counts',
    'player_matches',
    'match_breakdown',
    'build_player_profile',
    # Storage
    'JsonFileStorage',
    'MemoryStorage',
    'Storage',
    # Tracker state
    'PadelTracker',
    'TrackerError',
    'TrackerValidationError',
    'NotFoundError',
    'MatchFinishedError',
    # Export
    'player_stats_table',
    'match_summary_table',
    'point_detail_table',
    'to_csv',
    'write_csv_exports',
    'write_workbook',
]
