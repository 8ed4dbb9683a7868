"""Constants and mappings for the padel tracker."""

# Point outcomes, in display order
WINNER = 'Winner'
UNFORCED_ERROR = 'Unforced Error'
FORCED_ERROR = 'Forced Error'

RESULTS = [WINNER, UNFORCED_ERROR, FORCED_ERROR]

RESULT_SHORT = {
    WINNER: 'W',
    UNFORCED_ERROR: 'UE',
    FORCED_ERROR: 'FE',
}

# Reverse mapping
SHORT_TO_RESULT = {v: k for k, v in RESULT_SHORT.items()}

# Stroke names grouped by the side of the body they are played on
STROKES = {
    'Forehand': ['Serve', 'Forehand', 'FH Return', 'FH Lob', 'FH Volley'],
    'Backhand': ['Backhand', 'BH Return', 'BH Lob', 'BH Volley'],
    'Overhead': ['Smash', 'Bandeja', 'Víbora', 'Rulo'],
}

# Stroke name -> group
STROKE_GROUPS = {
    stroke: group for group, strokes in STROKES.items() for stroke in strokes
}

ALL_STROKES = list(STROKE_GROUPS)

# Shown when a player has no strokes for a result, a match has no sets,
# or a stroke is not in the table
NO_VALUE = '—'

# Shown in views for a player id that no longer resolves
UNKNOWN_PLAYER = '?'

# Set scores
MIN_GAMES = 0
MAX_GAMES = 7
MAX_SETS = 3

TEAM_SIZE = 2
PLAYERS_PER_MATCH = 4

# Storage keys, one per top-level collection
PLAYERS_KEY = 'padel:players'
MATCHES_KEY = 'padel:matches'

# Export file names
PLAYER_STATS_FILE = 'padel_player_stats.csv'
MATCH_STATS_FILE = 'padel_match_stats.csv'
POINTS_DETAIL_FILE = 'padel_points_detail.csv'
WORKBOOK_FILE = 'padel_stats.xlsx'

PLAYER_STATS_HEADER = [
    'Player', 'Matches', 'Avg Winners', 'Avg UE', 'Avg FE',
    'Top W Stroke', 'Top UE Stroke', 'Top FE Stroke',
]
MATCH_STATS_HEADER = [
    'Date', 'Location', 'Team 1', 'Team 2', 'Score', 'Total Points', 'W', 'UE', 'FE',
]
POINTS_DETAIL_HEADER = [
    'Match Date', 'Location', 'Team 1', 'Team 2', 'Point #',
    'Player', 'Result', 'Stroke Group', 'Stroke',
]
