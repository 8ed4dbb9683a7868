#!/usr/bin/env python3
"""
Padel Tracker CLI

Records padel matches point by point and exports statistics.
Players and matches are stored as JSON in the data directory
(default ./data, or $PADEL_DATA_DIR).

Usage:
    python padel_tracker.py players add "Ana"
    python padel_tracker.py matches create --date 2026-03-05 --location "Club Norte" \\
        --team1 Ana Luis --team2 Marta Jon
    python padel_tracker.py point add MATCH_ID Ana W Bandeja
    python padel_tracker.py finish MATCH_ID 6-3 4-6 7-5
    python padel_tracker.py export --dir exports --xlsx
"""

import argparse
import datetime
import logging
import sys
from pathlib import Path

from padel import JsonFileStorage, PadelTracker, write_csv_exports, write_workbook
from padel.config import default_data_dir, get_config
from padel.constants import ALL_STROKES, RESULTS, SHORT_TO_RESULT, WORKBOOK_FILE
from padel.logging_config import setup_logging
from padel.report import (
    render_match,
    render_matches,
    render_players,
    render_profile,
    render_strokes,
)
from padel.tracker import TrackerError, TrackerValidationError


def parse_result(value: str) -> str:
    """Accept 'Winner', 'winner' or 'W'; unknown values pass through for validation."""
    text = value.strip()
    if text.upper() in SHORT_TO_RESULT:
        return SHORT_TO_RESULT[text.upper()]
    for result in RESULTS:
        if result.casefold() == text.casefold():
            return result
    return text


def parse_stroke(value: str) -> str:
    """Match a stroke name ignoring case; unknown values pass through for validation."""
    text = value.strip()
    for stroke in ALL_STROKES:
        if stroke.casefold() == text.casefold():
            return stroke
    return text


def parse_set(value: str) -> tuple[str, str]:
    """Split '6-3' into its two scores; a missing side comes back empty."""
    team_1, _, team_2 = value.partition('-')
    return team_1.strip(), team_2.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Padel match tracker and statistics")
    parser.add_argument(
        "--data-dir", "-d",
        default=None,
        help="Path to data directory (default: $PADEL_DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show info messages",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only show errors",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # players
    players = sub.add_parser("players", help="Manage the player roster")
    players_sub = players.add_subparsers(dest="action", required=True)
    players_sub.add_parser("list", help="List players")
    p = players_sub.add_parser("add", help="Add a player")
    p.add_argument("name")
    p = players_sub.add_parser("delete", help="Delete a player (matches keep their points)")
    p.add_argument("player", help="Player id or name")
    p = players_sub.add_parser("show", help="Show a player's profile")
    p.add_argument("player", help="Player id or name")

    # matches
    matches = sub.add_parser("matches", help="Manage matches")
    matches_sub = matches.add_subparsers(dest="action", required=True)
    matches_sub.add_parser("list", help="List matches, newest first")
    p = matches_sub.add_parser("create", help="Create a match")
    p.add_argument(
        "--date",
        default=datetime.date.today().isoformat(),
        help="Match date, YYYY-MM-DD (default: today)",
    )
    p.add_argument("--location", "-l", required=True, help="Club or court")
    p.add_argument("--team1", nargs="+", required=True, metavar="PLAYER")
    p.add_argument("--team2", nargs="+", required=True, metavar="PLAYER")
    p = matches_sub.add_parser("delete", help="Delete a match")
    p.add_argument("match", help="Match id")
    p = matches_sub.add_parser("show", help="Show a match and its points log")
    p.add_argument("match", help="Match id")

    # point
    point = sub.add_parser("point", help="Record points")
    point_sub = point.add_subparsers(dest="action", required=True)
    for name, help_text in (("add", "Record the next point"), ("edit-last", "Replace the last point")):
        p = point_sub.add_parser(name, help=help_text)
        p.add_argument("match", help="Match id")
        p.add_argument("player", help="Player id or name")
        p.add_argument("result", help="Winner/W, Unforced Error/UE, Forced Error/FE")
        p.add_argument("stroke", help="Stroke name (see: strokes)")

    # finish
    p = sub.add_parser("finish", help="Enter set scores and finish a match")
    p.add_argument("match", help="Match id")
    p.add_argument("sets", nargs="+", metavar="SET", help="Set score such as 6-3 (up to 3)")

    # export
    p = sub.add_parser("export", help="Write CSV reports")
    p.add_argument("--dir", default=None, help="Output directory (default: config export_dir)")
    p.add_argument(
        "--xlsx",
        nargs="?",
        const=WORKBOOK_FILE,
        default=None,
        help=f"Also write all reports to one workbook (default name: {WORKBOOK_FILE})",
    )

    sub.add_parser("strokes", help="List strokes and results")

    return parser


def run(args: argparse.Namespace, tracker: PadelTracker, export_dir: Path) -> None:
    """Dispatch one parsed command. Raises TrackerError on rejected input."""
    if args.command == "players":
        if args.action == "list":
            print(render_players(tracker))
        elif args.action == "add":
            player = tracker.add_player(args.name)
            print(f"✅ Added {player.name} ({player.id})")
        elif args.action == "delete":
            player = tracker.delete_player(tracker.resolve_player(args.player).id)
            print(f"🗑️  Deleted {player.name}")
        elif args.action == "show":
            print(render_profile(tracker, tracker.resolve_player(args.player)))

    elif args.command == "matches":
        if args.action == "list":
            print(render_matches(tracker))
        elif args.action == "create":
            try:
                match_date = datetime.date.fromisoformat(args.date) if args.date else None
            except ValueError as e:
                raise TrackerValidationError([f"Invalid date {args.date!r}: use YYYY-MM-DD"]) from e
            teams = [
                [tracker.resolve_player(ref).id for ref in args.team1],
                [tracker.resolve_player(ref).id for ref in args.team2],
            ]
            match = tracker.create_match(match_date, args.location, teams)
            print(f"✅ Created match {match.id}")
        elif args.action == "delete":
            match = tracker.delete_match(args.match)
            print(f"🗑️  Deleted match {match.id}")
        elif args.action == "show":
            print(render_match(tracker, tracker.get_match(args.match)))

    elif args.command == "point":
        player = tracker.resolve_player(args.player)
        result = parse_result(args.result)
        stroke = parse_stroke(args.stroke)
        if args.action == "add":
            tracker.record_point(args.match, player.id, result, stroke)
            count = len(tracker.get_match(args.match).points)
            print(f"✅ Point {count}: {player.name} {result} ({stroke})")
        else:
            tracker.edit_last_point(args.match, player.id, result, stroke)
            print(f"✅ Last point updated: {player.name} {result} ({stroke})")

    elif args.command == "finish":
        match = tracker.finish_match(args.match, [parse_set(s) for s in args.sets])
        score = ", ".join(f"{a}-{b}" for a, b in match.sets)
        print(f"✅ Match finished: {score}")

    elif args.command == "export":
        out_dir = Path(args.dir) if args.dir else export_dir
        for path in write_csv_exports(tracker.players, tracker.matches, out_dir):
            print(f"✅ {path}")
        if args.xlsx:
            workbook = write_workbook(tracker.players, tracker.matches, out_dir / args.xlsx)
            print(f"✅ {workbook}")

    elif args.command == "strokes":
        print(render_strokes())


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    data_dir = Path(args.data_dir) if args.data_dir else default_data_dir()
    config = get_config(data_dir)

    if args.quiet:
        level = logging.ERROR
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    setup_logging(log_dir=data_dir / config.log_dir, level=level)

    tracker = PadelTracker(
        JsonFileStorage(data_dir),
        unknown_player_label=config.unknown_player_label,
    )

    try:
        run(args, tracker, data_dir / config.export_dir)
    except TrackerValidationError as e:
        for message in e.messages:
            print(f"❌ {message}")
        return 1
    except TrackerError as e:
        print(f"❌ {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
