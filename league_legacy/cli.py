#!/usr/bin/env python3
"""
League History CLI

Builds the all-time statistics the dashboard displays, and a few per-season
diagnostics for checking source data.

Usage:
    # All-time stats for the default range, written to a file
    league-legacy stats --output public/data/stats.json

    # Restrict the range
    league-legacy stats --start-year 2016 --end-year 2020

    # All-time standings table and head-to-head matrix
    league-legacy standings

    # Championship / last place table
    league-legacy finishes

    # Check one season's weekly high scores by hand
    league-legacy verify --year 2021

    # Quick ingest snapshot of one season
    league-legacy season --year 2024

    # Show detected configuration
    league-legacy config
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from league_legacy.config import get_config, get_detected_env_vars, validate_config
from league_legacy.data_loader import load_member_names, validate_stats
from league_legacy.league.aggregate import aggregate
from league_legacy.league.finishes import summarize_finishes
from league_legacy.league.high_scores import season_high_score_report, season_summary
from league_legacy.league.standings import finish_frame, head_to_head_matrix, standings_frame
from league_legacy.pipeline import build_stats, collect_seasons, default_source, resolve_year_range
from league_legacy.sources.base import SourceError
from league_legacy.sources.historical import HistoricalSeasonSource

logger = logging.getLogger(__name__)


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2))


def cmd_stats(args: argparse.Namespace) -> int:
    config = get_config()
    overrides = load_member_names(config.member_names_path)
    payload = build_stats(
        default_source(config),
        overrides,
        start_year=args.start_year,
        end_year=args.end_year,
        progress=args.progress,
    )

    problems = validate_stats(payload)
    if problems:
        logger.error("Stats output failed validation:\n" + "\n".join(problems))
        return 1

    if args.output:
        write_json(args.output, payload)
        logger.info(f"Wrote {args.output}")
    else:
        print(json.dumps(payload, indent=2))
    return 0


def cmd_finishes(args: argparse.Namespace) -> int:
    config = get_config()
    start, end = resolve_year_range(args.start_year, args.end_year)
    collection = collect_seasons(default_source(config), start, end, progress=args.progress)
    result = aggregate(collection.seasons, load_member_names(config.member_names_path))

    df = finish_frame(summarize_finishes(result.season_finishes))
    if df.empty:
        print("No season finish data available")
    else:
        print(df.drop(columns="memberId").to_string(index=False))
    return 0


def cmd_standings(args: argparse.Namespace) -> int:
    config = get_config()
    start, end = resolve_year_range(args.start_year, args.end_year)
    collection = collect_seasons(default_source(config), start, end, progress=args.progress)
    result = aggregate(collection.seasons, load_member_names(config.member_names_path))

    if not result.member_stats:
        print("No standings data available")
        return 0

    print(standings_frame(result.member_stats).drop(columns="memberId").to_string(index=False))
    print()
    names = {s.member_id: s.member_name for s in result.member_stats}
    print(head_to_head_matrix(result.head_to_head, names).to_string())
    return 0


def _fetch_one(year: int):
    try:
        return default_source().fetch_season(year)
    except SourceError as e:
        logger.error(str(e))
        return None


def cmd_verify(args: argparse.Namespace) -> int:
    record = _fetch_one(args.year)
    if record is None:
        return 1
    overrides = load_member_names(get_config().member_names_path)
    print(json.dumps(season_high_score_report(record, overrides), indent=2))
    return 0


def cmd_season(args: argparse.Namespace) -> int:
    record = _fetch_one(args.year)
    if record is None:
        return 1
    print(json.dumps(season_summary(record), indent=2))
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    config = get_config()
    print("=== Configuration ===\n")
    for key, info in get_detected_env_vars().items():
        if info["configured"]:
            print(f"  {key}: found via {info['var_name']} ({info['preview']})")
        else:
            print(f"  {key}: not configured")
    print(f"  historical_dir: {config.historical_dir}")
    print(f"  member_names_path: {config.member_names_path}")
    years = HistoricalSeasonSource(config.historical_dir).available_years()
    print(f"  historical seasons: {', '.join(map(str, years)) if years else 'none'}")
    print()

    issues = validate_config(config)
    if issues:
        print("Configuration issues:")
        for issue in issues:
            print(f"  - {issue}")
    else:
        print("ESPN credentials and historical data are configured.")
    return 0


def _add_range_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start-year", type=int, default=None, help="First season (inclusive)")
    parser.add_argument("--end-year", type=int, default=None, help="Last season (inclusive)")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar while fetching")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="league-legacy", description="Fantasy league history statistics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("stats", help="Build all-time member, head-to-head and high score stats")
    _add_range_args(p)
    p.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")
    p.set_defaults(func=cmd_stats)

    p = sub.add_parser("standings", help="All-time standings table and head-to-head matrix")
    _add_range_args(p)
    p.set_defaults(func=cmd_standings)

    p = sub.add_parser("finishes", help="Championship, runner-up, third and last place counts")
    _add_range_args(p)
    p.set_defaults(func=cmd_finishes)

    p = sub.add_parser("verify", help="Weekly high score breakdown for one season")
    p.add_argument("--year", type=int, required=True)
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("season", help="Ingest snapshot for one season")
    p.add_argument("--year", type=int, required=True)
    p.set_defaults(func=cmd_season)

    p = sub.add_parser("config", help="Show detected configuration")
    p.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        return args.func(args)
    except ValueError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
