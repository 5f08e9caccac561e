"""
League History Pipeline

Collects seasons for a year range and folds them into cross-season stats.

A year that no source can provide is logged, listed under ``errors`` and left
out; the rest of the range is still aggregated. If every year fails the
result is a well-formed payload with empty tables.

Usage:
    from league_legacy.pipeline import build_stats, default_source

    payload = build_stats(default_source(), overrides, 2015, 2024)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from tqdm import tqdm

from league_legacy.config import default_year_range, get_config
from league_legacy.league.aggregate import aggregate
from league_legacy.models import SeasonRecord
from league_legacy.sources.base import FallbackSeasonSource, SeasonSource, SourceError
from league_legacy.sources.espn import ESPNClient
from league_legacy.sources.historical import HistoricalSeasonSource

logger = logging.getLogger(__name__)

SEASON_UNAVAILABLE = "Season not available"


@dataclass
class SeasonCollection:
    seasons: List[SeasonRecord] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def years(self) -> List[int]:
        return [s.year for s in self.seasons]


def default_source(config=None) -> SeasonSource:
    """Historical files first; the live ESPN API when credentials are configured."""
    config = config or get_config()
    sources: List[SeasonSource] = [HistoricalSeasonSource(config.historical_dir)]
    if config.has_credentials:
        sources.append(ESPNClient.from_config(config))
    else:
        logger.debug("ESPN credentials not configured; using historical files only")
    return FallbackSeasonSource(sources)


def resolve_year_range(start_year: Optional[int], end_year: Optional[int]) -> Tuple[int, int]:
    default_start, default_end = default_year_range()
    start = default_start if start_year is None else start_year
    end = default_end if end_year is None else end_year
    if start > end:
        raise ValueError(f"start year {start} is after end year {end}")
    return start, end


def collect_seasons(
    source: SeasonSource,
    start_year: int,
    end_year: int,
    progress: bool = False,
) -> SeasonCollection:
    """Fetch every season in [start_year, end_year], one at a time, oldest first."""
    if start_year > end_year:
        raise ValueError(f"start year {start_year} is after end year {end_year}")

    collection = SeasonCollection()
    years = range(start_year, end_year + 1)
    for year in tqdm(years, desc="Seasons", disable=not progress):
        try:
            collection.seasons.append(source.fetch_season(year))
        except SourceError as e:
            logger.warning(f"Failed to fetch season {year}: {e.reason}")
            collection.errors.append({"year": year, "error": SEASON_UNAVAILABLE})

    logger.info(
        f"Collected {len(collection.seasons)} of {len(years)} seasons "
        f"({start_year}-{end_year})"
    )
    return collection


def build_stats(
    source: SeasonSource,
    overrides: Optional[Mapping[str, str]] = None,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    progress: bool = False,
) -> Dict[str, Any]:
    """Collect and aggregate a year range into the dashboard's JSON payload."""
    start, end = resolve_year_range(start_year, end_year)
    collection = collect_seasons(source, start, end, progress=progress)
    payload = aggregate(collection.seasons, overrides).to_dict()
    payload["errors"] = collection.errors
    payload["years"] = collection.years
    return payload
