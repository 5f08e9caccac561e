"""
Season sources.

Each source turns a year into a normalized SeasonRecord or raises SourceError.

Modules:
    base.py - SourceError, SeasonSource protocol, FallbackSeasonSource
    espn.py - live ESPN Fantasy API
    historical.py - season-<year>.json files on disk
"""

from league_legacy.sources.base import FallbackSeasonSource, SeasonSource, SourceError
from league_legacy.sources.espn import ESPNClient
from league_legacy.sources.historical import HistoricalSeasonSource

__all__ = [
    "FallbackSeasonSource",
    "SeasonSource",
    "SourceError",
    "ESPNClient",
    "HistoricalSeasonSource",
]
