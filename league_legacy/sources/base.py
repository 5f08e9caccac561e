from __future__ import annotations

import logging
from typing import List, Protocol, Sequence

from league_legacy.models import SeasonRecord

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """A season could not be retrieved or parsed from a source."""

    def __init__(self, year: int, reason: str):
        self.year = year
        self.reason = reason
        super().__init__(f"Season {year} unavailable: {reason}")


class SeasonSource(Protocol):
    name: str

    def fetch_season(self, year: int) -> SeasonRecord:
        """Return the normalized season or raise SourceError."""
        ...


class FallbackSeasonSource:
    """Tries each source in order; the first one that has the season wins."""

    name = "fallback"

    def __init__(self, sources: Sequence[SeasonSource]):
        if not sources:
            raise ValueError("FallbackSeasonSource needs at least one source")
        self.sources = list(sources)

    def fetch_season(self, year: int) -> SeasonRecord:
        reasons: List[str] = []
        for source in self.sources:
            try:
                return source.fetch_season(year)
            except SourceError as e:
                logger.debug(f"{source.name} has no season {year}: {e.reason}")
                reasons.append(f"{source.name}: {e.reason}")
        raise SourceError(year, "; ".join(reasons))
