"""
ESPN Fantasy Football API client.

Reads a private league's season data with the espn_s2 / SWID cookies and
returns it as a normalized SeasonRecord.

Usage:
    from league_legacy.sources.espn import ESPNClient

    client = ESPNClient.from_config()
    record = client.fetch_season(2024)
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import requests

from league_legacy.config import get_config
from league_legacy.data_loader import SeasonValidationError, normalize_season
from league_legacy.models import SeasonRecord
from league_legacy.sources.base import SourceError

logger = logging.getLogger(__name__)

BASE_URL = "https://lm-api-reads.fantasy.espn.com/apis/v3/games/ffl/seasons/{year}/segments/0/leagues/{league_id}"
USER_AGENT = "league-legacy/1.0"
DEFAULT_TIMEOUT = 30

FULL_SEASON_VIEWS = ("mSettings", "mTeam", "mMatchup", "mMatchupScore", "mStandings")


class ESPNClient:
    name = "espn"

    def __init__(
        self,
        league_id: str,
        espn_s2: str,
        swid: str,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.league_id = league_id
        self.espn_s2 = espn_s2
        self.swid = swid
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": USER_AGENT,
            "Cookie": f"espn_s2={espn_s2}; SWID={swid}",
        })

    @classmethod
    def from_config(cls, config=None, session: Optional[requests.Session] = None) -> "ESPNClient":
        config = config or get_config()
        if not config.has_credentials:
            raise ValueError("ESPN league id, espn_s2 and SWID must all be configured")
        return cls(config.league_id, config.espn_s2, config.swid, session=session)

    def url_for(self, year: int) -> str:
        return BASE_URL.format(year=year, league_id=self.league_id)

    def fetch_raw(self, year: int, views: Sequence[str] = FULL_SEASON_VIEWS) -> Any:
        """GET the league document for ``year`` with the given views."""
        url = self.url_for(year)
        try:
            r = self.session.get(url, params={"view": list(views)}, timeout=self.timeout)
            r.raise_for_status()
            return r.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise SourceError(year, f"ESPN API error: HTTP {status}") from e
        except ValueError as e:
            raise SourceError(year, f"ESPN API returned invalid JSON: {e}") from e
        except requests.RequestException as e:
            raise SourceError(year, f"ESPN API request failed: {e}") from e

    def fetch_season(self, year: int) -> SeasonRecord:
        raw = self.fetch_raw(year)
        try:
            record = normalize_season(raw, year, source=self.name)
        except SeasonValidationError as e:
            logger.warning(str(e))
            raise SourceError(year, "ESPN API returned an unexpected season document") from e

        logger.info(f"Loaded season {year} from ESPN API")
        return record
