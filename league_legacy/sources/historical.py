"""
Historical season files.

Seasons the live API no longer serves are kept on disk as raw ESPN season
documents named season-<year>.json (members, teams, schedule, seasonId).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

from league_legacy.data_loader import SeasonValidationError, load_json, normalize_season
from league_legacy.models import SeasonRecord
from league_legacy.sources.base import SourceError

logger = logging.getLogger(__name__)

SEASON_FILE_PATTERN = re.compile(r"^season-(\d{4})\.json$")


class HistoricalSeasonSource:
    name = "historical"

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, year: int) -> Path:
        return self.directory / f"season-{year}.json"

    def available_years(self) -> List[int]:
        if not self.directory.is_dir():
            return []
        years = []
        for path in self.directory.iterdir():
            match = SEASON_FILE_PATTERN.match(path.name)
            if match:
                years.append(int(match.group(1)))
        return sorted(years)

    def fetch_season(self, year: int) -> SeasonRecord:
        path = self.path_for(year)
        if not path.exists():
            raise SourceError(year, f"no historical file at {path}")

        try:
            raw = load_json(path)
        except (OSError, ValueError) as e:
            raise SourceError(year, f"unreadable historical file {path.name}: {e}") from e

        try:
            record = normalize_season(raw, year, source=self.name)
        except SeasonValidationError as e:
            logger.warning(str(e))
            raise SourceError(year, f"invalid historical file {path.name}") from e

        logger.info(f"Loading season {year} from historical data file")
        return record
