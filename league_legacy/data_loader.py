from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import Draft202012Validator

from league_legacy.data_schemas import (
    ESPN_MATCHUP_SCHEMA,
    ESPN_MEMBER_SCHEMA,
    ESPN_SEASON_SCHEMA,
    ESPN_TEAM_SCHEMA,
    STATS_SCHEMA,
)
from league_legacy.models import Matchup, MatchupSide, Member, SeasonRecord, Team

logger = logging.getLogger(__name__)

JsonDict = Dict[str, Any]

SEASON_VALIDATOR = Draft202012Validator(ESPN_SEASON_SCHEMA)
STATS_VALIDATOR = Draft202012Validator(STATS_SCHEMA)
MEMBER_VALIDATOR = Draft202012Validator(ESPN_MEMBER_SCHEMA)
TEAM_VALIDATOR = Draft202012Validator(ESPN_TEAM_SCHEMA)
MATCHUP_VALIDATOR = Draft202012Validator(ESPN_MATCHUP_SCHEMA)


class SeasonValidationError(ValueError):
    """A raw season payload does not have the expected ESPN shape."""

    def __init__(self, year: int, details: List[str]):
        self.year = year
        self.details = details
        super().__init__(f"Schema validation failed for {year}:\n" + "\n".join(details))


def load_json(path: Path) -> Any:
    """Load JSON from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def load_member_names(path: Optional[Path]) -> Dict[str, str]:
    """
    Load the custom member name table (member id -> display name).

    A missing or unreadable file is not an error: the dashboard simply shows
    the names the source reports.
    """
    if path is None or not path.exists():
        return {}
    try:
        raw = load_json(path)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load member names from {path}: {e}")
        return {}

    if not isinstance(raw, dict):
        logger.warning(f"Ignoring member names in {path}: expected an object, got {type(raw).__name__}")
        return {}
    return {str(k): v for k, v in raw.items() if isinstance(v, str) and v}


def validate_raw_season(payload: Any, year: int) -> None:
    """Raise SeasonValidationError if ``payload`` is not an ESPN season document."""
    errors = sorted(SEASON_VALIDATOR.iter_errors(payload), key=lambda e: list(e.path))
    if errors:
        raise SeasonValidationError(year, [f"- {list(e.path)}: {e.message}" for e in errors])


def validate_stats(payload: JsonDict) -> List[str]:
    """Validate aggregated stats output; returns a list of problems (empty when valid)."""
    errors = sorted(STATS_VALIDATOR.iter_errors(payload), key=lambda e: list(e.path))
    return [f"- {list(e.path)}: {e.message}" for e in errors]


def coerce_score(value: Any) -> float:
    """Numeric score or 0.0 for anything missing or non-numeric."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    return score if math.isfinite(score) else 0.0


def _owner_ids(raw_owners: Any) -> Tuple[str, ...]:
    # positions are kept: an empty or malformed first owner leaves the team unattributed
    owners: List[str] = []
    for owner in raw_owners or []:
        if isinstance(owner, dict):
            owner = owner.get("id")
        owners.append(owner if isinstance(owner, str) else "")
    return tuple(owners)


def _final_rank(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _valid_entries(
    raw_entries: Optional[List[Any]],
    validator: Draft202012Validator,
    kind: str,
    year: Optional[int] = None,
) -> List[JsonDict]:
    """Entries that match ``validator``; the rest are dropped and logged."""
    valid: List[JsonDict] = []
    for index, entry in enumerate(raw_entries or []):
        error = next(validator.iter_errors(entry), None)
        if error is not None:
            where = f" for {year}" if year is not None else ""
            logger.debug(f"Dropping {kind} {index}{where}: {list(error.path)}: {error.message}")
            continue
        valid.append(entry)
    return valid


def normalize_members(raw_members: Optional[List[JsonDict]], year: Optional[int] = None) -> Tuple[Member, ...]:
    return tuple(
        Member(
            id=m["id"],
            first_name=m.get("firstName"),
            last_name=m.get("lastName"),
            display_name=m.get("displayName"),
        )
        for m in _valid_entries(raw_members, MEMBER_VALIDATOR, "member", year)
    )


def normalize_teams(raw_teams: Optional[List[JsonDict]], year: int) -> Tuple[Team, ...]:
    return tuple(
        Team(
            id=t["id"],
            season_year=year,
            owner_ids=_owner_ids(t.get("owners")),
            primary_owner_id=t.get("primaryOwner") or None,
            final_standings_rank=_final_rank(t.get("rankCalculatedFinal")),
        )
        for t in _valid_entries(raw_teams, TEAM_VALIDATOR, "team", year)
    )


def normalize_matchups(raw_schedule: Optional[List[JsonDict]], year: int) -> Tuple[Matchup, ...]:
    """Keep well-formed schedule entries with both sides present; everything else is dropped."""
    matchups: List[Matchup] = []
    dropped = 0
    for match in _valid_entries(raw_schedule, MATCHUP_VALIDATOR, "schedule entry", year):
        home, away = match.get("home"), match.get("away")
        week = match.get("matchupPeriodId")
        if (
            not home
            or not away
            or home.get("teamId") is None
            or away.get("teamId") is None
            or week is None
        ):
            dropped += 1
            continue
        matchups.append(
            Matchup(
                season_year=year,
                week=week,
                home=MatchupSide(team_id=home["teamId"], score=coerce_score(home.get("totalPoints"))),
                away=MatchupSide(team_id=away["teamId"], score=coerce_score(away.get("totalPoints"))),
            )
        )
    if dropped:
        logger.debug(f"Dropped {dropped} incomplete schedule entries for {year}")
    return tuple(matchups)


def normalize_season(raw: Any, year: int, source: str = "unknown") -> SeasonRecord:
    """
    Validate a raw ESPN season document and convert it to a SeasonRecord.

    Only the document's overall shape is fatal. Individual members, teams and
    schedule entries that are malformed are dropped.

    ``year`` is the season that was requested; the payload's own ``seasonId``
    is kept alongside for reference.
    """
    validate_raw_season(raw, year)
    return SeasonRecord(
        year=year,
        members=normalize_members(raw.get("members"), year),
        teams=normalize_teams(raw.get("teams"), year),
        matchups=normalize_matchups(raw.get("schedule"), year),
        season_id=raw.get("seasonId"),
        source=source,
    )
