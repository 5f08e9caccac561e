from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pytest

from league_legacy.models import Matchup, MatchupSide, Member, SeasonRecord, Team


def member(member_id: str, display_name: Optional[str] = None, first: str = "First", last: str = "Last") -> Member:
    return Member(id=member_id, first_name=first, last_name=last, display_name=display_name)


def team(
    team_id: int,
    year: int,
    owner: Optional[str] = None,
    owners: Sequence[str] = (),
    rank: Optional[int] = None,
) -> Team:
    return Team(
        id=team_id,
        season_year=year,
        owner_ids=tuple(owners),
        primary_owner_id=owner,
        final_standings_rank=rank,
    )


def game(year: int, week: int, home: int, home_score: float, away: int, away_score: float) -> Matchup:
    return Matchup(
        season_year=year,
        week=week,
        home=MatchupSide(team_id=home, score=home_score),
        away=MatchupSide(team_id=away, score=away_score),
    )


def season(
    year: int,
    owners: Dict[int, str],
    games: Iterable[Tuple[int, int, float, int, float]],
    ranks: Optional[Dict[int, int]] = None,
    names: Optional[Dict[str, str]] = None,
) -> SeasonRecord:
    """
    Compact season builder.

    ``owners`` maps team id -> member id, ``games`` are
    (week, home_team, home_score, away_team, away_score) tuples.
    """
    ranks = ranks or {}
    names = names or {}
    member_ids: List[str] = []
    for owner in owners.values():
        if owner not in member_ids:
            member_ids.append(owner)
    return SeasonRecord(
        year=year,
        members=tuple(member(m, names.get(m, f"Name {m}")) for m in member_ids),
        teams=tuple(team(tid, year, owner=o, rank=ranks.get(tid)) for tid, o in owners.items()),
        matchups=tuple(game(year, *g) for g in games),
        season_id=year,
    )


def raw_espn_season(year: int = 2021) -> dict:
    """A small ESPN API style season document."""
    return {
        "seasonId": year,
        "members": [
            {"id": "{AAA}", "firstName": "Alice", "lastName": "Adams", "displayName": "alice_a"},
            {"id": "{BBB}", "firstName": "Bob", "lastName": "Brown", "displayName": None},
            {"id": "{CCC}", "firstName": "Cara", "lastName": "Cole", "displayName": "cara"},
        ],
        "teams": [
            {"id": 1, "owners": ["{AAA}"], "primaryOwner": "{AAA}", "rankCalculatedFinal": 2},
            {"id": 2, "owners": ["{BBB}"], "primaryOwner": "", "rankCalculatedFinal": 1},
            {"id": 3, "owners": ["{CCC}"], "rankCalculatedFinal": 0},
        ],
        "schedule": [
            {
                "matchupPeriodId": 1,
                "home": {"teamId": 1, "totalPoints": 101.5},
                "away": {"teamId": 2, "totalPoints": "99.25"},
                "winner": "HOME",
            },
            {"matchupPeriodId": 1, "home": {"teamId": 3, "totalPoints": 88}},
            {
                "matchupPeriodId": 2,
                "home": {"teamId": 2, "totalPoints": None},
                "away": {"teamId": 3, "totalPoints": 120.0},
                "winner": "AWAY",
            },
        ],
    }


@pytest.fixture
def raw_season():
    return raw_espn_season()
