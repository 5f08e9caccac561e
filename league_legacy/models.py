"""
League History Data Model

Canonical season records (what a season source produces) and the derived
cross-season records the aggregator emits.

Season records:
    Member, Team, MatchupSide, Matchup, SeasonRecord

Derived records:
    MemberStats, HeadToHeadRecord, WeeklyHighScore, SeasonFinish, FinishSummary

Derived records serialize with camelCase keys via ``to_dict()`` so the output
can be handed straight to the dashboard as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

UNKNOWN_MEMBER_NAME = "Unknown"


# =============================================================================
# SEASON RECORDS
# =============================================================================

@dataclass(frozen=True)
class Member:
    """A league member as reported by a source for one season."""
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "displayName": self.display_name,
        }


@dataclass(frozen=True)
class Team:
    """A season-scoped team. Team ids are only unique within one season."""
    id: int
    season_year: int
    owner_ids: Tuple[str, ...] = ()
    primary_owner_id: Optional[str] = None
    final_standings_rank: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "seasonYear": self.season_year,
            "ownerIds": list(self.owner_ids),
            "primaryOwnerId": self.primary_owner_id,
            "finalStandingsRank": self.final_standings_rank,
        }


@dataclass(frozen=True)
class MatchupSide:
    team_id: int
    score: float = 0.0


@dataclass(frozen=True)
class Matchup:
    """One scheduled game between two teams. Both sides are always present."""
    season_year: int
    week: int
    home: MatchupSide
    away: MatchupSide

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seasonYear": self.season_year,
            "week": self.week,
            "home": {"teamId": self.home.team_id, "score": self.home.score},
            "away": {"teamId": self.away.team_id, "score": self.away.score},
        }


@dataclass(frozen=True)
class SeasonRecord:
    """
    A validated, normalized season.

    ``year`` is the season the caller asked for; ``season_id`` is whatever the
    source reported about itself (historical files sometimes omit it).
    Matchup order is significant: it decides weekly high-score ties.
    """
    year: int
    members: Tuple[Member, ...] = ()
    teams: Tuple[Team, ...] = ()
    matchups: Tuple[Matchup, ...] = ()
    season_id: Optional[int] = None
    source: str = "unknown"


# =============================================================================
# DERIVED RECORDS
# =============================================================================

@dataclass
class MemberStats:
    """
    Cross-season record for one member.

    ``final_standings_rank`` is seeded once, when the accumulator is created,
    from the season that first saw the member. It is not a cross-season rank.
    """
    member_id: str
    member_name: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    total_points: float = 0.0
    high_scores: int = 0
    final_standings_rank: Optional[int] = None

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "memberId": self.member_id,
            "memberName": self.member_name,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "totalPoints": self.total_points,
            "highScores": self.high_scores,
        }
        if self.final_standings_rank is not None:
            payload["finalStandingsRank"] = self.final_standings_rank
        return payload


@dataclass
class HeadToHeadRecord:
    """Pairwise ledger. ``member1 < member2`` always holds."""
    member1: str
    member2: str
    member1_wins: int = 0
    member2_wins: int = 0
    ties: int = 0

    def __post_init__(self) -> None:
        if not self.member1 < self.member2:
            raise ValueError(
                f"head-to-head pair must be ordered: {self.member1!r} >= {self.member2!r}"
            )

    @property
    def key(self) -> Tuple[str, str]:
        return (self.member1, self.member2)

    @property
    def games(self) -> int:
        return self.member1_wins + self.member2_wins + self.ties

    def to_dict(self) -> Dict[str, Any]:
        return {
            "member1": self.member1,
            "member2": self.member2,
            "member1Wins": self.member1_wins,
            "member2Wins": self.member2_wins,
            "ties": self.ties,
        }


@dataclass(frozen=True)
class WeeklyHighScore:
    season: int
    week: int
    member_id: str
    member_name: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "season": self.season,
            "week": self.week,
            "memberId": self.member_id,
            "memberName": self.member_name,
            "score": self.score,
        }


@dataclass(frozen=True)
class SeasonFinish:
    member_id: str
    member_name: str
    season: int
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "memberId": self.member_id,
            "memberName": self.member_name,
            "season": self.season,
            "rank": self.rank,
        }


@dataclass
class FinishSummary:
    """Per-member tally of season-ending placements."""
    member_id: str
    member_name: str
    first: int = 0
    second: int = 0
    third: int = 0
    last: int = 0
    total_seasons: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "memberId": self.member_id,
            "memberName": self.member_name,
            "first": self.first,
            "second": self.second,
            "third": self.third,
            "last": self.last,
            "totalSeasons": self.total_seasons,
        }


@dataclass
class AggregateResult:
    """The four statistic sets produced by one aggregation run."""
    member_stats: List[MemberStats] = field(default_factory=list)
    head_to_head: List[HeadToHeadRecord] = field(default_factory=list)
    weekly_high_scores: List[WeeklyHighScore] = field(default_factory=list)
    season_finishes: List[SeasonFinish] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "memberStats": [s.to_dict() for s in self.member_stats],
            "headToHead": [h.to_dict() for h in self.head_to_head],
            "weeklyHighScores": [w.to_dict() for w in self.weekly_high_scores],
            "seasonFinishes": [f.to_dict() for f in self.season_finishes],
        }
