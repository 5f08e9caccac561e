"""
Season Aggregator

Folds an ordered sequence of season records into cross-season statistics:
- Member win/loss/tie records and total points
- Head-to-head ledger between every pair of members who have met
- Weekly high scores across all seasons
- Season finishes (final standings rank per member per season)

Scoring rules:
- Higher score wins. Equal scores are a tie only when both are positive;
  a 0-0 matchup counts toward nobody's record but its points still accrue.
- A matchup involving an unattributed team is skipped entirely.
- Each week's high scorer is the first matchup (in matchup order) to reach
  the week's maximum; later equal scores do not displace it.

Output ordering:
- weekly_high_scores: score descending (stable)
- season_finishes: season ascending, then rank ascending (stable)
- member_stats / head_to_head: first-seen order

Usage:
    from league_legacy.league.aggregate import aggregate

    result = aggregate(seasons, overrides)
    payload = result.to_dict()
"""

from __future__ import annotations

import logging
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from league_legacy.data_loader import coerce_score
from league_legacy.identity.resolver import build_member_names, build_team_owner_map
from league_legacy.models import (
    UNKNOWN_MEMBER_NAME,
    AggregateResult,
    HeadToHeadRecord,
    Matchup,
    MemberStats,
    SeasonFinish,
    SeasonRecord,
    WeeklyHighScore,
)

logger = logging.getLogger(__name__)


def is_tie(home_score: float, away_score: float) -> bool:
    """Equal scores count as a tie only when both sides actually scored."""
    return home_score == away_score and home_score > 0 and away_score > 0


def pair_key(member_a: str, member_b: str) -> Tuple[str, str]:
    """Canonical (lower, higher) key for a member pair."""
    return (member_a, member_b) if member_a < member_b else (member_b, member_a)


@dataclass
class _WeekLeader:
    member_id: str
    score: float


@dataclass
class SeasonContext:
    """Lookup tables built once per season before its matchups are folded."""
    year: int
    team_to_member: Dict[int, str]
    member_names: Dict[str, str]
    member_ranks: Dict[str, int]

    @classmethod
    def build(cls, record: SeasonRecord, overrides: Optional[Mapping[str, str]]) -> "SeasonContext":
        team_to_member = build_team_owner_map(record.teams)
        member_ranks: Dict[str, int] = {}
        for team in record.teams:
            owner = team_to_member.get(team.id)
            if owner is not None and team.final_standings_rank:
                member_ranks[owner] = team.final_standings_rank
        return cls(
            year=record.year,
            team_to_member=team_to_member,
            member_names=build_member_names(record.members, overrides),
            member_ranks=member_ranks,
        )

    def name_of(self, member_id: str) -> str:
        return self.member_names.get(member_id) or UNKNOWN_MEMBER_NAME


@dataclass
class Accumulators:
    """All mutable state of one aggregation run. Never shared between runs."""
    member_stats: Dict[str, MemberStats] = field(default_factory=dict)
    head_to_head: Dict[Tuple[str, str], HeadToHeadRecord] = field(default_factory=dict)
    weekly_high_scores: List[WeeklyHighScore] = field(default_factory=list)
    season_finishes: List[SeasonFinish] = field(default_factory=list)

    def stats_for(self, member_id: str, ctx: SeasonContext) -> MemberStats:
        stats = self.member_stats.get(member_id)
        if stats is None:
            stats = MemberStats(
                member_id=member_id,
                member_name=ctx.name_of(member_id),
                final_standings_rank=ctx.member_ranks.get(member_id),
            )
            self.member_stats[member_id] = stats
        return stats

    def ledger_for(self, member_a: str, member_b: str) -> HeadToHeadRecord:
        key = pair_key(member_a, member_b)
        record = self.head_to_head.get(key)
        if record is None:
            record = HeadToHeadRecord(member1=key[0], member2=key[1])
            self.head_to_head[key] = record
        return record

    def to_result(self) -> AggregateResult:
        return AggregateResult(
            member_stats=list(self.member_stats.values()),
            head_to_head=list(self.head_to_head.values()),
            weekly_high_scores=sorted(self.weekly_high_scores, key=lambda w: -w.score),
            season_finishes=sorted(self.season_finishes, key=lambda f: (f.season, f.rank)),
        )


def _record_outcome(
    acc: Accumulators,
    home_id: str,
    away_id: str,
    home_score: float,
    away_score: float,
) -> None:
    home = acc.member_stats[home_id]
    away = acc.member_stats[away_id]
    # a member can own both sides after a mid-season ownership change
    ledger = acc.ledger_for(home_id, away_id) if home_id != away_id else None

    if home_score > away_score:
        home.wins += 1
        away.losses += 1
        winner: Optional[str] = home_id
    elif away_score > home_score:
        away.wins += 1
        home.losses += 1
        winner = away_id
    else:
        winner = None
        if is_tie(home_score, away_score):
            home.ties += 1
            away.ties += 1
            if ledger is not None:
                ledger.ties += 1

    if ledger is not None and winner is not None:
        if winner == ledger.member1:
            ledger.member1_wins += 1
        else:
            ledger.member2_wins += 1

    home.total_points += home_score
    away.total_points += away_score


def fold_season(acc: Accumulators, record: SeasonRecord, overrides: Optional[Mapping[str, str]] = None) -> None:
    """Fold one season into ``acc``."""
    ctx = SeasonContext.build(record, overrides)

    for member_id, rank in ctx.member_ranks.items():
        acc.season_finishes.append(
            SeasonFinish(member_id=member_id, member_name=ctx.name_of(member_id), season=ctx.year, rank=rank)
        )

    week_leaders: Dict[int, _WeekLeader] = {}
    for matchup in record.matchups:
        home_id = ctx.team_to_member.get(matchup.home.team_id)
        away_id = ctx.team_to_member.get(matchup.away.team_id)
        if home_id is None or away_id is None:
            logger.debug(
                f"Skipping {ctx.year} week {matchup.week} matchup "
                f"{matchup.home.team_id} vs {matchup.away.team_id}: unattributed team"
            )
            continue

        _track_week_leader(week_leaders, matchup, home_id, away_id)

        acc.stats_for(home_id, ctx)
        acc.stats_for(away_id, ctx)
        _record_outcome(acc, home_id, away_id, coerce_score(matchup.home.score), coerce_score(matchup.away.score))

    for week, leader in week_leaders.items():
        stats = acc.member_stats[leader.member_id]
        stats.high_scores += 1
        acc.weekly_high_scores.append(
            WeeklyHighScore(
                season=ctx.year,
                week=week,
                member_id=leader.member_id,
                member_name=stats.member_name,
                score=leader.score,
            )
        )


def _track_week_leader(
    week_leaders: Dict[int, _WeekLeader],
    matchup: Matchup,
    home_id: str,
    away_id: str,
) -> None:
    home_score = coerce_score(matchup.home.score)
    away_score = coerce_score(matchup.away.score)
    if home_score >= away_score:
        candidate = _WeekLeader(home_id, home_score)
    else:
        candidate = _WeekLeader(away_id, away_score)

    if candidate.score <= 0:
        return

    current = week_leaders.get(matchup.week)
    if current is None or candidate.score > current.score:
        week_leaders[matchup.week] = candidate


def aggregate(
    seasons: Sequence[SeasonRecord],
    overrides: Optional[Mapping[str, str]] = None,
) -> AggregateResult:
    """
    Aggregate ``seasons`` in the order given.

    ``overrides`` maps member id to a custom display name; missing entries
    (or a missing table) fall back to the source's names.

    Raises TypeError when ``seasons`` is not a sequence of SeasonRecord.
    Data-quality problems inside the records never raise.
    """
    if not isinstance(seasons, SequenceABC) or isinstance(seasons, (str, bytes)):
        raise TypeError(f"seasons must be a sequence of SeasonRecord, got {type(seasons).__name__}")
    for index, record in enumerate(seasons):
        if not isinstance(record, SeasonRecord):
            raise TypeError(f"seasons[{index}] is {type(record).__name__}, expected SeasonRecord")

    acc = Accumulators()
    for record in seasons:
        fold_season(acc, record, overrides)

    logger.debug(
        f"Aggregated {len(seasons)} seasons: {len(acc.member_stats)} members, "
        f"{len(acc.head_to_head)} head-to-head pairs"
    )
    return acc.to_result()
