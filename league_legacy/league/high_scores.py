"""
Weekly High Score Audit

Single-season breakdown of who topped each week, with every positive score
that week listed so the cross-season leaderboard can be checked by hand.
Also provides a quick ingest snapshot for one season.

Usage:
    from league_legacy.league.high_scores import season_high_score_report

    report = season_high_score_report(record, overrides)
    for week in report["weeklyWinners"]:
        print(week["week"], week["memberName"], week["score"])
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Mapping, Optional

from league_legacy.identity.resolver import build_member_names, build_team_owner_map
from league_legacy.models import UNKNOWN_MEMBER_NAME, SeasonRecord


def season_high_score_report(
    record: SeasonRecord,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Weekly winners for one season plus a per-member count of weeks won."""
    team_to_member = build_team_owner_map(record.teams)
    names = build_member_names(record.members, overrides)

    def name_of(member_id: str) -> str:
        return names.get(member_id) or UNKNOWN_MEMBER_NAME

    scores_by_week: Dict[int, List[Dict[str, Any]]] = {}
    for matchup in record.matchups:
        week_scores = scores_by_week.setdefault(matchup.week, [])
        for side in (matchup.home, matchup.away):
            member_id = team_to_member.get(side.team_id)
            if member_id is None or side.score <= 0:
                continue
            week_scores.append({"memberId": member_id, "teamId": side.team_id, "score": side.score})

    weekly_winners: List[Dict[str, Any]] = []
    for week, scores in scores_by_week.items():
        if not scores:
            continue
        scores.sort(key=lambda s: -s["score"])
        winner = scores[0]
        weekly_winners.append({
            "week": week,
            "memberId": winner["memberId"],
            "memberName": name_of(winner["memberId"]),
            "score": winner["score"],
            "allScores": [{"memberName": name_of(s["memberId"]), "score": s["score"]} for s in scores],
        })

    counts = Counter(w["memberId"] for w in weekly_winners)
    high_score_stats = [
        {"memberId": member_id, "memberName": name_of(member_id), "highScoreCount": count}
        for member_id, count in counts.most_common()
    ]

    return {
        "year": record.year,
        "totalWeeks": len(scores_by_week),
        "weeklyWinners": sorted(weekly_winners, key=lambda w: w["week"]),
        "highScoreStats": high_score_stats,
    }


def season_summary(record: SeasonRecord, sample_size: int = 2) -> Dict[str, Any]:
    """Counts and a few sample rows, to eyeball that a season ingested correctly."""
    return {
        "year": record.year,
        "source": record.source,
        "memberCount": len(record.members),
        "teamCount": len(record.teams),
        "matchupCount": len(record.matchups),
        "sampleMembers": [m.to_dict() for m in record.members[:sample_size]],
        "sampleTeams": [t.to_dict() for t in record.teams[:sample_size]],
        "sampleMatchups": [m.to_dict() for m in record.matchups[:sample_size + 1]],
    }
