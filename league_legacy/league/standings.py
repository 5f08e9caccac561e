"""
Display tables for the dashboard: all-time standings, head-to-head matrix and
finish counts, built as pandas DataFrames from aggregator output.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

import pandas as pd

from league_legacy.models import FinishSummary, HeadToHeadRecord, MemberStats

# Members without a reported rank sort after everyone who has one
UNRANKED_SORT_VALUE = 999

STANDINGS_COLUMNS = [
    "memberId",
    "memberName",
    "wins",
    "losses",
    "ties",
    "winPct",
    "totalPoints",
    "highScores",
    "finalStandingsRank",
]

FINISH_COLUMNS = ["memberId", "memberName", "first", "second", "third", "last", "totalSeasons"]


def win_pct(stats: MemberStats) -> float:
    """Share of games won; 0.0 for a member with no decided or tied games."""
    games = stats.wins + stats.losses + stats.ties
    if games == 0:
        return 0.0
    return stats.wins / games


def standings_frame(member_stats: Iterable[MemberStats]) -> pd.DataFrame:
    rows = [
        {
            "memberId": s.member_id,
            "memberName": s.member_name,
            "wins": s.wins,
            "losses": s.losses,
            "ties": s.ties,
            "winPct": win_pct(s),
            "totalPoints": s.total_points,
            "highScores": s.high_scores,
            "finalStandingsRank": s.final_standings_rank,
        }
        for s in member_stats
    ]
    df = pd.DataFrame(rows, columns=STANDINGS_COLUMNS)
    df["finalStandingsRank"] = df["finalStandingsRank"].astype("Int64")

    return (
        df
        .assign(_rank=df["finalStandingsRank"].fillna(UNRANKED_SORT_VALUE))
        .sort_values(["_rank", "memberName"], kind="stable")
        .drop(columns="_rank")
        .reset_index(drop=True)
    )


def head_to_head_matrix(
    records: Iterable[HeadToHeadRecord],
    names: Optional[Mapping[str, str]] = None,
) -> pd.DataFrame:
    """
    Square W-L-T matrix. Cell [a, b] is a's record against b; the diagonal and
    pairs that never met are empty strings. Labels are display names when
    ``names`` is given, member ids otherwise.
    """
    records = list(records)
    member_ids: List[str] = []
    for record in records:
        for member_id in (record.member1, record.member2):
            if member_id not in member_ids:
                member_ids.append(member_id)
    member_ids.sort(key=lambda m: ((names or {}).get(m, m).lower(), m))

    matrix = pd.DataFrame("", index=member_ids, columns=member_ids)
    for record in records:
        matrix.at[record.member1, record.member2] = (
            f"{record.member1_wins}-{record.member2_wins}-{record.ties}"
        )
        matrix.at[record.member2, record.member1] = (
            f"{record.member2_wins}-{record.member1_wins}-{record.ties}"
        )

    if names:
        matrix = matrix.rename(index=dict(names), columns=dict(names))
    return matrix


def finish_frame(summaries: Iterable[FinishSummary]) -> pd.DataFrame:
    return pd.DataFrame([s.to_dict() for s in summaries], columns=FINISH_COLUMNS)
