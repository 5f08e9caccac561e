"""
Season finish summary: championships, runner-ups, third places and last
places per member.

League size for a season is taken as the highest rank reported that season,
so "last" means finishing at that rank. In a league of three or fewer a single
finish can count as both a podium spot and last place.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from league_legacy.models import FinishSummary, SeasonFinish


def season_max_ranks(finishes: Iterable[SeasonFinish]) -> Dict[int, int]:
    """Season -> highest rank observed that season."""
    max_ranks: Dict[int, int] = {}
    for finish in finishes:
        if finish.rank > max_ranks.get(finish.season, 0):
            max_ranks[finish.season] = finish.rank
    return max_ranks


def summarize_finishes(finishes: Iterable[SeasonFinish]) -> List[FinishSummary]:
    """
    Tally finishes per member, ordered by firsts, then seconds, then thirds
    (all descending). Members tied on all three keep first-seen order.
    """
    finishes = list(finishes)
    max_ranks = season_max_ranks(finishes)

    summaries: Dict[str, FinishSummary] = {}
    for finish in finishes:
        summary = summaries.get(finish.member_id)
        if summary is None:
            summary = FinishSummary(member_id=finish.member_id, member_name=finish.member_name)
            summaries[finish.member_id] = summary

        summary.total_seasons += 1
        if finish.rank == 1:
            summary.first += 1
        elif finish.rank == 2:
            summary.second += 1
        elif finish.rank == 3:
            summary.third += 1
        if finish.rank == max_ranks.get(finish.season, finish.rank):
            summary.last += 1

    return sorted(summaries.values(), key=lambda s: (-s.first, -s.second, -s.third))
