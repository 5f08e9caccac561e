"""
League statistics package.

Builds cross-season statistics from normalized season records.

Modules:
    aggregate.py - member records, head-to-head ledger, weekly high scores, season finishes
    finishes.py - championship / runner-up / third / last place counts
    high_scores.py - single-season weekly high score audit
    standings.py - pandas display tables
"""

from league_legacy.league.aggregate import aggregate, fold_season, Accumulators
from league_legacy.league.finishes import summarize_finishes, season_max_ranks
from league_legacy.league.high_scores import season_high_score_report, season_summary
from league_legacy.league.standings import (
    finish_frame,
    head_to_head_matrix,
    standings_frame,
    win_pct,
)

__all__ = [
    "aggregate",
    "fold_season",
    "Accumulators",
    "summarize_finishes",
    "season_max_ranks",
    "season_high_score_report",
    "season_summary",
    "finish_frame",
    "head_to_head_matrix",
    "standings_frame",
    "win_pct",
]
