"""
League Legacy

Cross-season statistics for an ESPN fantasy football league: member records,
head-to-head ledger, weekly high scores and season finishes.

Packages:
    identity - team owner and member name resolution
    league - aggregation, finish summary, high score audit, display tables
    sources - live ESPN API and historical file season sources
"""

__version__ = "1.0.0"
