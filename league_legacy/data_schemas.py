from __future__ import annotations

from typing import Any, Dict

SCHEMA_VERSION = "1.0.0"
SCHEMA_URI = "https://json-schema.org/draft/2020-12/schema"

# =============================================================================
# RAW ESPN SEASON PAYLOAD (live API response or historical season-<year>.json)
# =============================================================================

ESPN_MEMBER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id"],
    "properties": {
        "id": {"type": "string"},
        "firstName": {"type": ["string", "null"]},
        "lastName": {"type": ["string", "null"]},
        "displayName": {"type": ["string", "null"]},
    },
}

ESPN_TEAM_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id"],
    "properties": {
        "id": {"type": "integer"},
        "owners": {"type": ["array", "null"], "items": {"type": ["string", "object"]}},
        "primaryOwner": {"type": ["string", "null"]},
        "rankCalculatedFinal": {"type": ["integer", "null"]},
    },
}

ESPN_MATCHUP_SIDE_SCHEMA: Dict[str, Any] = {
    "type": ["object", "null"],
    "properties": {
        "teamId": {"type": ["integer", "null"]},
        "totalPoints": {"type": ["number", "string", "null"]},
    },
}

ESPN_MATCHUP_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "matchupPeriodId": {"type": ["integer", "null"]},
        "home": ESPN_MATCHUP_SIDE_SCHEMA,
        "away": ESPN_MATCHUP_SIDE_SCHEMA,
        "winner": {"type": ["string", "null"]},
    },
}

# Document shape only. Entries are checked one at a time against the item
# schemas above so a single malformed entry is dropped, not the whole season.
ESPN_SEASON_SCHEMA: Dict[str, Any] = {
    "$schema": SCHEMA_URI,
    "type": "object",
    "properties": {
        "seasonId": {"type": ["integer", "null"]},
        "members": {"type": ["array", "null"]},
        "teams": {"type": ["array", "null"]},
        "schedule": {"type": ["array", "null"]},
    },
}

# =============================================================================
# AGGREGATED STATS OUTPUT
# =============================================================================

MEMBER_STATS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["memberId", "memberName", "wins", "losses", "ties", "totalPoints", "highScores"],
    "properties": {
        "memberId": {"type": "string"},
        "memberName": {"type": "string"},
        "wins": {"type": "integer", "minimum": 0},
        "losses": {"type": "integer", "minimum": 0},
        "ties": {"type": "integer", "minimum": 0},
        "totalPoints": {"type": "number"},
        "highScores": {"type": "integer", "minimum": 0},
        "finalStandingsRank": {"type": "integer", "minimum": 1},
    },
}

HEAD_TO_HEAD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["member1", "member2", "member1Wins", "member2Wins", "ties"],
    "properties": {
        "member1": {"type": "string"},
        "member2": {"type": "string"},
        "member1Wins": {"type": "integer", "minimum": 0},
        "member2Wins": {"type": "integer", "minimum": 0},
        "ties": {"type": "integer", "minimum": 0},
    },
}

WEEKLY_HIGH_SCORE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["season", "week", "memberId", "memberName", "score"],
    "properties": {
        "season": {"type": "integer"},
        "week": {"type": "integer"},
        "memberId": {"type": "string"},
        "memberName": {"type": "string"},
        "score": {"type": "number", "exclusiveMinimum": 0},
    },
}

SEASON_FINISH_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["memberId", "memberName", "season", "rank"],
    "properties": {
        "memberId": {"type": "string"},
        "memberName": {"type": "string"},
        "season": {"type": "integer"},
        "rank": {"type": "integer", "minimum": 1},
    },
}

STATS_SCHEMA: Dict[str, Any] = {
    "$schema": SCHEMA_URI,
    "type": "object",
    "required": ["memberStats", "headToHead", "weeklyHighScores", "seasonFinishes"],
    "properties": {
        "memberStats": {"type": "array", "items": MEMBER_STATS_SCHEMA},
        "headToHead": {"type": "array", "items": HEAD_TO_HEAD_SCHEMA},
        "weeklyHighScores": {"type": "array", "items": WEEKLY_HIGH_SCORE_SCHEMA},
        "seasonFinishes": {"type": "array", "items": SEASON_FINISH_SCHEMA},
        "errors": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["year", "error"],
                "properties": {
                    "year": {"type": "integer"},
                    "error": {"type": "string"},
                },
            },
        },
        "years": {"type": "array", "items": {"type": "integer"}},
    },
}
