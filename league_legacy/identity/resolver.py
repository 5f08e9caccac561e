"""
Identity Resolution

Maps season-scoped teams to the league member who owns them, and member ids
to the name shown on the dashboard.

Owner resolution (first hit wins):
1. team.primary_owner_id, when non-empty
2. first entry of team.owner_ids, when non-empty
3. unattributed (None) - the team is left out of member-keyed statistics

Name resolution (first hit wins):
1. override table entry for the member id
2. the source's display name
3. "first last"

Usage:
    from league_legacy.identity.resolver import resolve_team_owner, build_member_names

    owner = resolve_team_owner(team)
    names = build_member_names(record.members, overrides)
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional

from league_legacy.models import Member, Team

logger = logging.getLogger(__name__)

NameOverrides = Mapping[str, str]


def resolve_team_owner(team: Team) -> Optional[str]:
    """Return the member id that owns ``team``, or None if nobody does."""
    if team.primary_owner_id:
        return team.primary_owner_id
    for owner_id in team.owner_ids[:1]:
        if owner_id:
            return owner_id
    return None


def resolve_member_name(
    member_id: str,
    raw_member: Optional[Member] = None,
    overrides: Optional[NameOverrides] = None,
) -> Optional[str]:
    """
    Resolve the display name for a member.

    Returns None when neither the override table nor the raw member carries
    any name information; callers decide what to show in that case.
    """
    if overrides:
        custom = overrides.get(member_id)
        if custom:
            return custom

    if raw_member is None:
        return None

    if raw_member.display_name:
        return raw_member.display_name

    parts = [raw_member.first_name, raw_member.last_name]
    if not any(parts):
        return None
    return f"{raw_member.first_name or ''} {raw_member.last_name or ''}".strip()


def build_team_owner_map(teams: Iterable[Team]) -> Dict[int, str]:
    """Team id -> owning member id, for every attributed team in a season."""
    owners: Dict[int, str] = {}
    for team in teams:
        owner = resolve_team_owner(team)
        if owner is None:
            logger.debug(f"Team {team.id} ({team.season_year}) has no owner, skipping")
            continue
        owners[team.id] = owner
    return owners


def build_member_names(
    members: Iterable[Member],
    overrides: Optional[NameOverrides] = None,
) -> Dict[str, str]:
    """Member id -> resolved display name for one season's member list."""
    names: Dict[str, str] = {}
    for member in members:
        name = resolve_member_name(member.id, member, overrides)
        if name:
            names[member.id] = name
    return names
