"""
Identity resolution package.

Resolves which league member owns each season's team and which name to show
for every member, honoring the custom name override table.

Modules:
    resolver: owner and display-name resolution
"""

from league_legacy.identity.resolver import (
    build_member_names,
    build_team_owner_map,
    resolve_member_name,
    resolve_team_owner,
)

__all__ = [
    "build_member_names",
    "build_team_owner_map",
    "resolve_member_name",
    "resolve_team_owner",
]
