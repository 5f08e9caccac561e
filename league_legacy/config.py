"""
Configuration loader for league credentials and data locations.

Supports loading from:
1. Environment variables (.env.local at the project root, or the shell)
2. JSON config file (config/league.json)

Environment Variable Aliases (checked in order):
- League id: LEAGUE_ID, ESPN_LEAGUE_ID
- espn_s2 cookie: ESPN_S2
- SWID cookie: SWID, ESPN_SWID

Usage:
    from league_legacy.config import get_config

    config = get_config()
    print(config.league_id, config.historical_dir)
"""

import json
import os
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Optional


# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_START_YEAR = 2012
DEFAULT_HISTORICAL_DIR = PROJECT_ROOT / "historical-data"
DEFAULT_MEMBER_NAMES_PATH = PROJECT_ROOT / "member-names.json"
CONFIG_FILE = PROJECT_ROOT / "config" / "league.json"


def _load_env_file(env_file=PROJECT_ROOT / ".env.local"):
    """Load environment variables from .env.local if it exists."""
    if env_file.exists():
        with open(env_file, "r") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, _, value = line.partition("=")
                    key = key.strip()
                    value = value.strip()
                    # Remove quotes if present
                    if value.startswith('"') and value.endswith('"'):
                        value = value[1:-1]
                    elif value.startswith("'") and value.endswith("'"):
                        value = value[1:-1]
                    os.environ.setdefault(key, value)


def _load_json_config(config_file=CONFIG_FILE):
    """Load configuration from JSON file."""
    if config_file.exists():
        with open(config_file, "r") as f:
            return json.load(f)
    return {}


# Load env file on module import
_load_env_file()


# Order matters: first valid value found wins
ENV_VAR_ALIASES = {
    "league_id": ["LEAGUE_ID", "ESPN_LEAGUE_ID"],
    "espn_s2": ["ESPN_S2"],
    "swid": ["SWID", "ESPN_SWID"],
    "historical_dir": ["HISTORICAL_DATA_DIR"],
    "member_names_path": ["MEMBER_NAMES_PATH"],
}


def _get_env_with_aliases(alias_key):
    """
    Get an environment variable value, checking multiple aliases.
    Returns (value, var_name) tuple or (None, None) if not found.
    """
    for var_name in ENV_VAR_ALIASES.get(alias_key, []):
        value = os.getenv(var_name)
        if value and not _is_placeholder(value):
            return value, var_name
    return None, None


def _is_placeholder(value):
    """Check if a value is a placeholder that should be ignored."""
    if not value:
        return True
    value_lower = value.lower()
    return (
        value_lower.startswith("your_") or
        value_lower.startswith("your-") or
        value_lower in ("changeme", "placeholder")
    )


@dataclass(frozen=True)
class LeagueConfig:
    league_id: Optional[str]
    espn_s2: Optional[str]
    swid: Optional[str]
    historical_dir: Path
    member_names_path: Path
    default_start_year: int = DEFAULT_START_YEAR

    @property
    def has_credentials(self) -> bool:
        return bool(self.league_id and self.espn_s2 and self.swid)


def _setting(alias_key, file_config):
    value, _ = _get_env_with_aliases(alias_key)
    if value:
        return value
    value = file_config.get(alias_key)
    if value and not _is_placeholder(str(value)):
        return str(value)
    return None


@lru_cache(maxsize=1)
def get_config():
    """
    Get the league configuration.
    Merges the JSON config file with environment variables (env vars take precedence).
    """
    file_config = _load_json_config()

    historical_dir = _setting("historical_dir", file_config)
    member_names_path = _setting("member_names_path", file_config)

    return LeagueConfig(
        league_id=_setting("league_id", file_config),
        espn_s2=_setting("espn_s2", file_config),
        swid=_setting("swid", file_config),
        historical_dir=Path(historical_dir) if historical_dir else DEFAULT_HISTORICAL_DIR,
        member_names_path=Path(member_names_path) if member_names_path else DEFAULT_MEMBER_NAMES_PATH,
        default_start_year=int(file_config.get("default_start_year", DEFAULT_START_YEAR)),
    )


def default_year_range(config=None):
    """(start, end) covering every season from the configured start year to this year."""
    config = config or get_config()
    return config.default_start_year, date.today().year


def validate_config(config=None):
    """
    Validate that the live ESPN source is usable.
    Returns a list of issues (empty if all is well).
    """
    config = config or get_config()
    issues = []

    for alias_key in ("league_id", "espn_s2", "swid"):
        if not getattr(config, alias_key):
            issues.append(
                f"{alias_key} not configured. Set one of: "
                + ", ".join(ENV_VAR_ALIASES[alias_key])
            )

    if not config.historical_dir.exists():
        issues.append(f"Historical data directory not found (optional): {config.historical_dir}")

    return issues


def get_detected_env_vars():
    """
    Get information about which environment variables were detected.
    Useful for debugging configuration issues.
    """
    detected = {}
    for alias_key in ("league_id", "espn_s2", "swid"):
        value, var_name = _get_env_with_aliases(alias_key)
        if value:
            detected[alias_key] = {
                "var_name": var_name,
                "configured": True,
                "preview": f"{'*' * 8}...{value[-4:]}" if len(value) > 4 else "****",
            }
        else:
            detected[alias_key] = {"var_name": None, "configured": False}
    return detected
