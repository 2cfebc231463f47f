"""Configuration management for Waypoint."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

WAYPOINT_HOME = Path(os.environ.get("WAYPOINT_HOME", Path.home() / "waypoint"))
CONFIG_FILE = WAYPOINT_HOME / "config" / "waypoint.conf"
DATA_DIR = WAYPOINT_HOME / "data"


@dataclass
class Config:
    """Waypoint configuration."""

    data_file: str = ""
    timezone: str = "UTC"
    proximity_days: int = 3
    suggestion_window_days: int = 3
    strategic_keywords: list[str] = field(default_factory=lambda: ["client", "conference"])
    strategic_attendee_threshold: int = 5
    local_keywords: list[str] = field(default_factory=lambda: ["office", "local", "headquarters"])

    @property
    def data_path(self) -> Path:
        if self.data_file:
            return Path(self.data_file).expanduser()
        return DATA_DIR / "waypoint.json"


def _split_list(value: str) -> list[str]:
    return [v.strip().lower() for v in value.split(",") if v.strip()]


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, using {default}")
        return default


def _parse_timezone(value: str, default: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {value!r}, using {default}")
        return default
    return value


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def parse_config(text: str) -> Config:
    """Parse KEY=value lines into a Config. Unknown keys are ignored."""
    config = Config()

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_file":
                config.data_file = value
            case "timezone":
                config.timezone = _parse_timezone(value, config.timezone)
            case "proximity_days":
                config.proximity_days = _parse_int(key, value, config.proximity_days)
            case "suggestion_window_days":
                config.suggestion_window_days = _parse_int(key, value, config.suggestion_window_days)
            case "strategic_keywords":
                config.strategic_keywords = _split_list(value)
            case "strategic_attendee_threshold":
                config.strategic_attendee_threshold = _parse_int(
                    key, value, config.strategic_attendee_threshold
                )
            case "local_keywords":
                config.local_keywords = _split_list(value)
            case _:
                logger.debug(f"Ignoring unknown config key {key.upper()}")

    return config


def load_config(path: Path | None = None) -> Config:
    """Load configuration from waypoint.conf file."""
    path = path or CONFIG_FILE
    if not path.exists():
        return Config()
    return parse_config(path.read_text())
