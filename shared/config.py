# =============================================================================
# TELEWIND - CONFIGURATION
# =============================================================================
#
# Settings come from three places, later ones win:
#   1. config/telewind.yaml
#   2. Environment (.env is loaded first, existing variables are kept)
#   3. CLI flags (applied by main.py)
#
# ENVIRONMENT:
#   TELEGRAM_BOT_TOKEN   - bot token for run-bot
#   DATABASE_URL         - SQLite file for subscriptions
#   TELEWIND_SOURCE_URL  - anemometer page
#   TELEWIND_LOG_LEVEL   - DEBUG / INFO / WARNING
#
# =============================================================================

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from collector.client import AnemometerClient, DEFAULT_SOURCE_URL
from collector.window import DEFAULT_POLL_INTERVAL
from core.sector import Sector

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent.parent
CONFIG_PATH = BASE_DIR / "config" / "telewind.yaml"
ENV_PATH = BASE_DIR / ".env"


class ConfigError(ValueError):
    """Invalid or incomplete configuration."""


@dataclass
class MonitorConfig:
    """Resolved settings for the monitor and the CLI."""
    source_url: str = DEFAULT_SOURCE_URL
    request_timeout: float = AnemometerClient.DEFAULT_TIMEOUT
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL
    sector: Sector = Sector.NORTH_180
    speed_threshold: float = 5.0
    candidate_steps: int = 5
    cooldown_steps: int = 5
    database_url: str = str(BASE_DIR / "data" / "subscriptions.db")
    telegram_token: Optional[str] = None
    log_level: str = "INFO"

    def validate(self) -> None:
        if self.candidate_steps < 0 or self.cooldown_steps < 0:
            raise ConfigError("candidate_steps and cooldown_steps must be >= 0")
        if self.poll_interval_seconds <= 0:
            raise ConfigError("poll_interval_seconds must be positive")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")


def parse_sector(value: Any) -> Sector:
    """
    Build a Sector from config.

    Accepts a constant name ("NORTH_180") or a two-element list ([270, 90]).
    """
    try:
        if isinstance(value, str):
            return Sector.from_name(value)
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return Sector(int(value[0]), int(value[1]))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid sector {value!r}: {e}") from e
    raise ConfigError(f"Invalid sector {value!r}: expected a name or [from, to]")


def resolve_database_url(value: Any) -> str:
    """Relative SQLite paths in the YAML file are relative to the project root."""
    value = str(value)
    if value == ":memory:" or Path(value).is_absolute():
        return value
    return str(BASE_DIR / value)


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning(f"Config file not found: {path}, using defaults")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    return data


def load_config(path: Optional[Path] = None, env_file: Optional[Path] = None) -> MonitorConfig:
    """
    Load configuration from YAML and environment.

    Args:
        path: YAML file (default: config/telewind.yaml)
        env_file: .env file (default: project .env)

    Returns:
        Validated MonitorConfig

    Raises:
        ConfigError: On unreadable YAML or invalid values
    """
    env_file = env_file or ENV_PATH
    if env_file.exists():
        load_dotenv(env_file, override=False)

    data = _read_yaml(path or CONFIG_PATH)
    source = data.get("source", {}) or {}
    tracker = data.get("tracker", {}) or {}
    config = MonitorConfig()

    try:
        config.source_url = source.get("url", config.source_url)
        config.request_timeout = float(source.get("timeout_seconds", config.request_timeout))
        config.poll_interval_seconds = float(data.get("poll_interval_seconds", config.poll_interval_seconds))
        config.speed_threshold = float(tracker.get("speed_threshold", config.speed_threshold))
        config.candidate_steps = int(tracker.get("candidate_steps", config.candidate_steps))
        config.cooldown_steps = int(tracker.get("cooldown_steps", config.cooldown_steps))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config value: {e}") from e

    if "sector" in tracker:
        config.sector = parse_sector(tracker["sector"])
    if "database_url" in data:
        config.database_url = resolve_database_url(data["database_url"])
    config.log_level = data.get("log_level", config.log_level)

    config.telegram_token = os.getenv("TELEGRAM_BOT_TOKEN") or None
    config.database_url = os.getenv("DATABASE_URL") or config.database_url
    config.source_url = os.getenv("TELEWIND_SOURCE_URL") or config.source_url
    config.log_level = os.getenv("TELEWIND_LOG_LEVEL") or config.log_level

    config.validate()
    return config
