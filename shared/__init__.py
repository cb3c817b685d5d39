# =============================================================================
# TELEWIND - SHARED MODULE
# =============================================================================
#
# Process-level plumbing shared by the CLI and the monitor. No wind logic
# lives here.
#
# CONTENTS:
# - Configuration (YAML + environment)
# - Logging setup
# - Telegram command listener (shared.telegram_bot, imported on demand)
#
# =============================================================================

from .config import ConfigError, MonitorConfig, load_config, parse_sector
from .logging_config import setup_logging

__all__ = [
    "ConfigError",
    "MonitorConfig",
    "load_config",
    "parse_sector",
    "setup_logging",
]
