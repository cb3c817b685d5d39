# =============================================================================
# TELEWIND
# Module: models/data_models.py
# Purpose: Observation value type shared by the collector and the tracker
# =============================================================================
#
# An Observation is one timestamped anemometer sample. It is produced by
# collector/parser.py and consumed by collector/window.py and
# core/wind_tracker.py. Observations are immutable; two observations with
# the same time are duplicates.
#
# =============================================================================

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Tuple


# Compass points used for display: (bearing, name, arrow)
# The arrow points where the wind blows TO, so a northerly is drawn "↓".
COMPASS_POINTS: Tuple[Tuple[int, str, str], ...] = (
    (0, "N", "↓"),
    (360, "N", "↓"),
    (45, "NE", "↙"),
    (90, "E", "←"),
    (135, "SE", "↖"),
    (180, "S", "↑"),
    (225, "SW", "↗"),
    (270, "W", "→"),
    (315, "NW", "↘"),
)


def compass_point(direction: int) -> Tuple[str, str]:
    """
    Nearest compass point for a bearing.

    Args:
        direction: Bearing in degrees (0-359)

    Returns:
        (name, arrow) tuple, e.g. ("NE", "↙")
    """
    _, name, arrow = min(COMPASS_POINTS, key=lambda p: abs(direction - p[0]))
    return name, arrow


@dataclass(frozen=True)
class Observation:
    """
    Single wind sample from the anemometer.

    FIELDS:
    - time: Timezone-aware timestamp (fixed UTC offset)
    - direction: Bearing the wind blows from, integer degrees in [0, 360)
    - avg_speed: Average wind speed in m/s
    """
    time: datetime
    direction: int
    avg_speed: float

    def __post_init__(self):
        if self.time.tzinfo is None or self.time.utcoffset() is None:
            raise ValueError("Observation time must be timezone-aware")
        if not 0 <= self.direction < 360:
            raise ValueError(f"Direction out of range [0, 360): {self.direction}")

    def __str__(self) -> str:
        name, arrow = compass_point(self.direction)
        return (
            f"{self.time.strftime('%H:%M')} {self.avg_speed:2.1f} m/s "
            f"{name:2} {arrow} ({self.direction:3}°)"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "time": self.time.isoformat(),
            "direction": self.direction,
            "avg_speed": self.avg_speed,
        }
