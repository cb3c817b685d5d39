# =============================================================================
# TELEWIND - CORE MODULE
# =============================================================================
#
# Pure, synchronous decision logic. No I/O, no network.
#
# MODULES:
# - sector: Compass sector membership test
# - wind_tracker: Hysteresis FSM turning samples into rising-edge events
#
# =============================================================================

from .sector import Sector, NAMED_SECTORS
from .wind_tracker import WindPhase, WindState, WindTracker

__all__ = [
    "Sector",
    "NAMED_SECTORS",
    "WindPhase",
    "WindState",
    "WindTracker",
]
