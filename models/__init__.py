# =============================================================================
# TELEWIND
# Module: models/__init__.py
# Purpose: Package initialization for data models
# =============================================================================

from .data_models import Observation, COMPASS_POINTS, compass_point

__all__ = [
    "Observation",
    "COMPASS_POINTS",
    "compass_point",
]
