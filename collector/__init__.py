# =============================================================================
# TELEWIND COLLECTOR
# Module: collector/__init__.py
# Purpose: Observation intake pipeline (download, decode, window)
# =============================================================================
#
# STRICT SEPARATION:
# This package only produces Observations. It does not evaluate them and it
# does not notify anybody. The tracker in core/ consumes its output.
#
# =============================================================================

from .errors import ObservationSourceError, FetchError, ParseError
from .parser import parse_observations
from .client import AnemometerClient, DEFAULT_SOURCE_URL
from .window import ObservationWindow, Ticker, select_new, DEFAULT_POLL_INTERVAL

__all__ = [
    "ObservationSourceError",
    "FetchError",
    "ParseError",
    "parse_observations",
    "AnemometerClient",
    "DEFAULT_SOURCE_URL",
    "ObservationWindow",
    "Ticker",
    "select_new",
    "DEFAULT_POLL_INTERVAL",
]
