# =============================================================================
# TELEWIND COLLECTOR
# Module: collector/errors.py
# Purpose: Error types raised while reading observations from the source
# =============================================================================


class ObservationSourceError(Exception):
    """Base class for recoverable source failures (retried at next poll)."""


class FetchError(ObservationSourceError):
    """The anemometer page could not be downloaded."""


class ParseError(ObservationSourceError):
    """The anemometer page was downloaded but could not be decoded."""
