# =============================================================================
# TELEWIND COLLECTOR
# Module: collector/window.py
# Purpose: Turn repeated snapshot polls into one ordered observation stream
# =============================================================================
#
# The anemometer page returns recent history on every request. Consecutive
# polls overlap, rows may be out of order, and a poll may fail. The window
# converts this into a single sequence where every distinct observation is
# delivered exactly once, in strictly increasing time order.
#
# REFILL CYCLE (only when the buffer is empty):
# 1. Wait for the next tick
# 2. Fetch the snapshot; on failure log and wait for the next tick
# 3. Sort ascending by time
# 4. First successful batch: keep only the most recent observation
# 5. Afterwards: keep only observations newer than the high-water mark
# 6. Advance the high-water mark, buffer, deliver oldest first
#
# Observations that appear and disappear entirely during an outage are lost.
#
# =============================================================================

import logging
import time
from collections import deque
from datetime import datetime
from typing import Callable, Deque, Iterator, List, Optional

from models.data_models import Observation

from .errors import ObservationSourceError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 55.0  # seconds


class Ticker:
    """
    Fixed-interval ticker.

    The first tick completes immediately. When the caller falls behind, the
    late tick fires at once and the schedule restarts from that moment, so
    missed ticks are delayed rather than replayed in a burst.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._deadline: Optional[float] = None

    def tick(self) -> float:
        """Block until the next tick. Returns the tick time."""
        now = self._clock()
        if self._deadline is None:
            self._deadline = now

        if now < self._deadline:
            self._sleep(self._deadline - now)
            now = self._deadline

        self._deadline = now + self.interval
        return now


def select_new(
    batch: List[Observation],
    last_emitted_time: Optional[datetime],
) -> List[Observation]:
    """
    Pick the observations of a snapshot that have not been delivered yet.

    Args:
        batch: Snapshot as returned by the source (any order)
        last_emitted_time: High-water mark, None before the first delivery

    Returns:
        New observations, oldest first, with unique strictly increasing times
    """
    if not batch:
        return []

    ordered = sorted(batch, key=lambda o: o.time)

    # Start with the newest sample only, older history would flood the tracker
    if last_emitted_time is None:
        return [ordered[-1]]

    kept: List[Observation] = []
    mark = last_emitted_time
    for observation in ordered:
        if observation.time > mark:
            kept.append(observation)
            mark = observation.time
    return kept


class ObservationWindow:
    """
    Unbounded iterator of new observations.

    Usage:
        client = AnemometerClient(url)
        window = ObservationWindow(client.fetch_observations, Ticker(55))
        for observation in window:
            tracker.step(observation)

    A window cannot be rewound; create a new one to start over.
    """

    def __init__(
        self,
        fetch: Callable[[], List[Observation]],
        ticker: Ticker,
        fail_fast: bool = False,
    ):
        """
        Args:
            fetch: Returns the current snapshot, raises ObservationSourceError
            ticker: Poll cadence
            fail_fast: Propagate ParseError to the consumer instead of retrying
        """
        self._fetch = fetch
        self._ticker = ticker
        self.fail_fast = fail_fast

        self.last_emitted_time: Optional[datetime] = None
        self.pending: Deque[Observation] = deque()

        self.polls = 0
        self.failed_polls = 0

    def poll(self) -> int:
        """
        Run one refill cycle without waiting for a tick.

        Returns:
            Number of newly buffered observations (0 on failure)
        """
        self.polls += 1
        try:
            batch = self._fetch()
        except ObservationSourceError as e:
            self.failed_polls += 1
            if self.fail_fast and isinstance(e, ParseError):
                raise
            logger.error("Unable to read observations from source. We'll keep trying...")
            logger.warning(f"{type(e).__name__}: {e}")
            return 0

        new = select_new(batch, self.last_emitted_time)
        if new:
            self.last_emitted_time = new[-1].time
            self.pending.extend(new)

        logger.debug(f"Poll #{self.polls}: fetched {len(batch)}, new {len(new)}")
        return len(new)

    def __iter__(self) -> Iterator[Observation]:
        return self

    def __next__(self) -> Observation:
        while not self.pending:
            self._ticker.tick()
            self.poll()
        return self.pending.popleft()
