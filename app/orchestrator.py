# =============================================================================
# TELEWIND - MONITOR ORCHESTRATOR
# =============================================================================
#
# Wires the pipeline together:
# 1. ObservationWindow: poll the anemometer, deliver new observations
# 2. WindTracker: hysteresis FSM, reports rising edges
# 3. TelegramNotifier: alert every subscribed chat on a rising edge
#
# The window and the tracker only meet through the Observation value and
# the boolean returned by step().
#
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from collector.client import AnemometerClient
from collector.window import ObservationWindow, Ticker
from core.wind_tracker import WindTracker
from models.data_models import Observation
from notifications.subscriptions import SubscriptionStore
from notifications.telegram import TelegramNotifier
from shared.config import MonitorConfig

logger = logging.getLogger(__name__)


@dataclass
class MonitorStats:
    """Counters for one monitor run."""
    observations: int = 0
    events: int = 0
    notifications_sent: int = 0


class WindMonitor:
    """
    Drives the tracker from the window and notifies on rising edges.

    Usage:
        monitor = WindMonitor.from_config(config, store)
        monitor.run()
    """

    def __init__(
        self,
        observations: Iterable[Observation],
        tracker: WindTracker,
        notifier: TelegramNotifier,
        subscriptions: SubscriptionStore,
    ):
        self.observations = observations
        self.tracker = tracker
        self.notifier = notifier
        self.subscriptions = subscriptions
        self.stats = MonitorStats()

    @classmethod
    def from_config(cls, config: MonitorConfig, subscriptions: SubscriptionStore) -> "WindMonitor":
        client = AnemometerClient(config.source_url, timeout=config.request_timeout)
        window = ObservationWindow(
            client.fetch_observations,
            Ticker(config.poll_interval_seconds),
        )
        tracker = WindTracker(
            sector=config.sector,
            speed_threshold=config.speed_threshold,
            candidate_steps=config.candidate_steps,
            cooldown_steps=config.cooldown_steps,
        )
        notifier = TelegramNotifier(config.telegram_token)
        return cls(window, tracker, notifier, subscriptions)

    def process(self, observation: Observation) -> bool:
        """
        Feed one observation to the tracker, notify on a rising edge.

        Returns:
            True if the observation fired an event
        """
        self.stats.observations += 1
        was_high = self.tracker.is_high
        event_fired = self.tracker.step(observation)
        logger.debug(f"Processing observation: {observation} ({self.tracker.state!r})")

        if was_high and not self.tracker.is_high:
            logger.info(f"Wind is dropping: {observation}")

        if event_fired:
            self.stats.events += 1
            chat_ids = self.subscriptions.user_ids()
            self.stats.notifications_sent += self.notifier.notify(observation, chat_ids)

        return event_fired

    def run(self, max_observations: Optional[int] = None) -> MonitorStats:
        """
        Consume observations until the source ends or the limit is reached.

        The window is unbounded, so without a limit this runs until
        interrupted.
        """
        logger.info("=" * 50)
        logger.info("WIND MONITOR STARTED")
        logger.info(
            f"Sector {self.tracker.sector.start}°-{self.tracker.sector.end}°, "
            f"threshold {self.tracker.speed_threshold} m/s, "
            f"steps {self.tracker.candidate_steps}/{self.tracker.cooldown_steps}"
        )
        logger.info("=" * 50)

        for observation in self.observations:
            self.process(observation)
            if max_observations is not None and self.stats.observations >= max_observations:
                break

        return self.stats
