# =============================================================================
# TELEWIND - WIND STATE TRACKER
# =============================================================================
#
# Hysteresis FSM over the observation stream.
#
# A sample "matches" when its average speed reaches the threshold AND its
# direction lies in the target sector. The tracker needs candidate_steps
# consecutive matches to reach HIGH and cooldown_steps consecutive misses to
# fall back to LOW. CANDIDATE and COOLDOWN are the transient states that
# count those steps.
#
#   LOW --match--> CANDIDATE(1) --...--> CANDIDATE(n) --match--> HIGH
#   HIGH --miss--> COOLDOWN(1) --...--> COOLDOWN(n) --miss--> LOW
#   any miss in CANDIDATE -> LOW, any match in COOLDOWN -> HIGH
#
# Only LOW -> HIGH and CANDIDATE -> HIGH are rising edges. Returning to HIGH
# from COOLDOWN is not a new event.
#
# =============================================================================

import logging
from dataclasses import dataclass
from enum import Enum

from models.data_models import Observation

from .sector import Sector

logger = logging.getLogger(__name__)


class WindPhase(Enum):
    """Discriminant of WindState."""
    LOW = "Low"
    CANDIDATE = "Candidate"
    HIGH = "High"
    COOLDOWN = "Cooldown"


_COUNTED_PHASES = (WindPhase.CANDIDATE, WindPhase.COOLDOWN)


@dataclass(frozen=True)
class WindState:
    """
    FSM state: a phase plus the step counter of the transient phases.

    The counter is >= 1 in CANDIDATE and COOLDOWN and always 0 otherwise.
    Use the factory methods rather than the constructor.
    """
    phase: WindPhase
    count: int = 0

    def __post_init__(self):
        if self.phase in _COUNTED_PHASES:
            if self.count < 1:
                raise ValueError(f"{self.phase.value} requires count >= 1, got {self.count}")
        elif self.count != 0:
            raise ValueError(f"{self.phase.value} does not carry a count")

    @classmethod
    def low(cls) -> "WindState":
        return cls(WindPhase.LOW)

    @classmethod
    def candidate(cls, count: int) -> "WindState":
        return cls(WindPhase.CANDIDATE, count)

    @classmethod
    def high(cls) -> "WindState":
        return cls(WindPhase.HIGH)

    @classmethod
    def cooldown(cls, count: int) -> "WindState":
        return cls(WindPhase.COOLDOWN, count)

    def __repr__(self) -> str:
        if self.phase in _COUNTED_PHASES:
            return f"{self.phase.value}({self.count})"
        return self.phase.value


class WindTracker:
    """
    Wind state tracking FSM with hysteresis.

    Usage:
        tracker = WindTracker(Sector.NORTH_180, speed_threshold=5.0,
                              candidate_steps=5, cooldown_steps=5)
        for observation in window:
            if tracker.step(observation):
                notify(observation)
    """

    def __init__(
        self,
        sector: Sector,
        speed_threshold: float,
        candidate_steps: int = 2,
        cooldown_steps: int = 2,
    ):
        """
        Args:
            sector: Target direction sector
            speed_threshold: Minimum average speed (m/s) for a match
            candidate_steps: Steps required to reach HIGH from LOW
            cooldown_steps: Steps required to reset from HIGH to LOW
        """
        if candidate_steps < 0 or cooldown_steps < 0:
            raise ValueError("candidate_steps and cooldown_steps must be >= 0")

        self.sector = sector
        self.speed_threshold = speed_threshold
        self.candidate_steps = candidate_steps
        self.cooldown_steps = cooldown_steps
        self._state = WindState.low()

    @property
    def state(self) -> WindState:
        return self._state

    @property
    def is_high(self) -> bool:
        return self._state.phase is WindPhase.HIGH

    def matches(self, observation: Observation) -> bool:
        """Check speed threshold and direction sector for one sample."""
        return (
            observation.avg_speed >= self.speed_threshold
            and self.sector.test(observation.direction)
        )

    def step(self, observation: Observation) -> bool:
        """
        Advance the FSM by one observation.

        Returns:
            True if this step is a rising edge (sustained wind confirmed)
        """
        before = self._state
        if self.matches(observation):
            after = self._on_match(before)
        else:
            after = self._on_miss(before)
        self._state = after

        if after.phase is not before.phase:
            logger.debug(f"{before!r} -> {after!r} on {observation}")

        return after.phase is WindPhase.HIGH and before.phase in (
            WindPhase.LOW,
            WindPhase.CANDIDATE,
        )

    def _on_match(self, state: WindState) -> WindState:
        phase = state.phase
        if phase is WindPhase.LOW:
            if self.candidate_steps == 0:
                return WindState.high()
            return WindState.candidate(1)
        if phase is WindPhase.CANDIDATE:
            if state.count >= self.candidate_steps:
                return WindState.high()
            return WindState.candidate(state.count + 1)
        # HIGH stays, COOLDOWN recovers
        return WindState.high()

    def _on_miss(self, state: WindState) -> WindState:
        phase = state.phase
        if phase is WindPhase.HIGH:
            if self.cooldown_steps == 0:
                return WindState.low()
            return WindState.cooldown(1)
        if phase is WindPhase.COOLDOWN:
            if state.count >= self.cooldown_steps:
                return WindState.low()
            return WindState.cooldown(state.count + 1)
        # LOW stays, CANDIDATE resets
        return WindState.low()
