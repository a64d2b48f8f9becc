"""
Temporal debouncing of per-frame gesture labels.
A label only becomes a gesture event once it has been held for the dwell time.
"""
from dataclasses import dataclass
from typing import Callable, Optional
import logging
import time

from .classifier import GestureLabel
from .config import DebounceConfig, FiringDiscipline

logger = logging.getLogger(__name__)

GestureHandler = Callable[[GestureLabel], None]


@dataclass(frozen=True)
class DebounceState:
    """
    Snapshot of the debouncer.

    tracking_started_at is set exactly when tracked_label is set.
    """
    tracked_label: Optional[GestureLabel] = None
    tracking_started_at: Optional[float] = None

    @property
    def is_idle(self) -> bool:
        return self.tracked_label is None


class GestureDebouncer:
    """
    Turns a stream of per-frame labels into discrete gesture events.

    States are Idle and Tracking(label, since). A label has to be reported
    on every frame for longer than dwell_ms before it fires; any other label
    restarts the timer and a missing label drops back to Idle.

    Firing disciplines:
    - repeat: every frame past the dwell fires again (held gesture = continuous action)
    - single: fire once and return to Idle; the same label must go away
      before it can be tracked again

    Call update() exactly once per frame, including frames without a hand.
    Not thread-safe: use one instance per tracked hand.
    """

    def __init__(self, config: Optional[DebounceConfig] = None):
        self._config = config or DebounceConfig()
        self._handler: Optional[GestureHandler] = None

        self._tracked_label: Optional[GestureLabel] = None
        self._tracking_started_at: Optional[float] = None

        # Label that fired under single-fire and has not been released yet
        self._latched_label: Optional[GestureLabel] = None

    @property
    def dwell_ms(self) -> float:
        return self._config.dwell_ms

    @property
    def discipline(self) -> FiringDiscipline:
        return self._config.discipline

    @property
    def state(self) -> DebounceState:
        return DebounceState(self._tracked_label, self._tracking_started_at)

    def on_gesture(self, handler: Optional[GestureHandler]) -> None:
        """
        Register the callback for confirmed gestures.
        Replaces any previous handler; None unregisters.
        """
        self._handler = handler

    def update(
        self, label: Optional[GestureLabel], now: Optional[float] = None
    ) -> Optional[GestureLabel]:
        """
        Feed the label observed in the current frame.

        Args:
            label: Label for this frame, or None if no gesture / no hand.
            now: Frame timestamp in seconds. Defaults to time.perf_counter().

        Returns:
            The label if it fired on this frame, otherwise None.
        """
        if now is None:
            now = time.perf_counter()

        if label != self._latched_label:
            self._latched_label = None

        if label is None:
            if self._tracked_label is not None:
                logger.debug("Tracking of %s reset (label lost)", self._tracked_label.value)
            self._reset_tracking()
            return None

        if label == self._latched_label:
            return None

        if label != self._tracked_label:
            logger.debug("Tracking %s", label.value)
            self._tracked_label = label
            self._tracking_started_at = now
            return None

        held_ms = (now - self._tracking_started_at) * 1000.0
        if held_ms <= self._config.dwell_ms:
            return None

        if self._config.discipline == FiringDiscipline.SINGLE:
            self._reset_tracking()
            self._latched_label = label

        logger.debug("Gesture %s fired after %.0f ms", label.value, held_ms)
        if self._handler is not None:
            self._handler(label)
        return label

    def reset(self) -> None:
        """Drop back to Idle and forget any latched label."""
        self._reset_tracking()
        self._latched_label = None

    def _reset_tracking(self) -> None:
        self._tracked_label = None
        self._tracking_started_at = None
