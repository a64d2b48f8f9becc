"""
Per-frame gesture pipeline: classifier followed by debouncer.
"""
from dataclasses import dataclass
from typing import Optional
import logging

from .classifier import GestureClassifier, GestureLabel, LandmarkInput
from .config import Config
from .debouncer import GestureDebouncer, GestureHandler
from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    """Outcome of one frame, for presentation layers."""
    hand_present: bool
    label: Optional[GestureLabel] = None
    fired: Optional[GestureLabel] = None


class GesturePipeline:
    """
    Runs one frame of landmarks through classification and debouncing.

    Usage:
        pipeline = GesturePipeline(config)
        pipeline.on_gesture(print)
        result = pipeline.process(landmarks)

    Args:
        config: Full application config (gestures + debounce sections are used)
        strict: If True, malformed landmarks raise InvalidInputError.
            Otherwise the frame is logged and treated as "no gesture".
    """

    def __init__(self, config: Optional[Config] = None, strict: bool = False):
        config = config or Config()
        self._classifier = GestureClassifier(config.gestures)
        self._debouncer = GestureDebouncer(config.debounce)
        self._strict = strict

    @property
    def classifier(self) -> GestureClassifier:
        return self._classifier

    @property
    def debouncer(self) -> GestureDebouncer:
        return self._debouncer

    def on_gesture(self, handler: Optional[GestureHandler]) -> None:
        self._debouncer.on_gesture(handler)

    def process(
        self, landmarks: Optional[LandmarkInput], now: Optional[float] = None
    ) -> FrameResult:
        """
        Process one frame. The debouncer is updated exactly once, also when
        no hand is present.
        """
        try:
            label = self._classifier.classify(landmarks)
        except InvalidInputError as e:
            if self._strict:
                raise
            logger.warning("Dropping malformed landmarks: %s", e)
            label = None

        fired = self._debouncer.update(label, now)
        return FrameResult(hand_present=landmarks is not None, label=label, fired=fired)

    def reset(self) -> None:
        self._debouncer.reset()
