"""
Gesture classification from hand landmarks.
Turns one landmark set into a gesture label using finger extension rules.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Union

from .config import ClassifierConfig, ThumbSide, Vocabulary
from .landmarks import LandmarkSet


class GestureLabel(str, Enum):
    """Recognized gestures. "No gesture" is None."""
    # Rock/paper/scissors vocabulary
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    # Directional vocabulary
    LEFT = "left"
    RIGHT = "right"
    ROTATE = "rotate"
    DOWN = "down"


@dataclass(frozen=True)
class FingerState:
    """Extension flag per finger for a single frame."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def extended_count(self) -> int:
        """Number of extended fingers, thumb excluded."""
        return sum((self.index, self.middle, self.ring, self.pinky))


# (tip, reference joint) per non-thumb finger
_FINGER_JOINTS = (
    (LandmarkSet.INDEX_TIP, LandmarkSet.INDEX_MCP),
    (LandmarkSet.MIDDLE_TIP, LandmarkSet.MIDDLE_MCP),
    (LandmarkSet.RING_TIP, LandmarkSet.RING_MCP),
    (LandmarkSet.PINKY_TIP, LandmarkSet.PINKY_MCP),
)

LandmarkInput = Union[LandmarkSet, Sequence[Any]]


class GestureClassifier:
    """
    Classifies a single frame of hand landmarks.

    Stateless: the result depends only on the landmarks passed in and the
    thresholds in the config. All comparisons run on raw normalized image
    coordinates, so accuracy assumes the hand faces the camera upright at
    a roughly constant distance.

    Vocabularies:
    - rock_paper_scissors: PAPER, ROCK, SCISSORS
    - directional: RIGHT, LEFT, ROTATE, DOWN
    Rules are checked in that order and the first match wins.
    """

    def __init__(self, config: Optional[ClassifierConfig] = None):
        """
        Initialize classifier.

        Args:
            config: Classification thresholds and vocabulary
        """
        self._config = config or ClassifierConfig()

    @property
    def vocabulary(self) -> Vocabulary:
        return self._config.vocabulary

    def classify(self, landmarks: Optional[LandmarkInput]) -> Optional[GestureLabel]:
        """
        Classify one frame.

        Args:
            landmarks: Landmark set, raw 21-point sequence, or None when no
                hand is in view.

        Returns:
            The matching gesture label, or None.

        Raises:
            InvalidInputError: If the landmarks are malformed.
        """
        if landmarks is None:
            return None

        landmarks = _as_landmark_set(landmarks)
        fingers = self.finger_states(landmarks)

        if self._config.vocabulary == Vocabulary.ROCK_PAPER_SCISSORS:
            return self._match_rock_paper_scissors(fingers)
        return self._match_directional(fingers, landmarks)

    def finger_states(self, landmarks: LandmarkInput) -> FingerState:
        """Compute which fingers are extended."""
        landmarks = _as_landmark_set(landmarks)
        margin = self._config.extension_margin

        others = [
            landmarks.get(tip)[1] < landmarks.get(mcp)[1] - margin
            for tip, mcp in _FINGER_JOINTS
        ]
        return FingerState(self._is_thumb_extended(landmarks), *others)

    def _is_thumb_extended(self, landmarks: LandmarkSet) -> bool:
        """
        Thumb extension by horizontal spread between tip and MCP.
        The thumb moves laterally, so vertical position says little about it.
        """
        dx = landmarks.thumb_tip[0] - landmarks.get(LandmarkSet.THUMB_MCP)[0]
        threshold = self._config.thumb_threshold
        side = self._config.thumb_side

        if side == ThumbSide.LEFT:
            return -dx > threshold
        if side == ThumbSide.RIGHT:
            return dx > threshold
        return abs(dx) > threshold

    @staticmethod
    def _match_rock_paper_scissors(fingers: FingerState) -> Optional[GestureLabel]:
        count = fingers.extended_count

        if count == 4:
            return GestureLabel.PAPER
        if count == 0:
            return GestureLabel.ROCK
        if fingers.index and fingers.middle and not fingers.ring and not fingers.pinky:
            return GestureLabel.SCISSORS
        return None

    def _match_directional(
        self, fingers: FingerState, landmarks: LandmarkSet
    ) -> Optional[GestureLabel]:
        count = fingers.extended_count

        # Fist (or a single finger)
        if count <= 1:
            return GestureLabel.RIGHT

        # Open hand
        if count >= 4 and fingers.index and fingers.middle:
            return GestureLabel.LEFT

        # V sign with the thumb tucked
        if (fingers.index and fingers.middle
                and not fingers.thumb and not fingers.ring and not fingers.pinky):
            return GestureLabel.ROTATE

        # Hand pointing down: wrist clearly below the middle finger base
        if landmarks.wrist[1] > landmarks.middle_mcp[1] + self._config.down_threshold:
            return GestureLabel.DOWN

        return None


def _as_landmark_set(landmarks: LandmarkInput) -> LandmarkSet:
    if isinstance(landmarks, LandmarkSet):
        return landmarks
    return LandmarkSet.from_points(landmarks)


def classify(
    landmarks: Optional[LandmarkInput],
    config: Optional[ClassifierConfig] = None,
) -> Optional[GestureLabel]:
    """Classify one frame with a throwaway classifier."""
    return GestureClassifier(config).classify(landmarks)
