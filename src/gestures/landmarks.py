"""
Hand landmark container shared by the tracker and the classifier.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Tuple
import math

from .exceptions import InvalidInputError

Point3D = Tuple[float, float, float]

NUM_LANDMARKS = 21


@dataclass(frozen=True)
class LandmarkSet:
    """
    One hand skeleton in normalized image coordinates.

    Attributes:
        points: 21 (x, y, z) tuples; x and y in 0-1, z relative depth
        handedness: 'Left', 'Right' or 'Unknown'
        confidence: Detection confidence 0-1
    """
    points: Tuple[Point3D, ...]
    handedness: str = "Unknown"
    confidence: float = 1.0

    # MediaPipe landmark indices
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    def __post_init__(self):
        object.__setattr__(self, "points", _to_points(self.points))

    @classmethod
    def from_points(
        cls,
        points: Iterable[Any],
        handedness: str = "Unknown",
        confidence: float = 1.0,
    ) -> "LandmarkSet":
        """
        Build a validated landmark set.

        Args:
            points: 21 items, each an (x, y) or (x, y, z) sequence or an
                object with x/y(/z) attributes such as a MediaPipe landmark.
            handedness: Handedness label reported by the detector.
            confidence: Detection confidence reported by the detector.

        Raises:
            InvalidInputError: On wrong count or missing/non-finite coordinates.
        """
        return cls(
            points=points,
            handedness=handedness,
            confidence=confidence,
        )

    def get(self, index: int) -> Point3D:
        """Get landmark by index."""
        return self.points[index]

    @property
    def wrist(self) -> Point3D:
        return self.points[self.WRIST]

    @property
    def thumb_tip(self) -> Point3D:
        return self.points[self.THUMB_TIP]

    @property
    def index_tip(self) -> Point3D:
        return self.points[self.INDEX_TIP]

    @property
    def middle_tip(self) -> Point3D:
        return self.points[self.MIDDLE_TIP]

    @property
    def ring_tip(self) -> Point3D:
        return self.points[self.RING_TIP]

    @property
    def pinky_tip(self) -> Point3D:
        return self.points[self.PINKY_TIP]

    @property
    def middle_mcp(self) -> Point3D:
        return self.points[self.MIDDLE_MCP]


def _to_points(points: Any) -> Tuple[Point3D, ...]:
    """Validate the point count and coerce every point."""
    if points is None:
        raise InvalidInputError("Landmark points must not be None")
    try:
        items = list(points)
    except TypeError:
        raise InvalidInputError(
            f"Landmark points must be iterable, got {type(points).__name__}"
        ) from None

    if len(items) != NUM_LANDMARKS:
        raise InvalidInputError(
            f"Expected {NUM_LANDMARKS} landmarks, got {len(items)}"
        )

    return tuple(_to_point(i, item) for i, item in enumerate(items))


def _to_point(index: int, item: Any) -> Point3D:
    """Coerce one landmark to an (x, y, z) float tuple."""
    if hasattr(item, "x") and hasattr(item, "y"):
        coords = [item.x, item.y, getattr(item, "z", 0.0)]
    else:
        try:
            coords = list(item)
        except TypeError:
            raise InvalidInputError(
                f"Landmark {index} is not a point: {item!r}"
            ) from None
        if len(coords) == 2:
            coords.append(0.0)
        elif len(coords) != 3:
            raise InvalidInputError(
                f"Landmark {index} must have 2 or 3 coordinates, got {len(coords)}"
            )

    values = []
    for c in coords:
        if c is None or isinstance(c, bool):
            raise InvalidInputError(f"Landmark {index} has a missing coordinate")
        try:
            value = float(c)
        except (TypeError, ValueError):
            raise InvalidInputError(
                f"Landmark {index} has a non-numeric coordinate: {c!r}"
            ) from None
        if not math.isfinite(value):
            raise InvalidInputError(f"Landmark {index} has a non-finite coordinate")
        values.append(value)

    return (values[0], values[1], values[2])
