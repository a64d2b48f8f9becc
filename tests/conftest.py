import pytest

from gestures.landmarks import LandmarkSet

# Finger base (MCP) row and tip rows for synthetic hands
MCP_Y = 0.6
TIP_UP_Y = 0.4
TIP_CURLED_Y = 0.65
THUMB_MCP_X = 0.5


def build_hand(
    thumb=False,
    index=False,
    middle=False,
    ring=False,
    pinky=False,
    wrist_y=0.7,
    thumb_dx=-0.2,
):
    """
    Upright synthetic hand. Every finger is either clearly extended or
    clearly curled; the wrist sits 0.1 below the middle MCP by default.
    """
    points = [(0.5, 0.5, 0.0)] * 21
    points[LandmarkSet.WRIST] = (0.5, wrist_y, 0.0)

    points[LandmarkSet.THUMB_MCP] = (THUMB_MCP_X, 0.62, 0.0)
    thumb_x = THUMB_MCP_X + thumb_dx if thumb else THUMB_MCP_X - 0.02
    points[LandmarkSet.THUMB_TIP] = (thumb_x, 0.55, 0.0)

    fingers = [
        (LandmarkSet.INDEX_MCP, LandmarkSet.INDEX_TIP, 0.42, index),
        (LandmarkSet.MIDDLE_MCP, LandmarkSet.MIDDLE_TIP, 0.5, middle),
        (LandmarkSet.RING_MCP, LandmarkSet.RING_TIP, 0.58, ring),
        (LandmarkSet.PINKY_MCP, LandmarkSet.PINKY_TIP, 0.66, pinky),
    ]
    for mcp, tip, x, extended in fingers:
        points[mcp] = (x, MCP_Y, 0.0)
        points[tip] = (x, TIP_UP_Y if extended else TIP_CURLED_Y, 0.0)

    return LandmarkSet.from_points(points, handedness="Right", confidence=0.9)


@pytest.fixture
def make_hand():
    return build_hand
