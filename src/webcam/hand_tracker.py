"""
MediaPipe Hand Tracker wrapper using the Tasks API.
Handles camera capture and hand landmark detection.
"""
from pathlib import Path
from typing import Optional
import logging
import time
import cv2
import numpy as np
import mediapipe as mp

from gestures.config import Config, CameraConfig, MediaPipeConfig
from gestures.landmarks import LandmarkSet

logger = logging.getLogger(__name__)

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)

# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]


class HandTracker:
    """
    MediaPipe hand tracking wrapper with camera management.
    Tracks a single hand in VIDEO mode and yields LandmarkSet values.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        """
        Initialize hand tracker.

        Args:
            config: AirGesture configuration
            model_path: Path to hand_landmarker.task model file
        """
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        self._model_path = Path(model_path) if model_path else self.DEFAULT_MODEL_PATH

        # Lazy initialization
        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        # State
        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._frame_count = 0
        self._frame_read = False
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1

    def start(self) -> bool:
        """
        Start camera capture and MediaPipe.

        Returns:
            True if started successfully, False otherwise.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            logger.error("Model file not found: %s (download from %s)", self._model_path, MODEL_URL)
            return False

        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            logger.error("Could not open camera device %d", self._camera_config.device_id)
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)

        # Only one hand is ever classified, whatever the config says
        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(self._model_path)),
            running_mode=VisionRunningMode.VIDEO,
            num_hands=1,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )

        self._landmarker = HandLandmarker.create_from_options(options)
        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        logger.info(
            "Hand tracker started (camera %d, %dx%d)",
            self._camera_config.device_id,
            self._camera_config.width,
            self._camera_config.height,
        )
        return True

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

        self._last_frame = None
        logger.info("Hand tracker stopped after %d frames", self._frame_count)

    def get_landmarks(self) -> Optional[LandmarkSet]:
        """
        Capture a frame and detect hand landmarks.

        Returns:
            The first detected hand, or None if no hand (or no frame,
            see frame_read).
        """
        self._frame_read = False
        if not self._is_running or self._cap is None or self._landmarker is None:
            return None

        ret, frame = self._cap.read()
        if not ret:
            return None

        self._frame_read = True
        self._frame_count += 1

        if self._camera_config.mirror:
            frame = cv2.flip(frame, 1)
        self._last_frame = frame

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # VIDEO mode needs strictly monotonic timestamps
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)

        if not result.hand_landmarks:
            return None

        handedness = result.handedness[0][0]
        return LandmarkSet.from_points(
            result.hand_landmarks[0],
            handedness=handedness.category_name,
            confidence=handedness.score,
        )

    def get_frame_with_landmarks(
        self,
        landmarks: Optional[LandmarkSet] = None,
        black_background: bool = False
    ) -> Optional[np.ndarray]:
        """
        Get last frame with optional skeleton overlay.

        Args:
            landmarks: If provided, draw landmarks on frame.
            black_background: If True, draw on black instead of camera image.

        Returns:
            Frame with landmarks drawn, or None if no frame available.
        """
        if self._last_frame is None:
            return None

        if black_background:
            frame = np.zeros_like(self._last_frame)
        else:
            frame = self._last_frame.copy()

        if landmarks is not None:
            h, w = frame.shape[:2]

            for start_idx, end_idx in HAND_CONNECTIONS:
                start = landmarks.get(start_idx)
                end = landmarks.get(end_idx)
                start_pos = (int(start[0] * w), int(start[1] * h))
                end_pos = (int(end[0] * w), int(end[1] * h))
                cv2.line(frame, start_pos, end_pos, (0, 255, 0), 4)

            for x, y, _z in landmarks.points:
                cv2.circle(frame, (int(x * w), int(y * h)), 4, (0, 0, 255), -1)

        return frame

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def frame_read(self) -> bool:
        """Whether the last get_landmarks() call got a frame from the camera."""
        return self._frame_read
