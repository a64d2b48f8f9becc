"""
Background worker for hand tracking and gesture recognition.
Runs in a separate QThread to avoid blocking the UI.
"""
import logging
import time
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

from gestures.config import Config
from gestures.pipeline import GesturePipeline
from .hand_tracker import HandTracker

logger = logging.getLogger(__name__)


class WebcamWorker(QObject):
    """
    Worker class that owns the frame loop.
    Tracker, classifier and debouncer are only touched from this thread;
    the UI hears about results through signals.
    """
    # Signals
    frame_processed = pyqtSignal(object)  # Emits FrameResult
    gesture_fired = pyqtSignal(object)    # Emits GestureLabel
    frame_ready = pyqtSignal(object)      # Emits BGR numpy array with skeleton overlay
    error = pyqtSignal(str)

    PREVIEW_FPS = 15
    READ_RETRY_DELAY = 0.02  # Seconds to wait after the camera returned no frame

    def __init__(self, config: Config, parent=None, tracker: Optional[HandTracker] = None):
        super().__init__(parent)
        self._config = config
        self._tracker: Optional[HandTracker] = tracker
        self._last_preview_time = 0.0
        self._pipeline: Optional[GesturePipeline] = None
        self._is_running = False

    def start_process(self):
        """Main processing loop. One classification and one debounce update per frame."""
        if self._tracker is None:
            self._tracker = HandTracker(self._config)
        self._pipeline = GesturePipeline(self._config)
        self._pipeline.on_gesture(self.gesture_fired.emit)

        if not self._tracker.start():
            self.error.emit("Could not start hand tracker (camera or model missing)")
            return

        self._is_running = True

        try:
            while self._is_running:
                self._process_frame()

        except Exception as e:
            logger.exception("Worker loop failed")
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            if self._tracker:
                self._tracker.stop()

    def _process_frame(self):
        """Run one tracker read through the pipeline and emit the result."""
        landmarks = self._tracker.get_landmarks()
        if not self._tracker.frame_read:
            # No frame is not the same as no hand; leave the debouncer alone
            time.sleep(self.READ_RETRY_DELAY)
            return None

        now = time.perf_counter()
        result = self._pipeline.process(landmarks, now)
        self.frame_processed.emit(result)

        if self._config.ui.show_preview and now - self._last_preview_time >= 1.0 / self.PREVIEW_FPS:
            frame = self._tracker.get_frame_with_landmarks(
                landmarks, black_background=self._config.ui.black_background
            )
            if frame is not None:
                self.frame_ready.emit(frame)
            self._last_preview_time = now

        return result

    def stop_process(self):
        """Signal the loop to stop; resources are released in the worker thread."""
        self._is_running = False
