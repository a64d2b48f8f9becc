"""
Status window - camera preview with hand and gesture status.
Pure consumer of worker signals; holds no recognition state.
"""
from typing import Optional
from PyQt5.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage, QPixmap
import numpy as np

from gestures.classifier import GestureLabel
from gestures.pipeline import FrameResult

HAND_DETECTED = "Hand: detected"
HAND_NOT_DETECTED = "Hand: not detected"
NO_LABEL = "-"


class StatusWindow(QMainWindow):
    """
    Shows the skeleton preview, whether a hand is visible, the label seen
    in the current frame and the last confirmed gesture.
    """

    def __init__(self, title: str = "AirGesture", parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self._fired_count = 0
        self._setup_ui()

    def _setup_ui(self):
        central = QWidget(self)
        layout = QVBoxLayout(central)

        self.preview = QLabel()
        self.preview.setAlignment(Qt.AlignCenter)
        self.preview.setMinimumSize(640, 480)
        self.preview.setStyleSheet("background-color: black;")
        layout.addWidget(self.preview)

        status_row = QHBoxLayout()
        self.hand_status = QLabel(HAND_NOT_DETECTED)
        self.gesture_type = QLabel(f"Gesture: {NO_LABEL}")
        status_row.addWidget(self.hand_status)
        status_row.addStretch(1)
        status_row.addWidget(self.gesture_type)
        layout.addLayout(status_row)

        self.last_fired = QLabel(f"Last event: {NO_LABEL}")
        self.last_fired.setStyleSheet("font-size: 20px; font-weight: bold;")
        layout.addWidget(self.last_fired)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #c0392b;")
        layout.addWidget(self.error_label)

        self.setCentralWidget(central)

    def update_status(self, result: FrameResult):
        """Reflect one processed frame."""
        if result.hand_present:
            self.hand_status.setText(HAND_DETECTED)
        else:
            self.hand_status.setText(HAND_NOT_DETECTED)
        self.gesture_type.setText(f"Gesture: {_label_text(result.label)}")

    def show_gesture(self, label: GestureLabel):
        """Reflect a confirmed gesture event."""
        self._fired_count += 1
        self.last_fired.setText(f"Last event: {label.value} (#{self._fired_count})")

    def show_error(self, message: str):
        self.error_label.setText(message)

    def set_webcam_frame(self, frame: Optional[np.ndarray]):
        """
        Update the preview.

        Args:
            frame: BGR numpy array with the skeleton drawn by HandTracker
        """
        if frame is None:
            self.preview.clear()
            return

        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        bytes_per_line = ch * w
        qimg = QImage(rgb.data, w, h, bytes_per_line, QImage.Format_RGB888)
        self.preview.setPixmap(QPixmap.fromImage(qimg))


def _label_text(label: Optional[GestureLabel]) -> str:
    return label.value if label is not None else NO_LABEL
