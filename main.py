"""
AirGesture - Dwell-confirmed hand gesture commands from a webcam

Entry point for the application.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="AirGesture - Hand gesture commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--vocabulary",
        choices=["directional", "rock_paper_scissors"],
        default=None,
        help="Gesture vocabulary (overrides config)",
    )

    parser.add_argument(
        "--discipline",
        choices=["repeat", "single"],
        default=None,
        help="Firing discipline for held gestures (overrides config)",
    )

    parser.add_argument(
        "--dwell-ms",
        type=float,
        default=None,
        help="Dwell time in milliseconds before a gesture fires (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show an OpenCV window instead of the Qt status window",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable info logging",
    )

    return parser.parse_args(argv)


def build_config(args):
    """Load config and apply CLI overrides."""
    from gestures import config_from_dict, read_config_data

    data = read_config_data(args.config)

    # Overrides go into the YAML mapping so the vocabulary preset only fills
    # values the file leaves out
    if args.vocabulary:
        data["gestures"] = {**(data.get("gestures") or {}), "vocabulary": args.vocabulary}
    debounce = dict(data.get("debounce") or {})
    if args.dwell_ms is not None:
        debounce["dwell_ms"] = args.dwell_ms
    if args.discipline:
        debounce["discipline"] = args.discipline
    data["debounce"] = debounce

    return config_from_dict(data)


def run_webcam_debug(config):
    """
    Run in debug mode - shows camera feed with landmarks and status text.
    """
    import time
    import cv2
    from gestures import GesturePipeline
    from webcam import HandTracker, WebcamWorker

    tracker = HandTracker(config)
    pipeline = GesturePipeline(config)
    pipeline.on_gesture(lambda label: print(f"[{tracker.frame_count:5d}] {label.value}"))

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracker")
        return 1

    try:
        while True:
            landmarks = tracker.get_landmarks()
            if not tracker.frame_read:
                time.sleep(WebcamWorker.READ_RETRY_DELAY)
                continue
            result = pipeline.process(landmarks)

            frame = tracker.get_frame_with_landmarks(
                landmarks, black_background=config.ui.black_background
            )

            if frame is not None:
                hand_text = "Hand: detected" if result.hand_present else "Hand: not detected"
                label_text = result.label.value if result.label else "-"
                cv2.putText(
                    frame, hand_text, (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.8, (255, 255, 255), 2
                )
                cv2.putText(
                    frame, f"Gesture: {label_text}", (10, 60),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 255, 0), 2
                )
                cv2.imshow("AirGesture Debug", frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_webcam_mode(config):
    """Run with the Qt status window; tracking runs in a worker thread."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from webcam import WebcamWorker
    from ui import StatusWindow

    app = QApplication(sys.argv)

    window = StatusWindow(title=config.ui.window_title)
    window.show()

    thread = QThread()
    worker = WebcamWorker(config)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    def handle_gesture(label):
        print(f"Gesture: {label.value}")
        window.show_gesture(label)

    # Queued connections keep UI updates on the main thread
    thread.started.connect(worker.start_process)
    worker.frame_processed.connect(window.update_status, Qt.QueuedConnection)
    worker.gesture_fired.connect(handle_gesture, Qt.QueuedConnection)
    worker.frame_ready.connect(window.set_webcam_frame, Qt.QueuedConnection)
    worker.error.connect(window.show_error, Qt.QueuedConnection)
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)

    return result


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    from gestures import ConfigurationError

    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        return 2

    print("AirGesture starting...")
    print(f"  Vocabulary: {config.gestures.vocabulary.value}")
    print(f"  Dwell: {config.debounce.dwell_ms:.0f} ms ({config.debounce.discipline.value}-fire)")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_webcam_mode(config)


if __name__ == "__main__":
    sys.exit(main())
