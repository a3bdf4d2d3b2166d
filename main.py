"""
pokegesture - Poke Gesture Detection from Webcam Hand Tracking

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="pokegesture - Poke Gesture Detection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--hand",
        choices=["left", "right", "both"],
        default=None,
        help="Hand(s) to watch (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show camera preview with landmarks and finger states",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides config)",
    )

    return parser.parse_args(argv)


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with landmarks.
    Detection runs on the main thread.
    """
    import cv2
    from pokegesture import create_detectors
    from pokegesture.webcam.hand_tracker import HandTracker

    tracker = HandTracker(config)
    detectors = create_detectors(config.detector, tracker)

    for detector in detectors:
        name = detector.handedness.name
        detector.gesture_started.connect(lambda name=name: print(f"[{tracker.frame_count:5d}] {name} POKE START"))
        detector.gesture_ended.connect(lambda name=name: print(f"[{tracker.frame_count:5d}] {name} POKE END"))

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracker")
        return 1

    for detector in detectors:
        detector.enable()

    try:
        while True:
            tracker.poll()

            frame = tracker.get_frame_with_landmarks()
            if frame is not None:
                for i, detector in enumerate(detectors):
                    fingers = detector.last_fingers
                    state = "POKING" if detector.is_poking else "idle"
                    text = f"{detector.handedness.name}: {state}"
                    if fingers is not None:
                        text += (
                            f"  T{fingers.thumb:d} I{fingers.index:d} M{fingers.middle:d}"
                            f" R{fingers.ring:d} L{fingers.little:d}"
                        )
                    cv2.putText(
                        frame, text, (10, 30 + i * 30),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 255, 0), 2
                    )

                cv2.imshow("pokegesture Debug", frame)

            # Check for quit
            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        for detector in detectors:
            detector.disable()
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_worker_mode(config):
    """Run detection in a background QThread and print transitions."""
    import signal
    import atexit
    from PyQt5.QtCore import QCoreApplication, QThread, Qt
    from pokegesture.webcam.worker import DetectorWorker

    app = QCoreApplication(sys.argv)

    thread = QThread()
    worker = DetectorWorker(config)
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

    def handle_error(msg):
        print(f"WORKER ERROR: {msg}")
        app.quit()

    # Queued connections deliver transitions on the main thread
    thread.started.connect(worker.start_process)
    worker.gesture_started.connect(lambda hand: print(f"Poke started ({hand} hand)"), Qt.QueuedConnection)
    worker.gesture_ended.connect(lambda hand: print(f"Poke ended ({hand} hand)"), Qt.QueuedConnection)
    worker.error.connect(handle_error, Qt.QueuedConnection)

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

    from pokegesture import load_config
    from pokegesture.logging_utils import setup_logging

    config = load_config(args.config)

    # Apply CLI overrides
    if args.hand:
        config.detector.hands = ["left", "right"] if args.hand == "both" else [args.hand]
    if args.log_level:
        config.logging.level = args.log_level

    setup_logging(config.logging.level, config.logging.log_file, config.logging.format)

    hands = ", ".join(h.name.lower() for h in config.detector.handedness_list())
    print("pokegesture starting...")
    print(f"  Hands: {hands}")
    print(f"  Camera: {config.camera.device_id}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_worker_mode(config)


if __name__ == "__main__":
    sys.exit(main())
