"""
Background worker for webcam hand tracking and poke detection.
Runs in a separate QThread; forwards gesture transitions as Qt signals.
"""
import time
from typing import List, Optional
from PyQt5.QtCore import QObject, pyqtSignal

from ..config import Config
from ..detector import PokeGestureDetector, create_detectors
from ..logging_utils import get_logger
from ..source import HandTrackingSource
from .hand_tracker import HandTracker

logger = get_logger(__name__)


class DetectorWorker(QObject):
    """
    Worker class that owns the hand tracker and the detectors.
    Emits signals for UI updates.
    """
    # Signals carry the hand name ("left" / "right")
    gesture_started = pyqtSignal(str)
    gesture_ended = pyqtSignal(str)
    error = pyqtSignal(str)

    def __init__(self, config: Config, tracker: Optional[HandTracker] = None, parent=None):
        """
        Args:
            config: pokegesture configuration
            tracker: Hand tracker polled by `start_process()`. Defaults to a
                     webcam HandTracker built from `config` when processing starts.
        """
        super().__init__(parent)
        if tracker is not None and not isinstance(tracker, HandTracker):
            raise TypeError(f"tracker must be a HandTracker, got {type(tracker).__name__}")
        self._config = config
        self._tracker = tracker
        self._detectors: List[PokeGestureDetector] = []
        self._is_running = False

    @property
    def detectors(self) -> List[PokeGestureDetector]:
        return list(self._detectors)

    @property
    def is_running(self) -> bool:
        return self._is_running

    def attach(self, source: HandTrackingSource) -> None:
        """Create the configured detectors on `source` and wire their events."""
        self.detach()
        self._detectors = create_detectors(self._config.detector, source)
        for detector in self._detectors:
            name = detector.handedness.name.lower()
            detector.gesture_started.connect(lambda name=name: self.gesture_started.emit(name))
            detector.gesture_ended.connect(lambda name=name: self.gesture_ended.emit(name))
            detector.enable()

    def detach(self) -> None:
        for detector in self._detectors:
            detector.disable()
            detector.gesture_started.clear()
            detector.gesture_ended.clear()
        self._detectors = []

    def start_process(self):
        """Main processing loop. Runs in worker thread at camera rate."""
        tracker = self._tracker if self._tracker is not None else HandTracker(self._config)
        if not tracker.start():
            self.error.emit("Could not start hand tracker")
            return

        self.attach(tracker)
        self._is_running = True

        min_interval = 1.0 / max(1, self._config.camera.fps)

        try:
            while self._is_running:
                loop_start = time.perf_counter()

                tracker.poll()

                elapsed = time.perf_counter() - loop_start
                sleep_time = min_interval - elapsed
                if sleep_time > 0:
                    time.sleep(sleep_time)

        except Exception as e:
            logger.exception("Worker loop failed")
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            self.detach()
            tracker.stop()

    def stop_process(self):
        """Signal the loop to stop; resources are released in the worker thread."""
        self._is_running = False
