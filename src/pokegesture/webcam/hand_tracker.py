"""
MediaPipe hand tracking source using the Tasks API.
Handles camera capture and delivers one update tick per processed frame.
"""
from pathlib import Path
from typing import Dict, List, Optional
import time
import cv2
import numpy as np
import mediapipe as mp

from ..config import Config, CameraConfig, MediaPipeConfig
from ..joints import Handedness, HandSnapshot, UpdateSuccessFlags, UpdateType
from ..logging_utils import get_logger
from ..source import HandTrackingSource, flags_for_hands
from .landmarks import HAND_CONNECTIONS, HandLandmarks

logger = get_logger(__name__)

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode


class HandTracker(HandTrackingSource):
    """
    Webcam + MediaPipe hand landmarker as a tracking source.

    Call `poll()` once per frame from the thread that owns the detectors;
    subscribers are notified synchronously from inside `poll()`.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        """
        Args:
            config: pokegesture configuration
            model_path: Path to hand_landmarker.task model file
        """
        super().__init__()
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        if model_path is None and self._mp_config.model_path:
            model_path = Path(self._mp_config.model_path)
        self._model_path = Path(model_path) if model_path else self.DEFAULT_MODEL_PATH

        # Lazy initialization
        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        # State
        self._is_running = False
        self._last_frame: Optional[np.ndarray] = None
        self._last_detections: List[HandLandmarks] = []
        self._hands: Dict[Handedness, HandSnapshot] = {
            Handedness.LEFT: HandSnapshot.empty(Handedness.LEFT),
            Handedness.RIGHT: HandSnapshot.empty(Handedness.RIGHT),
        }
        self._frame_count = 0
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
            logger.error(f"Model file not found: {self._model_path}")
            logger.error("Download from: https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task")
            return False

        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            logger.error(f"Could not open camera {self._camera_config.device_id}")
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(self._model_path)),
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._mp_config.max_num_hands,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_hand_presence_confidence=self._mp_config.min_presence_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )

        self._landmarker = HandLandmarker.create_from_options(options)
        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        logger.info(f"Hand tracker started (camera {self._camera_config.device_id}, model {self._model_path.name})")
        return True

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        was_running = self._is_running
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

        self._last_frame = None
        self._last_detections = []
        if was_running:
            logger.info("Hand tracker stopped")

    def get_hand(self, handedness: Handedness) -> HandSnapshot:
        return self._hands[handedness]

    def poll(self) -> Optional[UpdateSuccessFlags]:
        """
        Capture one frame, refresh hand snapshots and notify subscribers.

        Returns:
            Update flags delivered this tick, or None if no frame was read.
        """
        if not self._is_running or self._cap is None or self._landmarker is None:
            return None

        ret, frame = self._cap.read()
        if not ret:
            logger.warning("Camera returned no frame")
            return None

        self._frame_count += 1

        if self._camera_config.mirror:
            frame = cv2.flip(frame, 1)
        self._last_frame = frame

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # Strictly monotonic timestamp required by VIDEO mode
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        detections = [
            HandLandmarks(
                landmarks=[(lm.x, lm.y, lm.z) for lm in hand_landmarks],
                handedness=handedness[0].category_name,
                confidence=handedness[0].score,
            )
            for hand_landmarks, handedness in zip(result.hand_landmarks, result.handedness)
        ]
        return self.update_from_landmarks(detections)

    def update_from_landmarks(
        self,
        detections: List[HandLandmarks],
        update_type: UpdateType = UpdateType.DYNAMIC,
    ) -> UpdateSuccessFlags:
        """
        Store detections as the current hands and deliver one tick.

        Hands not present in `detections` become untracked.
        """
        swap = not self._camera_config.mirror
        hands = {
            Handedness.LEFT: HandSnapshot.empty(Handedness.LEFT),
            Handedness.RIGHT: HandSnapshot.empty(Handedness.RIGHT),
        }
        # Ascending confidence: the most confident detection per side wins
        for detection in sorted(detections, key=lambda d: d.confidence):
            snapshot = detection.to_snapshot(swap=swap)
            hands[snapshot.handedness] = snapshot

        self._hands = hands
        self._last_detections = list(detections)

        flags = flags_for_hands(
            not hands[Handedness.LEFT].is_empty,
            not hands[Handedness.RIGHT].is_empty,
        )
        self._notify(flags, update_type)
        return flags

    def get_frame_with_landmarks(self, black_background: bool = False) -> Optional[np.ndarray]:
        """
        Get last frame with the last detections drawn, for debugging.

        Args:
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

        h, w = frame.shape[:2]
        for landmarks in self._last_detections:
            for x, y, _ in landmarks.landmarks:
                cv2.circle(frame, (int(x * w), int(y * h)), 5, (0, 255, 0), -1)

            for start_idx, end_idx in HAND_CONNECTIONS:
                start = landmarks.landmarks[start_idx]
                end = landmarks.landmarks[end_idx]
                start_pos = (int(start[0] * w), int(start[1] * h))
                end_pos = (int(end[0] * w), int(end[1] * h))
                cv2.line(frame, start_pos, end_pos, (0, 255, 0), 2)

        return frame

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frame_count(self) -> int:
        return self._frame_count
