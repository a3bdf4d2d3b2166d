import pytest

pytest.importorskip("cv2")
pytest.importorskip("mediapipe")

from pokegesture.config import Config
from pokegesture.detector import PokeGestureDetector
from pokegesture.joints import Handedness, JointId, UpdateSuccessFlags
from pokegesture.source import flags_for_hands
from pokegesture.webcam.hand_tracker import HandTracker

from test_landmarks import make_landmarks


@pytest.fixture
def tracker(tmp_path):
    return HandTracker(Config(), model_path=tmp_path / "missing.task")


def test_start_fails_without_model(tracker):
    assert tracker.start() is False
    assert tracker.is_running is False


def test_poll_before_start_returns_none(tracker):
    assert tracker.poll() is None
    assert tracker.get_frame_with_landmarks() is None


def test_update_from_landmarks_sets_flags(tracker):
    received = []
    tracker.subscribe(lambda flags, update_type: received.append(flags))

    flags = tracker.update_from_landmarks([make_landmarks("Right")])

    assert flags == flags_for_hands(False, True)
    assert received == [flags]
    assert tracker.get_joint_position(Handedness.RIGHT, JointId.WRIST) == (0.5, 0.9, 0.0)
    assert tracker.get_hand(Handedness.LEFT).is_empty


def test_lost_hand_becomes_untracked(tracker):
    tracker.update_from_landmarks([make_landmarks("Left")])
    flags = tracker.update_from_landmarks([])

    assert flags == UpdateSuccessFlags.NONE
    assert tracker.get_hand(Handedness.LEFT).is_empty


def test_most_confident_detection_wins(tracker):
    weak = make_landmarks("Right", poke=False)
    weak.confidence = 0.3
    strong = make_landmarks("Right", poke=True)
    strong.confidence = 0.95

    tracker.update_from_landmarks([strong, weak])

    assert tracker.get_hand(Handedness.RIGHT).position(JointId.INDEX_TIP) == strong.get(8)


def test_unmirrored_camera_swaps_hands(tmp_path):
    config = Config()
    config.camera.mirror = False
    tracker = HandTracker(config, model_path=tmp_path / "missing.task")

    tracker.update_from_landmarks([make_landmarks("Left")])

    assert not tracker.get_hand(Handedness.RIGHT).is_empty
    assert tracker.get_hand(Handedness.LEFT).is_empty


def test_detector_on_tracker(tracker):
    detector = PokeGestureDetector(Handedness.RIGHT, tracker)
    detector.enable()
    events = []
    detector.gesture_started.connect(lambda: events.append("start"))
    detector.gesture_ended.connect(lambda: events.append("end"))

    tracker.update_from_landmarks([make_landmarks("Right", poke=True)])
    # Losing the right hand is an irrelevant tick: state is kept
    tracker.update_from_landmarks([])
    tracker.update_from_landmarks([make_landmarks("Right", poke=False)])

    assert events == ["start", "end"]
