import pytest

pytest.importorskip("PyQt5.QtCore")
pytest.importorskip("cv2")
pytest.importorskip("mediapipe")

from pokegesture.config import Config, DetectorConfig
from pokegesture.source import ManualHandSource
from pokegesture.joints import Handedness
from pokegesture.webcam import worker as worker_module
from pokegesture.webcam.hand_tracker import HandTracker
from pokegesture.webcam.worker import DetectorWorker

from conftest import make_hand
from test_landmarks import make_landmarks


class ScriptedTracker(HandTracker):
    """HandTracker that replays landmark frames instead of reading a camera."""

    def __init__(self, config, frames, start_ok=True):
        super().__init__(config)
        self.frames = list(frames)
        self.start_ok = start_ok
        self.started = False
        self.stopped = False
        self.polls = 0
        self.on_exhausted = None

    def start(self):
        self.started = self.start_ok
        return self.start_ok

    def poll(self):
        self.polls += 1
        if not self.frames:
            self.on_exhausted()
            return None
        return self.update_from_landmarks(self.frames.pop(0))

    def stop(self):
        self.stopped = True


def make_config(hands=("left", "right")):
    config = Config(detector=DetectorConfig(hands=list(hands)))
    config.camera.fps = 1000
    return config


@pytest.fixture
def worker():
    return DetectorWorker(make_config())


def test_rejects_non_tracker_source():
    with pytest.raises(TypeError):
        DetectorWorker(make_config(), tracker=ManualHandSource())


def test_start_process_polls_injected_tracker():
    config = make_config(hands=["right"])
    tracker = ScriptedTracker(config, [
        [make_landmarks("Right", poke=True)],
        [make_landmarks("Right", poke=True)],
        [make_landmarks("Right", poke=False)],
    ])
    worker = DetectorWorker(config, tracker=tracker)
    tracker.on_exhausted = worker.stop_process
    started, ended = [], []
    worker.gesture_started.connect(started.append)
    worker.gesture_ended.connect(ended.append)

    worker.start_process()

    assert tracker.started and tracker.stopped
    assert tracker.polls == 4
    assert started == ["right"]
    assert ended == ["right"]
    # Loop exit detaches every detector from the tracker
    assert worker.detectors == []
    assert tracker.subscriber_count == 0
    assert worker.is_running is False


def test_start_process_builds_webcam_tracker_by_default(monkeypatch):
    built = []

    def factory(config):
        tracker = ScriptedTracker(config, [])
        tracker.on_exhausted = lambda: worker.stop_process()
        built.append(tracker)
        return tracker

    monkeypatch.setattr(worker_module, "HandTracker", factory)
    worker = DetectorWorker(make_config())

    worker.start_process()

    assert len(built) == 1
    assert built[0].started and built[0].stopped


def test_start_failure_emits_error():
    config = make_config()
    tracker = ScriptedTracker(config, [], start_ok=False)
    worker = DetectorWorker(config, tracker=tracker)
    errors = []
    worker.error.connect(errors.append)

    worker.start_process()

    assert errors == ["Could not start hand tracker"]
    assert tracker.polls == 0
    assert worker.detectors == []


def test_attach_creates_enabled_detectors(worker):
    source = ManualHandSource()
    worker.attach(source)

    assert [d.handedness for d in worker.detectors] == [Handedness.LEFT, Handedness.RIGHT]
    assert all(d.is_enabled for d in worker.detectors)
    assert source.subscriber_count == 2


def test_transitions_become_signals(worker):
    source = ManualHandSource()
    worker.attach(source)
    started, ended = [], []
    worker.gesture_started.connect(started.append)
    worker.gesture_ended.connect(ended.append)

    source.push(left=make_hand(Handedness.LEFT))
    source.push(left=make_hand(Handedness.LEFT, extended=set()))

    assert started == ["left"]
    assert ended == ["left"]


def test_detach_disables_detectors(worker):
    source = ManualHandSource()
    worker.attach(source)
    detectors = worker.detectors

    worker.detach()

    assert worker.detectors == []
    assert not any(d.is_enabled for d in detectors)
    assert source.subscriber_count == 0
