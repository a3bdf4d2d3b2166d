"""
Poke gesture detection.
Edge-triggered state machine over per-tick finger classification.
"""
from contextlib import contextmanager
from enum import Enum, auto
from typing import Iterator, List, Optional

from .classifier import FingerStates, classify_fingers
from .config import DetectorConfig
from .events import GestureEvent
from .joints import (
    Handedness,
    HandSnapshot,
    UpdateSuccessFlags,
    UpdateType,
    has_update_success_flag,
    joints_flag_for,
)
from .logging_utils import get_logger
from .source import HandTrackingSource

logger = get_logger(__name__)


class GestureEdge(Enum):
    """Transition reported by the detector."""
    STARTED = auto()
    ENDED = auto()


class PokeGestureDetector:
    """
    Fires `gesture_started` / `gesture_ended` when one hand enters or
    leaves the poke pose.

    States:
    - Idle: is_poking is False (initial)
    - Active: is_poking is True

    Only ticks whose flags include the configured hand's joints are
    considered. Disabling stops delivery; unless `end_on_disable` is set,
    a detector disabled while Active does not fire its matching end.

    `disable()` drops the active source reference. A source passed to the
    constructor is kept as the default for a later `enable()` call.
    """

    def __init__(
        self,
        handedness: Handedness = Handedness.RIGHT,
        source: Optional[HandTrackingSource] = None,
        end_on_disable: bool = False,
    ):
        """
        Args:
            handedness: Hand to watch, fixed for the detector's lifetime
            source: Default tracking source used by `enable()`
            end_on_disable: Fire `gesture_ended` when disabled while Active
        """
        self._handedness = handedness
        self._default_source = source
        self._end_on_disable = end_on_disable

        self.gesture_started = GestureEvent(f"{handedness.name.lower()}_poke_started")
        self.gesture_ended = GestureEvent(f"{handedness.name.lower()}_poke_ended")

        self._source: Optional[HandTrackingSource] = None
        self._is_poking = False
        self._last_fingers: Optional[FingerStates] = None

    @property
    def handedness(self) -> Handedness:
        return self._handedness

    @property
    def is_poking(self) -> bool:
        return self._is_poking

    @property
    def is_enabled(self) -> bool:
        return self._source is not None

    @property
    def last_fingers(self) -> Optional[FingerStates]:
        """Finger classification from the last relevant tick."""
        return self._last_fingers

    def enable(self, source: Optional[HandTrackingSource] = None) -> bool:
        """
        Attach to a tracking source and start receiving ticks.

        Args:
            source: Source to attach to. Falls back to the one given at
                    construction.

        Returns:
            True if the detector is active on the requested source. False if
            no source was available, or if it is already enabled on a
            different source.
        """
        if self._source is not None:
            if source is not None and source is not self._source:
                logger.warning(
                    f"{self._handedness.name} detector is already enabled on another source; "
                    "call disable() before switching sources"
                )
                return False
            return True

        source = source or self._default_source
        if source is None:
            logger.warning(f"No hand tracking source available; {self._handedness.name} detector stays inactive")
            return False

        self._is_poking = False
        self._last_fingers = None
        self._source = source
        source.subscribe(self._on_updated_hands)
        logger.info(f"{self._handedness.name} poke detector enabled")
        return True

    def disable(self) -> None:
        """Detach from the tracking source."""
        if self._source is None:
            return

        self._source.unsubscribe(self._on_updated_hands)
        self._source = None
        logger.info(f"{self._handedness.name} poke detector disabled")

        if self._is_poking and self._end_on_disable:
            self._end_poke_gesture()
        self._is_poking = False

    @contextmanager
    def enabled(self, source: Optional[HandTrackingSource] = None) -> Iterator["PokeGestureDetector"]:
        """Enable for the duration of a `with` block."""
        self.enable(source)
        try:
            yield self
        finally:
            self.disable()

    def on_hand_update(
        self,
        hand: HandSnapshot,
        update_flags: UpdateSuccessFlags,
    ) -> Optional[GestureEdge]:
        """
        Process one tick for the configured hand.

        Args:
            hand: Joint snapshot of the configured hand
            update_flags: Which joint groups were refreshed this tick

        Returns:
            The transition that fired, or None.
        """
        if not has_update_success_flag(update_flags, joints_flag_for(self._handedness)):
            return None

        fingers = classify_fingers(hand)
        self._last_fingers = fingers
        was_poking = self._is_poking

        if fingers.is_poking and not was_poking:
            self._start_poke_gesture()
            return GestureEdge.STARTED
        if not fingers.is_poking and was_poking:
            self._end_poke_gesture()
            return GestureEdge.ENDED
        return None

    def _on_updated_hands(self, update_flags: UpdateSuccessFlags, update_type: UpdateType) -> None:
        if self._source is None:
            return
        if not has_update_success_flag(update_flags, joints_flag_for(self._handedness)):
            return
        self.on_hand_update(self._source.get_hand(self._handedness), update_flags)

    def _start_poke_gesture(self) -> None:
        self._is_poking = True
        logger.debug(f"{self._handedness.name} poke started")
        self.gesture_started.emit()

    def _end_poke_gesture(self) -> None:
        self._is_poking = False
        logger.debug(f"{self._handedness.name} poke ended")
        self.gesture_ended.emit()


def create_detectors(
    config: DetectorConfig,
    source: Optional[HandTrackingSource] = None,
) -> List[PokeGestureDetector]:
    """One detector per configured hand, sharing a source."""
    return [
        PokeGestureDetector(handedness, source=source, end_on_disable=config.end_on_disable)
        for handedness in config.handedness_list()
    ]
