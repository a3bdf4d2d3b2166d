"""
Hand tracking sources.

A source delivers update ticks to subscribers and gives random access to
the latest joint positions of each hand.
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from .joints import (
    Handedness,
    HandSnapshot,
    JointId,
    UpdateSuccessFlags,
    UpdateType,
    Vec3,
)
from .logging_utils import get_logger

logger = get_logger(__name__)

UpdateCallback = Callable[[UpdateSuccessFlags, UpdateType], None]


def flags_for_hands(left_seen: bool, right_seen: bool) -> UpdateSuccessFlags:
    """Update flags for a tick in which the given hands were refreshed."""
    flags = UpdateSuccessFlags.NONE
    if left_seen:
        flags |= UpdateSuccessFlags.LEFT_HAND_ROOT_POSE | UpdateSuccessFlags.LEFT_HAND_JOINTS
    if right_seen:
        flags |= UpdateSuccessFlags.RIGHT_HAND_ROOT_POSE | UpdateSuccessFlags.RIGHT_HAND_JOINTS
    return flags


class HandTrackingSource(ABC):
    """
    Base class for anything that produces hand joint updates.

    Subclasses store the latest snapshot per hand and call `_notify()` once
    per tick, on the thread that produced the data.
    """

    def __init__(self):
        self._subscribers: List[UpdateCallback] = []

    def subscribe(self, callback: UpdateCallback) -> None:
        """Register `callback(update_flags, update_type)` for every tick."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: UpdateCallback) -> None:
        """Stop delivering ticks to `callback`. Unknown callbacks are ignored."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @abstractmethod
    def get_hand(self, handedness: Handedness) -> HandSnapshot:
        """Latest snapshot of one hand."""

    def get_joint_position(self, handedness: Handedness, joint_id: JointId) -> Optional[Vec3]:
        """Latest position of one joint, or None if untracked."""
        return self.get_hand(handedness).position(joint_id)

    def _notify(self, update_flags: UpdateSuccessFlags, update_type: UpdateType) -> None:
        # Copy: a subscriber may unsubscribe while being notified
        for callback in list(self._subscribers):
            callback(update_flags, update_type)


class ManualHandSource(HandTrackingSource):
    """
    Source fed from code.

    Useful for tests and for replaying joint data recorded elsewhere:

        source = ManualHandSource()
        detector.enable(source)
        source.push(right=snapshot)
    """

    def __init__(self):
        super().__init__()
        self._hands: Dict[Handedness, HandSnapshot] = {
            Handedness.LEFT: HandSnapshot.empty(Handedness.LEFT),
            Handedness.RIGHT: HandSnapshot.empty(Handedness.RIGHT),
        }
        self._tick_count = 0

    def get_hand(self, handedness: Handedness) -> HandSnapshot:
        return self._hands[handedness]

    def push(
        self,
        left: Optional[HandSnapshot] = None,
        right: Optional[HandSnapshot] = None,
        flags: Optional[UpdateSuccessFlags] = None,
        update_type: UpdateType = UpdateType.DYNAMIC,
    ) -> UpdateSuccessFlags:
        """
        Store new snapshots and deliver one tick.

        Args:
            left: New left hand snapshot, or None to keep the previous one
            right: New right hand snapshot, or None to keep the previous one
            flags: Update flags to deliver. Defaults to the hands given.
            update_type: Passed through to subscribers

        Returns:
            The flags that were delivered.
        """
        if left is not None:
            self._hands[Handedness.LEFT] = left
        if right is not None:
            self._hands[Handedness.RIGHT] = right
        if flags is None:
            flags = flags_for_hands(left is not None, right is not None)

        self._tick_count += 1
        logger.debug(f"Tick {self._tick_count}: flags={flags!r}")
        self._notify(flags, update_type)
        return flags

    @property
    def tick_count(self) -> int:
        return self._tick_count
