"""
Finger shape classification from joint geometry.

A finger counts as "extended" when its tip is at least as far from the
wrist as its proximal joint. Squared distances are compared, so no square
root is taken.

The poke pose ANDs the predicate for all five fingers. The same comparison
is used for the index, middle, ring and little fingers even though they
are meant to be curled; the result is not negated.
"""
from dataclasses import dataclass
from typing import Optional
import numpy as np

from .joints import Finger, HandSnapshot, JointId, Vec3


def squared_distance(a: Vec3, b: Vec3) -> float:
    """Squared Euclidean distance between two 3D points."""
    d = np.asarray(b, dtype=np.float64) - np.asarray(a, dtype=np.float64)
    return float(np.dot(d, d))


def is_finger_extended(
    wrist: Optional[Vec3],
    proximal: Optional[Vec3],
    tip: Optional[Vec3],
) -> bool:
    """
    Classify one finger.

    Args:
        wrist: Wrist position
        proximal: Finger's proximal joint position
        tip: Finger's tip position

    Returns:
        True if the tip is at or beyond the proximal joint's distance from
        the wrist. False if any position is missing.
    """
    if wrist is None or proximal is None or tip is None:
        return False

    wrist_to_tip = squared_distance(wrist, tip)
    wrist_to_proximal = squared_distance(wrist, proximal)
    return wrist_to_tip >= wrist_to_proximal


def is_finger_extended_in(hand: HandSnapshot, finger: Finger) -> bool:
    """Classify `finger` of a hand snapshot."""
    return is_finger_extended(
        hand.position(JointId.WRIST),
        hand.position(finger.proximal),
        hand.position(finger.tip),
    )


@dataclass(frozen=True)
class FingerStates:
    """Per-finger predicate results for one tick."""
    thumb: bool = False
    index: bool = False
    middle: bool = False
    ring: bool = False
    little: bool = False

    @property
    def is_poking(self) -> bool:
        return self.thumb and self.index and self.middle and self.ring and self.little

    @property
    def extended_count(self) -> int:
        return sum((self.thumb, self.index, self.middle, self.ring, self.little))


def classify_fingers(hand: HandSnapshot) -> FingerStates:
    """Evaluate all five fingers of a hand."""
    return FingerStates(
        thumb=is_finger_extended_in(hand, Finger.THUMB),
        index=is_finger_extended_in(hand, Finger.INDEX),
        middle=is_finger_extended_in(hand, Finger.MIDDLE),
        ring=is_finger_extended_in(hand, Finger.RING),
        little=is_finger_extended_in(hand, Finger.LITTLE),
    )


def is_poking(hand: HandSnapshot) -> bool:
    """True if the hand is in the poke pose this tick."""
    return classify_fingers(hand).is_poking
