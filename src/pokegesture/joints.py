"""
Hand skeleton data model.
Named joints, per-tick hand snapshots and tracking update flags.
"""
from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag, auto
from typing import Dict, Optional, Tuple
import math

Vec3 = Tuple[float, float, float]


class Handedness(Enum):
    """Which physical hand a detector tracks."""
    LEFT = auto()
    RIGHT = auto()

    @classmethod
    def from_name(cls, name: str) -> "Handedness":
        """Parse 'left' / 'Right' / 'RIGHT' etc."""
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown handedness: {name!r} (expected 'left' or 'right')") from None


class JointId(IntEnum):
    """Skeletal joints used by the gesture classifier."""
    WRIST = 0
    THUMB_PROXIMAL = 1
    THUMB_TIP = 2
    INDEX_PROXIMAL = 3
    INDEX_TIP = 4
    MIDDLE_PROXIMAL = 5
    MIDDLE_TIP = 6
    RING_PROXIMAL = 7
    RING_TIP = 8
    LITTLE_PROXIMAL = 9
    LITTLE_TIP = 10


class Finger(Enum):
    """Fingers with their (proximal, tip) joints."""
    THUMB = (JointId.THUMB_PROXIMAL, JointId.THUMB_TIP)
    INDEX = (JointId.INDEX_PROXIMAL, JointId.INDEX_TIP)
    MIDDLE = (JointId.MIDDLE_PROXIMAL, JointId.MIDDLE_TIP)
    RING = (JointId.RING_PROXIMAL, JointId.RING_TIP)
    LITTLE = (JointId.LITTLE_PROXIMAL, JointId.LITTLE_TIP)

    @property
    def proximal(self) -> JointId:
        return self.value[0]

    @property
    def tip(self) -> JointId:
        return self.value[1]


class UpdateSuccessFlags(IntFlag):
    """Which joint groups the tracking source refreshed this tick."""
    NONE = 0
    LEFT_HAND_ROOT_POSE = 1 << 0
    LEFT_HAND_JOINTS = 1 << 1
    RIGHT_HAND_ROOT_POSE = 1 << 2
    RIGHT_HAND_JOINTS = 1 << 3
    ALL = LEFT_HAND_ROOT_POSE | LEFT_HAND_JOINTS | RIGHT_HAND_ROOT_POSE | RIGHT_HAND_JOINTS


class UpdateType(Enum):
    """When in the frame the update was delivered."""
    DYNAMIC = auto()
    BEFORE_RENDER = auto()


def has_update_success_flag(flags: UpdateSuccessFlags, flag: UpdateSuccessFlags) -> bool:
    """True if every bit of `flag` is set in `flags`."""
    return (flags & flag) == flag


def joints_flag_for(handedness: Handedness) -> UpdateSuccessFlags:
    """Joint-group flag for one hand."""
    if handedness is Handedness.LEFT:
        return UpdateSuccessFlags.LEFT_HAND_JOINTS
    return UpdateSuccessFlags.RIGHT_HAND_JOINTS


def _is_valid_position(position: Optional[Vec3]) -> bool:
    if position is None:
        return False
    return not any(math.isnan(c) for c in position)


@dataclass(frozen=True)
class JointSample:
    """
    One joint at one tick.

    Attributes:
        joint_id: Which joint
        position: (x, y, z), or None when the pose is unavailable
    """
    joint_id: JointId
    position: Optional[Vec3] = None

    @property
    def is_tracked(self) -> bool:
        return _is_valid_position(self.position)

    def try_get_position(self) -> Optional[Vec3]:
        """Position if tracked, else None (NaN coordinates count as untracked)."""
        return self.position if self.is_tracked else None


@dataclass
class HandSnapshot:
    """
    All joint positions of one hand at one tick.

    Joints missing from `joints` are untracked.
    """
    handedness: Handedness
    joints: Dict[JointId, Vec3] = field(default_factory=dict)

    def get_joint(self, joint_id: JointId) -> JointSample:
        return JointSample(joint_id, self.joints.get(joint_id))

    def position(self, joint_id: JointId) -> Optional[Vec3]:
        return self.get_joint(joint_id).try_get_position()

    @property
    def is_empty(self) -> bool:
        return not self.joints

    @classmethod
    def empty(cls, handedness: Handedness) -> "HandSnapshot":
        return cls(handedness=handedness)
