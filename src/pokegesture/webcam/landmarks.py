"""
MediaPipe hand landmarks and their mapping onto the joint model.
"""
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..joints import Handedness, HandSnapshot, JointId


@dataclass
class HandLandmarks:
    """
    Normalized hand landmarks from MediaPipe.

    Attributes:
        landmarks: List of 21 (x, y, z) tuples, normalized 0-1
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Tuple[float, float, float]]
    handedness: str
    confidence: float

    # MediaPipe landmark indices for convenience
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_TIP = 20

    def get(self, index: int) -> Tuple[float, float, float]:
        """Get landmark by index."""
        return self.landmarks[index]

    def resolve_handedness(self, swap: bool = False) -> Handedness:
        """
        Hand side of this detection.

        MediaPipe labels assume a mirrored (selfie) image; pass swap=True
        when the frame was not flipped.
        """
        handedness = Handedness.from_name(self.handedness)
        if swap:
            return Handedness.RIGHT if handedness is Handedness.LEFT else Handedness.LEFT
        return handedness

    def to_snapshot(self, swap: bool = False) -> HandSnapshot:
        """Convert to a HandSnapshot holding the classifier's joints."""
        joints = {
            joint_id: tuple(float(c) for c in self.landmarks[index])
            for joint_id, index in MEDIAPIPE_JOINTS.items()
            if index < len(self.landmarks)
        }
        return HandSnapshot(handedness=self.resolve_handedness(swap), joints=joints)


# The proximal phalanx starts at the MCP knuckle (thumb: MCP, not CMC)
MEDIAPIPE_JOINTS: Dict[JointId, int] = {
    JointId.WRIST: HandLandmarks.WRIST,
    JointId.THUMB_PROXIMAL: HandLandmarks.THUMB_MCP,
    JointId.THUMB_TIP: HandLandmarks.THUMB_TIP,
    JointId.INDEX_PROXIMAL: HandLandmarks.INDEX_MCP,
    JointId.INDEX_TIP: HandLandmarks.INDEX_TIP,
    JointId.MIDDLE_PROXIMAL: HandLandmarks.MIDDLE_MCP,
    JointId.MIDDLE_TIP: HandLandmarks.MIDDLE_TIP,
    JointId.RING_PROXIMAL: HandLandmarks.RING_MCP,
    JointId.RING_TIP: HandLandmarks.RING_TIP,
    JointId.LITTLE_PROXIMAL: HandLandmarks.PINKY_MCP,
    JointId.LITTLE_TIP: HandLandmarks.PINKY_TIP,
}


# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]
