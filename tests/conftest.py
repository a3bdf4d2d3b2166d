import pytest

from pokegesture.joints import Finger, Handedness, HandSnapshot, JointId


def make_hand(handedness=Handedness.RIGHT, extended=None, missing=()):
    """
    Build a snapshot with the wrist at the origin.

    Fingers listed in `extended` (default: all) get their tip beyond the
    proximal joint; the others get the tip between wrist and proximal.
    Joints in `missing` are left out.
    """
    if extended is None:
        extended = set(Finger)
    joints = {JointId.WRIST: (0.0, 0.0, 0.0)}
    for offset, finger in enumerate(Finger):
        x = offset * 0.1
        joints[finger.proximal] = (x, 1.0, 0.0)
        joints[finger.tip] = (x, 2.0, 0.0) if finger in extended else (x, 0.5, 0.0)
    for joint_id in missing:
        joints.pop(joint_id, None)
    return HandSnapshot(handedness=handedness, joints=joints)


@pytest.fixture
def poke_hand():
    return make_hand()


@pytest.fixture
def open_thumb_curled_hand():
    return make_hand(extended=set(Finger) - {Finger.THUMB})
