import pytest

from poses import pose_with_displacement, pose_with_elbow_angle, pose_with_knee_angle


@pytest.fixture
def knee_pose():
    return pose_with_knee_angle


@pytest.fixture
def elbow_pose():
    return pose_with_elbow_angle


@pytest.fixture
def displacement_pose():
    return pose_with_displacement
