import math

import pytest

from rep_counter.exercises.base import AngleCalculator, Keypoint, angle_at


def test_right_angle():
    assert angle_at((1, 0), (0, 0), (0, 1)) == pytest.approx(90.0)


def test_symmetric_under_swap():
    a, b, c = (3.0, 7.0), (1.0, 2.0), (-4.0, 5.5)
    assert angle_at(a, b, c) == pytest.approx(angle_at(c, b, a))


def test_range_is_0_to_180():
    points = [(math.cos(t) * 10, math.sin(t) * 10) for t in [i * 0.37 for i in range(40)]]
    for a in points[::3]:
        for c in points[1::4]:
            angle = angle_at(a, (0.0, 0.0), c)
            assert 0.0 <= angle <= 180.0 + 1e-9


def test_reflex_angle_is_folded():
    # Rays at -170 and +170 degrees differ by 340 raw, 20 folded
    a = (math.cos(math.radians(-170)), math.sin(math.radians(-170)))
    c = (math.cos(math.radians(170)), math.sin(math.radians(170)))
    assert angle_at(a, (0, 0), c) == pytest.approx(20.0)
    assert angle_at((0, 1), (0, 0), (1, 0)) == pytest.approx(90.0)


def test_collinear_opposite_sides_is_180():
    assert angle_at((0, 0), (5, 5), (10, 10)) == pytest.approx(180.0)
    assert angle_at((-3, 0), (0, 0), (4, 0)) == pytest.approx(180.0)


def test_coincident_ends_is_0():
    assert angle_at((4, 9), (1, 1), (4, 9)) == pytest.approx(0.0)


def test_accepts_keypoints():
    a = Keypoint(0.0, 10.0, 0.1)
    b = Keypoint(0.0, 0.0, 0.9)
    c = Keypoint(10.0, 0.0, 0.5)
    assert AngleCalculator.angle_at(a, b, c) == pytest.approx(90.0)


def test_vertical_displacement():
    assert AngleCalculator.vertical_displacement((0, 100), (0, 200), (0, 90)) == pytest.approx(60.0)
    assert AngleCalculator.vertical_displacement((0, 60), (0, 80), (0, 90)) == pytest.approx(-20.0)
