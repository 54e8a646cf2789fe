import math

import pytest

from pendulum_trace import config


def test_step_is_two_tenths_of_a_degree():
    assert config.STEP == pytest.approx(math.radians(0.2))


def test_max_arm_length_is_quarter_of_canvas_width():
    assert config.max_arm_length((400.0, 800.0)) == pytest.approx(100.0)
    # never below the minimum length
    assert config.max_arm_length((40.0, 40.0)) == config.MIN_ARM_LENGTH


def test_clamp_speed_rounds_to_whole_ticks():
    assert config.clamp("speed", 0.2) == 1.0
    assert config.clamp("speed", 250.0) == 100.0
    assert config.clamp("speed", 7.6) == 8.0


def test_clamp_rotation_and_stroke():
    assert config.clamp("rotation_coefficient", -1.0) == 0.0
    assert config.clamp("rotation_coefficient", 9.0) == 7.0
    assert config.clamp("stroke_width", 0.1) == 0.5
    assert config.clamp("stroke_width", 2.5) == 2.5


def test_clamp_arm_length_uses_canvas():
    assert config.clamp("arm_length1", 10.0, (400.0, 400.0)) == config.MIN_ARM_LENGTH
    assert config.clamp("arm_length2", 500.0, (400.0, 400.0)) == 100.0
    with pytest.raises(ValueError):
        config.clamp("arm_length1", 50.0)


def test_clamp_unknown_setting():
    with pytest.raises(KeyError):
        config.clamp("gravity", 9.81)
