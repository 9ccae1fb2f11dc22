import datetime

import pytest

from shuttlemap.interpreter import SignalInterpreter, jog_direction, jog_distance
from shuttlemap.strokes import Direction, Slot

JR = Slot.jog(Direction.RIGHT)
JL = Slot.jog(Direction.LEFT)
IR = Slot.shuttle_increment(Direction.RIGHT)
IL = Slot.shuttle_increment(Direction.LEFT)


def ms(n):
    return datetime.timedelta(milliseconds=n)


def nothing_bound(slot):
    return False


def increments_bound(slot):
    return slot in (IL, IR)


@pytest.mark.parametrize(
    "old,new,direction,distance",
    (
        (1, 2, Direction.RIGHT, 1),
        (2, 1, Direction.LEFT, 1),
        (250, 2, Direction.RIGHT, 8),
        (2, 250, Direction.LEFT, 8),
        (10, 10, Direction.RIGHT, 0),
    ),
)
def test_jog_arithmetic(old, new, direction, distance):
    assert jog_direction(old, new) is direction
    assert jog_distance(old, new) == distance


def test_keys():
    interp = SignalInterpreter()
    assert interp.key(1, True) == [Slot.key_down(1)]
    assert interp.key(15, False) == [Slot.key_up(15)]
    assert interp.key(16, True) == []
    assert interp.key(0, True) == []


def test_first_jog_sample_only_initializes():
    interp = SignalInterpreter()
    assert interp.jog(5, ms(0), nothing_bound) == []
    assert interp.jog(6, ms(1), nothing_bound) == [JR]
    assert interp.jog(4, ms(2), nothing_bound) == [JL, JL]


def test_jog_wraps_and_skips_zero():
    interp = SignalInterpreter()
    interp.jog(250, ms(0), nothing_bound)
    assert interp.jog(2, ms(1), nothing_bound) == [JR] * 7
    assert interp.jog(255, ms(2), nothing_bound) == [JL] * 2


def test_jog_value_is_masked():
    interp = SignalInterpreter()
    interp.jog(0x101, ms(0), nothing_bound)
    assert interp.jog_position == 1


def test_shuttle_levels():
    interp = SignalInterpreter()
    assert interp.shuttle(3, ms(0), nothing_bound) == [Slot.shuttle(3)]
    assert interp.shuttle(3, ms(1), nothing_bound) == []
    assert interp.shuttle(-2, ms(2), nothing_bound) == [Slot.shuttle(-2)]
    assert interp.shuttle(8, ms(3), nothing_bound) == []
    assert interp.shuttle_level == -2


def test_shuttle_increments_when_bound():
    interp = SignalInterpreter()
    assert interp.shuttle(2, ms(0), increments_bound) == [Slot.shuttle(2), IR, IR]
    assert interp.shuttle(-1, ms(1), increments_bound) == [Slot.shuttle(-1), IL, IL, IL]


def test_center_inferred_from_late_jog():
    interp = SignalInterpreter(center_timeout=ms(5))
    interp.jog(10, ms(0), nothing_bound)
    interp.shuttle(3, ms(100), nothing_bound)
    # too soon after the last shuttle sample
    assert interp.jog(10, ms(103), nothing_bound) == []
    assert interp.jog(11, ms(105), nothing_bound) == [Slot.shuttle(0), JR]
    assert interp.shuttle_level == 0
    # only once
    assert interp.jog(12, ms(200), nothing_bound) == [JR]


def test_center_inference_emits_increments():
    interp = SignalInterpreter(center_timeout=ms(5))
    interp.shuttle(-2, ms(0), increments_bound)
    assert interp.jog(7, ms(50), increments_bound) == [Slot.shuttle(0), IR, IR]


def test_no_center_needed_when_already_centered():
    interp = SignalInterpreter(center_timeout=ms(5))
    interp.shuttle(2, ms(0), nothing_bound)
    interp.shuttle(0, ms(1), nothing_bound)
    interp.jog(1, ms(2), nothing_bound)
    assert interp.jog(2, ms(50), nothing_bound) == [JR]


def test_jog_half_turn_goes_left():
    interp = SignalInterpreter()
    interp.jog(200, ms(0), nothing_bound)
    assert interp.jog(72, ms(1), nothing_bound) == [JL] * 128
