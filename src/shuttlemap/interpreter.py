# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Turn raw jog and shuttle samples into slot events.

The device has two defects we compensate for here:

* The jog dial reports an 8-bit wrapping position rather than a delta, and it
  never reports position 0. We walk from the previous position to the new one
  a step at a time and emit nothing for the step that starts at 0.
* The shuttle ring never reports coming back to the center. The return shows
  up only as a jog event, so if a jog event arrives long enough after the last
  nonzero shuttle sample we synthesize the missing level 0 first.
"""
from __future__ import annotations

import datetime
import logging
import typing

from .strokes import MAX_SHUTTLE, MIN_SHUTTLE, NUM_KEYS, Direction, Slot

logger = logging.getLogger(__name__)

DEFAULT_CENTER_TIMEOUT = datetime.timedelta(milliseconds=5)
JOG_MASK = 0xFF
JOG_SIGN_BIT = 0x80

SlotPredicate = typing.Callable[[Slot], bool]


def jog_distance(old: int, new: int) -> int:
    "Number of wraparound units from old to new, in the direction jog_direction reports."
    diff = (new - old) & JOG_MASK
    if diff & JOG_SIGN_BIT:
        return (JOG_MASK + 1) - diff
    return diff


def jog_direction(old: int, new: int) -> Direction:
    return Direction.LEFT if (new - old) & JOG_SIGN_BIT else Direction.RIGHT


class SignalInterpreter:
    jog_position: typing.Optional[int]
    shuttle_level: typing.Optional[int]
    last_shuttle: typing.Optional[datetime.timedelta]

    def __init__(self, center_timeout: datetime.timedelta = DEFAULT_CENTER_TIMEOUT):
        self.center_timeout = center_timeout
        self.jog_position = None
        self.shuttle_level = None
        self.last_shuttle = None
        self.needs_center = False

    def key(self, key: int, pressed: bool) -> list[Slot]:
        if not 1 <= key <= NUM_KEYS:
            logger.warning("key %d out of range", key)
            return []
        return [Slot.key_down(key) if pressed else Slot.key_up(key)]

    def shuttle(self, level: int, timestamp: datetime.timedelta, is_bound: SlotPredicate) -> list[Slot]:
        if not MIN_SHUTTLE <= level <= MAX_SHUTTLE:
            logger.warning("shuttle level %d out of range", level)
            return []
        self.last_shuttle = timestamp
        self.needs_center = level != 0
        if level == self.shuttle_level:
            return []

        # before the first sample the ring is assumed to be centered
        current = 0 if self.shuttle_level is None else self.shuttle_level
        direction = Direction.of_step(level - current)
        slots = [Slot.shuttle(level)]
        increment = Slot.shuttle_increment(direction)
        # is_bound counts a binding in the default section too, not just the governing one
        if is_bound(increment):
            slots.extend(increment for _ in range(abs(level - current)))
        self.shuttle_level = level
        return slots

    def jog(self, value: int, timestamp: datetime.timedelta, is_bound: SlotPredicate) -> list[Slot]:
        slots = []
        if self.needs_center and self.last_shuttle is not None and timestamp - self.last_shuttle >= self.center_timeout:
            logger.debug("shuttle returned to center %s after last sample", timestamp - self.last_shuttle)
            slots.extend(self.shuttle(0, timestamp, is_bound))
            self.needs_center = False

        value &= JOG_MASK
        if self.jog_position is not None:
            direction = jog_direction(self.jog_position, value)
            step = -1 if direction is Direction.LEFT else 1
            position = self.jog_position
            for _ in range(jog_distance(self.jog_position, value)):
                if position != 0:
                    slots.append(Slot.jog(direction))
                position = (position + step) & JOG_MASK
        self.jog_position = value
        return slots
