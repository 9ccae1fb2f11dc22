# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import datetime
import enum

import msgspec


class EventType(enum.IntEnum):
    # Used as markers to separate events into packets.
    EV_SYN = 0
    # The shuttle's fifteen buttons.
    EV_KEY = 1
    # The jog dial and the shuttle ring.
    EV_REL = 2
    # Raw scancodes; we ignore them.
    EV_MSC = 4


class SynCode(enum.IntEnum):
    SYN_REPORT = 0
    SYN_DROPPED = 3


class RelCode(enum.IntEnum):
    # 8-bit wrapping dial position; 0 is never reported
    REL_DIAL = 7
    # absolute ring level, -7 .. 7; the center is never reported
    REL_WHEEL = 8
    # newer kernels send these alongside REL_WHEEL
    REL_WHEEL_HI_RES = 11
    REL_HWHEEL_HI_RES = 12


# BTN_0; button N of the shuttle reports code KEY_CODE_BASE + N - 1
KEY_CODE_BASE = 256


class Event(msgspec.Struct, frozen=True):
    type: int
    code: int
    value: int
    timestamp: datetime.timedelta

    @classmethod
    def from_libevdev_event(cls, evt) -> Event:
        return cls(
            type=evt.type.value,
            code=evt.code.value,
            value=evt.value,
            timestamp=datetime.timedelta(seconds=evt.sec, microseconds=evt.usec),
        )

    def to_log(self):
        try:
            type_name = EventType(self.type).name
        except ValueError:
            type_name = str(self.type)
        return f"({type_name}, {self.code}, {self.value}) @ {self.timestamp.total_seconds():.6f}"
