# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum

from ..commontypes import ShuttlemapError


class HardwareError(ShuttlemapError):
    pass


class DeviceDisconnectedError(HardwareError):
    pass


class DeviceGrabError(HardwareError):
    pass


class KeyPress(enum.IntEnum):
    RELEASED = 0
    PRESSED = 1
    REPEATED = 2
