# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

import msgspec

NUM_KEYS = 15
MIN_SHUTTLE = -7
MAX_SHUTTLE = 7


class Symbol(msgspec.Struct, frozen=True):
    """Logical identity of a key, pointer button or scroll tick.

    The value is an X keysym, or one of the pointer pseudo-keysyms defined in
    keysyms.py. Nothing outside the resolver and the output sink should look at it.
    """

    keysym: int


class StrokeAction(enum.Enum):
    PRESS = enum.auto()
    RELEASE = enum.auto()


class StrokeOp(msgspec.Struct, frozen=True):
    symbol: Symbol
    action: StrokeAction

    @classmethod
    def press(cls, symbol: Symbol):
        return cls(symbol=symbol, action=StrokeAction.PRESS)

    @classmethod
    def release(cls, symbol: Symbol):
        return cls(symbol=symbol, action=StrokeAction.RELEASE)

    @property
    def pressed(self) -> bool:
        return self.action is StrokeAction.PRESS


StrokeSequence = tuple[StrokeOp, ...]


class Direction(enum.IntEnum):
    LEFT = 0
    RIGHT = 1

    @property
    def letter(self):
        return "L" if self is Direction.LEFT else "R"

    @classmethod
    def from_letter(cls, letter: str) -> typing.Optional[Direction]:
        match letter.upper():
            case "L":
                return cls.LEFT
            case "R":
                return cls.RIGHT
        return None

    @classmethod
    def of_step(cls, step: int) -> Direction:
        return cls.LEFT if step < 0 else cls.RIGHT


class SlotKind(enum.Enum):
    KEY_DOWN = enum.auto()
    KEY_UP = enum.auto()
    SHUTTLE = enum.auto()
    SHUTTLE_INCREMENT = enum.auto()
    JOG = enum.auto()


class Slot(msgspec.Struct, frozen=True):
    """An addressable binding point within a translation section.

    index is the key number (1..15) for key slots, the absolute ring level
    (-7..7) for shuttle slots and a Direction for increment and jog slots.
    """

    kind: SlotKind
    index: int

    @classmethod
    def key_down(cls, key: int):
        return cls(kind=SlotKind.KEY_DOWN, index=key)

    @classmethod
    def key_up(cls, key: int):
        return cls(kind=SlotKind.KEY_UP, index=key)

    @classmethod
    def shuttle(cls, level: int):
        return cls(kind=SlotKind.SHUTTLE, index=level)

    @classmethod
    def shuttle_increment(cls, direction: Direction):
        return cls(kind=SlotKind.SHUTTLE_INCREMENT, index=int(direction))

    @classmethod
    def jog(cls, direction: Direction):
        return cls(kind=SlotKind.JOG, index=int(direction))

    @classmethod
    def all(cls) -> tuple[Slot, ...]:
        keys = range(1, NUM_KEYS + 1)
        return (
            *(cls.key_down(k) for k in keys),
            *(cls.key_up(k) for k in keys),
            *(cls.shuttle(level) for level in range(MIN_SHUTTLE, MAX_SHUTTLE + 1)),
            *(cls.shuttle_increment(d) for d in Direction),
            *(cls.jog(d) for d in Direction),
        )

    @property
    def designator(self) -> str:
        match self.kind:
            case SlotKind.KEY_DOWN | SlotKind.KEY_UP:
                return f"K{self.index}"
            case SlotKind.SHUTTLE:
                return f"S{self.index}"
            case SlotKind.SHUTTLE_INCREMENT:
                return f"I{Direction(self.index).letter}"
            case SlotKind.JOG:
                return f"J{Direction(self.index).letter}"

    @property
    def half(self) -> str:
        "The bracketed suffix used when printing a sequence bound to this slot."
        match self.kind:
            case SlotKind.KEY_DOWN:
                return "D"
            case SlotKind.KEY_UP:
                return "U"
        return ""

    def __str__(self):
        return f"{self.designator}[{self.half}]"
