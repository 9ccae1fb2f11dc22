# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Expand one slot's token stream into ordered press/release operations.

Key slots produce two halves: the press half is sent when the physical key
goes down, the release half when it comes back up. Every other slot produces a
single sequence.

Within a build we track:

* modifiers, marked with /D (down), /U (up) or /H (hold);
* the ordinary key: the most recent plain tap, left pressed until the next tap
  or until the release boundary;
* whether the next tap is the first tap of the release half, in which case
  modifiers released at the boundary are pressed again before it.

At the release boundary (an explicit RELEASE, or the implicit one at the end of
a key slot) the ordinary key is released first, then every /D modifier.
Modifiers marked /H survive the boundary and are only released by finish().
"""
from __future__ import annotations

import enum
import typing

import msgspec

from .strokes import StrokeOp, StrokeSequence, Symbol


class ModifierState(enum.Enum):
    DOWN = enum.auto()
    HELD = enum.auto()
    PENDING_REPRESS = enum.auto()
    RELEASED = enum.auto()


class TokenAction(enum.Enum):
    TAP = enum.auto()
    DOWN = enum.auto()
    UP = enum.auto()
    HOLD = enum.auto()
    RELEASE = enum.auto()


class StrokeToken(msgspec.Struct, frozen=True):
    action: TokenAction
    symbol: typing.Optional[Symbol] = None

    @classmethod
    def tap(cls, symbol: Symbol):
        return cls(action=TokenAction.TAP, symbol=symbol)

    @classmethod
    def down(cls, symbol: Symbol):
        return cls(action=TokenAction.DOWN, symbol=symbol)

    @classmethod
    def up(cls, symbol: Symbol):
        return cls(action=TokenAction.UP, symbol=symbol)

    @classmethod
    def hold(cls, symbol: Symbol):
        return cls(action=TokenAction.HOLD, symbol=symbol)

    @classmethod
    def release_boundary(cls):
        return cls(action=TokenAction.RELEASE)


class BuiltSequence(msgspec.Struct, frozen=True):
    press: StrokeSequence
    release: StrokeSequence = ()


class BuilderContext:
    modifiers: dict[Symbol, ModifierState]
    ordinary: typing.Optional[Symbol]
    press_half: list[StrokeOp]
    release_half: list[StrokeOp]

    def __init__(self, split_halves: bool):
        self.split_halves = split_halves
        self.modifiers = {}
        self.ordinary = None
        self.in_release_half = False
        self.starts_release_half = False
        self.press_half = []
        self.release_half = []

    def emit(self, op: StrokeOp):
        if self.in_release_half:
            self.release_half.append(op)
        else:
            self.press_half.append(op)


def tap(ctx: BuilderContext, symbol: Symbol):
    if ctx.starts_release_half:
        for modifier, state in ctx.modifiers.items():
            if state is ModifierState.PENDING_REPRESS:
                ctx.emit(StrokeOp.press(modifier))
                ctx.modifiers[modifier] = ModifierState.DOWN
        ctx.starts_release_half = False
    if ctx.ordinary is not None:
        ctx.emit(StrokeOp.release(ctx.ordinary))
    ctx.emit(StrokeOp.press(symbol))
    ctx.ordinary = symbol


def down(ctx: BuilderContext, symbol: Symbol):
    ctx.emit(StrokeOp.press(symbol))
    ctx.modifiers[symbol] = ModifierState.DOWN


def up(ctx: BuilderContext, symbol: Symbol):
    ctx.emit(StrokeOp.release(symbol))
    ctx.modifiers[symbol] = ModifierState.RELEASED


def hold(ctx: BuilderContext, symbol: Symbol):
    ctx.emit(StrokeOp.press(symbol))
    ctx.modifiers[symbol] = ModifierState.HELD


def _release_ordinary(ctx: BuilderContext):
    if ctx.ordinary is not None:
        ctx.emit(StrokeOp.release(ctx.ordinary))
        ctx.ordinary = None


def release_boundary(ctx: BuilderContext):
    if not ctx.split_halves:
        raise ValueError("RELEASE only applies to key slots")
    ctx.in_release_half = True
    _release_ordinary(ctx)
    for modifier, state in ctx.modifiers.items():
        if state is ModifierState.DOWN:
            ctx.emit(StrokeOp.release(modifier))
            ctx.modifiers[modifier] = ModifierState.PENDING_REPRESS
    ctx.starts_release_half = True


def _release_modifiers(ctx: BuilderContext):
    for modifier, state in ctx.modifiers.items():
        if state in (ModifierState.DOWN, ModifierState.HELD):
            ctx.emit(StrokeOp.release(modifier))
            ctx.modifiers[modifier] = ModifierState.RELEASED


def finish(ctx: BuilderContext) -> BuiltSequence:
    if ctx.split_halves:
        if not ctx.in_release_half:
            release_boundary(ctx)
        # the release half lets go of its last key before the held modifiers
        _release_ordinary(ctx)
    _release_modifiers(ctx)
    _release_ordinary(ctx)
    return BuiltSequence(press=tuple(ctx.press_half), release=tuple(ctx.release_half))


_STEPS: dict[TokenAction, typing.Callable[[BuilderContext, Symbol], None]] = {
    TokenAction.TAP: tap,
    TokenAction.DOWN: down,
    TokenAction.UP: up,
    TokenAction.HOLD: hold,
}


def apply(ctx: BuilderContext, token: StrokeToken):
    if token.action is TokenAction.RELEASE:
        release_boundary(ctx)
        return
    if token.symbol is None:
        raise ValueError(f"{token.action.name} token without a symbol")
    _STEPS[token.action](ctx, token.symbol)


def build_sequence(tokens: typing.Iterable[StrokeToken], split_halves: bool) -> BuiltSequence:
    ctx = BuilderContext(split_halves)
    for token in tokens:
        apply(ctx, token)
    return finish(ctx)
