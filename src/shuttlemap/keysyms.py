# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Translate between keysym names used in the rule file and Symbols.

Names are X keysym names as found in python-xlib's XK module, with or without
the XK_ prefix, so "XK_Alt_L" and "Alt_L" both name the left Alt key. A few
pseudo-keysyms stand in for pointer buttons and scroll ticks; the output sink
turns those into button events instead of key events.
"""
from __future__ import annotations

import logging
import typing

from Xlib import X, XK

from .strokes import StrokeOp, Symbol

logger = logging.getLogger(__name__)

# latin1 and miscellany are loaded by XK itself.
KEYSYM_GROUPS = (
    "latin2",
    "latin3",
    "latin4",
    "greek",
    "cyrillic",
    "technical",
    "special",
    "publishing",
    "xkb",
    "xf86",
)

# Not real keysyms; the offset is well clear of anything X assigns.
BUTTON_OFFSET = 0x2000000
POINTER_SYMBOLS = {
    "XK_Button_1": BUTTON_OFFSET + 1,
    "XK_Button_2": BUTTON_OFFSET + 2,
    "XK_Button_3": BUTTON_OFFSET + 3,
    "XK_Scroll_Up": BUTTON_OFFSET + 4,
    "XK_Scroll_Down": BUTTON_OFFSET + 5,
}

UNICODE_KEYSYM_OFFSET = 0x01000000


def pointer_button(symbol: Symbol) -> typing.Optional[int]:
    "Return the X pointer button number for a pointer pseudo-symbol, or None for ordinary keysyms."
    button = symbol.keysym - BUTTON_OFFSET
    if 1 <= button <= len(POINTER_SYMBOLS):
        return button
    return None


def character_symbol(ch: str) -> Symbol:
    codepoint = ord(ch)
    if codepoint <= 0xFF:
        return Symbol(keysym=codepoint)
    return Symbol(keysym=UNICODE_KEYSYM_OFFSET | codepoint)


class KeysymResolver:
    def __init__(self, groups: typing.Iterable[str] = KEYSYM_GROUPS):
        for group in groups:
            XK.load_keysym_group(group)
        self._by_name: dict[str, int] = {}
        self._by_keysym: dict[int, str] = {}
        for name, value in vars(XK).items():
            if not name.startswith("XK_") or not isinstance(value, int):
                continue
            self._by_name[name] = value
            # first name wins, so XK_a stays XK_a instead of some later alias
            self._by_keysym.setdefault(value, name)
        for name, value in POINTER_SYMBOLS.items():
            self._by_name[name] = value
            self._by_keysym[value] = name
        logger.debug("Loaded %d keysym names", len(self._by_name))

    def resolve(self, name: str) -> typing.Optional[Symbol]:
        if not name:
            return None
        if not name.startswith("XK_"):
            name = "XK_" + name
        keysym = self._by_name.get(name, X.NoSymbol)
        if keysym == X.NoSymbol:
            return None
        return Symbol(keysym=keysym)

    def name_of(self, symbol: Symbol) -> str:
        name = self._by_keysym.get(symbol.keysym)
        if name is None:
            return f"0x{symbol.keysym:x}"
        return name

    def format_ops(self, ops: typing.Iterable[StrokeOp]) -> str:
        "Render a stroke sequence the way the tracing output shows it, e.g. XK_Alt_L/D XK_Right/D XK_Right/U."
        return " ".join(f"{self.name_of(op.symbol)}/{'D' if op.pressed else 'U'}" for op in ops)

    def __contains__(self, name: str):
        return self.resolve(name) is not None


_default_resolver: typing.Optional[KeysymResolver] = None


def default_resolver() -> KeysymResolver:
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = KeysymResolver()
    return _default_resolver
