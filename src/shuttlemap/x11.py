# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Window focus and synthetic input on X11, via python-xlib and XTest."""
from __future__ import annotations

import logging
import typing

import Xlib.display
import Xlib.error
from Xlib import X
from Xlib.ext import xtest

from .commontypes import ShuttlemapError
from .keysyms import pointer_button
from .strokes import Symbol

logger = logging.getLogger(__name__)


class DisplayError(ShuttlemapError):
    pass


def open_display(name: typing.Optional[str] = None) -> Xlib.display.Display:
    try:
        display = Xlib.display.Display(name)
    except Xlib.error.DisplayError as exc:
        raise DisplayError(f"unable to open X display: {exc}") from exc
    if display.query_extension("XTEST") is None:
        display.close()
        raise DisplayError("XTest extension not supported")
    return display


def _as_text(value) -> typing.Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class XWindowFocus:
    """Report the title of the window with the input focus.

    The focus is often on an unnamed child window, so we walk up the tree to
    the first window that has a WM_NAME. Results are remembered until the
    focus moves to a different window.
    """

    window_class: typing.Optional[str]

    def __init__(self, display: Xlib.display.Display):
        self.display = display
        self._last_window_id = None
        self._last_title = None
        self.window_class = None

    def current_focused_window_text(self) -> typing.Optional[str]:
        focus = self.display.get_input_focus().focus
        # X.NONE and X.PointerRoot come back as plain ints
        window_id = focus if isinstance(focus, int) else focus.id
        if window_id == self._last_window_id:
            return self._last_title
        self._last_window_id = window_id
        if isinstance(focus, int):
            self._last_title, self.window_class = None, None
        else:
            self._last_title, self.window_class = self._walk_window_tree(focus)
        logger.debug("focus moved to 0x%x: %r (class %r)", window_id, self._last_title, self.window_class)
        return self._last_title

    def _walk_window_tree(self, window) -> tuple[typing.Optional[str], typing.Optional[str]]:
        try:
            while window is not None and window.id != 0:
                title = _as_text(window.get_wm_name())
                if title:
                    wm_class = window.get_wm_class()
                    return title, ".".join(wm_class) if wm_class else None
                tree = window.query_tree()
                if tree.root is None or window.id == tree.root.id:
                    break
                window = tree.parent
        except Xlib.error.XError as exc:
            logger.warning("Unable to query window 0x%x: %s", window.id, exc)
        return None, None


class XTestSink:
    def __init__(self, display: Xlib.display.Display):
        self.display = display

    def emit(self, symbol: Symbol, pressed: bool):
        button = pointer_button(symbol)
        if button is not None:
            xtest.fake_input(self.display, X.ButtonPress if pressed else X.ButtonRelease, button)
            return
        keycode = self.display.keysym_to_keycode(symbol.keysym)
        if not keycode:
            logger.warning("no keycode for keysym 0x%x in the current keymap", symbol.keysym)
            return
        xtest.fake_input(self.display, X.KeyPress if pressed else X.KeyRelease, keycode)

    def flush(self):
        self.display.flush()
