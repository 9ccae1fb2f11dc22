# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import functools
import logging
import typing

from .device.eventsource import KEY_CODE_BASE, Event, EventType, RelCode
from .device.hwtypes import KeyPress
from .interpreter import SignalInterpreter
from .keysyms import KeysymResolver, default_resolver
from .strokes import Slot, Symbol

if typing.TYPE_CHECKING:
    from .loader import TableLoader
    from .table import TranslationSection, TranslationTable

logger = logging.getLogger(__name__)

UNLABELED_WINDOW = "-- Unlabeled Window --"


class WindowFocus(typing.Protocol):
    def current_focused_window_text(self) -> typing.Optional[str]: ...


class OutputSink(typing.Protocol):
    def emit(self, symbol: Symbol, pressed: bool) -> None: ...

    def flush(self) -> None: ...


class Dispatcher:
    """Route one raw device event all the way to the output sink.

    Per event: refresh the table, find the section governing the focused
    window, interpret the event into slots and send each slot's strokes in
    order, flushing the sink after every sequence.
    """

    def __init__(
        self,
        loader: TableLoader,
        focus: WindowFocus,
        sink: OutputSink,
        interpreter: typing.Optional[SignalInterpreter] = None,
        resolver: typing.Optional[KeysymResolver] = None,
    ):
        self.loader = loader
        self.focus = focus
        self.sink = sink
        self.interpreter = interpreter if interpreter is not None else SignalInterpreter()
        self.resolver = resolver if resolver is not None else default_resolver()
        self._last_lookup: typing.Optional[tuple[int, str]] = None

    def governing_section(self, table: TranslationTable) -> typing.Optional[TranslationSection]:
        window_text = self.focus.current_focused_window_text()
        if window_text is None:
            window_text = UNLABELED_WINDOW
        section = table.section_for(window_text)
        lookup = (id(table), window_text)
        if table.debug.regex and lookup != self._last_lookup:
            window_class = getattr(self.focus, "window_class", None)
            if window_class is not None:
                window_text = f"{window_text} ({window_class})"
            if section is not None:
                logger.info("translation: [%s] for %s", section.name, window_text)
            else:
                logger.info("no translation found for %s", window_text)
        self._last_lookup = lookup
        return section

    def handle_event(self, event: Event):
        match event.type:
            case EventType.EV_SYN | EventType.EV_MSC:
                return
            case EventType.EV_KEY | EventType.EV_REL:
                pass
            case _:
                logger.warning("invalid event type %s", event.to_log())
                return

        table = self.loader.refresh()
        section = self.governing_section(table)
        is_bound = functools.partial(table.is_bound, section)
        for slot in self.interpret(event, is_bound):
            self.send(table, section, slot)

    def interpret(self, event: Event, is_bound: typing.Callable[[Slot], bool]) -> list[Slot]:
        if event.type == EventType.EV_KEY:
            if event.value == KeyPress.REPEATED:
                return []
            return self.interpreter.key(event.code - KEY_CODE_BASE + 1, event.value != KeyPress.RELEASED)
        match event.code:
            case RelCode.REL_DIAL:
                return self.interpreter.jog(event.value, event.timestamp, is_bound)
            case RelCode.REL_WHEEL:
                return self.interpreter.shuttle(event.value, event.timestamp, is_bound)
            case RelCode.REL_WHEEL_HI_RES | RelCode.REL_HWHEEL_HI_RES:
                return []
        logger.warning("invalid jog/shuttle code %s", event.to_log())
        return []

    def send(self, table: TranslationTable, section: typing.Optional[TranslationSection], slot: Slot):
        sequence = table.resolve(section, slot)
        if not sequence:
            return
        if table.debug.keys:
            logger.info("%s: %s", slot, self.resolver.format_ops(sequence))
        for op in sequence:
            self.sink.emit(op.symbol, op.pressed)
        self.sink.flush()
